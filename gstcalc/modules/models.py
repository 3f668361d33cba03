import re
import uuid
import datetime
from enum import Enum
from typing import List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Regex Patterns
GSTIN_PATTERN = r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$"
PAN_PATTERN = r"^[A-Z]{5}[0-9]{4}[A-Z]{1}$"
# "Delhi (07)" style display strings carry the code in trailing parentheses
POS_DISPLAY_PATTERN = r"\((\d{2})\)\s*$"


def parse_state_code(value) -> Optional[str]:
    """Accepts a bare state code (7, "07") or a display string like "Delhi (07)"."""
    if value is None or value == "":
        return None
    if isinstance(value, int):
        return f"{value:02d}"
    text = str(value).strip()
    if re.fullmatch(r"\d{2}", text):
        return text
    match = re.search(POS_DISPLAY_PATTERN, text)
    if match:
        return match.group(1)
    raise ValueError(f"Unrecognised place of supply: {value!r}")


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"


class LineItem(BaseModel):
    """One billable entry. `id` only correlates UI state and is never used in math."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    description: str = ""
    hsn: str = ""
    quantity: float = 1.0
    rate: float = 0.0
    tax_rate: float = Field(default=0.0, ge=0)

    @model_validator(mode='before')
    @classmethod
    def map_aliases(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if 'qty' in data and 'quantity' not in data:
                data['quantity'] = data.pop('qty')
            for key in ('taxRate', 'gst_rate'):
                if key in data and 'tax_rate' not in data:
                    data['tax_rate'] = data.pop(key)
            if 'sac' in data and 'hsn' not in data:
                data['hsn'] = data.pop('sac')
        return data

    @field_validator('hsn', mode='before')
    def coerce_code(cls, v):
        # YAML reads unquoted codes like 998314 as ints
        if v is None: return ""
        return str(v)


class Party(BaseModel):
    name: Optional[str] = None
    gstin: Optional[str] = None
    pan: Optional[str] = None
    state_code: Optional[str] = None
    address: Optional[str] = None

    @field_validator('gstin')
    def validate_gstin(cls, v):
        if v and not re.match(GSTIN_PATTERN, v):
            raise ValueError(f"Invalid GSTIN format: {v}")
        return v

    @field_validator('pan')
    def validate_pan(cls, v):
        if v and not re.match(PAN_PATTERN, v):
            raise ValueError(f"Invalid PAN format: {v}")
        return v

    @field_validator('state_code', mode='before')
    def coerce_state_code(cls, v):
        if v is None: return None
        if isinstance(v, int): return f"{v:02d}"
        return str(v)

    def get_state_code(self) -> Optional[str]:
        """Registered state code, falling back to the first two digits of the GSTIN."""
        if self.state_code:
            return self.state_code
        if self.gstin:
            return self.gstin[:2]
        return None


class SupplyContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    seller_state_code: str
    supply_state_code: str

    @property
    def is_inter_state(self) -> bool:
        from gstcalc.modules.gst_calculator import is_inter_state
        return is_inter_state(self.seller_state_code, self.supply_state_code)

    @classmethod
    def from_parties(cls, seller: Party, buyer: Optional[Party] = None,
                     place_of_supply: Optional[str] = None) -> 'SupplyContext':
        seller_code = seller.get_state_code() or ""
        if place_of_supply:
            supply_code = parse_state_code(place_of_supply)
        elif buyer is not None:
            supply_code = buyer.get_state_code() or ""
        else:
            # No buyer selected yet: treat as a local supply
            supply_code = seller_code
        return cls(seller_state_code=seller_code, supply_state_code=supply_code)


class LineItemCalculation(BaseModel):
    model_config = ConfigDict(frozen=True)

    taxable_value: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0
    igst: float = 0.0
    total: float = 0.0

    @property
    def tax_total(self) -> float:
        return self.cgst + self.sgst + self.igst


class InvoiceTotals(LineItemCalculation):
    @classmethod
    def zero(cls) -> 'InvoiceTotals':
        return cls()


class HsnSummaryRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    hsn: str
    tax_rate: float
    quantity: float
    taxable_value: float
    cgst: float
    sgst: float
    igst: float
    total: float


class InvoiceModel(BaseModel):
    number: Optional[str] = None
    date: Optional[str] = None # YYYY-MM-DD
    status: InvoiceStatus = InvoiceStatus.DRAFT
    seller: Party
    buyer: Optional[Party] = None
    place_of_supply: Optional[str] = None
    items: List[LineItem] = []
    notes: Optional[str] = None

    @field_validator('date', mode='before')
    def validate_date(cls, v):
        if v is None: return v
        if isinstance(v, datetime.date): return v.strftime("%Y-%m-%d")
        try:
            datetime.datetime.strptime(v, "%Y-%m-%d")
        except ValueError:
            raise ValueError("Incorrect data format, should be YYYY-MM-DD")
        return v

    @field_validator('place_of_supply', mode='before')
    def coerce_pos(cls, v):
        return parse_state_code(v)

    @property
    def supply_context(self) -> SupplyContext:
        return SupplyContext.from_parties(self.seller, self.buyer, self.place_of_supply)


class TaxLine(BaseModel):
    label: str          # CGST / SGST / IGST
    tax_rate: float     # component rate, e.g. 9 for CGST on an 18% slab
    taxable_value: float
    amount: float


class InvoiceFinancials(BaseModel):
    """Fully computed invoice; built in one pass, never partially populated."""
    supply: SupplyContext
    inter_state: bool
    lines: List[LineItemCalculation]
    totals: InvoiceTotals
    tax_lines: List[TaxLine] = []
    hsn_summary: List[HsnSummaryRow] = []
    rounded_total: int
    round_off: float
    amount_in_words: str
