from pydantic import BaseModel, Field, field_validator
from typing import List, Dict

# --- Business Rules Models ---

class TaxRules(BaseModel):
    valid_slabs: List[float] = [0, 5, 12, 18, 28]
    enforce_slabs: bool = False
    currency_symbol: str = "₹"
    words_template: str = "Rupees {words} Only"
    credit_prefix: str = "Minus "

    @field_validator('valid_slabs')
    def validate_slabs(cls, v):
        if any(rate < 0 for rate in v):
            raise ValueError("GST slabs must be non-negative")
        return v

class BusinessRulesConfig(BaseModel):
    tax_rules: TaxRules = Field(default_factory=TaxRules)
    state_map: Dict[str, str] = {}

    def state_name(self, code: str, default: str = "Unknown") -> str:
        return self.state_map.get(code, default)
