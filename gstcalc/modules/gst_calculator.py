import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from gstcalc.modules.errors import InvalidArgumentError
from gstcalc.modules.models import (
    HsnSummaryRow,
    InvoiceTotals,
    LineItem,
    LineItemCalculation,
)

logger = logging.getLogger(__name__)

DEFAULT_SLABS = (0, 5, 12, 18, 28)

# ==========================================
# SUPPLY CLASSIFICATION
# ==========================================


def is_inter_state(seller_state_code: str, supply_state_code: str) -> bool:
    """
    Returns True when the supply crosses state lines (IGST), False for a
    same-state supply (CGST + SGST).

    Codes are compared as plain strings. Validity is the caller's job, so an
    empty or malformed code simply compares unequal to a real one.
    """
    if not seller_state_code or not supply_state_code:
        logger.warning(
            f"Missing state code (seller={seller_state_code!r}, supply={supply_state_code!r})"
        )
    return seller_state_code != supply_state_code


# ==========================================
# LINE ITEM & INVOICE MATH
# ==========================================


def calculate_line_item(item: LineItem, inter_state: bool) -> LineItemCalculation:
    """
    Tax split for one item. Values are left unrounded so aggregation does not
    compound rounding error; negative quantities or rates carry their sign
    through to the total (credit notes).
    """
    taxable = item.quantity * item.rate
    cgst = sgst = igst = 0.0
    if inter_state:
        igst = taxable * item.tax_rate / 100
    else:
        cgst = taxable * item.tax_rate / 200
        sgst = taxable * item.tax_rate / 200

    return LineItemCalculation(
        taxable_value=taxable,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        total=taxable + cgst + sgst + igst,
    )


def aggregate(items: Iterable[LineItem], inter_state: bool) -> InvoiceTotals:
    """Sums per-item calculations in input order. The same `inter_state` applies to every item."""
    taxable = cgst = sgst = igst = total = 0.0
    for item in items:
        calc = calculate_line_item(item, inter_state)
        taxable += calc.taxable_value
        cgst += calc.cgst
        sgst += calc.sgst
        igst += calc.igst
        total += calc.total

    return InvoiceTotals(
        taxable_value=taxable, cgst=cgst, sgst=sgst, igst=igst, total=total
    )


def summarize_by_hsn(items: Sequence[LineItem], inter_state: bool) -> List[HsnSummaryRow]:
    """Groups items by (HSN/SAC, rate) in first-seen order."""
    groups: Dict[Tuple[str, float], Dict[str, float]] = {}

    for item in items:
        calc = calculate_line_item(item, inter_state)
        key = (item.hsn, item.tax_rate)
        if key not in groups:
            groups[key] = {
                "quantity": 0.0,
                "taxable_value": 0.0,
                "cgst": 0.0,
                "sgst": 0.0,
                "igst": 0.0,
                "total": 0.0,
            }
        g = groups[key]
        g["quantity"] += item.quantity
        g["taxable_value"] += calc.taxable_value
        g["cgst"] += calc.cgst
        g["sgst"] += calc.sgst
        g["igst"] += calc.igst
        g["total"] += calc.total

    return [
        HsnSummaryRow(hsn=hsn, tax_rate=rate, **sums)
        for (hsn, rate), sums in groups.items()
    ]


def validate_tax_rate(tax_rate: float, slabs: Optional[Iterable[float]] = None) -> float:
    allowed = tuple(slabs) if slabs is not None else DEFAULT_SLABS
    if tax_rate not in allowed:
        raise InvalidArgumentError(
            f"GST rate {tax_rate}% is not a valid slab (allowed: {', '.join(f'{s:g}' for s in allowed)})"
        )
    return tax_rate
