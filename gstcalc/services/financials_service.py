import logging
from typing import Dict, List, Tuple

from gstcalc.config import EngineConfig
from gstcalc.modules.amount_words import amount_in_words
from gstcalc.modules.formatting import round_rupees
from gstcalc.modules.gst_calculator import (
    aggregate,
    calculate_line_item,
    summarize_by_hsn,
    validate_tax_rate,
)
from gstcalc.modules.models import (
    InvoiceFinancials,
    InvoiceModel,
    LineItemCalculation,
    LineItem,
    TaxLine,
)

logger = logging.getLogger(__name__)


class FinancialsService:
    """Handles business logic for taxes, totals and the legal words line."""

    def __init__(self, config: EngineConfig):
        self.config = config
        self.tax_rules = config.business_rules.tax_rules

    def calculate(self, invoice: InvoiceModel) -> InvoiceFinancials:
        """Calculates financials for a complete invoice."""
        if self.tax_rules.enforce_slabs:
            for item in invoice.items:
                validate_tax_rate(item.tax_rate, self.tax_rules.valid_slabs)

        supply = invoice.supply_context
        # One place of supply per invoice: classify once, apply to every item
        inter_state = supply.is_inter_state
        logger.info(
            f"Invoice {invoice.number or '(draft)'}: "
            f"{'inter' if inter_state else 'intra'}-state supply "
            f"({supply.seller_state_code} -> {supply.supply_state_code}), {len(invoice.items)} items"
        )

        lines = [calculate_line_item(item, inter_state) for item in invoice.items]
        totals = aggregate(invoice.items, inter_state)
        rounded_total = round_rupees(totals.total)

        return InvoiceFinancials(
            supply=supply,
            inter_state=inter_state,
            lines=lines,
            totals=totals,
            tax_lines=self._build_tax_lines(invoice.items, lines, inter_state),
            hsn_summary=summarize_by_hsn(invoice.items, inter_state),
            rounded_total=rounded_total,
            round_off=rounded_total - totals.total,
            amount_in_words=self.words_line(rounded_total),
        )

    def words_line(self, rounded_total: int) -> str:
        """The mandatory 'total in words' text, e.g. 'Rupees One Lakh Only'."""
        text = self.tax_rules.words_template.format(words=amount_in_words(abs(rounded_total)))
        if rounded_total < 0:
            text = self.tax_rules.credit_prefix + text
        return text

    def _build_tax_lines(
        self, items: List[LineItem], lines: List[LineItemCalculation], inter_state: bool
    ) -> List[TaxLine]:
        # slab rate -> [taxable, cgst, sgst, igst], in first-seen order
        by_rate: Dict[float, List[float]] = {}
        for item, calc in zip(items, lines):
            sums = by_rate.setdefault(item.tax_rate, [0.0, 0.0, 0.0, 0.0])
            sums[0] += calc.taxable_value
            sums[1] += calc.cgst
            sums[2] += calc.sgst
            sums[3] += calc.igst

        tax_lines = []
        for rate, (taxable, cgst, sgst, igst) in by_rate.items():
            if rate == 0:
                continue
            if inter_state:
                components: List[Tuple[str, float, float]] = [("IGST", rate, igst)]
            else:
                components = [("CGST", rate / 2, cgst), ("SGST", rate / 2, sgst)]
            for label, comp_rate, amount in components:
                if amount == 0:
                    continue
                tax_lines.append(
                    TaxLine(label=label, tax_rate=comp_rate, taxable_value=taxable, amount=amount)
                )
        return tax_lines
