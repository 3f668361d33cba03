from typing import Dict, Any

from jinja2 import Environment, FileSystemLoader

from gstcalc.modules.formatting import format_currency, format_qty, format_rate
from gstcalc.modules.models import InvoiceFinancials, InvoiceModel


class ViewModelService:
    """Prepares the dictionary consumed by the summary template."""

    def __init__(self, config):
        self.config = config
        self.rules = config.business_rules
        self.env = Environment(
            loader=FileSystemLoader(str(config.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        symbol = self.rules.tax_rules.currency_symbol
        self.env.filters['currency'] = lambda v: format_currency(v, symbol)
        self.env.filters['qty'] = format_qty
        self.env.filters['pct'] = format_rate

    def build_context(self, invoice: InvoiceModel, financials: InvoiceFinancials) -> Dict[str, Any]:
        """Maps business objects to a template-friendly dictionary."""
        rows = []
        for item, calc in zip(invoice.items, financials.lines):
            rows.append({
                "id": item.id,
                "description": item.description,
                "hsn": item.hsn or "--",
                "quantity": item.quantity,
                "rate": item.rate,
                "tax_rate": item.tax_rate,
                "calc": calc,
            })

        return {
            "invoice": {
                "number": invoice.number or "DRAFT",
                "date": invoice.date,
                "status": invoice.status.value,
                "notes": invoice.notes,
                "place_of_supply": self._build_pos_string(financials),
                "inter_state": financials.inter_state,
            },
            "seller": invoice.seller,
            "buyer": invoice.buyer,
            "rows": rows,
            "financials": financials,
            "totals": financials.totals,
        }

    def render_text(self, context: Dict[str, Any], template: str = "invoice_summary.txt") -> str:
        return self.env.get_template(template).render(context)

    def _build_pos_string(self, financials: InvoiceFinancials) -> str:
        code = financials.supply.supply_state_code
        if not code:
            return "Unknown"
        return f"{self.rules.state_name(code)} ({code})"
