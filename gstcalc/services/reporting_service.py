import logging
from typing import Iterable

from pydantic import BaseModel

from gstcalc.modules.gst_calculator import aggregate
from gstcalc.modules.models import InvoiceModel, InvoiceStatus

logger = logging.getLogger(__name__)


class ReceivablesSummary(BaseModel):
    total_revenue: float = 0.0
    outstanding: float = 0.0
    paid_count: int = 0
    outstanding_count: int = 0

    @property
    def invoice_count(self) -> int:
        return self.paid_count + self.outstanding_count


class ReportingService:
    """Revenue and receivables across many invoices.
    Revenue counts only invoices marked Paid; everything else is outstanding.
    """

    def invoice_total(self, invoice: InvoiceModel) -> float:
        # Each invoice carries its own place of supply
        return aggregate(invoice.items, invoice.supply_context.is_inter_state).total

    def summarize(self, invoices: Iterable[InvoiceModel]) -> ReceivablesSummary:
        revenue = 0.0
        outstanding = 0.0
        paid_count = 0
        outstanding_count = 0

        for invoice in invoices:
            total = self.invoice_total(invoice)
            if invoice.status == InvoiceStatus.PAID:
                revenue += total
                paid_count += 1
            else:
                outstanding += total
                outstanding_count += 1

        logger.info(f"Summarized {paid_count + outstanding_count} invoices ({paid_count} paid)")
        return ReceivablesSummary(
            total_revenue=revenue,
            outstanding=outstanding,
            paid_count=paid_count,
            outstanding_count=outstanding_count,
        )
