import os
import json
import logging
from typing import Any, Dict, List, Optional

import yaml

from gstcalc.config import EngineConfig, setup_logging
from gstcalc.modules.models import InvoiceModel
from gstcalc.services.financials_service import FinancialsService
from gstcalc.services.reporting_service import ReceivablesSummary, ReportingService
from gstcalc.services.view_model_service import ViewModelService

# Load Configuration & Setup Logging
config = EngineConfig.load_default()
setup_logging(config)
logger = logging.getLogger(__name__)


def load_invoice(invoice_yaml_path: str) -> InvoiceModel:
    with open(invoice_yaml_path, 'r') as f:
        raw_data = yaml.safe_load(f)
    return InvoiceModel(**raw_data)


def assemble_invoice_data(invoice_yaml_path: str) -> Dict[str, Any]:
    """Loads an invoice and calculates financials without rendering."""
    invoice_model = load_invoice(invoice_yaml_path)
    financials = FinancialsService(config).calculate(invoice_model)
    return {"invoice_model": invoice_model, "financials": financials}


def compute(invoice_yaml_path: str) -> Optional[Dict[str, Any]]:
    """Runs the pipeline for one invoice file: load, calculate, render."""
    try:
        logger.info(f"Processing: {invoice_yaml_path}")

        # 1. Data + business logic
        data = assemble_invoice_data(invoice_yaml_path)

        # 2. Presentation
        view_model_service = ViewModelService(config)
        context = view_model_service.build_context(data["invoice_model"], data["financials"])

        return {
            **data,
            "context": context,
            "text": view_model_service.render_text(context),
        }

    except Exception as e:
        logger.error(f"Failed to compute {invoice_yaml_path}: {e}", exc_info=True)
        return None


def financials_as_json(financials) -> str:
    return json.dumps(financials.model_dump(mode='json'), indent=2, ensure_ascii=False)


def report(invoice_paths: List[str]) -> ReceivablesSummary:
    invoices = []
    for path in invoice_paths:
        try:
            invoices.append(load_invoice(path))
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logger.error(f"Skipping {os.path.basename(path)}: {e}")
    return ReportingService().summarize(invoices)
