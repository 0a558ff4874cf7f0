"""addesk - campaign delivery report engine."""

from .analytics import aggregate, build_dashboard_data, compute_totals
from .services.report_service import ReportService

__all__ = ["ReportService", "aggregate", "build_dashboard_data", "compute_totals"]

__version__ = "0.1.0"
