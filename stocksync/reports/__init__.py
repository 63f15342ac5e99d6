"""Sales and inventory reports."""

from stocksync.reports.export import export_reports, report_frames
from stocksync.reports.loader import ReportData, load_reports, reports_view

__all__ = [
    "ReportData",
    "export_reports",
    "load_reports",
    "report_frames",
    "reports_view",
]
