"""Multi-sheet spreadsheet export of the loaded report data (pandas + openpyxl)."""

from pathlib import Path

import pandas as pd

from stocksync.config import REPORT_EXPORT_PATH
from stocksync.reports.loader import ReportData
from stocksync.utils.logger import get_logger

logger = get_logger("stocksync.reports.export")

SHEETS = (
    ("Top Selling Products", "topSellingProducts"),
    ("Products By Category", "productsByCategory"),
    ("Payment Method Summary", "paymentMethodSummary"),
    ("User Sales Summary", "userSalesSummary"),
)


def report_frames(data: ReportData) -> dict[str, pd.DataFrame]:
    """Sheet name -> DataFrame, one row per record (extra backend fields included)."""
    frames = {}
    for sheet, attr in SHEETS:
        rows = [row.model_dump() for row in getattr(data, attr)]
        frames[sheet] = pd.DataFrame(rows)
    return frames


def export_reports(data: ReportData, path: str | Path = REPORT_EXPORT_PATH) -> Path:
    """Write every dataset to its own sheet and return the file path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frames = report_frames(data)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, df in frames.items():
            df.to_excel(writer, sheet_name=sheet, index=False)
    logger.info(
        "reports.exported",
        path=str(path),
        rows={sheet: len(df) for sheet, df in frames.items()},
    )
    return path
