"""Pydantic AI agents."""

from stocksync.agents.prediction import (
    AgentStockPredictor,
    StockPredictor,
    build_prediction_prompt,
    predict_stock_target,
    progress_percent,
)

__all__ = [
    "AgentStockPredictor",
    "StockPredictor",
    "build_prediction_prompt",
    "predict_stock_target",
    "progress_percent",
]
