"""Tests for the AI stock-level prediction passthrough."""

import asyncio
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Allow importing stocksync when running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from stocksync.agents.prediction import (
    PREDICTION_FAILED_MESSAGE,
    AgentStockPredictor,
    build_prediction_prompt,
    predict_stock_target,
    progress_percent,
)
from stocksync.models.inputs import StockLevelPredictionInput
from stocksync.models.outputs import StockLevelPredictionOutput
from stocksync.views.notifications import Notifier

SAMPLE = StockLevelPredictionInput(
    monthlyRevenue=45231, totalProducts=1250, stockAlerts=5, currentInventoryValue=250430
)


class FixedPredictor:
    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.seen = []

    async def predict(self, data):
        self.seen.append(data)
        if self.error is not None:
            raise self.error
        return self.output


def test_prompt_contains_all_figures():
    prompt = build_prediction_prompt(SAMPLE)
    assert "Monthly Revenue: 45231.0" in prompt
    assert "Total Products: 1250" in prompt
    assert "Stock Alerts: 5" in prompt
    assert "Current Inventory Value: 250430.0" in prompt


def test_prediction_passes_model_output_through():
    output = StockLevelPredictionOutput(targetStockRefillValue=300000, reasoning="Cover five low items.")
    predictor = FixedPredictor(output=output)
    notifier = Notifier()
    result = asyncio.run(predict_stock_target(SAMPLE, predictor=predictor, notifier=notifier))
    assert result == output
    assert predictor.seen == [SAMPLE]
    assert notifier.notifications == []


def test_model_failure_notifies_and_returns_none():
    notifier = Notifier()
    predictor = FixedPredictor(error=RuntimeError("rate limited"))
    result = asyncio.run(predict_stock_target(SAMPLE, predictor=predictor, notifier=notifier))
    assert result is None
    assert notifier.last.title == "Prediction Failed"
    assert notifier.last.description == PREDICTION_FAILED_MESSAGE
    assert notifier.last.variant == "destructive"


def test_input_is_validated_before_any_model_call():
    with pytest.raises(ValidationError):
        StockLevelPredictionInput(monthlyRevenue=-1, totalProducts=0, stockAlerts=0, currentInventoryValue=0)


def test_agent_predictor_builds_lazily():
    predictor = AgentStockPredictor(model="test")
    assert predictor._agent is None


@pytest.mark.parametrize(
    "current,target,expected",
    [(250430, 500860, 50.0), (600000, 500000, 100.0), (100, 0, 0.0), (0, 1000, 0.0)],
)
def test_progress_percent(current, target, expected):
    assert progress_percent(current, target) == pytest.approx(expected)
