"""AI stock-level prediction: a prompt passthrough to an external model.

No algorithm runs locally; the model receives the four dashboard figures and
answers with a target refill value and its reasoning.
"""

from typing import Protocol

from opentelemetry.trace import SpanKind

from stocksync.agents.base import create_agent
from stocksync.config import PREDICTION_MODEL
from stocksync.models.inputs import StockLevelPredictionInput
from stocksync.models.outputs import StockLevelPredictionOutput
from stocksync.utils.logger import get_logger
from stocksync.utils.tracing import get_tracer
from stocksync.views.notifications import Notifier

logger = get_logger("stocksync.agents.prediction")

PREDICTION_FAILED_MESSAGE = (
    "The AI model failed to generate a prediction. Please try again later."
)

PREDICTION_SYSTEM_PROMPT = (
    "You are an AI assistant that analyzes inventory data and suggests optimal reorder values."
)

PREDICTION_PROMPT_TEMPLATE = """Based on the following data, suggest a target inventory reorder value and explain your reasoning.

Monthly Revenue: {monthlyRevenue}
Total Products: {totalProducts}
Stock Alerts: {stockAlerts}
Current Inventory Value: {currentInventoryValue}

Consider factors like sales trends, product variety, and potential stockouts.
Provide a target stock refill value and the reasoning behind it. The targetStockRefillValue should always be greater than currentInventoryValue."""


class StockPredictor(Protocol):
    """Anything that turns the dashboard figures into a target suggestion."""

    async def predict(self, data: StockLevelPredictionInput) -> StockLevelPredictionOutput:
        ...


def build_prediction_prompt(data: StockLevelPredictionInput) -> str:
    return PREDICTION_PROMPT_TEMPLATE.format(**data.model_dump())


class AgentStockPredictor:
    """Pydantic AI implementation; the agent is built on first use."""

    def __init__(self, model=PREDICTION_MODEL):
        self._model = model
        self._agent = None

    def _get_agent(self):
        if self._agent is None:
            self._agent = create_agent(
                PREDICTION_SYSTEM_PROMPT,
                model=self._model,
                output_type=StockLevelPredictionOutput,
            )
        return self._agent

    async def predict(self, data: StockLevelPredictionInput) -> StockLevelPredictionOutput:
        result = await self._get_agent().run(build_prediction_prompt(data))
        return result.output


async def predict_stock_target(
    data: StockLevelPredictionInput,
    predictor: StockPredictor | None = None,
    notifier: Notifier | None = None,
) -> StockLevelPredictionOutput | None:
    """Ask the model for a target; on any model failure notify and return None."""
    predictor = predictor or AgentStockPredictor()
    attrs = {"prediction.total_products": data.totalProducts, "prediction.stock_alerts": data.stockAlerts}
    with get_tracer().start_as_current_span("stock_prediction", kind=SpanKind.INTERNAL, attributes=attrs) as span:
        try:
            output = await predictor.predict(data)
        except Exception as e:
            logger.exception("prediction.failed", error_type=type(e).__name__)
            span.set_attribute("prediction.outcome", "failed")
            if notifier is not None:
                notifier.error("Prediction Failed", PREDICTION_FAILED_MESSAGE)
            return None
        span.set_attribute("prediction.target", output.targetStockRefillValue)
    logger.info(
        "prediction.ok",
        target=output.targetStockRefillValue,
        current=data.currentInventoryValue,
    )
    return output


def progress_percent(current_inventory_value: float, target: float) -> float:
    """Share of the suggested target already on hand, capped at 100."""
    if target <= 0:
        return 0.0
    return min(100.0, current_inventory_value / target * 100)
