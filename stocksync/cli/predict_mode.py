"""Predict mode: AI target stock refill suggestion."""

import asyncio

import typer
from pydantic import ValidationError
from rich.progress_bar import ProgressBar

from stocksync.agents.prediction import predict_stock_target, progress_percent
from stocksync.config import OPENAI_API_KEY, PREDICTION_MODEL
from stocksync.models.inputs import StockLevelPredictionInput

from .shared import console, logger, make_notifier


def predict(
    monthly_revenue: float = typer.Option(45231, "--monthly-revenue", help="Monthly revenue"),
    total_products: int = typer.Option(1250, "--total-products", help="Total number of products"),
    stock_alerts: int = typer.Option(5, "--stock-alerts", help="Number of stock alerts"),
    current_inventory_value: float = typer.Option(250430, "--current-inventory", help="Current inventory value"),
) -> None:
    """Ask the AI model for a target inventory reorder value."""
    log = logger.bind(command="predict")
    try:
        data = StockLevelPredictionInput(
            monthlyRevenue=monthly_revenue,
            totalProducts=total_products,
            stockAlerts=stock_alerts,
            currentInventoryValue=current_inventory_value,
        )
    except ValidationError as e:
        for err in e.errors(include_url=False):
            console.print(f"[red]{'.'.join(str(p) for p in err['loc'])}: {err['msg']}[/red]")
        raise typer.Exit(2)
    if str(PREDICTION_MODEL).startswith("openai:") and not OPENAI_API_KEY:
        console.print("[red]OPENAI_API_KEY is not set; add it to .env to use predictions.[/red]")
        raise typer.Exit(1)
    output = asyncio.run(predict_stock_target(data, notifier=make_notifier()))
    if output is None:
        raise typer.Exit(1)
    pct = progress_percent(data.currentInventoryValue, output.targetStockRefillValue)
    console.print(f"\n[bold]Suggested Target:[/bold] ${output.targetStockRefillValue:,.2f}")
    console.print(f"Current: ${data.currentInventoryValue:,.2f} ({pct:.1f}% of target)")
    console.print(ProgressBar(total=100, completed=pct, width=40))
    console.print(f"\n[bold]AI Reasoning[/bold]\n{output.reasoning}")
    log.info("predict.complete", target=output.targetStockRefillValue)
