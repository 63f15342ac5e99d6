"""Base agent configuration for Pydantic AI agents."""

from pydantic_ai import Agent

from stocksync.config import PREDICTION_MODEL


def create_agent(system_prompt: str, model=PREDICTION_MODEL, **kwargs) -> Agent:
    """Create a Pydantic AI agent with the shared model and retry settings."""
    return Agent(
        model,
        system_prompt=system_prompt,
        retries=1,
        **kwargs,
    )
