"""
Estimate generation.

The model does the pricing; this module fills in defaults, builds the
prompt, and validates that the answer is JSON.
"""

from typing import Any

from sidebar.ai.json_output import parse_model_json
from sidebar.ai.llm import CompletionClient
from sidebar.ai.prompts import ESTIMATE_PROMPT
from sidebar.logging_config import get_logger
from sidebar.schemas.ai import EstimateRequest

logger = get_logger(__name__)

DEFAULTS = {
    "trade_type": "Roofing - Shingle",
    "project_name": "Residential Reroof",
    "customer_name": "Homeowner",
    "measurements": "2,000 sq ft roof, standard pitch 6/12",
    "material_grade": "Mid-range (30-year architectural shingles)",
    "labor_market": "DFW Texas metro - current rates",
    "profit_margin": "35%",
    "location": "Dallas-Fort Worth, TX",
}


def build_estimate_prompt(params: EstimateRequest) -> str:
    values = {name: getattr(params, name) or default for name, default in DEFAULTS.items()}
    return (
        "Generate a detailed estimate with these parameters:\n"
        f"- Trade Type: {values['trade_type']}\n"
        f"- Project Name: {values['project_name']}\n"
        f"- Customer: {values['customer_name']}\n"
        f"- Measurements: {values['measurements']}\n"
        f"- Material Grade: {values['material_grade']}\n"
        f"- Labor Market: {values['labor_market']}\n"
        f"- Target Profit Margin: {values['profit_margin']}\n"
        f"- Location: {values['location']}\n\n"
        "Generate a complete, accurate estimate ready to present to the customer."
    )


async def generate_estimate(client: CompletionClient, params: EstimateRequest) -> Any:
    """
    Ask the model for an estimate and decode it.

    Raises:
        UpstreamError: If the API call fails
        ModelOutputError: If the model's answer is empty or not JSON
    """
    completion = await client.complete(
        ESTIMATE_PROMPT,
        [{"role": "user", "content": build_estimate_prompt(params)}],
        failure_message="Failed to generate estimate",
    )
    estimate = parse_model_json(completion.text)
    logger.info("Estimate generated", extra={"trade_type": params.trade_type or DEFAULTS["trade_type"]})
    return estimate
