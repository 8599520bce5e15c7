# backend/app/api/llm.py
"""
Prompt relays to the generation API.

Both endpoints are blind proxies: build a prompt, forward it once, and hand
back the first candidate's text.
"""
import json
import logging

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder

from backend.app.errors import UpstreamError
from backend.app.llm_client import GeminiClient, get_llm_client
from backend.app.schemas import GoalsRequest, InsightsRequest, TextOut

logger = logging.getLogger(__name__)

router = APIRouter()

INSIGHTS_SYSTEM = "You are a friendly financial advisor."
GOALS_SYSTEM = "You are a helpful financial coach."


def insights_prompt(transactions) -> str:
    serialized = json.dumps(jsonable_encoder(transactions), separators=(",", ":"))
    return (
        "Act as a personal financial advisor. Analyze the following transactions "
        f"and provide a concise, actionable summary:\n{serialized}"
    )


def goals_prompt(income: float, expenses: float) -> str:
    return (
        f"Act as a financial coach. Based on total income ${income:.2f} and "
        f"expenses ${abs(expenses):.2f}, suggest a simple achievable financial goal."
    )


@router.post("/insights", response_model=TextOut)
async def generate_insights(body: InsightsRequest, llm: GeminiClient = Depends(get_llm_client)):
    try:
        text = await llm.generate(insights_prompt(body.transactions), INSIGHTS_SYSTEM)
    except UpstreamError as e:
        logger.error("Error generating insights: %s", e.message)
        raise UpstreamError("Failed to generate insights") from e
    return {"text": text}


@router.post("/goals", response_model=TextOut)
async def generate_goals(body: GoalsRequest, llm: GeminiClient = Depends(get_llm_client)):
    try:
        text = await llm.generate(goals_prompt(body.income, body.expenses), GOALS_SYSTEM)
    except UpstreamError as e:
        logger.error("Error generating goals: %s", e.message)
        raise UpstreamError("Failed to generate a financial goal") from e
    return {"text": text}
