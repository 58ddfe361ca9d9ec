from fastapi.concurrency import run_in_threadpool
from app.core.config import settings
from app.core.errors import GenerationFailedError, InvalidArgumentError
from app.core.llm_client import get_ai_completion
from app.core.logger import logger
from app.schemas.itineraries.generation import GenerateItineraryRequest, GenerateItineraryResponse
from app.services.itineraries.rule_planner import generate_rule_based_itinerary
from app.utils.ai_itinerary import build_prompt, parse_ai_response


async def generate_itinerary(req: GenerateItineraryRequest) -> GenerateItineraryResponse:
    """Ask the LLM for an itinerary; fall back to the rule-based planner if it can't deliver."""
    if req.end_date < req.start_date:
        raise InvalidArgumentError("endDate must not be before startDate")

    prompt = build_prompt(req)
    try:
        ai_response = await run_in_threadpool(get_ai_completion, prompt)
        itinerary = parse_ai_response(ai_response, req.days)
    except GenerationFailedError as e:
        if not settings.AI_FALLBACK_ENABLED:
            logger.error(f"AI itinerary generation failed for {req.destination}: {e.message}")
            raise GenerationFailedError("failed to generate itinerary") from e
        logger.warning(f"AI itinerary generation failed for {req.destination}, using rule-based planner: {e.message}")
        itinerary = generate_rule_based_itinerary(
            destination=req.destination,
            days=req.days,
            preferences=req.preferences,
            budget=req.budget,
        )
        return GenerateItineraryResponse(itinerary=itinerary, source="rule-based")

    logger.info(f"AI itinerary generated for {req.destination}: {len(itinerary)} items")
    return GenerateItineraryResponse(itinerary=itinerary, source="ai")
