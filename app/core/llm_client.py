from openai import OpenAI
from openai import OpenAIError
from typing import Optional
from app.core.config import settings
from app.core.errors import GenerationFailedError
from app.core.logger import logger

SYSTEM_PROMPT = (
    "You are an expert travel planner and itinerary creator. Your goal is to design detailed, "
    "day-by-day travel plans based on user requests, ensuring the output is always a well-structured JSON array."
)

_client: Optional[OpenAI] = None


def get_client() -> OpenAI:
    global _client
    if not settings.OPENROUTER_API_KEY:
        raise GenerationFailedError("AI itinerary generation is not configured.")
    if _client is None:
        _client = OpenAI(
            api_key=settings.OPENROUTER_API_KEY,
            base_url=settings.BASE_URL,
        )
    return _client


def get_ai_completion(prompt: str) -> str:
    client = get_client()
    try:
        response = client.chat.completions.create(
            model=settings.LLM_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=settings.LLM_TEMPERATURE,
        )
    except OpenAIError as e:
        logger.error(f"LLM backend error: {e}")
        raise GenerationFailedError("AI model is temporarily unavailable.") from e
    logger.info("LLM connection successful. Response received.")

    if not response.choices or not response.choices[0].message.content:
        logger.error("No choices returned from LLM!")
        raise GenerationFailedError("LLM did not return any content.")

    return response.choices[0].message.content
