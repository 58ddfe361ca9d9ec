from typing import List
import json
import re
from pydantic import TypeAdapter, ValidationError
from app.core.errors import GenerationFailedError, describe_validation_errors
from app.schemas.itineraries.generation import GenerateItineraryRequest
from app.schemas.itineraries.itinerary_item import ACTIVITY_TYPES, GeneratedItineraryItem

_items_adapter = TypeAdapter(List[GeneratedItineraryItem])

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def build_prompt(req: GenerateItineraryRequest) -> str:
    prefs = req.preferences
    budget_info = f"Around ${req.budget:g} total for the trip" if req.budget else "Not specified"
    interests = ", ".join(prefs.interests) or "general sightseeing"
    accessibility = ", ".join(prefs.accessibility) if prefs.accessibility else "None"
    activity_types = ", ".join(f'"{t}"' for t in ACTIVITY_TYPES)

    return (
        f"You are an expert travel planner. Create a personalized, day-by-day travel itinerary "
        f"based on the following details.\n\n"
        f"**Trip Details:**\n"
        f"- Destination: {req.destination}\n"
        f"- Trip Duration: {req.days} days\n"
        f"- Dates: {req.start_date} to {req.end_date}\n"
        f"- Budget: {budget_info}\n"
        f"- Travel Style: {prefs.travel_style}\n"
        f"- Accommodation Preference: {prefs.accommodation}\n"
        f"- Travel Pace: {prefs.pace}\n"
        f"- Group Size: {prefs.group_size} people\n"
        f"- Interests: {interests}\n"
        f"- Accessibility Needs: {accessibility}\n\n"

        f"**Instructions:**\n"
        f"1. Generate a detailed itinerary for each day of the trip.\n"
        f"2. Return the response as a single, valid JSON array of objects, with no text or markdown around it.\n"
        f"3. Each object in the array represents a single itinerary item and must have the following fields:\n"
        f'   - "dayNumber": (number) The day of the trip, from 1 to {req.days}.\n'
        f'   - "startTime": (string) The start time in "HH:MM" 24-hour format.\n'
        f'   - "endTime": (string) The end time in "HH:MM" 24-hour format.\n'
        f'   - "activityType": (string) One of: {activity_types}.\n'
        f'   - "title": (string) A concise title for the activity.\n'
        f'   - "description": (string) A brief, engaging description of the activity.\n'
        f'   - "location": (string, optional) The specific location or address for the activity.\n'
        f'   - "cost": (number, optional) An estimated cost per person in USD.\n'
        f'   - "weatherDependent": (boolean) true if the activity is weather-dependent.\n\n'

        f"Sample item object:\n"
        f"{{\n"
        f'  "dayNumber": 1,\n'
        f'  "startTime": "09:00",\n'
        f'  "endTime": "11:30",\n'
        f'  "activityType": "attraction",\n'
        f'  "title": "Visit the Louvre Museum",\n'
        f'  "description": "Explore one of the world\'s largest art museums.",\n'
        f'  "location": "Louvre Museum, 75001 Paris, France",\n'
        f'  "cost": 20,\n'
        f'  "weatherDependent": false\n'
        f"}}\n\n"
        f"Now, generate the complete JSON array for the trip described above.\n"
    )


def extract_json_string(raw_text: str) -> str:
    # Remove markdown-style code fences
    return _FENCE.sub("", raw_text.strip()).strip()


def parse_ai_response(response: str, days: int) -> List[GeneratedItineraryItem]:
    """Decode the model reply strictly; anything off-schema raises GenerationFailedError."""
    try:
        parsed = json.loads(extract_json_string(response))
    except json.JSONDecodeError:
        raise GenerationFailedError("LLM returned invalid JSON.") from None

    if not isinstance(parsed, list) or not parsed:
        raise GenerationFailedError("LLM response is not a non-empty JSON array.")

    try:
        items = _items_adapter.validate_python(parsed)
    except ValidationError as exc:
        raise GenerationFailedError(
            f"LLM returned an invalid itinerary item: {describe_validation_errors(exc.errors())}"
        ) from None

    for item in items:
        if item.day_number > days:
            raise GenerationFailedError(f"LLM returned dayNumber {item.day_number} for a {days}-day trip.")

    return items
