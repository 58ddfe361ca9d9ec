# services/itineraries/rule_planner.py

import math
from typing import Dict, List, Optional, Tuple
from app.schemas.itineraries.itinerary_item import GeneratedItineraryItem
from app.schemas.trip.trip_schema import TripPreferences

# (title template, activity type, base cost per person in USD)
INTEREST_ACTIVITIES: Dict[str, List[Tuple[str, str, int]]] = {
    "culture": [
        ("Guided cultural walk through {destination}", "activity", 25),
        ("Traditional performance evening", "activity", 40),
    ],
    "nature": [
        ("Hike in the countryside around {destination}", "activity", 15),
        ("Botanical gardens visit", "attraction", 10),
    ],
    "food": [
        ("Food market tasting tour", "activity", 45),
        ("Cooking class with a local chef", "activity", 70),
    ],
    "nightlife": [
        ("Evening in {destination}'s bar district", "activity", 35),
        ("Live music venue", "activity", 30),
    ],
    "adventure": [
        ("Outdoor adventure excursion", "activity", 80),
        ("Cycling tour of {destination}", "activity", 35),
    ],
    "relaxation": [
        ("Spa and wellness afternoon", "activity", 60),
        ("Slow morning at a scenic cafe", "restaurant", 15),
    ],
    "shopping": [
        ("Shopping in {destination}'s main district", "activity", 0),
        ("Local crafts and design market", "attraction", 0),
    ],
    "history": [
        ("Historic old town tour", "attraction", 20),
        ("History museum visit", "attraction", 18),
    ],
    "art": [
        ("Art museum visit", "attraction", 22),
        ("Gallery hop in the arts quarter", "attraction", 10),
    ],
    "architecture": [
        ("Architecture walking tour", "attraction", 20),
        ("Landmark building interiors visit", "attraction", 15),
    ],
}

GENERAL_ACTIVITIES = [
    ("City highlights tour of {destination}", "attraction", 25),
    ("Viewpoint and old town stroll", "attraction", 0),
    ("Popular local museum", "attraction", 15),
]

OUTDOOR_INTERESTS = {"nature", "adventure"}

STYLE_MULTIPLIER = {"budget": 0.6, "mid-range": 1.0, "luxury": 2.2}

# lunch, dinner and their base cost per person
MEALS = {
    "budget": (("Street food lunch", 10), ("Casual local dinner", 18)),
    "mid-range": (("Lunch at a neighbourhood bistro", 20), ("Dinner at a well-reviewed restaurant", 40)),
    "luxury": (("Lunch at a chef's table", 55), ("Fine dining dinner", 120)),
}

PACE_SLOTS = {"relaxed": 1, "moderate": 2, "packed": 3}

ACTIVITY_SLOTS = [("09:00", "11:30"), ("14:00", "17:00"), ("21:00", "23:00")]
LUNCH_SLOT = ("12:30", "13:30")
DINNER_SLOT = ("19:00", "20:30")


def _activity_pool(interests: List[str]) -> List[Tuple[str, str, int, bool]]:
    pool = []
    seen = set()
    for interest in interests:
        key = interest.strip().lower()
        if key in seen or key not in INTEREST_ACTIVITIES:
            continue
        seen.add(key)
        for title, activity_type, cost in INTEREST_ACTIVITIES[key]:
            pool.append((title, activity_type, cost, key in OUTDOOR_INTERESTS))
    if not pool:
        pool = [(title, activity_type, cost, False) for title, activity_type, cost in GENERAL_ACTIVITIES]
    return pool


def _fit_to_budget(items: List[dict], budget: Optional[float], group_size: int) -> None:
    """Scale costs down so the whole group's spend stays within the budget."""
    if budget is None:
        return
    total = sum(item["cost"] for item in items) * group_size
    if total <= budget or total == 0:
        return
    factor = budget / total
    for item in items:
        item["cost"] = math.floor(item["cost"] * factor)


def generate_rule_based_itinerary(
    destination: str,
    days: int,
    preferences: TripPreferences,
    budget: Optional[float] = None,
) -> List[GeneratedItineraryItem]:
    """Deterministic itinerary keyed off interests, travel style and pace."""
    pool = _activity_pool(preferences.interests)
    multiplier = STYLE_MULTIPLIER.get(preferences.travel_style, 1.0)
    lunch, dinner = MEALS.get(preferences.travel_style, MEALS["mid-range"])
    slots = PACE_SLOTS.get(preferences.pace, 2)

    items: List[dict] = []
    picked = 0
    for day in range(1, days + 1):
        day_items = []
        for slot in range(slots):
            title, activity_type, cost, outdoor = pool[picked % len(pool)]
            picked += 1
            start, end = ACTIVITY_SLOTS[slot]
            day_items.append({
                "day_number": day,
                "start_time": start,
                "end_time": end,
                "activity_type": activity_type,
                "title": title.format(destination=destination),
                "description": f"Suggested for your {preferences.pace} {preferences.travel_style} trip.",
                "location": destination,
                "cost": math.floor(cost * multiplier),
                "weather_dependent": outdoor,
            })

        for (title, cost), (start, end) in ((lunch, LUNCH_SLOT), (dinner, DINNER_SLOT)):
            day_items.append({
                "day_number": day,
                "start_time": start,
                "end_time": end,
                "activity_type": "restaurant",
                "title": title,
                "description": None,
                "location": destination,
                "cost": cost,
                "weather_dependent": False,
            })

        day_items.sort(key=lambda item: item["start_time"])
        items.extend(day_items)

    _fit_to_budget(items, budget, preferences.group_size)
    return [GeneratedItineraryItem(**item) for item in items]
