# app/routes/__init__.py
from fastapi import APIRouter
from app.routes.trip import trip_routes
from app.routes.itineraries import itinerary_routes
from app.routes.destinations import destination_routes


api_router = APIRouter()

# Trip routes
api_router.include_router(trip_routes.router)

# Itinerary routes
api_router.include_router(itinerary_routes.router)

# Destination routes
api_router.include_router(destination_routes.router)
