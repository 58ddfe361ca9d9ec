from .trips.trip_model import Trip, TripStatusEnum
from .itinerary.itinerary_item import ItineraryItem
from .destination.destination_model import Destination
