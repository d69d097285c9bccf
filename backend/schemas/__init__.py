# Schemas package
from .health import HealthResponse
from .locations import LocationResponse
from .votes import VoteCreate

__all__ = [
    "HealthResponse",
    "LocationResponse",
    "VoteCreate",
]
