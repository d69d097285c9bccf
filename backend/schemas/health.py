"""Liveness response. Reports the service only; the database is not consulted."""
from typing import Literal

from pydantic import BaseModel

SERVICE_NAME = "location-votes"
SERVICE_VERSION = "0.1.0"


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    service: str = SERVICE_NAME
    version: str = SERVICE_VERSION
