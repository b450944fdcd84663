# -----------------------------------------------------------------------------
# Created: 2026-02-11
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Dict

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    message: str
    index_initialized: bool


class SmokeTestSummary(BaseModel):
    total: int
    passed: int
    failed: int


class DeepHealthResponse(BaseModel):
    status: str  # "ok" | "error"
    results: Dict[str, bool]
    summary: SmokeTestSummary
