# -----------------------------------------------------------------------------
# Created: 2026-02-07
# Description: UsageTracker
# -----------------------------------------------------------------------------
import math
from dataclasses import dataclass

# USD per 1K tokens
MODEL_PRICING = {
    "text-embedding-3-small": 0.00002,
    "text-embedding-3-large": 0.00013,
    "text-embedding-ada-002": 0.0001,
}
DEFAULT_MODEL = "text-embedding-3-small"


@dataclass
class UsageTracker:
    """
    Running token / request counts for one embedding provider.
    Owned by whoever constructs the provider; nothing here is global.
    """
    model: str = DEFAULT_MODEL
    total_tokens: int = 0
    requests: int = 0

    def add(self, tokens: int, requests: int = 1) -> None:
        if tokens < 0:
            raise ValueError(f"tokens must be >= 0, got {tokens}")
        self.total_tokens += tokens
        self.requests += requests

    def reset(self) -> None:
        self.total_tokens = 0
        self.requests = 0

    def estimated_cost(self) -> float:
        return self.estimate_cost(self.total_tokens, self.model)

    def summary(self) -> dict:
        return {
            "model": self.model,
            "total_tokens": self.total_tokens,
            "requests": self.requests,
            "estimated_cost": self.estimated_cost(),
        }

    @staticmethod
    def estimate_tokens(text: str) -> int:
        """Rough count, about 4 characters per token."""
        if not text:
            return 0
        return math.ceil(len(text) / 4)

    @staticmethod
    def estimate_cost(tokens: int, model: str = DEFAULT_MODEL) -> float:
        price = MODEL_PRICING.get(model, MODEL_PRICING[DEFAULT_MODEL])
        return (tokens / 1000) * price
