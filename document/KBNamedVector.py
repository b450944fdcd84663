# -----------------------------------------------------------------------------
# Created: 2026-02-02
# Description: KBNamedVector
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class KBNamedVector:
    """A reusable concept vector addressed by a user-chosen handle."""
    handle: str
    vector: np.ndarray
    description: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def dimension(self) -> int:
        return int(self.vector.shape[0])
