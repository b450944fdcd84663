# -----------------------------------------------------------------------------
# Created: 2026-02-02
# Description: KBDocument
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass
class KBDocument:
    id: int
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    source: str = "unknown"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
