# -----------------------------------------------------------------------------
# Created: 2026-02-04
# Description: HybridFusion
# -----------------------------------------------------------------------------
from typing import Dict, Iterable, List, Tuple

from search.KBSearchTypes import FusedResult

LEXICAL_WEIGHT = 0.5
SEMANTIC_WEIGHT = 0.5


def fuse(
    lexical_ids: Iterable[int],
    semantic_hits: Iterable[Tuple[int, float]],
    limit: int,
) -> List[FusedResult]:
    """
    Merge a ranked keyword result list with a scored semantic one.

    Every lexical id scores a flat LEXICAL_WEIGHT; every semantic hit scores
    similarity * SEMANTIC_WEIGHT. An id found on both sides gets the sum.
    Repeats inside one list are counted once (first occurrence). Results are
    sorted by score descending; equal scores keep the order in which ids were
    first seen, lexical ids before semantic-only ones.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    # dict keeps first-seen order, which the stable sort below relies on
    scores: Dict[int, float] = {}

    seen_lexical = set()
    for doc_id in lexical_ids:
        if doc_id in seen_lexical:
            continue
        seen_lexical.add(doc_id)
        scores[doc_id] = scores.get(doc_id, 0.0) + LEXICAL_WEIGHT

    seen_semantic = set()
    for doc_id, similarity in semantic_hits:
        if doc_id in seen_semantic:
            continue
        seen_semantic.add(doc_id)
        scores[doc_id] = scores.get(doc_id, 0.0) + similarity * SEMANTIC_WEIGHT

    ranked = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)
    return [FusedResult(id=doc_id, score=score) for doc_id, score in ranked[:limit]]
