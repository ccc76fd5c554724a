"""Running personality: trait scores, archetypes and DNA codes."""

from .archetypes import ALL_ARCHETYPES, Archetype, classify_archetype, score_percentile
from .dna import (
    compare_dna,
    compute_personality,
    decode_dna,
    encode_dna,
    generate_codex,
    inner_battle,
)
from .traits import compute_trait_scores

__all__ = [
    "ALL_ARCHETYPES",
    "Archetype",
    "classify_archetype",
    "compare_dna",
    "compute_personality",
    "compute_trait_scores",
    "decode_dna",
    "encode_dna",
    "generate_codex",
    "inner_battle",
    "score_percentile",
]
