"""
DNA codes: a short, reversible encoding of the five trait scores.

Format: ``RD-`` followed by one digit (1-5) per trait in the order
consistency, speed, endurance, variety, volume, e.g. ``RD-43524``.
"""

import itertools
import logging
import re
from functools import lru_cache
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..models.personality import (
    TRAIT_ORDER,
    BattleAthlete,
    BattleResult,
    CodexGroup,
    InnerBattle,
    RunningPersonality,
    TraitAdvantage,
    TraitScores,
)
from ..models.runs import RunEntry, as_date
from .archetypes import BEGINNER, BEGINNER_PERCENTILE, classify_archetype
from .traits import compute_trait_scores

logger = logging.getLogger(__name__)

DNA_PREFIX = "RD-"
DNA_PATTERN = re.compile(r"^RD-([1-5]{5})$")

# How much each trait counts toward a head-to-head race prediction
RACE_WEIGHTS: Dict[str, Dict[str, int]] = {
    "5K": {"speed": 3, "consistency": 1},
    "10K": {"speed": 2, "endurance": 1, "consistency": 1},
    "Half": {"endurance": 2, "speed": 1, "volume": 1},
    "Full": {"endurance": 3, "volume": 2, "consistency": 1},
}

WEEKLY_CHALLENGES: Dict[str, str] = {
    "consistency": "Run 4+ times this week",
    "speed": "Do 1 interval session",
    "endurance": "Complete a 10km+ run",
    "variety": "Run a brand new route",
    "volume": "Hit 30km this week",
}

ScoreInput = Union[TraitScores, Mapping[str, int], Sequence[int]]


def _coerce_scores(scores: ScoreInput) -> Optional[TraitScores]:
    if isinstance(scores, TraitScores):
        return scores
    if isinstance(scores, Mapping):
        values = scores
    elif isinstance(scores, (list, tuple)) and len(scores) == len(TRAIT_ORDER):
        values = dict(zip(TRAIT_ORDER, scores))
    else:
        return None
    try:
        return TraitScores.model_validate({trait: values[trait] for trait in TRAIT_ORDER}, strict=True)
    except (KeyError, TypeError, ValidationError):
        return None


def encode_dna(scores: ScoreInput) -> Optional[str]:
    """
    Encode trait scores as a DNA code.

    Accepts TraitScores, a trait->score mapping or a 5-sequence in trait
    order. Scores must be ints; returns None when any score is missing,
    not an int (bools and numeric strings included) or outside 1..5.
    """
    coerced = _coerce_scores(scores)
    if coerced is None:
        logger.debug(f"Cannot encode scores {scores!r}")
        return None
    return DNA_PREFIX + "".join(str(v) for v in coerced.as_tuple())


def build_personality(scores: TraitScores) -> RunningPersonality:
    archetype, percentile = classify_archetype(scores)
    return RunningPersonality(
        type=archetype.name,
        description=archetype.description,
        percentile=percentile,
        scores=scores,
        code=DNA_PREFIX + "".join(str(v) for v in scores.as_tuple()),
    )


def compute_personality(runs: Sequence[RunEntry], today) -> RunningPersonality:
    """
    Score, classify and encode the personality of a run history.

    A history with no runs up to ``today`` gets the Beginner personality
    (lowest scores, median percentile) instead of a scored archetype.
    """
    anchor = as_date(today)
    if not any(r.day <= anchor for r in runs):
        scores = TraitScores(**{trait: 1 for trait in TRAIT_ORDER})
        return RunningPersonality(
            type=BEGINNER.name,
            description=BEGINNER.description,
            percentile=BEGINNER_PERCENTILE,
            scores=scores,
            code=encode_dna(scores),
        )
    return build_personality(compute_trait_scores(runs, anchor))


def decode_dna(code: str) -> Optional[RunningPersonality]:
    """
    Decode a DNA code into the personality it describes.

    Surrounding whitespace and letter case are ignored. Returns None for a
    malformed code (wrong prefix, wrong length or a digit outside 1..5).
    """
    if not isinstance(code, str):
        return None
    match = DNA_PATTERN.match(code.strip().upper())
    if not match:
        logger.debug(f"Rejected DNA code {code!r}")
        return None
    digits = [int(d) for d in match.group(1)]
    return build_personality(TraitScores(**dict(zip(TRAIT_ORDER, digits))))


@lru_cache(maxsize=1)
def generate_codex() -> Tuple[CodexGroup, ...]:
    """
    Every possible DNA code grouped by archetype.

    Groups are ordered by size (largest first, then by name) and list their
    codes in ascending order. The result depends only on the classification
    rules, so it is computed once.
    """
    members: Dict[str, List[str]] = {}
    descriptions: Dict[str, str] = {}
    percentiles: Dict[str, List[int]] = {}

    for digits in itertools.product(range(1, 6), repeat=len(TRAIT_ORDER)):
        scores = TraitScores(**dict(zip(TRAIT_ORDER, digits)))
        archetype, percentile = classify_archetype(scores)
        members.setdefault(archetype.name, []).append(DNA_PREFIX + "".join(map(str, digits)))
        descriptions[archetype.name] = archetype.description
        percentiles.setdefault(archetype.name, []).append(percentile)

    groups = [
        CodexGroup(
            type=name,
            description=descriptions[name],
            count=len(codes),
            min_percentile=min(percentiles[name]),
            max_percentile=max(percentiles[name]),
            codes=tuple(sorted(codes)),
        )
        for name, codes in members.items()
    ]
    groups.sort(key=lambda g: (-g.count, g.type))
    logger.debug(f"Generated codex with {len(groups)} archetype groups")
    return tuple(groups)


def _race_strength(scores: TraitScores, weights: Mapping[str, int]) -> int:
    return sum(getattr(scores, trait) * weight for trait, weight in weights.items())


def compare_dna(code1: str, code2: str) -> Optional[BattleResult]:
    """
    Head-to-head comparison of two DNA codes.

    Returns None if either code is malformed. Traits with equal scores are
    left out of the advantages; a race whose weighted strengths are equal is
    predicted as a draw (0).
    """
    first = decode_dna(code1)
    second = decode_dna(code2)
    if first is None or second is None:
        return None

    advantages = []
    for trait in TRAIT_ORDER:
        a = getattr(first.scores, trait)
        b = getattr(second.scores, trait)
        if a != b:
            advantages.append(TraitAdvantage(metric=trait, winner=1 if a > b else 2, diff=abs(a - b)))

    predicted: Dict[str, int] = {}
    for race, weights in RACE_WEIGHTS.items():
        a = _race_strength(first.scores, weights)
        b = _race_strength(second.scores, weights)
        predicted[race] = 0 if a == b else (1 if a > b else 2)

    return BattleResult(
        athlete1=BattleAthlete(code=first.code, type=first.type, scores=first.scores),
        athlete2=BattleAthlete(code=second.code, type=second.type, scores=second.scores),
        advantages=advantages,
        predicted_winner=predicted,
    )


def inner_battle(scores: TraitScores) -> InnerBattle:
    """Strongest against weakest trait, with a challenge for the weakest."""
    values = list(zip(TRAIT_ORDER, scores.as_tuple()))
    strongest = max(values, key=lambda item: item[1])[0]
    weakest = min(values, key=lambda item: item[1])[0]
    return InnerBattle(strongest=strongest, weakest=weakest, challenge=WEEKLY_CHALLENGES[weakest])
