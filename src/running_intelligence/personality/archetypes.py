"""
Archetype classification.

The five trait scores select one archetype through an ordered rule table:
rules are evaluated top to bottom and the first match wins. Balanced
profiles come first, then pairs of clearly leading traits; anything else is
named after its single top trait. The final rule matches every score vector,
so classification is total.
"""

import math
from dataclasses import dataclass
from typing import Callable, List, Tuple

from ..models.personality import TRAIT_ORDER, TraitScores


@dataclass(frozen=True)
class Archetype:
    name: str
    description: str


@dataclass(frozen=True)
class ScoreProfile:
    """Derived view of a score vector that the rules test against."""
    scores: TraitScores
    ranked: Tuple[str, ...]  # traits by score, highest first; ties keep TRAIT_ORDER
    total: int
    spread: int

    @classmethod
    def of(cls, scores: TraitScores) -> "ScoreProfile":
        values = dict(zip(TRAIT_ORDER, scores.as_tuple()))
        ranked = tuple(sorted(TRAIT_ORDER, key=lambda t: -values[t]))
        return cls(
            scores=scores,
            ranked=ranked,
            total=sum(values.values()),
            spread=max(values.values()) - min(values.values()),
        )

    @property
    def average(self) -> float:
        return self.total / len(TRAIT_ORDER)

    @property
    def has_clear_pair(self) -> bool:
        """The second-ranked trait scores strictly above the third."""
        second, third = self.ranked[1:3]
        return getattr(self.scores, second) > getattr(self.scores, third)

    def top_pair_is(self, a: str, b: str) -> bool:
        return self.has_clear_pair and set(self.ranked[:2]) == {a, b}


COMPLETE_RUNNER = Archetype(
    "The Complete Runner",
    "Balanced across every dimension: speed, endurance, consistency, variety and volume. A true all-rounder.",
)
RISING_RUNNER = Archetype(
    "The Rising Runner",
    "Your foundation is solid and balanced. With more training, all dimensions will grow together.",
)
# A history without runs has no scores to classify; not part of the codex.
BEGINNER = Archetype("The Beginner", "Start running to discover your style!")
BEGINNER_PERCENTILE = 50

PAIR_ARCHETYPES: List[Tuple[Tuple[str, str], Archetype]] = [
    (("speed", "endurance"), Archetype(
        "The Iron Racer", "Fast and long, a rare combination. You eat race PRs for breakfast.")),
    (("consistency", "volume"), Archetype(
        "The Mileage Machine",
        "Relentless weekly volume with clock-like consistency. You build fitness through sheer dedication.")),
    (("speed", "consistency"), Archetype(
        "The Steady Sprinter", "Consistently fast. Your discipline keeps your speed sharp week after week.")),
    (("endurance", "volume"), Archetype(
        "The Ultra Mind", "Born for distance. High mileage and long runs are your comfort zone.")),
    (("variety", "speed"), Archetype(
        "The Trail Blazer", "Fast on different terrain. You seek new routes and conquer them at pace.")),
    (("variety", "endurance"), Archetype(
        "The Wandering Wolf", "You explore far and wide on long runs. Every new path is an adventure.")),
    (("consistency", "endurance"), Archetype(
        "The Marathon Monk", "Disciplined long-distance training, week in, week out. Built for marathon glory.")),
    (("variety", "volume"), Archetype(
        "The Global Runner", "Massive mileage across diverse routes and locations. The world is your running track.")),
    (("variety", "consistency"), Archetype(
        "The Routine Explorer",
        "Consistently adventurous. You rarely run the same route twice, but you never miss a week.")),
]

SINGLE_ARCHETYPES = {
    "consistency": Archetype(
        "The Consistent Cruiser", "You show up week after week. Consistency is the number one predictor of running success."),
    "speed": Archetype(
        "The Speed Demon", "Your pace is impressive. You push the limits every time you lace up."),
    "endurance": Archetype(
        "The Distance Seeker", "You love going long. Marathons and beyond are your playground."),
    "variety": Archetype(
        "The Explorer", "Different cities, different routes, different distances. Every run is an adventure."),
    "volume": Archetype(
        "The High Mileage Runner", "You stack up serious weekly kilometers. Your legs are built for the long haul."),
}

Rule = Tuple[Callable[[ScoreProfile], bool], Callable[[ScoreProfile], Archetype]]


def _pair_rule(traits: Tuple[str, str], archetype: Archetype) -> Rule:
    return (lambda p: p.top_pair_is(*traits), lambda p: archetype)


ARCHETYPE_RULES: List[Rule] = [
    (lambda p: p.spread <= 1 and p.average >= 3, lambda p: COMPLETE_RUNNER),
    (lambda p: p.spread <= 1, lambda p: RISING_RUNNER),
    *[_pair_rule(traits, archetype) for traits, archetype in PAIR_ARCHETYPES],
    # Catch-all: the single dominant trait
    (lambda p: True, lambda p: SINGLE_ARCHETYPES[p.ranked[0]]),
]

ALL_ARCHETYPES: Tuple[Archetype, ...] = (
    COMPLETE_RUNNER,
    RISING_RUNNER,
    *[archetype for _, archetype in PAIR_ARCHETYPES],
    *SINGLE_ARCHETYPES.values(),
)


def score_percentile(total: int) -> int:
    """
    Share of a fixed reference population scoring below ``total``.

    The reference is a logistic curve centred on a total of 12 (of 25) with
    scale 3, clamped to 1..99, so the value is stable without any user table.
    """
    value = 100 - 100 / (1 + math.exp((total - 12) / 3))
    return max(1, min(99, int(round(value))))


def classify_archetype(scores: TraitScores) -> Tuple[Archetype, int]:
    """Archetype and percentile for a score vector."""
    profile = ScoreProfile.of(scores)
    archetype = next(result(profile) for matches, result in ARCHETYPE_RULES if matches(profile))
    return archetype, score_percentile(profile.total)
