"""Running personality, DNA codex and battle records."""

from typing import Dict, List, Tuple

from pydantic import Field

from .base import CamelModel, FrozenCamelModel

TRAIT_ORDER: Tuple[str, ...] = ("consistency", "speed", "endurance", "variety", "volume")


class TraitScores(FrozenCamelModel):
    """Five trait scores, each an integer from 1 to 5."""

    consistency: int = Field(..., ge=1, le=5)
    speed: int = Field(..., ge=1, le=5)
    endurance: int = Field(..., ge=1, le=5)
    variety: int = Field(..., ge=1, le=5)
    volume: int = Field(..., ge=1, le=5)

    def as_tuple(self) -> Tuple[int, int, int, int, int]:
        return tuple(getattr(self, trait) for trait in TRAIT_ORDER)

    @property
    def total(self) -> int:
        return sum(self.as_tuple())


class RunningPersonality(CamelModel):
    type: str
    description: str
    percentile: int = Field(..., ge=0, le=100)
    scores: TraitScores
    code: str


class CodexGroup(FrozenCamelModel):
    """All DNA codes classified as one archetype."""

    type: str
    description: str
    count: int
    min_percentile: int
    max_percentile: int
    codes: Tuple[str, ...]


class TraitAdvantage(CamelModel):
    metric: str
    winner: int = Field(..., description="1 or 2")
    diff: int


class BattleAthlete(CamelModel):
    code: str
    type: str
    scores: TraitScores


class BattleResult(CamelModel):
    athlete1: BattleAthlete
    athlete2: BattleAthlete
    advantages: List[TraitAdvantage]
    predicted_winner: Dict[str, int] = Field(..., description="Race label -> 1, 2, or 0 for a draw")


class InnerBattle(CamelModel):
    strongest: str
    weakest: str
    challenge: str
