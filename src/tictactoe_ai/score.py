"""
Win/loss/draw counters, framed from the primary (human) player's perspective.
"""
from typing import Tuple

from .errors import ConstructionError


class Score:
    __slots__ = ('_wins', '_losses', '_draws')

    def __init__(self, wins: int = 0, losses: int = 0, draws: int = 0):
        for v in (wins, losses, draws):
            if isinstance(v, bool) or not isinstance(v, int):
                raise ConstructionError(f"Score information must be an integer: {v!r}")
            if v < 0:
                raise ConstructionError("Score information cannot be less than 0")
        self._wins = wins
        self._losses = losses
        self._draws = draws

    @property
    def wins(self) -> int:
        return self._wins

    @property
    def losses(self) -> int:
        return self._losses

    @property
    def draws(self) -> int:
        return self._draws

    @property
    def total(self) -> int:
        return self._wins + self._losses + self._draws

    def record_win(self) -> None:
        self._wins += 1

    def record_loss(self) -> None:
        self._losses += 1

    def record_draw(self) -> None:
        self._draws += 1

    def reset(self) -> None:
        self._wins = self._losses = self._draws = 0

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self._wins, self._losses, self._draws)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Score):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __repr__(self) -> str:
        return f"Score(wins={self._wins}, losses={self._losses}, draws={self._draws})"
