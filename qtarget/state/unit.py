from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine import UnitView


class Side(IntEnum):
    """Controller index of a unit, as reported by the engine."""

    FRIENDLY = 0
    ENEMY = 1

    @property
    def tag(self) -> str:
        return "F" if self is Side.FRIENDLY else "E"


@dataclass(frozen=True)
class Unit:
    """Per-turn record of one unit. Rebuilt every turn, never mutated."""

    unit_id: int
    hp: int
    position: tuple[float, float]

    @classmethod
    def from_view(cls, view: UnitView) -> Unit:
        return cls(unit_id=int(view.unit_id), hp=int(view.hp), position=(view.x, view.y))

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    def squared_distance(self, other: Unit) -> float:
        dx = self.position[0] - other.position[0]
        dy = self.position[1] - other.position[1]
        return dx * dx + dy * dy
