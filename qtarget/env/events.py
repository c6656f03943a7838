"""Combat log records reported by the engine for one elapsed turn."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..state.unit import Side

if TYPE_CHECKING:
    from ..engine import HistoryView


@dataclass(frozen=True)
class DamageEvent:
    attacker_id: int
    defender_id: int
    attacker_side: Side
    defender_side: Side
    damage: int

    def describe(self) -> str:
        return f"{self.attacker_side.tag}{self.attacker_id} atk {self.defender_side.tag}{self.defender_id} for {self.damage}"


@dataclass(frozen=True)
class DeathEvent:
    unit_id: int
    side: Side

    def describe(self) -> str:
        return f"{self.side.tag}{self.unit_id} died"


@dataclass(frozen=True)
class CombatLog:
    """All damage and death events of a single turn."""

    turn: int
    damage: tuple[DamageEvent, ...] = ()
    deaths: tuple[DeathEvent, ...] = ()

    @classmethod
    def from_history(cls, history: HistoryView, turn: int) -> CombatLog:
        return cls(
            turn=turn,
            damage=tuple(history.damage_events(turn)),
            deaths=tuple(history.death_events(turn)),
        )

    @classmethod
    def of(cls, turn: int, events: Iterable[DamageEvent | DeathEvent]) -> CombatLog:
        damage: list[DamageEvent] = []
        deaths: list[DeathEvent] = []
        for event in events:
            if isinstance(event, DamageEvent):
                damage.append(event)
            else:
                deaths.append(event)
        return cls(turn=turn, damage=tuple(damage), deaths=tuple(deaths))

    @property
    def is_trigger(self) -> bool:
        """A death, or a friendly unit taking damage, forces target reassignment."""
        return bool(self.deaths) or any(d.defender_side is Side.FRIENDLY for d in self.damage)

    def died(self, unit_id: int, side: Side) -> bool:
        return any(d.unit_id == unit_id and d.side is side for d in self.deaths)

    def describe(self) -> list[str]:
        return [e.describe() for e in self.damage] + [e.describe() for e in self.deaths]
