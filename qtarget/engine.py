"""Protocols for the host simulation engine.

The engine advances the world; the agent only reads these views and returns
attack commands.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .agent import AttackCommand
    from .env.events import DamageEvent, DeathEvent
    from .state.unit import Side


class UnitView(Protocol):
    unit_id: int
    hp: int
    x: float
    y: float


class WorldView(Protocol):
    turn_number: int

    def units(self, side: Side) -> Iterable[UnitView]: ...


class HistoryView(Protocol):
    def damage_events(self, turn: int) -> Iterable[DamageEvent]: ...

    def death_events(self, turn: int) -> Iterable[DeathEvent]: ...


class Engine(Protocol):
    def reset(self) -> tuple[WorldView, HistoryView]: ...

    def step(self, commands: Mapping[int, AttackCommand]) -> tuple[WorldView, HistoryView, bool]:
        """Execute commands and advance one turn; the flag marks the episode end."""
        ...
