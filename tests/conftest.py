from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field

import numpy as np
import pytest

from qtarget.env.events import DamageEvent, DeathEvent
from qtarget.state import BattleSnapshot, Side, Unit


@dataclass
class FakeUnit:
    unit_id: int
    hp: int
    x: float
    y: float


@dataclass
class FakeWorld:
    turn_number: int
    friendly: list[FakeUnit]
    enemy: list[FakeUnit]

    def units(self, side: Side) -> list[FakeUnit]:
        return list(self.friendly if side is Side.FRIENDLY else self.enemy)


@dataclass
class FakeHistory:
    damage: dict[int, list[DamageEvent]] = field(default_factory=lambda: defaultdict(list))
    deaths: dict[int, list[DeathEvent]] = field(default_factory=lambda: defaultdict(list))

    def damage_events(self, turn: int) -> list[DamageEvent]:
        return list(self.damage.get(turn, []))

    def death_events(self, turn: int) -> list[DeathEvent]:
        return list(self.deaths.get(turn, []))


class SkirmishEngine:
    """Tiny deterministic turn-based fight used to drive the agent in tests.

    Friendly units hit their standing target for ``friendly_damage``; enemy
    ``i`` hits friendly ``i % len(friendly)`` for ``enemy_damage``. Damage is
    simultaneous, dead units are removed at the end of the turn.
    """

    def __init__(
        self,
        friendly_hp: int = 10,
        enemy_hp: int = 12,
        friendly_damage: int = 3,
        enemy_damage: int = 1,
        max_turns: int = 30,
    ) -> None:
        self.friendly_hp = friendly_hp
        self.enemy_hp = enemy_hp
        self.friendly_damage = friendly_damage
        self.enemy_damage = enemy_damage
        self.max_turns = max_turns
        self.episodes = 0

    def reset(self) -> tuple[FakeWorld, FakeHistory]:
        self.episodes += 1
        self.turn = 0
        self.friendly = [FakeUnit(1, self.friendly_hp, 0, 0), FakeUnit(2, self.friendly_hp, 1, 0)]
        self.enemy = [FakeUnit(9, self.enemy_hp, 0, 1), FakeUnit(10, self.enemy_hp, 1, 1)]
        self.orders: dict[int, int] = {}
        self.history = FakeHistory()
        return self._world(), self.history

    def _world(self) -> FakeWorld:
        return FakeWorld(
            turn_number=self.turn,
            friendly=[FakeUnit(u.unit_id, u.hp, u.x, u.y) for u in self.friendly],
            enemy=[FakeUnit(u.unit_id, u.hp, u.x, u.y) for u in self.enemy],
        )

    def step(self, commands: Mapping) -> tuple[FakeWorld, FakeHistory, bool]:
        for fid, cmd in commands.items():
            self.orders[fid] = cmd.target_id

        enemies = {u.unit_id: u for u in self.enemy}
        hits: list[DamageEvent] = []
        for f in self.friendly:
            target = enemies.get(self.orders.get(f.unit_id, -1))
            if target is not None:
                hits.append(DamageEvent(f.unit_id, target.unit_id, Side.FRIENDLY, Side.ENEMY, self.friendly_damage))
        for i, e in enumerate(self.enemy):
            if self.friendly:
                victim = self.friendly[i % len(self.friendly)]
                hits.append(DamageEvent(e.unit_id, victim.unit_id, Side.ENEMY, Side.FRIENDLY, self.enemy_damage))

        units = {("f", u.unit_id): u for u in self.friendly} | {("e", u.unit_id): u for u in self.enemy}
        for hit in hits:
            key = ("f" if hit.defender_side is Side.FRIENDLY else "e", hit.defender_id)
            units[key].hp -= hit.damage
        self.history.damage[self.turn].extend(hits)

        for side, roster in ((Side.FRIENDLY, self.friendly), (Side.ENEMY, self.enemy)):
            for u in roster:
                if u.hp <= 0:
                    self.history.deaths[self.turn].append(DeathEvent(u.unit_id, side))
        self.friendly = [u for u in self.friendly if u.hp > 0]
        self.enemy = [u for u in self.enemy if u.hp > 0]

        self.turn += 1
        done = not self.friendly or not self.enemy or self.turn >= self.max_turns
        return self._world(), self.history, done


@pytest.fixture
def make_snapshot():
    def _make(friendly: list[tuple], enemy: list[tuple]) -> BattleSnapshot:
        """Build a snapshot from ``(id, hp, x, y)`` tuples."""
        return BattleSnapshot(
            friendly=[Unit(uid, hp, (x, y)) for uid, hp, x, y in friendly],
            enemy=[Unit(uid, hp, (x, y)) for uid, hp, x, y in enemy],
        )

    return _make


@pytest.fixture
def uniform_weights() -> np.ndarray:
    return np.full(9, 1.0 / 9.0)


@pytest.fixture
def skirmish() -> SkirmishEngine:
    return SkirmishEngine()


@pytest.fixture
def fake_history() -> FakeHistory:
    return FakeHistory()


@pytest.fixture
def make_world():
    def _make(turn: int, friendly: list[tuple], enemy: list[tuple]) -> FakeWorld:
        """Build an engine world view from ``(id, hp, x, y)`` tuples."""
        return FakeWorld(
            turn_number=turn,
            friendly=[FakeUnit(*t) for t in friendly],
            enemy=[FakeUnit(*t) for t in enemy],
        )

    return _make


@pytest.fixture
def skirmish_factory():
    return SkirmishEngine
