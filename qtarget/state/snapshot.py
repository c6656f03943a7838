"""Per-turn view of both rosters and the friendly -> enemy target map."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from ..constants import NEIGHBOR_DISTANCE_SQ
from ..errors import ContractViolation
from .unit import Side, Unit

if TYPE_CHECKING:
    from ..engine import WorldView


class BattleSnapshot:
    """Immutable rosters plus a mutable target assignment for one turn.

    Rosters keep the engine's ordering for deterministic iteration; lookups go
    through an id index built once at construction. The target map holds at
    most one enemy per friendly id. Targets set here are validated, but
    entries whose referent later dies are not pruned: callers that carry
    assignments across turns go through ``copy_targets_from``.
    """

    def __init__(self, friendly: Iterable[Unit], enemy: Iterable[Unit]) -> None:
        self.friendly: tuple[Unit, ...] = tuple(friendly)
        self.enemy: tuple[Unit, ...] = tuple(enemy)
        self._index: dict[Side, dict[int, Unit]] = {
            Side.FRIENDLY: {u.unit_id: u for u in self.friendly},
            Side.ENEMY: {u.unit_id: u for u in self.enemy},
        }
        self.targets: dict[int, int] = {}

    @classmethod
    def from_world(cls, world: WorldView) -> BattleSnapshot:
        return cls(
            friendly=(Unit.from_view(v) for v in world.units(Side.FRIENDLY)),
            enemy=(Unit.from_view(v) for v in world.units(Side.ENEMY)),
        )

    def roster(self, side: Side) -> tuple[Unit, ...]:
        return self.friendly if side is Side.FRIENDLY else self.enemy

    def unit_by_id(self, side: Side, unit_id: int) -> Unit | None:
        return self._index[side].get(unit_id)

    def side_of(self, unit_id: int) -> Side:
        """Return the roster holding ``unit_id``; unknown ids are a contract violation."""
        if unit_id in self._index[Side.FRIENDLY]:
            return Side.FRIENDLY
        if unit_id in self._index[Side.ENEMY]:
            return Side.ENEMY
        raise ContractViolation(f"unit {unit_id} is in neither roster")

    def require(self, side: Side, unit_id: int) -> Unit:
        unit = self._index[side].get(unit_id)
        if unit is None:
            raise ContractViolation(f"{side.tag}{unit_id} is not in the {side.name.lower()} roster")
        return unit

    # ------------------------------------------------------------------
    # Targets
    # ------------------------------------------------------------------

    def target_of(self, friendly_id: int) -> int | None:
        self.side_of(friendly_id)
        return self.targets.get(friendly_id)

    def set_target(self, friendly_id: int, enemy_id: int) -> None:
        self.require(Side.FRIENDLY, friendly_id)
        self.require(Side.ENEMY, enemy_id)
        self.targets[friendly_id] = enemy_id

    def set_random_target(self, friendly_id: int, rng: np.random.Generator) -> int:
        """Assign a uniformly drawn enemy to ``friendly_id`` and return its id."""
        if not self.enemy:
            raise ContractViolation(f"no enemy units to target for F{friendly_id}")
        enemy_id = self.enemy[int(rng.integers(len(self.enemy)))].unit_id
        self.set_target(friendly_id, enemy_id)
        return enemy_id

    def count_attackers_of(self, enemy_id: int) -> int:
        return sum(1 for eid in self.targets.values() if eid == enemy_id)

    def copy_targets_from(self, previous: BattleSnapshot) -> None:
        """Carry forward assignments whose attacker and target both survived."""
        for fid, eid in previous.targets.items():
            if fid in self._index[Side.FRIENDLY] and eid in self._index[Side.ENEMY]:
                self.targets[fid] = eid

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def count_neighbors(self, side: Side, unit_id: int) -> int:
        """Count units of ``side`` adjacent (orthogonally or diagonally) to ``unit_id``."""
        own_side = self.side_of(unit_id)
        unit = self._index[own_side][unit_id]
        count = 0
        for other in self.roster(side):
            if side is own_side and other.unit_id == unit_id:
                continue
            if unit.squared_distance(other) <= NEIGHBOR_DISTANCE_SQ:
                count += 1
        return count

    def __repr__(self) -> str:
        return (
            f"BattleSnapshot(friendly={[u.unit_id for u in self.friendly]}, "
            f"enemy={[u.unit_id for u in self.enemy]}, targets={self.targets})"
        )
