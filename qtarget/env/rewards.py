"""Per-unit reward decomposition of a shared combat log.

Design:
- RewardWeights: the constants of the reward scheme
- UnitReward: reward attributed to one ATTACK(friendly, enemy) assignment
- RewardAccountant: stateless computation of rewards from the previous
  turn's assignments and the log of the turn that just elapsed

Every unit is scored independently against the same log. An event only
touches the units it names (as attacker, defender or victim), so a kill is
credited to every friendly unit that had the victim as its intended target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..constants import DEATH_REWARD, KILL_REWARD, STEP_UPKEEP_REWARD
from ..state.unit import Side

if TYPE_CHECKING:
    from ..state.snapshot import BattleSnapshot
    from .events import CombatLog


@dataclass(frozen=True)
class RewardWeights:
    upkeep: float = STEP_UPKEEP_REWARD  # Applied every turn
    damage_dealt: float = 1.0  # Per point dealt as attacker
    damage_taken: float = -1.0  # Per point received as defender
    kill: float = KILL_REWARD  # Intended target died
    death: float = DEATH_REWARD  # The unit itself died


@dataclass(frozen=True)
class UnitReward:
    friendly_id: int
    enemy_id: int
    reward: float
    died: bool


class RewardAccountant:
    def __init__(self, weights: RewardWeights | None = None) -> None:
        self.weights = weights or RewardWeights()

    def reward_for(self, friendly_id: int, enemy_id: int, log: CombatLog) -> UnitReward:
        w = self.weights
        reward = w.upkeep
        died = False

        for event in log.damage:
            if event.attacker_side is Side.FRIENDLY and event.attacker_id == friendly_id:
                reward += w.damage_dealt * event.damage
            if event.defender_side is Side.FRIENDLY and event.defender_id == friendly_id:
                reward += w.damage_taken * event.damage

        for event in log.deaths:
            if event.side is Side.ENEMY and event.unit_id == enemy_id:
                reward += w.kill
            if event.side is Side.FRIENDLY and event.unit_id == friendly_id:
                reward += w.death
                died = True

        return UnitReward(friendly_id=friendly_id, enemy_id=enemy_id, reward=reward, died=died)

    def rewards_for(self, snapshot: BattleSnapshot, log: CombatLog) -> list[UnitReward]:
        """Score every assigned friendly unit of ``snapshot``, in roster order."""
        out: list[UnitReward] = []
        for unit in snapshot.friendly:
            enemy_id = snapshot.targets.get(unit.unit_id)
            if enemy_id is None:
                continue
            out.append(self.reward_for(unit.unit_id, enemy_id, log))
        return out
