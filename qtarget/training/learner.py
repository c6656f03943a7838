"""Temporal-difference learner for the linear action-value function.

For an assignment ATTACK(f, e) chosen on the previous turn:

    q_previous = w . phi(s_prev, f, e)
    delta      = r + gamma * max_e' Q(s_curr, f, e') - q_previous    (f alive)
    delta      = r - q_previous                                      (f died)
    w         += alpha * delta * phi(s_prev, f, e)

Units are processed one after another on the same weight vector, then the
weights are rescaled to sum to one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ..constants import WEIGHT_INIT_HIGH, WEIGHT_INIT_LOW
from ..rl.value import LinearValueFunction
from ..state.unit import Side

if TYPE_CHECKING:
    from ..agents.policy import EpsilonGreedyPolicy
    from ..config import LearnerConfig
    from ..env.rewards import UnitReward
    from ..state.snapshot import BattleSnapshot

logger = logging.getLogger(__name__)


def td_error(reward: float, q_previous: float, q_next: float | None, discount: float) -> float:
    """One-step TD error; ``q_next=None`` marks a terminal transition."""
    if q_next is None:
        return reward - q_previous
    return reward + discount * q_next - q_previous


def td_step(weights: np.ndarray, features: np.ndarray, delta: float, learning_rate: float) -> np.ndarray:
    """Gradient step of the linear approximator (no normalization)."""
    return weights + learning_rate * delta * features


@dataclass(frozen=True)
class TDUpdate:
    friendly_id: int
    enemy_id: int
    reward: float
    q_previous: float
    q_next: float | None
    delta: float


class TDLearner:
    """Owns the weight vector and applies TD updates to it.

    Usage:
        learner = TDLearner(config, rng)
        rewards = accountant.rewards_for(previous, log)
        updates = learner.update(previous, current, rewards, policy)

    Attributes:
        config: LearnerConfig hyperparameters
        value_fn: Linear value function used for estimates and normalization
    """

    def __init__(self, config: LearnerConfig, rng: np.random.Generator):
        self.config = config
        self.value_fn = LinearValueFunction()
        self._weights = rng.uniform(WEIGHT_INIT_LOW, WEIGHT_INIT_HIGH, size=config.num_features)

    @property
    def weights(self) -> np.ndarray:
        """Copy of the current weights; the learner's own array is never handed out."""
        return self._weights.copy()

    def set_weights(self, weights: np.ndarray) -> None:
        weights = np.asarray(weights, dtype=np.float64)
        if weights.shape != (self.config.num_features,):
            raise ValueError(f"expected {self.config.num_features} weights, got shape {weights.shape}")
        self._weights = weights.copy()

    def update(
        self,
        previous: BattleSnapshot,
        current: BattleSnapshot,
        rewards: list[UnitReward],
        policy: EpsilonGreedyPolicy,
    ) -> list[TDUpdate]:
        """Apply one turn's updates and normalize.

        Features always come from ``previous`` and its (possibly copied
        forward) target for each unit.
        """
        if not rewards:
            return []

        weights = self._weights.copy()
        applied: list[TDUpdate] = []
        for unit_reward in rewards:
            fid, eid = unit_reward.friendly_id, unit_reward.enemy_id
            phi = policy.extractor.features(previous, fid, eid)
            q_previous = self.value_fn.evaluate(weights, phi)

            terminal = (
                unit_reward.died
                or current.unit_by_id(Side.FRIENDLY, fid) is None
                or not current.enemy
            )
            q_next = None if terminal else policy.greedy_target(current, fid, weights)[1]

            delta = td_error(unit_reward.reward, q_previous, q_next, self.config.discount)
            weights = td_step(weights, phi, delta, self.config.learning_rate)
            applied.append(
                TDUpdate(
                    friendly_id=fid,
                    enemy_id=eid,
                    reward=unit_reward.reward,
                    q_previous=q_previous,
                    q_next=q_next,
                    delta=delta,
                )
            )

        self._weights = self.value_fn.normalize(weights)
        logger.debug(f"TD update over {len(applied)} units, weights={self._weights.tolist()}")
        return applied
