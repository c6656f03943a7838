from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from ..constants import EPSILON
from ..errors import ContractViolation
from ..rl.features import FeatureExtractor
from ..rl.value import LinearValueFunction

if TYPE_CHECKING:
    from ..state.snapshot import BattleSnapshot

logger = logging.getLogger(__name__)


class EpsilonGreedyPolicy:
    """
    Epsilon-greedy target selection over the linear value function.

    Behavior:
    - With probability epsilon: uniformly random enemy.
    - Otherwise: the enemy with the strictly greatest Q; ties keep the first
      maximum in enemy roster order.
    - One ``rng.random()`` draw per decision, so the sequence of choices is
      reproducible for a fixed seed.
    """

    def __init__(
        self,
        epsilon: float = EPSILON,
        extractor: FeatureExtractor | None = None,
        value_fn: LinearValueFunction | None = None,
        verbose: bool = False,
    ):
        self.epsilon = float(epsilon)
        self.extractor = extractor or FeatureExtractor()
        self.value_fn = value_fn or LinearValueFunction()
        self.verbose = verbose

    def q_value(self, snapshot: BattleSnapshot, friendly_id: int, enemy_id: int, weights: np.ndarray) -> float:
        return self.value_fn.evaluate(weights, self.extractor.features(snapshot, friendly_id, enemy_id))

    def greedy_target(self, snapshot: BattleSnapshot, friendly_id: int, weights: np.ndarray) -> tuple[int, float]:
        """Return ``(enemy_id, q)`` of the best enemy for ``friendly_id``."""
        if not snapshot.enemy:
            raise ContractViolation(f"could not find target for F{friendly_id}: enemy roster is empty")

        q_max = float("-inf")
        best: int | None = None
        for enemy in snapshot.enemy:
            q = self.q_value(snapshot, friendly_id, enemy.unit_id, weights)
            if q > q_max:
                q_max = q
                best = enemy.unit_id
        if best is None:
            # Only reachable when every Q is NaN or -inf.
            raise ContractViolation(f"could not find target for F{friendly_id}: no finite Q value")
        return best, q_max

    def choose_target(
        self, snapshot: BattleSnapshot, friendly_id: int, weights: np.ndarray, rng: np.random.Generator
    ) -> int:
        """Pick and assign a target for ``friendly_id`` in ``snapshot``."""
        if not snapshot.enemy:
            raise ContractViolation(f"could not find target for F{friendly_id}: enemy roster is empty")

        if rng.random() < self.epsilon:
            enemy_id = snapshot.set_random_target(friendly_id, rng)
            if self.verbose:
                logger.info(f"Set random target: F{friendly_id} -> E{enemy_id}")
            return enemy_id

        enemy_id, _ = self.greedy_target(snapshot, friendly_id, weights)
        snapshot.set_target(friendly_id, enemy_id)
        if self.verbose:
            logger.info(f"Set target: F{friendly_id} -> E{enemy_id}")
        return enemy_id

    def assign_targets(self, snapshot: BattleSnapshot, weights: np.ndarray, rng: np.random.Generator) -> dict[int, int]:
        """Choose a target for every friendly unit, in roster order.

        Earlier assignments are visible to later units through the
        attackers-of-enemy feature.
        """
        for unit in snapshot.friendly:
            self.choose_target(snapshot, unit.unit_id, weights, rng)
        return dict(snapshot.targets)
