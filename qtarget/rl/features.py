"""Hand-engineered features of an ATTACK(friendly, enemy) action."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np

from ..state.unit import Side

if TYPE_CHECKING:
    from ..state.snapshot import BattleSnapshot


class FeatureIndex(IntEnum):
    BIAS = 0
    FRIENDLY_HP = 1
    ENEMY_HP = 2
    DISTANCE_SQ = 3
    ATTACKERS_OF_ENEMY = 4
    FRIENDLY_NEAR_FRIENDLY = 5  # Friendly neighbors of the attacker
    ENEMY_NEAR_FRIENDLY = 6  # Enemy neighbors of the attacker
    FRIENDLY_NEAR_ENEMY = 7  # Friendly neighbors of the target
    ENEMY_NEAR_ENEMY = 8  # Enemy neighbors of the target


NUM_FEATURES = len(FeatureIndex)


class FeatureExtractor:
    """Stateless: the vector depends only on (snapshot, friendly_id, enemy_id)."""

    num_features = NUM_FEATURES

    def features(self, snapshot: BattleSnapshot, friendly_id: int, enemy_id: int) -> np.ndarray:
        f = snapshot.require(Side.FRIENDLY, friendly_id)
        e = snapshot.require(Side.ENEMY, enemy_id)

        out = np.empty(NUM_FEATURES, dtype=np.float64)
        out[FeatureIndex.BIAS] = 1.0
        out[FeatureIndex.FRIENDLY_HP] = f.hp
        out[FeatureIndex.ENEMY_HP] = e.hp
        out[FeatureIndex.DISTANCE_SQ] = f.squared_distance(e)
        out[FeatureIndex.ATTACKERS_OF_ENEMY] = snapshot.count_attackers_of(enemy_id)
        out[FeatureIndex.FRIENDLY_NEAR_FRIENDLY] = snapshot.count_neighbors(Side.FRIENDLY, friendly_id)
        out[FeatureIndex.ENEMY_NEAR_FRIENDLY] = snapshot.count_neighbors(Side.ENEMY, friendly_id)
        out[FeatureIndex.FRIENDLY_NEAR_ENEMY] = snapshot.count_neighbors(Side.FRIENDLY, enemy_id)
        out[FeatureIndex.ENEMY_NEAR_ENEMY] = snapshot.count_neighbors(Side.ENEMY, enemy_id)
        return out
