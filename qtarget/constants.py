from __future__ import annotations

# ==============================================================================
# Learning
# ==============================================================================

DISCOUNT_FACTOR = 0.9
LEARNING_RATE = 0.0001
EPSILON = 0.02

# Fixed seed so target choices and weight trajectories reproduce bit-for-bit.
DEFAULT_SEED = 12345

# Initial weights are drawn uniformly from [WEIGHT_INIT_LOW, WEIGHT_INIT_HIGH).
WEIGHT_INIT_LOW = -1.0
WEIGHT_INIT_HIGH = 1.0

# ==============================================================================
# Episode Schedule
# ==============================================================================

# 10 training episodes, then 5 frozen-weight evaluation episodes, repeated.
TRAINING_BLOCK_EPISODES = 10
EVALUATION_BLOCK_EPISODES = 5

# ==============================================================================
# Rewards
# ==============================================================================

STEP_UPKEEP_REWARD = -0.1
KILL_REWARD = 100.0
DEATH_REWARD = -100.0

# ==============================================================================
# Geometry
# ==============================================================================

# Squared distance of a diagonal step on a unit grid: anything within it is adjacent.
NEIGHBOR_DISTANCE_SQ = 2
