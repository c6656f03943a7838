from .events import CombatLog, DamageEvent, DeathEvent
from .rewards import RewardAccountant, RewardWeights, UnitReward

__all__ = ["CombatLog", "DamageEvent", "DeathEvent", "RewardAccountant", "RewardWeights", "UnitReward"]
