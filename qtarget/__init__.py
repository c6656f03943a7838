from .agent import AttackCommand, QLearningAgent
from .config import AgentConfig, LearnerConfig, ScheduleConfig
from .errors import ConfigurationError, ContractViolation, NumericalInstabilityError
from .state import BattleSnapshot, Side, Unit

__all__ = [
    "AgentConfig",
    "AttackCommand",
    "BattleSnapshot",
    "ConfigurationError",
    "ContractViolation",
    "LearnerConfig",
    "NumericalInstabilityError",
    "QLearningAgent",
    "ScheduleConfig",
    "Side",
    "Unit",
]
