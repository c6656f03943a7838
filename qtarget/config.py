from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_SEED,
    DISCOUNT_FACTOR,
    EPSILON,
    EVALUATION_BLOCK_EPISODES,
    LEARNING_RATE,
    TRAINING_BLOCK_EPISODES,
)
from .rl.features import NUM_FEATURES


@dataclass(frozen=True)
class LearnerConfig:
    """Hyperparameters of the linear Q-learner.

    Attributes:
        discount: Discount factor applied to the bootstrapped next-state value
        learning_rate: Step size of the TD weight update
        epsilon: Probability of picking a uniformly random target
        num_features: Length of the feature and weight vectors
        seed: Seed of the agent's random generator
    """

    discount: float = DISCOUNT_FACTOR
    learning_rate: float = LEARNING_RATE
    epsilon: float = EPSILON
    num_features: int = NUM_FEATURES
    seed: int = DEFAULT_SEED


@dataclass(frozen=True)
class ScheduleConfig:
    training_block: int = TRAINING_BLOCK_EPISODES
    evaluation_block: int = EVALUATION_BLOCK_EPISODES


@dataclass(frozen=True)
class AgentConfig:
    max_episodes: int
    verbose: bool = False
    learner: LearnerConfig = field(default_factory=LearnerConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)


class RuntimeSettings(BaseSettings):
    """Process settings, overridable via environment variables."""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(message)s"
    LOG_DATEFMT: str = "%H:%M:%S"

    model_config = SettingsConfigDict(env_prefix="QTARGET_", env_file=".env", extra="ignore")


def configure_logging(settings: RuntimeSettings | None = None) -> None:
    """Install the root handler once per process."""
    settings = settings or RuntimeSettings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATEFMT,
    )
