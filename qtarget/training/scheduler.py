"""Alternating training / frozen-weight evaluation blocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..config import ScheduleConfig

logger = logging.getLogger(__name__)


class ScheduleMode(Enum):
    TRAINING = "training"
    EVALUATING = "evaluating"


@dataclass
class EpisodeState:
    """Scheduler state for the lifetime of the process."""

    episodes_completed: int = 0
    evaluation_episodes_remaining: int = 0
    evaluation_reward_accumulator: float = 0.0
    current_episode_reward: float = 0.0
    weights_frozen: bool = False


@dataclass
class EvaluationReport:
    """Results of one evaluation block."""

    episodes_completed: int  # Training episodes completed before the block
    average_reward: float
    win_rate: float
    mean_episode_length: float
    episodes: int


class EpisodeScheduler:
    """State machine over TRAINING and EVALUATING.

    TRAINING: each finished episode counts towards ``episodes_completed``;
    every ``training_block`` episodes the weights freeze and an evaluation
    block of ``evaluation_block`` episodes starts. EVALUATING: episode rewards
    accumulate; when the block closes the weights unfreeze, the average is
    reported, and the run is finished once the episode budget is reached.
    """

    def __init__(self, max_episodes: int, config: ScheduleConfig | None = None) -> None:
        if max_episodes < 1:
            raise ValueError(f"max_episodes must be positive, got {max_episodes}")
        self.max_episodes = max_episodes
        self.config = config or ScheduleConfig()
        self.state = EpisodeState()
        self.mode = ScheduleMode.TRAINING
        self.finished = False
        self._eval_outcomes: list[str] = []
        self._eval_lengths: list[int] = []

    @property
    def weights_frozen(self) -> bool:
        return self.state.weights_frozen

    def begin_episode(self) -> None:
        self.state.current_episode_reward = 0.0

    def add_reward(self, reward: float) -> None:
        self.state.current_episode_reward += reward

    def on_episode_end(self, winner: str = "draw", turns: int = 0) -> EvaluationReport | None:
        """Advance the state machine; returns a report when an evaluation block closes."""
        if self.finished:
            raise RuntimeError(f"episode budget of {self.max_episodes} already exhausted")

        st = self.state
        if self.mode is ScheduleMode.TRAINING:
            st.episodes_completed += 1
            logger.debug(f"training episode {st.episodes_completed} reward={st.current_episode_reward:.2f}")
            if st.episodes_completed % self.config.training_block == 0:
                self._start_evaluation()
            return None

        st.evaluation_reward_accumulator += st.current_episode_reward
        st.evaluation_episodes_remaining -= 1
        self._eval_outcomes.append(winner)
        self._eval_lengths.append(turns)
        if st.evaluation_episodes_remaining > 0:
            return None
        return self._finish_evaluation()

    def _start_evaluation(self) -> None:
        st = self.state
        self.mode = ScheduleMode.EVALUATING
        st.weights_frozen = True
        st.evaluation_reward_accumulator = 0.0
        st.evaluation_episodes_remaining = self.config.evaluation_block
        self._eval_outcomes = []
        self._eval_lengths = []
        logger.info(f"episode {st.episodes_completed}: freezing weights for {self.config.evaluation_block} evaluation episodes")

    def _finish_evaluation(self) -> EvaluationReport:
        st = self.state
        self.mode = ScheduleMode.TRAINING
        st.weights_frozen = False
        episodes = self.config.evaluation_block
        report = EvaluationReport(
            episodes_completed=st.episodes_completed,
            average_reward=st.evaluation_reward_accumulator / episodes,
            win_rate=float(sum(1 for w in self._eval_outcomes if w == "friendly") / episodes),
            mean_episode_length=float(np.mean(self._eval_lengths)) if self._eval_lengths else 0.0,
            episodes=episodes,
        )
        logger.info(
            f"evaluation after {report.episodes_completed} episodes: "
            f"avg_reward={report.average_reward:.2f} win_rate={report.win_rate:.2f} "
            f"mean_len={report.mean_episode_length:.1f}"
        )
        if st.episodes_completed >= self.max_episodes:
            self.finished = True
            logger.info(f"episode budget of {self.max_episodes} reached")
        return report
