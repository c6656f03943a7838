"""Q-learning controller that assigns attack targets to friendly units."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .agents.policy import EpsilonGreedyPolicy
from .cli import parse_agent_args
from .config import AgentConfig, configure_logging
from .env.events import CombatLog
from .env.rewards import RewardAccountant
from .state.snapshot import BattleSnapshot
from .training.learner import TDLearner
from .training.scheduler import EpisodeScheduler, EvaluationReport
from .training.stats_collector import CombatStatsCollector, EpisodeRecord

if TYPE_CHECKING:
    from .engine import HistoryView, WorldView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttackCommand:
    unit_id: int
    target_id: int


class QLearningAgent:
    """Turn-driven controller owning the weights, generator and schedule.

    The engine calls ``initial_step`` on the first turn of an episode,
    ``middle_step`` on every later turn and ``terminal_step`` once the
    episode is over. Each middle step first rewards the previous turn's
    assignments and updates the weights (unless frozen), then either
    reassigns every unit (on a triggering event) or carries the previous
    targets forward without issuing new commands.
    """

    def __init__(self, config: AgentConfig, rng: np.random.Generator | None = None):
        self.config = config
        self.verbose = config.verbose
        self.rng = rng if rng is not None else np.random.default_rng(config.learner.seed)
        self.learner = TDLearner(config.learner, self.rng)
        self.policy = EpsilonGreedyPolicy(epsilon=config.learner.epsilon, verbose=config.verbose)
        self.accountant = RewardAccountant()
        self.scheduler = EpisodeScheduler(config.max_episodes, config.schedule)
        self.stats = CombatStatsCollector()
        self.last_snapshot: BattleSnapshot | None = None
        self.reports: list[EvaluationReport] = []
        logger.info(f"Q-learning agent initialized for {config.max_episodes} episodes")

    @classmethod
    def from_args(cls, argv: Sequence[str]) -> QLearningAgent:
        """Process entry point for hosts that pass raw startup arguments."""
        configure_logging()
        return cls(parse_agent_args(argv))

    @property
    def finished(self) -> bool:
        return self.scheduler.finished

    # ------------------------------------------------------------------
    # Engine callbacks
    # ------------------------------------------------------------------

    def initial_step(self, world: WorldView, history: HistoryView) -> dict[int, AttackCommand]:
        self.scheduler.begin_episode()
        snapshot = BattleSnapshot.from_world(world)
        self.policy.assign_targets(snapshot, self.learner.weights, self.rng)
        self.last_snapshot = snapshot
        return self._commands(snapshot)

    def middle_step(self, world: WorldView, history: HistoryView) -> dict[int, AttackCommand]:
        snapshot = BattleSnapshot.from_world(world)
        log = CombatLog.from_history(history, world.turn_number - 1)
        if self.verbose:
            logger.info(f"Step Number {world.turn_number}")
        self._learn(snapshot, log)

        if log.is_trigger and snapshot.enemy:
            self.policy.assign_targets(snapshot, self.learner.weights, self.rng)
            commands = self._commands(snapshot)
        else:
            snapshot.copy_targets_from(self._previous())
            commands = {}

        self.last_snapshot = snapshot
        return commands

    def terminal_step(self, world: WorldView, history: HistoryView) -> EvaluationReport | None:
        snapshot = BattleSnapshot.from_world(world)
        log = CombatLog.from_history(history, world.turn_number - 1)
        self._learn(snapshot, log)

        reward = self.scheduler.state.current_episode_reward
        record = self.stats.on_episode_end(
            friendly_alive=len(snapshot.friendly), enemy_alive=len(snapshot.enemy), reward=reward
        )
        self._log_episode(record)
        self.last_snapshot = None

        report = self.scheduler.on_episode_end(winner=record.winner, turns=record.turns)
        if report is not None:
            self.reports.append(report)
        return report

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _previous(self) -> BattleSnapshot:
        if self.last_snapshot is None:
            raise RuntimeError("middle_step/terminal_step called before initial_step")
        return self.last_snapshot

    def _learn(self, snapshot: BattleSnapshot, log: CombatLog) -> None:
        previous = self._previous()
        if self.verbose:
            for line in log.describe():
                logger.info(line)
        self.stats.on_turn(log)

        rewards = self.accountant.rewards_for(previous, log)
        self.scheduler.add_reward(sum(r.reward for r in rewards))
        if self.scheduler.weights_frozen:
            return
        self.learner.update(previous, snapshot, rewards, self.policy)

    @staticmethod
    def _commands(snapshot: BattleSnapshot) -> dict[int, AttackCommand]:
        return {fid: AttackCommand(unit_id=fid, target_id=eid) for fid, eid in snapshot.targets.items()}

    def _log_episode(self, record: EpisodeRecord) -> None:
        mode = "eval" if self.scheduler.weights_frozen else "train"
        logger.info(
            f"[{mode}] episode {record.episode}: winner={record.winner} turns={record.turns} "
            f"reward={record.reward:.2f} kills={record.friendly['kills']} deaths={record.friendly['deaths']}"
        )
