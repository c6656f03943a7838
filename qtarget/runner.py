"""Host loop driving a QLearningAgent against an Engine until the budget is spent."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .agent import QLearningAgent
    from .engine import Engine
    from .training.scheduler import EvaluationReport

logger = logging.getLogger(__name__)


def run_episode(engine: Engine, agent: QLearningAgent) -> EvaluationReport | None:
    world, history = engine.reset()
    commands = agent.initial_step(world, history)
    while True:
        world, history, done = engine.step(commands)
        if done:
            return agent.terminal_step(world, history)
        commands = agent.middle_step(world, history)


def run_episodes(engine: Engine, agent: QLearningAgent, max_episodes: int | None = None) -> list[EvaluationReport]:
    """Play episodes until the agent's scheduler finishes.

    Args:
        engine: Host simulation
        agent: Controller to train and evaluate
        max_episodes: Optional hard cap on episodes played (training and
            evaluation combined), mostly for tests

    Returns:
        Evaluation reports in the order their blocks closed
    """
    reports: list[EvaluationReport] = []
    played = 0
    while not agent.finished:
        if max_episodes is not None and played >= max_episodes:
            break
        report = run_episode(engine, agent)
        played += 1
        if report is not None:
            reports.append(report)
    logger.info(f"played {played} episodes, {len(reports)} evaluation blocks")
    return reports
