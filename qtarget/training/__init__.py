"""Training infrastructure.

- learner: TD updates of the linear value function (TDLearner)
- scheduler: training / evaluation block alternation (EpisodeScheduler)
- stats_collector: per-episode combat statistics (CombatStatsCollector)
"""

from qtarget.training.learner import TDLearner, TDUpdate, td_error, td_step
from qtarget.training.scheduler import EpisodeScheduler, EpisodeState, EvaluationReport, ScheduleMode
from qtarget.training.stats_collector import CombatStatsCollector, EpisodeRecord

__all__ = [
    "CombatStatsCollector",
    "EpisodeRecord",
    "EpisodeScheduler",
    "EpisodeState",
    "EvaluationReport",
    "ScheduleMode",
    "TDLearner",
    "TDUpdate",
    "td_error",
    "td_step",
]
