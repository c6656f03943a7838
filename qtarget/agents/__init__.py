from .policy import EpsilonGreedyPolicy

__all__ = ["EpsilonGreedyPolicy"]
