"""Startup arguments for the agent.

Usage (as passed by the host engine):
    <episodes> [--verbose]

    episodes: number of training episodes to run (must be > 0)
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .config import AgentConfig
from .errors import ConfigurationError

USAGE = "Usage: QLearningAgent [eps] [--verbose]\n\teps: number of episodes to run (must be > 0)"


class _RaisingParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of calling sys.exit()."""

    def error(self, message: str):  # type: ignore[override]
        raise ConfigurationError(message, usage=USAGE)


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"episodes must be an integer, got {value!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"episodes must be > 0, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = _RaisingParser(prog="QLearningAgent", description=__doc__, usage=USAGE, add_help=False)
    parser.add_argument("episodes", type=_positive_int, help="Number of training episodes to run")
    parser.add_argument("--verbose", "-v", action="store_true", help="Narrate every turn")
    return parser


def parse_agent_args(argv: Sequence[str]) -> AgentConfig:
    """Parse host-supplied arguments; raises ConfigurationError carrying the usage text."""
    args = build_parser().parse_args(list(argv))
    return AgentConfig(max_episodes=args.episodes, verbose=args.verbose)
