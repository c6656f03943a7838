"""Per-episode combat statistics.

Accumulates events from each turn's combat log and produces an
EpisodeRecord when the episode ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..state.unit import Side

if TYPE_CHECKING:
    from ..env.events import CombatLog


def _empty_stats() -> dict[str, Any]:
    return {
        "kills": 0,
        "deaths": 0,
        "damage_dealt": 0,
        "damage_taken": 0,
    }


@dataclass
class EpisodeRecord:
    episode: int
    winner: str  # "friendly", "enemy" or "draw"
    turns: int
    reward: float
    friendly: dict[str, Any]
    enemy: dict[str, Any]


@dataclass
class _EpisodeStats:
    friendly: dict[str, Any] = field(default_factory=_empty_stats)
    enemy: dict[str, Any] = field(default_factory=_empty_stats)
    turns: int = 0


class CombatStatsCollector:
    def __init__(self) -> None:
        self.episode = 0
        self._current = _EpisodeStats()

    def _stats(self, side: Side) -> dict[str, Any]:
        return self._current.friendly if side is Side.FRIENDLY else self._current.enemy

    def on_turn(self, log: CombatLog) -> None:
        self._current.turns += 1
        for event in log.damage:
            self._stats(event.attacker_side)["damage_dealt"] += event.damage
            self._stats(event.defender_side)["damage_taken"] += event.damage
        for event in log.deaths:
            self._stats(event.side)["deaths"] += 1
            # A death is a kill for the opposite side.
            other = Side.ENEMY if event.side is Side.FRIENDLY else Side.FRIENDLY
            self._stats(other)["kills"] += 1

    def get_current_stats(self) -> dict[str, dict[str, Any]]:
        return {"friendly": self._current.friendly.copy(), "enemy": self._current.enemy.copy()}

    def on_episode_end(self, friendly_alive: int, enemy_alive: int, reward: float) -> EpisodeRecord:
        if friendly_alive and not enemy_alive:
            winner = "friendly"
        elif enemy_alive and not friendly_alive:
            winner = "enemy"
        else:
            winner = "draw"

        self.episode += 1
        record = EpisodeRecord(
            episode=self.episode,
            winner=winner,
            turns=self._current.turns,
            reward=reward,
            friendly=dict(self._current.friendly),
            enemy=dict(self._current.enemy),
        )
        self._current = _EpisodeStats()
        return record
