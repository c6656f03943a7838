from .snapshot import BattleSnapshot
from .unit import Side, Unit

__all__ = ["BattleSnapshot", "Side", "Unit"]
