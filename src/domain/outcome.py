"""Decide whether a seat won its game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from domain.common import GameResult, Role

WIN_BONUS = 1.0


class WinBucket(str, Enum):
    """Faction counter credited for a win."""

    CIVILIAN_WIN = "civilian_win"
    MAFIA_WIN = "mafia_win"
    NONE = "none"


@dataclass(frozen=True)
class Outcome:
    is_win: bool
    bucket: WinBucket


NO_WIN = Outcome(is_win=False, bucket=WinBucket.NONE)

_FACTION_WINS: dict[Role, tuple[GameResult, Outcome]] = {
    Role.CIVILIAN: (GameResult.CIVILIANS_WIN, Outcome(True, WinBucket.CIVILIAN_WIN)),
    Role.SHERIFF: (GameResult.CIVILIANS_WIN, Outcome(True, WinBucket.CIVILIAN_WIN)),
    Role.MAFIA: (GameResult.MAFIA_WIN, Outcome(True, WinBucket.MAFIA_WIN)),
    Role.DON: (GameResult.MAFIA_WIN, Outcome(True, WinBucket.MAFIA_WIN)),
}


def classify(role: Role | None, result: GameResult | None) -> Outcome:
    """Map (role, declared result) to a win/loss outcome.

    Draws, undetermined games and unknown roles never produce a win.
    """
    if role is None or result is None:
        return NO_WIN
    winning_result, outcome = _FACTION_WINS[role]
    if result is winning_result:
        return outcome
    return NO_WIN


__all__ = ["NO_WIN", "Outcome", "WIN_BONUS", "WinBucket", "classify"]
