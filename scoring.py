"""
Scoring policy and final standings.
"""

from typing import List, Optional, Tuple

from config import NUMBERS_SCORE_TIERS
from models import Player
from words import normalize


def letters_score(word: str, valid: bool) -> int:
    """A legal word scores its length; anything else scores 0."""
    if not valid or not word:
        return 0
    return len(normalize(word))


def numbers_score(target: int, result: Optional[int]) -> Optional[int]:
    """
    Points for ending a numbers turn on `result`. None means the player never
    produced a result and has no score (which is not the same as 0).
    """
    if result is None:
        return None
    diff = abs(target - result)
    for max_diff, points in NUMBERS_SCORE_TIERS:
        if diff <= max_diff:
            return points
    return 0


def standings(players: List[Player]) -> List[Tuple[int, Player]]:
    """
    Players from best to worst as (rank, player). Tied scores share a rank
    and the next rank skips accordingly (1, 1, 3).
    Ties keep seating order.
    """
    ranked = sorted(players, key=lambda p: p.score, reverse=True)
    out = []
    for i, p in enumerate(ranked):
        if i > 0 and p.score == ranked[i - 1].score:
            rank = out[-1][0]
        else:
            rank = i + 1
        out.append((rank, p))
    return out


def winners(players: List[Player]) -> List[Player]:
    if not players:
        return []
    best = max(p.score for p in players)
    return [p for p in players if p.score == best]
