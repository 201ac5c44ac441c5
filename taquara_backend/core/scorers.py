# taquara_backend/core/scorers.py
# Top-scorers ordering.

from typing import Iterable, List

from taquara_backend.core.errors import validate_score
from taquara_backend.models.scorer_model import Scorer


def rank_scorers(scorers: Iterable[Scorer]) -> List[Scorer]:
    """
    Returns new Scorer rows ordered by goals (descending) then player name,
    with rank reassigned from 1. The incoming rows are not modified.
    """
    ranked = []
    for scorer in scorers:
        validate_score(scorer.goals, f"goals for {scorer.player}", allow_none=False)
        ranked.append(Scorer(id=scorer.id, player=scorer.player, team_id=scorer.team_id, goals=scorer.goals))

    ranked.sort(key=lambda s: (-s.goals, s.player.casefold()))
    for position, scorer in enumerate(ranked, start=1):
        scorer.rank = position
    return ranked
