# taquara_backend/core/form.py
# Recent-form sequence for a team (last N results, most recent first).

from enum import Enum
from typing import Iterable, List, Optional

from taquara_backend.core.config import FORM_WINDOW
from taquara_backend.core.standings import is_counted
from taquara_backend.models.match_model import Match


class FormResult(str, Enum):
    WIN = "W"
    DRAW = "D"
    LOSS = "L"


def result_for_team(team_id: int, match: Match) -> FormResult:
    """Result of a finished match from the given team's point of view."""
    if match.home_team_id == team_id:
        scored, conceded = match.home_score, match.away_score
    else:
        scored, conceded = match.away_score, match.home_score

    if scored > conceded:
        return FormResult.WIN
    if scored < conceded:
        return FormResult.LOSS
    return FormResult.DRAW


def compute_form(team_id: int, matches: Iterable[Match], window_size: int = FORM_WINDOW, excluded_ids: Iterable[int] = frozenset()) -> List[Optional[FormResult]]:
    """
    Returns exactly window_size items, most recent first.
    Missing slots (fewer finished matches than the window) are None.
    Matches on the same date keep their input order.
    """
    excluded_ids = frozenset(excluded_ids)
    finished = [
        m for m in matches
        if team_id in (m.home_team_id, m.away_team_id) and is_counted(m, excluded_ids)
    ]
    finished.sort(key=lambda m: m.date, reverse=True)

    form: List[Optional[FormResult]] = [result_for_team(team_id, m) for m in finished[:window_size]]
    form.extend([None] * (window_size - len(form)))
    return form
