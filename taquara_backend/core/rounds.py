# taquara_backend/core/rounds.py
# Which round is open for predictions.

from typing import Iterable, List, Optional

from taquara_backend.models.match_model import Match
from taquara_backend.models.prediction_model import Prediction
from taquara_backend.models.user_model import User


def open_rounds(matches: Iterable[Match], excluded_ids: Iterable[int] = frozenset()) -> List[int]:
    """Rounds with at least one unfinished, non-excluded match (ascending)."""
    excluded_ids = frozenset(excluded_ids)
    return sorted({m.round for m in matches if not m.is_finished and m.id not in excluded_ids})


def _first_incomplete_round(matches, predicted_keys, user_ids, excluded_ids) -> Optional[int]:
    rounds = open_rounds(matches, excluded_ids)
    if not rounds:
        return None

    for round_number in rounds:
        round_matches = [m for m in matches if m.round == round_number and m.id not in excluded_ids]
        if any((m.id, uid) not in predicted_keys for m in round_matches for uid in user_ids):
            return round_number

    # Everything predicted: keep the earliest open round editable
    return rounds[0]


def next_round_for_user(matches: Iterable[Match], predictions: Iterable[Prediction], user_id: int, excluded_ids: Iterable[int] = frozenset()) -> Optional[int]:
    """Smallest open round where the user still misses a prediction; None when nothing is open."""
    matches = list(matches)
    predicted_keys = {(p.match_id, p.user_id) for p in predictions}
    return _first_incomplete_round(matches, predicted_keys, [user_id], frozenset(excluded_ids))


def next_round_for_all(matches: Iterable[Match], predictions: Iterable[Prediction], users: Iterable[User], excluded_ids: Iterable[int] = frozenset()) -> Optional[int]:
    """Same as next_round_for_user, but across every presenter (non-admin user)."""
    matches = list(matches)
    presenter_ids = [u.id for u in users if not u.is_admin]
    predicted_keys = {(p.match_id, p.user_id) for p in predictions}
    return _first_incomplete_round(matches, predicted_keys, presenter_ids, frozenset(excluded_ids))
