import pytest

from taquara_backend.core.errors import MalformedScoreError
from taquara_backend.core.scorers import rank_scorers
from taquara_backend.models.scorer_model import Scorer


def test_rank_scorers_orders_by_goals_then_name():
    scorers = [
        Scorer(id=1, player="Zé Carlos", team_id=1, goals=7, rank=1),
        Scorer(id=2, player="Alef Manga", team_id=2, goals=9, rank=2),
        Scorer(id=3, player="Borasi", team_id=3, goals=7, rank=3),
    ]
    ranked = rank_scorers(scorers)

    assert [(s.rank, s.player) for s in ranked] == [(1, "Alef Manga"), (2, "Borasi"), (3, "Zé Carlos")]
    assert [s.rank for s in scorers] == [1, 2, 3]


def test_negative_goals_are_rejected():
    with pytest.raises(MalformedScoreError):
        rank_scorers([Scorer(player="X", team_id=1, goals=-2)])
