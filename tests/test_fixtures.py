from collections import Counter
from datetime import datetime, timedelta

import pytest

from sqlmodel import select

from taquara_backend.models import Match, Team
from taquara_backend.services.generate_fixtures import build_round_robin, generate_fixtures, generate_fixtures_for_league


def test_double_round_robin_for_four_teams():
    rounds = build_round_robin([1, 2, 3, 4])

    assert len(rounds) == 6
    assert all(len(r) == 2 for r in rounds)
    pairings = Counter(fixture for r in rounds for fixture in r)
    # every ordered pair (home, away) exactly once
    assert len(pairings) == 12
    assert set(pairings.values()) == {1}
    for r in rounds:
        teams_in_round = [t for fixture in r for t in fixture]
        assert len(teams_in_round) == len(set(teams_in_round))


def test_odd_team_count_gets_a_bye():
    rounds = build_round_robin([1, 2, 3])

    assert len(rounds) == 6
    assert all(len(r) == 1 for r in rounds)


def test_not_enough_teams():
    with pytest.raises(ValueError):
        build_round_robin([1])


def test_generated_matches_are_weekly_and_unplayed():
    start = datetime(2025, 4, 5, 16, 0)
    matches = generate_fixtures([1, 2, 3, 4], start)

    assert len(matches) == 12
    assert all(m.home_score is None and m.away_score is None for m in matches)
    round_two = [m for m in matches if m.round == 2]
    assert min(m.date for m in round_two) == start + timedelta(weeks=1)


def test_generated_fixtures_are_stored_with_their_kickoff_times(session):
    session.add_all([Team(id=i, name=f"Team {i}", abbreviation=f"T{i}") for i in range(1, 5)])
    session.commit()
    start = datetime(2025, 4, 5, 16, 0)

    generate_fixtures_for_league(session, start)

    session.expire_all()
    stored = session.exec(select(Match).order_by(Match.date, Match.id)).all()
    assert len(stored) == 12
    assert stored[0].date == start
    assert stored[0].date.tzinfo is None
