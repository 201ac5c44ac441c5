import random

import pytest

from taquara_backend.core.errors import InvalidReferenceError
from taquara_backend.core.standings import apply_match_delta, compute_standings
from tests.factories import as_dict, make_match, make_teams


def base_matches():
    return [
        make_match(1, 1, 2, 2, 1, round=1),
        make_match(2, 3, 4, 0, 0, round=1),
        make_match(3, 2, 3, round=2, days=7),
        make_match(4, 4, 1, round=2, days=7),
    ]


def edited(matches, match_id, home_score, away_score):
    """Copy of the match list with one score changed."""
    result = []
    for m in matches:
        if m.id == match_id:
            m = make_match(m.id, m.home_team_id, m.away_team_id, home_score, away_score, round=m.round)
        else:
            m = make_match(m.id, m.home_team_id, m.away_team_id, m.home_score, m.away_score, round=m.round)
        result.append(m)
    return result


def assert_equivalent(teams, old, new, excluded_ids=frozenset()):
    current = compute_standings(teams, old, excluded_ids)
    updated = apply_match_delta(current, old, new, excluded_ids, teams)
    expected = compute_standings(teams, new, excluded_ids)

    assert as_dict(updated) == as_dict(expected)
    assert [e.team_id for e in updated] == [e.team_id for e in expected]


@pytest.mark.parametrize("match_id, home_score, away_score", [
    (3, 1, 0),        # unfinished -> finished
    (1, 0, 3),        # finished -> finished, result flips
    (1, 3, 1),        # finished -> finished, same winner
    (2, 1, 1),        # draw -> different draw
    (1, None, None),  # finished -> unfinished (result cleared)
    (1, 2, None),     # finished -> half-entered, no longer counted
    (1, 2, 1),        # unchanged
])
def test_delta_matches_full_recompute(match_id, home_score, away_score):
    old = base_matches()
    new = edited(old, match_id, home_score, away_score)

    assert_equivalent(make_teams(), old, new)


def test_unchanged_matches_are_not_applied_twice():
    teams = make_teams()
    old = base_matches()
    current = compute_standings(teams, old)

    updated = apply_match_delta(current, old, edited(old, 1, 2, 1), teams=teams)

    assert as_dict(updated) == as_dict(current)


def test_new_fixture_is_added_in_full():
    old = base_matches()
    new = edited(old, 1, 2, 1) + [make_match(9, 1, 3, 4, 0, round=3)]

    assert_equivalent(make_teams(), old, new)


def test_fixture_missing_from_new_list_is_removed():
    old = base_matches()
    new = [m for m in edited(old, 1, 2, 1) if m.id != 1]

    assert_equivalent(make_teams(), old, new)


def test_excluded_match_edits_leave_table_alone():
    teams = make_teams()
    old = base_matches() + [make_match(5, 1, 3, round=2)]
    new = edited(old, 5, 7, 0)

    current = compute_standings(teams, old, {5})
    updated = apply_match_delta(current, old, new, {5}, teams)

    assert as_dict(updated) == as_dict(current)


def test_current_standings_are_not_mutated():
    teams = make_teams()
    old = base_matches()
    current = compute_standings(teams, old)
    before = as_dict(current)

    apply_match_delta(current, old, edited(old, 3, 4, 4), teams=teams)

    assert as_dict(current) == before


def test_changed_match_with_unknown_team_raises():
    teams = make_teams()
    old = base_matches()
    current = compute_standings(teams, old)
    new = old + [make_match(9, 1, 99, 1, 0)]

    with pytest.raises(InvalidReferenceError):
        apply_match_delta(current, old, new, teams=teams)


def test_random_edit_sequences_stay_equivalent():
    rng = random.Random(2025)
    teams = make_teams()
    pairs = [(h, a) for h in range(1, 5) for a in range(1, 5) if h != a]
    matches = [make_match(i + 1, h, a, round=i // 2 + 1) for i, (h, a) in enumerate(pairs)]
    standings = compute_standings(teams, matches)

    for _ in range(60):
        target = rng.choice(matches)
        if rng.random() < 0.2:
            scores = (None, None)
        else:
            scores = (rng.randint(0, 4), rng.randint(0, 4))
        new = edited(matches, target.id, *scores)

        standings = apply_match_delta(standings, matches, new, teams=teams)
        matches = new

        assert as_dict(standings) == as_dict(compute_standings(teams, matches))
