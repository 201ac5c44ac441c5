from taquara_backend.core.form import FormResult, compute_form
from tests.factories import make_match

W, D, L = FormResult.WIN, FormResult.DRAW, FormResult.LOSS


def test_two_finished_matches_are_padded_to_five():
    matches = [
        make_match(1, 1, 2, 2, 0, days=0),
        make_match(2, 3, 1, 1, 1, days=7),
        make_match(3, 1, 4, days=14),   # not played yet
    ]
    assert compute_form(1, matches) == [D, W, None, None, None]


def test_results_are_from_the_team_perspective():
    matches = [
        make_match(1, 1, 2, 0, 3, days=0),   # team 2 wins away
        make_match(2, 2, 3, 0, 1, days=7),   # team 2 loses at home
    ]
    assert compute_form(2, matches, window_size=2) == [L, W]
    assert compute_form(1, matches, window_size=2) == [L, None]


def test_only_the_most_recent_window_is_kept():
    matches = [make_match(i, 1, 2, i % 3, 1, days=i) for i in range(1, 9)]
    form = compute_form(1, matches)

    assert len(form) == 5
    # most recent first: days 8, 7, 6, 5, 4 -> scores 2-1, 1-1, 0-1, 2-1, 1-1
    assert form == [W, D, L, W, D]


def test_same_date_keeps_input_order():
    matches = [make_match(1, 1, 2, 1, 0), make_match(2, 1, 3, 0, 1)]
    assert compute_form(1, matches, window_size=2) == [W, L]


def test_empty_history_and_excluded_matches():
    assert compute_form(4, []) == [None] * 5
    matches = [make_match(5, 4, 1, 2, 0)]
    assert compute_form(4, matches, excluded_ids={5}) == [None] * 5
    assert compute_form(4, matches)[0] == W
