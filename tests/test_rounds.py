from taquara_backend.core.rounds import next_round_for_all, next_round_for_user, open_rounds
from tests.factories import make_match, make_prediction, make_users


def season():
    return [
        make_match(1, 1, 2, 2, 1, round=1),
        make_match(2, 3, 4, round=2),
        make_match(3, 1, 3, round=2),
        make_match(4, 2, 4, round=3),
        make_match(5, 4, 1, round=4),
    ]


def test_open_rounds_skip_finished_and_excluded():
    assert open_rounds(season()) == [2, 3, 4]
    assert open_rounds(season(), excluded_ids={5}) == [2, 3]


def test_next_round_for_all_waits_for_every_presenter():
    predictions = [
        make_prediction(1, 2, 2, 1, 0),
        make_prediction(2, 3, 2, 1, 0),
        make_prediction(3, 2, 3, 0, 0),
    ]
    # Marcelo (3) still misses match 3
    assert next_round_for_all(season(), predictions, make_users()) == 2

    predictions.append(make_prediction(4, 3, 3, 2, 2))
    assert next_round_for_all(season(), predictions, make_users()) == 3


def test_everything_predicted_keeps_first_open_round():
    matches = season()
    predictions = [
        make_prediction(i * 10 + user_id, m.id, user_id, 1, 1)
        for i, m in enumerate(matches)
        for user_id in (2, 3)
    ]
    assert next_round_for_all(matches, predictions, make_users()) == 2


def test_no_open_round():
    matches = [make_match(1, 1, 2, 1, 0)]
    assert next_round_for_all(matches, [], make_users()) is None
    assert next_round_for_user(matches, [], 2) is None


def test_next_round_for_user_ignores_other_presenters():
    predictions = [make_prediction(1, 2, 2, 1, 0), make_prediction(2, 3, 2, 1, 0)]
    assert next_round_for_user(season(), predictions, 2) == 3
    assert next_round_for_user(season(), predictions, 3) == 2
