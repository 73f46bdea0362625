import numpy as np

from boxtracker.rules.scoring import (
    close_reasons, evaluate, evaluate_pair, evaluate_state, square_masks, winning_digits,
)
from boxtracker.state import AppState, NumberPair, Pool, Score, TeamPair

TEAMS = TeamPair("Seahawks", "Patriots")


def pool(pid, *pairs, game="main"):
    return Pool(pid, tuple(NumberPair(a, b) for a, b in pairs), "", game)


def test_winning_digits():
    assert winning_digits(Score(24, 14)) == (4, 4)
    assert winning_digits(Score(0, 10)) == (0, 0)


def test_win_detection():
    score = Score(24, 14)
    res = evaluate([pool("w", (4, 4)), pool("l", (3, 4))], score)
    assert res[0].winning and not res[0].close
    assert not res[1].winning


def test_close_field_goal_and_touchdown():
    score = Score(21, 14)
    fg, td = evaluate([pool("fg", (4, 4)), pool("td", (8, 4))], score, TEAMS)
    assert fg.close and not fg.winning and fg.close_reasons == ("Seahawks FG",)
    assert td.close and td.close_reasons == ("Seahawks TD",)


def test_close_for_team_b():
    score = Score(21, 14)
    r = evaluate_pair(NumberPair(1, 7), score, TEAMS)
    assert r.close and r.close_reasons == ("Patriots FG",)
    r = evaluate_pair(NumberPair(1, 1), score, TEAMS)
    assert r.close_reasons == ("Patriots TD",)


def test_slot_names_without_teams():
    assert close_reasons(NumberPair(4, 4), Score(21, 14)) == ("teamA FG",)


def test_other_digit_must_already_match():
    # 21+3 -> 4 but b=5 != 4
    assert evaluate_pair(NumberPair(4, 5), Score(21, 14)).close is False
    # two plays away
    assert evaluate_pair(NumberPair(1, 4), Score(21, 14)).winning is True
    assert evaluate_pair(NumberPair(5, 4), Score(21, 14)).close is False


def test_winning_pair_is_never_close():
    r = evaluate_pair(NumberPair(1, 4), Score(21, 14))
    assert r.winning and not r.close and r.close_reasons == ()


def test_pool_reasons_deduplicated_in_order():
    score = Score(21, 14)
    p = pool("p", (8, 4), (4, 4), (8, 4), (1, 7))
    (r,) = evaluate([p], score, TEAMS)
    assert r.close
    assert r.close_reasons == ("Seahawks TD", "Seahawks FG", "Patriots FG")
    assert [x.close for x in r.pairs] == [True, True, True, True]


def test_winning_pool_is_not_close():
    score = Score(21, 14)
    (r,) = evaluate([pool("p", (1, 4), (4, 4))], score)
    assert r.winning and not r.close
    assert r.close_reasons == ("teamA FG",)


def test_evaluate_does_not_mutate_inputs():
    pools = [pool("a", (1, 1))]
    score = Score(11, 21)
    before = (list(pools), score)
    evaluate(pools, score)
    evaluate(pools, score)
    assert (pools, score) == before


def test_evaluate_state_uses_each_game():
    state = AppState(
        teams={"main": TEAMS, "g2": TeamPair("A", "B")},
        score={"main": Score(24, 14), "g2": Score(7, 3)},
        pools=(pool("1", (4, 4)), pool("2", (7, 3), game="g2"), pool("3", (0, 3), game="g2")),
    )
    res = evaluate_state(state)
    assert res["1"].winning and res["2"].winning
    assert res["3"].close and res["3"].close_reasons == ("A FG",)


def test_square_masks():
    masks = square_masks(Score(21, 14))
    assert masks["winning"].shape == (10, 10)
    assert masks["winning"].sum() == 1 and masks["winning"][1, 4]
    expected = {(4, 4), (8, 4), (1, 7), (1, 1)}
    assert set(zip(*np.nonzero(masks["close"]))) == expected
    assert not (masks["winning"] & masks["close"]).any()


def test_masks_agree_with_evaluator():
    score = Score(38, 27)
    masks = square_masks(score)
    for a in range(10):
        for b in range(10):
            r = evaluate_pair(NumberPair(a, b), score)
            assert masks["winning"][a, b] == r.winning
            assert masks["close"][a, b] == r.close
