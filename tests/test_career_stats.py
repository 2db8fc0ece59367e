from leaguestats.config import get_rules
from leaguestats.models import CareerStats, PlayerPerformance
from leaguestats.stats import accumulate, combine, rebuild

from tests.factories import make_performance


def test_accumulate_batting_bowling_and_fielding():
    performance = make_performance(
        "p1",
        "m1",
        runs=54,
        balls=40,
        is_out=True,
        overs=4.3,
        wickets=2,
        conceded=31,
        catches=1,
        match_result="won",
        awards=["man-of-match"],
    )

    stats = accumulate(CareerStats(), performance)

    assert stats.total_runs == 54
    assert stats.total_balls_faced == 40
    assert stats.innings == 1
    assert stats.dismissals == 1
    assert stats.half_centuries == 1
    assert stats.centuries == 0
    assert stats.highest_score == 54
    assert stats.balls_bowled == 27
    assert stats.overs_bowled == 4.3
    assert stats.total_wickets == 2
    assert stats.best_bowling_figures == "2/31"
    assert stats.catches == 1
    assert stats.total_matches == 1
    assert stats.matches_won == 1
    assert stats.man_of_the_match_awards == 1


def test_accumulate_is_pure():
    existing = CareerStats(total_runs=10, total_matches=1)
    accumulate(existing, make_performance("p1", "m1", runs=5))
    assert existing.total_runs == 10
    assert existing.total_matches == 1


def test_century_is_not_also_a_half_century():
    stats = accumulate(CareerStats(), make_performance("p1", "m1", runs=104, balls=60))
    assert stats.centuries == 1
    assert stats.half_centuries == 0


def test_overs_sum_by_balls():
    first = make_performance("p1", "m1", overs=4.3, conceded=30)
    second = make_performance("p1", "m2", overs=2.4, conceded=12)
    stats = rebuild([first, second])
    assert stats.balls_bowled == 43
    assert stats.overs_bowled == 7.1


def test_match_without_batting_counts_match_only():
    stats = accumulate(CareerStats(), PlayerPerformance(player_id="p1", match_id="m1", match_result="lost"))
    assert stats.total_matches == 1
    assert stats.innings == 0
    assert stats.matches_won == 0


def test_zero_ball_spell_does_not_set_figures():
    stats = accumulate(CareerStats(), make_performance("p1", "m1", overs=0.0, wickets=0, conceded=0))
    assert stats.best_bowling_figures is None


def test_best_figures_keep_the_better_spell():
    stats = rebuild(
        [
            make_performance("p1", "m1", overs=4.0, wickets=3, conceded=20),
            make_performance("p1", "m2", overs=4.0, wickets=3, conceded=15),
            make_performance("p1", "m3", overs=4.0, wickets=2, conceded=5),
        ]
    )
    assert stats.best_bowling_figures == "3/15"


def test_five_wicket_haul_uses_rules_threshold():
    stats = accumulate(
        CareerStats(),
        make_performance("p1", "m1", overs=4.0, wickets=5, conceded=18),
        rules=get_rules("cricket", "T20"),
    )
    assert stats.five_wicket_hauls == 1


def test_accumulate_double_counts_without_caller_dedup():
    performance = make_performance("p1", "m1", runs=20, balls=15)
    once = accumulate(CareerStats(), performance)
    twice = accumulate(once, performance)
    assert twice.total_runs == 40
    assert twice.total_matches == 2


def test_combine_sums_counters_and_keeps_bests():
    first = CareerStats(total_runs=100, highest_score=80, total_matches=4, best_bowling_figures="2/10")
    second = CareerStats(total_runs=50, highest_score=90, total_matches=2, best_bowling_figures="3/30")
    combined = combine(first, second)
    assert combined.total_runs == 150
    assert combined.total_matches == 6
    assert combined.highest_score == 90
    assert combined.best_bowling_figures == "3/30"
