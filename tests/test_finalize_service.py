import pytest

from leaguestats.finalize import (
    apply_match_to_team,
    finalize_match,
    rebuild_player_career,
    record_match_performances,
    record_performance,
    rederive_team_stats,
    rules_for,
)
from leaguestats.models import PlayerCandidate, Team
from leaguestats.persistence import StaleRecord

from tests.factories import innings, make_match, make_performance


@pytest.fixture
def player(store):
    return store.create_player(PlayerCandidate(name="Asha", team_id="A"))


def test_record_performance_is_idempotent(store, player):
    performance = make_performance(player.id, "m1", runs=30, balls=20)

    first = record_performance(store, performance)
    second = record_performance(store, performance)

    assert first.career_stats.total_runs == 30
    assert second is None
    stored = store.get_player(player.id)
    assert stored.career_stats.total_runs == 30
    assert stored.career_stats.total_matches == 1


def test_record_performance_retries_stale_writes(store, player, monkeypatch):
    original = store.record_performance_with_career
    calls = {"count": 0}

    def racing(record, patch, *, expected_version):
        calls["count"] += 1
        if calls["count"] == 1:
            store.update_player(player.id, {"name": "Asha Rao"})
        return original(record, patch, expected_version=expected_version)

    monkeypatch.setattr(store, "record_performance_with_career", racing)
    updated = record_performance(store, make_performance(player.id, "m1", runs=8))

    assert calls["count"] == 2
    assert updated.name == "Asha Rao"
    assert updated.career_stats.total_runs == 8


def test_record_performance_gives_up_after_max_retries(store, player, monkeypatch):
    monkeypatch.setenv("LEAGUESTATS_MAX_RETRIES", "2")

    def always_stale(record, patch, *, expected_version):
        raise StaleRecord("Player", record.player_id, expected_version)

    monkeypatch.setattr(store, "record_performance_with_career", always_stale)
    with pytest.raises(StaleRecord):
        record_performance(store, make_performance(player.id, "m1", runs=8))


def test_record_match_performances_report(store, player):
    performances = [
        make_performance(player.id, "m1", runs=10),
        make_performance("ghost", "m1", runs=4),
        make_performance(player.id, "m1", runs=10),
    ]
    report = record_match_performances(store, "m1", performances)
    assert report.recorded == [player.id]
    assert report.duplicates == [player.id]
    assert report.missing_players == ["ghost"]


def test_record_match_performances_rejects_foreign_match(store, player):
    with pytest.raises(ValueError):
        record_match_performances(store, "m1", [make_performance(player.id, "m2", runs=1)])


def test_finalize_match_updates_players_and_teams(store, player):
    store.create_team(Team(id="A", name="Alpha"))
    store.create_team(Team(id="B", name="Bravo"))
    match = make_match(
        "m1",
        winner_id="A",
        team1_innings=[innings("A", 150, 5, 20.0)],
        team2_innings=[innings("B", 120, 9, 20.0)],
    ).model_copy(update={"status": "in-progress"})

    report = finalize_match(store, match, [make_performance(player.id, "m1", runs=70, match_result="won")])

    assert report.recorded == [player.id]
    assert store.get_match("m1").status == "completed"
    team = store.get_team("A")
    assert team.matches_won == 1
    assert team.tournament_points == 2
    assert team.net_run_rate == pytest.approx(1.5)
    assert store.get_team("B").matches_lost == 1
    assert store.get_player(player.id).career_stats.half_centuries == 1

    again = finalize_match(store, match, [make_performance(player.id, "m1", runs=70, match_result="won")])
    assert again.duplicates == [player.id]
    assert store.get_team("A").matches_won == 1


def test_finalize_match_without_stored_teams(store):
    report = finalize_match(store, make_match("m1", winner_id="A"))
    assert report.team_summaries == {}


def test_rederive_after_abandoned_match_keeps_points(store):
    store.create_team(Team(id="A", name="Alpha"))
    store.save_match(make_match("m1", winner_id="A", team1_innings=[innings("A", 100, 2, 10.0)]))
    before = rederive_team_stats(store, "A")
    store.save_match(make_match("m2", result_type="abandoned"))
    after = rederive_team_stats(store, "A")
    assert after.tournament_points == before.tournament_points
    assert after.skipped_matches == 1


def test_rebuild_player_career(store, player):
    record_performance(store, make_performance(player.id, "m1", runs=10))
    record_performance(store, make_performance(player.id, "m2", runs=20))
    store.update_player(player.id, {"career_stats": {}})

    rebuilt = rebuild_player_career(store, player.id)

    assert rebuilt.career_stats.total_runs == 30
    assert rebuilt.career_stats.total_matches == 2


def test_rules_for_unknown_format_falls_back():
    assert rules_for(make_match("m1", match_format="HUNDRED")).match_format == "T20"
    assert rules_for(make_match("m1", match_format="odi")).match_format == "ODI"


def test_finalize_match_adds_one_match_to_stored_figures(store):
    store.create_team(Team(id="A", name="Alpha"))
    store.create_team(Team(id="B", name="Bravo"))
    # Figures carried from earlier matches that are not in the match table.
    store.update_team_stats(
        "A",
        {
            "matches_won": 3,
            "matches_lost": 1,
            "tournament_points": 6,
            "total_runs_scored": 600,
            "total_runs_conceded": 560,
            "nrr_runs_scored": 600,
            "nrr_runs_conceded": 560,
            "total_balls_faced": 480,
            "total_balls_bowled": 480,
        },
    )
    match = make_match(
        "m5",
        winner_id="A",
        team1_innings=[innings("A", 150, 6, 20.0)],
        team2_innings=[innings("B", 140, 8, 20.0)],
    )

    report = finalize_match(store, match)

    team = store.get_team("A")
    assert (team.matches_won, team.matches_lost, team.tournament_points) == (4, 1, 8)
    assert team.total_runs_scored == 750
    assert team.total_balls_faced == 600
    assert team.net_run_rate == pytest.approx(round(750 / 100 - 700 / 100, 3))
    assert report.team_summaries["A"].wins == 4
    assert store.get_team("B").matches_lost == 1


def test_refinalizing_a_match_recomputes_from_match_list(store):
    store.create_team(Team(id="A", name="Alpha"))
    store.create_team(Team(id="B", name="Bravo"))
    match = make_match(
        "m1",
        winner_id="A",
        team1_innings=[innings("A", 150, 6, 20.0)],
        team2_innings=[innings("B", 140, 8, 20.0)],
    )
    finalize_match(store, match)
    corrected = make_match(
        "m1",
        winner_id="B",
        team1_innings=[innings("A", 130, 9, 20.0)],
        team2_innings=[innings("B", 140, 8, 20.0)],
    )

    finalize_match(store, corrected)

    team = store.get_team("A")
    assert (team.matches_won, team.matches_lost, team.tournament_points) == (0, 1, 0)
    assert store.get_team("B").matches_won == 1


def test_apply_match_to_team_skips_nrr_without_overs(store):
    store.create_team(Team(id="A", name="Alpha"))
    match = make_match(
        "m1",
        winner_id="A",
        team1_innings=[innings("A", 150, 6, None)],
        team2_innings=[innings("B", 140, 8, 20.0)],
    )

    summary = apply_match_to_team(store, "A", match)

    assert summary.wins == 1
    assert summary.total_runs_scored == 150
    assert summary.nrr_excluded_matches == 1
    assert summary.net_run_rate is None
    assert store.get_team("A").nrr_excluded_matches == 1
