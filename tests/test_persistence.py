from pathlib import Path

import pytest

from leaguestats.models import CareerStats, PlayerCandidate, Team, User
from leaguestats.persistence import (
    DB_PATH_ENV,
    DuplicatePerformance,
    LeagueStore,
    NotFound,
    StaleRecord,
)

from tests.factories import make_match, make_performance


def test_store_uses_env_path(tmp_path: Path, monkeypatch):
    db_path = tmp_path / "nested" / "env.sqlite"
    monkeypatch.setenv(DB_PATH_ENV, str(db_path))
    store = LeagueStore()
    store.create_user(User(id="u1", email="a@x.org"))
    assert db_path.exists()
    assert store.get_user_by_email("A@X.ORG").id == "u1"


def test_player_round_trip_and_not_found(store):
    player = store.create_player(PlayerCandidate(name="Asha", email="a@x.org", role="batsman"))
    loaded = store.get_player(player.id)
    assert loaded.name == "Asha"
    assert loaded.role == "batsman"
    assert loaded.version == 0
    with pytest.raises(NotFound) as excinfo:
        store.get_player("missing")
    assert isinstance(excinfo.value, KeyError)
    assert str(excinfo.value) == "Player missing not found"


def test_update_player_bumps_version(store):
    player = store.create_player(PlayerCandidate(name="Asha"))
    updated = store.update_player(player.id, {"career_stats": CareerStats(total_runs=10)}, expected_version=0)
    assert updated.version == 1
    assert store.get_player(player.id).career_stats.total_runs == 10


def test_update_player_with_stale_version_fails(store):
    player = store.create_player(PlayerCandidate(name="Asha"))
    store.update_player(player.id, {"name": "Asha Rao"})
    with pytest.raises(StaleRecord):
        store.update_player(player.id, {"name": "Other"}, expected_version=0)
    assert store.get_player(player.id).name == "Asha Rao"


def test_duplicate_performance_rejected(store):
    store.record_player_performance(make_performance("p1", "m1", runs=5))
    assert store.has_performance("m1", "p1")
    with pytest.raises(DuplicatePerformance):
        store.record_player_performance(make_performance("p1", "m1", runs=5))
    assert len(store.get_player_performances("p1")) == 1


def test_combined_write_rolls_back_on_stale_player(store):
    player = store.create_player(PlayerCandidate(name="Asha"))
    store.update_player(player.id, {"name": "Asha Rao"})
    performance = make_performance(player.id, "m1", runs=5)
    with pytest.raises(StaleRecord):
        store.record_performance_with_career(
            performance, {"career_stats": CareerStats(total_runs=5)}, expected_version=0
        )
    assert not store.has_performance("m1", player.id)


def test_team_roster_and_stats(store):
    store.create_team(Team(id="T1", name="Tigers", player_ids=["p1"]))
    store.add_team_player("T1", "p2")
    store.add_team_player("T1", "p1")
    team = store.update_team_stats("T1", {"matches_won": 2, "net_run_rate": 0.5})
    assert team.matches_won == 2
    loaded = store.get_team("T1")
    assert loaded.player_ids == ["p1", "p2"]
    assert loaded.net_run_rate == 0.5
    with pytest.raises(ValueError):
        store.update_team_stats("T1", {"name": "Renamed"})
    with pytest.raises(NotFound):
        store.add_team_player("missing", "p1")


def test_list_team_matches_filters_by_team_and_status(store):
    store.save_match(make_match("m1", "A", "B", winner_id="A"))
    store.save_match(make_match("m2", "B", "C", winner_id="C"))
    scheduled = make_match("m3", "A", "C").model_copy(update={"status": "scheduled"})
    store.save_match(scheduled)

    assert {match.id for match in store.list_team_matches("A")} == {"m1"}
    assert {match.id for match in store.list_team_matches("B")} == {"m1", "m2"}
    assert {match.id for match in store.list_team_matches("A", status=None)} == {"m1", "m3"}


def test_save_match_upserts(store):
    store.save_match(make_match("m1", "A", "B"))
    store.save_match(make_match("m1", "A", "B", winner_id="B"))
    assert store.get_match("m1").match_data.result_summary.winner_id == "B"


def test_unknown_rewrite_collection(store):
    with pytest.raises(ValueError):
        store.rewrite_player_references("venues", "p1", "p2")
