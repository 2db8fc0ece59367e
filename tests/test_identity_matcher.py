import pytest

from leaguestats.identity import build_conflict, contested_fields, match_identity, register_player
from leaguestats.models import Player, PlayerCandidate, Team, User


def test_no_email_never_collides(store):
    store.create_player(PlayerCandidate(name="Guest One", is_guest=True))
    assert not match_identity(store, None).collision
    assert not match_identity(store, "  ").collision


def test_email_match_is_case_insensitive(store):
    existing = store.create_player(PlayerCandidate(name="Asha Rao", email="Asha@Example.org"))
    match = match_identity(store, "asha@example.ORG")
    assert match.collision
    assert match.existing_player.id == existing.id
    assert not match.is_registered_user
    assert not match.is_linked


def test_names_are_not_compared(store):
    store.create_player(PlayerCandidate(name="Asha Rao", email="asha@example.org"))
    assert not match_identity(store, "other@example.org").collision


def test_team_scope_and_self_exclusion(store):
    existing = store.create_player(PlayerCandidate(name="Asha", email="a@x.org", team_id="T1"))
    assert not match_identity(store, "a@x.org", team_id="T2").collision
    assert match_identity(store, "a@x.org", team_id="T1").collision
    assert not match_identity(store, "a@x.org", exclude_player_id=existing.id).collision


def test_registered_and_linked_flags(store):
    store.create_user(User(id="u1", email="a@x.org", name="Asha"))
    store.create_player(PlayerCandidate(name="Asha", email="a@x.org", user_id="u1"))
    match = match_identity(store, "A@X.org")
    assert match.collision
    assert match.is_registered_user
    assert match.is_linked
    assert match.registered_user.id == "u1"


def test_contested_fields_need_two_different_values():
    existing = Player(id="p1", name="Asha", role="batsman", jersey_number=7, team_name="  ")
    candidate = PlayerCandidate(name="Asha R", role="batsman", bowling_style="off-spin", team_name="Red", jersey_number=9)
    assert contested_fields(existing, candidate) == ["name", "jersey_number"]


def test_register_player_returns_conflict_without_writing(store):
    existing = store.create_player(PlayerCandidate(name="Asha", email="a@x.org", role="batsman"))
    candidate = PlayerCandidate(name="Asha Rao", email="A@x.org", role="bowler")

    registration = register_player(store, candidate)

    assert not registration.created
    conflict = registration.conflict
    assert conflict.existing_player.id == existing.id
    assert conflict.contested_fields == ["name", "role"]
    payload = conflict.to_dict()
    assert payload["suggested_action"] == "merge_profiles"
    assert payload["candidate"]["name"] == "Asha Rao"
    assert len(store.list_players()) == 1


def test_register_player_creates_and_links_registered_user(store):
    store.create_team(Team(id="T1", name="Tigers"))
    store.create_user(User(id="u1", email="a@x.org"))

    registration = register_player(store, PlayerCandidate(name="Asha", email="a@x.org", team_id="T1", is_guest=True))

    assert registration.created
    assert registration.player.user_id == "u1"
    assert not registration.player.is_guest
    assert registration.linked_user.id == "u1"
    assert store.get_team("T1").player_ids == [registration.player.id]


def test_changed_email_resubmission_is_created(store):
    store.create_player(PlayerCandidate(name="Asha", email="a@x.org"))
    first = register_player(store, PlayerCandidate(name="Asha Two", email="a@x.org"))
    assert not first.created
    second = register_player(store, PlayerCandidate(name="Asha Two", email="asha2@x.org"))
    assert second.created


def test_build_conflict_requires_collision(store):
    with pytest.raises(ValueError):
        build_conflict(match_identity(store, "nobody@x.org"), PlayerCandidate(name="N", email="nobody@x.org"))
