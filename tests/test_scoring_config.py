import pytest

from leaguestats.config import DEFAULT_RULES, MERGEABLE_PLAYER_FIELDS, get_rules, get_rules_by_key, iter_rules


def test_get_rules_handles_lowercase_keys():
    rules = get_rules("cricket", "odi")
    assert rules.match_format == "ODI"
    assert rules.points_per_win == 2


def test_get_rules_defaults_to_t20():
    assert get_rules() is DEFAULT_RULES
    assert DEFAULT_RULES.points_per_draw == 1


def test_get_rules_by_key_string_and_tuple():
    assert get_rules_by_key("CRICKET_TEST").match_format == "TEST"
    assert get_rules_by_key(("cricket", "t10")).match_format == "T10"


def test_get_rules_by_key_rejects_bad_input():
    with pytest.raises(ValueError):
        get_rules_by_key("CRICKET")
    with pytest.raises(TypeError):
        get_rules_by_key(42)  # type: ignore[arg-type]


def test_get_rules_missing_raises():
    with pytest.raises(KeyError):
        get_rules("cricket", "HUNDRED")


def test_every_rule_set_uses_six_ball_overs():
    assert all(rules.balls_per_over == 6 for rules in iter_rules())


def test_email_is_never_mergeable():
    assert "email" not in MERGEABLE_PLAYER_FIELDS
    assert "id" not in MERGEABLE_PLAYER_FIELDS
