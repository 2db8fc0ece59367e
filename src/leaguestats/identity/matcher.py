"""Detect duplicate player identities by email."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from leaguestats.config import MERGEABLE_PLAYER_FIELDS
from leaguestats.models import Player, PlayerCandidate, User
from leaguestats.persistence import LeagueStore, NotFound

logger = logging.getLogger(__name__)

SUGGESTED_ACTION = "merge_profiles"


@dataclass(frozen=True)
class IdentityMatch:
    collision: bool
    existing_player: Optional[Player] = None
    is_registered_user: bool = False
    is_linked: bool = False
    registered_user: Optional[User] = None


@dataclass(frozen=True)
class IdentityConflict:
    """Structured payload handed back when a submission collides."""

    existing_player: Player
    candidate: PlayerCandidate
    contested_fields: List[str]
    is_registered_user: bool
    is_linked: bool
    message: str
    suggested_action: str = SUGGESTED_ACTION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "existing_player": self.existing_player.model_dump(mode="json"),
            "candidate": self.candidate.model_dump(mode="json"),
            "contested_fields": list(self.contested_fields),
            "is_registered_user": self.is_registered_user,
            "is_linked": self.is_linked,
            "suggested_action": self.suggested_action,
        }


@dataclass(frozen=True)
class Registration:
    player: Optional[Player] = None
    conflict: Optional[IdentityConflict] = None
    linked_user: Optional[User] = None

    @property
    def created(self) -> bool:
        return self.player is not None


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def contested_fields(existing: Player, candidate: Player | PlayerCandidate) -> List[str]:
    """Mergeable fields where both sides hold a value and the values differ.

    A field empty on either side is not a conflict, so a merge never writes an
    empty value over a filled one.
    """

    contested = []
    for name in MERGEABLE_PLAYER_FIELDS:
        current = getattr(existing, name, None)
        proposed = getattr(candidate, name, None)
        if _is_empty(current) or _is_empty(proposed):
            continue
        if current != proposed:
            contested.append(name)
    return contested


def match_identity(
    store: LeagueStore,
    email: Optional[str],
    *,
    team_id: str | None = None,
    exclude_player_id: str | None = None,
) -> IdentityMatch:
    """Look up an existing player holding ``email``.

    Matching is exact and case-insensitive; names are never compared. The
    lookup is read-only.
    """

    if _is_empty(email):
        return IdentityMatch(collision=False)

    user = store.get_user_by_email(email)
    players = store.find_players_by_email(email, team_id=team_id, exclude_player_id=exclude_player_id)
    if not players:
        return IdentityMatch(
            collision=False,
            is_registered_user=user is not None,
            registered_user=user,
        )

    existing = players[0]
    if len(players) > 1:
        logger.warning(
            "Email %s already resolves to %d players; reporting %s",
            email,
            len(players),
            existing.id,
        )
    return IdentityMatch(
        collision=True,
        existing_player=existing,
        is_registered_user=user is not None,
        is_linked=existing.user_id is not None,
        registered_user=user,
    )


def build_conflict(match: IdentityMatch, candidate: PlayerCandidate) -> IdentityConflict:
    if not match.collision or match.existing_player is None:
        raise ValueError("build_conflict requires a colliding identity match")
    existing = match.existing_player
    if match.is_registered_user:
        message = f"{candidate.email} belongs to a registered user already rostered as {existing.name}"
    else:
        message = f"A player with email {candidate.email} already exists ({existing.name})"
    return IdentityConflict(
        existing_player=existing,
        candidate=candidate,
        contested_fields=contested_fields(existing, candidate),
        is_registered_user=match.is_registered_user,
        is_linked=match.is_linked,
        message=message,
    )


def register_player(store: LeagueStore, candidate: PlayerCandidate) -> Registration:
    """Create ``candidate`` unless its email already belongs to a player.

    On collision nothing is written and the conflict payload is returned so
    the caller can either merge into the existing record or change the email
    and resubmit.
    """

    match = match_identity(store, candidate.email, team_id=candidate.team_id)
    if match.collision:
        conflict = build_conflict(match, candidate)
        logger.info(
            "Submission for %s collides with player %s (contested: %s)",
            candidate.email,
            conflict.existing_player.id,
            ", ".join(conflict.contested_fields) or "none",
        )
        return Registration(conflict=conflict)

    user = match.registered_user
    if user is not None and candidate.user_id is None and store.find_player_by_user(user.id) is None:
        candidate = candidate.model_copy(update={"user_id": user.id, "is_guest": False})
    elif candidate.user_id is not None and store.find_player_by_user(candidate.user_id) is not None:
        raise ValueError(f"user {candidate.user_id} is already linked to another player")

    player = store.create_player(candidate)
    if player.team_id:
        try:
            store.add_team_player(player.team_id, player.id)
        except NotFound:
            logger.debug("Team %s not stored; skipping roster update for %s", player.team_id, player.id)
    logger.info("Created player %s (%s)", player.id, player.email or "no email")
    return Registration(player=player, linked_user=user if player.user_id else None)


__all__ = [
    "IdentityConflict",
    "IdentityMatch",
    "Registration",
    "SUGGESTED_ACTION",
    "build_conflict",
    "contested_fields",
    "match_identity",
    "register_player",
]
