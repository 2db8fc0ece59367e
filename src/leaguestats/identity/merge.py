"""Fold a duplicate player into a surviving record and repoint its history."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from leaguestats.config import LINKED_PLAYER_FIELDS
from leaguestats.identity.matcher import contested_fields
from leaguestats.models import MergeHistoryEntry, Player, PlayerCandidate
from leaguestats.persistence import REFERENCE_COLLECTIONS, LeagueStore, NotFound, ReferenceRepair
from leaguestats.stats import combine

logger = logging.getLogger(__name__)

RESOLUTION_CHOICES = ("new", "existing")

# Repair step that removes the merged-away player record itself.
SOURCE_RECORD = "players"


class TargetNotFound(NotFound):
    def __init__(self, player_id: str):
        super().__init__("Target player", player_id)


class SourceNotFound(NotFound):
    def __init__(self, player_id: str):
        super().__init__("Source player", player_id)


class ReferenceRewriteIncomplete(RuntimeError):
    """Some collections still point at the merged-away player.

    The field merge has already committed; the remaining collections sit in
    the repair queue. A source record that could not be deleted is listed as
    the ``players`` step.
    """

    def __init__(self, source_player_id: str, target_player_id: str, failed: Mapping[str, str]):
        self.source_player_id = source_player_id
        self.target_player_id = target_player_id
        self.failed_collections = list(failed)
        self.errors = dict(failed)
        super().__init__(
            f"references from {source_player_id} to {target_player_id} not rewritten in: "
            + ", ".join(self.failed_collections)
        )


@dataclass
class MergeResult:
    player: Player
    source_player_id: Optional[str]
    applied_fields: List[str] = field(default_factory=list)
    ignored_fields: List[str] = field(default_factory=list)
    career_stats_merged: bool = False
    rewritten: Dict[str, int] = field(default_factory=dict)
    warning: Optional[ReferenceRewriteIncomplete] = None
    repair: Optional[ReferenceRepair] = None

    @property
    def complete(self) -> bool:
        return self.warning is None


def _validate_resolutions(field_resolutions: Mapping[str, str]) -> None:
    for name, choice in field_resolutions.items():
        if choice not in RESOLUTION_CHOICES:
            raise ValueError(f"resolution for {name!r} must be one of {RESOLUTION_CHOICES}, got {choice!r}")


def _resolve_fields(
    target: Player,
    source: Player | PlayerCandidate,
    field_resolutions: Mapping[str, str],
    *,
    source_label: str,
) -> tuple[Dict[str, object], List[str], List[str]]:
    contested = contested_fields(target, source)
    resolutions = dict(field_resolutions)
    for name, partner in LINKED_PLAYER_FIELDS.items():
        if name not in field_resolutions:
            continue
        if partner in field_resolutions and field_resolutions[partner] != field_resolutions[name]:
            raise ValueError(f"{name} and {partner} must be resolved the same way")
        if partner not in resolutions and partner in contested:
            resolutions[partner] = field_resolutions[name]

    applied: List[str] = []
    ignored: List[str] = []
    patch: Dict[str, object] = {}
    for name, choice in resolutions.items():
        if name not in contested:
            ignored.append(name)
            continue
        if choice == "new":
            patch[name] = getattr(source, name)
        applied.append(name)
    if ignored:
        logger.debug("Ignoring resolutions for uncontested fields: %s", ", ".join(ignored))
    if "team_name" in patch and "team_id" not in patch and target.team_id and not source.team_id:
        logger.warning(
            "Target %s takes team name %r from %s but keeps team id %s",
            target.id,
            patch["team_name"],
            source_label,
            target.team_id,
        )

    if source.user_id and not target.user_id:
        patch["user_id"] = source.user_id
        patch["is_guest"] = False
    elif source.user_id and source.user_id != target.user_id:
        logger.warning(
            "%s is linked to user %s but target %s already links %s; dropping source link",
            source_label,
            source.user_id,
            target.id,
            target.user_id,
        )
    return patch, applied, ignored


def _history_entry(
    source_player_id: str | None,
    patch: Mapping[str, object],
    applied: List[str],
    *,
    merged_by: str | None,
    career_stats_merged: bool = False,
) -> MergeHistoryEntry:
    return MergeHistoryEntry(
        timestamp=datetime.now(timezone.utc),
        source_player_id=source_player_id,
        merged_by=merged_by,
        merged_fields=[name for name in applied if name in patch],
        career_stats_merged=career_stats_merged,
    )


def merge_candidate(
    store: LeagueStore,
    target_player_id: str,
    candidate: PlayerCandidate,
    field_resolutions: Mapping[str, str] | None = None,
    *,
    merged_by: str | None = None,
) -> MergeResult:
    """Fold a colliding submission into the existing player it matched.

    The candidate was never stored, so there are no references to rewrite
    and no career to combine; only the resolved fields are applied.
    """

    field_resolutions = dict(field_resolutions or {})
    _validate_resolutions(field_resolutions)
    try:
        target = store.get_player(target_player_id)
    except NotFound:
        raise TargetNotFound(target_player_id) from None

    patch, applied, ignored = _resolve_fields(
        target, candidate, field_resolutions, source_label=f"Candidate {candidate.email or candidate.name}"
    )
    patch["merge_history"] = [
        *target.merge_history,
        _history_entry(None, patch, applied, merged_by=merged_by),
    ]
    updated = store.update_player(target.id, patch, expected_version=target.version)
    logger.info(
        "Merged submission for %s into %s (fields: %s)",
        candidate.email or candidate.name,
        target.id,
        ", ".join(applied) or "none",
    )
    return MergeResult(
        player=updated,
        source_player_id=None,
        applied_fields=applied,
        ignored_fields=ignored,
    )


def merge_players(
    store: LeagueStore,
    target_player_id: str,
    source_player_id: str,
    field_resolutions: Mapping[str, str] | None = None,
    *,
    merge_career_stats: bool = False,
    merged_by: str | None = None,
) -> MergeResult:
    """Merge ``source_player_id`` into ``target_player_id``.

    Only contested fields honour ``field_resolutions``: ``"new"`` takes the
    source value and ``"existing"`` keeps the target's. The target keeps its
    id and email. Its career aggregate is kept as is unless
    ``merge_career_stats`` is set, in which case both careers are summed.

    The field merge commits before references are rewritten. A collection
    that fails to rewrite does not undo the merge; it is reported on
    :attr:`MergeResult.warning` and queued for :func:`run_reference_repairs`.
    """

    if target_player_id == source_player_id:
        raise ValueError("cannot merge a player into itself")
    field_resolutions = dict(field_resolutions or {})
    _validate_resolutions(field_resolutions)

    try:
        target = store.get_player(target_player_id)
    except NotFound:
        raise TargetNotFound(target_player_id) from None
    try:
        source = store.get_player(source_player_id)
    except NotFound:
        raise SourceNotFound(source_player_id) from None

    patch, applied, ignored = _resolve_fields(target, source, field_resolutions, source_label=source.id)

    if merge_career_stats:
        patch["career_stats"] = combine(target.career_stats, source.career_stats)
    elif source.career_stats.total_matches:
        logger.warning(
            "Keeping career stats of %s; %d matches recorded under %s are not added",
            target.id,
            source.career_stats.total_matches,
            source.id,
        )

    merged_from = list(target.merged_from_player_ids)
    for player_id in [source.id, *source.merged_from_player_ids]:
        if player_id not in merged_from:
            merged_from.append(player_id)
    patch["merged_from_player_ids"] = merged_from
    patch["merge_history"] = [
        *target.merge_history,
        _history_entry(
            source.id,
            patch,
            applied,
            merged_by=merged_by,
            career_stats_merged=merge_career_stats,
        ),
    ]

    updated = store.update_player(target.id, patch, expected_version=target.version)
    logger.info("Merged player %s into %s (fields: %s)", source.id, target.id, ", ".join(applied) or "none")

    rewritten, failed = _rewrite_references(store, source.id, target.id, REFERENCE_COLLECTIONS)
    try:
        store.delete_player(source.id)
    except sqlite3.Error as exc:
        failed[SOURCE_RECORD] = str(exc)

    result = MergeResult(
        player=updated,
        source_player_id=source.id,
        applied_fields=applied,
        ignored_fields=ignored,
        career_stats_merged=merge_career_stats,
        rewritten=rewritten,
    )
    if failed:
        warning = ReferenceRewriteIncomplete(source.id, target.id, failed)
        result.warning = warning
        result.repair = store.enqueue_repair(
            source.id,
            target.id,
            list(failed),
            error="; ".join(f"{name}: {error}" for name, error in failed.items()),
        )
        logger.warning("%s (repair %s queued)", warning, result.repair.repair_id)
    return result


def _repair_step(store: LeagueStore, step: str, old_player_id: str, new_player_id: str) -> int:
    if step == SOURCE_RECORD:
        try:
            store.delete_player(old_player_id)
        except NotFound:
            return 0
        return 1
    return store.rewrite_player_references(step, old_player_id, new_player_id)


def _rewrite_references(
    store: LeagueStore,
    old_player_id: str,
    new_player_id: str,
    collections: List[str] | tuple[str, ...],
) -> tuple[Dict[str, int], Dict[str, str]]:
    rewritten: Dict[str, int] = {}
    failed: Dict[str, str] = {}
    for collection in collections:
        try:
            rewritten[collection] = _repair_step(store, collection, old_player_id, new_player_id)
        except sqlite3.Error as exc:
            failed[collection] = str(exc)
            continue
        logger.debug("Rewrote %d %s references %s -> %s", rewritten[collection], collection, old_player_id, new_player_id)
    return rewritten, failed


def run_reference_repairs(store: LeagueStore, *, limit: int = 50) -> List[ReferenceRepair]:
    """Retry every pending reference rewrite; returns the updated entries."""

    processed = []
    for repair in store.list_repairs(pending_only=True, limit=limit):
        _, failed = _rewrite_references(
            store, repair.old_player_id, repair.new_player_id, repair.pending_collections
        )
        if failed:
            updated = store.record_repair_failure(
                repair.repair_id,
                list(failed),
                "; ".join(f"{name}: {error}" for name, error in failed.items()),
            )
            logger.warning(
                "Repair %s still pending for %s (attempt %d)",
                repair.repair_id,
                ", ".join(failed),
                updated.attempts,
            )
        else:
            updated = store.resolve_repair(repair.repair_id)
            logger.info("Repair %s resolved", repair.repair_id)
        processed.append(updated)
    return processed


__all__ = [
    "MergeResult",
    "RESOLUTION_CHOICES",
    "SOURCE_RECORD",
    "ReferenceRewriteIncomplete",
    "SourceNotFound",
    "TargetNotFound",
    "merge_candidate",
    "merge_players",
    "run_reference_repairs",
]
