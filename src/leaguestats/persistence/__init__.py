"""Persistence layer for players, teams, matches and performance history."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional
from uuid import uuid4

from leaguestats.models import (
    Match,
    MatchRosterEntry,
    Player,
    PlayerCandidate,
    PlayerPerformance,
    Team,
    User,
)


logger = logging.getLogger(__name__)

DB_PATH_ENV = "LEAGUESTATS_DB_PATH"
DEFAULT_DB_PATH = Path("leaguestats.sqlite")

# Collections touched by a player reference rewrite, in rewrite order.
REFERENCE_COLLECTIONS = ("performances", "match_roster", "team_players", "matches")


class NotFound(KeyError):
    """Referenced entity does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicatePerformance(RuntimeError):
    """A performance for this (match_id, player_id) pair is already stored."""

    def __init__(self, match_id: str, player_id: str):
        super().__init__(f"performance for player {player_id} in match {match_id} already recorded")
        self.match_id = match_id
        self.player_id = player_id


class StaleRecord(RuntimeError):
    """Conditional write lost against a concurrent update."""

    def __init__(self, kind: str, entity_id: str, expected_version: int):
        super().__init__(f"{kind} {entity_id} changed since version {expected_version}")
        self.kind = kind
        self.entity_id = entity_id
        self.expected_version = expected_version


@dataclass
class ReferenceRepair:
    repair_id: str
    old_player_id: str
    new_player_id: str
    pending_collections: List[str]
    attempts: int
    last_error: Optional[str]
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime]

    @property
    def is_pending(self) -> bool:
        return self.resolved_at is None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _to_json(model: Any) -> str:
    return model.model_dump_json(exclude={"id", "version", "player_ids"})


class LeagueStore:
    """SQLite-backed store behind the engine's CRUD contracts."""

    def __init__(self, db_path: Path | str | None = None):
        self._use_uri = False
        if db_path is None:
            db_path = os.getenv(DB_PATH_ENV) or DEFAULT_DB_PATH
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._transaction() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email_lower TEXT NOT NULL UNIQUE,
                user_json TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                email_lower TEXT,
                user_id TEXT,
                team_id TEXT,
                version INTEGER NOT NULL DEFAULT 0,
                player_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS players_email_idx ON players (email_lower)")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS teams (
                id TEXT PRIMARY KEY,
                team_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS team_players (
                team_id TEXT NOT NULL,
                player_id TEXT NOT NULL,
                position INTEGER NOT NULL DEFAULT 0,
                PRIMARY KEY (team_id, player_id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS matches (
                id TEXT PRIMARY KEY,
                team1_id TEXT,
                team2_id TEXT,
                status TEXT NOT NULL,
                match_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS performances (
                id TEXT PRIMARY KEY,
                match_id TEXT NOT NULL,
                player_id TEXT NOT NULL,
                team_id TEXT,
                performance_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                UNIQUE (match_id, player_id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS match_roster (
                id TEXT PRIMARY KEY,
                match_id TEXT NOT NULL,
                player_id TEXT,
                entry_json TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS reference_repairs (
                id TEXT PRIMARY KEY,
                old_player_id TEXT NOT NULL,
                new_player_id TEXT NOT NULL,
                pending_json TEXT NOT NULL,
                attempts INTEGER NOT NULL DEFAULT 0,
                last_error TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                resolved_at TEXT
            )
            """
        )

    # Users -----------------------------------------------------------------

    def create_user(self, user: User) -> User:
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO users (id, email_lower, user_json, created_at) VALUES (?, ?, ?, ?)",
                (user.id, user.email.lower(), user.model_dump_json(), _now().isoformat()),
            )
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT user_json FROM users WHERE email_lower = ?",
                (email.strip().lower(),),
            ).fetchone()
        if row is None:
            return None
        return User.model_validate_json(row["user_json"])

    # Players ---------------------------------------------------------------

    def create_player(self, player: Player | PlayerCandidate, *, player_id: str | None = None) -> Player:
        now = _now()
        if isinstance(player, PlayerCandidate):
            player = Player(id=player_id or f"player-{uuid4().hex}", **player.model_dump())
        player = player.model_copy(update={"version": 0, "created_at": now, "updated_at": now})
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO players (
                    id, email_lower, user_id, team_id, version, player_json, created_at, updated_at
                ) VALUES (?, ?, ?, ?, 0, ?, ?, ?)
                """,
                (
                    player.id,
                    player.email.lower() if player.email else None,
                    player.user_id,
                    player.team_id,
                    _to_json(player),
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
        return player

    def get_player(self, player_id: str) -> Player:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            raise NotFound("Player", player_id)
        return self._row_to_player(row)

    def list_players(self, *, team_id: str | None = None) -> List[Player]:
        query = "SELECT * FROM players"
        params: list[str] = []
        if team_id:
            query += " WHERE team_id = ?"
            params.append(team_id)
        query += " ORDER BY created_at, rowid"
        with self._transaction() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_player(row) for row in rows]

    def find_players_by_email(
        self,
        email: str,
        *,
        team_id: str | None = None,
        exclude_player_id: str | None = None,
    ) -> List[Player]:
        query = "SELECT * FROM players WHERE email_lower = ?"
        params: list[str] = [email.strip().lower()]
        if team_id:
            query += " AND team_id = ?"
            params.append(team_id)
        if exclude_player_id:
            query += " AND id != ?"
            params.append(exclude_player_id)
        query += " ORDER BY created_at, rowid"
        with self._transaction() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_player(row) for row in rows]

    def find_player_by_user(self, user_id: str) -> Optional[Player]:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM players WHERE user_id = ?", (user_id,)).fetchone()
        return self._row_to_player(row) if row is not None else None

    def update_player(
        self,
        player_id: str,
        patch: Mapping[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Player:
        """Apply ``patch`` and bump the version.

        With ``expected_version`` the write only lands if nobody else updated
        the player in between; otherwise :class:`StaleRecord` is raised.
        """

        with self._transaction() as conn:
            return self._update_player(conn, player_id, patch, expected_version)

    def _update_player(
        self,
        conn: sqlite3.Connection,
        player_id: str,
        patch: Mapping[str, Any],
        expected_version: int | None,
    ) -> Player:
        row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            raise NotFound("Player", player_id)
        current = self._row_to_player(row)
        if expected_version is not None and current.version != expected_version:
            raise StaleRecord("Player", player_id, expected_version)

        now = _now()
        merged = current.model_dump()
        merged.update({key: value for key, value in patch.items() if key not in {"id", "version"}})
        merged["updated_at"] = now
        updated = Player.model_validate(merged)
        cursor = conn.execute(
            """
            UPDATE players
            SET email_lower = ?, user_id = ?, team_id = ?, version = version + 1,
                player_json = ?, updated_at = ?
            WHERE id = ? AND version = ?
            """,
            (
                updated.email.lower() if updated.email else None,
                updated.user_id,
                updated.team_id,
                _to_json(updated),
                now.isoformat(),
                player_id,
                current.version,
            ),
        )
        if cursor.rowcount != 1:
            raise StaleRecord("Player", player_id, current.version)
        return updated.model_copy(update={"version": current.version + 1})

    def delete_player(self, player_id: str) -> None:
        with self._transaction() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
            if cursor.rowcount == 0:
                raise NotFound("Player", player_id)

    def _row_to_player(self, row: sqlite3.Row) -> Player:
        data = json.loads(row["player_json"])
        data["id"] = row["id"]
        data["version"] = row["version"]
        return Player.model_validate(data)

    # Teams -----------------------------------------------------------------

    def create_team(self, team: Team) -> Team:
        now = _now()
        team = team.model_copy(update={"created_at": now, "updated_at": now})
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO teams (id, team_json, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (team.id, _to_json(team), now.isoformat(), now.isoformat()),
            )
            for position, player_id in enumerate(team.player_ids):
                conn.execute(
                    "INSERT OR IGNORE INTO team_players (team_id, player_id, position) VALUES (?, ?, ?)",
                    (team.id, player_id, position),
                )
        return team

    def get_team(self, team_id: str) -> Team:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM teams WHERE id = ?", (team_id,)).fetchone()
            if row is None:
                raise NotFound("Team", team_id)
            roster = conn.execute(
                "SELECT player_id FROM team_players WHERE team_id = ? ORDER BY position",
                (team_id,),
            ).fetchall()
        data = json.loads(row["team_json"])
        data["id"] = row["id"]
        data["player_ids"] = [item["player_id"] for item in roster]
        return Team.model_validate(data)

    def list_teams(self) -> List[Team]:
        with self._transaction() as conn:
            rows = conn.execute("SELECT id FROM teams ORDER BY created_at, rowid").fetchall()
        return [self.get_team(row["id"]) for row in rows]

    def add_team_player(self, team_id: str, player_id: str) -> None:
        with self._transaction() as conn:
            if conn.execute("SELECT 1 FROM teams WHERE id = ?", (team_id,)).fetchone() is None:
                raise NotFound("Team", team_id)
            position = conn.execute(
                "SELECT COUNT(*) FROM team_players WHERE team_id = ?", (team_id,)
            ).fetchone()[0]
            conn.execute(
                "INSERT OR IGNORE INTO team_players (team_id, player_id, position) VALUES (?, ?, ?)",
                (team_id, player_id, position),
            )

    def update_team_stats(self, team_id: str, patch: Mapping[str, Any]) -> Team:
        team = self.get_team(team_id)
        allowed = set(Team.model_fields) - {"id", "name", "sport", "player_ids", "created_at", "updated_at"}
        unknown = set(patch) - allowed
        if unknown:
            raise ValueError(f"unknown team stat fields: {sorted(unknown)}")
        now = _now()
        updated = team.model_copy(update={**dict(patch), "updated_at": now})
        updated = Team.model_validate(updated.model_dump())
        with self._transaction() as conn:
            conn.execute(
                "UPDATE teams SET team_json = ?, updated_at = ? WHERE id = ?",
                (_to_json(updated), now.isoformat(), team_id),
            )
        return updated

    # Matches ---------------------------------------------------------------

    def save_match(self, match: Match) -> Match:
        now = _now()
        if match.created_at is None:
            match = match.model_copy(update={"created_at": now})
        team1_id, team2_id = match.team_ids
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO matches (id, team1_id, team2_id, status, match_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (id) DO UPDATE SET
                    team1_id = excluded.team1_id,
                    team2_id = excluded.team2_id,
                    status = excluded.status,
                    match_json = excluded.match_json,
                    updated_at = excluded.updated_at
                """,
                (
                    match.id,
                    team1_id,
                    team2_id,
                    match.status,
                    _to_json(match),
                    match.created_at.isoformat(),
                    now.isoformat(),
                ),
            )
        return match

    def get_match(self, match_id: str) -> Match:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM matches WHERE id = ?", (match_id,)).fetchone()
        if row is None:
            raise NotFound("Match", match_id)
        return self._row_to_match(row)

    def list_team_matches(self, team_id: str, *, status: str | None = "completed") -> List[Match]:
        """Matches where ``team_id`` is either side, newest first."""

        query = "SELECT * FROM matches WHERE (team1_id = ? OR team2_id = ?)"
        params: list[str] = [team_id, team_id]
        if status:
            query += " AND status = ?"
            params.append(status)
        query += " ORDER BY created_at DESC, rowid DESC"
        with self._transaction() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_match(row) for row in rows]

    def _row_to_match(self, row: sqlite3.Row) -> Match:
        data = json.loads(row["match_json"])
        data["id"] = row["id"]
        return Match.model_validate(data)

    # Performances ----------------------------------------------------------

    def record_player_performance(self, record: PlayerPerformance) -> PlayerPerformance:
        with self._transaction() as conn:
            return self._insert_performance(conn, record)

    def record_performance_with_career(
        self,
        record: PlayerPerformance,
        career_patch: Mapping[str, Any],
        *,
        expected_version: int,
    ) -> tuple[PlayerPerformance, Player]:
        """Insert ``record`` and update its player in one transaction.

        Raises :class:`DuplicatePerformance` if the pair is already stored and
        :class:`StaleRecord` if the player moved past ``expected_version``;
        either way nothing is written.
        """

        with self._transaction() as conn:
            stored = self._insert_performance(conn, record)
            player = self._update_player(conn, record.player_id, career_patch, expected_version)
        return stored, player

    def _insert_performance(self, conn: sqlite3.Connection, record: PlayerPerformance) -> PlayerPerformance:
        now = _now()
        record = record.model_copy(
            update={"id": record.id or f"perf-{uuid4().hex}", "created_at": record.created_at or now}
        )
        try:
            conn.execute(
                """
                INSERT INTO performances (id, match_id, player_id, team_id, performance_json, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.match_id,
                    record.player_id,
                    record.team_id,
                    record.model_dump_json(exclude={"id", "match_id", "player_id"}),
                    record.created_at.isoformat(),
                ),
            )
        except sqlite3.IntegrityError:
            raise DuplicatePerformance(record.match_id, record.player_id) from None
        return record

    def has_performance(self, match_id: str, player_id: str) -> bool:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT 1 FROM performances WHERE match_id = ? AND player_id = ?",
                (match_id, player_id),
            ).fetchone()
        return row is not None

    def get_player_performances(self, player_id: str) -> List[PlayerPerformance]:
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM performances WHERE player_id = ? ORDER BY created_at, rowid",
                (player_id,),
            ).fetchall()
        return [self._row_to_performance(row) for row in rows]

    def _row_to_performance(self, row: sqlite3.Row) -> PlayerPerformance:
        data = json.loads(row["performance_json"])
        data.update({"id": row["id"], "match_id": row["match_id"], "player_id": row["player_id"]})
        return PlayerPerformance.model_validate(data)

    # Match roster ----------------------------------------------------------

    def add_roster_entry(self, entry: MatchRosterEntry) -> MatchRosterEntry:
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO match_roster (id, match_id, player_id, entry_json) VALUES (?, ?, ?, ?)",
                (
                    entry.id,
                    entry.match_id,
                    entry.player_id,
                    entry.model_dump_json(exclude={"id", "match_id", "player_id"}),
                ),
            )
        return entry

    def list_roster_entries(self, match_id: str) -> List[MatchRosterEntry]:
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM match_roster WHERE match_id = ? ORDER BY rowid", (match_id,)
            ).fetchall()
        entries = []
        for row in rows:
            data = json.loads(row["entry_json"])
            data.update({"id": row["id"], "match_id": row["match_id"], "player_id": row["player_id"]})
            entries.append(MatchRosterEntry.model_validate(data))
        return entries

    # Reference rewrite -----------------------------------------------------

    def rewrite_player_references(self, collection: str, old_player_id: str, new_player_id: str) -> int:
        """Point one collection's references at ``new_player_id``.

        Each collection commits on its own; callers treat a failure as a
        partial rewrite rather than rolling back the others.
        """

        rewriters = {
            "performances": self._rewrite_performances,
            "match_roster": self._rewrite_match_roster,
            "team_players": self._rewrite_team_players,
            "matches": self._rewrite_matches,
        }
        if collection not in rewriters:
            raise ValueError(f"unknown reference collection {collection!r}")
        with self._transaction() as conn:
            return rewriters[collection](conn, old_player_id, new_player_id)

    def _rewrite_performances(self, conn: sqlite3.Connection, old: str, new: str) -> int:
        cursor = conn.execute(
            "UPDATE OR IGNORE performances SET player_id = ? WHERE player_id = ?",
            (new, old),
        )
        # Rows left behind collided with a record the target already has for the same match.
        dropped = conn.execute("DELETE FROM performances WHERE player_id = ?", (old,)).rowcount
        if dropped:
            logger.warning(
                "Dropped %d duplicate performance rows for %s already recorded under %s",
                dropped,
                old,
                new,
            )
        return cursor.rowcount

    def _rewrite_match_roster(self, conn: sqlite3.Connection, old: str, new: str) -> int:
        return conn.execute(
            "UPDATE match_roster SET player_id = ? WHERE player_id = ?",
            (new, old),
        ).rowcount

    def _rewrite_team_players(self, conn: sqlite3.Connection, old: str, new: str) -> int:
        rows = conn.execute(
            "SELECT team_id, position FROM team_players WHERE player_id = ?", (old,)
        ).fetchall()
        for row in rows:
            conn.execute(
                "INSERT OR IGNORE INTO team_players (team_id, player_id, position) VALUES (?, ?, ?)",
                (row["team_id"], new, row["position"]),
            )
        conn.execute("DELETE FROM team_players WHERE player_id = ?", (old,))
        return len(rows)

    def _rewrite_matches(self, conn: sqlite3.Connection, old: str, new: str) -> int:
        rows = conn.execute(
            "SELECT id, match_json FROM matches WHERE instr(match_json, ?) > 0",
            (old,),
        ).fetchall()
        updated = 0
        for row in rows:
            data = json.loads(row["match_json"])
            if _replace_player_id(data.get("match_data") or {}, old, new):
                conn.execute(
                    "UPDATE matches SET match_json = ?, updated_at = ? WHERE id = ?",
                    (json.dumps(data), _now().isoformat(), row["id"]),
                )
                updated += 1
        return updated

    # Repair queue ----------------------------------------------------------

    def enqueue_repair(
        self,
        old_player_id: str,
        new_player_id: str,
        pending_collections: List[str],
        *,
        error: str | None = None,
    ) -> ReferenceRepair:
        repair_id = f"repair-{uuid4().hex}"
        now = _now().isoformat()
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO reference_repairs (
                    id, old_player_id, new_player_id, pending_json, attempts,
                    last_error, created_at, updated_at
                ) VALUES (?, ?, ?, ?, 1, ?, ?, ?)
                """,
                (repair_id, old_player_id, new_player_id, json.dumps(pending_collections), error, now, now),
            )
        return self.get_repair(repair_id)

    def get_repair(self, repair_id: str) -> ReferenceRepair:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM reference_repairs WHERE id = ?", (repair_id,)).fetchone()
        if row is None:
            raise NotFound("Repair", repair_id)
        return self._row_to_repair(row)

    def list_repairs(self, *, pending_only: bool = True, limit: int = 50) -> List[ReferenceRepair]:
        query = "SELECT * FROM reference_repairs"
        if pending_only:
            query += " WHERE resolved_at IS NULL"
        query += " ORDER BY created_at, rowid LIMIT ?"
        with self._transaction() as conn:
            rows = conn.execute(query, (limit,)).fetchall()
        return [self._row_to_repair(row) for row in rows]

    def record_repair_failure(self, repair_id: str, pending_collections: List[str], error: str) -> ReferenceRepair:
        with self._transaction() as conn:
            conn.execute(
                """
                UPDATE reference_repairs
                SET pending_json = ?, attempts = attempts + 1, last_error = ?, updated_at = ?
                WHERE id = ?
                """,
                (json.dumps(pending_collections), error, _now().isoformat(), repair_id),
            )
        return self.get_repair(repair_id)

    def resolve_repair(self, repair_id: str) -> ReferenceRepair:
        now = _now().isoformat()
        with self._transaction() as conn:
            conn.execute(
                """
                UPDATE reference_repairs
                SET pending_json = '[]', attempts = attempts + 1, resolved_at = ?, updated_at = ?
                WHERE id = ?
                """,
                (now, now, repair_id),
            )
        return self.get_repair(repair_id)

    def _row_to_repair(self, row: sqlite3.Row) -> ReferenceRepair:
        def _parse_ts(value: Optional[str]) -> Optional[datetime]:
            return datetime.fromisoformat(value) if value else None

        return ReferenceRepair(
            repair_id=row["id"],
            old_player_id=row["old_player_id"],
            new_player_id=row["new_player_id"],
            pending_collections=json.loads(row["pending_json"]),
            attempts=row["attempts"],
            last_error=row["last_error"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            resolved_at=_parse_ts(row["resolved_at"]),
        )


def _replace_player_id(match_data: dict, old: str, new: str) -> bool:
    changed = False
    for key in ("team1_players", "team2_players"):
        players = match_data.get(key) or []
        if old in players:
            match_data[key] = [new if player_id == old else player_id for player_id in players]
            changed = True
    scorecard = match_data.get("scorecard") or {}
    for innings_key in ("team1_innings", "team2_innings"):
        for innings in scorecard.get(innings_key) or []:
            for role in ("batsmen", "bowlers"):
                for entry in innings.get(role) or []:
                    if entry.get("player_id") == old:
                        entry["player_id"] = new
                        changed = True
    return changed


__all__ = [
    "DEFAULT_DB_PATH",
    "DB_PATH_ENV",
    "DuplicatePerformance",
    "LeagueStore",
    "NotFound",
    "REFERENCE_COLLECTIONS",
    "ReferenceRepair",
    "StaleRecord",
]
