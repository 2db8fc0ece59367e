"""Command-line interface for league statistics maintenance."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from pydantic import ValidationError

from leaguestats.config_loader import ResolutionProfile
from leaguestats.finalize import finalize_match, rederive_team_stats, team_summary
from leaguestats.identity import merge_candidate, merge_players, run_reference_repairs
from leaguestats.models import Match, PlayerCandidate, PlayerPerformance
from leaguestats.persistence import LeagueStore, NotFound
from leaguestats.standings import build_standings, export_standings_to_csv, format_nrr


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Maintain player careers and team standings")
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database path (defaults to LEAGUESTATS_DB_PATH or ./leaguestats.sqlite)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    summary = subparsers.add_parser("summary", help="Show a team's aggregated record")
    summary.add_argument("team_id")
    summary.add_argument("--rederive", action="store_true", help="Store the recomputed figures on the team")

    finalize = subparsers.add_parser("finalize", help="Record a completed match")
    finalize.add_argument("match", type=Path, help="Match JSON file")
    finalize.add_argument(
        "--performances",
        type=Path,
        default=None,
        help="JSON file holding a list of player performances for the match",
    )

    merge = subparsers.add_parser("merge", help="Merge a duplicate player into another")
    merge.add_argument("target", help="Player id that survives the merge")
    merge.add_argument("source", nargs="?", default=None, help="Player id folded into the target and removed")
    merge.add_argument(
        "--candidate",
        type=Path,
        default=None,
        help="Player submission JSON to fold into the target instead of a stored player",
    )
    merge.add_argument(
        "--prefer",
        action="append",
        default=[],
        help="Field resolution (e.g., name=new, role=existing)",
    )
    merge.add_argument("--profile", type=Path, default=None, help="Load resolution profile JSON")
    merge.add_argument("--save-profile", type=Path, default=None, help="Save resolution profile JSON")
    merge.add_argument(
        "--merge-career-stats",
        action="store_true",
        default=None,
        help="Add the source player's career to the target's",
    )
    merge.add_argument("--merged-by", default=None, help="Operator recorded in merge history")

    subparsers.add_parser("repair", help="Retry pending reference rewrites")

    standings = subparsers.add_parser("standings", help="Print or export a standings table")
    standings.add_argument("team_ids", nargs="*", help="Teams to include (all stored teams if omitted)")
    standings.add_argument("--output", type=Path, default=None, help="Write standings CSV to this path")

    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid resolution entry '{entry}', expected field=new|existing")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _print_summary(summary) -> None:
    print(f"Team {summary.team_id}")
    print(
        f"  P {summary.total_matches}  W {summary.wins}  L {summary.losses}  "
        f"D {summary.draws}  NR {summary.skipped_matches}"
    )
    print(f"  Points {summary.tournament_points}  Win rate {summary.win_rate:.1f}%")
    print(f"  Runs {summary.total_runs_scored}/{summary.total_runs_conceded}  NRR {format_nrr(summary.net_run_rate)}")


def _run_summary(store: LeagueStore, args: argparse.Namespace) -> None:
    if args.rederive:
        summary = rederive_team_stats(store, args.team_id)
    else:
        summary = team_summary(store, args.team_id)
    _print_summary(summary)


def _run_finalize(store: LeagueStore, args: argparse.Namespace) -> None:
    match = Match.model_validate_json(args.match.read_text(encoding="utf-8"))
    performances: list[PlayerPerformance] = []
    if args.performances:
        payload = json.loads(args.performances.read_text(encoding="utf-8"))
        performances = [PlayerPerformance.model_validate(item) for item in payload]
    report = finalize_match(store, match, performances)
    print(
        f"Match {report.match_id}: recorded {len(report.recorded)} performances, "
        f"skipped {len(report.duplicates)} duplicates"
    )
    if report.missing_players:
        print(f"Unknown players: {', '.join(report.missing_players)}")
    for summary in report.team_summaries.values():
        _print_summary(summary)


def _run_merge(store: LeagueStore, args: argparse.Namespace) -> None:
    if (args.source is None) == (args.candidate is None):
        raise ValueError("give either a source player id or --candidate, not both")
    profile = ResolutionProfile.load(args.profile) if args.profile else ResolutionProfile()
    profile = profile.with_overrides(_parse_mapping(args.prefer))
    if args.merge_career_stats is not None:
        profile.merge_career_stats = args.merge_career_stats
    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved resolution profile to {args.save_profile}")

    if args.candidate is not None:
        candidate = PlayerCandidate.model_validate_json(args.candidate.read_text(encoding="utf-8"))
        result = merge_candidate(
            store, args.target, candidate, profile.field_resolutions, merged_by=args.merged_by
        )
        print(f"Merged submission for {candidate.name} into {result.player.id}")
        if result.applied_fields:
            print(f"Resolved fields: {', '.join(result.applied_fields)}")
        return

    result = merge_players(
        store,
        args.target,
        args.source,
        profile.field_resolutions,
        merge_career_stats=profile.merge_career_stats,
        merged_by=args.merged_by,
    )
    print(f"Merged {result.source_player_id} into {result.player.id}")
    if result.applied_fields:
        print(f"Resolved fields: {', '.join(result.applied_fields)}")
    if result.ignored_fields:
        print(f"Ignored uncontested fields: {', '.join(result.ignored_fields)}")
    for collection, count in result.rewritten.items():
        print(f"  {collection}: {count} references rewritten")
    if result.warning is not None:
        print(f"Warning: {result.warning} (repair {result.repair.repair_id} queued)")


def _run_repair(store: LeagueStore, args: argparse.Namespace) -> None:
    processed = run_reference_repairs(store)
    if not processed:
        print("No pending repairs")
        return
    for repair in processed:
        state = "pending" if repair.is_pending else "resolved"
        print(f"{repair.repair_id}: {repair.old_player_id} -> {repair.new_player_id} {state}")


def _run_standings(store: LeagueStore, args: argparse.Namespace) -> None:
    teams = [store.get_team(team_id) for team_id in args.team_ids] if args.team_ids else store.list_teams()
    rows = build_standings(
        [team_summary(store, team.id) for team in teams],
        team_names={team.id: team.name for team in teams},
    )
    csv_text = export_standings_to_csv(rows)
    if args.output:
        args.output.write_text(csv_text, encoding="utf-8")
        print(f"Wrote {len(rows)} standings rows to {args.output}")
    else:
        print(csv_text, end="")


_COMMANDS = {
    "summary": _run_summary,
    "finalize": _run_finalize,
    "merge": _run_merge,
    "repair": _run_repair,
    "standings": _run_standings,
}


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    store = LeagueStore(args.db)
    try:
        _COMMANDS[args.command](store, args)
    except NotFound as exc:
        raise SystemExit(str(exc)) from exc
    except (ValidationError, ValueError) as exc:
        raise SystemExit(f"Invalid input: {exc}") from exc


if __name__ == "__main__":
    main()
