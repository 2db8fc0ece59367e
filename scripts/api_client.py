"""Lightweight REST client for the leaguestats API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_resolutions(raw: str) -> dict[str, str]:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid resolutions JSON: {exc}") from exc


def _print(resp: httpx.Response) -> None:
    print(json.dumps(resp.json(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the leaguestats REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--get-player", metavar="PLAYER_ID", help="Fetch a player with career rates")
    parser.add_argument("--create-player", type=Path, metavar="JSON", help="Submit a player candidate")
    parser.add_argument("--merge", nargs=2, metavar=("TARGET", "SOURCE"), help="Merge SOURCE into TARGET")
    parser.add_argument(
        "--merge-candidate",
        nargs=2,
        metavar=("TARGET", "CANDIDATE_JSON"),
        help="Fold a conflicting submission into TARGET",
    )
    parser.add_argument("--resolutions", default="", help="JSON field resolutions for --merge or --merge-candidate")
    parser.add_argument("--merge-career-stats", action="store_true", help="Sum careers during --merge")
    parser.add_argument("--finalize", nargs=2, type=Path, metavar=("MATCH_JSON", "PERFORMANCES_JSON"))
    parser.add_argument("--summary", metavar="TEAM_ID", help="Fetch a team summary")
    parser.add_argument("--standings", action="store_true", help="Fetch the standings table")
    parser.add_argument("--export-standings", type=Path, help="Download the standings CSV")
    parser.add_argument("--repairs", action="store_true", help="Run pending reference repairs")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.create_player:
            resp = client.post("/players", json=json.loads(args.create_player.read_text(encoding="utf-8")))
            if resp.status_code == 409:
                conflict = resp.json()
                print(f"Conflict: {conflict['message']}")
                print(f"Contested fields: {', '.join(conflict['contested_fields']) or 'none'}")
                return
            resp.raise_for_status()
            _print(resp)
        if args.get_player:
            resp = client.get(f"/players/{args.get_player}")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.get_player} not found")
            resp.raise_for_status()
            _print(resp)
        if args.merge:
            target, source = args.merge
            resp = client.post(
                "/players/merge",
                json={
                    "target_player_id": target,
                    "source_player_id": source,
                    "field_resolutions": build_resolutions(args.resolutions),
                    "merge_career_stats": args.merge_career_stats,
                },
            )
            if resp.status_code == 404:
                raise SystemExit(resp.json().get("detail", "player not found"))
            resp.raise_for_status()
            payload = resp.json()
            for warning in payload.get("warnings", []):
                print(f"Warning: {warning}")
            print(json.dumps(payload, indent=2))
        if args.merge_candidate:
            target, candidate_path = args.merge_candidate
            resp = client.post(
                "/players/merge",
                json={
                    "target_player_id": target,
                    "candidate": json.loads(Path(candidate_path).read_text(encoding="utf-8")),
                    "field_resolutions": build_resolutions(args.resolutions),
                },
            )
            if resp.status_code == 404:
                raise SystemExit(resp.json().get("detail", "player not found"))
            resp.raise_for_status()
            _print(resp)
        if args.finalize:
            match_path, performances_path = args.finalize
            match = json.loads(match_path.read_text(encoding="utf-8"))
            resp = client.post("/matches", json=match)
            resp.raise_for_status()
            match_id = resp.json()["id"]
            performances = json.loads(performances_path.read_text(encoding="utf-8"))
            resp = client.post(f"/matches/{match_id}/finalize", json={"performances": performances})
            resp.raise_for_status()
            _print(resp)
        if args.summary:
            resp = client.get(f"/teams/{args.summary}/summary")
            if resp.status_code == 404:
                raise SystemExit(f"team {args.summary} not found")
            resp.raise_for_status()
            _print(resp)
        if args.standings:
            resp = client.get("/standings")
            resp.raise_for_status()
            _print(resp)
        if args.export_standings:
            resp = client.get("/standings.csv")
            resp.raise_for_status()
            args.export_standings.write_text(resp.text)
            print(f"CSV export saved to {args.export_standings}")
        if args.repairs:
            resp = client.post("/repairs/run")
            resp.raise_for_status()
            _print(resp)


if __name__ == "__main__":
    main()
