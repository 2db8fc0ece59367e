"""REST API for the league statistics engine."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse, Response

from leaguestats.api.schemas import (
    ConflictResponse,
    FinalizeRequest,
    FinalizeResponse,
    MergeRequest,
    MergeResponse,
    PlayerResponse,
    RepairResponse,
    StandingRowResponse,
    TeamSummaryResponse,
)
from leaguestats.finalize import finalize_match, rederive_team_stats, team_summary
from leaguestats.identity import (
    SourceNotFound,
    TargetNotFound,
    merge_candidate,
    merge_players,
    register_player,
    run_reference_repairs,
)
from leaguestats.models import Match, PlayerCandidate, Team
from leaguestats.persistence import LeagueStore, NotFound, ReferenceRepair, StaleRecord
from leaguestats.standings import build_standings, export_standings_to_csv


logger = logging.getLogger("uvicorn.error")


def _repair_to_response(repair: ReferenceRepair) -> RepairResponse:
    return RepairResponse(
        repair_id=repair.repair_id,
        old_player_id=repair.old_player_id,
        new_player_id=repair.new_player_id,
        pending_collections=repair.pending_collections,
        attempts=repair.attempts,
        last_error=repair.last_error,
        resolved=not repair.is_pending,
    )


def create_app(store: LeagueStore | None = None) -> FastAPI:
    app = FastAPI(title="leaguestats")
    store = store or LeagueStore()
    app.state.store = store

    def _fetch_player_or_404(player_id: str):
        try:
            return store.get_player(player_id)
        except NotFound:
            raise HTTPException(status_code=404, detail="Player not found") from None

    def _fetch_team_or_404(team_id: str) -> Team:
        try:
            return store.get_team(team_id)
        except NotFound:
            raise HTTPException(status_code=404, detail="Team not found") from None

    def _standings_rows(team_ids: Optional[List[str]]):
        teams = [_fetch_team_or_404(team_id) for team_id in team_ids] if team_ids else store.list_teams()
        summaries = [team_summary(store, team.id) for team in teams]
        return build_standings(summaries, team_names={team.id: team.name for team in teams})

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/players", response_model=PlayerResponse, status_code=201)
    async def create_player(candidate: PlayerCandidate):
        try:
            registration = register_player(store, candidate)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if registration.conflict is not None:
            payload = ConflictResponse.model_validate(registration.conflict.to_dict())
            return JSONResponse(status_code=409, content=payload.model_dump(mode="json"))
        return PlayerResponse.from_player(registration.player)

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    async def get_player(player_id: str):
        return PlayerResponse.from_player(_fetch_player_or_404(player_id))

    @app.get("/players/{player_id}/performances")
    async def get_player_performances(player_id: str) -> list[dict[str, Any]]:
        _fetch_player_or_404(player_id)
        return [record.model_dump(mode="json") for record in store.get_player_performances(player_id)]

    @app.post("/players/merge", response_model=MergeResponse)
    async def merge(request: MergeRequest):
        if (request.source_player_id is None) == (request.candidate is None):
            raise HTTPException(status_code=400, detail="Provide exactly one of source_player_id or candidate")
        try:
            if request.candidate is not None:
                result = merge_candidate(
                    store,
                    request.target_player_id,
                    request.candidate,
                    request.field_resolutions,
                    merged_by=request.merged_by,
                )
            else:
                result = merge_players(
                    store,
                    request.target_player_id,
                    request.source_player_id,
                    request.field_resolutions,
                    merge_career_stats=request.merge_career_stats,
                    merged_by=request.merged_by,
                )
        except (TargetNotFound, SourceNotFound) as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except StaleRecord as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return MergeResponse(
            player=PlayerResponse.from_player(result.player),
            source_player_id=result.source_player_id,
            applied_fields=result.applied_fields,
            ignored_fields=result.ignored_fields,
            career_stats_merged=result.career_stats_merged,
            rewritten=result.rewritten,
            warnings=[str(result.warning)] if result.warning else [],
            repair_id=result.repair.repair_id if result.repair else None,
        )

    @app.post("/teams", status_code=201)
    async def create_team(team: Team) -> dict[str, Any]:
        try:
            store.get_team(team.id)
        except NotFound:
            return store.create_team(team).model_dump(mode="json")
        raise HTTPException(status_code=409, detail="Team already exists")

    @app.get("/teams/{team_id}/summary", response_model=TeamSummaryResponse)
    async def get_team_summary(team_id: str):
        _fetch_team_or_404(team_id)
        return TeamSummaryResponse.from_summary(team_summary(store, team_id))

    @app.post("/teams/{team_id}/rederive", response_model=TeamSummaryResponse)
    async def rederive(team_id: str):
        _fetch_team_or_404(team_id)
        return TeamSummaryResponse.from_summary(rederive_team_stats(store, team_id))

    @app.post("/matches", status_code=201)
    async def save_match(match: Match) -> dict[str, Any]:
        return store.save_match(match).model_dump(mode="json")

    @app.post("/matches/{match_id}/finalize", response_model=FinalizeResponse)
    async def finalize(match_id: str, request: FinalizeRequest):
        try:
            match = store.get_match(match_id)
        except NotFound:
            raise HTTPException(status_code=404, detail="Match not found") from None
        try:
            report = finalize_match(store, match, request.performances)
        except StaleRecord as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return FinalizeResponse(
            match_id=report.match_id,
            recorded=report.recorded,
            duplicates=report.duplicates,
            missing_players=report.missing_players,
            team_summaries=[
                TeamSummaryResponse.from_summary(summary) for summary in report.team_summaries.values()
            ],
        )

    @app.get("/standings", response_model=list[StandingRowResponse])
    async def standings(team_id: Optional[List[str]] = Query(default=None)):
        return [StandingRowResponse.from_row(row) for row in _standings_rows(team_id)]

    @app.get("/standings.csv")
    async def standings_csv(team_id: Optional[List[str]] = Query(default=None)):
        csv_text = export_standings_to_csv(_standings_rows(team_id))
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=standings.csv"},
        )

    @app.get("/repairs", response_model=list[RepairResponse])
    async def list_repairs(pending_only: bool = True, limit: int = 50):
        return [_repair_to_response(repair) for repair in store.list_repairs(pending_only=pending_only, limit=limit)]

    @app.post("/repairs/run", response_model=list[RepairResponse])
    async def run_repairs():
        processed = run_reference_repairs(store)
        logger.info("Processed %d reference repairs", len(processed))
        return [_repair_to_response(repair) for repair in processed]

    return app


__all__ = ["create_app"]
