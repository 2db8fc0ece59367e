import pytest
from httpx import ASGITransport, AsyncClient

from leaguestats.api import create_app

from tests.factories import innings, make_match


@pytest.fixture
async def client(store):
    app = create_app(store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


def _match_payload(match_id: str, **kwargs) -> dict:
    return make_match(match_id, **kwargs).model_dump(mode="json")


@pytest.mark.anyio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_create_player_then_conflict(client):
    resp = await client.post("/players", json={"name": "Asha", "email": "a@x.org", "role": "batsman"})
    assert resp.status_code == 201
    created = resp.json()
    assert created["career_stats"]["batting_average"] is None

    resp = await client.post("/players", json={"name": "Asha Rao", "email": "A@X.org", "role": "bowler"})
    assert resp.status_code == 409
    conflict = resp.json()
    assert conflict["existing_player"]["id"] == created["id"]
    assert conflict["contested_fields"] == ["name", "role"]
    assert conflict["suggested_action"] == "merge_profiles"


@pytest.mark.anyio
async def test_camel_case_player_payload(client):
    resp = await client.post("/players", json={"name": "Ben", "battingStyle": "left-handed", "jerseyNumber": 9})
    assert resp.status_code == 201
    assert resp.json()["batting_style"] == "left-handed"


@pytest.mark.anyio
async def test_unknown_player_404(client):
    resp = await client.get("/players/missing")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_finalize_and_summary_flow(client):
    for team_id, name in (("A", "Alpha"), ("B", "Bravo")):
        resp = await client.post("/teams", json={"id": team_id, "name": name})
        assert resp.status_code == 201
    player = (await client.post("/players", json={"name": "Asha", "teamId": "A"})).json()

    resp = await client.post(
        "/matches",
        json=_match_payload(
            "m1",
            winner_id="A",
            team1_innings=[innings("A", 150, 5, 20.0)],
            team2_innings=[innings("B", 120, 9, 20.0)],
        ),
    )
    assert resp.status_code == 201

    performance = {
        "playerId": player["id"],
        "matchId": "m1",
        "matchResult": "won",
        "bowlingStats": {"overs": 4.3, "runs": 27, "wickets": 3},
    }
    resp = await client.post("/matches/m1/finalize", json={"performances": [performance]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["recorded"] == [player["id"]]
    summaries = {item["team_id"]: item for item in body["team_summaries"]}
    assert summaries["A"]["tournament_points"] == 2
    assert summaries["A"]["net_run_rate"] == pytest.approx(1.5)

    resp = await client.post("/matches/m1/finalize", json={"performances": [performance]})
    assert resp.json()["duplicates"] == [player["id"]]

    stats = (await client.get(f"/players/{player['id']}")).json()["career_stats"]
    assert stats["overs_bowled"] == 4.3
    assert stats["economy"] == pytest.approx(6.0)
    assert stats["counters"]["total_matches"] == 1

    resp = await client.get("/teams/B/summary")
    assert resp.json()["losses"] == 1

    resp = await client.get(f"/players/{player['id']}/performances")
    assert [item["match_id"] for item in resp.json()] == ["m1"]


@pytest.mark.anyio
async def test_invalid_overs_rejected(client):
    resp = await client.post(
        "/matches",
        json=_match_payload("m1") | {"match_data": {"scorecard": {"team1_innings": [{"total_overs": 4.7}]}}},
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_finalize_unknown_match(client):
    resp = await client.post("/matches/nope/finalize", json={"performances": []})
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_finalize_foreign_performance(client):
    await client.post("/matches", json=_match_payload("m1", winner_id="A"))
    resp = await client.post(
        "/matches/m1/finalize",
        json={"performances": [{"playerId": "p1", "matchId": "m2"}]},
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_merge_endpoint(client):
    target = (await client.post("/players", json={"name": "Asha", "email": "a@x.org", "role": "batsman"})).json()
    source = (await client.post("/players", json={"name": "Asha", "email": "b@x.org", "role": "bowler"})).json()

    resp = await client.post(
        "/players/merge",
        json={
            "target_player_id": target["id"],
            "source_player_id": source["id"],
            "field_resolutions": {"role": "new"},
            "merged_by": "admin",
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["player"]["role"] == "bowler"
    assert body["player"]["email"] == "a@x.org"
    assert body["warnings"] == []
    assert (await client.get(f"/players/{source['id']}")).status_code == 404

    resp = await client.post(
        "/players/merge",
        json={"target_player_id": target["id"], "source_player_id": source["id"]},
    )
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_merge_self_is_bad_request(client):
    player = (await client.post("/players", json={"name": "Asha"})).json()
    resp = await client.post(
        "/players/merge",
        json={"target_player_id": player["id"], "source_player_id": player["id"]},
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_merge_conflicting_submission_into_existing(client):
    existing = (await client.post("/players", json={"name": "P1", "email": "e@x.com", "teamName": "Red"})).json()
    candidate = {"name": "New Name", "email": "e@x.com", "teamName": "Blue"}
    assert (await client.post("/players", json=candidate)).status_code == 409

    resp = await client.post(
        "/players/merge",
        json={
            "target_player_id": existing["id"],
            "candidate": candidate,
            "field_resolutions": {"name": "new", "team_name": "existing"},
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["source_player_id"] is None
    assert body["player"]["name"] == "New Name"
    assert body["player"]["team_name"] == "Red"
    assert body["player"]["email"] == "e@x.com"

    resp = await client.post(
        "/players/merge",
        json={"target_player_id": existing["id"], "source_player_id": "x", "candidate": candidate},
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_standings_json_and_csv(client):
    for team_id in ("A", "B", "C"):
        await client.post("/teams", json={"id": team_id, "name": f"Team {team_id}"})
    await client.post(
        "/matches",
        json=_match_payload(
            "m1",
            winner_id="A",
            team1_innings=[innings("A", 150, 5, 20.0)],
            team2_innings=[innings("B", 120, 9, 20.0)],
        ),
    )

    resp = await client.get("/standings")
    rows = resp.json()
    assert [row["team_id"] for row in rows] == ["A", "B", "C"]
    assert rows[0]["points"] == 2

    resp = await client.get("/standings.csv", params={"team_id": ["A", "B"]})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.strip().splitlines()
    assert lines[0] == "Pos,Team,P,W,L,D,NR,Pts,NRR"
    assert lines[1].endswith("+1.500")
    assert len(lines) == 3

    resp = await client.get("/standings", params={"team_id": "missing"})
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_rederive_and_repairs(client):
    await client.post("/teams", json={"id": "A", "name": "Alpha"})
    resp = await client.post("/teams/A/rederive")
    assert resp.status_code == 200
    assert resp.json()["has_nrr_data"] is False

    assert (await client.post("/teams/missing/rederive")).status_code == 404
    assert (await client.get("/repairs")).json() == []
    assert (await client.post("/repairs/run")).json() == []
