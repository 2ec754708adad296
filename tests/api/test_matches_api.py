"""
API tests for match response and archive endpoints.
"""
import pytest

from app.models import MatchStatus


@pytest.fixture
async def owned_match(make_user, make_ask, make_match):
    """A pending match whose responder is ``responder_id``"""
    requester_id = await make_user("+17770000", name="Rita")
    responder_id = await make_user("+17770001", name="Sam")
    ask_id = await make_ask(requester_id, title="Pitch deck review")
    match_id = await make_match(ask_id, requester_id, responder_id)
    return {
        "match_id": match_id,
        "ask_id": ask_id,
        "requester_id": requester_id,
        "responder_id": responder_id,
    }


class TestRespond:
    """POST /api/matches/{id}/respond"""

    async def test_referred(self, client, owned_match, fetch_match_status):
        resp = await client.post(
            f"/api/matches/{owned_match['match_id']}/respond",
            json={"response": "referred", "user_id": owned_match["responder_id"]},
        )

        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Match referred", "status": "referred"}
        assert await fetch_match_status(owned_match["match_id"]) is MatchStatus.REFERRED

    async def test_yes_accepts(self, client, owned_match):
        resp = await client.post(
            f"/api/matches/{owned_match['match_id']}/respond",
            json={"response": "yes", "user_id": owned_match["responder_id"]},
        )

        assert resp.json() == {"success": True, "message": "Match accepted", "status": "accepted"}

    async def test_invalid_response(self, client, owned_match, fetch_match_status):
        resp = await client.post(
            f"/api/matches/{owned_match['match_id']}/respond",
            json={"response": "maybe", "user_id": owned_match["responder_id"]},
        )

        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Invalid response"}
        assert await fetch_match_status(owned_match["match_id"]) is MatchStatus.PENDING

    async def test_missing_user_id(self, client, owned_match):
        resp = await client.post(
            f"/api/matches/{owned_match['match_id']}/respond",
            json={"response": "yes"},
        )

        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "user_id is required"}

    async def test_not_owner(self, client, owned_match, fetch_match_status):
        resp = await client.post(
            f"/api/matches/{owned_match['match_id']}/respond",
            json={"response": "yes", "user_id": owned_match["requester_id"]},
        )

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Match not found"}
        assert await fetch_match_status(owned_match["match_id"]) is MatchStatus.PENDING

    async def test_unknown_match(self, client, owned_match):
        resp = await client.post(
            "/api/matches/424242/respond",
            json={"response": "yes", "user_id": owned_match["responder_id"]},
        )

        assert resp.status_code == 404

    async def test_match_id_beyond_range(self, client, owned_match):
        resp = await client.post(
            "/api/matches/99999999999999999999/respond",
            json={"response": "yes", "user_id": owned_match["responder_id"]},
        )

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Match not found"}

    async def test_non_numeric_match_id(self, client):
        resp = await client.post("/api/matches/abc/respond", json={"response": "yes", "user_id": 1})

        assert resp.status_code == 400
        assert resp.json()["success"] is False


class TestArchive:
    """GET /api/opportunities/{identifier}/archive"""

    async def test_unknown_identifier(self, client):
        for identifier in ("+10000000", "987654", "99999999999999999999"):
            resp = await client.get(f"/api/opportunities/{identifier}/archive")

            assert resp.status_code == 200
            assert resp.json() == {"success": True, "opportunities": [], "count": 0}

    async def test_archive_after_responses(self, client, owned_match, make_match):
        args = (owned_match["ask_id"], owned_match["requester_id"], owned_match["responder_id"])
        accepted_id = await make_match(*args, status=MatchStatus.ACCEPTED, age_minutes=5)
        declined_id = await make_match(*args, status=MatchStatus.DECLINED, age_minutes=10)

        await client.post(
            f"/api/matches/{owned_match['match_id']}/respond",
            json={"response": "referred", "user_id": owned_match["responder_id"]},
        )
        resp = await client.get("/api/opportunities/+17770001/archive")

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["count"] == 2
        ids = [item["id"] for item in body["opportunities"]]
        assert ids == [owned_match["match_id"], declined_id]
        assert accepted_id not in ids

        top = body["opportunities"][0]
        assert top["status"] == "referred"
        assert top["ask_title"] == top["title"] == "Pitch deck review"
        assert top["requester_name"] == top["other_name"] == "Rita"
        assert top["requester_id"] == owned_match["requester_id"]

    async def test_archive_by_user_id(self, client, owned_match, make_match):
        await make_match(
            owned_match["ask_id"],
            owned_match["requester_id"],
            owned_match["responder_id"],
            status=MatchStatus.DECLINED,
        )

        resp = await client.get(f"/api/opportunities/{owned_match['responder_id']}/archive")

        assert resp.json()["count"] == 1
