from sqlalchemy.exc import OperationalError

from api.badges import badges_service as badges_service_module
from api.badges.badges_service import seed_badges

USER = "user_7"


def toggle(client, state_id, visited=True, user_id=USER):
    r = client.post("/api/visited-states/toggle", json={"stateId": state_id, "userId": user_id, "visited": visited})
    assert r.status_code == 200, r.text
    return r.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_states_listed(client):
    r = client.get("/api/states")
    assert r.status_code == 200
    codes = {s["stateId"] for s in r.json()}
    assert len(codes) == 51
    assert {"CA", "DC", "WY"} <= codes


class TestCheckBadges:

    def test_payload_shape_and_idempotency(self, client, make_badge):
        badge = make_badge("West Coast Explorer", {"type": "region_complete", "value": ["CA", "OR", "WA"]}, tier=2, category="regional")
        for code in ("CA", "OR", "WA"):
            toggle(client, code)

        r = client.post(f"/api/check-badges/{USER}")
        assert r.status_code == 200
        body = r.json()
        assert body["newBadgesEarned"] is True
        [earned] = body["badges"]
        assert earned["id"] == badge.id
        assert earned["name"] == "West Coast Explorer"
        assert earned["tier"] == 2
        assert earned["category"] == "regional"

        again = client.post(f"/api/check-badges/{USER}")
        assert again.json() == {"newBadgesEarned": False, "badges": []}

    def test_nothing_earned(self, client, make_badge):
        make_badge("Explorer", {"type": "state_count", "count": 10})
        toggle(client, "CA")
        assert client.post(f"/api/check-badges/{USER}").json() == {"newBadgesEarned": False, "badges": []}

    def test_reset_does_not_revoke(self, client, make_badge):
        make_badge("First Step", {"type": "state_count", "count": 1})
        toggle(client, "AL")
        assert client.post(f"/api/check-badges/{USER}").json()["newBadgesEarned"] is True

        r = client.post(f"/api/visited-states/reset/{USER}")
        assert r.json() == {"success": True}
        assert client.get(f"/api/visited-states/{USER}").json() == []

        assert client.post(f"/api/check-badges/{USER}").json()["newBadgesEarned"] is False
        held = client.get(f"/api/user-badges/{USER}").json()
        assert [entry["badge"]["name"] for entry in held] == ["First Step"]

    def test_read_failure_returns_generic_error(self, client, make_badge, monkeypatch):
        make_badge("First Step", {"type": "state_count", "count": 1})

        def broken_read(db, user_id):
            raise OperationalError("SELECT visited_states", {}, Exception("password authentication failed"))

        monkeypatch.setattr(badges_service_module, "get_visited_state_codes", broken_read)
        r = client.post(f"/api/check-badges/{USER}")

        assert r.status_code == 500
        assert r.json() == {"detail": "Failed to check for new badges"}


class TestCatalog:

    def test_ordered_by_tier_then_name(self, client, db_session):
        seed_badges(db_session)
        badges = client.get("/api/badges").json()
        assert [(b["tier"], b["name"]) for b in badges] == sorted((b["tier"], b["name"]) for b in badges)
        assert badges[0]["imageUrl"].startswith("/badges/")

    def test_by_category(self, client, db_session):
        seed_badges(db_session)
        regional = client.get("/api/badges/category/regional").json()
        assert {b["category"] for b in regional} == {"regional"}
        assert len(regional) == 4

    def test_single_badge(self, client, make_badge):
        badge = make_badge("Hawaiian Paradise", {"type": "specific_states", "value": ["HI"]})
        assert client.get(f"/api/badges/{badge.id}").json()["criteria"] == {"type": "specific_states", "value": ["HI"]}
        assert client.get("/api/badges/999").status_code == 404


class TestAwardBadge:

    def test_direct_award_is_idempotent(self, client, make_badge):
        badge = make_badge("Hawaiian Paradise", {"type": "specific_states", "value": ["HI"]})
        payload = {"userId": USER, "badgeId": badge.id, "metadata": {"note": "manual"}}

        first = client.post("/api/award-badge", json=payload)
        second = client.post("/api/award-badge", json=payload)

        assert first.status_code == 200
        assert first.json()["metadata"] == {"note": "manual"}
        assert second.json()["id"] == first.json()["id"]
        assert len(client.get(f"/api/user-badges/{USER}").json()) == 1

    def test_unknown_badge(self, client):
        r = client.post("/api/award-badge", json={"userId": USER, "badgeId": 999})
        assert r.status_code == 404

    def test_missing_fields(self, client):
        assert client.post("/api/award-badge", json={"userId": USER}).status_code == 422


class TestActivityFeed:

    def test_toggles_and_badges_recorded(self, client, make_badge):
        make_badge("Hawaiian Paradise", {"type": "specific_states", "value": ["HI"]})
        toggle(client, "HI")
        toggle(client, "AK")
        toggle(client, "AK", visited=False)
        client.post(f"/api/check-badges/{USER}")

        feed = client.get(f"/api/activities/{USER}").json()
        actions = [(a["action"], a["stateName"]) for a in feed]
        assert ("earned_badge", "Hawaiian Paradise") in actions
        assert ("unvisited", "Alaska") in actions
        assert ("visited", "Hawaii") in actions
        assert feed[0]["action"] == "earned_badge"

    def test_limit(self, client):
        for code in ("CA", "OR", "WA"):
            toggle(client, code)
        assert len(client.get(f"/api/activities/{USER}", params={"limit": 2}).json()) == 2

    def test_numeric_user_id_shares_rows(self, client):
        toggle(client, "CA", user_id="7")
        visited = client.get("/api/visited-states/user_7").json()
        assert [(v["stateId"], v["userId"], v["visited"]) for v in visited] == [("CA", "user_7", True)]

    def test_unknown_state_rejected(self, client):
        r = client.post("/api/visited-states/toggle", json={"stateId": "ZZ", "userId": USER, "visited": True})
        assert r.status_code == 400

    def test_post_activity(self, client):
        r = client.post("/api/activities", json={
            "userId": USER, "stateId": "NY", "stateName": "New York", "action": "visited"
        })
        assert r.status_code == 200
        assert r.json()["userId"] == USER
