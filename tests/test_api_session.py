import pytest

from tests.conftest import register_and_login


def test_first_save_grants_xp_and_first_blood(client, auth_headers):
    response = client.post("/api/sessions/save", json={"time": 95, "rep": 8}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["xpGained"] == 80
    assert body["newLevel"] == 1
    assert body["levelUp"] is False
    assert body["newAchievements"] == [{
        "id": "first_blood",
        "name": "First Blood",
        "description": "Complete your first repetition.",
        "icon": "🩸",
    }]


def test_second_save_levels_up_without_repeating_achievements(client, auth_headers):
    client.post("/api/sessions/save", json={"time": 60, "rep": 8}, headers=auth_headers)

    response = client.post("/api/sessions/save", json={"time": 60, "rep": 12}, headers=auth_headers)

    body = response.json()
    assert body["xpGained"] == 120
    assert body["newLevel"] == 2
    assert body["levelUp"] is True
    assert [a["id"] for a in body["newAchievements"]] == ["daily_grind"]


def test_invalid_save_payload_is_rejected(client, auth_headers):
    response = client.post("/api/sessions/save", json={"time": 10, "rep": -1}, headers=auth_headers)

    assert response.status_code == 422


@pytest.mark.parametrize("payload", [
    {"time": 10, "rep": True},
    {"time": 10, "rep": "5"},
    {"time": True, "rep": 1},
    {"time": 1e300, "rep": 1},
    {"time": 86401, "rep": 1},
    {"time": 10, "rep": 100_001},
])
def test_out_of_range_or_mistyped_save_is_rejected_without_side_effects(client, auth_headers, payload):
    response = client.post("/api/sessions/save", json=payload, headers=auth_headers)

    assert response.status_code == 422
    assert client.get("/api/sessions/results", headers=auth_headers).json()["data"] == []
    assert client.get("/api/progress/me", headers=auth_headers).json()["data"]["xp"] == 0


def test_fractional_time_is_rounded(client, auth_headers):
    client.post("/api/sessions/save", json={"time": 59.6, "rep": 2}, headers=auth_headers)

    results = client.get("/api/sessions/results", headers=auth_headers).json()["data"]

    assert [(r["rep"], r["time"]) for r in results] == [(2, 60)]


def test_progress_reflects_saved_sessions(client, auth_headers):
    client.post("/api/sessions/save", json={"time": 60, "rep": 25}, headers=auth_headers)

    response = client.get("/api/progress/me", headers=auth_headers)

    data = response.json()["data"]
    assert data["xp"] == 250
    assert data["level"] == 2
    assert data["currentStreak"] == 1
    assert data["bestSessionRepetitions"] == 25
    assert data["nextLevelXp"] == 400
    unlocked = {a["id"] for a in data["achievements"] if a["unlocked"]}
    assert unlocked == {"first_blood", "daily_grind"}
    assert len(data["achievements"]) == 8


def test_progress_defaults_before_any_session(client, auth_headers):
    data = client.get("/api/progress/me", headers=auth_headers).json()["data"]

    assert data["xp"] == 0
    assert data["level"] == 1
    assert data["lastActiveDate"] is None


def test_results_are_private_to_their_owner(client, auth_headers):
    client.post("/api/sessions/save", json={"time": 30, "rep": 3}, headers=auth_headers)
    other = register_and_login(client, username="someone_else")

    mine = client.get("/api/sessions/results", headers=auth_headers).json()["data"]
    theirs = client.get("/api/sessions/results", headers=other).json()["data"]

    assert [(r["rep"], r["time"]) for r in mine] == [(3, 30)]
    assert theirs == []


def test_history_groups_same_day_sessions(client, auth_headers):
    for rep in (5, 10, 15):
        client.post("/api/sessions/save", json={"time": 60, "rep": rep}, headers=auth_headers)

    body = client.get("/api/sessions/history", headers=auth_headers).json()

    assert body["success"] is True
    assert len(body["dailyStats"]) == 1
    assert body["dailyStats"][0]["totalReps"] == 30
    assert body["dailyStats"][0]["totalTime"] == 180
    assert body["dailyStats"][0]["totalCalories"] == 15.0
    assert body["summary"] == {"totalReps": 30, "totalTime": 180, "totalCalories": 15.0, "sessionCount": 3}
    assert [s["rep"] for s in body["recentSessions"]] == [15, 10, 5]


def test_history_empty_range(client, auth_headers):
    client.post("/api/sessions/save", json={"time": 60, "rep": 5}, headers=auth_headers)

    response = client.get(
        "/api/sessions/history",
        params={"startDate": "2001-01-01", "endDate": "2001-01-31"},
        headers=auth_headers,
    )

    body = response.json()
    assert body["dailyStats"] == []
    assert body["summary"] == {"totalReps": 0, "totalTime": 0, "totalCalories": 0.0, "sessionCount": 0}


def test_history_rejects_inverted_range(client, auth_headers):
    response = client.get(
        "/api/sessions/history",
        params={"startDate": "2026-02-10", "endDate": "2026-02-01"},
        headers=auth_headers,
    )

    assert response.status_code == 400


def test_achievement_catalog_is_public(client):
    data = client.get("/api/achievements").json()["data"]

    assert [a["id"] for a in data] == [
        "first_blood", "century_club", "iron_streak", "consistency_hero",
        "daily_grind", "tier_beginner", "tier_intermediate", "tier_advanced",
    ]
