"""
Integration tests for API endpoints using a SQLite DB.
"""
import pytest


def _week(client, user, track="linkedin", **body):
    return client.post(f"/tracks/{track}/weeks", json={"user_id": user, **body})


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestPeriods:
    def test_current_for_day(self, client):
        r = client.get("/periods/current?day=2025-08-20")
        assert r.status_code == 200
        body = r.json()
        assert body["period"] == "2025-33"
        assert body["week_start"] == "2025-08-18"
        assert body["week_end"] == "2025-08-24"
        assert body["label"] == "Aug 18 - Aug 24, 2025"

    def test_current_defaults_to_today(self, client):
        r = client.get("/periods/current")
        assert r.status_code == 200
        assert r.json()["week_start"] <= r.json()["week_end"]

    def test_current_at_end_of_calendar(self, client):
        r = client.get("/periods/current?day=9999-12-31")
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_PERIOD"

    def test_label(self, client):
        r = client.get("/periods/label?period=2025-1")
        assert r.json() == {"period": "2025-1", "label": "Jan 06 - Jan 12, 2025"}

    def test_label_passthrough(self, client):
        r = client.get("/periods/label?period=not-a-period")
        assert r.status_code == 200
        assert r.json()["label"] == "not-a-period"

    def test_label_requires_period(self, client):
        r = client.get("/periods/label")
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"


class TestInstantiateWeek:
    def test_create_week(self, client):
        r = _week(client, "http-week", period="2025-34")
        assert r.status_code == 201
        body = r.json()
        assert body["period"] == "2025-34"
        assert body["label"] == "Aug 25 - Aug 31, 2025"
        assert body["created"] == len(body["tasks"])
        assert body["existing"] == 0
        assert {t["status"] for t in body["tasks"]} == {"NOT_STARTED"}

    def test_repeat_is_idempotent(self, client):
        first = _week(client, "http-repeat", "github", day="2025-08-20").json()
        second = _week(client, "http-repeat", "github", day="2025-08-21").json()
        assert second["period"] == first["period"] == "2025-33"
        assert second["created"] == 0
        assert second["existing"] == first["created"]

    def test_unknown_track(self, client):
        r = _week(client, "http-x", "twitter")
        assert r.status_code == 404
        assert r.json()["code"] == "UNKNOWN_TRACK"

    def test_track_without_tasks(self, client):
        r = _week(client, "http-career", "career")
        assert r.status_code == 409
        assert r.json()["code"] == "NO_ACTIVE_TASKS"

    def test_invalid_period(self, client):
        r = _week(client, "http-bad", period="next-week")
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_PERIOD"

    def test_week_number_past_year_end(self, client):
        r = _week(client, "http-overflow", period="2025-53")
        assert r.status_code == 422
        assert r.json()["details"] == {"period": "2025-53"}

    def test_blank_user_rejected(self, client):
        r = _week(client, "   ")
        assert r.status_code == 422


class TestHistoryFlow:
    """Assign two weeks, verify some tasks, read the history back."""

    USER = "http-flow"

    @pytest.fixture()
    def seeded(self, client):
        w34 = _week(client, self.USER, period="2025-34").json()["tasks"]
        w35 = _week(client, self.USER, period="2025-35").json()["tasks"]
        # week 34: one verified (full points), one submitted
        client.patch(f"/tasks/{w34[0]['id']}", json={"status": "VERIFIED", "score_awarded": w34[0]["points_base"]})
        client.patch(f"/tasks/{w34[1]['id']}", json={"status": "SUBMITTED"})
        # week 35: one verified
        client.patch(f"/tasks/{w35[0]['id']}", json={"status": "VERIFIED", "score_awarded": 5})
        return w34, w35

    def test_history_summaries(self, client, seeded):
        w34, w35 = seeded
        r = client.get(f"/history/linkedin?user_id={self.USER}")
        assert r.status_code == 200
        body = r.json()
        assert body["complete"] == "verified"
        periods = body["periods"]
        assert [p["period"] for p in periods] == ["2025-35", "2025-34"]

        p35, p34 = periods
        assert p35["total_tasks"] == len(w35)
        assert p35["completed_tasks"] == 1
        assert p35["total_points"] == 5
        assert p34["completed_tasks"] == 1
        assert p34["total_points"] == w34[0]["points_base"]
        assert p34["max_points"] == sum(t["points_base"] for t in w34)
        assert p34["completion_rate"] == pytest.approx(100 / len(w34))
        assert p34["label"] == "Aug 25 - Aug 31, 2025"

        totals = body["totals"]
        assert totals["weeks"] == 2
        assert totals["total_tasks"] == len(w34) + len(w35)
        assert totals["completed_tasks"] == 2

    def test_submitted_counts_when_requested(self, client, seeded):
        r = client.get(f"/history/linkedin?user_id={self.USER}&complete=submitted")
        p34 = [p for p in r.json()["periods"] if p["period"] == "2025-34"][0]
        assert p34["completed_tasks"] == 2

    def test_period_drill_down(self, client, seeded):
        w34, _ = seeded
        r = client.get(f"/history/linkedin/periods/2025-34?user_id={self.USER}")
        assert r.status_code == 200
        body = r.json()
        assert body["total"] == len(w34)
        assert body["label"] == "Aug 25 - Aug 31, 2025"
        statuses = {t["id"]: t["status"] for t in body["items"]}
        assert statuses[w34[0]["id"]] == "VERIFIED"
        assert statuses[w34[1]["id"]] == "SUBMITTED"

    def test_other_track_is_empty(self, client, seeded):
        r = client.get(f"/history/github?user_id={self.USER}")
        assert r.json()["periods"] == []
        assert r.json()["totals"]["average_completion_rate"] == 0


class TestHistoryValidation:
    def test_empty_history(self, client):
        r = client.get("/history/linkedin?user_id=http-nobody")
        assert r.status_code == 200
        assert r.json()["periods"] == []

    def test_unknown_track(self, client):
        r = client.get("/history/myspace?user_id=u")
        assert r.status_code == 404
        assert r.json()["code"] == "UNKNOWN_TRACK"

    def test_bad_complete_value(self, client):
        r = client.get("/history/linkedin?user_id=u&complete=everything")
        assert r.status_code == 422

    def test_user_id_required(self, client):
        r = client.get("/history/linkedin")
        assert r.status_code == 422

    def test_unknown_period_drill_down_is_empty(self, client):
        r = client.get("/history/linkedin/periods/not-a-period?user_id=u")
        assert r.status_code == 200
        assert r.json()["total"] == 0
        assert r.json()["label"] == "not-a-period"


class TestPatchTask:
    def test_not_found(self, client):
        r = client.patch("/tasks/999999", json={"status": "VERIFIED"})
        assert r.status_code == 404
        assert r.json()["code"] == "TASK_NOT_FOUND"

    def test_invalid_status(self, client):
        task = _week(client, "http-patch", period="2025-40").json()["tasks"][0]
        r = client.patch(f"/tasks/{task['id']}", json={"status": "DONE"})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_score_above_points_base(self, client):
        task = _week(client, "http-patch2", period="2025-40").json()["tasks"][0]
        r = client.patch(
            f"/tasks/{task['id']}",
            json={"status": "VERIFIED", "score_awarded": task["points_base"] + 1},
        )
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_SCORE"
