"""Tests for shortage board API endpoints."""
from datetime import date, timedelta

import pytest


@pytest.fixture
def checked_schedule(client, make_day, schedule_factory, recipe_line_factory, inventory_factory):
    """Run a check that finds a HIGH (tomorrow) and a MEDIUM shortage."""
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    next_week = (date.today() + timedelta(days=7)).isoformat()
    schedule_factory("week-1", days=[
        make_day(tomorrow, ("Bread", 1)),
        make_day(next_week, ("Cake", 1)),
    ])
    recipe_line_factory("Bread", "Flour", 1000, "GM")
    recipe_line_factory("Cake", "Sugar", 500, "GM")
    inventory_factory("Flour", 900, "GM", inventory_date=date.today())
    inventory_factory("Sugar", 400, "GM", inventory_date=date.today())

    response = client.post("/api/v1/inventory-check/run", json={"scheduleId": "week-1"})
    assert response.status_code == 200
    return response.json()["result"]


class TestListShortages:
    def test_list_empty(self, client, db):
        """Should return an empty board when nothing has been checked."""
        response = client.get("/api/v1/inventory-shortages")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["count"] == 0
        assert data["shortages"] == []

    def test_list_pending(self, client, checked_schedule):
        """Should list unresolved shortages, most urgent first."""
        response = client.get("/api/v1/inventory-shortages")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        first, second = data["shortages"]
        assert (first["ingredient_name"], first["priority"]) == ("Flour", "HIGH")
        assert (second["ingredient_name"], second["priority"]) == ("Sugar", "MEDIUM")
        assert first["check_id"] == checked_schedule["check_id"]
        assert first["overall_status"] == "PARTIAL_SHORTAGE"
        assert first["check_date"] is not None
        assert first["shortfall_amount"] == 100.0

    def test_filters(self, client, checked_schedule):
        """Should filter by schedule and priority."""
        data = client.get("/api/v1/inventory-shortages?scheduleId=week-1&priority=MEDIUM").json()
        assert [s["ingredient_name"] for s in data["shortages"]] == ["Sugar"]

        data = client.get("/api/v1/inventory-shortages?scheduleId=week-2").json()
        assert data["count"] == 0


class TestResolveShortage:
    def test_resolve(self, client, checked_schedule):
        """Should record the resolution and drop it from the pending board."""
        shortage_id = checked_schedule["shortages"][0]["shortage_id"]

        response = client.patch(
            f"/api/v1/inventory-shortages/{shortage_id}/resolve",
            json={
                "resolutionStatus": "RESOLVED",
                "resolvedBy": "head-chef",
                "resolutionAction": "IN_STOCK_ERROR",
                "resolutionNotes": "Recounted, two sacks in dry store",
            },
        )
        assert response.status_code == 200
        shortage = response.json()["shortage"]
        assert shortage["resolution_status"] == "RESOLVED"
        assert shortage["resolution_action"] == "IN_STOCK_ERROR"
        assert shortage["resolved_by"] == "head-chef"
        assert shortage["resolved_at"] is not None

        pending = client.get("/api/v1/inventory-shortages").json()
        assert shortage_id not in [s["shortage_id"] for s in pending["shortages"]]
        resolved = client.get("/api/v1/inventory-shortages?status=RESOLVED").json()
        assert [s["shortage_id"] for s in resolved["shortages"]] == [shortage_id]
        assert client.get("/api/v1/inventory-shortages?status=ALL").json()["count"] == 2

    def test_resolve_invalid_status(self, client, checked_schedule):
        """Should reject an unknown resolution status."""
        shortage_id = checked_schedule["shortages"][0]["shortage_id"]
        response = client.patch(
            f"/api/v1/inventory-shortages/{shortage_id}/resolve",
            json={"resolutionStatus": "DONE", "resolvedBy": "chef"},
        )
        assert response.status_code == 400

    def test_resolve_not_found(self, client, db):
        """Should return 404 for a non-existent shortage."""
        response = client.patch(
            "/api/v1/inventory-shortages/shortage-missing/resolve",
            json={"resolutionStatus": "RESOLVED", "resolvedBy": "chef"},
        )
        assert response.status_code == 404
