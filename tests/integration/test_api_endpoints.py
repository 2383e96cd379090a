"""API endpoint integration tests.

Tests the FastAPI endpoints over an in-process ASGI transport.
"""

import shutil
from dataclasses import replace
from decimal import Decimal
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

from award_engine.api.app import create_app
from award_engine.award.loader import ConfigLoader

from tests.conftest import CONFIG_PATH


pytestmark = pytest.mark.asyncio


class TestHealthEndpoints:
    """Test health and info endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Health endpoint should return 200."""
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    async def test_info(self, client: AsyncClient):
        response = await client.get("/info")
        assert response.status_code == 200

        data = response.json()
        assert data["engine_version"] == "1.0.0"
        assert data["award"]["code"] == "MA000018"
        assert data["award"]["version"] == "2025-07-01"
        assert [c["code"] for c in data["classifications"]] == ["dce_level_3"]


class TestCalculate:
    """Test POST /calculate."""

    async def test_weekday_overtime(self, client: AsyncClient, calculation_request):
        response = await client.post("/calculate", json=calculation_request)

        assert response.status_code == 200, response.text
        data = response.json()
        UUID(data["calculation_id"])
        assert data["employee_id"] == "emp_001"
        assert Decimal(data["totals"]["gross_pay"]) == Decimal("371.02")
        assert [line["category"] for line in data["pay_lines"]] == [
            "ordinary",
            "overtime150",
            "overtime200",
        ]
        assert data["audit_trace"]["steps"][0]["rule_id"] == "base_rate_lookup"

    async def test_same_request_same_calculation_id(
        self, client: AsyncClient, calculation_request
    ):
        first = (await client.post("/calculate", json=calculation_request)).json()
        second = (await client.post("/calculate", json=calculation_request)).json()

        assert first["calculation_id"] == second["calculation_id"]
        assert first["inputs_fingerprint"] == second["inputs_fingerprint"]

    async def test_casual_with_laundry(self, client: AsyncClient, calculation_request):
        calculation_request["employee"]["employment_type"] = "casual"
        calculation_request["employee"]["tags"] = ["laundry_allowance"]

        response = await client.post("/calculate", json=calculation_request)

        assert response.status_code == 200, response.text
        data = response.json()
        (allowance,) = data["allowances"]
        assert allowance["type"] == "laundry"
        assert Decimal(allowance["amount"]) == Decimal("0.32")

    async def test_threshold_from_settings(self, award_config, settings, calculation_request):
        app = create_app(
            award_config=award_config,
            settings=replace(settings, daily_overtime_threshold=Decimal("12")),
        )
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            response = await c.post("/calculate", json=calculation_request)

        assert response.status_code == 200, response.text
        assert [line["category"] for line in response.json()["pay_lines"]] == ["ordinary"]

    async def test_sub_second_times_across_midnight(self, client: AsyncClient, calculation_request):
        calculation_request["shifts"][0].update(
            date="2025-07-19",
            start_time="2025-07-19T23:00:00.5",
            end_time="2025-07-20T01:00:00.7",
        )

        response = await client.post("/calculate", json=calculation_request)

        assert response.status_code == 200, response.text
        data = response.json()
        assert [line["category"] for line in data["pay_lines"]] == ["saturday", "sunday"]
        assert Decimal(data["totals"]["penalty_hours"]) == Decimal(7_200_200_000) / Decimal(
            3_600_000_000
        )

    async def test_threshold_from_award_table(self, tmp_path, settings, calculation_request):
        """Without a threshold setting the award table's daily threshold applies."""
        target = tmp_path / "award"
        shutil.copytree(CONFIG_PATH, target)
        penalties = target / "penalties.yaml"
        penalties.write_text(
            penalties.read_text().replace("daily_threshold_hours: 8", "daily_threshold_hours: 7.6")
        )
        calculation_request["shifts"][0]["end_time"] = "2025-07-14T15:00:00"

        app = create_app(award_config=ConfigLoader.load(target), settings=settings)
        assert app.state.engine.threshold == Decimal("7.6")
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            response = await c.post("/calculate", json=calculation_request)

        assert response.status_code == 200, response.text
        totals = response.json()["totals"]
        assert Decimal(totals["ordinary_hours"]) == Decimal("7.6")
        assert Decimal(totals["overtime_hours"]) == Decimal("0.4")


class TestErrorResponses:
    """Test mapping of engine errors to HTTP responses."""

    async def test_missing_field(self, client: AsyncClient, calculation_request):
        del calculation_request["employee"]["classification_code"]

        response = await client.post("/calculate", json=calculation_request)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_unknown_employment_type(self, client: AsyncClient, calculation_request):
        calculation_request["employee"]["employment_type"] = "contractor"

        response = await client.post("/calculate", json=calculation_request)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_unknown_classification(self, client: AsyncClient, calculation_request):
        calculation_request["employee"]["classification_code"] = "dce_level_9"

        response = await client.post("/calculate", json=calculation_request)

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "CLASSIFICATION_NOT_FOUND"
        assert data["details"] == {"classification_code": "dce_level_9"}

    async def test_rate_not_found(self, client: AsyncClient, calculation_request):
        calculation_request["pay_period"] = {"start_date": "2020-01-06", "end_date": "2020-01-19"}
        calculation_request["shifts"][0].update(
            date="2020-01-06",
            start_time="2020-01-06T09:00:00",
            end_time="2020-01-06T17:00:00",
        )

        response = await client.post("/calculate", json=calculation_request)

        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "RATE_NOT_FOUND"
        assert data["details"]["as_of_date"] == "2020-01-06"

    async def test_invalid_shift(self, client: AsyncClient, calculation_request):
        calculation_request["shifts"][0]["end_time"] = "2025-07-14T06:00:00"

        response = await client.post("/calculate", json=calculation_request)

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "INVALID_SHIFT"
        assert data["details"]["shift_id"] == "shift_001"
