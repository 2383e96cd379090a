"""Integration test fixtures for the HTTP API."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from award_engine.api.app import create_app
from award_engine.config import Settings

from tests.conftest import CONFIG_PATH


@pytest.fixture
def settings() -> Settings:
    """Settings for the test application; never read from the environment."""
    return Settings(
        award_config_path=str(CONFIG_PATH),
        engine_version="1.0.0",
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="INFO",
        daily_overtime_threshold=None,
    )


@pytest_asyncio.fixture
async def client(award_config, settings) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to an app built around the in-memory award tables."""
    app = create_app(award_config=award_config, settings=settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def calculation_request() -> dict:
    """An 11 hour Monday shift for a full-time level 3 employee."""
    return {
        "employee": {
            "id": "emp_001",
            "employment_type": "full_time",
            "classification_code": "dce_level_3",
            "date_of_birth": "1990-01-15",
            "employment_start_date": "2023-06-01",
            "tags": [],
        },
        "pay_period": {
            "start_date": "2025-07-14",
            "end_date": "2025-07-27",
            "public_holidays": [],
        },
        "shifts": [
            {
                "id": "shift_001",
                "date": "2025-07-14",
                "start_time": "2025-07-14T07:00:00",
                "end_time": "2025-07-14T18:00:00",
                "breaks": [],
            }
        ],
    }
