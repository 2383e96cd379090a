"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from award_engine.award.tables import AwardConfig
from award_engine.calculators.engine import AwardEngine
from award_engine.config import Settings


def get_award_config(request: Request) -> AwardConfig:
    """Award configuration loaded at startup."""
    return request.app.state.award_config


def get_engine(request: Request) -> AwardEngine:
    """Shared engine instance; it holds only immutable state."""
    return request.app.state.engine


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# Type aliases for cleaner dependency injection
AwardConfigDep = Annotated[AwardConfig, Depends(get_award_config)]
EngineDep = Annotated[AwardEngine, Depends(get_engine)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
