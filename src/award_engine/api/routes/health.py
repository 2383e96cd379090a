"""Health and info endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, status

from award_engine.api.dependencies import AwardConfigDep, EngineDep
from award_engine.api.schemas import AwardInfo, ClassificationInfo, HealthResponse, InfoResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc))


@router.get(
    "/info",
    response_model=InfoResponse,
    status_code=status.HTTP_200_OK,
)
async def info(config: AwardConfigDep, engine: EngineDep) -> InfoResponse:
    """Engine version, award metadata and supported classifications."""
    metadata = config.metadata
    return InfoResponse(
        engine_version=engine.engine_version,
        award=AwardInfo(
            code=metadata.code,
            name=metadata.name,
            version=metadata.version,
            source_url=metadata.source_url,
        ),
        classifications=[
            ClassificationInfo(code=c.code, name=c.name, clause=c.clause)
            for c in sorted(config.classifications.values(), key=lambda c: c.code)
        ],
    )
