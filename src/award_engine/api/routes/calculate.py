"""Calculation endpoint."""

import logging
import uuid
from typing import Any

from fastapi import APIRouter, status

from award_engine.api.dependencies import EngineDep
from award_engine.api.schemas import CalculationRequest, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculate"])


@router.post(
    "/calculate",
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def calculate(payload: CalculationRequest, engine: EngineDep) -> dict[str, Any]:
    """Calculate pay for one employee over one pay period.

    Engine errors propagate to the handlers registered in ``create_app``.
    """
    correlation_id = uuid.uuid4()
    logger.info(
        "Processing calculation request %s for employee %s (%d shifts)",
        correlation_id,
        payload.employee.id,
        len(payload.shifts),
    )

    result = engine.calculate(
        payload.employee.to_domain(),
        payload.pay_period.to_domain(),
        [s.to_domain() for s in payload.shifts],
    )

    logger.info(
        "Calculation %s completed: calculation_id=%s gross_pay=%s",
        correlation_id,
        result.calculation_id,
        result.totals.gross_pay,
    )
    return result.to_dict()
