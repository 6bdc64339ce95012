"""POST /v1/projection - Month-by-month projection of a financial snapshot"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Request

from finsim_engine.api.v1.schemas import ProjectionRequest, ProjectionResponse, MonthlyFlowSchema, MonthlyDataSchema
from finsim_engine.api.dependencies import get_request_id
from finsim_engine.domain.cashflow import aggregate_monthly_flow, expenses_by_category
from finsim_engine.domain.projection import project
from finsim_engine.domain.exceptions import InvalidProjectionHorizon
from finsim_engine.infrastructure.observability.metrics import record_projection
from finsim_engine.infrastructure.observability.logging import log_projection

router = APIRouter()


@router.post("/projection", response_model=ProjectionResponse)
def create_projection(request_body: ProjectionRequest, request: Request):
    """
    Project a financial snapshot forward.

    Returns:
        The recurring monthly flow, expenses by category, and one record per
        month from M0 (the snapshot itself) to the horizon
    """
    start_time = time.time()
    request_id = get_request_id(request)
    state = request_body.state.to_domain()

    try:
        series = project(state, request_body.horizon_months)
    except InvalidProjectionHorizon as e:
        logging.warning(f"Invalid horizon: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    flow = aggregate_monthly_flow(state)

    duration_ms = (time.time() - start_time) * 1000
    record_projection("projection", request_body.horizon_months)
    log_projection(request_id, "projection", request_body.horizon_months, series[-1].net_worth, duration_ms)

    return ProjectionResponse(
        horizon_months=request_body.horizon_months,
        flow=MonthlyFlowSchema(**asdict(flow), net=flow.net),
        expenses_by_category=expenses_by_category(state.transactions),
        series=[MonthlyDataSchema(**asdict(point)) for point in series],
    )
