"""POST /v1/advisor/analysis - Written analysis from the external advice service"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from finsim_engine.api.v1.schemas import AdvisorRequest, AdvisorResponse
from finsim_engine.api.dependencies import get_advisor_client, get_request_id
from finsim_engine.domain.advisor import build_advisor_payload
from finsim_engine.domain.exceptions import AdvisorServiceError, InvalidProjectionHorizon
from finsim_engine.infrastructure.clients.advisor import AdvisorClient

router = APIRouter()


@router.post("/advisor/analysis", response_model=AdvisorResponse)
async def create_analysis(
    request_body: AdvisorRequest,
    request: Request,
    advisor_client: AdvisorClient = Depends(get_advisor_client),
):
    """
    Ask the advice service to analyze the current state, or to compare it with
    a simulated one.

    Flow:
    1. Build a serializable payload (states, flows, risk reports, impact)
    2. Send it to the advice service (retries live in the client)
    3. Return summary, recommendations, and a 0-100 health score
    """
    request_id = get_request_id(request)
    current = request_body.current.to_domain()
    simulated = request_body.simulated.to_domain() if request_body.simulated else None

    try:
        payload = build_advisor_payload(current, simulated, request_body.horizon_months)
        analysis = await advisor_client.analyze(payload)

    except InvalidProjectionHorizon as e:
        logging.warning(f"Invalid horizon: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except AdvisorServiceError as e:
        logging.error(f"Advice service error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Advice service unavailable")

    return AdvisorResponse(
        summary=analysis.summary,
        recommendations=analysis.recommendations,
        score=analysis.score,
    )
