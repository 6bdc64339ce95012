"""POST /v1/scenario/* - What-if comparisons against a baseline snapshot"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Request

from finsim_engine.api.v1.schemas import (
    FinancialStateSchema,
    MonthlyDataSchema,
    PortfolioGrowthPointSchema,
    PortfolioPreviewRequest,
    PortfolioPreviewResponse,
    RiskReturnPointSchema,
    ScenarioCompareRequest,
    ScenarioImpactSchema,
    ScenarioResponse,
    ScenarioSimulateRequest,
)
from finsim_engine.api.dependencies import get_request_id
from finsim_engine.domain.scenario import (
    add_simulated_card,
    add_simulated_investment,
    add_simulated_loan,
    branch,
    compare_scenarios,
    investment_from_suggestion,
)
from finsim_engine.domain.portfolio import preview_growth, risk_return_map
from finsim_engine.domain.exceptions import InvalidLoanParameters, InvalidProjectionHorizon
from finsim_engine.config import settings
from finsim_engine.infrastructure.observability.metrics import record_projection
from finsim_engine.infrastructure.observability.logging import log_projection

router = APIRouter()


def _respond(baseline, simulated, impact, simulated_state=None) -> ScenarioResponse:
    return ScenarioResponse(
        baseline=[MonthlyDataSchema(**asdict(point)) for point in baseline],
        simulated=[MonthlyDataSchema(**asdict(point)) for point in simulated],
        impact=ScenarioImpactSchema(**asdict(impact)),
        simulated_state=simulated_state,
    )


@router.post("/scenario/compare", response_model=ScenarioResponse)
def compare(request_body: ScenarioCompareRequest, request: Request):
    """
    Project a baseline and a simulated state over the same horizon.

    Returns:
        Both series plus the impact at the horizon (net worth delta, new debt
        principal, annual investment contribution)
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        baseline, simulated, impact = compare_scenarios(
            request_body.baseline.to_domain(),
            request_body.simulated.to_domain(),
            request_body.horizon_months,
        )
    except InvalidProjectionHorizon as e:
        logging.warning(f"Invalid horizon: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_projection("scenario", request_body.horizon_months)
    log_projection(request_id, "scenario", request_body.horizon_months, impact.simulated_net_worth, duration_ms)

    return _respond(baseline, simulated, impact)


@router.post("/scenario/simulate", response_model=ScenarioResponse)
def simulate(request_body: ScenarioSimulateRequest, request: Request):
    """
    Branch the baseline, apply hypothetical changes, and compare.

    Flow:
    1. Clone the baseline into an independent what-if state
    2. Add new loans (cash credited now, debt at full principal), cards, and
       investments, including ones built from advice suggestions
    3. Project both states and diff them
    """
    start_time = time.time()
    request_id = get_request_id(request)

    baseline_state = request_body.baseline.to_domain()
    simulated_state = branch(baseline_state)

    try:
        for new_loan in request_body.new_loans:
            add_simulated_loan(simulated_state, new_loan.amount, new_loan.annual_rate_percent, new_loan.term_months)
        for new_card in request_body.new_cards:
            add_simulated_card(simulated_state, new_card.cashback_rate, new_card.interest_rate)
        for new_investment in request_body.new_investments:
            add_simulated_investment(
                simulated_state, new_investment.monthly_contribution, new_investment.annual_return_rate
            )
        for suggestion in request_body.suggestions:
            simulated_state.investments.append(
                investment_from_suggestion(suggestion.to_domain(), settings.suggestion_monthly_contribution)
            )

        baseline, simulated, impact = compare_scenarios(
            baseline_state, simulated_state, request_body.horizon_months
        )

    except InvalidLoanParameters as e:
        logging.warning(f"Invalid loan parameters: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidProjectionHorizon as e:
        logging.warning(f"Invalid horizon: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_projection("scenario", request_body.horizon_months)
    log_projection(request_id, "scenario", request_body.horizon_months, impact.simulated_net_worth, duration_ms)

    return _respond(baseline, simulated, impact, FinancialStateSchema.from_domain(simulated_state))


@router.post("/scenario/portfolio-preview", response_model=PortfolioPreviewResponse)
def portfolio_preview(request_body: PortfolioPreviewRequest, request: Request):
    """
    Preview a suggested asset before adding it to a what-if state.

    Returns:
        Investment value with and without the asset month by month, and the
        holdings placed on a risk/return map
    """
    start_time = time.time()
    request_id = get_request_id(request)

    investments = [inv.to_domain() for inv in request_body.investments]
    suggestion = request_body.suggestion.to_domain()

    try:
        growth = preview_growth(investments, suggestion, request_body.months, request_body.monthly_contribution)
    except InvalidProjectionHorizon as e:
        logging.warning(f"Invalid horizon: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_projection("portfolio", request_body.months)
    log_projection(request_id, "portfolio", request_body.months, growth[-1].with_new_asset, duration_ms)

    return PortfolioPreviewResponse(
        growth=[PortfolioGrowthPointSchema(**asdict(point)) for point in growth],
        risk_map=[RiskReturnPointSchema(**asdict(point)) for point in risk_return_map(investments, suggestion)],
    )
