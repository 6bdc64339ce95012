"""POST /v1/risk - Risk radar and credit score for a financial snapshot"""

from dataclasses import asdict
from fastapi import APIRouter

from finsim_engine.api.v1.schemas import RiskRequest, RiskReportSchema
from finsim_engine.domain.risk import assess_risk
from finsim_engine.infrastructure.observability.metrics import record_risk_assessment

router = APIRouter()


@router.post("/risk", response_model=RiskReportSchema)
def create_risk_report(request_body: RiskRequest):
    """
    Classify emergency fund coverage, debt-to-income, high-interest exposure,
    and the illustrative credit score for one snapshot.
    """
    report = assess_risk(request_body.state.to_domain())
    record_risk_assessment(report.emergency_fund_band.value, report.debt_to_income_band.value)
    return RiskReportSchema(**asdict(report))
