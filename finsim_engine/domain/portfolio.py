"""Portfolio preview - what adding a suggested asset does to investment growth and the risk/return mix"""

from typing import List
from finsim_engine.domain.models import (
    FinancialState,
    Investment,
    InvestmentSuggestion,
    PortfolioGrowthPoint,
    RiskLevel,
    RiskReturnPoint,
)
from finsim_engine.domain.projection import project
from finsim_engine.domain.scenario import (
    DEFAULT_SUGGESTION_CONTRIBUTION,
    investment_from_suggestion,
    parse_estimated_return,
)

DEFAULT_PREVIEW_MONTHS = 60

HIGH_RISK_RETURN = 10.0
MEDIUM_RISK_RETURN = 6.0


def infer_risk_level(annual_return_rate: float) -> RiskLevel:
    """
    Risk implied by an expected return, for holdings with no recorded risk.

    Bands (lower bound exclusive):
    - > 10%:   High
    - > 6%:    Medium
    - else:    Low
    """
    if annual_return_rate > HIGH_RISK_RETURN:
        return RiskLevel.HIGH
    elif annual_return_rate > MEDIUM_RISK_RETURN:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.LOW


def _investment_values(investments: List[Investment], months: int) -> List[float]:
    # Cash and debt play no part; only the investment column is read
    holdings_only = FinancialState(cash_balance=0.0, monthly_income=0.0, investments=investments)
    return [point.investment_value for point in project(holdings_only, months)]


def preview_growth(
    investments: List[Investment],
    suggestion: InvestmentSuggestion,
    months: int = DEFAULT_PREVIEW_MONTHS,
    monthly_contribution: float = DEFAULT_SUGGESTION_CONTRIBUTION,
) -> List[PortfolioGrowthPoint]:
    """
    Project the current holdings side by side with the holdings plus the
    suggested asset, funded from zero by monthly_contribution.

    Every holding compounds at its own rate using the same monthly step as a
    full projection. Returns months + 1 points starting at month 0.

    Raises:
        InvalidProjectionHorizon: months is negative or not an integer
    """
    candidate = investment_from_suggestion(suggestion, monthly_contribution)

    current = _investment_values(investments, months)
    with_new_asset = _investment_values(list(investments) + [candidate], months)

    return [
        PortfolioGrowthPoint(month=month, label=f"M{month}", current=base, with_new_asset=extended)
        for month, (base, extended) in enumerate(zip(current, with_new_asset))
    ]


def risk_return_map(investments: List[Investment], suggestion: InvestmentSuggestion) -> List[RiskReturnPoint]:
    """Existing holdings (risk inferred from return) followed by the suggested asset"""
    points = [
        RiskReturnPoint(
            name=inv.name,
            annual_return_rate=inv.annual_return_rate,
            risk_level=infer_risk_level(inv.annual_return_rate),
            is_new=False,
        )
        for inv in investments
    ]
    points.append(
        RiskReturnPoint(
            name=suggestion.symbol,
            annual_return_rate=parse_estimated_return(suggestion.estimated_return),
            risk_level=suggestion.risk_level,
            is_new=True,
        )
    )
    return points
