"""Risk and score classifiers - instantaneous health metrics over a snapshot"""

import math
from finsim_engine.domain.models import (
    FinancialState,
    RiskReport,
    EmergencyFundBand,
    DebtToIncomeBand,
    CreditScoreTier,
)
from finsim_engine.domain.cashflow import aggregate_monthly_flow

HIGH_INTEREST_CARD_APR = 20.0
HIGH_INTEREST_LOAN_APR = 10.0


def monthly_burn(state: FinancialState) -> float:
    """Recorded expenses plus debt service on loans still outstanding"""
    flow = aggregate_monthly_flow(state)
    return flow.expense + flow.debt_service


def emergency_fund_ratio(state: FinancialState) -> float:
    """Months of burn covered by cash on hand (0 when there is no burn)"""
    burn = monthly_burn(state)
    return state.cash_balance / burn if burn > 0 else 0.0


def classify_emergency_fund(ratio: float) -> EmergencyFundBand:
    """
    Map months of coverage to a band.

    Bands (lower bound inclusive):
    - 6+:    Excellent
    - 3 - 6: Good
    - 1 - 3: At Risk
    - < 1:   Critical
    """
    if ratio >= 6:
        return EmergencyFundBand.EXCELLENT
    elif ratio >= 3:
        return EmergencyFundBand.GOOD
    elif ratio >= 1:
        return EmergencyFundBand.AT_RISK
    else:
        return EmergencyFundBand.CRITICAL


def debt_to_income_ratio(state: FinancialState) -> float:
    """Debt service as a percent of state.monthly_income (0 without income)"""
    if state.monthly_income <= 0:
        return 0.0
    flow = aggregate_monthly_flow(state)
    return flow.debt_service / state.monthly_income * 100


def classify_debt_to_income(ratio: float) -> DebtToIncomeBand:
    """
    Map a DTI percent to a band.

    Bands (upper bound inclusive):
    - 0:       Debt Free
    - 0 - 20:  Healthy
    - 20 - 36: Manageable (36% is the common lender ceiling)
    - 36+:     High Burden
    """
    if ratio <= 0:
        return DebtToIncomeBand.DEBT_FREE
    elif ratio <= 20:
        return DebtToIncomeBand.HEALTHY
    elif ratio <= 36:
        return DebtToIncomeBand.MANAGEABLE
    else:
        return DebtToIncomeBand.HIGH_BURDEN


def has_high_interest_debt(state: FinancialState) -> bool:
    return any(card.interest_rate > HIGH_INTEREST_CARD_APR for card in state.credit_cards) or any(
        loan.interest_rate > HIGH_INTEREST_LOAN_APR for loan in state.loans
    )


def mock_credit_score(state: FinancialState) -> int:
    """
    Illustrative credit score in the 300-850 range.

    This is a heuristic, not a credit-bureau model:
    - Base 750
    - Minus one point per DTI percentage point above 30
    - Minus 5 per loan and 2 per credit card held
    """
    score = 750.0
    score -= max(0.0, debt_to_income_ratio(state) - 30)
    score -= len(state.loans) * 5
    score -= len(state.credit_cards) * 2

    # Half-up rounding, so 742.5 scores 743
    return math.floor(max(300.0, min(850.0, score)) + 0.5)


def classify_credit_score(score: int) -> CreditScoreTier:
    if score >= 800:
        return CreditScoreTier.EXCEPTIONAL
    elif score >= 740:
        return CreditScoreTier.VERY_GOOD
    elif score >= 670:
        return CreditScoreTier.GOOD
    else:
        return CreditScoreTier.FAIR


def assess_risk(state: FinancialState) -> RiskReport:
    """
    Main entry point: run every classifier against one snapshot.

    Returns complete RiskReport with raw ratios and their bands.
    """
    emergency_months = emergency_fund_ratio(state)
    dti = debt_to_income_ratio(state)
    score = mock_credit_score(state)

    return RiskReport(
        monthly_burn=monthly_burn(state),
        emergency_fund_months=emergency_months,
        emergency_fund_band=classify_emergency_fund(emergency_months),
        debt_to_income=dti,
        debt_to_income_band=classify_debt_to_income(dti),
        high_interest_debt=has_high_interest_debt(state),
        credit_score=score,
        credit_score_tier=classify_credit_score(score),
    )
