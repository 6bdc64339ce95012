"""Projection simulator - month-by-month evolution of a financial snapshot"""

import copy
import logging
from typing import List
from finsim_engine.domain.models import FinancialState, MonthlyData
from finsim_engine.domain.amortization import apply_payment
from finsim_engine.domain.cashflow import aggregate_monthly_flow
from finsim_engine.domain.exceptions import InvalidProjectionHorizon
from finsim_engine.utils.rates import monthly_rate

logger = logging.getLogger(__name__)


def _validate_horizon(horizon_months: int) -> None:
    if isinstance(horizon_months, bool) or not isinstance(horizon_months, int):
        raise InvalidProjectionHorizon(f"Horizon must be a whole number of months, got {horizon_months!r}")
    if horizon_months < 0:
        raise InvalidProjectionHorizon(f"Horizon cannot be negative, got {horizon_months}")


def _snapshot(month: int, working: FinancialState) -> MonthlyData:
    total_debt = working.total_debt
    total_investments = working.total_investments
    return MonthlyData(
        month=month,
        label=f"M{month}",
        cash=working.cash_balance,
        net_worth=working.cash_balance + total_investments - total_debt,
        investment_value=total_investments,
        debt=total_debt,
    )


def _advance(state: FinancialState, horizon_months: int, series: List[MonthlyData] | None) -> FinancialState:
    """
    Run the monthly loop on a private copy of the state.

    Flow totals are fixed from the input snapshot. Order within a month:
    1. Inflows: income, cashback
    2. Outflows: recorded expenses
    3. Loans: interest on the pre-payment balance, full payment debited, skipped once paid off
    4. Investments: contribution deposited, then growth on the post-contribution balance
    """
    flow = aggregate_monthly_flow(state)

    working = FinancialState(
        cash_balance=state.cash_balance,
        monthly_income=state.monthly_income,
        transactions=list(state.transactions),
        credit_cards=copy.deepcopy(state.credit_cards),
        loans=copy.deepcopy(state.loans),
        investments=copy.deepcopy(state.investments),
    )

    for month in range(horizon_months + 1):
        if series is not None:
            series.append(_snapshot(month, working))

        if month == horizon_months:
            break

        working.cash_balance += flow.income
        working.cash_balance += flow.cashback
        working.cash_balance -= flow.expense

        for loan in working.loans:
            if loan.is_paid_off:
                continue
            working.cash_balance -= apply_payment(loan)
            if loan.is_paid_off:
                logger.debug("Loan paid off", extra={"loan_id": loan.id, "month": month + 1})

        for inv in working.investments:
            working.cash_balance -= inv.monthly_contribution
            inv.balance += inv.monthly_contribution
            inv.balance += inv.balance * monthly_rate(inv.annual_return_rate)

    return working


def project(state: FinancialState, horizon_months: int) -> List[MonthlyData]:
    """
    Project a snapshot forward, one record per month including month 0.

    Each record is captured before that month's flows apply, so month 0 is the
    snapshot itself and the result always holds horizon_months + 1 entries.
    The input state is never modified; repeated calls yield identical series.

    Raises:
        InvalidProjectionHorizon: horizon_months is negative or not an integer
    """
    _validate_horizon(horizon_months)

    series: List[MonthlyData] = []
    _advance(state, horizon_months, series)
    return series


def final_state(state: FinancialState, horizon_months: int) -> FinancialState:
    """Independent copy of the state as it stands after horizon_months of flow"""
    _validate_horizon(horizon_months)
    return _advance(state, horizon_months, None)
