"""Fixed-payment loan amortization"""

import copy
import math
import uuid
from typing import List, Optional, Tuple
from finsim_engine.domain.models import Loan, AmortizationRow
from finsim_engine.domain.exceptions import InvalidLoanParameters
from finsim_engine.utils.rates import monthly_rate

_EPS = 1e-6  # residual balance treated as paid off


def compute_monthly_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Fixed monthly payment for a fully amortizing loan (standard annuity formula).

    payment = P * r(1+r)^n / ((1+r)^n - 1), with r the monthly rate and n the term.
    A zero rate degenerates to P / n. No rounding is applied here.

    Raises:
        InvalidLoanParameters: principal <= 0, term_months <= 0 or a negative rate
    """
    if principal <= 0:
        raise InvalidLoanParameters(f"Principal must be positive, got {principal}")
    if term_months <= 0:
        raise InvalidLoanParameters(f"Term must be a positive number of months, got {term_months}")
    if annual_rate_percent < 0:
        raise InvalidLoanParameters(f"Interest rate cannot be negative, got {annual_rate_percent}")

    r = monthly_rate(annual_rate_percent)
    n = term_months
    # 1 - (1+r)^-n, stable for tiny r and for very long terms
    discount = -math.expm1(-n * math.log1p(r))
    if r == 0 or discount == 0:
        return principal / n

    return principal * r / discount


def split_payment(
    remaining_balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
) -> Tuple[float, float]:
    """Split one payment into (interest, principal_portion) using the pre-payment balance"""
    interest = remaining_balance * monthly_rate(annual_rate_percent)
    return interest, monthly_payment - interest


def apply_payment(loan: Loan) -> float:
    """
    Apply one month of amortization to a loan in place.

    Returns the cash debited: the full fixed payment, or 0.0 for a loan that is
    already paid off. The balance never goes below zero.
    """
    if loan.is_paid_off:
        return 0.0

    _, principal_portion = split_payment(loan.remaining_balance, loan.interest_rate, loan.monthly_payment)
    loan.remaining_balance = max(0.0, loan.remaining_balance - principal_portion)
    # Clean tiny residual drift so a loan paid off to the cent is never debited again
    if loan.remaining_balance < _EPS:
        loan.remaining_balance = 0.0
    return loan.monthly_payment


def create_loan(
    name: str,
    principal: float,
    annual_rate_percent: float,
    term_months: int,
    loan_id: Optional[str] = None,
    remaining_balance: Optional[float] = None,
) -> Loan:
    """Build a Loan with its fixed payment computed once, at creation"""
    payment = compute_monthly_payment(principal, annual_rate_percent, term_months)

    balance = principal if remaining_balance is None else remaining_balance
    if balance < 0 or balance > principal:
        raise InvalidLoanParameters(
            f"Remaining balance {balance} must be between 0 and principal {principal}"
        )

    return Loan(
        id=loan_id or f"loan-{uuid.uuid4().hex[:8]}",
        name=name,
        principal=principal,
        remaining_balance=balance,
        interest_rate=annual_rate_percent,
        monthly_payment=payment,
        term_months=term_months,
    )


def amortization_schedule(loan: Loan) -> List[AmortizationRow]:
    """
    Month-by-month repayment schedule from the loan's current balance.

    Stops at payoff or after term_months periods, whichever comes first. The
    final row's payment is capped at what is actually owed. The loan passed in
    is not modified.
    """
    working = copy.copy(loan)
    rows: List[AmortizationRow] = []

    for month in range(1, loan.term_months + 1):
        if working.is_paid_off:
            break

        interest, principal_portion = split_payment(
            working.remaining_balance, working.interest_rate, working.monthly_payment
        )
        principal_portion = min(principal_portion, working.remaining_balance)
        apply_payment(working)

        rows.append(
            AmortizationRow(
                month=month,
                payment=interest + principal_portion,
                interest=interest,
                principal=principal_portion,
                remaining_balance=working.remaining_balance,
            )
        )

    return rows
