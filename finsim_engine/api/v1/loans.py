"""POST /v1/loans/payment - Fixed payment and repayment schedule for a prospective loan"""

import logging
from dataclasses import asdict
from fastapi import APIRouter, HTTPException

from finsim_engine.api.v1.schemas import LoanPaymentRequest, LoanPaymentResponse, AmortizationRowSchema
from finsim_engine.domain.amortization import create_loan, amortization_schedule
from finsim_engine.domain.exceptions import InvalidLoanParameters

router = APIRouter()


@router.post("/loans/payment", response_model=LoanPaymentResponse)
def calculate_loan_payment(request_body: LoanPaymentRequest):
    """
    Compute the fixed monthly payment for a loan and, optionally, its full
    amortization schedule. Amounts are not rounded.
    """
    try:
        loan = create_loan(
            name="Quote",
            principal=request_body.principal,
            annual_rate_percent=request_body.annual_rate_percent,
            term_months=request_body.term_months,
        )
    except InvalidLoanParameters as e:
        logging.warning(f"Invalid loan parameters: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    schedule = amortization_schedule(loan)
    total_paid = sum(row.payment for row in schedule)

    return LoanPaymentResponse(
        monthly_payment=loan.monthly_payment,
        total_paid=total_paid,
        total_interest=total_paid - loan.principal,
        schedule=[AmortizationRowSchema(**asdict(row)) for row in schedule] if request_body.include_schedule else [],
    )
