"""Monthly flow aggregation - recurring totals derived from a snapshot"""

from typing import Dict, List
from finsim_engine.domain.models import FinancialState, MonthlyFlow, Transaction, TransactionType


def aggregate_monthly_flow(state: FinancialState) -> MonthlyFlow:
    """
    Derive the recurring monthly totals the projection applies each month.

    Rules:
    - The transaction log is treated as one month's recurring pattern; one-off
      and recurring entries are not distinguished
    - Income falls back to state.monthly_income when no income is recorded
    - Cashback applies the single highest card rate to all expenses
    - Paid-off loans contribute nothing to debt service
    """
    income = sum(t.amount for t in state.transactions if t.type == TransactionType.INCOME)
    if income == 0:
        income = state.monthly_income

    expense = sum(t.amount for t in state.transactions if t.type == TransactionType.EXPENSE)

    max_cashback_rate = max((card.cashback_rate for card in state.credit_cards), default=0.0)
    cashback = expense * (max_cashback_rate / 100)

    debt_service = sum(loan.monthly_payment for loan in state.loans if loan.remaining_balance > 0)
    invest_contribution = sum(inv.monthly_contribution for inv in state.investments)

    return MonthlyFlow(
        income=income,
        expense=expense,
        cashback=cashback,
        debt_service=debt_service,
        invest_contribution=invest_contribution,
    )


def expenses_by_category(transactions: List[Transaction]) -> Dict[str, float]:
    """Total expense amount per category, in first-seen order"""
    totals: Dict[str, float] = {}
    for txn in transactions:
        if txn.type == TransactionType.EXPENSE:
            totals[txn.category] = totals.get(txn.category, 0.0) + txn.amount
    return totals
