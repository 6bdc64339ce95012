"""What-if scenarios - branching a baseline and measuring the impact of changes"""

import uuid
from datetime import date
from typing import List, Optional, Tuple
from finsim_engine.domain.models import (
    FinancialState,
    MonthlyData,
    ScenarioImpact,
    TrendDirection,
    CreditCard,
    Investment,
    InvestmentSuggestion,
    Loan,
    Transaction,
    TransactionType,
)
from finsim_engine.domain.amortization import create_loan
from finsim_engine.domain.projection import project
from finsim_engine.utils.rates import parse_percent_range

DEFAULT_RETURN_RATE = 7.0
DEFAULT_SIMULATED_LOAN_TERM = 60
DEFAULT_SIMULATED_CARD_APR = 19.99
DEFAULT_SUGGESTION_CONTRIBUTION = 200.0


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def branch(state: FinancialState) -> FinancialState:
    """Start a what-if variant: an independent deep copy of the baseline"""
    return state.clone()


def add_simulated_loan(
    state: FinancialState,
    amount: float,
    annual_rate_percent: float,
    term_months: int = DEFAULT_SIMULATED_LOAN_TERM,
) -> Loan:
    """
    Take out a new loan in a what-if state.

    The borrowed amount lands in cash immediately while the full principal is
    added as debt, so net worth is unchanged at month 0.
    """
    loan = create_loan(
        name=f"Simulated Loan (${amount / 1000:.1f}k)",
        principal=amount,
        annual_rate_percent=annual_rate_percent,
        term_months=term_months,
        loan_id=_new_id("sim-loan"),
    )
    state.loans.append(loan)
    state.cash_balance += amount
    return loan


def add_simulated_card(
    state: FinancialState,
    cashback_rate: float,
    interest_rate: float = DEFAULT_SIMULATED_CARD_APR,
) -> CreditCard:
    """Open a no-fee rewards card in a what-if state"""
    card = CreditCard(
        id=_new_id("sim-card"),
        name=f"Simulated Rewards ({cashback_rate:g}%)",
        cashback_rate=cashback_rate,
        annual_fee=0.0,
        interest_rate=interest_rate,
    )
    state.credit_cards.append(card)
    return card


def add_simulated_investment(
    state: FinancialState,
    monthly_contribution: float,
    annual_return_rate: float,
    name: str = "Simulated Portfolio",
) -> Investment:
    """Start a zero-balance portfolio funded by a recurring contribution"""
    investment = Investment(
        id=_new_id("sim-inv"),
        name=name,
        balance=0.0,
        annual_return_rate=annual_return_rate,
        monthly_contribution=monthly_contribution,
    )
    state.investments.append(investment)
    return investment


def add_transaction(
    state: FinancialState,
    description: str,
    amount: float,
    category: str,
    type: TransactionType,
    on: Optional[date] = None,
) -> Transaction:
    """Record a transaction (newest first) and move cash by its amount"""
    txn = Transaction(
        id=_new_id("txn"),
        date=on or date.today(),
        description=description,
        amount=amount,
        category=category,
        type=type,
    )
    state.transactions.insert(0, txn)
    if type == TransactionType.INCOME:
        state.cash_balance += amount
    else:
        state.cash_balance -= amount
    return txn


def parse_estimated_return(estimated_return: str) -> float:
    """Annual return from an advice string: "8-10%" -> 9.0, unparseable -> 7.0"""
    rate = parse_percent_range(estimated_return)
    return DEFAULT_RETURN_RATE if rate is None else rate


def investment_from_suggestion(
    suggestion: InvestmentSuggestion,
    monthly_contribution: float = DEFAULT_SUGGESTION_CONTRIBUTION,
) -> Investment:
    return Investment(
        id=_new_id("inv"),
        name=f"{suggestion.symbol} ({suggestion.name})",
        balance=0.0,
        annual_return_rate=parse_estimated_return(suggestion.estimated_return),
        monthly_contribution=monthly_contribution,
    )


def diff(
    baseline_projection: List[MonthlyData],
    simulated_projection: List[MonthlyData],
    baseline_state: FinancialState,
    simulated_state: FinancialState,
) -> ScenarioImpact:
    """
    Compare a what-if projection against its baseline.

    - Net worth delta is taken at the horizon (last entries)
    - New debt compares total loan principal, not remaining balance, so a new
      loan counts at full face value however far it has amortized
    - Annual contribution is the simulated state's monthly total times 12
    """
    if not baseline_projection or not simulated_projection:
        raise ValueError("Cannot diff an empty projection")
    if len(baseline_projection) != len(simulated_projection):
        raise ValueError(
            f"Projections differ in length: {len(baseline_projection)} vs {len(simulated_projection)}"
        )

    baseline_net_worth = baseline_projection[-1].net_worth
    simulated_net_worth = simulated_projection[-1].net_worth
    delta = simulated_net_worth - baseline_net_worth

    if delta > 0:
        trend = TrendDirection.UP
    elif delta < 0:
        trend = TrendDirection.DOWN
    else:
        trend = TrendDirection.STABLE

    new_debt = sum(loan.principal for loan in simulated_state.loans) - sum(
        loan.principal for loan in baseline_state.loans
    )
    annual_contribution = sum(inv.monthly_contribution * 12 for inv in simulated_state.investments)

    return ScenarioImpact(
        net_worth_delta=delta,
        total_new_debt_principal=new_debt,
        total_annual_investment_contribution=annual_contribution,
        baseline_net_worth=baseline_net_worth,
        simulated_net_worth=simulated_net_worth,
        net_worth_trend=trend,
    )


def compare_scenarios(
    baseline: FinancialState,
    simulated: FinancialState,
    horizon_months: int = 12,
) -> Tuple[List[MonthlyData], List[MonthlyData], ScenarioImpact]:
    """Project both states over the same horizon and diff them"""
    baseline_projection = project(baseline, horizon_months)
    simulated_projection = project(simulated, horizon_months)
    impact = diff(baseline_projection, simulated_projection, baseline, simulated)
    return baseline_projection, simulated_projection, impact
