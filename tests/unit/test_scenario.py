"""Unit tests for what-if branching and scenario diffing"""

import pytest
from finsim_engine.config import Settings
from finsim_engine.domain.amortization import compute_monthly_payment
from finsim_engine.domain.models import (
    AssetType,
    InvestmentSuggestion,
    RiskLevel,
    TransactionType,
    TrendDirection,
)
from finsim_engine.domain.projection import project
from finsim_engine.domain.scenario import (
    DEFAULT_SIMULATED_CARD_APR,
    DEFAULT_SIMULATED_LOAN_TERM,
    DEFAULT_SUGGESTION_CONTRIBUTION,
    add_simulated_card,
    add_simulated_investment,
    add_simulated_loan,
    add_transaction,
    branch,
    compare_scenarios,
    diff,
    investment_from_suggestion,
    parse_estimated_return,
)


def test_branch_shares_no_mutable_state(sample_state):
    simulated = branch(sample_state)

    assert simulated == sample_state
    assert simulated.loans is not sample_state.loans
    assert simulated.loans[0] is not sample_state.loans[0]
    assert simulated.investments[0] is not sample_state.investments[0]

    simulated.loans[0].remaining_balance = 0
    simulated.investments.clear()

    assert sample_state.loans[0].remaining_balance == 18400
    assert len(sample_state.investments) == 1


def test_add_simulated_loan_credits_cash(sample_state):
    simulated = branch(sample_state)
    loan = add_simulated_loan(simulated, 10000, 5.5)

    assert simulated.cash_balance == sample_state.cash_balance + 10000
    assert simulated.loans[-1] is loan
    assert loan.principal == loan.remaining_balance == 10000
    assert loan.term_months == 60
    assert loan.monthly_payment == pytest.approx(compute_monthly_payment(10000, 5.5, 60))
    assert loan.name == "Simulated Loan ($10.0k)"
    # Borrowing alone does not change net worth
    assert simulated.net_worth == pytest.approx(sample_state.net_worth)


def test_add_simulated_card(sample_state):
    card = add_simulated_card(sample_state, 2.0)

    assert card.cashback_rate == 2.0
    assert card.annual_fee == 0
    assert card.interest_rate == 19.99
    assert card.name == "Simulated Rewards (2%)"
    assert len(sample_state.credit_cards) == 2


def test_add_simulated_investment(sample_state):
    investment = add_simulated_investment(sample_state, 500, 8.0)

    assert investment.balance == 0
    assert investment.monthly_contribution == 500
    assert investment.annual_return_rate == 8.0
    assert sample_state.investments[-1] is investment


def test_add_transaction_expense_newest_first(sample_state):
    txn = add_transaction(sample_state, "Gym", 40, "General", TransactionType.EXPENSE)

    assert sample_state.transactions[0] is txn
    assert sample_state.cash_balance == 15400 - 40


def test_add_transaction_income(sample_state):
    add_transaction(sample_state, "Bonus", 1000, "Income", TransactionType.INCOME)
    assert sample_state.cash_balance == 16400


@pytest.mark.parametrize(
    "text, expected",
    [
        ("8-10%", 9.0),
        ("3.5-4.5%", 4.0),
        ("12%", 12.0),
        ("unknown", 7.0),
        ("", 7.0),
    ],
)
def test_parse_estimated_return(text, expected):
    assert parse_estimated_return(text) == pytest.approx(expected)


def test_investment_from_suggestion():
    suggestion = InvestmentSuggestion(
        symbol="VOO",
        name="Vanguard S&P 500",
        type=AssetType.ETF,
        risk_level=RiskLevel.MEDIUM,
        reasoning="Broad market exposure",
        estimated_return="8-10%",
    )
    investment = investment_from_suggestion(suggestion)

    assert investment.name == "VOO (Vanguard S&P 500)"
    assert investment.balance == 0
    assert investment.annual_return_rate == 9.0
    assert investment.monthly_contribution == 200


def test_diff_new_loan(sample_state):
    simulated = branch(sample_state)
    add_simulated_loan(simulated, 10000, 5.5)

    baseline_projection = project(sample_state, 12)
    simulated_projection = project(simulated, 12)
    impact = diff(baseline_projection, simulated_projection, sample_state, simulated)

    # Principal, not amortized balance, is counted as new debt
    assert impact.total_new_debt_principal == 10000
    assert impact.total_annual_investment_contribution == 200 * 12
    # Interest paid on the new loan lowers net worth
    assert impact.net_worth_delta < 0
    assert impact.net_worth_trend == TrendDirection.DOWN
    assert impact.net_worth_delta == pytest.approx(impact.simulated_net_worth - impact.baseline_net_worth)
    assert impact.baseline_net_worth == baseline_projection[-1].net_worth


def test_diff_new_investment(sample_state):
    simulated = branch(sample_state)
    add_simulated_investment(simulated, 500, 8.0)

    _, _, impact = compare_scenarios(sample_state, simulated, 12)

    assert impact.net_worth_delta > 0
    assert impact.net_worth_trend == TrendDirection.UP
    assert impact.total_new_debt_principal == 0
    assert impact.total_annual_investment_contribution == (200 + 500) * 12


def test_diff_identical_states(sample_state):
    baseline, simulated, impact = compare_scenarios(sample_state, branch(sample_state), 6)

    assert baseline == simulated
    assert impact.net_worth_delta == 0
    assert impact.net_worth_trend == TrendDirection.STABLE


def test_diff_rejects_mismatched_projections(sample_state):
    with pytest.raises(ValueError):
        diff(project(sample_state, 12), project(sample_state, 6), sample_state, sample_state)

    with pytest.raises(ValueError):
        diff([], [], sample_state, sample_state)


@pytest.mark.parametrize(
    "field, default",
    [
        ("simulated_loan_term_months", DEFAULT_SIMULATED_LOAN_TERM),
        ("simulated_card_interest_rate", DEFAULT_SIMULATED_CARD_APR),
        ("suggestion_monthly_contribution", DEFAULT_SUGGESTION_CONTRIBUTION),
    ],
)
def test_settings_defaults_follow_domain_defaults(field, default):
    assert Settings.model_fields[field].default == default
