"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from finsim_engine.api.main import create_app
from finsim_engine.domain.models import (
    CreditCard,
    FinancialState,
    Investment,
    Loan,
    Transaction,
    TransactionType,
)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_state() -> FinancialState:
    """
    Typical household: two salary deposits, six expenses, one rewards card,
    a student loan and a 401(k)
    """
    income = TransactionType.INCOME
    expense = TransactionType.EXPENSE
    return FinancialState(
        cash_balance=15400,
        monthly_income=6200,
        transactions=[
            Transaction("1", date(2023, 10, 1), "Tech Corp Salary", 3100, "Income", income),
            Transaction("2", date(2023, 10, 2), "Whole Foods Market", 145.20, "Groceries", expense),
            Transaction("3", date(2023, 10, 5), "Shell Station", 45.00, "Transport", expense),
            Transaction("4", date(2023, 10, 8), "Netflix Subscription", 15.99, "Entertainment", expense),
            Transaction("5", date(2023, 10, 10), "City Utilities", 120.50, "Utilities", expense),
            Transaction("6", date(2023, 10, 15), "Tech Corp Salary", 3100, "Income", income),
            Transaction("7", date(2023, 10, 16), "Favorite Bistro", 85.00, "Dining", expense),
            Transaction("8", date(2023, 10, 20), "Amazon Purchase", 65.99, "Shopping", expense),
        ],
        credit_cards=[
            CreditCard(id="c1", name="Sapphire Preferred", cashback_rate=1.5, annual_fee=95, interest_rate=18.24),
        ],
        loans=[
            Loan(
                id="l1",
                name="Student Loan",
                principal=25000,
                remaining_balance=18400,
                interest_rate=4.5,
                monthly_payment=260,
                term_months=120,
            ),
        ],
        investments=[
            Investment(id="i1", name="401(k)", balance=12500, annual_return_rate=6.5, monthly_contribution=200),
        ],
    )


@pytest.fixture
def simple_state() -> FinancialState:
    """No transactions: income comes from the monthly_income fallback"""
    return FinancialState(
        cash_balance=15400,
        monthly_income=6200,
        loans=[
            Loan(
                id="l1",
                name="Student Loan",
                principal=18400,
                remaining_balance=18400,
                interest_rate=4.5,
                monthly_payment=260,
                term_months=120,
            ),
        ],
        investments=[
            Investment(id="i1", name="401(k)", balance=12500, annual_return_rate=6.5, monthly_contribution=200),
        ],
    )


@pytest.fixture
def simple_state_payload() -> dict:
    """JSON body equivalent of simple_state, as the API receives it"""
    return {
        "cashBalance": 15400,
        "monthlyIncome": 6200,
        "transactions": [],
        "creditCards": [],
        "loans": [
            {
                "id": "l1",
                "name": "Student Loan",
                "principal": 18400,
                "remainingBalance": 18400,
                "interestRate": 4.5,
                "monthlyPayment": 260,
                "termMonths": 120,
            }
        ],
        "investments": [
            {
                "id": "i1",
                "name": "401(k)",
                "balance": 12500,
                "annualReturnRate": 6.5,
                "monthlyContribution": 200,
            }
        ],
    }
