"""Domain models - pure Python dataclasses representing financial entities

Units are shared by every entity: currency in major units (dollars), rates as
whole-number percents (4.5 means 4.5%, never 0.045).
"""

import copy
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class EmergencyFundBand(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AT_RISK = "At Risk"
    CRITICAL = "Critical"


class DebtToIncomeBand(str, Enum):
    DEBT_FREE = "Debt Free"
    HEALTHY = "Healthy"
    MANAGEABLE = "Manageable"
    HIGH_BURDEN = "High Burden"


class CreditScoreTier(str, Enum):
    EXCEPTIONAL = "Exceptional"
    VERY_GOOD = "Very Good"
    GOOD = "Good"
    FAIR = "Fair"


class TrendDirection(str, Enum):
    UP = "Up"
    DOWN = "Down"
    STABLE = "Stable"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AssetType(str, Enum):
    STOCK = "Stock"
    CRYPTO = "Crypto"
    COMMODITY = "Commodity"
    ETF = "ETF"
    BOND = "Bond"


@dataclass(frozen=True)
class Transaction:
    """Recorded income or expense; immutable once created"""

    id: str
    date: date
    description: str
    amount: float  # always positive, direction comes from type
    category: str
    type: TransactionType


@dataclass
class CreditCard:
    """Card held by the user"""

    id: str
    name: str
    cashback_rate: float  # percent, 1.5 = 1.5%
    annual_fee: float
    interest_rate: float  # APR percent


@dataclass
class Loan:
    """Fixed-payment amortizing loan; remaining_balance moves, everything else is fixed"""

    id: str
    name: str
    principal: float
    remaining_balance: float
    interest_rate: float  # APR percent
    monthly_payment: float
    term_months: int

    @property
    def is_paid_off(self) -> bool:
        return self.remaining_balance <= 0


@dataclass
class Investment:
    """Account with compound growth and a recurring monthly deposit"""

    id: str
    name: str
    balance: float
    annual_return_rate: float  # percent
    monthly_contribution: float


@dataclass
class FinancialState:
    """
    Root aggregate and unit of snapshotting.

    A what-if variant must always be derived with clone(): two states may
    never share loans, investments or any other mutable sub-object.
    """

    cash_balance: float
    monthly_income: float  # fallback when no income transactions are recorded
    transactions: List[Transaction] = field(default_factory=list)
    credit_cards: List[CreditCard] = field(default_factory=list)
    loans: List[Loan] = field(default_factory=list)
    investments: List[Investment] = field(default_factory=list)

    def clone(self) -> "FinancialState":
        return copy.deepcopy(self)

    @property
    def total_debt(self) -> float:
        return sum(loan.remaining_balance for loan in self.loans)

    @property
    def total_investments(self) -> float:
        return sum(inv.balance for inv in self.investments)

    @property
    def net_worth(self) -> float:
        return self.cash_balance + self.total_investments - self.total_debt


@dataclass
class MonthlyFlow:
    """Recurring monthly totals derived from a snapshot"""

    income: float
    expense: float
    cashback: float
    debt_service: float
    invest_contribution: float

    @property
    def net(self) -> float:
        return self.income + self.cashback - self.expense - self.debt_service - self.invest_contribution


@dataclass
class MonthlyData:
    """One point of a projection, captured before that month's flows apply"""

    month: int
    label: str
    cash: float
    net_worth: float
    investment_value: float
    debt: float


@dataclass
class AmortizationRow:
    """Single period in a loan repayment schedule"""

    month: int
    payment: float
    interest: float
    principal: float
    remaining_balance: float


@dataclass
class RiskReport:
    """Instantaneous health metrics for a snapshot"""

    monthly_burn: float
    emergency_fund_months: float
    emergency_fund_band: EmergencyFundBand
    debt_to_income: float
    debt_to_income_band: DebtToIncomeBand
    high_interest_debt: bool
    credit_score: int
    credit_score_tier: CreditScoreTier


@dataclass
class ScenarioImpact:
    """Difference between a baseline projection and a what-if projection"""

    net_worth_delta: float
    total_new_debt_principal: float
    total_annual_investment_contribution: float
    baseline_net_worth: float
    simulated_net_worth: float
    net_worth_trend: TrendDirection


@dataclass
class InvestmentSuggestion:
    """Candidate asset proposed by the advice service"""

    symbol: str
    name: str
    type: AssetType
    risk_level: RiskLevel
    reasoning: str
    estimated_return: str  # e.g. "8-10%"


@dataclass
class AdvisorAnalysis:
    """Reply from the advice service"""

    summary: str
    recommendations: List[str]
    score: float  # 0-100 financial health score


@dataclass
class PortfolioGrowthPoint:
    """Investment value with and without a candidate asset at one month"""

    month: int
    label: str
    current: float
    with_new_asset: float


@dataclass
class RiskReturnPoint:
    """One holding placed on the risk/return map"""

    name: str
    annual_return_rate: float
    risk_level: RiskLevel
    is_new: bool
