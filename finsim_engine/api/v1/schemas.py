"""Pydantic schemas for API request/response validation

Field names travel as camelCase on the wire (cashBalance, interestRate, ...);
rates are whole-number percents everywhere.
"""

from dataclasses import asdict
import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from finsim_engine.config import settings
from finsim_engine.domain.models import (
    AssetType,
    CreditCard,
    CreditScoreTier,
    DebtToIncomeBand,
    EmergencyFundBand,
    FinancialState,
    Investment,
    InvestmentSuggestion,
    Loan,
    RiskLevel,
    Transaction,
    TransactionType,
    TrendDirection,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Financial state


class TransactionSchema(CamelModel):
    id: str = Field(..., min_length=1)
    date: datetime.date
    description: str
    amount: float = Field(..., gt=0, description="Positive amount; direction comes from type")
    category: str = "General"
    type: TransactionType

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            date=self.date,
            description=self.description,
            amount=self.amount,
            category=self.category,
            type=self.type,
        )


class CreditCardSchema(CamelModel):
    id: str = Field(..., min_length=1)
    name: str
    cashback_rate: float = Field(0.0, ge=0, description="Cashback percent, 1.5 = 1.5%")
    annual_fee: float = Field(0.0, ge=0)
    interest_rate: float = Field(..., ge=0, description="APR percent")

    def to_domain(self) -> CreditCard:
        return CreditCard(
            id=self.id,
            name=self.name,
            cashback_rate=self.cashback_rate,
            annual_fee=self.annual_fee,
            interest_rate=self.interest_rate,
        )


class LoanSchema(CamelModel):
    id: str = Field(..., min_length=1)
    name: str
    principal: float = Field(..., gt=0)
    remaining_balance: float = Field(..., ge=0)
    interest_rate: float = Field(..., ge=0, description="APR percent")
    monthly_payment: float = Field(..., gt=0)
    term_months: int = Field(..., gt=0)

    @model_validator(mode="after")
    def balance_within_principal(self) -> "LoanSchema":
        if self.remaining_balance > self.principal:
            raise ValueError("remainingBalance cannot exceed principal")
        return self

    def to_domain(self) -> Loan:
        return Loan(
            id=self.id,
            name=self.name,
            principal=self.principal,
            remaining_balance=self.remaining_balance,
            interest_rate=self.interest_rate,
            monthly_payment=self.monthly_payment,
            term_months=self.term_months,
        )


class InvestmentSchema(CamelModel):
    id: str = Field(..., min_length=1)
    name: str
    balance: float = Field(..., ge=0)
    annual_return_rate: float = Field(..., description="Annual return percent")
    monthly_contribution: float = Field(0.0, ge=0)

    def to_domain(self) -> Investment:
        return Investment(
            id=self.id,
            name=self.name,
            balance=self.balance,
            annual_return_rate=self.annual_return_rate,
            monthly_contribution=self.monthly_contribution,
        )


class FinancialStateSchema(CamelModel):
    cash_balance: float
    monthly_income: float = Field(0.0, ge=0)
    transactions: List[TransactionSchema] = []
    credit_cards: List[CreditCardSchema] = []
    loans: List[LoanSchema] = []
    investments: List[InvestmentSchema] = []

    def to_domain(self) -> FinancialState:
        """Materialize a fresh domain state; nothing is shared with the request body"""
        return FinancialState(
            cash_balance=self.cash_balance,
            monthly_income=self.monthly_income,
            transactions=[t.to_domain() for t in self.transactions],
            credit_cards=[c.to_domain() for c in self.credit_cards],
            loans=[loan.to_domain() for loan in self.loans],
            investments=[i.to_domain() for i in self.investments],
        )

    @classmethod
    def from_domain(cls, state: FinancialState) -> "FinancialStateSchema":
        return cls.model_validate(asdict(state))


# Projection


class ProjectionRequest(CamelModel):
    """Request body for POST /v1/projection"""

    state: FinancialStateSchema
    horizon_months: int = Field(
        default_factory=lambda: settings.default_horizon_months,
        le=settings.max_horizon_months,
    )


class MonthlyFlowSchema(CamelModel):
    income: float
    expense: float
    cashback: float
    debt_service: float
    invest_contribution: float
    net: float


class MonthlyDataSchema(CamelModel):
    month: int
    label: str
    cash: float
    net_worth: float
    investment_value: float
    debt: float


class ProjectionResponse(CamelModel):
    """Response for POST /v1/projection"""

    horizon_months: int
    flow: MonthlyFlowSchema
    expenses_by_category: dict[str, float]
    series: List[MonthlyDataSchema]


# Risk


class RiskRequest(CamelModel):
    """Request body for POST /v1/risk"""

    state: FinancialStateSchema


class RiskReportSchema(CamelModel):
    """Response for POST /v1/risk"""

    monthly_burn: float
    emergency_fund_months: float
    emergency_fund_band: EmergencyFundBand
    debt_to_income: float
    debt_to_income_band: DebtToIncomeBand
    high_interest_debt: bool
    credit_score: int
    credit_score_tier: CreditScoreTier


# Scenarios


class ScenarioCompareRequest(CamelModel):
    """Request body for POST /v1/scenario/compare"""

    baseline: FinancialStateSchema
    simulated: FinancialStateSchema
    horizon_months: int = Field(
        default_factory=lambda: settings.default_horizon_months,
        le=settings.max_horizon_months,
    )


class NewLoanSchema(CamelModel):
    amount: float
    annual_rate_percent: float
    term_months: int = Field(
        default_factory=lambda: settings.simulated_loan_term_months,
        gt=0,
        le=settings.max_loan_term_months,
    )


class NewCardSchema(CamelModel):
    cashback_rate: float = Field(..., ge=0)
    interest_rate: float = Field(default_factory=lambda: settings.simulated_card_interest_rate, ge=0)


class NewInvestmentSchema(CamelModel):
    monthly_contribution: float = Field(..., ge=0)
    annual_return_rate: float


class InvestmentSuggestionSchema(CamelModel):
    symbol: str
    name: str
    type: AssetType
    risk_level: RiskLevel
    reasoning: str = ""
    estimated_return: str

    def to_domain(self) -> InvestmentSuggestion:
        return InvestmentSuggestion(
            symbol=self.symbol,
            name=self.name,
            type=self.type,
            risk_level=self.risk_level,
            reasoning=self.reasoning,
            estimated_return=self.estimated_return,
        )


class ScenarioSimulateRequest(CamelModel):
    """Request body for POST /v1/scenario/simulate"""

    baseline: FinancialStateSchema
    new_loans: List[NewLoanSchema] = []
    new_cards: List[NewCardSchema] = []
    new_investments: List[NewInvestmentSchema] = []
    suggestions: List[InvestmentSuggestionSchema] = []
    horizon_months: int = Field(
        default_factory=lambda: settings.default_horizon_months,
        le=settings.max_horizon_months,
    )


class PortfolioPreviewRequest(CamelModel):
    """Request body for POST /v1/scenario/portfolio-preview"""

    investments: List[InvestmentSchema] = []
    suggestion: InvestmentSuggestionSchema
    months: int = Field(
        default_factory=lambda: settings.portfolio_preview_months,
        ge=0,
        le=settings.max_horizon_months,
    )
    monthly_contribution: float = Field(default_factory=lambda: settings.suggestion_monthly_contribution, ge=0)


class PortfolioGrowthPointSchema(CamelModel):
    month: int
    label: str
    current: float
    with_new_asset: float


class RiskReturnPointSchema(CamelModel):
    name: str
    annual_return_rate: float
    risk_level: RiskLevel
    is_new: bool


class PortfolioPreviewResponse(CamelModel):
    """Response for POST /v1/scenario/portfolio-preview"""

    growth: List[PortfolioGrowthPointSchema]
    risk_map: List[RiskReturnPointSchema]


class ScenarioImpactSchema(CamelModel):
    net_worth_delta: float
    total_new_debt_principal: float
    total_annual_investment_contribution: float
    baseline_net_worth: float
    simulated_net_worth: float
    net_worth_trend: TrendDirection


class ScenarioResponse(CamelModel):
    """Response for POST /v1/scenario/compare and /v1/scenario/simulate"""

    baseline: List[MonthlyDataSchema]
    simulated: List[MonthlyDataSchema]
    impact: ScenarioImpactSchema
    simulated_state: Optional[FinancialStateSchema] = None


# Loans


class LoanPaymentRequest(CamelModel):
    """Request body for POST /v1/loans/payment"""

    principal: float
    annual_rate_percent: float
    term_months: int = Field(..., gt=0, le=settings.max_loan_term_months)
    include_schedule: bool = False


class AmortizationRowSchema(CamelModel):
    month: int
    payment: float
    interest: float
    principal: float
    remaining_balance: float


class LoanPaymentResponse(CamelModel):
    """Response for POST /v1/loans/payment"""

    monthly_payment: float
    total_paid: float
    total_interest: float
    schedule: List[AmortizationRowSchema] = []


# Advisor


class AdvisorRequest(CamelModel):
    """Request body for POST /v1/advisor/analysis"""

    current: FinancialStateSchema
    simulated: Optional[FinancialStateSchema] = None
    horizon_months: int = Field(
        default_factory=lambda: settings.default_horizon_months,
        le=settings.max_horizon_months,
    )


class AdvisorResponse(CamelModel):
    """Response for POST /v1/advisor/analysis"""

    summary: str
    recommendations: List[str]
    score: float
