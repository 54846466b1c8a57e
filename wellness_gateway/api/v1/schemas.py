"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from wellness_gateway.domain.models import Account, AccountType, BudgetCategory, Cadence, Transaction
from wellness_gateway.utils.money import coerce_amount

Region = Literal["AU", "US"]


def _as_text(value: object) -> str:
    """Missing text becomes an empty string; numbers and the like are stringified"""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


# Requests -----------------------------------------------------------------


class AccountIn(BaseModel):
    """Account as supplied by the bank aggregation layer"""

    id: str = Field(..., min_length=1)
    name: str = ""
    type: AccountType
    balance: float = 0.0
    currency: str = "AUD"

    @field_validator("id", "name", "currency", mode="before")
    @classmethod
    def text_fields(cls, value: object) -> str:
        return _as_text(value)

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, value: object) -> AccountType:
        return AccountType.parse(value)

    @field_validator("balance", mode="before")
    @classmethod
    def coerce_balance(cls, value: object) -> float:
        return coerce_amount(value)

    def to_domain(self) -> Account:
        return Account(id=self.id, name=self.name, type=self.type, balance=self.balance, currency=self.currency)


class TransactionIn(BaseModel):
    """Transaction as supplied by the bank aggregation layer; messy fields are tolerated"""

    id: str = Field(..., min_length=1)
    account_id: str = Field(default="", validation_alias=AliasChoices("account_id", "accountId"))
    description: str = ""
    amount: float = 0.0
    date: str = ""
    category: str = ""

    @field_validator("id", "account_id", "description", "date", "category", mode="before")
    @classmethod
    def text_fields(cls, value: object) -> str:
        return _as_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_value(cls, value: object) -> float:
        return coerce_amount(value)

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            account_id=self.account_id,
            description=self.description,
            amount=self.amount,
            date=self.date,
            category=self.category,
        )


class CategorizeRequest(BaseModel):
    """Request body for POST /v1/categorize"""

    transactions: List[TransactionIn] = Field(default_factory=list)


class BudgetRequest(BaseModel):
    """Request body for POST /v1/budget"""

    transactions: List[TransactionIn] = Field(default_factory=list)
    as_of: Optional[datetime] = Field(None, description="Reference instant for the 30-day window (default: now)")


class OverviewRequest(BaseModel):
    """Request body for POST /v1/overview"""

    accounts: List[AccountIn] = Field(default_factory=list)


class WellnessRequest(BaseModel):
    """Request body for POST /v1/wellness"""

    accounts: List[AccountIn] = Field(default_factory=list)
    transactions: List[TransactionIn] = Field(default_factory=list)
    region: Optional[Region] = None
    as_of: Optional[datetime] = None


class ContextRequest(BaseModel):
    """Request body for POST /v1/context"""

    accounts: List[AccountIn] = Field(default_factory=list)
    transactions: List[TransactionIn] = Field(default_factory=list)
    region: Optional[Region] = None
    last_updated: Optional[str] = None
    as_of: Optional[datetime] = None


# Responses ----------------------------------------------------------------


class DomainSchema(BaseModel):
    """Base for responses built from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class TransactionSchema(DomainSchema):
    id: str
    account_id: str
    description: str
    amount: float
    date: str
    category: str


class CategorizedItem(DomainSchema):
    id: str
    description: str
    category: str
    budget_category: Optional[BudgetCategory] = None


class CategorizeResponse(BaseModel):
    """Response for POST /v1/categorize"""

    items: List[CategorizedItem]


class BudgetSummaryResponse(DomainSchema):
    """Response for POST /v1/budget"""

    income: float
    totals: Dict[str, float]
    percentages: Dict[str, float]
    target_percentages: Dict[str, float]
    target_amounts: Dict[str, float]
    adjustments: Dict[str, float]
    savings_allocated: float
    expenses: float
    total_outflow: float
    window_transactions: List[TransactionSchema]


class AccountWithComputedSchema(DomainSchema):
    id: str
    name: str
    type: AccountType
    balance: float
    currency: str
    computed_balance: float
    is_liability: bool


class AccountOverviewResponse(DomainSchema):
    """Response for POST /v1/overview"""

    spending_available: float
    total_assets: float
    total_liabilities: float
    net_worth: float
    accounts: List[AccountWithComputedSchema]
    mortgage_accounts: List[AccountWithComputedSchema]


class LiabilityDriverSchema(DomainSchema):
    name: str
    value: float


class ComponentScoresSchema(DomainSchema):
    dti: int
    savings_rate: int
    emergency_fund: int
    net_worth: int
    stability: int
    credit_utilization: int
    financial_behaviour: int
    income_growth: int


class WellnessMetricsSchema(DomainSchema):
    score: int
    dti: float
    dti_label: str
    focus_message: str
    monthly_debt_payments: float
    monthly_income: float
    expenses: float
    net_worth: float
    previous_net_worth: float
    total_assets: float
    total_liabilities: float
    liquid_assets: float
    emergency_fund_months: float
    savings_allocated: float
    savings_rate: float
    stability_ratio: float
    credit_utilisation: float
    income_growth_ratio: float
    average_budget_deviation: float
    essentials_percent: float
    lifestyle_percent: float
    savings_percent: float
    essentials_amount: float
    lifestyle_amount: float
    savings_amount: float
    target_percentages: Dict[str, float]
    target_amounts: Dict[str, float]
    adjustments: Dict[str, float]
    liabilities_by_account: List[LiabilityDriverSchema]
    component_scores: ComponentScoresSchema
    overview: AccountOverviewResponse
    budget: BudgetSummaryResponse


class CurrencyInfo(BaseModel):
    symbol: str
    code: str
    locale: str


class WellnessResponse(BaseModel):
    """Response for POST /v1/wellness and GET /v1/users/{user_id}/wellness"""

    region: Region
    currency: CurrencyInfo
    display: Dict[str, str]
    metrics: WellnessMetricsSchema


class RecurringCandidateSchema(DomainSchema):
    merchant: str
    cadence: Cadence
    average_amount: float
    last_date: str
    occurrences: int


class DuplicateTransactionSchema(DomainSchema):
    merchant: str
    amount: float
    dates: List[str]


class MerchantTotalSchema(DomainSchema):
    merchant: str
    total: float


class ContextTotalsSchema(DomainSchema):
    income_30d: float
    outgoings_30d: float
    net_30d: float


class AccountSummarySchema(DomainSchema):
    id: str
    name: str
    balance: float
    currency: str


class FinanceContextResponse(DomainSchema):
    """Response for POST /v1/context and GET /v1/users/{user_id}/context"""

    region: str
    last_updated: str
    totals: ContextTotalsSchema
    top_merchants: List[MerchantTotalSchema]
    category_rollup: Dict[str, float]
    recurring_candidates: List[RecurringCandidateSchema]
    duplicates: List[DuplicateTransactionSchema]
    transactions: List[TransactionSchema]
    account_count: int
    accounts: List[AccountSummarySchema]
