from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from resilience.policy import TARGET_RUNWAY_DEFAULT, TARGET_RUNWAY_MAX, TARGET_RUNWAY_MIN


class Profile(BaseModel):
    income: float = Field(ge=0)
    rent: float = Field(ge=0)
    transportation: float = Field(ge=0)
    groceries: float = Field(ge=0)
    other: float = Field(ge=0)
    savings: float = Field(ge=0)


class ExpenseGroup(BaseModel):
    items: Dict[str, float]
    total: float
    share_pct: int


class Aggregates(BaseModel):
    fixed_expenses: float
    flexible_expenses: float
    total_expenses: float
    burn_rate: float
    monthly_surplus: float
    fixed: ExpenseGroup
    flexible: ExpenseGroup


class HealthMetrics(BaseModel):
    runway_days: int
    score: int = Field(ge=0, le=100)
    band: Literal["Stable", "Vulnerable", "At Risk"]
    surplus_subscore: float
    runway_subscore: float
    expense_ratio_subscore: float


class StressTest(BaseModel):
    id: str
    name: str
    severity: Literal["mild", "moderate", "severe"]
    scenario: str
    passed: bool
    consequence: str
    shocked_runway_days: int


class DiagnosisOut(BaseModel):
    label: Literal["fixed", "buffer", "income"]
    title: str
    description: str
    related_tests: List[str] = []


class AssessRequest(BaseModel):
    profile: Profile


class AssessResponse(BaseModel):
    aggregates: Aggregates
    health: HealthMetrics
    stress_tests: List[StressTest]
    pass_count: int
    diagnoses: Optional[List[DiagnosisOut]] = None
    no_weaknesses: bool = False
    summary: str


class TargetRequest(BaseModel):
    profile: Profile
    target_days: int = Field(default=TARGET_RUNWAY_DEFAULT, ge=TARGET_RUNWAY_MIN, le=TARGET_RUNWAY_MAX)


class TargetResponse(BaseModel):
    target_days: int
    current_runway_days: int
    already_achieved: bool
    required_savings: int
    savings_increase: float
    required_expenses: int
    expense_reduction: float
    expense_reduction_percent: int
    income_increase: int
    required_income: float
    is_achievable: bool


class EqualizerRequest(BaseModel):
    profile: Profile
    income: Optional[float] = None
    expenses: Optional[float] = None
    savings: Optional[float] = None


class SliderBounds(BaseModel):
    min: float
    max: float
    step: float


class EqualizerResponse(BaseModel):
    bounds: Dict[str, SliderBounds]
    income: float
    expenses: float
    savings: float
    runway_days: int
    score: int = Field(ge=0, le=100)
    band: str
    stress_tests: List[StressTest]
    pass_count: int
    configuration: Dict[str, float]
