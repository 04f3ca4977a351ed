from dataclasses import dataclass, field
from typing import List, Tuple

SEVERITY_MILD = "mild"
SEVERITY_MODERATE = "moderate"
SEVERITY_SEVERE = "severe"

DIAGNOSIS_FIXED = "fixed"
DIAGNOSIS_BUFFER = "buffer"
DIAGNOSIS_INCOME = "income"

PROFILE_FIELDS = ("income", "rent", "transportation", "groceries", "other", "savings")


@dataclass(frozen=True)
class BaselineProfile:
    income: float
    rent: float
    transportation: float
    groceries: float
    other: float
    savings: float

    @property
    def fixed_expenses(self) -> float:
        return self.rent + self.transportation

    @property
    def flexible_expenses(self) -> float:
        return self.groceries + self.other

    @property
    def total_expenses(self) -> float:
        return self.fixed_expenses + self.flexible_expenses

    @property
    def burn_rate(self) -> float:
        return self.total_expenses

    @property
    def monthly_surplus(self) -> float:
        return self.income - self.total_expenses

    @property
    def fixed_share(self) -> float:
        if self.income > 0:
            return self.fixed_expenses / self.income
        return 1.0 if self.fixed_expenses > 0 else 0.0


@dataclass(frozen=True)
class HealthBreakdown:
    surplus: float
    runway: float
    expense_ratio: float
    score: int
    band: str


@dataclass(frozen=True)
class StressTestResult:
    id: str
    name: str
    severity: str
    scenario: str
    passed: bool
    consequence: str
    shocked_runway_days: int


@dataclass(frozen=True)
class Diagnosis:
    label: str
    title: str
    description: str
    related_tests: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RepairRequirements:
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


@dataclass(frozen=True)
class SliderRange:
    min: float
    max: float
    step: float

    def clamp(self, value: float) -> float:
        return max(self.min, min(value, self.max))


@dataclass(frozen=True)
class EqualizerBounds:
    income: SliderRange
    expenses: SliderRange
    savings: SliderRange


@dataclass(frozen=True)
class EqualizerReading:
    income: float
    expenses: float
    savings: float
    runway_days: int
    score: int
    band: str
    tests: List[StressTestResult] = field(default_factory=list)
    pass_count: int = 0
