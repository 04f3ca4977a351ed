# Tunable policy for the resilience engine. Formulas read these names only.

DAYS_PER_MONTH = 30
RUNWAY_CAP_DAYS = 9999

# Health score
HEALTH_WEIGHT_SURPLUS = 0.40
HEALTH_WEIGHT_RUNWAY = 0.35
HEALTH_WEIGHT_EXPENSE_RATIO = 0.25
SURPLUS_RATIO_TARGET = 0.50
RUNWAY_SCORE_CEILING_DAYS = 180
EXPENSE_RATIO_COMFORT = 0.50

STABLE_SCORE_MIN = 70
VULNERABLE_SCORE_MIN = 40
BAND_STABLE = "Stable"
BAND_VULNERABLE = "Vulnerable"
BAND_AT_RISK = "At Risk"

# Stress tests
INCOME_SHOCK_PCT = 20.0
EXPENSE_SHOCK_PCT = 20.0
EMERGENCY_COST_MONTHS = 1.0
MIN_RUNWAY_DAYS = 30
EMERGENCY_MIN_RUNWAY_DAYS = 14

# Diagnosis
FIXED_SHARE_THRESHOLD = 0.50
BUFFER_THRESHOLD_DAYS = 30

# Repair mode
PLANNING_HORIZON_MONTHS = 6
MAX_EXPENSE_REDUCTION_PCT = 50
MAX_SAVINGS_INCOME_MULTIPLE = 3
TARGET_RUNWAY_MIN = 7
TARGET_RUNWAY_MAX = 365
TARGET_RUNWAY_DEFAULT = 90

INCOME_SLIDER_FLOOR = 500.0
INCOME_SLIDER_MIN_FACTOR = 0.5
INCOME_SLIDER_MAX_FACTOR = 2.0
INCOME_SLIDER_STEP = 50.0
EXPENSE_SLIDER_FLOOR = 200.0
EXPENSE_SLIDER_MIN_FACTOR = 0.5
EXPENSE_SLIDER_MAX_FACTOR = 1.5
EXPENSE_SLIDER_STEP = 50.0
SAVINGS_SLIDER_MAX_FACTOR = 3.0
SAVINGS_SLIDER_MAX_FLOOR = 5000.0
SAVINGS_SLIDER_STEP = 100.0
