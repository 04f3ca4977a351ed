DEMO_PROFILE = {
    "income": 4000,
    "rent": 1200,
    "transportation": 300,
    "groceries": 400,
    "other": 300,
    "savings": 3000,
}

SAMPLE_ASSESS_REQUEST = {"profile": DEMO_PROFILE}

SAMPLE_TARGET_REQUEST = {"profile": DEMO_PROFILE, "target_days": 90}

SAMPLE_EQUALIZER_REQUEST = {
    "profile": DEMO_PROFILE,
    "income": 4200,
    "expenses": 1900,
    "savings": 4500,
}
