import logging
import os

from fastapi import FastAPI

from stresslab.core.models import (
    AssessRequest,
    AssessResponse,
    EqualizerRequest,
    EqualizerResponse,
    Profile,
    TargetRequest,
    TargetResponse,
)
from stresslab.core.pipeline import run_assessment, run_equalizer, run_target
from stresslab.core.sample_payloads import DEMO_PROFILE

logging.basicConfig(level=os.getenv("STRESSLAB_LOG_LEVEL", "INFO").upper())

app = FastAPI(title="StressLab Resilience API")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/demo-profile", response_model=Profile)
def demo_profile():
    return Profile(**DEMO_PROFILE)


@app.post("/assess", response_model=AssessResponse)
def assess(payload: AssessRequest):
    return run_assessment(payload)


@app.post("/repair/target", response_model=TargetResponse)
def repair_target(payload: TargetRequest):
    return run_target(payload)


@app.post("/repair/equalizer", response_model=EqualizerResponse)
def repair_equalizer(payload: EqualizerRequest):
    return run_equalizer(payload)
