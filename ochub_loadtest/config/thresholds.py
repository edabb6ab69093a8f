"""
Performance thresholds and load profiles by test type.

Thresholds are tuned for local Kind/Minikube clusters and may need
adjustment for production environments.

Test types:
- smoke      : quick health validation (1 VU, 10s)
- load       : normal traffic simulation (10-50 VUs, ~7.5min)
- stress     : beyond normal capacity (5-20 VUs, ~18min)
- spike      : sudden traffic bursts (3-25 VUs, ~2.5min)
- soak       : extended duration (5 VUs, ~34min)
- breakpoint : increasing arrival rate until failure (10-100 req/s, ~10min)

Threshold selectors:
- http_req_failed   : acceptable failure rate (rate<0.05 means under 5%)
- http_req_duration : response time aggregates in ms (p(95)<3000)
- http_reqs         : minimum request throughput per second
- checks            : pass rate of named checks
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..core.models import Executor, LoadProfile, Stage, TestType

THRESHOLDS: Dict[str, Dict[str, Tuple[str, ...]]] = {
    TestType.SMOKE.value: {
        "http_req_failed": ("rate<0.10",),
        "http_req_duration": ("p(95)<3000",),
        "checks": ("rate>0.90",),
    },
    TestType.LOAD.value: {
        "http_req_failed": ("rate<0.05",),
        "http_req_duration": ("p(95)<2500",),
        "http_reqs": ("rate>5",),
        "checks": ("rate>0.90",),
    },
    TestType.STRESS.value: {
        "http_req_failed": ("rate<0.10",),
        "http_req_duration": ("p(95)<4000",),
        "checks": ("rate>0.85",),
    },
    TestType.SPIKE.value: {
        "http_req_failed": ("rate<0.15",),
        "http_req_duration": ("p(95)<5000",),
        "checks": ("rate>0.80",),
    },
    TestType.SOAK.value: {
        "http_req_failed": ("rate<0.05",),
        "http_req_duration": ("p(95)<3000",),
        "checks": ("rate>0.90",),
    },
    TestType.BREAKPOINT.value: {
        "http_req_failed": ("rate<0.50",),
        "http_req_duration": ("p(95)<10000",),
        "checks": ("rate>0.50",),
    },
}

# Stages read as phases: ramp-up, steady state, ramp-down.
LOAD_PROFILES: Dict[str, LoadProfile] = {
    TestType.SMOKE.value: LoadProfile(
        executor=Executor.CONSTANT_VUS.value,
        vus=1,
        duration="10s",
    ),
    TestType.LOAD.value: LoadProfile(
        executor=Executor.RAMPING_VUS.value,
        stages=(
            Stage("30s", 10),  # warm up, baseline at 1 replica
            Stage("1m", 10),
            Stage("30s", 30),  # scale to 2
            Stage("2m", 30),
            Stage("30s", 50),  # scale to 3-4
            Stage("2m", 50),
            Stage("1m", 0),
        ),
    ),
    TestType.STRESS.value: LoadProfile(
        executor=Executor.RAMPING_VUS.value,
        stages=(
            Stage("1m", 5),
            Stage("3m", 10),
            Stage("3m", 10),
            Stage("3m", 20),
            Stage("3m", 20),
            Stage("3m", 5),
            Stage("2m", 5),
        ),
    ),
    TestType.SPIKE.value: LoadProfile(
        executor=Executor.RAMPING_VUS.value,
        stages=(
            Stage("30s", 3),
            Stage("10s", 25),
            Stage("1m", 25),
            Stage("10s", 3),
            Stage("30s", 0),
        ),
    ),
    TestType.SOAK.value: LoadProfile(
        executor=Executor.RAMPING_VUS.value,
        stages=(
            Stage("2m", 5),
            Stage("30m", 5),
            Stage("2m", 0),
        ),
    ),
    TestType.BREAKPOINT.value: LoadProfile(
        executor=Executor.RAMPING_ARRIVAL_RATE.value,
        start_rate=10,
        time_unit="1s",
        pre_allocated_vus=50,
        max_vus=100,
        stages=(
            Stage("2m", 20),
            Stage("2m", 40),
            Stage("2m", 60),
            Stage("2m", 80),
            Stage("2m", 100),
        ),
    ),
}

SUMMARY_TREND_STATS: Tuple[str, ...] = ("avg", "min", "med", "max", "p(90)", "p(95)", "p(99)")
