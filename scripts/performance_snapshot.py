#!/usr/bin/env python3
"""Time repeated runs of every calculator through the calculation service."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from calcsuite.backend.app.services.calculation_service import calculate  # noqa: E402

SAMPLE_PAYLOADS = {
    "btu-calculator": {
        "values": {
            "roomLength": 20,
            "roomWidth": 15,
            "ceilingHeight": 9,
            "roomType": "kitchen",
            "numberOfOccupants": 4,
            "numberOfWindows": 3,
        }
    },
    "income-tax-calculator": {
        "values": {
            "filingStatus": "marriedJoint",
            "grossIncome": 130000,
            "otherIncome": 5000,
            "retirement401k": 15000,
            "hsaContribution": 8300,
            "childrenUnder17": 2,
            "includeState": True,
            "stateRate": 4.5,
        }
    },
    "paycheck-calculator": {
        "values": {
            "grossSalary": 75000,
            "payFrequency": "biweekly",
            "state": "CA",
            "preTax401k": 375,
            "preTaxHealth": 200,
        }
    },
    "water-intake-calculator": {
        "values": {
            "gender": "male",
            "age": 30,
            "weight": 180,
            "activityLevel": "active",
            "exerciseMinutes": 60,
        },
        "fieldUnits": {"weight": "lbs"},
    },
}


def measure(calculator_id: str, payload: dict, iterations: int) -> dict[str, float]:
    """Return timing statistics for repeated calculations."""

    calculate(calculator_id, payload)  # Warm caches
    start = perf_counter()
    for _ in range(iterations):
        calculate(calculator_id, payload)
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("CALCSUITE_PROFILE_ITERATIONS", "200"))
    report = {
        calculator_id: measure(calculator_id, payload, iterations)
        for calculator_id, payload in SAMPLE_PAYLOADS.items()
    }
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
