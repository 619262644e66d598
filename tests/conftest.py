"""Shared test fixtures for PBJ Health tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a profile and one user's summaries."""
    root = tmp_path / "workspace"
    (root / "summaries").mkdir(parents=True)

    profile = {"timezone": "UTC", "calorie_target": 2200, "lookback_days": 60}
    (root / "profile.yaml").write_text(
        yaml.dump(profile, default_flow_style=False), encoding="utf-8"
    )

    # Newest first: green, yellow, red, green
    rows = {
        "2026-02-08": {
            "summaryDate": "2026-02-08", "caloriesTotal": 2000, "calorieTarget": 2200,
            "calorieRatio": 2000 / 2200, "sleepHours": 8, "workoutMinutes": 30, "didWorkout": True,
        },
        "2026-02-09": {
            "summaryDate": "2026-02-09", "caloriesTotal": 2600, "calorieTarget": 2200,
            "calorieRatio": 2600 / 2200, "sleepHours": 5, "didWorkout": False,
        },
        "2026-02-10": {
            "summaryDate": "2026-02-10", "caloriesTotal": 2100, "calorieTarget": 2200,
            "calorieRatio": 2100 / 2200, "sleepHours": 6.5, "didWorkout": False,
        },
        "2026-02-11": {
            "summaryDate": "2026-02-11", "caloriesTotal": 2000, "calorieTarget": 2200,
            "calorieRatio": 2000 / 2200, "sleepHours": 7, "workoutMinutes": 45, "didWorkout": True,
            "meditationMinutes": 10, "dreamType": "Nightmare", "mentalRating": "good",
        },
    }
    (root / "summaries" / "alice.json").write_text(
        json.dumps({"userId": "alice", "rows": rows}, indent=2), encoding="utf-8"
    )

    os.environ["PBJ_ROOT"] = str(root)
    yield root
    if "PBJ_ROOT" in os.environ:
        del os.environ["PBJ_ROOT"]
