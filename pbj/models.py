"""Typed dataclasses for the PBJ Health data model.

All models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python; snake_case keys are
accepted too, since stored rows and request bodies use both.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


def _pick(d: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First present (non-None) value among *keys*."""
    for k in keys:
        if d.get(k) is not None:
            return d[k]
    return default


def _opt_float(v: Any) -> float | None:
    """Finite float or None; NaN and infinities count as missing."""
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _opt_int(v: Any) -> int | None:
    f = _opt_float(v)
    if f is None:
        return None
    return int(round(f))


def _opt_str(v: Any) -> str | None:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


# ── Profile ───────────────────────────────────────────────────


@dataclass
class Profile:
    timezone: str = "UTC"
    calorie_target: int | None = None
    lookback_days: int = 60

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Profile:
        if not d or not isinstance(d, dict):
            return cls()
        lookback = _opt_int(d.get("lookback_days"))
        return cls(
            timezone=str(d.get("timezone") or "UTC"),
            calorie_target=_opt_int(d.get("calorie_target")),
            lookback_days=lookback if lookback and lookback > 0 else 60,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"timezone": self.timezone, "lookback_days": self.lookback_days}
        if self.calorie_target is not None:
            d["calorie_target"] = self.calorie_target
        return d


# ── Scoring ───────────────────────────────────────────────────


@dataclass(frozen=True)
class DailyRecord:
    """One day's scoring inputs. ``date`` is only used for ordering and display."""

    date: str = ""
    calorie_ratio: float | None = None
    sleep_hours: float | None = None
    did_workout: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DailyRecord:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            date=str(_pick(d, "date", "summary_date", "summaryDate", default="")),
            calorie_ratio=_opt_float(_pick(d, "calorie_ratio", "calorieRatio")),
            sleep_hours=_opt_float(_pick(d, "sleep_hours", "sleepHours")),
            did_workout=bool(_pick(d, "did_workout", "didWorkout", default=False)),
        )


@dataclass(frozen=True)
class Classification:
    score: int
    color: str  # green, yellow, red


@dataclass
class StreakResult:
    count: int = 0
    color: str = "red"
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "color": self.color, "message": self.message}


# ── Daily summary (stored row) ────────────────────────────────


# python attribute -> JSON key
SUMMARY_FIELDS: dict[str, str] = {
    "sleep_hours": "sleepHours",
    "weight_kg": "weightKg",
    "workout_minutes": "workoutMinutes",
    "meditation_minutes": "meditationMinutes",
    "steps": "steps",
    "mental_rating": "mentalRating",
    "work_stress_level": "workStressLevel",
    "dream_type": "dreamType",
    "dream_desc": "dreamDesc",
    "social_minutes": "socialMinutes",
    "hobbies_minutes": "hobbiesMinutes",
    "drug_use_flag": "drugUseFlag",
    "calories_total": "caloriesTotal",
    "calorie_target": "calorieTarget",
    "did_workout": "didWorkout",
}

NUMERIC_SUMMARY_FIELDS = {
    "sleep_hours", "weight_kg", "workout_minutes", "meditation_minutes", "steps",
    "social_minutes", "hobbies_minutes", "calories_total", "calorie_target",
}
BOOL_SUMMARY_FIELDS = {"drug_use_flag", "did_workout"}


@dataclass
class DailySummary:
    summary_date: str = ""
    sleep_hours: float | None = None
    weight_kg: float | None = None
    workout_minutes: float | None = None
    meditation_minutes: float | None = None
    steps: float | None = None
    mental_rating: str | None = None
    work_stress_level: str | None = None  # low, medium, high
    dream_type: str | None = None
    dream_desc: str | None = None
    social_minutes: float | None = None
    hobbies_minutes: float | None = None
    drug_use_flag: bool | None = None
    calories_total: float | None = None
    calorie_target: float | None = None
    calorie_ratio: float | None = None
    did_workout: bool = False
    updated_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DailySummary:
        if not d or not isinstance(d, dict):
            return cls()
        kwargs: dict[str, Any] = {
            "summary_date": str(_pick(d, "summaryDate", "summary_date", "date", default="")),
            "calorie_ratio": _opt_float(_pick(d, "calorieRatio", "calorie_ratio")),
            "updated_at": str(_pick(d, "updatedAt", "updated_at", default="")),
        }
        for attr, key in SUMMARY_FIELDS.items():
            raw = _pick(d, key, attr)
            if attr in NUMERIC_SUMMARY_FIELDS:
                kwargs[attr] = _opt_float(raw)
            elif attr == "did_workout":
                kwargs[attr] = bool(raw)
            elif attr in BOOL_SUMMARY_FIELDS:
                kwargs[attr] = None if raw is None else bool(raw)
            else:
                kwargs[attr] = _opt_str(raw)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"summaryDate": self.summary_date}
        for attr, key in SUMMARY_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                d[key] = value
        if self.calorie_ratio is not None:
            d["calorieRatio"] = self.calorie_ratio
        if self.updated_at:
            d["updatedAt"] = self.updated_at
        return d

    def to_record(self) -> DailyRecord:
        return DailyRecord(
            date=self.summary_date,
            calorie_ratio=self.calorie_ratio,
            sleep_hours=self.sleep_hours,
            did_workout=self.did_workout,
        )


# ── Coaching report ───────────────────────────────────────────


CALORIE_STATUS_CODES = {"under": "UN", "over": "OV", "goal": "GOAL"}
_CALORIE_STATUS_ALIASES = {"un": "under", "ov": "over", "under": "under", "over": "over", "goal": "goal"}


def normalize_calorie_status(v: Any) -> str | None:
    """Map ``UN``/``OV``/``GOAL`` or ``under``/``over``/``goal`` to the long form."""
    if v is None:
        return None
    return _CALORIE_STATUS_ALIASES.get(str(v).strip().lower())


@dataclass
class CalorieSummary:
    intake: int = 0
    goal: int = 0
    status: str | None = None  # under, over, goal
    delta: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CalorieSummary:
        intake = _opt_int(d.get("intake")) or 0
        goal = _opt_int(d.get("goal")) or 0
        delta = _opt_int(d.get("delta"))
        return cls(
            intake=intake,
            goal=goal,
            status=normalize_calorie_status(d.get("status")),
            delta=intake - goal if delta is None else delta,
        )


@dataclass
class DreamNote:
    type: str | None = None
    short: str | None = None


@dataclass
class ActivitySummary:
    total_min: int = 0
    activities: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ActivitySummary:
        acts = d.get("activities") or []
        return cls(
            total_min=_opt_int(_pick(d, "totalMin", "total_min")) or 0,
            activities=[str(a) for a in acts] if isinstance(acts, list) else [],
        )


@dataclass
class WorkSummary:
    total_min: int = 0
    peak_stress: str | None = None  # low, medium, high


@dataclass
class Withdrawal:
    drug: str = ""
    symptom: str = ""
    strength: str = ""  # low, medium, high


@dataclass
class SubstanceSummary:
    summary: str = ""
    withdrawal: Withdrawal | None = None
    recovery_days: dict[str, int] = field(default_factory=dict)


def _recovery_days(raw: Any) -> dict[str, int]:
    if not isinstance(raw, dict):
        return {}
    out = {}
    for name, days in raw.items():
        n = _opt_int(days)
        if n is not None:
            out[str(name)] = n
    return out


@dataclass
class CoachingReport:
    """Daily or weekly signals assembled by the caller. Every field is optional."""

    breakdown: str = "Previous Day"
    streak_color: str | None = None
    gym_min: int | None = None
    sleep_minutes: float | None = None
    calories: CalorieSummary | None = None
    mental: str | None = None
    meditation_minutes: float | None = None
    dream: DreamNote | None = None
    social: ActivitySummary | None = None
    hobbies: ActivitySummary | None = None
    work: WorkSummary | None = None
    substances: SubstanceSummary | None = None
    withdrawal_flag: bool = False

    @property
    def calorie_status(self) -> str | None:
        return self.calories.status if self.calories else None

    @property
    def dream_type(self) -> str | None:
        return self.dream.type if self.dream else None

    @property
    def recovery_days(self) -> dict[str, int]:
        return self.substances.recovery_days if self.substances else {}

    @property
    def withdrawal_symptom_present(self) -> bool:
        if self.withdrawal_flag:
            return True
        w = self.substances.withdrawal if self.substances else None
        return bool(w and w.symptom)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CoachingReport:
        """Accepts the nested report shape (``calories.status``, ``drugs.withdrawal``)
        as well as flat signal keys (``calorieStatus``, ``withdrawalSymptomPresent``)."""
        if not d or not isinstance(d, dict):
            return cls()

        color = _opt_str(_pick(d, "streakColor", "streak_color"))

        calories = None
        if isinstance(d.get("calories"), dict):
            calories = CalorieSummary.from_dict(d["calories"])
        elif _pick(d, "calorieStatus", "calorie_status") is not None:
            calories = CalorieSummary(status=normalize_calorie_status(_pick(d, "calorieStatus", "calorie_status")))

        dream = None
        if isinstance(d.get("dream"), dict):
            dream = DreamNote(type=_opt_str(d["dream"].get("type")), short=_opt_str(d["dream"].get("short")))
        elif _pick(d, "dreamType", "dream_type") is not None:
            dream = DreamNote(type=_opt_str(_pick(d, "dreamType", "dream_type")))

        work = None
        if isinstance(d.get("work"), dict):
            w = d["work"]
            work = WorkSummary(
                total_min=_opt_int(_pick(w, "totalMin", "total_min")) or 0,
                peak_stress=_opt_str(_pick(w, "stress", "peakStress", "peak_stress")),
            )

        substances = None
        flat_recovery = _pick(d, "recoveryDays", "recovery_days")
        drugs = _pick(d, "drugs", "substances")
        if isinstance(drugs, dict):
            wd = drugs.get("withdrawal")
            withdrawal = None
            if isinstance(wd, dict):
                withdrawal = Withdrawal(
                    drug=str(wd.get("drug") or ""),
                    symptom=str(wd.get("symptom") or ""),
                    strength=str(wd.get("strength") or ""),
                )
            substances = SubstanceSummary(
                summary=str(drugs.get("summary") or ""),
                withdrawal=withdrawal,
                recovery_days=_recovery_days(_pick(drugs, "recoveryDays", "recovery_days", default=flat_recovery)),
            )
        elif flat_recovery is not None:
            substances = SubstanceSummary(recovery_days=_recovery_days(flat_recovery))

        return cls(
            breakdown=str(d.get("breakdown") or "Previous Day"),
            streak_color=color.lower() if color else None,
            gym_min=_opt_int(_pick(d, "gymMin", "gym_min")),
            sleep_minutes=_opt_float(_pick(d, "sleepMinutes", "sleepMin", "sleep_minutes")),
            calories=calories,
            mental=_opt_str(d.get("mental")),
            meditation_minutes=_opt_float(_pick(d, "meditationMinutes", "meditationMin", "meditation_minutes")),
            dream=dream,
            social=ActivitySummary.from_dict(d["social"]) if isinstance(d.get("social"), dict) else None,
            hobbies=ActivitySummary.from_dict(d["hobbies"]) if isinstance(d.get("hobbies"), dict) else None,
            work=work,
            substances=substances,
            withdrawal_flag=bool(_pick(d, "withdrawalSymptomPresent", "withdrawal_symptom_present", default=False)),
        )


# ── Daily evaluation ──────────────────────────────────────────


@dataclass
class DailyInputs:
    tz: str = "UTC"
    date_iso: str = ""
    kcal_goal: int = 0
    meals: list[dict[str, Any]] = field(default_factory=list)
    sleep_sessions: list[dict[str, Any]] = field(default_factory=list)  # sessions ending on date_iso
    workouts: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DailyInputs:
        if not d or not isinstance(d, dict):
            return cls()

        def _dicts(v: Any) -> list[dict[str, Any]]:
            return [x for x in v if isinstance(x, dict)] if isinstance(v, list) else []

        return cls(
            tz=str(d.get("tz") or "UTC"),
            date_iso=str(_pick(d, "dateISO", "date_iso", "date", default="")),
            kcal_goal=_opt_int(_pick(d, "kcalGoal", "kcal_goal")) or 0,
            meals=_dicts(d.get("meals")),
            sleep_sessions=_dicts(_pick(d, "sleepSessionsEndingToday", "sleep_sessions")),
            workouts=_dicts(d.get("workouts")),
        )


@dataclass
class DailyEvaluation:
    date_iso: str = ""
    sleep_min: int = 0
    sleep_ok: bool = False
    kcal_intake: int = 0
    kcal_goal: int = 0
    kcal_delta: int = 0
    kcal_status: str = "GOAL"  # UN, OV, GOAL
    kcal_ok: bool = False
    gym_ok: bool = False
    gym_start_at: str | None = None
    gym_end_at: str | None = None
    gym_duration_min: int = 0
    score: int = 0
    color: str = "red"
    calories_chip: str = ""
    sleep_chip: str = ""
    gym_chip: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "dateISO": self.date_iso,
            "sleepMin": self.sleep_min,
            "sleepOk": self.sleep_ok,
            "kcalIntake": self.kcal_intake,
            "kcalGoal": self.kcal_goal,
            "kcalDelta": self.kcal_delta,
            "kcalStatus": self.kcal_status,
            "kcalOk": self.kcal_ok,
            "gymOk": self.gym_ok,
            "gymStartAt": self.gym_start_at,
            "gymEndAt": self.gym_end_at,
            "gymDurationMin": self.gym_duration_min,
            "scoreSmall": self.score,
            "color": self.color,
            "caloriesChip": self.calories_chip,
            "sleepChip": self.sleep_chip,
            "gymChip": self.gym_chip,
        }


# ── Analytics ─────────────────────────────────────────────────


@dataclass
class RangeSummary:
    range_days: int = 1
    total_days: int = 0
    avg_sleep_hours: float = 0.0
    avg_calories: float = 0.0
    workout_days: int = 0
    green_days: int = 0
    insights: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def workout_rate(self) -> float:
        if not self.total_days:
            return 0.0
        return self.workout_days / self.total_days * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "rangeDays": self.range_days,
            "totalDays": self.total_days,
            "avgSleepHours": round(self.avg_sleep_hours, 2),
            "avgCalories": round(self.avg_calories),
            "workoutDays": self.workout_days,
            "greenDays": self.green_days,
            "insights": self.insights,
            "recommendations": self.recommendations,
        }
