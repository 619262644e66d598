from __future__ import annotations

import logging
import os
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from pbj import (
    CoachingReport,
    DailyInputs,
    coaching_tips,
    configure_logging,
    current_streak_for_user,
    evaluate_day,
    fetch_recent_summaries,
    get_summary,
    history_fetcher,
    load_dashboard,
    load_profile,
    range_summary_for_user,
    render_range_summary,
    render_report,
    upsert_summary,
    workspace_root as _workspace_root,
)
from pbj.analytics import VALID_RANGES
from pbj.scoring import classify

configure_logging()
logger = logging.getLogger("pbj.ui")


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="PBJ Health", version="0.1.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    """Authenticated username, used as the user id for all stored data."""
    expected_username = os.environ.get("PBJ_USERNAME", "")
    expected_password = os.environ.get("PBJ_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        logger.warning("rejected credentials for %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Endpoints ─────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(username: str = Depends(get_current_user)) -> HTMLResponse:
    try:
        dash = load_dashboard(username)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    streak = dash["streak"]
    rows = []
    for d in dash["days"]:
        sleep = "-" if d["sleepHours"] is None else f"{d['sleepHours']:.1f}h"
        ratio = "-" if d["calorieRatio"] is None else f"{d['calorieRatio']:.2f}"
        rows.append(
            f"<tr class=\"{d['color']}\"><td>{_escape(d['date'])}</td><td>{d['color'].upper()}</td>"
            f"<td>{ratio}</td><td>{sleep}</td><td>{'yes' if d['didWorkout'] else 'no'}</td></tr>"
        )
    table = "".join(rows) or '<tr><td colspan="5">(no days logged yet)</td></tr>'

    html = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>PBJ Health</title>
</head>
<body>
  <header>
    <h1>PBJ Health</h1>
    <p class="streak {streak['color']}"><b>{streak['count']}</b> {_escape(streak['message'])}</p>
  </header>
  <section>
    <h2>Coach</h2>
    <p>{_escape(dash['tips'])}</p>
    <pre>{_escape(dash['report'])}</pre>
  </section>
  <section>
    <h2>Recent days</h2>
    <table>
      <tr><th>Date</th><th>Color</th><th>Calorie ratio</th><th>Sleep</th><th>Workout</th></tr>
      {table}
    </table>
  </section>
</body>
</html>"""
    return HTMLResponse(html)


@app.get("/api/streak/current")
def api_current_streak(username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Current streak for the signed-in user."""
    root = _workspace_root()
    profile = load_profile(root)
    try:
        result = current_streak_for_user(history_fetcher(root), username, profile.lookback_days)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return result.to_dict()


@app.post("/api/daily-summary")
def api_upsert_daily_summary(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Create or update the row for ``payload['date']``."""
    try:
        row, errors = upsert_summary(username, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    return {"ok": True, "summary": row.to_dict()}


@app.get("/api/daily-summary/{day}")
def api_get_daily_summary(day: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        row = get_summary(username, day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if row is None:
        raise HTTPException(status_code=404, detail=f"No summary for {day}")
    c = classify(row.to_record())
    return {"summary": row.to_dict(), "score": c.score, "color": c.color}


@app.get("/api/checkins/recent")
def api_recent_checkins(n: int = 7, username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Last N stored days, newest first, with their classification."""
    try:
        rows = fetch_recent_summaries(username, max(1, min(n, 90)))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    records = []
    for row in rows:
        c = classify(row.to_record())
        records.append({**row.to_dict(), "score": c.score, "color": c.color})
    return {"count": len(records), "records": records}


@app.post("/api/coach/tips")
def api_coach_tips(payload: dict[str, Any] = Body(default={}), username: str = Depends(get_current_user)) -> dict[str, Any]:
    tips = coaching_tips(CoachingReport.from_dict(payload))
    return {"tips": " ".join(tips), "tipList": tips}


@app.post("/api/report")
def api_report(payload: dict[str, Any] = Body(default={}), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Render a Lyfe Report plus coaching tips from a submitted report."""
    report = CoachingReport.from_dict(payload)
    return {"report": render_report(report), "tips": " ".join(coaching_tips(report))}


@app.post("/api/evaluate-day")
def api_evaluate_day(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Score a day from raw meals, sleep sessions and workouts."""
    inputs = DailyInputs.from_dict(payload)
    if not inputs.date_iso:
        raise HTTPException(status_code=400, detail="Missing dateISO")
    if not inputs.kcal_goal:
        inputs.kcal_goal = load_profile().calorie_target or 0
    return evaluate_day(inputs).to_dict()


@app.get("/api/analytics")
def api_analytics(range_days: int = Query(7, alias="range"), username: str = Depends(get_current_user)) -> dict[str, Any]:
    if range_days not in VALID_RANGES:
        raise HTTPException(status_code=400, detail=f"range must be one of {list(VALID_RANGES)}")
    try:
        summary = range_summary_for_user(username, range_days)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {**summary.to_dict(), "text": render_range_summary(summary)}


@app.get("/api/dashboard")
def api_dashboard(username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        return load_dashboard(username)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
