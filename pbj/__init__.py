"""PBJ Health core library: daily scoring, streaks, coaching and storage.

Public API re-exports for convenient imports:
    from pbj import classify, compute_streak, generate_tips, ...
"""

# Workspace & config
from pbj.workspace import (
    workspace_root,
    load_profile,
    get_user_timezone,
    today_str,
    now_local,
    init_workspace,
    profile_path,
    summaries_dir,
    summary_path,
)

# Logging
from pbj.logs import configure_logging

# Scoring
from pbj.scoring import (
    GREEN,
    YELLOW,
    RED,
    CALORIE_RATIO_LIMIT,
    SLEEP_HOURS_MIN,
    SLEEP_MINUTES_MIN,
    COACH_SLEEP_MINUTES_TARGET,
    classify,
    color_for_score,
)

# Streaks & messages
from pbj.streaks import (
    compute_streak,
    current_streak,
    color_streaks,
    current_streak_for_user,
)
from pbj.messages import format_message

# Coaching & reports
from pbj.coach import coaching_tips, generate_tips
from pbj.daily import evaluate_day, format_hm
from pbj.report import render_report, summarize_work, top_activities
from pbj.analytics import summarize_range, render_range_summary, range_summary_for_user

# Store
from pbj.store import (
    validate_summary,
    upsert_summary,
    get_summary,
    fetch_recent_summaries,
    fetch_daily_history,
    fetch_range,
    history_fetcher,
)

# Dashboard
from pbj.dashboard import build_coaching_report, load_dashboard

# Models
from pbj.models import (
    Profile,
    DailyRecord,
    Classification,
    StreakResult,
    DailySummary,
    CoachingReport,
    CalorieSummary,
    DreamNote,
    ActivitySummary,
    WorkSummary,
    Withdrawal,
    SubstanceSummary,
    DailyInputs,
    DailyEvaluation,
    RangeSummary,
)
