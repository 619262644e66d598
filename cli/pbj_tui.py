#!/usr/bin/env python3
"""PBJ Health TUI: streak, recent days and coaching tips in the terminal."""

from __future__ import annotations

import getpass
import os
import sys

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import (
    Button,
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
)

from pbj import (
    configure_logging,
    init_workspace,
    load_dashboard,
    today_str,
    upsert_summary,
    workspace_root,
)


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#streak-bar {
    dock: top;
    height: 3;
    background: $primary-background;
    content-align: center middle;
    padding: 0 2;
    text-style: bold;
}

#streak-bar.green { color: $success; }
#streak-bar.yellow { color: $warning; }
#streak-bar.red { color: $error; }

#main-layout {
    height: 1fr;
}

#left-pane {
    width: 1fr;
    min-width: 30;
    border-right: tall $primary-background-darken-2;
    padding: 0 1;
}

#right-pane {
    width: 1fr;
    min-width: 30;
    padding: 0 1;
}

.section-title {
    text-style: bold;
    margin: 1 0 0 0;
    padding: 0 1;
}

#days-table {
    height: 1fr;
}

#tips {
    height: auto;
    padding: 0 1;
    color: $text-muted;
}

.field-row {
    height: auto;
}

.field-row Label {
    width: 18;
    padding: 1 1 0 0;
}

.field-row Input {
    width: 1fr;
}
"""

LOG_FIELDS = [
    ("sleepHours", "Sleep (hours)"),
    ("caloriesTotal", "Calories"),
    ("calorieTarget", "Calorie target"),
    ("workoutMinutes", "Workout (min)"),
    ("meditationMinutes", "Meditation (min)"),
]


def _user_id() -> str:
    return os.environ.get("PBJ_USERNAME") or getpass.getuser() or "guest"


def _parse_number(text: str) -> float | None:
    text = text.strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


# ── Main app ───────────────────────────────────────────────────


class PBJApp(App):
    """PBJ Health: daily streak dashboard."""

    TITLE = "PBJ Health"
    CSS = CSS

    BINDINGS = [
        Binding("s", "save_today", "Save today"),
        Binding("r", "refresh", "Refresh"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, user_id: str) -> None:
        super().__init__()
        self.user_id = user_id

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="streak-bar")
        yield Horizontal(
            Vertical(
                Label("Recent days", classes="section-title"),
                DataTable(id="days-table"),
                id="left-pane",
            ),
            VerticalScroll(
                Label("Coach", classes="section-title"),
                Static(id="tips"),
                Label("Log today", classes="section-title"),
                *[
                    Horizontal(Label(label), Input(placeholder="-", id=f"in-{key}"), classes="field-row")
                    for key, label in LOG_FIELDS
                ],
                Checkbox("Worked out today", id="in-didWorkout"),
                Button("Save", id="save", variant="primary"),
                id="right-pane",
            ),
            id="main-layout",
        )
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#days-table", DataTable)
        table.add_columns("Date", "Color", "Score", "Calories", "Sleep", "Workout")
        self._load_data()

    def _load_data(self) -> None:
        dash = load_dashboard(self.user_id)
        streak = dash["streak"]

        bar = self.query_one("#streak-bar", Static)
        bar.set_classes(streak["color"])
        bar.update(streak["message"])

        self.query_one("#tips", Static).update(dash["tips"] or "(no tips)")

        table = self.query_one("#days-table", DataTable)
        table.clear()
        for d in dash["days"]:
            table.add_row(
                d["date"],
                d["color"].upper(),
                str(d["score"]),
                "-" if d["calorieRatio"] is None else f"{d['calorieRatio']:.2f}",
                "-" if d["sleepHours"] is None else f"{d['sleepHours']:.1f}h",
                "yes" if d["didWorkout"] else "no",
            )

    def action_refresh(self) -> None:
        self._load_data()

    @on(Button.Pressed, "#save")
    def _on_save(self) -> None:
        self.action_save_today()

    def action_save_today(self) -> None:
        payload: dict = {"date": today_str()}
        for key, _label in LOG_FIELDS:
            value = _parse_number(self.query_one(f"#in-{key}", Input).value)
            if value is not None:
                payload[key] = value
        if self.query_one("#in-didWorkout", Checkbox).value:
            payload["didWorkout"] = True

        _row, errors = upsert_summary(self.user_id, payload)
        if errors:
            self.notify("; ".join(errors), title="Not saved", severity="warning")
            return
        self.notify(f"Saved {payload['date']}", title="Saved")
        self._load_data()


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    configure_logging("WARNING")
    root = workspace_root()
    try:
        init_workspace(root)
    except OSError as e:
        print(f"Cannot create workspace {root}: {e}")
        sys.exit(1)

    PBJApp(_user_id()).run()


if __name__ == "__main__":
    main()
