"""QSS stylesheet and phase colors for BreakBank."""

from __future__ import annotations

from ..timer.engine import Phase

# ── phase accent colors ──────────────────────────────────────────────────

PHASE_COLORS: dict[Phase, str] = {
    Phase.IDLE:     "#7A7A9A",   # muted
    Phase.WORK:     "#FF6B6B",   # warm coral
    Phase.ROLLOVER: "#F9E2AF",   # amber, decision window
    Phase.BREAK:    "#4ECDC4",   # cool teal
}

PAUSED_COLOR = "#6C7086"

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "accent":       "#CBA6F7",
    "accent2":      "#89B4FA",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "danger":       "#F38BA8",
    "border":       "#313154",
}


def phase_color(phase: Phase, paused: bool = False) -> str:
    if paused:
        return PAUSED_COLOR
    return PHASE_COLORS.get(phase, PALETTE["text_muted"])


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#dangerButton {{
        background-color: transparent;
        color: {p['danger']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#dangerButton:hover {{
        background-color: {p['danger']};
        color: {p['bg']};
    }}

    /* ── labels ──────────────────────────────────── */
    QLabel#clockLabel {{
        font-size: 64px;
        font-weight: 700;
    }}

    QLabel#phaseLabel {{
        font-size: 13px;
        font-weight: 700;
        letter-spacing: 2px;
    }}

    QLabel#statLabel {{
        color: {p['text_muted']};
        font-size: 13px;
    }}

    QSpinBox {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 10px;
    }}
    """
