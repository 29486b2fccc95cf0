"""QSS stylesheet for PomoBlocks."""

from __future__ import annotations

# ── palette ──────────────────────────────────────────────────────────────

DEFAULT_PALETTE: dict[str, str] = {
    "bg":           "#F3F4F6",
    "surface":      "#FFFFFF",
    "accent":       "#3B82F6",
    "accent_dark":  "#2563EB",
    "success":      "#22C55E",
    "text":         "#1F2937",
    "text_muted":   "#6B7280",
    "danger":       "#EF4444",
    "border":       "#E5E7EB",
}


# ── QSS builder ──────────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or DEFAULT_PALETTE
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        color: {p['text']};
        font-size: 14px;
    }}

    QMainWindow, QScrollArea > QWidget > QWidget {{
        background-color: {p['bg']};
    }}

    QLabel#appTitle {{
        font-size: 22px;
        font-weight: 700;
    }}

    /* ── timer card ─────────────────────────────── */
    QFrame#card {{
        background-color: {p['surface']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    QLabel#timeLabel {{
        font-size: 64px;
        font-weight: 700;
    }}

    QLabel#hintLabel {{
        color: {p['danger']};
        font-size: 12px;
    }}

    /* ── buttons ────────────────────────────────── */
    QPushButton {{
        background-color: {p['surface']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 8px 18px;
        font-weight: 600;
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: white;
        border: none;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent_dark']};
    }}

    QPushButton#saveButton {{
        background-color: {p['success']};
        color: white;
        border: none;
    }}

    QPushButton:disabled {{
        background-color: {p['border']};
        color: {p['text_muted']};
    }}

    /* ── saved blocks ───────────────────────────── */
    QLabel#sectionHeader {{
        font-size: 18px;
        font-weight: 700;
    }}

    QLabel#summaryLabel {{
        color: {p['text_muted']};
    }}
    """
