"""
Styles and themes for DepGraph.

Slate dark theme. The canvas reads COLORS directly; widgets get the
same palette through DARK_STYLESHEET.
"""

COLORS = {
    "bg_primary": "#0f172a",      # canvas
    "bg_secondary": "#1e293b",    # header, node fill
    "bg_button": "#334155",
    "text_primary": "#e2e8f0",
    "text_secondary": "#94a3b8",
    "accent": "#3b82f6",          # root node, checked toggles
    "accent_hover": "#93c5fd",
    "error": "#f87171",
    "border": "#475569",          # edges, node outlines
}

DARK_STYLESHEET = f"""
QMainWindow, QWidget {{
    background-color: {COLORS["bg_primary"]};
    color: {COLORS["text_primary"]};
    font-family: "Segoe UI", sans-serif;
}}

QFrame#headerBar {{
    background-color: {COLORS["bg_secondary"]};
    border-bottom: 1px solid {COLORS["border"]};
}}

QLabel#titleLabel {{
    font-size: 16px;
    font-weight: bold;
}}
QLabel#subtitleLabel, QLabel#zoomLabel {{
    color: {COLORS["text_secondary"]};
}}
QLabel#zoomLabel {{
    font-family: "Consolas", monospace;
    min-width: 48px;
    qproperty-alignment: AlignCenter;
}}

QPushButton {{
    background-color: {COLORS["bg_button"]};
    color: {COLORS["text_primary"]};
    padding: 6px 12px;
    border-radius: 6px;
    border: 1px solid {COLORS["border"]};
}}
QPushButton:hover {{
    border-color: {COLORS["accent_hover"]};
}}
QPushButton:disabled {{
    color: {COLORS["border"]};
}}
QPushButton:checked {{
    background-color: {COLORS["accent"]};
    border: none;
}}

QStatusBar {{
    background-color: {COLORS["bg_secondary"]};
    color: {COLORS["text_secondary"]};
}}
"""
