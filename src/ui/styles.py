"""
Dark mode stylesheet for the entire application.
Catppuccin Mocha-inspired palette.
"""

DARK_STYLESHEET = """
/* ── Base ────────────────────────────────────────────────────────── */
QWidget {
    background-color: #1e1e2e;
    color: #cdd6f4;
    font-family: "Segoe UI", "Inter", sans-serif;
    font-size: 13px;
}

QMainWindow, QDialog {
    background-color: #1e1e2e;
}

/* ── Buttons ─────────────────────────────────────────────────────── */
QPushButton {
    background-color: #313244;
    color: #cdd6f4;
    border: 1px solid #585b70;
    border-radius: 8px;
    padding: 8px 18px;
    font-weight: 600;
    min-height: 24px;
}

QPushButton:hover {
    background-color: #45475a;
    border-color: #89b4fa;
}

QPushButton:pressed {
    background-color: #585b70;
}

QPushButton:disabled {
    background-color: #181825;
    color: #585b70;
    border-color: #313244;
}

QPushButton#primary {
    background-color: #89b4fa;
    color: #1e1e2e;
    border: none;
}

QPushButton#primary:hover {
    background-color: #74c7ec;
}

QPushButton#icon_action {
    background-color: transparent;
    border: none;
    padding: 2px 6px;
    min-height: 18px;
    font-size: 14px;
}

QPushButton#icon_action:hover {
    background-color: #45475a;
}

/* ── Input fields ────────────────────────────────────────────────── */
QLineEdit, QTextEdit, QPlainTextEdit {
    background-color: #313244;
    color: #cdd6f4;
    border: 1px solid #585b70;
    border-radius: 6px;
    padding: 6px 10px;
    selection-background-color: #89b4fa;
    selection-color: #1e1e2e;
}

QLineEdit:focus, QTextEdit:focus {
    border-color: #89b4fa;
}

/* ── ComboBox ────────────────────────────────────────────────────── */
QComboBox {
    background-color: #313244;
    color: #cdd6f4;
    border: 1px solid #585b70;
    border-radius: 6px;
    padding: 6px 10px;
    min-width: 120px;
}

QComboBox::drop-down {
    border: none;
    width: 24px;
}

QComboBox QAbstractItemView {
    background-color: #313244;
    color: #cdd6f4;
    border: 1px solid #585b70;
    selection-background-color: #45475a;
}

/* ── Labels ──────────────────────────────────────────────────────── */
QLabel {
    background: transparent;
    color: #cdd6f4;
}

QLabel#title {
    font-size: 22px;
    font-weight: 700;
    color: #89b4fa;
}

QLabel#subtitle {
    font-size: 13px;
    color: #a6adc8;
}

QLabel#metric_value {
    font-size: 24px;
    font-weight: 700;
    color: #cdd6f4;
}

QLabel#metric_label {
    font-size: 11px;
    color: #a6adc8;
}

QLabel#avatar {
    font-size: 22px;
    font-weight: 700;
    color: #89b4fa;
    background-color: #313244;
    border-radius: 28px;
}

/* ── Tables ──────────────────────────────────────────────────────── */
QTableWidget {
    background-color: #1e1e2e;
    alternate-background-color: #232336;
    gridline-color: #313244;
    border: 1px solid #313244;
    border-radius: 6px;
    selection-background-color: #45475a;
    selection-color: #cdd6f4;
}

QTableWidget::item {
    padding: 4px 8px;
}

QHeaderView::section {
    background-color: #181825;
    color: #a6adc8;
    border: none;
    border-bottom: 1px solid #313244;
    padding: 6px 8px;
    font-weight: 600;
}

/* ── Tab Widget ──────────────────────────────────────────────────── */
QTabWidget::pane {
    border: 1px solid #313244;
    background-color: #1e1e2e;
    border-radius: 8px;
}

QTabBar::tab {
    background-color: #181825;
    color: #a6adc8;
    padding: 10px 20px;
    margin-right: 2px;
    border-top-left-radius: 8px;
    border-top-right-radius: 8px;
    font-weight: 600;
}

QTabBar::tab:selected {
    background-color: #1e1e2e;
    color: #89b4fa;
    border-bottom: 2px solid #89b4fa;
}

QTabBar::tab:hover:!selected {
    background-color: #313244;
    color: #cdd6f4;
}

/* ── Scroll Area ─────────────────────────────────────────────────── */
QScrollArea {
    border: none;
    background-color: transparent;
}

QScrollBar:vertical {
    background-color: #181825;
    width: 10px;
    border-radius: 5px;
}

QScrollBar::handle:vertical {
    background-color: #585b70;
    border-radius: 5px;
    min-height: 20px;
}

/* ── Group Box ───────────────────────────────────────────────────── */
QGroupBox {
    border: 1px solid #313244;
    border-radius: 8px;
    margin-top: 12px;
    padding-top: 16px;
    font-weight: 600;
}

QGroupBox::title {
    subcontrol-origin: margin;
    left: 12px;
    padding: 0 6px;
    color: #89b4fa;
}

/* ── SpinBox / DateEdit ──────────────────────────────────────────── */
QSpinBox, QDoubleSpinBox, QDateEdit {
    background-color: #313244;
    color: #cdd6f4;
    border: 1px solid #585b70;
    border-radius: 6px;
    padding: 4px 8px;
}

/* ── Message Box ─────────────────────────────────────────────────── */
QMessageBox {
    background-color: #1e1e2e;
}

/* ── Tooltip ─────────────────────────────────────────────────────── */
QToolTip {
    background-color: #313244;
    color: #cdd6f4;
    border: 1px solid #585b70;
    border-radius: 4px;
    padding: 4px 8px;
}

/* ── Progress Bar ────────────────────────────────────────────────── */
QProgressBar {
    background-color: #313244;
    border-radius: 4px;
    text-align: center;
    color: #cdd6f4;
    max-height: 8px;
}

QProgressBar::chunk {
    background-color: #89b4fa;
    border-radius: 4px;
}
"""


def badge_style(color: str) -> str:
    """Pill badge in the given accent colour (status badges, role badges)."""
    return f"""
        QLabel {{
            background-color: #181825;
            color: {color};
            border: 1px solid {color};
            border-radius: 9px;
            padding: 2px 10px;
            font-size: 11px;
            font-weight: 600;
        }}
    """
