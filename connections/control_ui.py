"""
Control UI Module for Connections

Provides a PyQt5-based game window. The window only draws a GameView and turns
clicks and key presses into intents; all game rules live in the engine.
"""

from typing import Optional

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel,
    QPushButton, QLayout
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont

from connections.input_map import intent_for_key, intent_for_button, intent_for_tile
from connections.presentation import GameView, TileView


# Palette
LIGHTER_BLACK = "#202020"
MUTED_BLACK = "#161616"
MUTED_WHITE = "#E0E0E0"
BLACK = "#000000"
DISABLED_GREY = "#363636"
ALREADY_GUESSED_FOREGROUND = "#F60D94"
ALREADY_GUESSED_BACKGROUND = "#F8CCE6"

CELL_WIDTH = 120
CELL_HEIGHT = 60


def key_name(key: int, text: str, modifiers) -> str:
    """
    Convert a Qt key event into the key names used by the input map.

    Args:
        key: Qt key code
        text: Text produced by the key press
        modifiers: Active keyboard modifiers

    Returns:
        Key name such as "enter", "backspace", "space", "ctrl+c" or the typed text
    """
    if key in (Qt.Key_Return, Qt.Key_Enter):
        return "enter"
    if key == Qt.Key_Backspace:
        return "backspace"
    if key == Qt.Key_Space:
        return "space"
    if key == Qt.Key_C and modifiers & Qt.ControlModifier:
        return "ctrl+c"
    return text


def _clear_layout(layout: QLayout) -> None:
    """Remove and delete every widget in a layout."""
    while layout.count():
        item = layout.takeAt(0)
        widget = item.widget()
        if widget is not None:
            widget.deleteLater()
        elif item.layout() is not None:
            _clear_layout(item.layout())


def _tile_style(tile: TileView) -> str:
    if tile.already_guessed:
        background, foreground = ALREADY_GUESSED_BACKGROUND, ALREADY_GUESSED_FOREGROUND
    elif tile.selected:
        background, foreground = MUTED_WHITE, MUTED_BLACK
    else:
        background, foreground = MUTED_BLACK, MUTED_WHITE
    return (
        f"QPushButton {{ background-color: {background}; color: {foreground}; "
        f"border: none; border-radius: 4px; }}"
    )


class GameWindow(QMainWindow):
    """
    Main game window.

    Draws revealed groups, the board, the mistake counter and the action
    buttons from a GameView. User input is reported through intent_requested.
    """

    # Signals for the application controller
    intent_requested = pyqtSignal(object)  # Emits a connections.puzzle intent
    shutdown_requested = pyqtSignal()

    def __init__(self):
        super().__init__()
        self._view: Optional[GameView] = None
        self._init_ui()

    def _init_ui(self):
        """Initialize the user interface components."""
        self.setWindowTitle("Connections")
        self.setFocusPolicy(Qt.StrongFocus)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        layout.setSpacing(12)
        layout.setContentsMargins(40, 20, 40, 20)
        central_widget.setLayout(layout)

        # Header
        self.header_label = QLabel("")
        self.header_label.setAlignment(Qt.AlignCenter)
        header_font = QFont()
        header_font.setPointSize(12)
        self.header_label.setFont(header_font)
        layout.addWidget(self.header_label)

        # Revealed groups, one row each
        self.revealed_layout = QVBoxLayout()
        self.revealed_layout.setSpacing(8)
        layout.addLayout(self.revealed_layout)

        # Board
        self.board_layout = QGridLayout()
        self.board_layout.setHorizontalSpacing(8)
        self.board_layout.setVerticalSpacing(8)
        layout.addLayout(self.board_layout)

        # Mistakes
        self.mistakes_label = QLabel("")
        self.mistakes_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.mistakes_label)

        # Action buttons
        self.actions_layout = QHBoxLayout()
        self.actions_layout.setSpacing(12)
        layout.addLayout(self.actions_layout)

        # Status
        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignCenter)
        status_font = QFont()
        status_font.setPointSize(9)
        self.status_label.setFont(status_font)
        layout.addWidget(self.status_label)

        layout.addStretch()
        self._apply_styles()

    def _apply_styles(self):
        """Apply the dark theme."""
        style = f"""
            QMainWindow {{
                background-color: {LIGHTER_BLACK};
            }}
            QLabel {{
                color: {MUTED_WHITE};
            }}
            QPushButton#action {{
                background-color: {LIGHTER_BLACK};
                color: {MUTED_WHITE};
                border: 1px solid {MUTED_WHITE};
                padding: 6px;
            }}
            QPushButton#action:disabled {{
                color: {DISABLED_GREY};
                border: 1px solid {DISABLED_GREY};
            }}
        """
        self.setStyleSheet(style)

    def render(self, view: GameView):
        """
        Redraw the whole window from a presentation model.

        Args:
            view: GameView built from the current engine state
        """
        self._view = view
        self.header_label.setText(view.header)
        self._render_revealed(view)
        self._render_board(view)
        self.mistakes_label.setText(view.mistakes_text)
        self._render_actions(view)
        self.status_label.setText(view.status)
        self.setWindowTitle("Connections - game over" if view.finished else "Connections")

    def _render_revealed(self, view: GameView):
        _clear_layout(self.revealed_layout)
        for row in view.revealed_rows:
            label = QLabel(f"<b>{'  '.join(row.words)}</b><br>{row.clue}")
            label.setAlignment(Qt.AlignCenter)
            label.setMinimumHeight(CELL_HEIGHT)
            label.setStyleSheet(f"background-color: {row.color}; color: {BLACK}; border-radius: 4px;")
            self.revealed_layout.addWidget(label)

    def _render_board(self, view: GameView):
        _clear_layout(self.board_layout)
        for row_index, row in enumerate(view.board):
            for col_index, tile in enumerate(row):
                button = QPushButton(tile.label)
                button.setFixedSize(CELL_WIDTH, CELL_HEIGHT)
                button.setFocusPolicy(Qt.NoFocus)
                button.setStyleSheet(_tile_style(tile))
                button.clicked.connect(lambda _checked=False, label=tile.label: self._on_tile_clicked(label))
                self.board_layout.addWidget(button, row_index, col_index)

    def _render_actions(self, view: GameView):
        _clear_layout(self.actions_layout)
        for action in view.buttons:
            button = QPushButton(action.label)
            button.setObjectName("action")
            button.setFocusPolicy(Qt.NoFocus)
            button.setEnabled(action.enabled)
            button.clicked.connect(lambda _checked=False, label=action.label: self._on_button_clicked(label))
            self.actions_layout.addWidget(button)

    def _on_tile_clicked(self, label: str):
        """Handle board tile click."""
        self.intent_requested.emit(intent_for_tile(label))

    def _on_button_clicked(self, label: str):
        """Handle action button click."""
        intent = intent_for_button(label)
        if intent is not None:
            self.intent_requested.emit(intent)

    def keyPressEvent(self, event):
        """Translate key presses into intents; unbound keys fall through."""
        intent = intent_for_key(key_name(event.key(), event.text(), event.modifiers()))
        if intent is None:
            super().keyPressEvent(event)
            return
        self.intent_requested.emit(intent)

    def closeEvent(self, event):
        """
        Handle window close event.

        Emits shutdown_requested signal before closing.

        Args:
            event: QCloseEvent object
        """
        self.shutdown_requested.emit()
        event.accept()
