"""PyQt6 GUI frontend — fully self-contained.

Includes main menu, pair-count selection, gameplay, win screen with
name entry, and score display.  No terminal interaction required.
"""

from __future__ import annotations

import sys
from pathlib import Path

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont, QIcon, QKeyEvent, QPixmap
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from backend.engine.gamegenerator import MAX_PAIRS, MIN_PAIRS
from backend.engine.gameplay import GamePlay
from backend.models.highscore import MAX_NAME_LENGTH, ScoreBook

# python/frontend/gui/pyqt/app.py -> <project>/assets/images
IMAGES_DIR = Path(__file__).resolve().parents[4] / "assets" / "images"

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_SUBTEXT = "#a6adc8"
_BLUE = "#89b4fa"
_GREEN = "#a6e3a1"
_GREEN_H = "#b8ecb4"
_PINK = "#f5c2e7"
_YELLOW = "#f9e2af"
_RED = "#f38ba8"
_RED_H = "#f5a0b8"
_LAVENDER = "#b4befe"
_CARD_BACK = "#808080"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_CARD_PX = 110
_TICK_MS = 100


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 14,
    min_w: int = 0,
    min_h: int = 44,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold))
    btn.setMinimumHeight(min_h)
    if min_w:
        btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:8px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
    )
    return btn


def _label(text: str, size: int, colour: str = _TEXT, bold: bool = False) -> QLabel:
    lbl = QLabel(text)
    lbl.setFont(QFont("Helvetica", size, QFont.Weight.Bold if bold else QFont.Weight.Normal))
    lbl.setStyleSheet(f"color:{colour};")
    lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
    return lbl


def _fmt(secs: float) -> str:
    m, s = divmod(int(secs), 60)
    return f"{m:02d}:{s:02d}"


# ═══════════════════════════════════════════════════════════════════════════
# Pages
# ═══════════════════════════════════════════════════════════════════════════


class _MenuPage(QWidget):
    """Main menu with pair-count selection, play, scores, quit."""

    def __init__(self, default_pairs: int) -> None:
        super().__init__()
        self.setObjectName("page")
        self.selected_pairs = default_pairs

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(12)
        root.setContentsMargins(30, 30, 30, 30)

        root.addWidget(_label("MEMORY  MATCH", 34, bold=True))
        root.addSpacerItem(QSpacerItem(0, 24))
        root.addWidget(_label("Number of pairs", 15, _SUBTEXT))

        hbox = QHBoxLayout()
        hbox.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hbox.setSpacing(10)
        self._pair_btns: dict[int, QPushButton] = {}
        for p in range(MIN_PAIRS, MAX_PAIRS + 1):
            btn = _styled_btn(str(p), min_w=52, min_h=46, font_size=13)
            btn.clicked.connect(lambda _, n=p: self.pick_pairs(n))
            hbox.addWidget(btn)
            self._pair_btns[p] = btn
        root.addLayout(hbox)

        root.addSpacerItem(QSpacerItem(0, 18))

        self.play_btn = _styled_btn(
            "P L A Y", bg=_BLUE, hover=_LAVENDER, fg=_BASE,
            font_size=16, min_w=240, min_h=52,
        )
        root.addWidget(self.play_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.scores_btn = _styled_btn("S C O R E S", min_w=240, font_size=13)
        root.addWidget(self.scores_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.quit_btn = _styled_btn(
            "Q U I T", bg=_RED, hover=_RED_H, fg=_BASE, min_w=240, font_size=13
        )
        root.addWidget(self.quit_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self._refresh_highlight()

    def pick_pairs(self, n: int) -> None:
        self.selected_pairs = max(MIN_PAIRS, min(MAX_PAIRS, n))
        self._refresh_highlight()

    def _refresh_highlight(self) -> None:
        for p, btn in self._pair_btns.items():
            bg, hv, fg = (
                (_GREEN, _GREEN_H, _BASE) if p == self.selected_pairs
                else (_SURFACE0, _SURFACE1, _TEXT)
            )
            btn.setStyleSheet(
                f"QPushButton {{ background:{bg}; color:{fg};"
                f" border:none; border-radius:8px; padding:6px 18px; font-weight:bold; }}"
                f" QPushButton:hover {{ background:{hv}; }}"
            )


class _GamePage(QWidget):
    """The card grid with live stats; a timer drives the flip-back."""

    def __init__(self, pairs: int, images_dir: Path, seed: int | None) -> None:
        super().__init__()
        self.setObjectName("page")
        self.game = GamePlay(pairs, seed=seed)
        self._images_dir = images_dir

        root = QVBoxLayout(self)
        root.setSpacing(8)
        root.setContentsMargins(16, 10, 16, 10)

        self._stats = _label("", 15, _PINK, bold=True)
        root.addWidget(self._stats)

        frame = QFrame()
        frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
        grid = QGridLayout(frame)
        grid.setSpacing(20)
        grid.setContentsMargins(16, 16, 16, 16)
        root.addWidget(frame, alignment=Qt.AlignmentFlag.AlignCenter)

        deck = self.game.deck
        self._btns: list[QPushButton] = []
        for i in range(len(deck)):
            b = QPushButton()
            b.setFixedSize(_CARD_PX, _CARD_PX)
            b.setFont(QFont("Helvetica", 13, QFont.Weight.Bold))
            b.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            b.clicked.connect(lambda _, idx=i: self._click(idx))
            r, c = deck.position_of(i)
            grid.addWidget(b, r, c)
            self._btns.append(b)

        root.addWidget(
            _label("Click a card to flip it     R  restart     M / Esc  menu", 11, _OVERLAY0)
        )

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(_TICK_MS)

        self._sync()

    def _icon_for(self, face: str) -> QIcon | None:
        path = self._images_dir / f"{face.lower()}.png"
        return QIcon(QPixmap(str(path))) if path.is_file() else None

    def _sync(self) -> None:
        game = self.game
        for i, b in enumerate(self._btns):
            card = game.deck.cards[i]
            if not game.is_face_up(i):
                b.setText("")
                b.setIcon(QIcon())
                b.setStyleSheet(
                    f"QPushButton{{background:{_CARD_BACK};border:none;}}"
                )
                continue
            icon = self._icon_for(card.face)
            if icon is not None:
                b.setText("")
                b.setIcon(icon)
                b.setIconSize(b.size())
            else:
                b.setIcon(QIcon())
                b.setText(card.face)
            if card.is_matched:
                border = _GREEN
            elif card.is_flipped and game.is_waiting:
                border = _RED
            else:
                border = _BLUE
            b.setStyleSheet(
                f"QPushButton{{background:{_YELLOW};color:{_BASE};"
                f"border:4px solid {border};border-radius:6px;}}"
            )

        if game.state.is_previewing:
            self._stats.setText(
                f"Memorise the cards…  {game.state.preview_remaining:.0f}"
            )
        else:
            self._stats.setText(
                f"Moves: {game.moves}    Pairs: {game.deck.matched_pairs}/{game.pairs}"
                f"    Time: {_fmt(game.elapsed_time)}"
            )

    def _tick(self) -> None:
        self.game.update()
        self._sync()
        if self.game.is_won:
            self._timer.stop()

    def _click(self, index: int) -> None:
        self.game.flip(index)
        self._sync()


class _WinPage(QWidget):
    """Victory screen with name entry, then navigation buttons."""

    def __init__(self, game: GamePlay, scores: ScoreBook) -> None:
        super().__init__()
        self.setObjectName("page")
        self._game = game
        self._scores = scores

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(10)
        root.setContentsMargins(30, 30, 30, 30)

        root.addWidget(_label("★  A L L   M A T C H E D  ★", 30, _GREEN, bold=True))
        root.addSpacerItem(QSpacerItem(0, 20))
        root.addWidget(_label(f"Moves:  {game.moves}", 20, _YELLOW, bold=True))
        root.addWidget(_label(f"Time:   {_fmt(game.elapsed_time)}", 20, _YELLOW, bold=True))
        root.addSpacerItem(QSpacerItem(0, 16))

        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Your name")
        self.name_edit.setMaxLength(MAX_NAME_LENGTH)
        self.name_edit.setFont(QFont("Helvetica", 16))
        self.name_edit.setFixedWidth(260)
        self.name_edit.setStyleSheet(
            f"QLineEdit {{ background:{_MANTLE}; color:{_TEXT};"
            f" border:2px solid {_BLUE}; border-radius:8px; padding:6px; }}"
        )
        self.name_edit.returnPressed.connect(self.save)
        root.addWidget(self.name_edit, alignment=Qt.AlignmentFlag.AlignCenter)

        self.save_btn = _styled_btn(
            "S A V E", bg=_GREEN, hover=_GREEN_H, fg=_BASE, min_w=240, font_size=14
        )
        self.save_btn.clicked.connect(self.save)
        root.addWidget(self.save_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self._result = _label("", 15, _BLUE, bold=True)
        root.addWidget(self._result)

        root.addSpacerItem(QSpacerItem(0, 12))

        self.again_btn = _styled_btn(
            "PLAY AGAIN", bg=_GREEN, hover=_GREEN_H, fg=_BASE,
            font_size=16, min_w=240, min_h=50,
        )
        root.addWidget(self.again_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.menu_btn = _styled_btn("M E N U", min_w=240, font_size=13)
        root.addWidget(self.menu_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.saved = False

    def save(self) -> None:
        if self.saved:
            return
        self.saved = True
        rank, is_best = self._scores.record(
            self.name_edit.text(), self._game.moves, self._game.elapsed_time
        )
        msg = f"Saved as #{rank} on the leaderboard."
        if is_best:
            msg += "   New best score!"
        self._result.setText(msg)
        self.name_edit.setEnabled(False)
        self.save_btn.setEnabled(False)


class _ScoresPage(QWidget):
    """Best score and leaderboard with a back button."""

    def __init__(self, scores: ScoreBook) -> None:
        super().__init__()
        self.setObjectName("page")

        root = QVBoxLayout(self)
        root.setSpacing(6)
        root.setContentsMargins(24, 20, 24, 16)
        root.addWidget(_label("S C O R E S", 26, bold=True))
        root.addSpacerItem(QSpacerItem(0, 10))

        best = scores.best.best
        if best is None:
            root.addWidget(_label("No best score yet.", 14, _OVERLAY0))
        else:
            root.addWidget(
                _label(
                    f"Best:  {best.name}   {best.moves} moves   {best.time:.1f}s",
                    16, _GREEN, bold=True,
                )
            )
        root.addSpacerItem(QSpacerItem(0, 10))

        entries = scores.leaderboard.get_scores(10)
        if not entries:
            root.addWidget(_label("No games finished yet.", 14, _OVERLAY0))
        for i, e in enumerate(entries, 1):
            root.addWidget(
                _label(f"{i}.  {e.name}   {e.moves} moves   {e.time:.1f}s", 13, _SUBTEXT)
            )

        root.addStretch(1)
        self.back_btn = _styled_btn("B A C K", min_w=200, font_size=13)
        root.addWidget(self.back_btn, alignment=Qt.AlignmentFlag.AlignCenter)


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════

_IDX_MENU = 0
_IDX_GAME = 1
_IDX_WIN = 2
_IDX_SCORES = 3


class _MainWindow(QMainWindow):
    def __init__(
        self, default_pairs: int, data_dir: Path, seed: int | None, images_dir: Path
    ) -> None:
        super().__init__()
        self._scores = ScoreBook(data_dir)
        self._images_dir = images_dir
        self._seed = seed

        self.setWindowTitle("Memory Match")
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(640, 620)

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        self._menu = _MenuPage(default_pairs)
        self._menu.play_btn.clicked.connect(self._on_play)
        self._menu.scores_btn.clicked.connect(self._show_scores)
        self._menu.quit_btn.clicked.connect(self.close)
        self._stack.addWidget(self._menu)  # 0

        # placeholders (replaced dynamically)
        self._game_page: _GamePage | None = None
        for _ in (_IDX_GAME, _IDX_WIN, _IDX_SCORES):
            self._stack.addWidget(QWidget())

        self._poll_timer = QTimer(self)
        self._poll_timer.timeout.connect(self._poll_win)
        self._poll_timer.start(_TICK_MS)

        self._stack.setCurrentIndex(_IDX_MENU)

    # -- navigation ---

    def _replace(self, idx: int, page: QWidget) -> None:
        old = self._stack.widget(idx)
        self._stack.removeWidget(old)
        old.deleteLater()
        self._stack.insertWidget(idx, page)
        self._stack.setCurrentIndex(idx)

    def _show_menu(self) -> None:
        self._stack.setCurrentIndex(_IDX_MENU)

    def _on_play(self) -> None:
        self._game_page = _GamePage(self._menu.selected_pairs, self._images_dir, self._seed)
        self._replace(_IDX_GAME, self._game_page)

    def _show_scores(self) -> None:
        page = _ScoresPage(self._scores)
        page.back_btn.clicked.connect(self._show_menu)
        self._replace(_IDX_SCORES, page)

    def _show_win(self) -> None:
        gp = self._game_page
        assert gp is not None
        page = _WinPage(gp.game, self._scores)
        page.again_btn.clicked.connect(self._on_play)
        page.menu_btn.clicked.connect(self._show_menu)
        self._replace(_IDX_WIN, page)
        page.name_edit.setFocus()

    def _poll_win(self) -> None:
        gp = self._game_page
        if gp is not None and gp.game.is_won and self._stack.currentIndex() == _IDX_GAME:
            self._show_win()

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        idx = self._stack.currentIndex()

        if idx == _IDX_MENU:
            if key == Qt.Key.Key_Return:
                self._on_play()
            elif key == Qt.Key.Key_Left:
                self._menu.pick_pairs(self._menu.selected_pairs - 1)
            elif key == Qt.Key.Key_Right:
                self._menu.pick_pairs(self._menu.selected_pairs + 1)
            elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
                self.close()

        elif idx == _IDX_GAME:
            if key == Qt.Key.Key_R:
                self._on_play()
            elif key in (Qt.Key.Key_M, Qt.Key.Key_Escape):
                self._show_menu()

        elif idx == _IDX_WIN:
            if key == Qt.Key.Key_Escape:
                self._show_menu()

        elif idx == _IDX_SCORES:
            if key in (Qt.Key.Key_Escape, Qt.Key.Key_Backspace, Qt.Key.Key_M):
                self._show_menu()

        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    pairs: int = 4,
    data_dir: Path = Path("data"),
    seed: int | None = None,
    images_dir: Path = IMAGES_DIR,
) -> None:
    """Launch the PyQt6 GUI (opens directly to the menu)."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(pairs, data_dir, seed, images_dir)
    window.show()
    qapp.exec()
