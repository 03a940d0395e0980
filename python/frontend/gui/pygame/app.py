"""Pygame GUI frontend — fully self-contained.

Includes main menu, pair-count selection, gameplay, win screen with
name entry, and score display.  No terminal interaction required.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from pathlib import Path

import pygame

from backend.engine.gamegenerator import MAX_PAIRS, MIN_PAIRS
from backend.engine.gameplay import GamePlay
from backend.models.highscore import MAX_NAME_LENGTH, ScoreBook
from backend.models.layout import GridLayout

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)
COL_CARD_BACK = (128, 128, 128)

# One colour per pair, used when no image is found for a face.
_FACE_COLOURS = [
    COL_BLUE, COL_PINK, COL_YELLOW, COL_GREEN,
    COL_LAVENDER, COL_RED, (250, 179, 135), (148, 226, 213),
]

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 1000, 700
HEADER_H = 80
FPS = 30

# python/frontend/gui/pygame/app.py -> <project>/assets/images
IMAGES_DIR = Path(__file__).resolve().parents[4] / "assets" / "images"


class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    WIN = "win"
    SCORES = "scores"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=8)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(lbl, lbl.get_rect(center=self.rect.center))

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _fmt(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(
        self,
        default_pairs: int,
        data_dir: Path,
        seed: int | None = None,
        images_dir: Path = IMAGES_DIR,
    ) -> None:
        self._scores = ScoreBook(data_dir)
        self._sel_pairs = default_pairs
        self._seed = seed
        self._images_dir = images_dir

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Memory Match")
        self._clock = pygame.time.Clock()

        self._f_big = pygame.font.SysFont("Helvetica", 44, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 24, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 18)
        self._f_btn = pygame.font.SysFont("Helvetica", 18, bold=True)
        self._f_card = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 14)

        self._background = self._load_image("space.png", (WIN_W, WIN_H))
        self._faces: dict[str, pygame.Surface] = {}

        self._screen = _Screen.MENU
        self._game: GamePlay | None = None
        self._layout: GridLayout | None = None
        self._name = ""
        self._saved: tuple[int, bool] | None = None

        self._build_buttons()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_buttons(self) -> None:
        bw, bh, gap = 64, 46, 10
        counts = range(MIN_PAIRS, MAX_PAIRS + 1)
        total = len(counts) * bw + (len(counts) - 1) * gap
        sx = _cx(total)
        self._pair_btns = {
            p: _Btn((sx + i * (bw + gap), 260, bw, bh), str(p), self._f_btn)
            for i, p in enumerate(counts)
        }

        bw_lg = 240
        self._play_btn = _Btn(
            (_cx(bw_lg), 350, bw_lg, 52), "P L A Y", self._f_btn,
            bg=COL_BLUE, hover=COL_LAVENDER, fg=COL_BASE,
        )
        self._scores_btn = _Btn((_cx(bw_lg), 416, bw_lg, 46), "S C O R E S", self._f_btn)
        self._quit_btn = _Btn(
            (_cx(bw_lg), 476, bw_lg, 46), "Q U I T", self._f_btn,
            bg=COL_RED, hover=(255, 170, 185), fg=COL_BASE,
        )
        self._menu_all = [
            *self._pair_btns.values(), self._play_btn, self._scores_btn, self._quit_btn,
        ]

        self._save_btn = _Btn(
            (_cx(bw_lg), 430, bw_lg, 50), "S A V E", self._f_btn,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._again_btn = _Btn(
            (_cx(bw_lg), 500, bw_lg, 50), "PLAY AGAIN", self._f_btn,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._menu_btn = _Btn((_cx(bw_lg), 566, bw_lg, 46), "M E N U", self._f_btn)
        self._back_btn = _Btn((_cx(200), WIN_H - 70, 200, 46), "B A C K", self._f_btn)

    # ── assets ──────────────────────────────────────────────────────────────

    def _load_image(self, name: str, size: tuple[int, int]) -> pygame.Surface | None:
        path = self._images_dir / name
        if not path.is_file():
            return None
        try:
            img = pygame.image.load(str(path)).convert()
        except pygame.error:
            logger.warning("Could not load image %s", path)
            return None
        return pygame.transform.smoothscale(img, size)

    def _prepare_faces(self) -> None:
        """Load ``<face>.png`` for each pair; missing images fall back to tiles."""
        assert self._game is not None and self._layout is not None
        size = (self._layout.card_size, self._layout.card_size)
        self._faces = {}
        for card in self._game.deck.cards:
            if card.face not in self._faces:
                img = self._load_image(f"{card.face.lower()}.png", size)
                if img is not None:
                    self._faces[card.face] = img

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_background(self) -> None:
        if self._background is not None:
            self._surf.blit(self._background, (0, 0))
        else:
            self._surf.fill(COL_BASE)

    def _draw_menu(self) -> None:
        self._draw_background()
        _blit_center(self._surf, self._f_big.render("MEMORY  MATCH", True, COL_TEXT), 100)
        _blit_center(
            self._surf, self._f_body.render("Number of pairs", True, COL_SUBTEXT), 224
        )
        for p, btn in self._pair_btns.items():
            btn.bg = COL_GREEN if p == self._sel_pairs else COL_SURFACE0
            btn.fg = COL_BASE if p == self._sel_pairs else COL_TEXT
            btn.draw(self._surf)
        self._play_btn.draw(self._surf)
        self._scores_btn.draw(self._surf)
        self._quit_btn.draw(self._surf)

    def _draw_card(self, index: int) -> None:
        game, layout = self._game, self._layout
        assert game is not None and layout is not None
        card = game.deck.cards[index]
        rect = pygame.Rect(layout.card_rect(index))

        if not game.is_face_up(index):
            pygame.draw.rect(self._surf, COL_CARD_BACK, rect)
            return

        if card.face in self._faces:
            self._surf.blit(self._faces[card.face], rect.topleft)
        else:
            col = _FACE_COLOURS[card.pair_id % len(_FACE_COLOURS)]
            pygame.draw.rect(self._surf, col, rect, border_radius=6)
            lbl = self._f_card.render(card.face, True, COL_BASE)
            self._surf.blit(lbl, lbl.get_rect(center=rect.center))

        if card.is_matched:
            pygame.draw.rect(self._surf, COL_GREEN, rect, width=4, border_radius=4)
        elif card.is_flipped and game.is_waiting:
            pygame.draw.rect(self._surf, COL_RED, rect, width=4, border_radius=4)

    def _draw_game(self) -> None:
        game = self._game
        assert game is not None
        self._draw_background()

        if game.state.is_previewing:
            header = f"Memorise the cards…  {game.state.preview_remaining:.0f}"
            colour = COL_YELLOW
        else:
            header = (
                f"TIME: {_fmt(game.elapsed_time)}    MOVES: {game.moves}    "
                f"PAIRS: {game.deck.matched_pairs}/{game.pairs}"
            )
            colour = COL_TEXT
        _blit_center(self._surf, self._f_title.render(header, True, colour), 24)

        for i in range(len(game.deck)):
            self._draw_card(i)

        _blit_center(
            self._surf,
            self._f_small.render(
                "Click a card to flip it     R  restart     M / Esc  menu",
                True,
                COL_OVERLAY0,
            ),
            WIN_H - 30,
        )

    def _draw_win(self) -> None:
        game = self._game
        assert game is not None
        self._draw_background()

        _blit_center(
            self._surf, self._f_big.render("★  A L L   M A T C H E D  ★", True, COL_GREEN), 90
        )
        y = 180
        for txt in (f"Moves:  {game.moves}", f"Time:   {_fmt(game.elapsed_time)}"):
            _blit_center(self._surf, self._f_title.render(txt, True, COL_YELLOW), y)
            y += 40

        if self._saved is None:
            _blit_center(
                self._surf, self._f_body.render("Enter your name", True, COL_SUBTEXT), 300
            )
            box = pygame.Rect(_cx(320), 334, 320, 50)
            pygame.draw.rect(self._surf, COL_MANTLE, box, border_radius=8)
            pygame.draw.rect(self._surf, COL_BLUE, box, width=2, border_radius=8)
            caret = "|" if pygame.time.get_ticks() // 500 % 2 else ""
            lbl = self._f_title.render(self._name + caret, True, COL_TEXT)
            self._surf.blit(lbl, (box.x + 14, box.centery - lbl.get_height() // 2))
            self._save_btn.draw(self._surf)
        else:
            rank, is_best = self._saved
            _blit_center(
                self._surf,
                self._f_title.render(f"Saved as #{rank} on the leaderboard", True, COL_BLUE),
                320,
            )
            if is_best:
                _blit_center(
                    self._surf, self._f_title.render("New best score!", True, COL_GREEN), 370
                )
            self._again_btn.draw(self._surf)
            self._menu_btn.draw(self._surf)

    def _draw_scores(self) -> None:
        self._draw_background()
        _blit_center(self._surf, self._f_big.render("S C O R E S", True, COL_TEXT), 30)

        best = self._scores.best.best
        best_txt = (
            f"Best:  {best.name}   {best.moves} moves   {best.time:.1f}s"
            if best is not None
            else "No best score yet."
        )
        _blit_center(self._surf, self._f_title.render(best_txt, True, COL_GREEN), 110)

        entries = self._scores.leaderboard.get_scores(10)
        y = 170
        if not entries:
            _blit_center(
                self._surf, self._f_body.render("No games finished yet.", True, COL_OVERLAY0), y
            )
        for i, e in enumerate(entries, 1):
            row = f"{i:>2}.  {e.name:<16}  {e.moves:>3} moves   {e.time:>6.1f}s"
            _blit_center(self._surf, self._f_body.render(row, True, COL_SUBTEXT), y)
            y += 32

        self._back_btn.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._menu_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for p, b in self._pair_btns.items():
                if b.hit(ev.pos):
                    self._sel_pairs = p
                    return True
            if self._play_btn.hit(ev.pos):
                self._start_game()
            elif self._scores_btn.hit(ev.pos):
                self._screen = _Screen.SCORES
            elif self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                self._start_game()
            elif ev.key == pygame.K_LEFT:
                self._sel_pairs = max(MIN_PAIRS, self._sel_pairs - 1)
            elif ev.key == pygame.K_RIGHT:
                self._sel_pairs = min(MAX_PAIRS, self._sel_pairs + 1)
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game, layout = self._game, self._layout
        assert game is not None and layout is not None
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            game.flip_at(ev.pos[0], ev.pos[1], layout)
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_r:
                self._start_game()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._screen = _Screen.MENU
        return True

    def _ev_win(self, ev: pygame.event.Event) -> bool:
        if self._saved is None:
            if ev.type == pygame.MOUSEMOTION:
                self._save_btn.motion(ev.pos)
            elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                if self._save_btn.hit(ev.pos):
                    self._save_score()
            elif ev.type == pygame.KEYDOWN:
                if ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    self._save_score()
                elif ev.key == pygame.K_BACKSPACE:
                    self._name = self._name[:-1]
                elif ev.unicode and ev.unicode.isprintable():
                    self._name = (self._name + ev.unicode)[:MAX_NAME_LENGTH]
            return True

        if ev.type == pygame.MOUSEMOTION:
            self._again_btn.motion(ev.pos)
            self._menu_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._again_btn.hit(ev.pos):
                self._start_game()
            elif self._menu_btn.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                self._start_game()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._screen = _Screen.MENU
        return True

    def _ev_scores(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._back_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._back_btn.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE, pygame.K_m):
                self._screen = _Screen.MENU
        return True

    # ── game state ──────────────────────────────────────────────────────────

    def _start_game(self) -> None:
        self._game = GamePlay(self._sel_pairs, seed=self._seed)
        deck = self._game.deck
        layout = GridLayout.centered(WIN_W, WIN_H - HEADER_H, deck.columns, deck.rows)
        self._layout = dataclasses.replace(layout, origin_y=layout.origin_y + HEADER_H)
        self._name = ""
        self._saved = None
        self._prepare_faces()
        self._screen = _Screen.PLAYING

    def _save_score(self) -> None:
        game = self._game
        assert game is not None
        self._saved = self._scores.record(self._name, game.moves, game.elapsed_time)

    def _tick_game(self) -> None:
        game = self._game
        if game is None or self._screen is not _Screen.PLAYING:
            return
        game.update()
        if game.is_won:
            self._screen = _Screen.WIN

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PLAYING: self._ev_game,
            _Screen.WIN: self._ev_win,
            _Screen.SCORES: self._ev_scores,
        }
        _draw = {
            _Screen.MENU: self._draw_menu,
            _Screen.PLAYING: self._draw_game,
            _Screen.WIN: self._draw_win,
            _Screen.SCORES: self._draw_scores,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                if not _dispatch[self._screen](ev):
                    running = False
                    break

            self._tick_game()
            _draw[self._screen]()
            pygame.display.flip()
            self._clock.tick(FPS)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    pairs: int = 4,
    data_dir: Path = Path("data"),
    seed: int | None = None,
    images_dir: Path = IMAGES_DIR,
) -> None:
    """Launch the Pygame GUI (opens directly to the menu)."""
    app = PygameApp(pairs, data_dir, seed, images_dir)
    app.run_loop()
