"""Pygame UI shell for Wavelength Co-op.

Screens:
- Start: edit the category list, then start a game
- Round: secret Seer view, clue entry, Guesser dial/slider, per-round result
- Summary: total score and round history

Deterministic round flow, scoring, geometry and RNG live in wavelength_coop/*
(core modules); this module only renders and translates input into actions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import pygame

from .deck import CategoryEditor
from .dial_geometry import (
    DialLayout,
    band_shapes,
    base_arc_path,
    path_points,
    polar_to_cartesian,
    value_to_angle_radians,
    value_to_slider,
)
from .game_core import GameSnapshot, Phase, WavelengthGame
from .random_source import RandomSource, RealRandom
from .results import game_result_from_game
from .scoring import percent, points_text

logger = logging.getLogger(__name__)


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


Color = tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class Palette:
    bg: Color
    panel_bg: Color
    header_bg: Color
    border: Color
    text_main: Color
    text_muted: Color
    field_bg: Color
    field_border: Color
    accent: Color
    accent_text: Color
    button_bg: Color
    dial_base: Color
    pointer: Color
    overlay: tuple[int, int, int, int]


LIGHT = Palette(
    bg=(241, 245, 249),
    panel_bg=(255, 255, 255),
    header_bg=(226, 232, 240),
    border=(203, 213, 225),
    text_main=(15, 23, 42),
    text_muted=(100, 116, 139),
    field_bg=(248, 250, 252),
    field_border=(203, 213, 225),
    accent=(15, 23, 42),
    accent_text=(255, 255, 255),
    button_bg=(226, 232, 240),
    dial_base=(164, 175, 189),
    pointer=(15, 23, 42),
    overlay=(226, 232, 240, 215),
)

DARK = Palette(
    bg=(2, 6, 23),
    panel_bg=(30, 41, 59),
    header_bg=(15, 23, 42),
    border=(51, 65, 85),
    text_main=(241, 245, 249),
    text_muted=(148, 163, 184),
    field_bg=(15, 23, 42),
    field_border=(51, 65, 85),
    accent=(79, 70, 229),
    accent_text=(255, 255, 255),
    button_bg=(51, 65, 85),
    dial_base=(71, 85, 105),
    pointer=(226, 232, 240),
    overlay=(15, 23, 42, 200),
)

# Band points -> fill colour (outer red, blue, yellow, inner green).
BAND_COLORS: dict[int, Color] = {
    1: (248, 113, 113),
    2: (122, 182, 255),
    3: (250, 204, 21),
    4: (52, 211, 153),
}

WINDOW_SIZE = (960, 680)
TARGET_FPS = 60
SLIDER_STEP = 10


class App:
    def __init__(self, surface: pygame.Surface) -> None:
        self._surface = surface
        self._screens: list[Screen] = []
        self._running = True
        self._dark = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def dark(self) -> bool:
        return self._dark

    @property
    def palette(self) -> Palette:
        return DARK if self._dark else LIGHT

    @property
    def top(self) -> Screen | None:
        return self._screens[-1] if self._screens else None

    def toggle_dark(self) -> None:
        self._dark = not self._dark

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def pop(self) -> None:
        # Never pop the last/root screen; root handles its own quit/back behavior.
        if len(self._screens) > 1:
            self._screens.pop()

    def replace(self, screen: Screen) -> None:
        if not self._screens:
            self._screens.append(screen)
            return
        self._screens[-1] = screen

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_F2:
            self.toggle_dark()
            return
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


@dataclass(frozen=True, slots=True)
class _Button:
    label: str
    rect: pygame.Rect
    action: Callable[[], None]
    primary: bool = False


class _TextField:
    """Single-line text buffer fed by KEYDOWN events."""

    def __init__(self, placeholder: str, *, max_len: int = 40) -> None:
        self.placeholder = placeholder
        self.text = ""
        self._max_len = max_len

    def handle_key(self, event: pygame.event.Event) -> bool:
        """Apply an edit key. Returns True if the text changed."""

        if event.key == pygame.K_BACKSPACE:
            if not self.text:
                return False
            self.text = self.text[:-1]
            return True
        ch = getattr(event, "unicode", "")
        if ch and ch.isprintable() and len(self.text) < self._max_len:
            self.text += ch
            return True
        return False

    def clear(self) -> None:
        self.text = ""


class _DragTracker:
    """Pointer drag subscription: held from press until release or cancel."""

    def __init__(self) -> None:
        self._target: str | None = None

    @property
    def active(self) -> bool:
        return self._target is not None

    @property
    def target(self) -> str | None:
        return self._target

    def begin(self, target: str) -> None:
        self._target = target

    def end(self) -> None:
        self._target = None


def _fit_text(font: pygame.font.Font, label: str, max_width: int) -> str:
    if max_width <= 0:
        return ""
    if font.size(label)[0] <= max_width:
        return label
    clipped = label
    while clipped and font.size(f"{clipped}...")[0] > max_width:
        clipped = clipped[:-1]
    return f"{clipped}..." if clipped else "..."


def _draw_frame(
    surface: pygame.Surface,
    palette: Palette,
    title: str,
    tag: str,
    *,
    title_font: pygame.font.Font,
    tag_font: pygame.font.Font,
) -> tuple[pygame.Rect, pygame.Rect]:
    w, h = surface.get_size()
    surface.fill(palette.bg)

    margin = max(10, min(24, w // 34))
    frame = pygame.Rect(margin, margin, max(280, w - margin * 2), max(220, h - margin * 2))
    pygame.draw.rect(surface, palette.panel_bg, frame, border_radius=12)
    pygame.draw.rect(surface, palette.border, frame, 2, border_radius=12)

    header_h = max(40, min(56, h // 12))
    header = pygame.Rect(frame.x + 2, frame.y + 2, frame.w - 4, header_h)
    pygame.draw.rect(surface, palette.header_bg, header, border_top_left_radius=12, border_top_right_radius=12)
    pygame.draw.line(surface, palette.border, (header.x, header.bottom), (header.right, header.bottom), 1)

    tag_surf = tag_font.render(tag, True, palette.text_muted)
    surface.blit(tag_surf, (header.x + 12, header.y + (header.h - tag_surf.get_height()) // 2))
    title_surf = title_font.render(title, True, palette.text_main)
    surface.blit(title_surf, title_surf.get_rect(center=(frame.centerx, header.centery)))
    return frame, header


def _draw_buttons(surface: pygame.Surface, palette: Palette, buttons: list[_Button], font: pygame.font.Font) -> None:
    for button in buttons:
        bg = palette.accent if button.primary else palette.button_bg
        fg = palette.accent_text if button.primary else palette.text_main
        pygame.draw.rect(surface, bg, button.rect, border_radius=10)
        label = font.render(_fit_text(font, button.label, button.rect.w - 16), True, fg)
        surface.blit(label, label.get_rect(center=button.rect.center))


def _draw_field(
    surface: pygame.Surface,
    palette: Palette,
    rect: pygame.Rect,
    field: _TextField,
    font: pygame.font.Font,
    *,
    focused: bool,
    enabled: bool = True,
    placeholder: str | None = None,
) -> None:
    pygame.draw.rect(surface, palette.field_bg, rect, border_radius=8)
    border = palette.accent if focused and enabled else palette.field_border
    pygame.draw.rect(surface, border, rect, 2 if focused else 1, border_radius=8)

    if field.text:
        text = field.text + ("|" if focused and enabled else "")
        color = palette.text_main if enabled else palette.text_muted
    else:
        text = placeholder if placeholder is not None else field.placeholder
        color = palette.text_muted
    surf = font.render(_fit_text(font, text, rect.w - 16), True, color)
    surface.blit(surf, (rect.x + 8, rect.y + (rect.h - surf.get_height()) // 2))


def _clicked_button(buttons: list[_Button], pos: tuple[int, int]) -> _Button | None:
    for button in buttons:
        if button.rect.collidepoint(pos):
            return button
    return None


class StartScreen:
    """Category editor and game launcher (root screen)."""

    def __init__(
        self,
        app: App,
        *,
        game: WavelengthGame,
        editor: CategoryEditor,
        rng: RandomSource,
    ) -> None:
        self._app = app
        self._game = game
        self._editor = editor
        self._rng = rng

        self._left = _TextField("Left end (e.g. Sweet)")
        self._right = _TextField("Right end (e.g. Savory)")
        self._focus = "list"  # "left" | "right" | "list"
        self._selected = 0
        self._scroll = 0
        self._message = ""

        self._title_font = pygame.font.Font(None, 36)
        self._small_font = pygame.font.Font(None, 26)
        self._tiny_font = pygame.font.Font(None, 20)

        # Mouse hitboxes, refreshed during render.
        self._buttons: list[_Button] = []
        self._field_rects: dict[str, pygame.Rect] = {}
        self._row_rects: list[tuple[pygame.Rect, int]] = []

    @property
    def focus(self) -> str:
        return self._focus

    @property
    def selected(self) -> int:
        return self._selected

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if self._focus in ("left", "right"):
                self._handle_field_key(event)
            else:
                self._handle_list_key(event)
            return

        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1:
            pos = getattr(event, "pos", None)
            if pos is None:
                return
            button = _clicked_button(self._buttons, pos)
            if button is not None:
                button.action()
                return
            for name, rect in self._field_rects.items():
                if rect.collidepoint(pos):
                    self._focus = name
                    return
            for rect, idx in self._row_rects:
                if rect.collidepoint(pos):
                    self._selected = idx
                    self._focus = "list"
                    return

    def _handle_field_key(self, event: pygame.event.Event) -> None:
        key = event.key
        if key == pygame.K_ESCAPE:
            self._focus = "list"
            return
        if key == pygame.K_TAB:
            self._focus = "right" if self._focus == "left" else "list"
            return
        if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._add()
            return
        field = self._left if self._focus == "left" else self._right
        field.handle_key(event)

    def _handle_list_key(self, event: pygame.event.Event) -> None:
        key = event.key
        count = len(self._editor)
        if key == pygame.K_ESCAPE:
            self._app.quit()
        elif key in (pygame.K_TAB, pygame.K_a):
            self._focus = "left"
        elif key in (pygame.K_UP, pygame.K_w) and count:
            self._selected = (self._selected - 1) % count
        elif key in (pygame.K_DOWN, pygame.K_s) and count:
            self._selected = (self._selected + 1) % count
        elif key in (pygame.K_DELETE, pygame.K_BACKSPACE):
            self._remove_selected()
        elif key == pygame.K_m:
            self._shuffle_list()
        elif key == pygame.K_r:
            self._reset_defaults()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            self._start()

    def _add(self) -> None:
        if self._editor.add(self._left.text, self._right.text):
            self._left.clear()
            self._right.clear()
            self._selected = len(self._editor) - 1
            self._message = "Category added."
            self._focus = "left"
        else:
            self._message = "Both ends need a label."

    def _remove_selected(self) -> None:
        if self._editor.remove_at(self._selected):
            self._selected = max(0, min(self._selected, len(self._editor) - 1))
            self._message = "Category removed."

    def _shuffle_list(self) -> None:
        self._editor.shuffle_now(self._rng)
        self._message = "List shuffled."

    def _reset_defaults(self) -> None:
        self._editor.reset_defaults()
        self._selected = 0
        self._scroll = 0
        self._message = "Default categories restored."

    def _start(self) -> None:
        if self._game.start_game(self._editor.categories):
            self._message = ""
            self._app.push(RoundScreen(self._app, game=self._game))

    def render(self, surface: pygame.Surface) -> None:
        palette = self._app.palette
        frame, header = _draw_frame(
            surface,
            palette,
            "Wavelength Co-op",
            "CATEGORIES",
            title_font=self._title_font,
            tag_font=self._tiny_font,
        )

        content = pygame.Rect(frame.x + 20, header.bottom + 14, frame.w - 40, frame.bottom - header.bottom - 60)
        heading = self._small_font.render("Custom categories (edit before starting)", True, palette.text_main)
        surface.blit(heading, (content.x, content.y))

        row_y = content.y + 34
        field_w = max(120, (content.w - 130) // 2)
        left_rect = pygame.Rect(content.x, row_y, field_w, 36)
        right_rect = pygame.Rect(left_rect.right + 10, row_y, field_w, 36)
        add_rect = pygame.Rect(right_rect.right + 10, row_y, content.right - right_rect.right - 10, 36)
        self._field_rects = {"left": left_rect, "right": right_rect}
        _draw_field(surface, palette, left_rect, self._left, self._small_font, focused=self._focus == "left")
        _draw_field(surface, palette, right_rect, self._right, self._small_font, focused=self._focus == "right")

        list_rect = pygame.Rect(content.x, left_rect.bottom + 12, content.w, max(80, content.bottom - left_rect.bottom - 70))
        pygame.draw.rect(surface, palette.field_bg, list_rect, border_radius=8)
        pygame.draw.rect(surface, palette.accent if self._focus == "list" else palette.border, list_rect, 1, border_radius=8)
        self._render_rows(surface, palette, list_rect)

        tools_y = list_rect.bottom + 10
        reset_rect = pygame.Rect(content.x, tools_y, 180, 34)
        shuffle_rect = pygame.Rect(reset_rect.right + 10, tools_y, 140, 34)
        remove_rect = pygame.Rect(shuffle_rect.right + 10, tools_y, 120, 34)
        start_rect = pygame.Rect(content.right - 150, tools_y, 150, 34)
        self._buttons = [
            _Button("Add", add_rect, self._add, primary=True),
            _Button("Restore defaults", reset_rect, self._reset_defaults),
            _Button("Shuffle list", shuffle_rect, self._shuffle_list),
            _Button("Remove", remove_rect, self._remove_selected),
            _Button("Start", start_rect, self._start, primary=True),
        ]
        _draw_buttons(surface, palette, self._buttons, self._small_font)

        rounds = self._editor.planned_rounds(self._game.config.max_rounds)
        info = self._tiny_font.render(f"Rounds: {rounds} (uses the current list)", True, palette.text_muted)
        surface.blit(info, info.get_rect(midright=(start_rect.x - 12, start_rect.centery)))

        if self._message:
            note = self._tiny_font.render(self._message, True, palette.text_muted)
            surface.blit(note, (content.x, tools_y + 42))

        if self._focus == "list":
            footer = "Up/Down: Select  |  Del: Remove  |  A/Tab: Add  |  M: Shuffle  |  R: Restore  |  Enter: Start  |  F2: Theme"
        else:
            footer = "Type a label  |  Tab: Next field  |  Enter: Add  |  Esc: Back to list"
        foot = self._tiny_font.render(footer, True, palette.text_muted)
        surface.blit(foot, foot.get_rect(midbottom=(frame.centerx, frame.bottom - 10)))

    def _render_rows(self, surface: pygame.Surface, palette: Palette, list_rect: pygame.Rect) -> None:
        categories = self._editor.categories
        self._row_rects = []
        if not categories:
            empty = self._small_font.render("Add at least 1 category to play.", True, palette.text_muted)
            surface.blit(empty, (list_rect.x + 12, list_rect.y + 10))
            return

        row_h = 28
        visible = max(1, (list_rect.h - 8) // row_h)
        self._selected = max(0, min(self._selected, len(categories) - 1))
        if self._selected < self._scroll:
            self._scroll = self._selected
        elif self._selected >= self._scroll + visible:
            self._scroll = self._selected - visible + 1

        y = list_rect.y + 4
        for idx in range(self._scroll, min(len(categories), self._scroll + visible)):
            row = pygame.Rect(list_rect.x + 4, y, list_rect.w - 8, row_h - 2)
            if idx == self._selected:
                pygame.draw.rect(surface, palette.header_bg, row, border_radius=6)
            text = self._small_font.render(
                _fit_text(self._small_font, categories[idx].label(), row.w - 16),
                True,
                palette.text_main,
            )
            surface.blit(text, (row.x + 8, row.y + (row.h - text.get_height()) // 2))
            self._row_rects.append((row, idx))
            y += row_h


class RoundScreen:
    """One game in progress: Seer view, clue, Guesser dial and results."""

    def __init__(self, app: App, *, game: WavelengthGame) -> None:
        self._app = app
        self._game = game
        self._clue = _TextField("Clue (optional, read it out loud)", max_len=60)
        self._clue_focused = False
        self._drag = _DragTracker()

        self._title_font = pygame.font.Font(None, 34)
        self._small_font = pygame.font.Font(None, 26)
        self._tiny_font = pygame.font.Font(None, 20)
        self._big_font = pygame.font.Font(None, 40)

        # Geometry from the last render, used for hit-testing input.
        self._size: tuple[int, int] = WINDOW_SIZE
        self._layout: DialLayout | None = None
        self._slider_rect: pygame.Rect | None = None
        self._clue_rect: pygame.Rect | None = None
        self._buttons: list[_Button] = []

    @property
    def dragging(self) -> bool:
        return self._drag.active

    @property
    def clue_focused(self) -> bool:
        return self._clue_focused

    @property
    def dial_layout(self) -> DialLayout | None:
        return self._layout

    def handle_event(self, event: pygame.event.Event) -> None:
        snap = self._game.snapshot()

        if event.type == pygame.KEYDOWN:
            if self._clue_focused:
                self._handle_clue_key(event, snap)
            else:
                self._handle_key(event.key, snap)
        elif event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1:
            pos = getattr(event, "pos", None)
            if pos is not None:
                self._press(pos, snap)
        elif event.type == pygame.MOUSEMOTION:
            pos = getattr(event, "pos", None)
            if pos is not None and self._drag.active:
                self._drag_move(pos)
        elif event.type == pygame.MOUSEBUTTONUP and getattr(event, "button", 0) == 1:
            self._drag.end()
        elif event.type == pygame.FINGERDOWN:
            self._press(self._finger_pos(event), snap)
        elif event.type == pygame.FINGERMOTION:
            if self._drag.active:
                self._drag_move(self._finger_pos(event))
        elif event.type in (pygame.FINGERUP, pygame.WINDOWLEAVE, pygame.WINDOWFOCUSLOST):
            self._drag.end()

        self._after_action()

    def _handle_clue_key(self, event: pygame.event.Event, snap: GameSnapshot) -> None:
        if event.key in (pygame.K_ESCAPE, pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_TAB):
            self._clue_focused = False
            return
        self._clue.text = snap.clue
        if self._clue.handle_key(event):
            self._game.set_clue(self._clue.text)

    def _handle_key(self, key: int, snap: GameSnapshot) -> None:
        if key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            self._primary_action(snap.phase)
        elif key == pygame.K_TAB and snap.clue_enabled:
            self._clue_focused = True
        elif key == pygame.K_g and snap.phase is Phase.RESULT:
            self._game.go_to_summary()
        elif key in (pygame.K_LEFT, pygame.K_a):
            self._nudge(-SLIDER_STEP)
        elif key in (pygame.K_RIGHT, pygame.K_d):
            self._nudge(SLIDER_STEP)

    def _primary_action(self, phase: Phase) -> None:
        if phase is Phase.SEER_READY:
            self._game.reveal_target()
        elif phase is Phase.SEER_VIEW:
            self._game.hide_and_clue()
        elif phase is Phase.GUESS:
            self._game.reveal_and_score()
        elif phase is Phase.RESULT:
            self._game.next_round()

    def _nudge(self, delta: int) -> None:
        resolution = self._game.config.slider_resolution
        pos = value_to_slider(self._game.guess, resolution) + delta
        self._game.set_guess_from_slider(max(0, min(resolution, pos)))

    def _press(self, pos: tuple[int, int], snap: GameSnapshot) -> None:
        button = _clicked_button(self._buttons, pos)
        if button is not None:
            button.action()
            return

        if self._clue_rect is not None and self._clue_rect.collidepoint(pos):
            self._clue_focused = snap.clue_enabled
            return
        self._clue_focused = False

        # Only the Guesser may move the dial.
        if not snap.interactive:
            return
        if self._layout is not None and self._layout.contains(*pos):
            self._drag.begin("dial")
            self._drag_move(pos)
        elif self._slider_rect is not None and self._slider_rect.inflate(0, 16).collidepoint(pos):
            self._drag.begin("slider")
            self._drag_move(pos)

    def _drag_move(self, pos: tuple[int, int]) -> None:
        if self._drag.target == "dial" and self._layout is not None:
            self._game.drag_to(pos[0], pos[1], self._layout)
        elif self._drag.target == "slider" and self._slider_rect is not None:
            rect = self._slider_rect
            resolution = self._game.config.slider_resolution
            frac = (pos[0] - rect.x) / float(max(1, rect.w))
            self._game.set_guess_from_slider(int(round(max(0.0, min(1.0, frac)) * resolution)))

    def _finger_pos(self, event: pygame.event.Event) -> tuple[int, int]:
        w, h = self._size
        return (int(getattr(event, "x", 0.0) * w), int(getattr(event, "y", 0.0) * h))

    def _after_action(self) -> None:
        phase = self._game.phase
        if phase is not Phase.GUESS:
            self._drag.end()
        if not self._game.snapshot().clue_enabled:
            self._clue_focused = False
        if phase is Phase.SUMMARY:
            self._app.replace(SummaryScreen(self._app, game=self._game))

    def render(self, surface: pygame.Surface) -> None:
        self._size = surface.get_size()
        palette = self._app.palette
        snap = self._game.snapshot()
        frame, header = _draw_frame(
            surface,
            palette,
            "Wavelength Co-op",
            "ROUND",
            title_font=self._title_font,
            tag_font=self._tiny_font,
        )

        stats = self._small_font.render(
            f"Round {snap.round} / {snap.rounds_count}    Score: {snap.score}",
            True,
            palette.text_muted,
        )
        surface.blit(stats, stats.get_rect(midright=(header.right - 14, header.centery)))

        content = pygame.Rect(frame.x + 20, header.bottom + 12, frame.w - 40, frame.bottom - header.bottom - 44)

        # Category and clue.
        if snap.category is not None:
            cat = self._big_font.render(
                _fit_text(self._big_font, snap.category.label(), content.w // 2),
                True,
                palette.text_main,
            )
            surface.blit(cat, (content.x, content.y + 4))
        clue_w = min(420, content.w // 2 - 10)
        self._clue_rect = pygame.Rect(content.right - clue_w, content.y, clue_w, 36)
        self._clue.text = snap.clue
        placeholder = "Don't say the clue yet..." if snap.phase is Phase.SEER_VIEW else None
        _draw_field(
            surface,
            palette,
            self._clue_rect,
            self._clue,
            self._small_font,
            focused=self._clue_focused,
            enabled=snap.clue_enabled,
            placeholder=placeholder,
        )

        # Dial.
        controls_h = 56
        result_h = 58
        dial_top = self._clue_rect.bottom + 12
        dial_h = max(120, content.bottom - dial_top - controls_h - result_h - 12)
        max_width = int((dial_h - 16) / 0.48) + 64
        avail = min(content.w, max_width)
        layout = DialLayout.fit(avail, left=content.centerx - avail // 2, top=dial_top)
        self._layout = layout
        self._render_dial(surface, palette, layout, snap)

        # Controls by phase.
        controls = pygame.Rect(content.x, layout.cy + 20, content.w, controls_h - 10)
        self._render_controls(surface, palette, controls, snap)

        if snap.phase is Phase.RESULT:
            panel = pygame.Rect(content.x, controls.bottom + 8, content.w, result_h - 8)
            self._render_result_panel(surface, palette, panel, snap)

        footer = {
            Phase.SEER_READY: "Seer: press Enter to reveal the target, look, then hide it",
            Phase.SEER_VIEW: "Only the Seer should be looking  |  Enter: Hide and give clue",
            Phase.GUESS: "Guesser: drag the dial or use Left/Right  |  Tab: Clue  |  Enter: Reveal and score",
            Phase.RESULT: "Enter: Next round  |  G: Summary",
        }.get(snap.phase, "")
        foot = self._tiny_font.render(f"{footer}  |  F2: Theme", True, palette.text_muted)
        surface.blit(foot, foot.get_rect(midbottom=(frame.centerx, frame.bottom - 10)))

    def _render_dial(self, surface: pygame.Surface, palette: Palette, layout: DialLayout, snap: GameSnapshot) -> None:
        cx, cy, radius = layout.cx, layout.cy, layout.radius

        base = path_points(base_arc_path(cx, cy, radius), arc_segments=64)
        pygame.draw.lines(surface, palette.dial_base, False, base, max(8, int(radius * 0.06)))

        if snap.show_target and snap.target is not None:
            for points, shape in band_shapes(layout, snap.target, self._game.config.band_width_frac):
                pygame.draw.polygon(surface, BAND_COLORS[points], path_points(shape))

        tip = polar_to_cartesian(cx, cy, radius - 6, value_to_angle_radians(snap.guess))
        pygame.draw.line(surface, palette.pointer, (cx, cy), tip, 4)
        pygame.draw.circle(surface, palette.pointer, (int(tip[0]), int(tip[1])), 8)
        pygame.draw.circle(surface, palette.pointer, (cx, cy), 6)

        if snap.category is not None:
            left = self._tiny_font.render(snap.category.left, True, palette.text_muted)
            right = self._tiny_font.render(snap.category.right, True, palette.text_muted)
            surface.blit(left, left.get_rect(midtop=(cx - radius, cy + 4)))
            surface.blit(right, right.get_rect(midtop=(cx + radius, cy + 4)))

        bx, by, bw, bh = layout.bounds()
        bounds = pygame.Rect(bx, by, bw, bh)
        if snap.hidden_overlay:
            veil = pygame.Surface(bounds.size, pygame.SRCALPHA)
            veil.fill(palette.overlay)
            surface.blit(veil, bounds.topleft)
            msg = self._small_font.render("Hidden. Press Reveal so only the Seer sees it.", True, palette.text_main)
            surface.blit(msg, msg.get_rect(center=bounds.center))
        elif not snap.interactive and not snap.show_target:
            msg = self._tiny_font.render("Dial locked (waiting for the Guesser)", True, palette.text_muted)
            surface.blit(msg, msg.get_rect(midbottom=(bounds.centerx, bounds.bottom - 4)))

    def _render_controls(self, surface: pygame.Surface, palette: Palette, rect: pygame.Rect, snap: GameSnapshot) -> None:
        button_w = 230
        button_rect = pygame.Rect(rect.right - button_w, rect.y + 4, button_w, 38)
        hint_pos = (rect.x, rect.y + 14)
        self._slider_rect = None

        if snap.phase is Phase.SEER_READY:
            hint = "Seer: press Reveal target, look at it, then hide it."
            self._buttons = [_Button("Reveal target (Seer)", button_rect, self._game.reveal_target, primary=True)]
        elif snap.phase is Phase.SEER_VIEW:
            hint = "Only the Seer should be looking right now."
            self._buttons = [_Button("Hide and give clue", button_rect, self._game.hide_and_clue, primary=True)]
        elif snap.phase is Phase.GUESS:
            hint = ""
            slider = pygame.Rect(rect.x + 8, rect.y + 20, max(120, rect.w - button_w - 40), 8)
            self._slider_rect = slider
            self._render_slider(surface, palette, slider, snap.guess)
            self._buttons = [_Button("Reveal and score", button_rect, self._game.reveal_and_score, primary=True)]
        elif snap.phase is Phase.RESULT:
            hint = "Result shown below."
            summary_rect = pygame.Rect(button_rect.x - 170, button_rect.y, 160, 38)
            self._buttons = [
                _Button("Go to summary", summary_rect, self._game.go_to_summary),
                _Button("Next round", button_rect, self._game.next_round, primary=True),
            ]
        else:
            hint = ""
            self._buttons = []

        if hint:
            surface.blit(self._small_font.render(hint, True, palette.text_muted), hint_pos)
        _draw_buttons(surface, palette, self._buttons, self._small_font)

    def _render_slider(self, surface: pygame.Surface, palette: Palette, rect: pygame.Rect, value: float) -> None:
        pygame.draw.rect(surface, palette.button_bg, rect, border_radius=4)
        pygame.draw.rect(surface, palette.border, rect, 1, border_radius=4)
        knob_x = rect.x + int(rect.w * value)
        pygame.draw.circle(surface, palette.accent, (knob_x, rect.centery), 10)
        hint = self._tiny_font.render("You can also drag the dial.", True, palette.text_muted)
        surface.blit(hint, (rect.x, rect.bottom + 8))

    def _render_result_panel(self, surface: pygame.Surface, palette: Palette, rect: pygame.Rect, snap: GameSnapshot) -> None:
        pygame.draw.rect(surface, palette.field_bg, rect, border_radius=10)
        pygame.draw.rect(surface, palette.border, rect, 1, border_radius=10)
        if snap.target is None or snap.last_points is None:
            return
        diff = abs(snap.guess - snap.target)
        detail = (
            f"Target: {percent(snap.target)}%  |  Guessed: {percent(snap.guess)}%  |  "
            f"Error: {percent(diff)}%"
        )
        surface.blit(self._small_font.render(detail, True, palette.text_main), (rect.x + 12, rect.y + 14))
        verdict = self._big_font.render(f"{points_text(snap.last_points)} - {snap.last_label}", True, palette.text_main)
        surface.blit(verdict, verdict.get_rect(midright=(rect.right - 12, rect.centery)))


class SummaryScreen:
    def __init__(self, app: App, *, game: WavelengthGame) -> None:
        self._app = app
        self._game = game
        self._result = game_result_from_game(game)
        self._title_font = pygame.font.Font(None, 36)
        self._big_font = pygame.font.Font(None, 44)
        self._small_font = pygame.font.Font(None, 26)
        self._tiny_font = pygame.font.Font(None, 20)
        self._buttons: list[_Button] = []

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE, pygame.K_ESCAPE):
                self._restart()
            return
        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1:
            pos = getattr(event, "pos", None)
            if pos is None:
                return
            button = _clicked_button(self._buttons, pos)
            if button is not None:
                button.action()

    def _restart(self) -> None:
        if self._game.restart():
            self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        palette = self._app.palette
        result = self._result
        frame, header = _draw_frame(
            surface,
            palette,
            "Final result",
            "SUMMARY",
            title_font=self._title_font,
            tag_font=self._tiny_font,
        )

        x = frame.x + 24
        y = header.bottom + 18
        total = self._big_font.render(f"Total score: {result.total_score} / {result.max_score}", True, palette.text_main)
        surface.blit(total, (x, y))
        y += total.get_height() + 6

        mean = "n/a" if result.mean_error is None else f"{percent(result.mean_error)}%"
        stats = self._small_font.render(
            f"Rounds: {result.rounds_played}   Bullseyes: {result.bullseyes}   Mean error: {mean}",
            True,
            palette.text_muted,
        )
        surface.blit(stats, (x, y))
        y += stats.get_height() + 16

        surface.blit(self._small_font.render("Rounds", True, palette.text_main), (x, y))
        y += 30
        row_w = frame.w - 48
        for rec in result.rounds:
            left = rec.category.label()
            if rec.clue:
                left = f'{left}   "{rec.clue}"'
            right = f"Target {percent(rec.target)}%  |  Guessed {percent(rec.guess)}%  ->  +{rec.points}"
            right_surf = self._small_font.render(right, True, palette.text_main)
            left_surf = self._small_font.render(
                _fit_text(self._small_font, left, row_w - right_surf.get_width() - 24),
                True,
                palette.text_main,
            )
            surface.blit(left_surf, (x, y))
            surface.blit(right_surf, right_surf.get_rect(topright=(x + row_w, y)))
            y += 26
            pygame.draw.line(surface, palette.border, (x, y), (x + row_w, y), 1)
            y += 8

        button_rect = pygame.Rect(x, frame.bottom - 90, 220, 40)
        self._buttons = [_Button("Back to start", button_rect, self._restart, primary=True)]
        _draw_buttons(surface, palette, self._buttons, self._small_font)

        foot = self._tiny_font.render("Enter: Back to start  |  F2: Theme", True, palette.text_muted)
        surface.blit(foot, foot.get_rect(midbottom=(frame.centerx, frame.bottom - 10)))


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    rng: RandomSource | None = None,
    app_observer: Callable[[App], None] | None = None,
) -> int:
    pygame.init()

    pygame.display.set_caption("Wavelength Co-op")
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)

    clock = pygame.time.Clock()

    app = App(surface=surface)

    source = rng or RealRandom()
    game = WavelengthGame(rng=source)
    editor = CategoryEditor()
    app.push(StartScreen(app, game=game, editor=editor, rng=source))
    logger.debug("UI started (%dx%d)", *WINDOW_SIZE)

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            if app_observer is not None:
                app_observer(app)

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.quit()

    return 0
