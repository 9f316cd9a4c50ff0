from __future__ import annotations

import os
from collections.abc import Iterator

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame
import pytest

from wavelength_coop.app import WINDOW_SIZE, App, RoundScreen, StartScreen, SummaryScreen, run
from wavelength_coop.deck import CategoryEditor
from wavelength_coop.game_core import Phase, WavelengthGame
from wavelength_coop.random_source import SeededRandom


def _key(key: int, unicode: str = "") -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, {"key": key, "unicode": unicode, "mod": 0})


def test_ui_smoke_play_one_round_to_summary_and_back() -> None:
    script = {
        1: _key(pygame.K_RETURN),  # start game
        2: _key(pygame.K_RETURN),  # reveal target
        3: _key(pygame.K_RETURN),  # hide and clue
        4: _key(pygame.K_RIGHT),
        5: _key(pygame.K_TAB),  # focus clue
        6: _key(pygame.K_h, "h"),
        7: _key(pygame.K_RETURN),  # leave clue field
        8: _key(pygame.K_RETURN),  # reveal and score
        9: _key(pygame.K_g),  # jump to summary
        10: _key(pygame.K_F2),
        11: _key(pygame.K_RETURN),  # back to start
    }
    seen: list[str] = []
    dark: list[bool] = []

    def inject(frame: int) -> None:
        event = script.get(frame)
        if event is not None:
            pygame.event.post(event)

    def observe(app: App) -> None:
        seen.append(type(app.top).__name__)
        dark.append(app.dark)

    assert run(max_frames=14, event_injector=inject, rng=SeededRandom(5), app_observer=observe) == 0

    assert seen[0] == "StartScreen"
    assert seen[1:9] == ["RoundScreen"] * 8
    assert seen[9:11] == ["SummaryScreen"] * 2
    assert seen[11] == "StartScreen"
    assert dark[9] is False
    assert dark[10] is True


@pytest.fixture
def ui() -> Iterator[tuple[App, pygame.Surface]]:
    pygame.init()
    surface = pygame.Surface(WINDOW_SIZE)
    yield App(surface=surface), surface
    pygame.quit()


def _round_screen(app: App, surface: pygame.Surface) -> tuple[RoundScreen, WavelengthGame]:
    game = WavelengthGame(rng=SeededRandom(1))
    game.start_game()
    screen = RoundScreen(app, game=game)
    app.push(screen)
    screen.render(surface)
    return screen, game


def test_dial_ignores_pointer_until_guess_phase(ui: tuple[App, pygame.Surface]) -> None:
    app, surface = ui
    screen, game = _round_screen(app, surface)
    layout = screen.dial_layout
    assert layout is not None

    press = pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"button": 1, "pos": (layout.cx - layout.radius // 2, layout.cy)})
    screen.handle_event(press)
    assert game.guess == 0.5
    assert screen.dragging is False

    screen.handle_event(_key(pygame.K_RETURN))
    assert game.phase is Phase.SEER_VIEW
    screen.render(surface)
    screen.handle_event(press)
    assert game.guess == 0.5

    # Clue field stays locked while the Seer looks.
    screen.handle_event(_key(pygame.K_TAB))
    assert screen.clue_focused is False


def test_dial_drag_is_scoped_to_press_and_release(ui: tuple[App, pygame.Surface]) -> None:
    app, surface = ui
    screen, game = _round_screen(app, surface)
    game.reveal_target()
    game.hide_and_clue()
    screen.render(surface)
    layout = screen.dial_layout
    assert layout is not None
    cx, cy, r = layout.cx, layout.cy, layout.radius

    screen.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"button": 1, "pos": (cx, cy - r // 2)}))
    assert screen.dragging is True
    assert game.guess == pytest.approx(0.5)

    screen.handle_event(pygame.event.Event(pygame.MOUSEMOTION, {"pos": (cx - r // 2, cy), "rel": (0, 0), "buttons": (1, 0, 0)}))
    assert game.guess == 0.0

    screen.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, {"button": 1, "pos": (cx - r // 2, cy)}))
    assert screen.dragging is False

    screen.handle_event(pygame.event.Event(pygame.MOUSEMOTION, {"pos": (cx + r // 2, cy - 1), "rel": (0, 0), "buttons": (0, 0, 0)}))
    assert game.guess == 0.0

    w, h = surface.get_size()
    finger = {"x": (cx + r / 2) / w, "y": (cy - 2) / h, "dx": 0.0, "dy": 0.0, "touch_id": 0, "finger_id": 0}
    screen.handle_event(pygame.event.Event(pygame.FINGERDOWN, finger))
    assert screen.dragging is True
    assert game.guess > 0.95

    screen.handle_event(pygame.event.Event(pygame.WINDOWFOCUSLOST, {}))
    assert screen.dragging is False


def test_keyboard_nudge_clue_typing_and_summary_swap(ui: tuple[App, pygame.Surface]) -> None:
    app, surface = ui
    start = StartScreen(app, game=WavelengthGame(rng=SeededRandom(3)), editor=CategoryEditor(), rng=SeededRandom(4))
    app.push(start)
    screen, game = _round_screen(app, surface)
    game.reveal_target()
    game.hide_and_clue()

    screen.handle_event(_key(pygame.K_RIGHT))
    assert game.guess == pytest.approx(0.51)
    screen.handle_event(_key(pygame.K_LEFT))
    screen.handle_event(_key(pygame.K_LEFT))
    assert game.guess == pytest.approx(0.49)

    screen.handle_event(_key(pygame.K_TAB))
    assert screen.clue_focused is True
    for ch in "warm ":
        screen.handle_event(_key(pygame.K_SPACE if ch == " " else pygame.K_a, ch))
    screen.handle_event(_key(pygame.K_BACKSPACE))
    assert game.clue == "warm"
    # Space went into the clue, not the score button.
    assert game.phase is Phase.GUESS

    screen.handle_event(_key(pygame.K_RETURN))
    assert screen.clue_focused is False
    screen.handle_event(_key(pygame.K_SPACE))
    assert game.phase is Phase.RESULT
    screen.render(surface)

    screen.handle_event(_key(pygame.K_g))
    assert game.phase is Phase.SUMMARY
    assert isinstance(app.top, SummaryScreen)
    app.top.render(surface)

    app.top.handle_event(_key(pygame.K_RETURN))
    assert game.phase is Phase.START
    assert app.top is start


def test_start_screen_edits_categories_before_starting(ui: tuple[App, pygame.Surface]) -> None:
    app, surface = ui
    editor = CategoryEditor([])
    game = WavelengthGame(rng=SeededRandom(8))
    start = StartScreen(app, game=game, editor=editor, rng=SeededRandom(9))
    app.push(start)
    start.render(surface)

    start.handle_event(_key(pygame.K_TAB))
    assert start.focus == "left"
    for ch in "Hot":
        start.handle_event(_key(pygame.K_a, ch))
    start.handle_event(_key(pygame.K_TAB))
    assert start.focus == "right"
    for ch in "Cold":
        start.handle_event(_key(pygame.K_a, ch))
    start.handle_event(_key(pygame.K_RETURN))
    assert [c.label() for c in editor.categories] == ["Hot <-> Cold"]

    start.handle_event(_key(pygame.K_ESCAPE))
    assert start.focus == "list"
    start.render(surface)

    start.handle_event(_key(pygame.K_RETURN))
    assert game.phase is Phase.SEER_READY
    assert game.rounds_count == 1
    assert isinstance(app.top, RoundScreen)
