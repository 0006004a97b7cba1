import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from petgame import main
from petgame.models import LifeStage, Prompt


@pytest.fixture
def engine(tmp_path):
    eng = main.GameEngine(save_file=str(tmp_path / "pet_game.db"), debug=True)
    yield eng
    eng.store.close()
    pygame.quit()


def press(key, unicode=""):
    evt = pygame.event.Event(pygame.KEYDOWN, {"key": key, "unicode": unicode, "mod": 0})
    pygame.event.post(evt)


def type_text(text):
    for ch in text:
        press(pygame.K_a, ch)


def tick_twice(eng):
    pygame.event.post(pygame.event.Event(main.TICK_EVENT))
    pygame.event.post(pygame.event.Event(main.TICK_EVENT))
    eng.step()


def test_step_renders_frame(engine):
    assert engine.step() is True
    assert engine.frames_rendered == 1


def test_tick_events_drive_the_pet_and_name_it(engine):
    tick_twice(engine)
    assert engine.pet.life_stage == LifeStage.PUP
    assert engine.game.current_prompt() == Prompt.NAMING

    type_text("Rex")
    press(pygame.K_BACKSPACE)
    type_text("x")
    engine.step()
    assert engine.name_buffer == "Rex"
    press(pygame.K_RETURN, "\r")
    engine.step()
    assert engine.pet.name == "Rex"
    assert engine.name_buffer == ""
    assert engine.game.current_prompt() is None


def test_action_keys_feed_pet_and_clean(engine):
    tick_twice(engine)
    type_text("Rex")
    press(pygame.K_RETURN, "\r")
    engine.step()

    press(pygame.K_f, "f")
    press(pygame.K_p, "p")
    press(pygame.K_c, "c")
    engine.step()
    assert engine.pet.food == 138
    assert engine.pet.behavior == 1.5


def test_space_pauses_and_debug_keys(engine):
    press(pygame.K_SPACE, " ")
    engine.step()
    assert engine.pet.paused
    press(pygame.K_F5)
    engine.step()
    assert engine.pet.age == 0

    press(pygame.K_SPACE, " ")
    press(pygame.K_F5)
    engine.step()
    assert engine.pet.age == 1

    changes = engine.pet_changes
    press(pygame.K_F12)
    engine.step()
    assert engine.pet.age == 0
    assert engine.pet_changes > changes


def test_quit_event_stops_loop(engine):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert engine.step() is False


def test_state_survives_restart(tmp_path):
    path = str(tmp_path / "pet_game.db")
    eng = main.GameEngine(save_file=path)
    tick_twice(eng)
    type_text("Pip")
    press(pygame.K_RETURN, "\r")
    eng.step()
    eng.store.close()
    pygame.quit()

    eng = main.GameEngine(save_file=path)
    try:
        assert eng.pet.name == "Pip"
        assert eng.pet.life_stage == LifeStage.PUP
    finally:
        eng.store.close()
        pygame.quit()
