import pytest

from petgame.game import PetGame
from petgame.models import LifeStage, Prompt
from petgame.cooldowns import ActionCooldown
from petgame.database import DatabaseManager
from petgame.constants import (
    FEED_COOLDOWN, PET_COOLDOWN, CLEAN_COOLDOWN, TICK_INTERVAL, PUP_TIME, ELDER_TIME, MAX_FOOD,
)


@pytest.fixture
def store():
    db = DatabaseManager(":memory:")
    yield db
    db.close()


def hatched_game(store, name="Rex"):
    game = PetGame(store, tick_interval=30.0)
    game.advance_time(60.0)
    assert game.acknowledge(name)
    return game


def test_cooldown_blocks_until_elapsed():
    cd = ActionCooldown(2.0)
    assert cd.is_ready()
    assert cd.trigger() is True
    assert cd.trigger() is False
    cd.update(1.5)
    assert cd.remaining() == pytest.approx(0.5)
    assert not cd.is_ready()
    cd.update(0.5)
    assert cd.trigger() is True
    cd.reset()
    assert cd.is_ready()


def test_default_cadence_and_cooldowns():
    assert TICK_INTERVAL == 30.0
    assert (FEED_COOLDOWN, PET_COOLDOWN, CLEAN_COOLDOWN) == (5.0, 2.0, 5.0)


def test_egg_hatches_on_schedule(store):
    game = PetGame(store, tick_interval=30.0)
    assert game.pet.life_stage == LifeStage.EGG
    assert game.current_prompt() is None
    assert game.advance_time(29.0) == 0
    assert game.advance_time(31.0) == 2
    assert game.pet.life_stage == LifeStage.PUP
    assert game.current_prompt() == Prompt.NAMING


def test_actions_wait_for_naming(store):
    game = PetGame(store, tick_interval=30.0)
    game.advance_time(60.0)
    assert game.handle_feed() is False
    assert game.handle_pet() is False
    assert game.submit_name("   ") is False
    assert game.acknowledge("Rex") is True
    assert game.pet.name == "Rex"
    assert game.current_prompt() is None
    assert game.handle_pet() is True


def test_submit_name_only_while_naming(store):
    game = PetGame(store)
    assert game.submit_name("Rex") is False
    assert game.pet.name == ""


def test_each_action_has_its_own_cooldown(store):
    game = hatched_game(store)
    assert game.handle_feed() is True
    assert game.pet.food == MAX_FOOD + 38
    assert game.handle_feed() is False
    assert game.handle_pet() is True
    assert game.handle_clean() is True
    assert game.handle_pet() is False

    game.advance_time(PET_COOLDOWN)
    assert game.handle_pet() is True
    assert game.handle_feed() is False
    game.advance_time(FEED_COOLDOWN)
    assert game.handle_feed() is True


def test_pause_keeps_ticking_schedule_but_freezes_pet(store):
    game = hatched_game(store)
    game.toggle_pause()
    assert game.pet.paused
    assert game.handle_pet() is False
    age = game.pet.age
    assert game.advance_time(90.0) == 3
    assert game.pet.age == age
    game.toggle_pause()
    game.advance_time(30.0)
    assert game.pet.age == age + 1


def test_adult_prompt_and_generic_advance(store):
    game = hatched_game(store)
    game.pet.age = PUP_TIME - 1
    game.tick()
    assert game.pet.life_stage == LifeStage.ADULT
    assert game.current_prompt() == Prompt.ADULT_INFO
    assert game.handle_clean() is False
    assert game.acknowledge() is True
    assert game.current_prompt() is None
    assert game.acknowledge() is False


def test_passing_away_then_new_egg(store):
    reasons = []
    game = PetGame(store, tick_interval=30.0, on_terminal=lambda pet, reason: reasons.append(reason))
    game.advance_time(60.0)
    game.acknowledge("Rex")
    game.pet.life_stage = LifeStage.ELDER
    game.pet.age = ELDER_TIME - 1
    game.tick()
    assert game.pet.alive is False
    assert game.current_prompt() == Prompt.PASSED_AWAY
    assert reasons == ["old_age"]

    assert game.acknowledge() is True
    assert game.pet.alive is True
    assert game.pet.life_stage == LifeStage.EGG
    assert game.pet.name == ""


def test_game_resumes_saved_pet(store):
    hatched_game(store, name="Pip")
    game = PetGame(store)
    assert game.pet.name == "Pip"
    assert game.pet.life_stage == LifeStage.PUP


def test_reset_and_force_update(store):
    game = hatched_game(store)
    game.force_update()
    assert game.pet.age == 1
    game.reset()
    assert game.pet.life_stage == LifeStage.EGG
    assert game.pet.age == 0
    # the reset pet is what gets persisted
    assert PetGame(store).pet.name == ""


def test_update_cooldowns_frees_actions_without_ticking(store):
    game = hatched_game(store)
    age = game.pet.age
    assert game.handle_pet() is True
    assert game.handle_pet() is False
    game.update_cooldowns(PET_COOLDOWN)
    assert game.handle_pet() is True
    assert game.pet.age == age


class CountingStore:
    def __init__(self, db):
        self.db = db
        self.writes = 0

    def get_item(self, key):
        return self.db.get_item(key)

    def set_item(self, key, value):
        self.writes += 1
        self.db.set_item(key, value)


def test_startup_saves_once(store):
    counting = CountingStore(store)
    PetGame(counting)
    assert counting.writes == 1

    hatched_game(store, name="Pip")
    counting = CountingStore(store)
    game = PetGame(counting)
    assert game.pet.name == "Pip"
    assert counting.writes == 1


def test_saved_pet_keeps_the_new_death_switch(store):
    hatched_game(store)
    game = PetGame(store, can_die=True)
    assert game.pet.name == "Rex"
    assert game.pet.can_die is True


def test_render_callback_and_death_switch_reach_the_pet(store):
    renders = []
    game = PetGame(store, can_die=True, render_callback=renders.append)
    assert game.pet.can_die is True
    assert renders and renders[-1] is game.pet
    game.reset()
    assert game.pet.can_die is True
    assert renders[-1] is game.pet


def test_debug_info(store):
    game = hatched_game(store)
    info = game.debug_info()
    assert info.life_stage == LifeStage.PUP
    assert info.food == game.pet.food
