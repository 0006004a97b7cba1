from petgame.pet_entity import Pet
from petgame.models import LifeStage, Prompt
from petgame.cooldowns import ActionCooldown
from petgame.constants import (
    TICK_INTERVAL, FEED_AMOUNT, FEED_COOLDOWN, PET_COOLDOWN, CLEAN_COOLDOWN,
)


class PetGame:
    """Caller side of the engine: owns the one live pet and drives it.

    Ticks arrive either from `advance_time(dt)` (which runs one tick per
    elapsed tick interval) or from an outside timer calling `tick()`.
    Player actions go through per-action cooldowns and the pet's
    `can_update` gate before reaching the pet.
    """

    def __init__(self, store=None, can_die=False, render_callback=None,
                 on_terminal=None, on_version_mismatch=None, tick_interval=TICK_INTERVAL):
        self.store = store
        self.can_die = can_die
        self.render_callback = render_callback
        self.on_terminal = on_terminal
        self.on_version_mismatch = on_version_mismatch
        self.tick_interval = tick_interval
        self._tick_elapsed = 0.0

        self.cooldowns = {
            "feed": ActionCooldown(FEED_COOLDOWN),
            "pet": ActionCooldown(PET_COOLDOWN),
            "clean": ActionCooldown(CLEAN_COOLDOWN),
        }
        self.pet = self._new_pet()
        # a restored pet has already rendered and saved itself
        if not self.pet.load():
            self.pet.refresh()

    def _new_pet(self):
        return Pet(
            self.store,
            render_callback=self.render_callback,
            can_die=self.can_die,
            on_terminal=self.on_terminal,
            on_version_mismatch=self.on_version_mismatch,
        )

    # --- Tick driver ---
    def tick(self):
        self.pet.update()

    def update_cooldowns(self, dt):
        for cooldown in self.cooldowns.values():
            cooldown.update(dt)

    def advance_time(self, dt):
        """Moves the clock forward by dt seconds. Returns the number of ticks run."""
        self.update_cooldowns(dt)
        self._tick_elapsed += dt
        ticks = 0
        while self._tick_elapsed >= self.tick_interval:
            self._tick_elapsed -= self.tick_interval
            self.tick()
            ticks += 1
        return ticks

    def force_update(self):
        """Debug trigger: one tick right now, outside the cadence."""
        self.tick()

    # --- Player actions ---
    def _run_action(self, key, action):
        if not self.pet.can_update:
            return False
        if not self.cooldowns[key].trigger():
            return False
        action()
        return True

    def handle_feed(self):
        return self._run_action("feed", lambda: self.pet.feed(FEED_AMOUNT))

    def handle_pet(self):
        return self._run_action("pet", self.pet.pet)

    def handle_clean(self):
        return self._run_action("clean", self.pet.clean)

    def toggle_pause(self):
        self.pet.set_paused(not self.pet.paused)
        print("Paused." if self.pet.paused else "Resumed.")

    # --- Advancement ---
    def current_prompt(self):
        """Which checkpoint the view should show, or None while ticking normally."""
        if not self.pet.needs_advancement:
            return None
        if not self.pet.alive:
            return Prompt.PASSED_AWAY
        if self.pet.life_stage == LifeStage.PUP:
            return Prompt.NAMING
        if self.pet.life_stage == LifeStage.ADULT:
            return Prompt.ADULT_INFO
        if self.pet.life_stage == LifeStage.ELDER:
            return Prompt.ELDER_INFO
        return None

    def submit_name(self, name):
        if self.current_prompt() != Prompt.NAMING:
            return False
        return self.pet.hatch(name)

    def acknowledge(self, name=""):
        """Answers whatever prompt is showing. Returns False if nothing happened."""
        prompt = self.current_prompt()
        if prompt is None:
            return False
        if prompt == Prompt.NAMING:
            return self.submit_name(name)
        if prompt == Prompt.PASSED_AWAY:
            self.reset()
            return True
        self.pet.advance()
        return True

    def reset(self):
        """Replaces the pet with a fresh egg."""
        self.pet = self._new_pet()
        for cooldown in self.cooldowns.values():
            cooldown.reset()
        self._tick_elapsed = 0.0
        print("A new egg has appeared!")
        self.pet.refresh()

    def debug_info(self):
        return self.pet.debug_info()
