import json
import math
import sqlite3
import time
from petgame.models import LifeStage, DebugInfo
from petgame.constants import (
    PET_SAVE_KEY, CURRENT_PET_VERSION, MAX_FOOD, POTTY_TIME, FOOD_DECAY, AGING_RATE,
    POTTY_DECAY, MAX_MESS, HAPPINESS_DECAY, MAX_HAPPINESS, HAPPINESS_EMPTY_STOMACH_MODIFIER,
    HAPPINESS_MESS_MODIFIER, TRAINED_BEHAVIOR, FEED_HAPPINESS, PET_HAPPINESS, PET_BEHAVIOR,
    CLEAN_HAPPINESS, CLEAN_BEHAVIOR, EGG_TIME, PUP_TIME, ADULT_TIME, ELDER_TIME,
)

# Ticks a pet must spend in each stage before it grows out of it
STAGE_TIMES = {
    LifeStage.EGG: EGG_TIME,
    LifeStage.PUP: PUP_TIME,
    LifeStage.ADULT: ADULT_TIME,
    LifeStage.ELDER: ELDER_TIME,
}

# Snapshot fields and the value kinds accepted for each on load
# can_die is saved for reference but the constructor argument always wins
BOOL_FIELDS = ("alive", "paused", "needs_advancement")
FLOAT_FIELDS = ("food", "age", "behavior", "potty_timer", "happiness",
                "last_update", "egg_found", "hatched")
NON_NEGATIVE_FIELDS = ("food", "age", "behavior")
TIMESTAMP_FIELDS = ("last_update", "egg_found", "hatched")

# camelCase keys written by the browser build of the game
LEGACY_KEYS = {
    "canDie": "can_die",
    "needsAdvancement": "needs_advancement",
    "lifeStage": "life_stage",
    "pottyTimer": "potty_timer",
    "messCounter": "mess_counter",
    "_happiness": "happiness",
    "lastUpdate": "last_update",
    "eggFound": "egg_found",
}


def _is_number(value):
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return math.isfinite(value)


class Pet:
    """The simulation engine: a pet's needs, growth and persistence.

    Driven from outside by a fixed-rate `update()` tick and by the player
    actions. Every mutating call finishes with `refresh()`, which renders
    through `render_callback` and saves to `db_manager`.
    """

    def __init__(self, db_manager=None, render_callback=None, can_die=False,
                 on_terminal=None, on_version_mismatch=None):
        self.db = db_manager
        self.render_callback = render_callback
        # Extension points, inert unless provided
        self.on_terminal = on_terminal
        self.on_version_mismatch = on_version_mismatch

        now = time.time()
        self.version = CURRENT_PET_VERSION
        self.can_die = can_die
        self.alive = True
        self.paused = False
        self.needs_advancement = False
        self.life_stage = LifeStage.EGG
        self.name = ""
        self.food = float(MAX_FOOD)
        self.age = 0.0
        self.behavior = 0.0
        self.potty_timer = float(POTTY_TIME)
        self.mess_counter = 0
        self._happiness = float(MAX_HAPPINESS)
        self.last_update = now
        self.egg_found = now
        self.hatched = now

    @property
    def happiness(self):
        return self._happiness

    @happiness.setter
    def happiness(self, amount):
        self._happiness = max(0.0, min(float(MAX_HAPPINESS), amount))

    @property
    def can_update(self):
        """True when player actions are allowed: not paused, not awaiting advancement."""
        return not self.paused and not self.needs_advancement

    def update(self):
        """Advances the simulation by one tick."""
        if not self.alive or self.paused or self.needs_advancement:
            return

        self.last_update = time.time()
        self.age += AGING_RATE

        if self.life_stage != LifeStage.EGG:
            self.food -= FOOD_DECAY
            self.potty_timer -= POTTY_DECAY
            self.happiness -= HAPPINESS_DECAY

            if self.food < 0:
                self.happiness += HAPPINESS_EMPTY_STOMACH_MODIFIER
                self.food = 0.0
                if self.can_die:
                    self._terminal("starvation")

            if self.potty_timer < 0:
                self.go_potty()

            self.happiness += HAPPINESS_MESS_MODIFIER * self.mess_counter

        self._check_life_stage()
        self.refresh()

    def _check_life_stage(self):
        if self.age < STAGE_TIMES[self.life_stage]:
            return
        next_stage = self.life_stage.next_stage()
        self.needs_advancement = True
        if next_stage is None:
            self.alive = False
            print(f"{self.name or 'The pet'} has passed away.")
            self._terminal("old_age")
            return
        print(f"Pet growing from {self.life_stage.name} to {next_stage.name}")
        self.life_stage = next_stage
        self.age = 0.0

    def _terminal(self, reason):
        if self.on_terminal:
            self.on_terminal(self, reason)

    def go_potty(self):
        """Potty event: trained pets leave no mess, untrained ones add one."""
        if self.behavior > TRAINED_BEHAVIOR:
            # trained: goes potty properly
            pass
        else:
            self.mess_counter = min(MAX_MESS, self.mess_counter + 1)
        self.potty_timer = float(POTTY_TIME)
        self.refresh()

    def feed(self, amount):
        """Feeds the pet. Ignored once food is already over the cap.

        The cap is checked before eating, so a single meal may push food past
        MAX_FOOD; the happiness bonus only applies if it didn't.
        """
        if self.food > MAX_FOOD:
            return
        self.food = max(0.0, self.food + amount)
        if self.food <= MAX_FOOD:
            self.happiness += FEED_HAPPINESS
        self.refresh()

    def pet(self):
        self.behavior += PET_BEHAVIOR
        self.happiness += PET_HAPPINESS
        self.refresh()

    def clean(self):
        """Cleans one piece of mess. Cleaning an already clean space trains but annoys."""
        if self.mess_counter > 0:
            self.mess_counter -= 1
            self.happiness += CLEAN_HAPPINESS
        else:
            self.behavior += CLEAN_BEHAVIOR
            self.happiness -= CLEAN_HAPPINESS
        self.refresh()

    def hatch(self, name):
        """Names the pup, acknowledging the hatch. Blank names are rejected."""
        if not name or not name.strip():
            return False
        self.name = name
        self.hatched = time.time()
        self.needs_advancement = False
        print(f"It's {self.name}! Welcome to the world!")
        self.refresh()
        return True

    def advance(self):
        """Acknowledges a stage change so ticking resumes."""
        self.needs_advancement = False
        self.refresh()

    def set_paused(self, paused):
        self.paused = bool(paused)
        self.refresh()

    def debug_info(self):
        return DebugInfo(
            life_stage=self.life_stage,
            age=self.age,
            food=self.food,
            behavior=self.behavior,
            potty_timer=self.potty_timer,
            mess_counter=self.mess_counter,
            happiness=self.happiness,
        )

    # ------------------------------------------------------------------
    def refresh(self):
        """Render hook: re-render then persist, synchronously."""
        if self.render_callback:
            self.render_callback(self)
        self.save()

    def to_dict(self):
        return {
            "version": self.version,
            "can_die": self.can_die,
            "alive": self.alive,
            "paused": self.paused,
            "needs_advancement": self.needs_advancement,
            "life_stage": self.life_stage.name,
            "name": self.name,
            "food": self.food,
            "age": self.age,
            "behavior": self.behavior,
            "potty_timer": self.potty_timer,
            "mess_counter": self.mess_counter,
            "happiness": self.happiness,
            "last_update": self.last_update,
            "egg_found": self.egg_found,
            "hatched": self.hatched,
        }

    def apply_snapshot(self, data):
        """Overlays snapshot fields onto this pet.

        Unknown keys are ignored; missing or ill-typed values keep the current
        value. The version field is not applied here, see `load()`.
        """
        legacy = any(key in data for key in LEGACY_KEYS)
        values = {}
        for key, value in data.items():
            values[LEGACY_KEYS.get(key, key)] = value

        for key in BOOL_FIELDS:
            if isinstance(values.get(key), bool):
                setattr(self, key, values[key])

        for key in FLOAT_FIELDS:
            value = values.get(key)
            if not _is_number(value):
                continue
            if legacy and key in TIMESTAMP_FIELDS:
                value = value / 1000.0  # browser saves use milliseconds
            if key in NON_NEGATIVE_FIELDS:
                value = max(0.0, value)
            setattr(self, key, float(value))

        mess = values.get("mess_counter")
        if _is_number(mess):
            self.mess_counter = max(0, min(MAX_MESS, int(mess)))

        if isinstance(values.get("name"), str):
            self.name = values["name"]

        stage = values.get("life_stage")
        if stage is not None and not isinstance(stage, bool):
            try:
                self.life_stage = LifeStage(stage)
            except ValueError:
                print(f"Warning: unknown life stage {stage!r} in save data, keeping {self.life_stage.name}.")

    def save(self):
        """Writes the full snapshot into the store's save slot."""
        if self.db is None:
            return
        try:
            self.db.set_item(PET_SAVE_KEY, json.dumps(self.to_dict()))
        except (sqlite3.Error, OSError) as e:
            print(f"Warning: failed to save pet: {e}")

    def load(self):
        """Restores the saved snapshot, if any. Returns True when one was applied.

        A missing, unreadable or malformed save means starting fresh, never an error.
        """
        if self.db is None:
            return False
        try:
            item = self.db.get_item(PET_SAVE_KEY)
        except (sqlite3.Error, OSError) as e:
            print(f"Warning: failed to read saved pet, starting fresh: {e}")
            return False
        if item is None:
            return False

        try:
            data = json.loads(item)
        except json.JSONDecodeError as e:
            print(f"Warning: saved pet is not valid JSON, starting fresh: {e}")
            return False
        if not isinstance(data, dict):
            print("Warning: saved pet is not a JSON object, starting fresh.")
            return False

        self.apply_snapshot(data)
        stored_version = data.get("version")
        if stored_version != CURRENT_PET_VERSION and self.on_version_mismatch:
            self.on_version_mismatch(self, stored_version, data)
        self.version = CURRENT_PET_VERSION
        self.refresh()
        return True
