from enum import Enum, auto
from dataclasses import dataclass


class LifeStage(Enum):
    """
    Growth stages, in order. Values match the numeric codes older saves use.
    Lookup also accepts stage names so hand-edited or legacy save data loads.
    """
    EGG = 1
    PUP = 2
    ADULT = 3
    ELDER = 4

    @classmethod
    def _missing_(cls, value):
        """
        Flexible lookup for save data: 'pup', 'Pup', '2' all map to PUP.
        Anything else still raises ValueError so the caller can keep its default.
        """
        if isinstance(value, str):
            normalized = value.strip().upper()
            for member in cls:
                if member.name == normalized:
                    return member
            if normalized.isdigit():
                for member in cls:
                    if member.value == int(normalized):
                        return member
        return super()._missing_(value)

    def next_stage(self):
        """The stage after this one, or None once the pet is an elder."""
        members = list(LifeStage)
        index = members.index(self)
        if index + 1 < len(members):
            return members[index + 1]
        return None


class Prompt(Enum):
    """Interactive checkpoints the view shows while the pet awaits advancement."""
    NAMING = auto()
    ADULT_INFO = auto()
    ELDER_INFO = auto()
    PASSED_AWAY = auto()


@dataclass
class DebugInfo:
    """Read-only snapshot for the debug panel."""
    life_stage: LifeStage
    age: float
    food: float
    behavior: float
    potty_timer: float
    mess_counter: int
    happiness: float

    def lines(self):
        return [
            f"ls: {self.life_stage.value} ({self.life_stage.name})",
            f"a: {self.age:g}",
            f"f: {self.food:.2f}",
            f"b: {self.behavior:g}",
            f"p: {self.potty_timer:.2f}",
            f"mc: {self.mess_counter}",
            f"h: {self.happiness:.2f}",
        ]
