class ActionCooldown:
    """Rate limiter for one kind of player action.

    The caller advances it with `update(dt)` from its frame loop and asks
    `trigger()` before running the action; while cooling, trigger refuses.
    """
    def __init__(self, duration: float):
        self.duration = float(duration)
        self._remaining = 0.0

    def is_ready(self) -> bool:
        return self._remaining <= 0.0

    def trigger(self) -> bool:
        """Start the cooldown if it is free. Returns False if still cooling."""
        if not self.is_ready():
            return False
        self._remaining = self.duration
        return True

    def update(self, dt: float):
        if self._remaining > 0.0:
            self._remaining = max(0.0, self._remaining - dt)

    def remaining(self) -> float:
        return self._remaining

    def reset(self):
        self._remaining = 0.0
