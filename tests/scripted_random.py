from __future__ import annotations

from typing import Sequence


class ScriptedRandom:
    """RandomSource double that replays a fixed cycle of values."""

    def __init__(self, values: Sequence[int]) -> None:
        self.values = list(values)
        self.calls = 0

    def randrange(self, start: int, stop: int) -> int:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        assert start <= value < stop, f"scripted value {value} outside [{start}, {stop})"
        return value
