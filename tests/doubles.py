"""Test doubles shared by several test modules."""

from collections.abc import Iterable
from itertools import cycle


class ScriptedRandom:
    """Random source that replays fixed values.

    random() cycles through values, randrange() always returns randrange_value
    and choice() always returns the first element.
    """

    def __init__(self, values: Iterable[float], randrange_value: int = 1) -> None:
        self._values = cycle(values)
        self.randrange_value = randrange_value

    def random(self) -> float:
        return next(self._values)

    def randrange(self, start: int, stop: int) -> int:
        return self.randrange_value

    def choice(self, seq):  # noqa: ANN001, ANN201
        return seq[0]
