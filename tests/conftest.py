from __future__ import annotations

import random
from collections.abc import Callable

import matplotlib
import pytest

matplotlib.use("Agg")


class ConstantRandom(random.Random):
    """Random source whose every uniform draw returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def constant_rng() -> Callable[[float], random.Random]:
    return ConstantRandom
