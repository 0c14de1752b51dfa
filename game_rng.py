"""Deterministic random number generator used by level generation.

``GameRNG`` wraps a :func:`numpy.random.default_rng` generator.  Every
generation run should own its own instance; two instances never share state,
so independent runs can safely execute on separate threads.

The generator only relies on :meth:`GameRNG.get_randrange` (uniform integer in
a half-open range).
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional, Sequence

import numpy as np


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)

    # ------------------------------------------------------------------
    # basic random helpers
    # ------------------------------------------------------------------
    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in the closed range ``[a, b]``."""
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def get_randrange(self, start: int, stop: int) -> int:
        """Uniform integer in the half-open range ``[start, stop)``."""
        if start >= stop:
            raise ValueError(f"empty range [{start}, {stop})")
        return self.get_int(start, stop - 1)

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a uniformly chosen element of *seq*."""
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[self.get_randrange(0, len(seq))]

    # ------------------------------------------------------------------
    # state management
    # ------------------------------------------------------------------
    def get_state(self) -> Dict[str, Any]:
        return {
            "random_state": self.rng.bit_generator.state,
            "initial_seed": self.initial_seed,
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        if "random_state" in state:
            self.rng.bit_generator.state = state["random_state"]
        if "initial_seed" in state:
            self.initial_seed = state["initial_seed"]


__all__ = ["GameRNG"]
