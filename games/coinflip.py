"""
CLI Games — games/coinflip.py
Coin Flip game logic: the outcome source behind the Coin Flip screen.
=====================================================================
Stack:       Python 3.11+ | numpy
Status:      Complete. Only the random draw lives here; timing and
             animation belong to ui/screens.py.

The generator is seeded once, at construction, from OS entropy unless an
explicit seed is given. It is never reseeded per flip.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np


class CoinSide(str, Enum):
    """The two sides of a coin."""
    HEADS = "HEADS"
    TAILS = "TAILS"


_SIDES = (CoinSide.HEADS, CoinSide.TAILS)


class CoinFlip:
    """
    Fair coin. Each flip() is an independent uniform draw over both sides.
    """
    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)
        self.result: Optional[CoinSide] = None

    def flip(self) -> CoinSide:
        """Flips the coin and returns (and remembers) the side that landed."""
        self.result = _SIDES[int(self._rng.integers(0, 2))]
        return self.result
