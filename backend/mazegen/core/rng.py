"""Deterministic random stream for level generation."""
import random
from typing import Tuple

# 64-bit linear congruential recurrence
LCG_MULTIPLIER = 6364136223846793005
LCG_INCREMENT = 1442695040888963407
MASK_64 = (1 << 64) - 1

# Mixed into the level index to derive the seed
SEED_MIX = 0x5EC6E1DE
# Substituted for a zero seed
ZERO_SEED_REPLACEMENT = 0xDEADC0DE

_STATE_VERSION = "lcg64"


def seed_for_level(level_index: int) -> int:
    """Derive the generation seed for a level index."""
    return (level_index ^ SEED_MIX) & MASK_64


class SeededRandom(random.Random):
    """
    random.Random driven by a 64-bit LCG instead of the Mersenne Twister.

    All of randint/choice/shuffle/random work on top of it, so one instance
    can be handed from phase to phase and the whole run stays reproducible.
    """

    def __init__(self, seed: int = 0):
        self._state = ZERO_SEED_REPLACEMENT
        super().__init__(seed)

    @classmethod
    def for_level(cls, level_index: int) -> "SeededRandom":
        return cls(seed_for_level(level_index))

    def seed(self, a=None, version=2):
        state = int(a or 0) & MASK_64
        self._state = state if state != 0 else ZERO_SEED_REPLACEMENT
        self.gauss_next = None

    @property
    def state(self) -> int:
        return self._state

    def next_u64(self) -> int:
        """Advance the recurrence and return the new 64-bit state."""
        self._state = (LCG_MULTIPLIER * self._state + LCG_INCREMENT) & MASK_64
        return self._state

    def random(self) -> float:
        """Float in [0.0, 1.0) from the top 53 bits."""
        return (self.next_u64() >> 11) * (1.0 / (1 << 53))

    def getrandbits(self, k: int) -> int:
        # High bits of an LCG are the well-distributed ones
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        result = 0
        remaining = k
        while remaining > 0:
            take = min(64, remaining)
            result = (result << take) | (self.next_u64() >> (64 - take))
            remaining -= take
        return result

    def getstate(self) -> Tuple[str, int]:
        return (_STATE_VERSION, self._state)

    def setstate(self, state):
        version, value = state
        if version != _STATE_VERSION:
            raise ValueError(f"state with version {version!r} passed to SeededRandom.setstate()")
        self._state = int(value) & MASK_64
