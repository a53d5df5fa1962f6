"""
Seeded pseudo-random generator for deterministic match simulation.

A PCG32-style generator: 64-bit multiply-add state with an xorshift/rotate
32-bit output. Every simulation owns exactly one instance.
"""

from typing import Union

from .errors import InvalidSeedError


MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

MULTIPLIER = 6364136223846793005
OUTPUT_SCALE = 4294967296.0  # 2**32

SeedLike = Union[int, str]


def parse_seed(value: SeedLike) -> int:
    """
    Convert a seed to an unsigned 64-bit integer.

    Args:
        value: Integer, decimal string or "0x"-prefixed hexadecimal string

    Returns:
        int: Seed in [0, 2**64 - 1]

    Raises:
        InvalidSeedError: If the value is not a valid unsigned 64-bit seed
    """
    # bool is an int subclass; True/False are never meant as seeds
    if isinstance(value, bool):
        raise InvalidSeedError(f"Seed must be an integer or string, got {value!r}")

    if isinstance(value, int):
        seed = value
    elif isinstance(value, str):
        text = value.strip().replace("_", "")
        if not text:
            raise InvalidSeedError("Seed string is empty")
        try:
            if text[:2].lower() == "0x":
                seed = int(text[2:], 16)
            else:
                seed = int(text, 10)
        except ValueError:
            raise InvalidSeedError(f"Seed is not numeric: {value!r}") from None
    else:
        raise InvalidSeedError(f"Seed must be an integer or string, got {type(value).__name__}")

    if seed < 0 or seed > MASK64:
        raise InvalidSeedError(f"Seed {value!r} is outside the unsigned 64-bit range")

    return seed


class SeededGenerator:
    """
    Counter-based pseudo-random bit source.

    State layout:
    - state: advances on every draw (64-bit, wraps on overflow)
    - increment: fixed for the generator's lifetime, seed forced odd

    Python integers never overflow, so every update is masked back to 64 bits.
    """

    __slots__ = ("_state", "_increment")

    def __init__(self, seed: SeedLike):
        """
        Initialize generator from a seed.

        Args:
            seed: Unsigned 64-bit seed (int or numeric string)
        """
        seed = parse_seed(seed)
        self._state = seed
        self._increment = seed | 1

    @property
    def state(self) -> int:
        return self._state

    @property
    def increment(self) -> int:
        return self._increment

    def next_u32(self) -> int:
        """Advance the state and return the next 32-bit output word."""
        old_state = self._state
        self._state = (old_state * MULTIPLIER + self._increment) & MASK64

        xorshifted = ((old_state >> 18) ^ old_state) & MASK32
        rotation = (old_state >> 27) & 31
        return ((xorshifted >> rotation) | (xorshifted << (-rotation & 31))) & MASK32

    def next(self) -> float:
        """Return the next uniform value in [0, 1)."""
        return self.next_u32() / OUTPUT_SCALE

    def __repr__(self) -> str:
        return f"SeededGenerator(state=0x{self._state:016x}, increment=0x{self._increment:016x})"
