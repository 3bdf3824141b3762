"""Seeded random number generation for Duty Randomizer."""

from typing import Callable, List, TypeVar

T = TypeVar("T")

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = 4294967296.0


def create_generator(seed: int) -> Callable[[], float]:
    """Create a deterministic random number generator.

    Uses a 32-bit xorshift so the same seed yields the same stream of
    values on every platform. The seed is truncated to 32 bits; a seed of
    0 yields a stream of zeros.

    Args:
        seed: Integer seed for the generator

    Returns:
        Function returning a new float in [0, 1) on each call
    """
    state = seed & UINT32_MASK

    def draw() -> float:
        nonlocal state
        state ^= (state << 13) & UINT32_MASK
        state ^= state >> 17
        state ^= (state << 5) & UINT32_MASK
        return state / UINT32_SCALE

    return draw


def shuffle(items: List[T], random: Callable[[], float]) -> List[T]:
    """Shuffle a list with Fisher-Yates using a seeded generator.

    Args:
        items: Items to shuffle
        random: Generator returned by create_generator

    Returns:
        New shuffled list (the input is not modified)
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result
