"""
Random round content: letter pools, number pools and turn order.

Every generator takes the random source explicitly so callers (and tests)
control the sequence.
"""

import random
from typing import Dict, List, Sequence, Tuple

from config import (
    CONSONANT_COUNT,
    CONSONANT_WEIGHTS,
    LARGE_COUNT,
    LARGE_NUMBERS,
    SMALL_COUNT,
    SMALL_NUMBERS,
    TARGET_MAX,
    TARGET_MIN,
    VOWEL_COUNT,
    VOWEL_WEIGHTS,
)


def expand_weights(weights: Dict[str, int]) -> List[str]:
    """Turn a {letter: weight} table into the multiset it describes."""
    bag = []
    for letter, weight in weights.items():
        bag.extend([letter] * weight)
    return bag


VOWEL_BAG = expand_weights(VOWEL_WEIGHTS)
CONSONANT_BAG = expand_weights(CONSONANT_WEIGHTS)


def generate_letters(
    rng: random.Random,
    vowel_count: int = VOWEL_COUNT,
    consonant_count: int = CONSONANT_COUNT,
) -> List[str]:
    """
    Draw `vowel_count` vowels and `consonant_count` consonants independently
    (with replacement) from the weighted bags, then shuffle them together.
    Repeated letters are expected.
    """
    letters = [rng.choice(VOWEL_BAG) for _ in range(vowel_count)]
    letters += [rng.choice(CONSONANT_BAG) for _ in range(consonant_count)]
    rng.shuffle(letters)
    return letters


def generate_numbers(
    rng: random.Random,
    large_count: int = LARGE_COUNT,
    small_count: int = SMALL_COUNT,
) -> Tuple[List[int], int]:
    """
    Draw large numbers without replacement from {25, 50, 75, 100} and small
    numbers without replacement from two copies of 1..10, plus an independent
    target in [100, 999]. The pool is not guaranteed to reach the target.
    Returns (pool, target).
    """
    pool = rng.sample(LARGE_NUMBERS, large_count) + rng.sample(SMALL_NUMBERS, small_count)
    rng.shuffle(pool)
    target = rng.randint(TARGET_MIN, TARGET_MAX)
    return pool, target


def shuffled(items: Sequence, rng: random.Random) -> list:
    """Random permutation of `items`, leaving the input untouched."""
    out = list(items)
    rng.shuffle(out)
    return out
