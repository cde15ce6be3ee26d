"""
Word pool selection, decoy generation and the initial word set.
"""

import random
from typing import Dict, List, Optional

from .data import FALLBACK_WORDS, all_words
from .models import Difficulty, LevelParameters, TrackedWord, WordPool


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Characters that read like the one they replace
LOOKALIKES: Dict[str, str] = {
    "I": "LT1",
    "O": "0QD",
    "E": "FB",
    "S": "5Z",
    "Z": "2S",
    "A": "4H",
    "R": "PB",
    "N": "MH",
    "U": "VY",
    "V": "UY",
}

TIER_POINT_MULTIPLIERS: Dict[Difficulty, float] = {
    Difficulty.EASY: 1.0,
    Difficulty.MEDIUM: 1.2,
    Difficulty.HARD: 1.5,
    Difficulty.EXTREME: 2.0,
}


def word_points(word: str, difficulty: Difficulty) -> int:
    """Point value of a real word: 10 per letter, scaled by tier."""
    return int(len(word) * 10 * TIER_POINT_MULTIPLIERS[difficulty])


def decoy_count(params: LevelParameters) -> int:
    """How many decoys a level gets."""
    if params.level <= 5:
        return 0
    if params.level <= 10:
        return 1
    if params.level <= 20:
        return int(params.word_count * 0.2)
    if params.level <= 30:
        return int(params.word_count * 0.25)
    return int(params.word_count * 0.3)


def mutate_word(word: str, rng: random.Random) -> str:
    """
    Build a decoy by changing exactly one character.

    Half the time the last letter is swapped for a look-alike; otherwise
    a random position gets a random different letter.
    """
    word = word.upper()
    if not word:
        return word

    last = word[-1]
    if last in LOOKALIKES and rng.random() < 0.5:
        return word[:-1] + rng.choice(LOOKALIKES[last])

    pos = rng.randrange(len(word))
    replacement = rng.choice([c for c in ALPHABET if c != word[pos]])
    return word[:pos] + replacement + word[pos + 1:]


def select_word_pool(
    params: LevelParameters,
    rng: Optional[random.Random] = None,
    source: Optional[List[str]] = None,
) -> WordPool:
    """
    Select real candidates and decoys for a level.

    Candidates are the source words within the level's length bounds, in
    shuffled order. When none qualify the fallback list is used instead.
    Decoys are single-character mutations of candidates that do not
    collide with any source word.

    Args:
        params: Level parameters
        rng: Random source
        source: Word list (defaults to every built-in word)

    Returns:
        WordPool with candidates and decoys
    """
    rng = rng or random.Random()
    source = [w.upper() for w in (source if source is not None else all_words())]

    candidates = [
        w for w in dict.fromkeys(source)
        if params.min_word_length <= len(w) <= params.max_word_length
    ]
    if not candidates:
        candidates = list(dict.fromkeys(FALLBACK_WORDS))
    rng.shuffle(candidates)

    wanted = decoy_count(params)
    known = set(source) | set(candidates)
    bases = candidates[:params.word_count]
    decoys: List[str] = []
    attempts = 0

    while len(decoys) < wanted and attempts < wanted * 50 and bases:
        attempts += 1
        decoy = mutate_word(rng.choice(bases), rng)
        if decoy in known or decoy in decoys:
            continue
        decoys.append(decoy)

    return WordPool(candidates=candidates, decoys=decoys)


def build_initial_words(params: LevelParameters, pool: WordPool) -> List[TrackedWord]:
    """
    Create the level's tracked words: ``word_count`` real words, then decoys.

    All words start Hidden with no origin; the scheduler places them when
    they surface.
    """
    real = [
        TrackedWord(text=text, point_value=word_points(text, params.difficulty))
        for text in pool.candidates[:params.word_count]
    ]
    decoys = [TrackedWord(text=text, is_decoy=True) for text in pool.decoys]
    return real + decoys
