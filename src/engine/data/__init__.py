"""Built-in word lists."""

from .words import WORD_LISTS, FALLBACK_WORDS, all_words

__all__ = ["WORD_LISTS", "FALLBACK_WORDS", "all_words"]
