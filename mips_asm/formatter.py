"""Hex rendering of the word stream."""

from typing import List, Mapping


def format_word(word: int) -> str:
    """Render a 32-bit word as 8 lowercase hex digits."""
    return f"{word & 0xFFFFFFFF:08x}"


def format_words(words: Mapping[int, int]) -> List[str]:
    """Render every word of a stream, in ascending address order."""
    return [format_word(words[address]) for address in sorted(words)]
