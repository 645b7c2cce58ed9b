"""
Text normalization and token-bounded chunking.

The zero-shot model only sees a limited number of tokens at once, so long
texts are cut into chunks that each fit the budget. Cuts prefer sentence
boundaries, fall back to word boundaries, and only split inside a word
when a single word is longer than the whole budget.
"""

import re
from typing import Callable, Iterable, Iterator

TokenCounter = Callable[[str], int]

WHITESPACE_RUN = re.compile(r"\s+")

# Sentence-ending punctuation followed by whitespace
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def normalize_text(text: str) -> str:
    """
    Trim text and collapse every whitespace run (newlines included) to one space.

    Examples:
        >>> normalize_text("  Hello\\n\\n  world  ")
        'Hello world'
    """
    return WHITESPACE_RUN.sub(" ", text.strip())


def segment(text: str, max_tokens: int, count_tokens: TokenCounter) -> Iterator[str]:
    """
    Lazily split normalized text into chunks of at most ``max_tokens`` tokens.

    Sentences are packed greedily into a chunk until the next one would
    overflow the budget. A sentence that does not fit on its own is packed
    word by word, and a word that does not fit on its own is cut by
    characters.

    Args:
        text: Text already passed through normalize_text
        max_tokens: Token budget per chunk (must be >= 1)
        count_tokens: Returns the tokenizer's token count for a string

    Yields:
        Chunks in source order. Joining them with single spaces restores
        the input, except where a word had to be cut.

    Raises:
        ValueError: If max_tokens < 1, or a single character alone exceeds it
    """
    if max_tokens < 1:
        raise ValueError(f"max_tokens must be >= 1, got {max_tokens}")

    text = text.strip()
    if not text:
        return

    sentences = SENTENCE_BOUNDARY.split(text)
    yield from _pack(sentences, max_tokens, count_tokens, _split_sentence)


def _pack(
    pieces: Iterable[str],
    max_tokens: int,
    count_tokens: TokenCounter,
    split_oversized: Callable[[str, int, TokenCounter], Iterator[str]],
) -> Iterator[str]:
    """Greedily join space-separated pieces into chunks within the budget."""
    current = ""

    for piece in pieces:
        if not piece:
            continue

        candidate = f"{current} {piece}" if current else piece
        if count_tokens(candidate) <= max_tokens:
            current = candidate
            continue

        if current:
            yield current
            current = ""

        if count_tokens(piece) <= max_tokens:
            current = piece
            continue

        # The piece overflows on its own; the last fragment stays open so
        # the following pieces can still be packed after it.
        fragments = list(split_oversized(piece, max_tokens, count_tokens))
        yield from fragments[:-1]
        current = fragments[-1]

    if current:
        yield current


def _split_sentence(sentence: str, max_tokens: int, count_tokens: TokenCounter) -> Iterator[str]:
    return _pack(sentence.split(" "), max_tokens, count_tokens, _split_word)


def _split_word(word: str, max_tokens: int, count_tokens: TokenCounter) -> Iterator[str]:
    """Cut a word into the longest prefixes that fit, found by binary search."""
    start = 0
    while start < len(word):
        if count_tokens(word[start:start + 1]) > max_tokens:
            raise ValueError(
                f"Character {word[start]!r} alone exceeds the {max_tokens}-token budget"
            )

        # Invariant: word[start:low] is known to fit
        low, high = start + 1, len(word)
        while low < high:
            mid = (low + high + 1) // 2
            if count_tokens(word[start:mid]) <= max_tokens:
                low = mid
            else:
                high = mid - 1

        yield word[start:low]
        start = low
