# =============================================================================
# lib/profanity.py - Chirp Body Profanity Filter
# =============================================================================
# Masks blocked words in chirp bodies before they are stored.
#
# Matching is word-for-word on single-space boundaries and case-insensitive.
# A blocked word with punctuation attached ("Sharbert!") is NOT a match.
# =============================================================================

from typing import Iterable

PROFANITY_MASK = "****"

BLOCKED_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})


def clean_body(
    body: str,
    blocked: Iterable[str] = BLOCKED_WORDS,
    mask: str = PROFANITY_MASK,
) -> str:
    """
    Replace every blocked word in `body` with `mask`.

    Args:
        body: Raw chirp text
        blocked: Words to mask (compared lowercased)
        mask: Replacement token

    Returns:
        The cleaned body. Spacing is preserved exactly, including runs of
        spaces, because the text is split and rejoined on single spaces.

    Example:
        clean_body("This is a Kerfuffle opinion")
        # "This is a **** opinion"
    """
    blocked_lower = {word.lower() for word in blocked}
    words = body.split(" ")
    return " ".join(mask if word.lower() in blocked_lower else word for word in words)
