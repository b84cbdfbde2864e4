# lockbox/app/security/password_generator.py
"""
Random password generation for new vault secrets.

Characters are drawn with `secrets`, never `random`: the output is stored
as a credential.
"""
import secrets

from lockbox.app.core.exceptions import ValidationError

LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
NUMBERS = "0123456789"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Visually ambiguous glyphs
LOOK_ALIKES = frozenset("0O1lI")

MIN_LENGTH = 4
MAX_LENGTH = 128


def build_pool(
    include_letters: bool = True,
    include_numbers: bool = True,
    include_symbols: bool = False,
    exclude_look_alikes: bool = True,
) -> str:
    """
    Return the character pool for the selected classes.

    Raises:
        ValidationError: no character class selected (empty pool)
    """
    pool = ""
    if include_letters:
        pool += LETTERS
    if include_numbers:
        pool += NUMBERS
    if include_symbols:
        pool += SYMBOLS

    if exclude_look_alikes:
        pool = "".join(ch for ch in pool if ch not in LOOK_ALIKES)

    if not pool:
        raise ValidationError("At least one character type must be selected")
    return pool


def generate_password(
    length: int,
    include_letters: bool = True,
    include_numbers: bool = True,
    include_symbols: bool = False,
    exclude_look_alikes: bool = True,
) -> str:
    """
    Generate `length` characters sampled uniformly, with replacement, from
    the selected pool.

    `length` is not bounds-checked here; callers enforce
    MIN_LENGTH..MAX_LENGTH.
    """
    pool = build_pool(
        include_letters=include_letters,
        include_numbers=include_numbers,
        include_symbols=include_symbols,
        exclude_look_alikes=exclude_look_alikes,
    )
    return "".join(secrets.choice(pool) for _ in range(length))
