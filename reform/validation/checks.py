"""
Reform Validation Checks - Derivations, Combinators and Messages
================================================================

Pure functions that the sign-up pipeline maps its settled inputs through.
None of them can fail on a string input: empty strings and strings of any
length are valid arguments.

Derivations
-----------

- `is_username_valid`: user name has at least three characters (untrimmed)
- `is_password_empty`: password is ``""``
- `are_passwords_equal`: both password fields hold the same string
- `password_strength`: delegate to the external scorer
- `is_password_strong_enough`: strength is reasonable or better

Combinators
-----------

`resolve_password_check` folds the three password booleans into a single
`PasswordCheck`. The first matching condition wins:

1. ``EMPTY`` if the password is empty
2. ``NO_MATCH`` if the two fields differ
3. ``NOT_STRONG_ENOUGH`` if the scorer rates it below reasonable
4. ``VALID`` otherwise

so a user is never told about a mismatch between two empty fields, nor that
a password is too weak when the real problem is a typo in the repetition.

`is_form_valid` requires a valid user name and a ``VALID`` password check.
"""

import logging
from enum import Enum
from typing import Optional

from ..config import ValidationMessages
from .strength import ACCEPTABLE_STRENGTHS, StrengthLevel, StrengthScorer

logger = logging.getLogger(__name__)

_DEFAULT_MESSAGES = ValidationMessages()


class PasswordCheck(Enum):
    """Outcome of the password checks. Exactly one variant applies."""

    VALID = "valid"
    EMPTY = "empty"
    NO_MATCH = "no_match"
    NOT_STRONG_ENOUGH = "not_strong_enough"


# ============================================================================
# DERIVATIONS
# ============================================================================


def is_username_valid(username: str, min_length: int = 3) -> bool:
    return len(username) >= min_length


def is_password_empty(password: str) -> bool:
    return password == ""


def are_passwords_equal(password: str, password_again: str) -> bool:
    return password == password_again


def password_strength(password: str, scorer: StrengthScorer) -> Optional[StrengthLevel]:
    """
    Score ``password`` with ``scorer``.

    A scorer that raises leaves the password unscoreable: the error is logged
    and ``None`` is returned, which never counts as strong enough.
    """
    try:
        return scorer(password)
    except Exception:
        logger.warning("Password strength scorer %r failed", scorer, exc_info=True)
        return None


def is_password_strong_enough(strength: Optional[StrengthLevel]) -> bool:
    return strength in ACCEPTABLE_STRENGTHS


# ============================================================================
# COMBINATORS
# ============================================================================


def resolve_password_check(
    is_empty: bool, are_equal: bool, is_strong_enough: bool
) -> PasswordCheck:
    if is_empty:
        return PasswordCheck.EMPTY
    if not are_equal:
        return PasswordCheck.NO_MATCH
    if not is_strong_enough:
        return PasswordCheck.NOT_STRONG_ENOUGH
    return PasswordCheck.VALID


def is_form_valid(username_valid: bool, password_check: PasswordCheck) -> bool:
    return username_valid and password_check is PasswordCheck.VALID


# ============================================================================
# MESSAGES
# ============================================================================


def username_message(
    username_valid: bool,
    messages: ValidationMessages = _DEFAULT_MESSAGES,
    min_length: int = 3,
) -> str:
    if username_valid:
        return ""
    return messages.username_too_short.format(min_length=min_length)


def password_message(
    password_check: PasswordCheck, messages: ValidationMessages = _DEFAULT_MESSAGES
) -> str:
    if password_check is PasswordCheck.EMPTY:
        return messages.password_empty
    if password_check is PasswordCheck.NO_MATCH:
        return messages.password_no_match
    if password_check is PasswordCheck.NOT_STRONG_ENOUGH:
        return messages.password_not_strong_enough
    return ""
