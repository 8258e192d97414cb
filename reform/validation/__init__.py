"""
Reform Validation
=================

The sign-up form store, its pure checks and the strength scorer contract.
"""

from .checks import (
    PasswordCheck,
    are_passwords_equal,
    is_form_valid,
    is_password_empty,
    is_password_strong_enough,
    is_username_valid,
    password_message,
    password_strength,
    resolve_password_check,
    username_message,
)
from .signup import SignupForm, SignupPipeline
from .strength import ACCEPTABLE_STRENGTHS, StrengthLevel, StrengthScorer, cached_scorer

__all__ = [
    "SignupForm",
    "SignupPipeline",
    "PasswordCheck",
    "StrengthLevel",
    "StrengthScorer",
    "ACCEPTABLE_STRENGTHS",
    "cached_scorer",
    "is_username_valid",
    "is_password_empty",
    "are_passwords_equal",
    "password_strength",
    "is_password_strong_enough",
    "resolve_password_check",
    "is_form_valid",
    "username_message",
    "password_message",
]
