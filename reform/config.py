"""
Reform Configuration
====================

Tunables for the sign-up validation pipeline. The defaults reproduce the
behaviour the form was designed with: an 0.8 second quiet period before the
user name and password emptiness are judged, 0.2 seconds for password
equality and strength, and a three character minimum for user names.

```python
from reform import SignupForm, ValidationConfig, DebounceIntervals

fast = ValidationConfig(intervals=DebounceIntervals(username=0.1))
form = SignupForm(scorer, config=fast)
```
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DebounceIntervals:
    """Quiet periods, in seconds, before each input counts as settled."""

    username: float = 0.8
    password_empty: float = 0.8
    password_match: float = 0.2
    password_strength: float = 0.2

    def __post_init__(self) -> None:
        for name in ("username", "password_empty", "password_match", "password_strength"):
            if getattr(self, name) < 0:
                raise ValueError(f"debounce interval '{name}' must be non-negative")


@dataclass(frozen=True)
class ValidationMessages:
    """
    User-facing text for each failed check. Empty means valid.

    ``username_too_short`` is formatted with ``min_length``, so the default
    text follows `ValidationConfig.min_username_length`.
    """

    username_too_short: str = "User name must at least have {min_length} characters"
    password_empty: str = "Password must not be empty"
    password_no_match: str = "Password don't match"
    password_not_strong_enough: str = "Password not strong enough"


@dataclass(frozen=True)
class ValidationConfig:
    """
    Everything a `SignupForm` can be tuned with.

    Attributes:
        intervals: Debounce windows for each input stream.
        messages: Validation message text.
        min_username_length: Minimum user name length, counted without
            trimming whitespace. Also fills ``{min_length}`` in the user name
            message.
        strength_cache_size: Number of strength scores memoized per form.
            Zero disables memoization.
    """

    intervals: DebounceIntervals = field(default_factory=DebounceIntervals)
    messages: ValidationMessages = field(default_factory=ValidationMessages)
    min_username_length: int = 3
    strength_cache_size: int = 128

    def __post_init__(self) -> None:
        if self.min_username_length < 0:
            raise ValueError("min_username_length must be non-negative")
        if self.strength_cache_size < 0:
            raise ValueError("strength_cache_size must be non-negative")
