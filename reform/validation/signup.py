"""
Reform Sign-up Form - The Validation State Store
================================================

`SignupForm` is the object a presentation layer binds to. It has three input
fields written on every keystroke and three output fields that only the
validation pipeline writes:

| Field              | Direction | Starts as |
|--------------------|-----------|-----------|
| ``username``       | input     | ``""``    |
| ``password``       | input     | ``""``    |
| ``password_again`` | input     | ``""``    |
| ``username_message`` | output  | ``""``    |
| ``password_message`` | output  | ``""``    |
| ``is_valid``       | output    | ``False`` |

Constructing the form wires the pipeline::

    username ~0.8s ─────────────► username_valid ─┬─► username_message
                                                   │
    password ~0.8s ─► is_empty ──┐                 ├─► is_valid
    (password, again) ~0.2s ─► are_equal ─► check ─┤
    password ~0.2s ─► strength ─► strong_enough ┘  └─► password_message

``~Ns`` marks a debounced, deduplicated input. Every arrow into a merge point
is a latest-value combine.

```python
scheduler = VirtualScheduler()
form = SignupForm(my_scorer, scheduler=scheduler, on_sign_up=create_account)

form.username = "john"
form.password = form.password_again = "Tr0ub4dor&3"
scheduler.advance(1.0)

form.is_valid.value   # True once my_scorer rates the password strong
form.sign_up()        # calls create_account(snapshot)
form.dispose()
```
"""

import logging
from functools import partial
from typing import Callable, NamedTuple, Optional

from ..config import ValidationConfig
from ..observable import DebouncedObservable, Observable
from ..scheduler import Scheduler, VirtualScheduler
from ..store import Store, StoreSnapshot, observable, readonly
from .checks import (
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
from .strength import StrengthScorer, cached_scorer

logger = logging.getLogger(__name__)


class SignupPipeline(NamedTuple):
    """The intermediate nodes of a form's validation graph."""

    username: DebouncedObservable
    password_for_emptiness: DebouncedObservable
    passwords: DebouncedObservable
    password_for_strength: DebouncedObservable
    username_valid: Observable
    password_empty: Observable
    passwords_equal: Observable
    strength: Observable
    strong_enough: Observable
    password_check: Observable
    form_valid: Observable


class SignupForm(Store):
    """
    Validation state store for a user name and password sign-up form.

    Args:
        scorer: External password strength scorer.
        scheduler: Context debounce timers run on. Defaults to a fresh
            `VirtualScheduler`, which only moves when advanced.
        config: Debounce windows, messages and limits.
        on_sign_up: Called with a snapshot of the form when `sign_up()` is
            accepted.
    """

    username = observable("")
    password = observable("")
    password_again = observable("")

    username_message = readonly("")
    password_message = readonly("")
    is_valid = readonly(False)

    def __init__(
        self,
        scorer: StrengthScorer,
        scheduler: Optional[Scheduler] = None,
        config: Optional[ValidationConfig] = None,
        on_sign_up: Optional[Callable[[StoreSnapshot], None]] = None,
    ) -> None:
        super().__init__()
        self._config = config or ValidationConfig()
        self._scheduler = scheduler if scheduler is not None else VirtualScheduler()
        self._scorer = cached_scorer(scorer, self._config.strength_cache_size)
        self._on_sign_up = on_sign_up
        self._pipeline = self._wire()

    @property
    def config(self) -> ValidationConfig:
        return self._config

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def pipeline(self) -> SignupPipeline:
        return self._pipeline

    def _wire(self) -> SignupPipeline:
        intervals = self._config.intervals
        messages = self._config.messages
        scheduler = self._scheduler

        # Debounced sources
        username = self.username.debounce(intervals.username, scheduler)
        password_for_emptiness = self.password.debounce(intervals.password_empty, scheduler)
        raw_passwords = self.password + self.password_again
        passwords = raw_passwords.debounce(intervals.password_match, scheduler)
        password_for_strength = self.password.debounce(intervals.password_strength, scheduler)

        # Derivations
        username_valid = username >> partial(
            is_username_valid, min_length=self._config.min_username_length
        )
        password_empty = password_for_emptiness >> is_password_empty
        passwords_equal = passwords >> are_passwords_equal
        strength = password_for_strength >> partial(password_strength, scorer=self._scorer)
        strong_enough = strength >> is_password_strong_enough

        # Combinators
        password_check = (password_empty + passwords_equal + strong_enough) >> resolve_password_check
        form_valid = (username_valid + password_check) >> is_form_valid

        # Message projections
        username_text = username_valid >> partial(
            username_message,
            messages=messages,
            min_length=self._config.min_username_length,
        )
        password_text = password_check >> partial(password_message, messages=messages)

        nodes = [
            raw_passwords,
            username,
            password_for_emptiness,
            passwords,
            password_for_strength,
            username_valid,
            password_empty,
            passwords_equal,
            strength,
            strong_enough,
            password_check,
            form_valid,
            username_text,
            password_text,
        ]
        for node in nodes:
            self._own(node.dispose)

        self._own(username_text.subscribe(self._sink("username_message")))
        self._own(password_text.subscribe(self._sink("password_message")))
        self._own(form_valid.subscribe(self._sink("is_valid")))

        return SignupPipeline(
            username=username,
            password_for_emptiness=password_for_emptiness,
            passwords=passwords,
            password_for_strength=password_for_strength,
            username_valid=username_valid,
            password_empty=password_empty,
            passwords_equal=passwords_equal,
            strength=strength,
            strong_enough=strong_enough,
            password_check=password_check,
            form_valid=form_valid,
        )

    def sign_up(self) -> bool:
        """
        Submit the form if the latest settled validation result allows it.

        Input that is still inside its debounce window does not count: the
        decision is made from ``is_valid`` alone.

        Returns:
            True if the sign-up callback ran, False if the action was a no-op.
        """
        if self.disposed:
            logger.debug("sign_up ignored: form disposed")
            return False
        if not self.is_valid.value:
            logger.debug("sign_up ignored: form is not valid")
            return False

        logger.debug("sign_up accepted for %r", self.username.value)
        if self._on_sign_up is not None:
            self._on_sign_up(self.snapshot())
        return True
