"""
Shared pytest fixtures and configuration for Reform tests.
"""

import pytest

from reform import SignupForm, StrengthLevel, VirtualScheduler
from reform.observable import PropagationContext


@pytest.fixture(autouse=True)
def reset_propagation_state():
    """Reset propagation state before each test to prevent state leakage."""
    PropagationContext._reset()


@pytest.fixture
def scheduler():
    """Provide a virtual clock that only moves when advanced."""
    return VirtualScheduler()


@pytest.fixture
def scorer():
    """Strength scorer stub: eight characters or more is strong, anything else weak."""

    def score(password):
        if len(password) >= 8:
            return StrengthLevel.STRONG
        return StrengthLevel.WEAK

    return score


@pytest.fixture
def signed_up():
    """Collects the snapshots passed to the sign-up callback."""
    return []


@pytest.fixture
def form(scorer, scheduler, signed_up):
    """Provide a SignupForm driven by the virtual scheduler."""
    signup_form = SignupForm(scorer, scheduler=scheduler, on_sign_up=signed_up.append)
    yield signup_form
    signup_form.dispose()
