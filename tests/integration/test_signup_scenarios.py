"""Integration tests for the sign-up form validation pipeline."""

import pytest

from reform import (
    NULL_EVENT,
    DebounceIntervals,
    PasswordCheck,
    SignupForm,
    StrengthLevel,
    ValidationConfig,
    ValidationMessages,
    VirtualScheduler,
)


def fill(form, username, password, password_again):
    form.username = username
    form.password = password
    form.password_again = password_again


@pytest.mark.integration
@pytest.mark.validation
def test_outputs_start_empty_and_invalid(form):
    """Before anything settles the form shows no messages and is invalid"""
    assert form.username_message.value == ""
    assert form.password_message.value == ""
    assert form.is_valid.value is False


@pytest.mark.integration
@pytest.mark.validation
def test_idle_form_settles_initial_values(form, scheduler):
    """An untouched form settles to the empty-field messages"""
    scheduler.advance(1.0)

    assert form.username_message.value == "User name must at least have 3 characters"
    assert form.password_message.value == "Password must not be empty"
    assert form.is_valid.value is False


@pytest.mark.integration
@pytest.mark.validation
def test_short_username_reports_message(form, scheduler):
    """Scenario: a two character user name is too short"""
    form.username = "jo"
    scheduler.advance(1.0)

    assert form.username_message.value == "User name must at least have 3 characters"
    assert form.is_valid.value is False


@pytest.mark.integration
@pytest.mark.validation
def test_empty_passwords_report_empty(form, scheduler):
    """Scenario: empty password fields report an empty password"""
    fill(form, "john", "", "")
    scheduler.advance(1.0)

    assert form.username_message.value == ""
    assert form.password_message.value == "Password must not be empty"
    assert form.is_valid.value is False


@pytest.mark.integration
@pytest.mark.validation
def test_mismatched_passwords_report_no_match(form, scheduler):
    """Scenario: different password fields report a mismatch"""
    fill(form, "john", "abc123", "xyz999")
    scheduler.advance(1.0)

    assert form.password_message.value == "Password don't match"
    assert form.is_valid.value is False


@pytest.mark.integration
@pytest.mark.validation
def test_weak_matching_password_reports_not_strong_enough(form, scheduler):
    """Scenario: matching passwords the scorer rates weak"""
    fill(form, "john", "abc123", "abc123")
    scheduler.advance(1.0)

    assert form.pipeline.strength.value is StrengthLevel.WEAK
    assert form.password_message.value == "Password not strong enough"
    assert form.is_valid.value is False


@pytest.mark.integration
@pytest.mark.validation
def test_strong_matching_password_makes_form_valid(form, scheduler):
    """Scenario: valid user name and strong matching passwords"""
    fill(form, "john", "Tr0ub4dor&3", "Tr0ub4dor&3")
    scheduler.advance(1.0)

    assert form.username_message.value == ""
    assert form.password_message.value == ""
    assert form.is_valid.value is True
    assert form.pipeline.password_check.value is PasswordCheck.VALID


@pytest.mark.integration
@pytest.mark.validation
def test_validity_follows_later_edits(form, scheduler):
    """Breaking a valid form after it settled makes it invalid again"""
    fill(form, "john", "Tr0ub4dor&3", "Tr0ub4dor&3")
    scheduler.advance(1.0)
    assert form.is_valid.value is True

    form.password_again = "Tr0ub4dor&"
    scheduler.advance(1.0)

    assert form.password_message.value == "Password don't match"
    assert form.is_valid.value is False


@pytest.mark.integration
@pytest.mark.validation
def test_faster_windows_settle_first(form, scheduler):
    """Equality and strength settle after 0.2s; emptiness waits for 0.8s"""
    fill(form, "john", "abc123", "xyz999")

    scheduler.advance(0.5)
    assert form.pipeline.passwords_equal.value is False
    assert form.pipeline.password_empty.value is NULL_EVENT
    assert form.pipeline.password_check.value is NULL_EVENT
    assert form.password_message.value == ""

    scheduler.advance(0.5)
    assert form.password_message.value == "Password don't match"


@pytest.mark.integration
@pytest.mark.validation
def test_validity_never_reads_unsettled_input(form, scheduler):
    """Inputs still inside their window do not change the outputs"""
    fill(form, "john", "Tr0ub4dor&3", "Tr0ub4dor&3")
    scheduler.advance(1.0)

    form.username = "jo"
    scheduler.advance(0.5)

    assert form.is_valid.value is True
    assert form.username_message.value == ""

    scheduler.advance(0.5)
    assert form.is_valid.value is False


@pytest.mark.integration
@pytest.mark.validation
def test_typing_burst_produces_single_username_emission(form, scheduler):
    """Keystrokes within the window reach the pipeline as one settled value"""
    emissions = []
    form.pipeline.username.subscribe(emissions.append)

    for text in ["j", "jo", "joh", "john"]:
        form.username = text
        scheduler.advance(0.1)
    scheduler.advance(1.0)

    assert emissions == ["john"]


@pytest.mark.integration
@pytest.mark.validation
def test_resetting_field_to_settled_value_emits_nothing(form, scheduler):
    """Re-entering the settled user name causes no new emission"""
    emissions = []
    form.pipeline.username.subscribe(emissions.append)
    form.username = "john"
    scheduler.advance(1.0)

    form.username = "johnny"
    form.username = "john"
    scheduler.advance(1.0)
    form.username = "john"
    scheduler.advance(1.0)

    assert emissions == ["john"]


@pytest.mark.integration
@pytest.mark.validation
def test_outputs_notify_only_on_change(form, scheduler):
    """Output observers are not called for recomputations with equal results"""
    messages = []
    form.password_message.subscribe(messages.append)
    fill(form, "john", "abc123", "xyz999")
    scheduler.advance(1.0)

    form.password_again = "xyz998"
    scheduler.advance(1.0)

    assert messages == ["Password don't match"]


@pytest.mark.integration
@pytest.mark.validation
def test_form_subscribers_receive_snapshots(form, scheduler):
    """Store-level subscribers see every settled change"""
    snapshots = []
    form.subscribe(snapshots.append)

    fill(form, "john", "Tr0ub4dor&3", "Tr0ub4dor&3")
    scheduler.advance(1.0)

    assert snapshots[-1].is_valid is True
    assert snapshots[-1].username == "john"


@pytest.mark.integration
@pytest.mark.validation
def test_form_subscribers_ignore_unsettled_keystrokes(form, scheduler):
    """Typing without a pause produces no snapshots until the outputs change"""
    snapshots = []
    form.subscribe(snapshots.append)

    for text in ["j", "jo", "joh", "john"]:
        form.username = text
    assert snapshots == []

    scheduler.advance(1.0)
    assert snapshots
    assert all(s.username == "john" for s in snapshots)


@pytest.mark.integration
@pytest.mark.validation
def test_scorer_is_consulted_once_per_settled_password(scheduler):
    """Strength is computed for settled passwords only"""
    scored = []

    def scorer(password):
        scored.append(password)
        return StrengthLevel.STRONG

    form = SignupForm(scorer, scheduler=scheduler)
    for text in ["T", "Tr", "Tr0"]:
        form.password = text
    scheduler.advance(1.0)

    assert scored == ["Tr0"]
    form.dispose()


@pytest.mark.integration
@pytest.mark.validation
def test_failing_scorer_reports_not_strong_enough(scheduler):
    """A scorer that raises leaves matching passwords not strong enough"""

    def broken(password):
        raise RuntimeError("unavailable")

    form = SignupForm(broken, scheduler=scheduler)
    fill(form, "john", "abc123", "abc123")
    scheduler.advance(1.0)

    assert form.password_message.value == "Password not strong enough"
    form.dispose()


@pytest.mark.integration
@pytest.mark.validation
def test_custom_config_changes_windows_limits_and_messages(scorer):
    """ValidationConfig tunes the form's debounce windows, limits and text"""
    scheduler = VirtualScheduler()
    config = ValidationConfig(
        intervals=DebounceIntervals(username=0.1, password_empty=0.1),
        messages=ValidationMessages(username_too_short="Pick a longer name"),
        min_username_length=5,
    )
    form = SignupForm(scorer, scheduler=scheduler, config=config)

    form.username = "john"
    scheduler.advance(0.3)

    assert form.username_message.value == "Pick a longer name"
    assert form.password_message.value == "Password must not be empty"
    form.dispose()


@pytest.mark.integration
@pytest.mark.validation
def test_raised_username_minimum_shows_in_default_message(scorer, scheduler):
    """Raising min_username_length changes the default message to match"""
    form = SignupForm(scorer, scheduler=scheduler, config=ValidationConfig(min_username_length=5))

    form.username = "john"
    scheduler.advance(1.0)

    assert form.username_message.value == "User name must at least have 5 characters"
    form.dispose()


@pytest.mark.integration
@pytest.mark.validation
def test_default_scheduler_is_virtual(scorer):
    """Without a scheduler the form gets its own virtual clock"""
    form = SignupForm(scorer)

    assert isinstance(form.scheduler, VirtualScheduler)
    form.scheduler.advance(1.0)
    assert form.password_message.value == "Password must not be empty"
    form.dispose()
