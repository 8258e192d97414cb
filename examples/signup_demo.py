import logging

from reform import SignupForm, StrengthLevel, VirtualScheduler

logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")


# A toy strength scorer. Real applications plug in a proper estimator here.
def score(password: str) -> StrengthLevel:
    classes = sum(
        [
            any(c.islower() for c in password),
            any(c.isupper() for c in password),
            any(c.isdigit() for c in password),
            any(not c.isalnum() for c in password),
        ]
    )
    if len(password) < 6:
        return StrengthLevel.VERY_WEAK
    if len(password) < 8 or classes < 2:
        return StrengthLevel.WEAK
    if classes < 3:
        return StrengthLevel.REASONABLE
    return StrengthLevel.STRONG if len(password) < 12 else StrengthLevel.VERY_STRONG


def type_into(form: SignupForm, field: str, text: str, scheduler: VirtualScheduler) -> None:
    """Type ``text`` one character every 0.1s."""
    for i in range(1, len(text) + 1):
        setattr(form, field, text[:i])
        scheduler.advance(0.1)


def show(form: SignupForm, scheduler: VirtualScheduler) -> None:
    print(
        f"t={scheduler.now():4.1f}s  "
        f"username_message={form.username_message.value!r:46} "
        f"password_message={form.password_message.value!r:30} "
        f"is_valid={form.is_valid.value}"
    )


scheduler = VirtualScheduler()
form = SignupForm(score, scheduler=scheduler, on_sign_up=lambda s: print(f">>> Signed up {s.username}"))

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Typing a user name")
print("-" * 100)
print()

type_into(form, "username", "jo", scheduler)
show(form, scheduler)  # still inside the 0.8s window
scheduler.advance(1.0)
show(form, scheduler)  # too short

type_into(form, "username", "john", scheduler)
scheduler.advance(1.0)
show(form, scheduler)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Typing passwords")
print("-" * 100)
print()

type_into(form, "password", "secret", scheduler)
scheduler.advance(1.0)
show(form, scheduler)  # no match yet

type_into(form, "password_again", "secret", scheduler)
scheduler.advance(1.0)
show(form, scheduler)  # matches but weak

print(f"sign_up accepted: {form.sign_up()}")

form.password = "Tr0ub4dor&3"
form.password_again = "Tr0ub4dor&3"
scheduler.advance(1.0)
show(form, scheduler)

print(f"sign_up accepted: {form.sign_up()}")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Tearing down")
print("-" * 100)
print()

form.dispose()
form.username = "x"  # ignored
scheduler.advance(1.0)
show(form, scheduler)
