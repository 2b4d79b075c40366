"""
Password strength scoring for the sign-up form
"""

import re
from typing import List

from scoreboard.schemas.auth import PasswordStrengthSchema

MIN_PASSWORD_LENGTH = 8
BAR_COUNT = 4

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[^a-zA-Z0-9]")

# score -> (label, color)
_LABELS = {
    0: ("Very weak password", "red"),
    1: ("Weak password", "red"),
    2: ("Fair password", "yellow"),
    3: ("Good password", "green"),
    4: ("Strong password", "green"),
}

_BAR_COLORS = {1: "red", 2: "yellow", 3: "green", 4: "green"}


def calculate_strength(password: str) -> int:
    """One point each for length, mixed case, a digit and a special character"""
    if not password:
        return 0

    strength = 0
    if len(password) >= MIN_PASSWORD_LENGTH:
        strength += 1
    if _LOWER.search(password) and _UPPER.search(password):
        strength += 1
    if _DIGIT.search(password):
        strength += 1
    if _SPECIAL.search(password):
        strength += 1
    return strength


def bar_colors(strength: int) -> List[str]:
    return [
        _BAR_COLORS.get(strength, "gray") if index < strength else "gray"
        for index in range(BAR_COUNT)
    ]


def describe_strength(password: str) -> PasswordStrengthSchema:
    strength = calculate_strength(password)

    if not password:
        label, color = f"Password must be at least {MIN_PASSWORD_LENGTH} characters", "gray"
    else:
        label, color = _LABELS[strength]

    return PasswordStrengthSchema(
        score=strength,
        label=label,
        color=color,
        bars=bar_colors(strength)
    )
