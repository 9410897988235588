"""Password strength rules shared by registration and admin user creation."""

from collections.abc import Callable

# Checked in order; the first failing rule is reported
PASSWORD_RULES: list[tuple[Callable[[str], bool], str]] = [
    (lambda pw: any(c.isupper() for c in pw), "Password must contain at least one uppercase letter"),
    (lambda pw: any(c.islower() for c in pw), "Password must contain at least one lowercase letter"),
    (lambda pw: any(c.isdigit() for c in pw), "Password must contain at least one digit"),
    (lambda pw: pw.strip() == pw, "Password must not start or end with whitespace"),
]


def password_problems(password: str) -> list[str]:
    """Every rule message the password fails, in rule order."""
    return [message for check, message in PASSWORD_RULES if not check(password)]


def validate_password_strength(password: str) -> str:
    """Pydantic field validator body.

    Length bounds live on the schema field; this only checks character classes.

    Raises:
        ValueError: With the message of the first failed rule

    """
    problems = password_problems(password)
    if problems:
        raise ValueError(problems[0])
    return password
