"""
Password Service

bcrypt hashing for account passwords plus the registration password policy.
The policy reports every unmet rule at once so the client can show them together.
"""

from collections.abc import Callable

import bcrypt

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72

MIN_PASSWORD_LENGTH = 12

# (requirement shown to the user, predicate over one character)
CHARACTER_RULES: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("an uppercase letter", str.isupper),
    ("a lowercase letter", str.islower),
    ("a digit", str.isdigit),
    ("a symbol", lambda ch: not ch.isalnum() and not ch.isspace()),
)


class PasswordService:
    """Hashes, verifies and vets account passwords."""

    def __init__(self, rounds: int = 12, min_length: int = MIN_PASSWORD_LENGTH):
        """
        Args:
            rounds: bcrypt cost factor (tests lower this to keep hashing fast)
            min_length: Shortest password accepted at registration
        """
        self.rounds = rounds
        self.min_length = min_length

    def hash_password(self, password: str) -> str:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """False for a wrong password and for a stored hash bcrypt cannot parse."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False

    def password_problems(self, password: str) -> list[str]:
        """
        List the policy rules a password fails, in display order.

        Returns:
            Requirement phrases such as "a digit"; empty when the password is acceptable
        """
        problems = []
        if len(password) < self.min_length:
            problems.append(f"at least {self.min_length} characters")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            problems.append(f"at most {MAX_PASSWORD_BYTES} bytes")
        problems.extend(
            requirement
            for requirement, matches in CHARACTER_RULES
            if not any(matches(ch) for ch in password)
        )
        return problems

    def validate_password_strength(self, password: str) -> tuple[bool, str]:
        """
        Check a registration password against the policy.

        Returns:
            Tuple of (is_valid, error_message), e.g.
            (False, "Password needs at least 12 characters, a digit")
        """
        problems = self.password_problems(password)
        if not problems:
            return True, ""
        return False, "Password needs " + ", ".join(problems)
