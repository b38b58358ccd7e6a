"""
Account Number Validation Module

Structural checks on a raw account number string. Pure functions of the input
and the static per-bank hint table; no network access.
"""

from dataclasses import dataclass
from typing import Optional

from .banks import ACCOUNT_LENGTH_HINTS, BankRegistry, default_registry


MIN_ACCOUNT_LENGTH = 6
MAX_ACCOUNT_LENGTH = 25


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an account number"""
    valid: bool
    message: str


class AccountNumberValidator:
    """
    Validates account numbers before any lookup is attempted.

    Rules are applied in order and the first failing rule wins:
    empty, too short, too long, non-digit characters. A valid result
    carries the bank's display name and its typical length as a hint.
    """

    def __init__(self, registry: Optional[BankRegistry] = None):
        self.registry = registry or default_registry

    def validate(self, account_number: Optional[str], bank_code: str) -> ValidationResult:
        """Validate an account number for the given bank"""
        if not account_number:
            return ValidationResult(False, "Missing account number")

        length = len(account_number)
        if length < MIN_ACCOUNT_LENGTH:
            return ValidationResult(
                False, f"Account number too short (minimum {MIN_ACCOUNT_LENGTH} digits)"
            )
        if length > MAX_ACCOUNT_LENGTH:
            return ValidationResult(
                False, f"Account number too long (maximum {MAX_ACCOUNT_LENGTH} digits)"
            )
        # str.isdigit() accepts superscripts and other Unicode digits
        if not (account_number.isascii() and account_number.isdigit()):
            return ValidationResult(False, "Account number must contain digits only")

        bank = self.registry.get(bank_code)
        bank_name = bank.name if bank else bank_code

        message = f"Valid {bank_name} account number ({length} digits)"
        hint = ACCOUNT_LENGTH_HINTS.get(bank_code)
        if hint:
            message += f" - {bank_name} accounts usually have {hint} digits"

        return ValidationResult(True, message)
