"""
Account Name Normalization Module

Canonicalizes account holder names into the form banks return them in:
uppercase ASCII letters and single spaces, no Vietnamese diacritics.
Also provides a tolerant comparison between a user-entered name and a
bank-returned name.
"""

import re
import unicodedata
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional


_NON_LETTER = re.compile(r"[^A-Z\s]")
_WHITESPACE = re.compile(r"\s+")

# Đ does not decompose under NFD, map it explicitly
_D_STROKE = str.maketrans({"Đ": "D", "đ": "D"})

MATCH_THRESHOLD = 60


def normalize_account_name(name: Optional[str]) -> str:
    """
    Normalize a free-form account name.

    Steps, in order: uppercase, NFD decomposition, strip combining marks,
    map Đ to D, drop anything that is not A-Z or whitespace, collapse
    whitespace, trim. Idempotent and total.

    Example:
        >>> normalize_account_name("Nguyễn Văn  Đức!")
        'NGUYEN VAN DUC'
    """
    if not name:
        return ""

    text = unicodedata.normalize("NFD", name.upper())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.translate(_D_STROKE)
    text = _NON_LETTER.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


@dataclass(frozen=True)
class NameMatch:
    """Result of comparing two account names"""
    match: bool
    confidence: int  # 0-100


def compare_account_names(input_name: Optional[str], bank_name: Optional[str]) -> NameMatch:
    """
    Compare a user-entered name against a bank-returned name.

    Exact match after normalization scores 100, containment scores 80,
    otherwise the share of matching words (longer than one letter) is used
    and anything at or above 60 counts as a match.
    """
    normalized_input = normalize_account_name(input_name)
    normalized_bank = normalize_account_name(bank_name)

    if not normalized_input or not normalized_bank:
        return NameMatch(False, 0)

    if normalized_input == normalized_bank:
        return NameMatch(True, 100)

    if normalized_input in normalized_bank or normalized_bank in normalized_input:
        return NameMatch(True, 80)

    input_words = [w for w in normalized_input.split(" ") if len(w) > 1]
    bank_words = [w for w in normalized_bank.split(" ") if len(w) > 1]

    total_words = max(len(input_words), len(bank_words))
    if total_words == 0:
        return NameMatch(False, 0)

    matching_words = sum(
        1 for word in input_words
        if any(word in bank_word or bank_word in word for bank_word in bank_words)
    )

    ratio = Decimal(matching_words * 100) / Decimal(total_words)
    confidence = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return NameMatch(confidence >= MATCH_THRESHOLD, confidence)
