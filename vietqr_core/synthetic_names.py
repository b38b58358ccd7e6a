"""
Synthetic Name Generator Module

Deterministic mapping from (bank, account number) to a plausible Vietnamese
account holder name. Used by the simulated provider and as the terminal
fallback when no authoritative source answers. Same input, same name.
"""

from typing import Callable, Dict, Tuple


GIVEN_POOL: Tuple[str, ...] = (
    "NGUYEN", "TRAN", "LE", "PHAM", "HOANG", "VU", "VO", "DANG", "BUI", "DO",
    "HO", "NGO", "DUONG", "LY", "TRUONG", "PHAN", "TANG", "DINH", "TO", "MAI",
)

MIDDLE_POOL: Tuple[str, ...] = (
    "VAN", "THI", "MINH", "THANH", "QUOC", "DUC", "ANH", "HOANG",
)

SURNAME_POOL: Tuple[str, ...] = (
    "AN", "BINH", "CUONG", "DUNG", "EMILE", "FIONA", "GIANG", "HANH",
    "KHANH", "LINH", "MINH", "NAM", "OAI", "PHONG", "QUAN", "RYU",
    "SON", "TAM", "UY", "VINH", "WALT", "XUAN", "YEN", "ZORO",
)

Composer = Callable[[str, str, str], str]


def _full(given: str, middle: str, surname: str) -> str:
    return f"{given} {middle} {surname}"


def _short(given: str, middle: str, surname: str) -> str:
    return f"{given} {surname}"


NAME_COMPOSERS: Dict[str, Composer] = {
    "VCB": _full,
    "BIDV": _short,
    "TCB": _full,
    "AGR": _short,
    "ACB": _full,
}

DEFAULT_COMPOSER: Composer = _full


def account_number_value(account_number: str) -> int:
    """Integer value of the digits in an account number (0 when there are none)"""
    digits = "".join(ch for ch in account_number if "0" <= ch <= "9")
    return int(digits) if digits else 0


class SyntheticNameGenerator:
    """Generates stable synthetic names from account numbers"""

    def generate(self, bank_code: str, account_number: str) -> str:
        """Generate the synthetic name for an account"""
        value = account_number_value(account_number)

        given = GIVEN_POOL[value % len(GIVEN_POOL)]
        middle = MIDDLE_POOL[(value // 100) % len(MIDDLE_POOL)]
        surname = SURNAME_POOL[(value // 10000) % len(SURNAME_POOL)]

        composer = NAME_COMPOSERS.get(bank_code, DEFAULT_COMPOSER)
        return composer(given, middle, surname)
