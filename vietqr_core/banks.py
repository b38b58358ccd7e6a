"""
Bank Registry Module

Static table of Vietnamese banks participating in the NAPAS/VietQR scheme.
Each bank is identified by a short code and carries its display name and
6-digit routing prefix (BIN). The registry is built once and is read-only.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Union


BIN_LENGTH = 6


class UnknownBankError(ValueError):
    """Raised when a bank identifier is not present in the registry"""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Unknown bank identifier: {identifier!r}")


@dataclass(frozen=True)
class BankDefinition:
    """A bank participating in VietQR transfers"""
    code: str  # short identifier, e.g. "VCB"
    name: str  # display name, e.g. "Vietcombank"
    bin: str   # routing prefix, fixed 6 digits

    def __post_init__(self):
        if not self.code:
            raise ValueError("Bank code cannot be empty")
        if len(self.bin) != BIN_LENGTH or not self.bin.isdigit():
            raise ValueError(f"Bank {self.code} BIN must be {BIN_LENGTH} digits, got {self.bin!r}")


DEFAULT_BANKS = (
    BankDefinition("VCB", "Vietcombank", "970436"),
    BankDefinition("BIDV", "BIDV", "970418"),
    BankDefinition("CTG", "VietinBank", "970415"),
    BankDefinition("AGR", "Agribank", "970405"),
    BankDefinition("ACB", "ACB", "970416"),
    BankDefinition("TCB", "Techcombank", "970407"),
    BankDefinition("MBB", "MBBank", "970422"),
    BankDefinition("VPB", "VPBank", "970432"),
    BankDefinition("TPB", "TPBank", "970423"),
    BankDefinition("SHB", "SHB", "970443"),
    BankDefinition("HDB", "HDBank", "970437"),
    BankDefinition("VIB", "VIB", "970441"),
    BankDefinition("MSB", "MSB", "970426"),
    BankDefinition("OCB", "OCB", "970448"),
    BankDefinition("SEAB", "SeABank", "970440"),
    BankDefinition("LPB", "LienVietPostBank", "970449"),
    BankDefinition("STB", "Sacombank", "970403"),
    BankDefinition("EIB", "Eximbank", "970431"),
)

# Typical account number lengths per bank. Advisory only, never used to reject input.
ACCOUNT_LENGTH_HINTS: Dict[str, str] = {
    "VCB": "13-14",
    "BIDV": "12-13",
    "CTG": "12-14",
    "AGR": "12-13",
    "ACB": "10-12",
    "TCB": "12-19",
    "MBB": "12-13",
    "VPB": "12-13",
    "TPB": "10-12",
    "SHB": "10-12",
    "HDB": "10-12",
    "VIB": "10-12",
    "MSB": "12-13",
    "OCB": "12-14",
    "SEAB": "10-12",
    "LPB": "10-12",
    "STB": "10-13",
    "EIB": "12-13",
}


class BankRegistry:
    """Read-only lookup table of bank definitions keyed by code"""

    def __init__(self, banks: Iterable[BankDefinition] = DEFAULT_BANKS):
        self._banks: Dict[str, BankDefinition] = {}
        for bank in banks:
            if bank.code in self._banks:
                raise ValueError(f"Duplicate bank identifier: {bank.code}")
            self._banks[bank.code] = bank

    def lookup(self, identifier: str) -> BankDefinition:
        """Get a bank definition, raising UnknownBankError when absent"""
        bank = self._banks.get(identifier)
        if bank is None:
            raise UnknownBankError(identifier)
        return bank

    def get(self, identifier: str) -> Optional[BankDefinition]:
        """Get a bank definition or None"""
        return self._banks.get(identifier)

    def identifiers(self) -> Set[str]:
        """All bank identifiers in the registry"""
        return set(self._banks)

    def banks(self) -> List[BankDefinition]:
        """All bank definitions in table order"""
        return list(self._banks.values())

    def __contains__(self, item: Union[str, BankDefinition]) -> bool:
        if isinstance(item, BankDefinition):
            return self._banks.get(item.code) == item
        return item in self._banks

    def __len__(self) -> int:
        return len(self._banks)


default_registry = BankRegistry()
