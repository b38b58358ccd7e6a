"""
VietQR Payload Module

Builds EMV merchant-presented QR payloads for VietQR bank transfers.
Every field is TAG(2) + LENGTH(2, decimal) + VALUE, nested templates are
encoded the same way, and the payload ends with tag 63 carrying a
CRC16-CCITT checksum over everything before it (including "6304").

Design Decisions:
- Lengths count characters of the value; anything over 99 cannot be
  expressed in two digits and is rejected instead of truncated
- The checksum is computed last, over the literal "6304" prefix, so a
  payload is never returned with a placeholder trailer
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .banks import BankDefinition, BankRegistry, default_registry


logger = logging.getLogger("vietqr.payload")

# Root tags
TAG_PAYLOAD_FORMAT = "00"
TAG_INITIATION_METHOD = "01"
TAG_MERCHANT_ACCOUNT = "38"
TAG_CURRENCY = "53"
TAG_AMOUNT = "54"
TAG_COUNTRY = "58"
TAG_ADDITIONAL_DATA = "62"
TAG_CRC = "63"

# Tag 38 sub-tags
SUBTAG_GUID = "00"
SUBTAG_BANK_BIN = "01"
SUBTAG_ACCOUNT_NUMBER = "02"

# Tag 62 sub-tags
SUBTAG_PURPOSE = "08"

PAYLOAD_FORMAT_VERSION = "01"
STATIC_QR_METHOD = "11"
VIETQR_GUID = "A000000727"
CURRENCY_VND = "704"
COUNTRY_VN = "VN"
DEFAULT_DESCRIPTION = "Thanh toan hoa don"

CRC_PREFIX = TAG_CRC + "04"
MAX_FIELD_LENGTH = 99

CRC16_INITIAL = 0xFFFF
CRC16_POLYNOMIAL = 0x1021


class EncodingPreconditionError(ValueError):
    """A caller passed a value the payload format cannot represent"""
    pass


class InvalidBankError(ValueError):
    """The bank definition is not one the registry knows"""
    pass


def format_field(tag: str, value: str) -> str:
    """Encode a single TLV field"""
    if not isinstance(value, str):
        raise EncodingPreconditionError(f"Tag {tag} value must be a string, got {type(value).__name__}")
    if len(value) > MAX_FIELD_LENGTH:
        raise EncodingPreconditionError(
            f"Tag {tag} value is {len(value)} characters, maximum is {MAX_FIELD_LENGTH}"
        )
    return f"{tag}{len(value):02d}{value}"


def crc16_ccitt(data: Union[str, bytes]) -> str:
    """
    CRC16-CCITT (FALSE variant) as 4 uppercase hex digits.

    Initial register 0xFFFF, polynomial 0x1021, MSB first, no reflection,
    no final XOR. Strings are processed one character at a time using the
    low byte of each code point.

    Example:
        >>> crc16_ccitt("123456789")
        '29B1'
    """
    if isinstance(data, str):
        codes = (ord(ch) & 0xFF for ch in data)
    elif isinstance(data, (bytes, bytearray)):
        codes = iter(data)
    else:
        raise EncodingPreconditionError(f"CRC input must be str or bytes, got {type(data).__name__}")

    crc = CRC16_INITIAL
    for code in codes:
        crc ^= code << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ CRC16_POLYNOMIAL) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF

    return f"{crc:04X}"


def invoice_description(invoice_number: Optional[str] = None) -> str:
    """Default transfer description for an invoice"""
    if invoice_number:
        return f"{DEFAULT_DESCRIPTION} {invoice_number}"
    return DEFAULT_DESCRIPTION


@dataclass(frozen=True)
class EncodedPayload:
    """A finished payload and its checksum"""
    payload: str
    crc: str

    @property
    def length(self) -> int:
        return len(self.payload)


class PayloadEncoder:
    """Encodes bank transfers as VietQR payload strings"""

    def __init__(self, registry: Optional[BankRegistry] = None):
        self.registry = registry or default_registry

    def encode(
        self,
        bank: BankDefinition,
        account_number: str,
        amount: Optional[str] = None,
        description: str = "",
    ) -> str:
        """
        Build the payload string for a transfer.

        Args:
            bank: Bank definition from the registry
            account_number: Beneficiary account number
            amount: Amount as a numeric string; omitted when empty so the
                payer enters it
            description: Transfer description, defaults to DEFAULT_DESCRIPTION

        Raises:
            InvalidBankError: bank is not the registry's definition
            EncodingPreconditionError: a value cannot be encoded
        """
        return self.encode_payload(bank, account_number, amount, description).payload

    def encode_payload(
        self,
        bank: BankDefinition,
        account_number: str,
        amount: Optional[str] = None,
        description: str = "",
    ) -> EncodedPayload:
        """Same as encode() but also returns the checksum separately"""
        if bank not in self.registry:
            raise InvalidBankError(f"Bank is not registered: {bank!r}")

        merchant_account = (
            format_field(SUBTAG_GUID, VIETQR_GUID)
            + format_field(SUBTAG_BANK_BIN, bank.bin)
            + format_field(SUBTAG_ACCOUNT_NUMBER, account_number)
        )
        additional_data = format_field(SUBTAG_PURPOSE, description or DEFAULT_DESCRIPTION)

        parts = [
            format_field(TAG_PAYLOAD_FORMAT, PAYLOAD_FORMAT_VERSION),
            format_field(TAG_INITIATION_METHOD, STATIC_QR_METHOD),
            format_field(TAG_MERCHANT_ACCOUNT, merchant_account),
            format_field(TAG_CURRENCY, CURRENCY_VND),
        ]
        if amount:
            parts.append(format_field(TAG_AMOUNT, amount))
        parts.append(format_field(TAG_COUNTRY, COUNTRY_VN))
        parts.append(format_field(TAG_ADDITIONAL_DATA, additional_data))

        body = "".join(parts) + CRC_PREFIX
        crc = crc16_ccitt(body)

        logger.debug(f"Encoded VietQR payload for {bank.code} ({len(body) + 4} characters)")
        return EncodedPayload(payload=body + crc, crc=crc)
