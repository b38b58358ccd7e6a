"""
Tests for the bank registry
"""

import pytest

from vietqr_core.banks import (
    ACCOUNT_LENGTH_HINTS,
    DEFAULT_BANKS,
    BankDefinition,
    BankRegistry,
    UnknownBankError,
    default_registry,
)


class TestBankDefinition:
    """Test BankDefinition validation"""

    def test_valid_definition(self):
        """Test creating a bank definition"""
        bank = BankDefinition("VCB", "Vietcombank", "970436")
        assert bank.code == "VCB"
        assert bank.name == "Vietcombank"
        assert bank.bin == "970436"

    def test_bin_must_be_six_digits(self):
        """Test BIN length and digit checks"""
        with pytest.raises(ValueError):
            BankDefinition("XYZ", "Fake", "12345")
        with pytest.raises(ValueError):
            BankDefinition("XYZ", "Fake", "97043A")

    def test_code_cannot_be_empty(self):
        """Test empty code is rejected"""
        with pytest.raises(ValueError):
            BankDefinition("", "Fake", "970436")

    def test_definition_is_immutable(self):
        """Test definitions cannot be modified"""
        bank = BankDefinition("VCB", "Vietcombank", "970436")
        with pytest.raises(AttributeError):
            bank.bin = "000000"


class TestBankRegistry:
    """Test BankRegistry lookups"""

    def setup_method(self):
        """Set up test fixtures"""
        self.registry = BankRegistry()

    def test_default_table(self):
        """Test the default table contents"""
        assert len(self.registry) == 18
        assert self.registry.lookup("VCB").bin == "970436"
        assert self.registry.lookup("BIDV").bin == "970418"
        assert self.registry.lookup("STB").name == "Sacombank"
        assert self.registry.lookup("EIB").bin == "970431"

    def test_unknown_bank_raises(self):
        """Test lookup of an unknown identifier"""
        with pytest.raises(UnknownBankError) as exc_info:
            self.registry.lookup("XYZ")

        assert exc_info.value.identifier == "XYZ"
        assert isinstance(exc_info.value, ValueError)
        assert "XYZ" in str(exc_info.value)

    def test_lookup_is_case_sensitive(self):
        """Test identifiers must match exactly"""
        with pytest.raises(UnknownBankError):
            self.registry.lookup("vcb")

    def test_get_returns_none_for_unknown(self):
        """Test get() variant"""
        assert self.registry.get("XYZ") is None
        assert self.registry.get("ACB").name == "ACB"

    def test_identifiers(self):
        """Test identifier set"""
        identifiers = self.registry.identifiers()
        assert isinstance(identifiers, set)
        assert identifiers == {bank.code for bank in DEFAULT_BANKS}

    def test_banks_in_table_order(self):
        """Test banks() keeps table order"""
        codes = [bank.code for bank in self.registry.banks()]
        assert codes[0] == "VCB"
        assert codes[-1] == "EIB"
        assert codes == [bank.code for bank in DEFAULT_BANKS]

    def test_bins_are_unique(self):
        """Test no two banks share a routing prefix"""
        bins = [bank.bin for bank in self.registry.banks()]
        assert len(bins) == len(set(bins))

    def test_contains(self):
        """Test membership by code and by definition"""
        assert "VCB" in self.registry
        assert "XYZ" not in self.registry
        assert self.registry.lookup("VCB") in self.registry
        assert BankDefinition("VCB", "Vietcombank", "970436") in self.registry
        assert BankDefinition("VCB", "Vietcombank", "970418") not in self.registry
        assert BankDefinition("XYZ", "Fake", "123456") not in self.registry

    def test_duplicate_identifiers_rejected(self):
        """Test construction fails on duplicate codes"""
        with pytest.raises(ValueError):
            BankRegistry([
                BankDefinition("VCB", "Vietcombank", "970436"),
                BankDefinition("VCB", "Other", "970418"),
            ])

    def test_custom_table(self):
        """Test a registry with a custom table"""
        registry = BankRegistry([BankDefinition("TST", "Test Bank", "123456")])
        assert len(registry) == 1
        assert registry.lookup("TST").name == "Test Bank"
        with pytest.raises(UnknownBankError):
            registry.lookup("VCB")

    def test_default_registry(self):
        """Test the module-level registry"""
        assert default_registry.identifiers() == self.registry.identifiers()

    def test_every_bank_has_length_hint(self):
        """Test hint table covers the default banks"""
        assert set(ACCOUNT_LENGTH_HINTS) == self.registry.identifiers()
