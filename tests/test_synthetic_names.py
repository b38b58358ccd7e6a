"""
Tests for the synthetic name generator
"""

from vietqr_core.synthetic_names import (
    GIVEN_POOL,
    MIDDLE_POOL,
    SURNAME_POOL,
    SyntheticNameGenerator,
    account_number_value,
)


class TestAccountNumberValue:
    """Test digit extraction"""

    def test_plain_digits(self):
        """Test digit-only input"""
        assert account_number_value("000123") == 123

    def test_ignores_non_digits(self):
        """Test separators are skipped"""
        assert account_number_value("12-34 56") == 123456

    def test_no_digits(self):
        """Test input without digits maps to zero"""
        assert account_number_value("") == 0
        assert account_number_value("abc") == 0

    def test_large_values_are_exact(self):
        """Test values beyond float precision"""
        assert account_number_value("9" * 25) == int("9" * 25)


class TestSyntheticNameGenerator:
    """Test SyntheticNameGenerator"""

    def setup_method(self):
        """Set up test fixtures"""
        self.generator = SyntheticNameGenerator()

    def test_pool_sizes(self):
        """Test pool sizes used for indexing"""
        assert len(GIVEN_POOL) == 20
        assert len(MIDDLE_POOL) == 8
        assert len(SURNAME_POOL) == 24

    def test_known_full_name(self):
        """Test full composer for VCB"""
        assert self.generator.generate("VCB", "9704360123456789") == "DO HOANG TAM"

    def test_known_short_name(self):
        """Test short composer for BIDV and Agribank"""
        assert self.generator.generate("BIDV", "9704360123456789") == "DO TAM"
        assert self.generator.generate("AGR", "9704360123456789") == "DO TAM"

    def test_zero_account(self):
        """Test first entry of every pool"""
        assert self.generator.generate("VCB", "000000") == "NGUYEN VAN AN"

    def test_unknown_bank_uses_full_name(self):
        """Test default composer"""
        assert self.generator.generate("XYZ", "11111111") == "NGO HOANG HANH"

    def test_deterministic(self):
        """Test same input, same output"""
        first = self.generator.generate("TCB", "1234567890123")
        second = SyntheticNameGenerator().generate("TCB", "1234567890123")
        assert first == second

    def test_name_parts_come_from_pools(self):
        """Test every word belongs to a pool"""
        words = self.generator.generate("ACB", "5550001234").split(" ")
        assert len(words) == 3
        assert words[0] in GIVEN_POOL
        assert words[1] in MIDDLE_POOL
        assert words[2] in SURNAME_POOL
