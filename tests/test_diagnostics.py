"""
Tests for lookup health checks and provider probes
"""

import httpx
import pytest

from vietqr_core.banks import UnknownBankError
from vietqr_core.config import VietQRConfig
from vietqr_core.diagnostics import (
    SAMPLE_ACCOUNT,
    SAMPLE_ACCOUNTS,
    SAMPLE_BANK,
    SampleAccount,
    benchmark_lookups,
    check_accounts,
    check_health,
    latency_status,
    probe_providers,
)
from vietqr_core.metrics import InMemoryUsageMetrics
from vietqr_core.normalizer import NameMatch
from vietqr_core.providers import no_delay
from vietqr_core.verifier import AccountVerifier


# Configure pytest-asyncio
pytest_plugins = ('pytest_asyncio',)


def build_verifier(handler, metrics=None):
    return AccountVerifier.from_config(
        VietQRConfig(),
        metrics=metrics,
        transport=httpx.MockTransport(handler),
        delay_policy=no_delay,
    )


def found_handler(request):
    return httpx.Response(200, json={"code": "00", "data": {"accountName": "NGUYEN VAN A"}})


def error_handler(request):
    return httpx.Response(503, text="Service Unavailable")


class TestLatencyStatus:
    """Test latency classification"""

    def test_bands(self):
        assert latency_status(0) == "fast"
        assert latency_status(2999) == "fast"
        assert latency_status(3000) == "normal"
        assert latency_status(7999) == "normal"
        assert latency_status(8000) == "slow"


class TestCheckHealth:
    """Test check_health"""

    @pytest.mark.asyncio
    async def test_real_data(self):
        """Test a healthy primary provider"""
        async with build_verifier(found_handler) as verifier:
            report = await check_health(verifier)

        assert report.healthy is True
        assert report.provider == "Primary"
        assert report.real_data is True
        assert report.status == "fast"
        assert report.error is None

    @pytest.mark.asyncio
    async def test_fallback_data(self):
        """Test health when only the simulated provider answers"""
        async with build_verifier(error_handler) as verifier:
            report = await check_health(verifier)

        # Sample account digit sum is 51, known to the simulated provider
        assert report.healthy is True
        assert report.provider == "Simulated"
        assert report.real_data is False

    @pytest.mark.asyncio
    async def test_unknown_bank(self):
        """Test probe with a bad bank code"""
        async with build_verifier(found_handler) as verifier:
            report = await check_health(verifier, bank_code="XYZ")

        assert report.healthy is False
        assert report.provider == "Error"
        assert report.status == "failed"
        assert "XYZ" in report.error

    @pytest.mark.asyncio
    async def test_records_one_lookup(self):
        """Test a health check counts as a single lookup"""
        metrics = InMemoryUsageMetrics()
        async with build_verifier(found_handler, metrics) as verifier:
            await check_health(verifier)

        assert metrics.today_stats().requests == 1
        assert metrics.today_stats().primary == 1


class TestProbeProviders:
    """Test probe_providers"""

    def test_sample_defaults(self):
        assert SAMPLE_BANK == "VCB"
        assert SAMPLE_ACCOUNT == "1234567890123"

    @pytest.mark.asyncio
    async def test_primary_working(self):
        """Test simulated tier is never reached"""
        async with build_verifier(found_handler) as verifier:
            report = await probe_providers(verifier)

        assert report["Primary"].status == "working"
        assert report["Simulated"].status == "unknown"
        assert report["Synthetic"].status == "working"

    @pytest.mark.asyncio
    async def test_primary_failed(self):
        """Test a failing primary is reported with its diagnostic"""
        async with build_verifier(error_handler) as verifier:
            report = await probe_providers(verifier)

        assert report["Primary"].status == "failed"
        assert report["Primary"].diagnostics == ["Primary: HTTP 503: Service Unavailable"]
        assert report["Simulated"].status == "working"

    @pytest.mark.asyncio
    async def test_all_failed(self):
        """Test both upstream tiers failing"""
        async with build_verifier(error_handler) as verifier:
            report = await probe_providers(verifier, account_number="000000")

        assert report["Primary"].status == "failed"
        assert report["Simulated"].status == "failed"
        assert report["Synthetic"].status == "working"
        assert report["Synthetic"].diagnostics == []

    @pytest.mark.asyncio
    async def test_invalid_sample(self):
        """Test an invalid sample account"""
        async with build_verifier(found_handler) as verifier:
            report = await probe_providers(verifier, account_number="123")

        assert report["Primary"].status == "failed"
        assert report["Simulated"].status == "failed"
        assert report["Primary"].diagnostics == ["Account number too short (minimum 6 digits)"]


class TestCheckAccounts:
    """Test check_accounts"""

    @pytest.mark.asyncio
    async def test_default_samples(self):
        """Test every sample account is looked up"""
        async with build_verifier(found_handler) as verifier:
            results = await check_accounts(verifier, pause=0)

        assert [r.bank_code for r in results] == [a.bank_code for a in SAMPLE_ACCOUNTS]
        assert all(r.success for r in results)
        assert all(r.provider == "Primary" for r in results)
        assert results[0].bank_name == "Vietcombank"
        assert results[0].account_name == "NGUYEN VAN A"
        assert results[0].name_match == NameMatch(True, 100)
        assert results[1].name_match.match is False

    @pytest.mark.asyncio
    async def test_unknown_bank_is_reported(self):
        """Test a bad sample does not stop the run"""
        accounts = [SampleAccount("XYZ", "1234567890"), SampleAccount("VCB", "000000")]
        async with build_verifier(error_handler) as verifier:
            results = await check_accounts(verifier, accounts, pause=0)

        assert results[0].success is False
        assert results[0].provider == "Error"
        assert results[0].bank_name is None
        assert results[1].success is True
        assert results[1].is_demo is True
        assert results[1].name_match is None


class TestBenchmarkLookups:
    """Test benchmark_lookups"""

    @pytest.mark.asyncio
    async def test_real_data(self):
        """Test a reliable primary provider"""
        async with build_verifier(found_handler) as verifier:
            report = await benchmark_lookups(verifier, iterations=3, pause=0)

        assert report.iterations == 3
        assert report.success_count == 3
        assert report.success_rate == 100
        assert report.provider == "Primary"
        assert report.reliable is True
        assert report.min_latency_ms <= report.avg_latency_ms <= report.max_latency_ms

    @pytest.mark.asyncio
    async def test_demo_data_is_not_success(self):
        """Test fallback answers do not count"""
        async with build_verifier(error_handler) as verifier:
            report = await benchmark_lookups(verifier, iterations=2, pause=0)

        assert report.success_count == 0
        assert report.success_rate == 0
        assert report.provider is None
        assert report.reliable is False

    @pytest.mark.asyncio
    async def test_invalid_arguments(self):
        """Test bad iteration counts and bank codes"""
        async with build_verifier(found_handler) as verifier:
            with pytest.raises(ValueError):
                await benchmark_lookups(verifier, iterations=0)
            with pytest.raises(UnknownBankError):
                await benchmark_lookups(verifier, bank_code="XYZ", pause=0)
