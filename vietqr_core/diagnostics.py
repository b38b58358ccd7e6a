"""
Lookup Diagnostics Module

Health and connectivity probes for the account lookup chain. A probe runs a
real resolve against a sample account and reports which tiers answered.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .logging_config import get_logger, log_action, mask_account_number
from .normalizer import NameMatch, compare_account_names
from .verifier import AccountVerifier, SourceTier


logger = get_logger("vietqr.diagnostics")


SAMPLE_BANK = "VCB"
SAMPLE_ACCOUNT = "1234567890123"

FAST_LATENCY_MS = 3000
NORMAL_LATENCY_MS = 8000


@dataclass
class HealthReport:
    """Result of a single health probe"""
    healthy: bool
    latency_ms: int
    provider: str
    real_data: bool
    status: str  # fast, normal, slow or failed
    error: Optional[str] = None


@dataclass
class TierStatus:
    """What a probe learned about one tier"""
    status: str = "unknown"  # working, failed, unknown
    diagnostics: List[str] = field(default_factory=list)


def latency_status(latency_ms: int) -> str:
    if latency_ms < FAST_LATENCY_MS:
        return "fast"
    if latency_ms < NORMAL_LATENCY_MS:
        return "normal"
    return "slow"


async def check_health(verifier: AccountVerifier, bank_code: str = SAMPLE_BANK,
                       account_number: str = SAMPLE_ACCOUNT) -> HealthReport:
    """Resolve a sample account and classify the round trip"""
    start = time.perf_counter()
    try:
        outcome = await verifier.resolve(bank_code, account_number)
    except ValueError as e:
        return HealthReport(
            healthy=False,
            latency_ms=int((time.perf_counter() - start) * 1000),
            provider="Error",
            real_data=False,
            status="failed",
            error=str(e),
        )

    latency_ms = int((time.perf_counter() - start) * 1000)
    return HealthReport(
        healthy=outcome.is_resolved,
        latency_ms=latency_ms,
        provider=outcome.provider,
        real_data=outcome.is_resolved and not outcome.is_synthetic_data,
        status=latency_status(latency_ms),
    )


async def probe_providers(verifier: AccountVerifier, bank_code: str = SAMPLE_BANK,
                          account_number: str = SAMPLE_ACCOUNT) -> Dict[str, TierStatus]:
    """
    Report per-tier status from one resolve.

    The tier that answered is "working", every tier with a diagnostic is
    "failed", tiers that were never reached stay "unknown". The synthetic
    tier cannot fail.
    """
    report = {tier.value: TierStatus() for tier in SourceTier}
    report[SourceTier.SYNTHETIC.value].status = "working"

    outcome = await verifier.resolve(bank_code, account_number)

    if not outcome.is_resolved:
        for tier in (SourceTier.PRIMARY, SourceTier.SIMULATED):
            report[tier.value].status = "failed"
            report[tier.value].diagnostics.extend(outcome.diagnostics)
        return report

    for message in outcome.diagnostics:
        label = message.split(":", 1)[0]
        if label in report:
            report[label].status = "failed"
            report[label].diagnostics.append(message)

    report[outcome.provider].status = "working"
    return report


@dataclass(frozen=True)
class SampleAccount:
    """Account used by the multi-account check"""
    bank_code: str
    account_number: str
    expected_name: Optional[str] = None


SAMPLE_ACCOUNTS: Tuple[SampleAccount, ...] = (
    SampleAccount("VCB", "9704360123456789", "NGUYEN VAN A"),
    SampleAccount("BIDV", "9704180987654321", "TRAN THI B"),
    SampleAccount("TCB", "9704071122334455", "LE VAN C"),
)

# Share of real-data answers a benchmark needs to count as reliable
RELIABLE_SUCCESS_SHARE = 0.8


@dataclass
class AccountCheck:
    """Result of looking up one sample account"""
    bank_code: str
    bank_name: Optional[str]
    account_number: str
    account_name: Optional[str]
    expected_name: Optional[str]
    success: bool
    is_demo: bool
    provider: str
    latency_ms: int
    message: str
    name_match: Optional[NameMatch] = None


@dataclass
class BenchmarkReport:
    """Latency and real-data figures over repeated lookups"""
    iterations: int
    success_count: int
    success_rate: int
    avg_latency_ms: int
    min_latency_ms: int
    max_latency_ms: int
    provider: Optional[str]
    reliable: bool


async def check_accounts(verifier: AccountVerifier,
                         accounts: Sequence[SampleAccount] = SAMPLE_ACCOUNTS,
                         pause: float = 1.0) -> List[AccountCheck]:
    """
    Look up each sample account in turn.

    Lookups never raise here; an unknown bank shows up as an unsuccessful
    check. `pause` seconds are awaited between lookups to stay under the
    lookup service's rate limit.
    """
    results = []
    for index, account in enumerate(accounts):
        if index and pause:
            await asyncio.sleep(pause)

        start = time.perf_counter()
        lookup = await verifier.lookup_account_name(account.bank_code, account.account_number)
        latency_ms = int((time.perf_counter() - start) * 1000)

        bank = verifier.registry.get(account.bank_code)
        name_match = None
        if account.expected_name and lookup.account_name:
            name_match = compare_account_names(account.expected_name, lookup.account_name)

        results.append(AccountCheck(
            bank_code=account.bank_code,
            bank_name=bank.name if bank else None,
            account_number=account.account_number,
            account_name=lookup.account_name,
            expected_name=account.expected_name,
            success=lookup.success,
            is_demo=lookup.is_demo,
            provider=lookup.provider,
            latency_ms=latency_ms,
            message=lookup.message,
            name_match=name_match,
        ))

    logger.info(f"Checked {len(results)} sample accounts, "
                f"{sum(1 for r in results if r.success)} resolved")
    return results


async def benchmark_lookups(verifier: AccountVerifier, bank_code: str = SAMPLE_BANK,
                            account_number: str = "9704360123456789",
                            iterations: int = 5, pause: float = 0.5) -> BenchmarkReport:
    """
    Resolve the same account repeatedly and summarize latency.

    Only answers carrying real (non-synthetic) data count as successes.

    Raises:
        ValueError: if iterations is less than 1
        UnknownBankError: if bank_code is not in the registry
    """
    if iterations < 1:
        raise ValueError(f"iterations must be at least 1, got {iterations}")
    verifier.registry.lookup(bank_code)

    latencies: List[int] = []
    success_count = 0
    provider = None

    for index in range(iterations):
        if index and pause:
            await asyncio.sleep(pause)

        start = time.perf_counter()
        outcome = await verifier.resolve(bank_code, account_number)
        latencies.append(int((time.perf_counter() - start) * 1000))

        if outcome.is_resolved and not outcome.is_synthetic_data:
            success_count += 1
            provider = outcome.provider

    report = BenchmarkReport(
        iterations=iterations,
        success_count=success_count,
        success_rate=round(success_count * 100 / iterations),
        avg_latency_ms=round(sum(latencies) / len(latencies)),
        min_latency_ms=min(latencies),
        max_latency_ms=max(latencies),
        provider=provider,
        reliable=success_count >= iterations * RELIABLE_SUCCESS_SHARE,
    )
    log_action(logger, "info", "Lookup benchmark finished", action="benchmark",
               resource=f"{bank_code}:{mask_account_number(account_number)}",
               extra={"success_rate": report.success_rate, "avg_latency_ms": report.avg_latency_ms})
    return report
