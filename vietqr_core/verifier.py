"""
Account Verification Module

Orchestrates account holder name resolution across an ordered chain of
lookup providers: primary remote lookup, simulated provider, synthetic
fallback. Every syntactically valid account number resolves to a name;
failed tiers leave a diagnostic behind instead of raising.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .banks import BankRegistry, UnknownBankError, default_registry
from .config import VietQRConfig
from .logging_config import get_logger, log_action, mask_account_number
from .metrics import ERROR, NullMetricsSink, UsageMetricsSink
from .providers import (
    DEFAULT_DELAY_MAX_MS,
    DEFAULT_DELAY_MIN_MS,
    LookupProvider,
    Resolution,
    SimulatedLookupProvider,
    SoftFailure,
    SyntheticLookupProvider,
    VietQRLookupProvider,
    uniform_delay,
)
from .synthetic_names import SyntheticNameGenerator
from .validation import AccountNumberValidator


logger = get_logger("vietqr.verifier")


class SourceTier(Enum):
    """Tier that produced a resolved name, in attempt order"""
    PRIMARY = "Primary"
    SIMULATED = "Simulated"
    SYNTHETIC = "Synthetic"


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of a single resolve call"""
    is_resolved: bool
    resolved_name: Optional[str]
    source_tier: Optional[SourceTier]
    is_synthetic_data: bool
    provider_latency_ms: int
    diagnostics: Tuple[str, ...] = ()
    message: str = ""

    @property
    def provider(self) -> str:
        """Metrics label for this outcome"""
        return self.source_tier.value if self.source_tier else ERROR


@dataclass(frozen=True)
class AccountNameLookup:
    """User-facing wrapper around a verification outcome"""
    success: bool
    account_name: Optional[str]
    message: str
    provider: str
    is_demo: bool = False
    outcome: Optional[VerificationOutcome] = None


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _delay_bounds(config: VietQRConfig) -> Tuple[int, int]:
    """Simulated delay bounds from config, defaults when they are inconsistent"""
    min_ms, max_ms = config.simulated_delay_min_ms, config.simulated_delay_max_ms
    if min_ms < 0 or max_ms < min_ms:
        logger.warning(
            f"Invalid simulated delay bounds {min_ms}-{max_ms}ms, "
            f"using {DEFAULT_DELAY_MIN_MS}-{DEFAULT_DELAY_MAX_MS}ms"
        )
        return DEFAULT_DELAY_MIN_MS, DEFAULT_DELAY_MAX_MS
    return min_ms, max_ms


class AccountVerifier:
    """
    Tiered account name resolver.

    Providers are tried in order and the first Resolution wins. The last
    provider is expected to be a SyntheticLookupProvider; when a custom
    chain is exhausted without one, the synthetic name is produced anyway.
    """

    def __init__(
        self,
        providers: Sequence[LookupProvider],
        registry: Optional[BankRegistry] = None,
        validator: Optional[AccountNumberValidator] = None,
        metrics: Optional[UsageMetricsSink] = None,
        generator: Optional[SyntheticNameGenerator] = None,
    ):
        if not providers:
            raise ValueError("At least one lookup provider is required")
        self.providers: List[LookupProvider] = list(providers)
        self.registry = registry or default_registry
        self.validator = validator or AccountNumberValidator(self.registry)
        self.metrics = metrics or NullMetricsSink()
        self.generator = generator or SyntheticNameGenerator()

    @classmethod
    def from_config(
        cls,
        config: VietQRConfig,
        registry: Optional[BankRegistry] = None,
        metrics: Optional[UsageMetricsSink] = None,
        transport=None,
        delay_policy=None,
    ) -> "AccountVerifier":
        """Build the default Primary -> Simulated -> Synthetic chain"""
        generator = SyntheticNameGenerator()
        min_ms, max_ms = _delay_bounds(config)
        primary = VietQRLookupProvider(
            url=config.lookup_url,
            client_id=config.client_id,
            api_key=config.api_key,
            timeout=config.lookup_timeout,
            transport=transport,
        )
        simulated = SimulatedLookupProvider(
            generator=generator,
            delay_policy=delay_policy or uniform_delay(min_ms, max_ms),
            max_delay=max_ms / 1000,
        )
        return cls(
            providers=[primary, simulated, SyntheticLookupProvider(generator)],
            registry=registry,
            metrics=metrics,
            generator=generator,
        )

    async def resolve(self, bank_code: str, account_number: str) -> VerificationOutcome:
        """
        Resolve the account holder name for a bank account.

        Raises:
            UnknownBankError: if bank_code is not in the registry
        """
        bank = self.registry.lookup(bank_code)
        resource = f"{bank.code}:{mask_account_number(account_number)}"

        validation = self.validator.validate(account_number, bank_code)
        if not validation.valid:
            outcome = VerificationOutcome(
                is_resolved=False,
                resolved_name=None,
                source_tier=None,
                is_synthetic_data=False,
                provider_latency_ms=0,
                diagnostics=(validation.message,),
                message=validation.message,
            )
            log_action(logger, "info", "Account number rejected", action="resolve",
                       resource=resource, extra={"reason": validation.message})
            self._record(outcome.provider)
            return outcome

        diagnostics: List[str] = []
        for provider in self.providers:
            start = time.perf_counter()
            try:
                result = await provider.attempt(bank, account_number)
            except Exception as e:
                logger.exception(f"{provider.label} provider raised for {resource}")
                result = provider.fail(f"Unexpected error ({e})")
            latency_ms = _elapsed_ms(start)

            if isinstance(result, Resolution):
                outcome = self._resolved(provider, result, latency_ms, diagnostics)
                break

            diagnostics.append(result.reason)
            logger.info(f"Tier failed for {resource}: {result.reason}")
        else:
            start = time.perf_counter()
            fallback = await SyntheticLookupProvider(self.generator).attempt(bank, account_number)
            outcome = self._resolved(SyntheticLookupProvider, fallback, _elapsed_ms(start), diagnostics)

        log_action(logger, "info", "Account name resolved", action="resolve",
                   resource=resource,
                   extra={"provider": outcome.provider,
                          "latency_ms": outcome.provider_latency_ms,
                          "failed_tiers": len(outcome.diagnostics)})
        self._record(outcome.provider)
        return outcome

    def _resolved(self, provider, result: Resolution, latency_ms: int,
                  diagnostics: List[str]) -> VerificationOutcome:
        try:
            tier = SourceTier(provider.label)
        except ValueError:
            # Custom providers count as synthetic unless they return real data
            tier = SourceTier.SYNTHETIC if result.is_synthetic else SourceTier.PRIMARY

        return VerificationOutcome(
            is_resolved=True,
            resolved_name=result.account_name,
            source_tier=tier,
            is_synthetic_data=result.is_synthetic,
            provider_latency_ms=latency_ms,
            diagnostics=tuple(diagnostics),
            message=result.message,
        )

    def _record(self, label: str) -> None:
        """Report an outcome label; a failing sink never affects the caller"""
        try:
            self.metrics.record(label)
        except Exception as e:
            logger.warning(f"Usage metrics sink failed to record {label}: {e}")

    async def lookup_account_name(self, bank_code: str, account_number: str) -> AccountNameLookup:
        """
        Resolve an account name for display.

        Never raises: an unknown bank becomes an unsuccessful result with
        provider "Error".
        """
        try:
            outcome = await self.resolve(bank_code, account_number)
        except UnknownBankError as e:
            logger.warning(f"Account name lookup rejected: {e}")
            self._record(ERROR)
            return AccountNameLookup(
                success=False,
                account_name=None,
                message="Invalid bank code",
                provider=ERROR,
            )

        if not outcome.is_resolved:
            return AccountNameLookup(
                success=False,
                account_name=None,
                message=outcome.message,
                provider=outcome.provider,
                outcome=outcome,
            )

        if outcome.is_synthetic_data:
            message = "Demo data - bank lookup is unavailable"
        else:
            message = f"Account name retrieved from {outcome.provider} lookup"

        return AccountNameLookup(
            success=True,
            account_name=outcome.resolved_name,
            message=message,
            provider=outcome.provider,
            is_demo=outcome.is_synthetic_data,
            outcome=outcome,
        )

    async def aclose(self) -> None:
        """Close every provider in the chain"""
        for provider in self.providers:
            await provider.aclose()

    async def __aenter__(self) -> "AccountVerifier":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
