"""
Account Lookup Providers Module

Provider strategies for resolving an account holder name. Each provider is
attempted at most once per lookup and reports either a Resolution or a
SoftFailure value; transport problems never escape as exceptions.

- VietQRLookupProvider: authoritative remote lookup over HTTP
- SimulatedLookupProvider: demo provider with realistic latency and a fixed
  ~25% "not found" rate keyed off the account digits
- SyntheticLookupProvider: terminal fallback, always succeeds
"""

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import httpx

from .banks import BankDefinition
from .normalizer import normalize_account_name
from .synthetic_names import SyntheticNameGenerator


logger = logging.getLogger("vietqr.providers")

DEMO_CLIENT_ID = "demo-client-id"
DEMO_API_KEY = "demo-api-key"

FOUND_CODE = "00"
NOT_FOUND_CODE = "01"

# Characters of a non-2xx response body kept in the diagnostic
ERROR_BODY_PREVIEW = 100


@dataclass(frozen=True)
class Resolution:
    """A provider produced an account name"""
    account_name: str
    is_synthetic: bool
    message: str = ""


@dataclass(frozen=True)
class SoftFailure:
    """A provider could not produce a name; the next tier should be tried"""
    reason: str


ProviderResult = Union[Resolution, SoftFailure]


class LookupProvider(ABC):
    """A single tier in the account name resolution chain"""

    label: str = "Provider"

    @abstractmethod
    async def attempt(self, bank: BankDefinition, account_number: str) -> ProviderResult:
        """Try to resolve the account holder name once"""
        pass

    def fail(self, detail: str) -> SoftFailure:
        """Soft failure tagged with this provider's label"""
        return SoftFailure(f"{self.label}: {detail}")

    async def aclose(self) -> None:
        """Release any resources held by the provider"""
        pass


class VietQRLookupProvider(LookupProvider):
    """REST client for the VietQR account lookup endpoint"""

    label = "Primary"

    def __init__(
        self,
        url: str = "https://api.vietqr.io/v2/lookup",
        client_id: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 8.0,  # bound on the whole request, cancelled on expiry
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.client_id = client_id or DEMO_CLIENT_ID
        self.api_key = api_key or DEMO_API_KEY
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, transport=transport)

    async def attempt(self, bank: BankDefinition, account_number: str) -> ProviderResult:
        headers = {
            "Content-Type": "application/json",
            "x-client-id": self.client_id,
            "x-api-key": self.api_key,
        }
        request_body = {"bin": bank.bin, "accountNumber": account_number}

        try:
            response = await asyncio.wait_for(
                self._client.post(self.url, json=request_body, headers=headers),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"VietQR lookup timed out after {self.timeout}s for {bank.code}")
            return self.fail("Request timeout")
        except httpx.HTTPError as e:
            logger.warning(f"VietQR lookup network failure for {bank.code}: {e}")
            return self.fail(f"Network error ({type(e).__name__})")

        if not 200 <= response.status_code < 300:
            body = response.text[:ERROR_BODY_PREVIEW]
            logger.warning(f"VietQR returned {response.status_code}: {body}")
            return self.fail(f"HTTP {response.status_code}: {body}")

        try:
            data = response.json()
        except ValueError:
            logger.warning("VietQR returned a non-JSON body")
            return self.fail("Unrecognized response")

        return self._classify(data)

    def _classify(self, data: Any) -> ProviderResult:
        """Map a decoded VietQR response body to a provider result"""
        if not isinstance(data, dict):
            return self.fail("Unrecognized response")

        code = data.get("code")
        desc = data.get("desc")

        if code == FOUND_CODE:
            payload = data.get("data")
            raw_name = payload.get("accountName") if isinstance(payload, dict) else None
            account_name = normalize_account_name(raw_name) if isinstance(raw_name, str) else ""
            if account_name:
                logger.info("VietQR lookup succeeded")
                return Resolution(account_name, is_synthetic=False,
                                  message="Account name retrieved from VietQR")
            return self.fail("Unrecognized response (missing account name)")

        if code == NOT_FOUND_CODE:
            return self.fail(f"Account not found ({desc})")

        return self.fail(desc or "Unknown response")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


DelayPolicy = Callable[[], float]

DEFAULT_DELAY_MIN_MS = 800
DEFAULT_DELAY_MAX_MS = 2000


def uniform_delay(min_ms: int = DEFAULT_DELAY_MIN_MS, max_ms: int = DEFAULT_DELAY_MAX_MS) -> DelayPolicy:
    """Delay policy drawing uniformly between min_ms and max_ms (returns seconds)"""
    if min_ms < 0 or max_ms < min_ms:
        raise ValueError(f"Invalid delay bounds: {min_ms}-{max_ms}ms")

    def policy() -> float:
        return random.uniform(min_ms, max_ms) / 1000

    return policy


def no_delay() -> float:
    """Delay policy for tests"""
    return 0.0


def digit_sum(account_number: str) -> int:
    """Sum of the decimal digits in an account number"""
    return sum(int(ch) for ch in account_number if "0" <= ch <= "9")


class SimulatedLookupProvider(LookupProvider):
    """
    Demo provider standing in for a real bank directory.

    Accounts whose digit sum is divisible by 4 are reported as not found,
    every other account resolves to its synthetic name. The decision depends
    only on the digits, never on timing.
    """

    label = "Simulated"

    def __init__(
        self,
        generator: Optional[SyntheticNameGenerator] = None,
        delay_policy: Optional[DelayPolicy] = None,
        max_delay: float = 2.0,  # seconds, upper bound on the simulated latency
    ):
        self.generator = generator or SyntheticNameGenerator()
        self.delay_policy = delay_policy or uniform_delay()
        self.max_delay = max_delay

    @staticmethod
    def is_known_account(account_number: str) -> bool:
        return digit_sum(account_number) % 4 != 0

    async def attempt(self, bank: BankDefinition, account_number: str) -> ProviderResult:
        delay = min(max(self.delay_policy(), 0.0), self.max_delay)
        if delay:
            await asyncio.sleep(delay)

        if not self.is_known_account(account_number):
            return self.fail("Account not found in the demo directory")

        return Resolution(
            self.generator.generate(bank.code, account_number),
            is_synthetic=True,
            message="Account name from the simulated provider (demo data)",
        )


class SyntheticLookupProvider(LookupProvider):
    """Terminal fallback, produces the synthetic name unconditionally"""

    label = "Synthetic"

    def __init__(self, generator: Optional[SyntheticNameGenerator] = None):
        self.generator = generator or SyntheticNameGenerator()

    async def attempt(self, bank: BankDefinition, account_number: str) -> ProviderResult:
        return Resolution(
            self.generator.generate(bank.code, account_number),
            is_synthetic=True,
            message="Demo data - bank lookup services are unavailable",
        )
