"""
Service container and FastAPI dependencies
"""

from typing import Optional

from ..banks import BankRegistry
from ..config import VietQRConfig, get_config
from ..metrics import InMemoryUsageMetrics
from ..payload import PayloadEncoder
from ..validation import AccountNumberValidator
from ..verifier import AccountVerifier


class PaymentServices:
    """Lookup and payload components wired from configuration"""

    def __init__(self, config: Optional[VietQRConfig] = None,
                 verifier: Optional[AccountVerifier] = None,
                 metrics: Optional[InMemoryUsageMetrics] = None):
        self.config = config or get_config()
        self.registry = BankRegistry()
        self.metrics = metrics or InMemoryUsageMetrics()
        self.validator = AccountNumberValidator(self.registry)
        self.encoder = PayloadEncoder(self.registry)
        self.verifier = verifier or AccountVerifier.from_config(
            self.config, registry=self.registry, metrics=self.metrics
        )

    async def aclose(self) -> None:
        await self.verifier.aclose()


_services: Optional[PaymentServices] = None


def get_services() -> PaymentServices:
    """Dependency returning the process-wide services, created on first use"""
    global _services
    if _services is None:
        _services = PaymentServices()
    return _services


async def close_services() -> None:
    """Release the process-wide services if they were ever created"""
    global _services
    if _services is not None:
        await _services.aclose()
        _services = None
