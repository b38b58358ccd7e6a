"""
Pydantic schemas for API requests and responses
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from ..banks import BankDefinition
from ..verifier import VerificationOutcome


class BankModel(BaseModel):
    code: str
    name: str
    bin: str
    typical_length: Optional[str] = None

    @classmethod
    def from_bank(cls, bank: BankDefinition, typical_length: Optional[str] = None) -> 'BankModel':
        return cls(code=bank.code, name=bank.name, bin=bank.bin, typical_length=typical_length)


# Account schemas
class AccountRequest(BaseModel):
    bank_code: str = Field(..., description="Bank identifier (VCB, BIDV, ...)")
    account_number: str = Field(..., description="Beneficiary account number")


class ResolveAccountRequest(AccountRequest):
    expected_name: Optional[str] = Field(None, description="Name to compare against the resolved name")


class ValidationResponse(BaseModel):
    valid: bool
    message: str


class NameMatchModel(BaseModel):
    match: bool
    confidence: int


class VerificationResponse(BaseModel):
    is_resolved: bool
    resolved_name: Optional[str] = None
    source_tier: Optional[str] = None
    is_synthetic_data: bool
    provider_latency_ms: int
    diagnostics: List[str] = []
    message: str = ""
    name_match: Optional[NameMatchModel] = None

    @classmethod
    def from_outcome(cls, outcome: VerificationOutcome,
                     name_match: Optional[NameMatchModel] = None) -> 'VerificationResponse':
        return cls(
            is_resolved=outcome.is_resolved,
            resolved_name=outcome.resolved_name,
            source_tier=outcome.source_tier.value if outcome.source_tier else None,
            is_synthetic_data=outcome.is_synthetic_data,
            provider_latency_ms=outcome.provider_latency_ms,
            diagnostics=list(outcome.diagnostics),
            message=outcome.message,
            name_match=name_match,
        )


# Payload schemas
class CreatePayloadRequest(BaseModel):
    bank_code: str
    account_number: str = Field(..., pattern=r"^\d{6,25}$")
    amount: Optional[str] = Field(None, pattern=r"^\d+(\.\d{1,2})?$", description="Amount in VND as string")
    description: Optional[str] = None
    invoice_number: Optional[str] = None


class PayloadResponse(BaseModel):
    payload: str
    crc: str
    length: int


# Operations schemas
class UsageMetricsResponse(BaseModel):
    today: Dict[str, int]
    total_calls: int
    success_rate: int
    real_data_rate: int
    status: str


class HealthReportResponse(BaseModel):
    healthy: bool
    latency_ms: int
    provider: str
    real_data: bool
    status: str
    error: Optional[str] = None
