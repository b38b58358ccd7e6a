"""
Account validation and name resolution endpoints
"""

from fastapi import APIRouter, Depends, HTTPException

from ..banks import UnknownBankError
from ..normalizer import compare_account_names
from .deps import PaymentServices, get_services
from .schemas import (
    AccountRequest, NameMatchModel, ResolveAccountRequest,
    ValidationResponse, VerificationResponse,
)


router = APIRouter()


@router.post("/validate", response_model=ValidationResponse)
async def validate_account(request: AccountRequest,
                           services: PaymentServices = Depends(get_services)):
    """Structural validation of an account number, no lookup"""
    result = services.validator.validate(request.account_number, request.bank_code)
    return ValidationResponse(valid=result.valid, message=result.message)


@router.post("/resolve", response_model=VerificationResponse)
async def resolve_account(request: ResolveAccountRequest,
                          services: PaymentServices = Depends(get_services)):
    """Resolve the account holder name through the provider chain"""
    try:
        outcome = await services.verifier.resolve(request.bank_code, request.account_number)
    except UnknownBankError as e:
        raise HTTPException(status_code=404, detail=str(e))

    name_match = None
    if request.expected_name and outcome.resolved_name:
        match = compare_account_names(request.expected_name, outcome.resolved_name)
        name_match = NameMatchModel(match=match.match, confidence=match.confidence)

    return VerificationResponse.from_outcome(outcome, name_match)
