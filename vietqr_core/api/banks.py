"""
Bank directory endpoints
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from ..banks import ACCOUNT_LENGTH_HINTS, UnknownBankError
from .deps import PaymentServices, get_services
from .schemas import BankModel


router = APIRouter()


@router.get("", response_model=List[BankModel])
async def list_banks(services: PaymentServices = Depends(get_services)):
    """List supported banks in table order"""
    return [
        BankModel.from_bank(bank, ACCOUNT_LENGTH_HINTS.get(bank.code))
        for bank in services.registry.banks()
    ]


@router.get("/{code}", response_model=BankModel)
async def get_bank(code: str, services: PaymentServices = Depends(get_services)):
    """Get a single bank"""
    try:
        bank = services.registry.lookup(code)
    except UnknownBankError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return BankModel.from_bank(bank, ACCOUNT_LENGTH_HINTS.get(bank.code))
