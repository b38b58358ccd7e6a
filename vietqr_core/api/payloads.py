"""
VietQR payload endpoints
"""

from fastapi import APIRouter, Depends, HTTPException

from ..banks import UnknownBankError
from ..logging_config import get_logger
from ..payload import EncodingPreconditionError, InvalidBankError, invoice_description
from .deps import PaymentServices, get_services
from .schemas import CreatePayloadRequest, PayloadResponse


logger = get_logger("vietqr.api")

router = APIRouter()


@router.post("", response_model=PayloadResponse, status_code=201)
async def create_payload(request: CreatePayloadRequest,
                         services: PaymentServices = Depends(get_services)):
    """Encode a transfer as a VietQR payload string"""
    try:
        bank = services.registry.lookup(request.bank_code)
    except UnknownBankError as e:
        raise HTTPException(status_code=404, detail=str(e))

    description = request.description or invoice_description(request.invoice_number)

    try:
        encoded = services.encoder.encode_payload(
            bank, request.account_number, request.amount, description
        )
    except (EncodingPreconditionError, InvalidBankError) as e:
        logger.warning(f"Payload rejected for {bank.code}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return PayloadResponse(payload=encoded.payload, crc=encoded.crc, length=encoded.length)
