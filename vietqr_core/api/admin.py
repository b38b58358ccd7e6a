"""
Operational endpoints (usage counters, lookup health)
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from ..diagnostics import check_health
from .deps import PaymentServices, get_services
from .schemas import HealthReportResponse, UsageMetricsResponse


router = APIRouter()


@router.get("/metrics/usage", response_model=UsageMetricsResponse)
async def get_usage_metrics(services: PaymentServices = Depends(get_services)):
    """Today's lookup counters and derived rates"""
    return services.metrics.summary()


@router.get("/diagnostics/health", response_model=HealthReportResponse)
async def get_lookup_health(services: PaymentServices = Depends(get_services)):
    """Run a sample lookup through the provider chain"""
    report = await check_health(services.verifier)
    return HealthReportResponse(**asdict(report))
