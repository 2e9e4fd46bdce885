"""
Negotiation endpoints
=====================

POST  /api/v1/negotiations                     -- rider opens a negotiation
GET   /api/v1/negotiations/ride/{ride_id}      -- history for a ride
GET   /api/v1/negotiations/{id}                -- one negotiation
PATCH /api/v1/negotiations/{id}/respond        -- driver accepts / rejects / counters
PATCH /api/v1/negotiations/{id}/accept-counter -- rider accepts the counter-offer
PATCH /api/v1/negotiations/{id}/reject-counter -- rider rejects the counter-offer
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from gocabs.api.dependencies import get_negotiation_service
from gocabs.api.middleware import RATE_LIMIT, limiter
from gocabs.api.schemas import (
    ErrorResponse,
    NegotiationCreateRequest,
    NegotiationRespondRequest,
    NegotiationResponse,
)
from gocabs.domain.entities import Negotiation
from gocabs.services.negotiations import NegotiationService

router = APIRouter(prefix="/negotiations", tags=["negotiations"])

_CONFLICT = {409: {"model": ErrorResponse}}
_INVALID = {400: {"model": ErrorResponse}}
_MISSING = {404: {"model": ErrorResponse}}


def to_response(negotiation: Negotiation) -> NegotiationResponse:
    return NegotiationResponse(
        id=negotiation.id,
        ride_id=negotiation.ride_id,
        rider_id=negotiation.rider_id,
        driver_id=negotiation.driver_id,
        rider_offer=negotiation.rider_offer,
        driver_counter_offer=negotiation.driver_counter_offer,
        agreed_fare=negotiation.agreed_fare,
        status=negotiation.status.value,
        created_at=negotiation.created_at,
        updated_at=negotiation.updated_at,
    )


@router.post(
    "",
    status_code=201,
    response_model=NegotiationResponse,
    summary="Open a fare negotiation",
    responses={**_CONFLICT, **_INVALID},
)
@limiter.limit(RATE_LIMIT)
async def create_negotiation(
    request: Request,
    body: NegotiationCreateRequest,
    service: NegotiationService = Depends(get_negotiation_service),
):
    negotiation = await service.create_negotiation(
        ride_id=body.ride_id,
        rider_id=body.rider_id,
        offer_amount=body.rider_offer,
        estimated_fare=body.estimated_fare,
    )
    return to_response(negotiation)


@router.get(
    "/ride/{ride_id}",
    response_model=list[NegotiationResponse],
    summary="Negotiation history for a ride, oldest first",
)
@limiter.limit(RATE_LIMIT)
async def get_ride_negotiations(
    request: Request,
    ride_id: str,
    service: NegotiationService = Depends(get_negotiation_service),
):
    return [to_response(n) for n in await service.get_negotiations_for_ride(ride_id)]


@router.get(
    "/{negotiation_id}",
    response_model=NegotiationResponse,
    summary="Get one negotiation",
    responses=_MISSING,
)
@limiter.limit(RATE_LIMIT)
async def get_negotiation(
    request: Request,
    negotiation_id: int,
    service: NegotiationService = Depends(get_negotiation_service),
):
    return to_response(await service.get_negotiation(negotiation_id))


@router.patch(
    "/{negotiation_id}/respond",
    response_model=NegotiationResponse,
    summary="Driver response to a pending offer",
    description=(
        "Accepts, rejects or counters a pending negotiation. "
        "A counter requires ``counter_offer``."
    ),
    responses={**_CONFLICT, **_INVALID, **_MISSING},
)
@limiter.limit(RATE_LIMIT)
async def respond_to_negotiation(
    request: Request,
    negotiation_id: int,
    body: NegotiationRespondRequest,
    service: NegotiationService = Depends(get_negotiation_service),
):
    negotiation = await service.respond(
        negotiation_id,
        driver_id=body.driver_id,
        decision=body.decision,
        counter_offer=body.counter_offer,
    )
    return to_response(negotiation)


@router.patch(
    "/{negotiation_id}/accept-counter",
    response_model=NegotiationResponse,
    summary="Rider accepts the driver's counter-offer",
    responses={**_CONFLICT, **_MISSING},
)
@limiter.limit(RATE_LIMIT)
async def accept_counter_offer(
    request: Request,
    negotiation_id: int,
    service: NegotiationService = Depends(get_negotiation_service),
):
    return to_response(await service.accept_counter_offer(negotiation_id))


@router.patch(
    "/{negotiation_id}/reject-counter",
    response_model=NegotiationResponse,
    summary="Rider rejects the driver's counter-offer",
    responses={**_CONFLICT, **_MISSING},
)
@limiter.limit(RATE_LIMIT)
async def reject_counter_offer(
    request: Request,
    negotiation_id: int,
    service: NegotiationService = Depends(get_negotiation_service),
):
    return to_response(await service.reject_counter_offer(negotiation_id))
