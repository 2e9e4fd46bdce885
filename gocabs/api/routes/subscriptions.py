"""
Subscription endpoints
======================

GET   /api/v1/subscriptions/plans           -- plan catalogue
GET   /api/v1/subscriptions/user/{user_id}  -- the user's active pass
POST  /api/v1/subscriptions/purchase        -- buy a pass
PATCH /api/v1/subscriptions/{id}/cancel     -- cancel an active pass
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from gocabs.api.dependencies import get_subscription_service
from gocabs.api.middleware import RATE_LIMIT, limiter
from gocabs.api.schemas import (
    ErrorResponse,
    SubscriptionPlanResponse,
    SubscriptionPurchaseRequest,
    SubscriptionResponse,
)
from gocabs.domain.entities import Subscription
from gocabs.services.subscriptions import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


def to_response(subscription: Subscription) -> SubscriptionResponse:
    return SubscriptionResponse(
        id=subscription.id,
        user_id=subscription.user_id,
        plan_type=subscription.plan_type.value,
        rides_total=subscription.rides_total,
        rides_remaining=subscription.rides_remaining,
        start_date=subscription.start_date,
        end_date=subscription.end_date,
        status=subscription.status.value,
        price=subscription.price,
        created_at=subscription.created_at,
        updated_at=subscription.updated_at,
    )


@router.get(
    "/plans",
    response_model=list[SubscriptionPlanResponse],
    summary="Available monthly passes",
)
@limiter.limit(RATE_LIMIT)
async def list_plans(
    request: Request,
    service: SubscriptionService = Depends(get_subscription_service),
):
    return [
        SubscriptionPlanResponse(
            id=plan.id,
            plan_type=plan.plan_type.value,
            title=plan.title,
            price=plan.price,
            rides_per_month=plan.rides_per_month,
            description=plan.description,
            features=list(plan.features),
            validity_days=plan.validity_days,
        )
        for plan in service.list_plans()
    ]


@router.get(
    "/user/{user_id}",
    response_model=SubscriptionResponse,
    summary="The user's active subscription",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMIT)
async def get_user_subscription(
    request: Request,
    user_id: int,
    service: SubscriptionService = Depends(get_subscription_service),
):
    return to_response(service.get_active_for_user(user_id))


@router.post(
    "/purchase",
    status_code=201,
    response_model=SubscriptionResponse,
    summary="Purchase a monthly pass",
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMIT)
async def purchase_subscription(
    request: Request,
    body: SubscriptionPurchaseRequest,
    service: SubscriptionService = Depends(get_subscription_service),
):
    return to_response(service.purchase(body.user_id, body.plan_id))


@router.patch(
    "/{subscription_id}/cancel",
    response_model=SubscriptionResponse,
    summary="Cancel an active subscription",
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMIT)
async def cancel_subscription(
    request: Request,
    subscription_id: int,
    service: SubscriptionService = Depends(get_subscription_service),
):
    return to_response(service.cancel(subscription_id))
