"""Monthly ride passes: plan catalogue, purchase, lookup and cancellation."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable

from gocabs.domain.entities import Subscription, SubscriptionPlan, utcnow
from gocabs.domain.enums import SubscriptionStatus
from gocabs.domain.errors import ConflictError, NotFoundError
from gocabs.infrastructure.memory import SubscriptionStore

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(
        self,
        store: SubscriptionStore,
        plans: Iterable[SubscriptionPlan],
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.plans = {plan.id: plan for plan in plans}
        self._clock = clock

    def list_plans(self) -> list[SubscriptionPlan]:
        return list(self.plans.values())

    def get_active_for_user(self, user_id: int) -> Subscription:
        subscription = self._current(user_id)
        if subscription is None:
            raise NotFoundError(f"User {user_id} has no active subscription")
        return subscription

    def purchase(self, user_id: int, plan_id: int) -> Subscription:
        plan = self.plans.get(plan_id)
        if plan is None:
            raise NotFoundError(f"Subscription plan {plan_id} not found")
        if self._current(user_id) is not None:
            raise ConflictError(f"User {user_id} already has an active subscription")

        now = self._clock()
        subscription = self.store.add(
            Subscription(
                user_id=user_id,
                plan_type=plan.plan_type,
                rides_total=plan.rides_per_month,
                rides_remaining=plan.rides_per_month,
                start_date=now,
                end_date=now + timedelta(days=plan.validity_days),
                price=plan.price,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "User %s purchased %s plan (subscription %s)",
            user_id, plan.plan_type.value, subscription.id,
        )
        return subscription

    def cancel(self, subscription_id: int) -> Subscription:
        subscription = self.store.get(subscription_id)
        if subscription is None:
            raise NotFoundError(f"Subscription {subscription_id} not found")
        self._expire_if_due(subscription)
        subscription.cancel(at=self._clock())
        logger.info("Subscription %s cancelled", subscription_id)
        return subscription

    def _current(self, user_id: int):
        subscription = self.store.active_for_user(user_id)
        if subscription is not None and self._expire_if_due(subscription):
            return None
        return subscription

    def _expire_if_due(self, subscription: Subscription) -> bool:
        now = self._clock()
        if subscription.status == SubscriptionStatus.ACTIVE and subscription.end_date <= now:
            subscription.status = SubscriptionStatus.EXPIRED
            subscription.updated_at = now
            return True
        return False
