"""Endpoints regarding subscriptions."""

from enum import Enum
from typing import Annotated, ClassVar

from pydantic import BaseModel, Field

from helix_sdk.request import HelixRequest, Repeated, Scalar
from helix_sdk.scopes import Scope, ScopeId


class SubscriptionTier(str, Enum):
    TIER_1 = "1000"
    TIER_2 = "2000"
    TIER_3 = "3000"
    PRIME = "Prime"


class UserSubscription(BaseModel):
    """A user's subscription to a broadcaster."""

    broadcaster_id: str
    broadcaster_login: str
    broadcaster_name: str
    is_gift: bool
    # Only set when is_gift is true.
    gifter_login: str | None = None
    gifter_name: str | None = None
    tier: SubscriptionTier


class CheckUserSubscriptionRequest(HelixRequest):
    """Checks if a specific user is subscribed to a specific channel.

    `check-user-subscription <https://dev.twitch.tv/docs/api/reference#check-user-subscription>`_
    """

    PATH: ClassVar[str] = "subscriptions/user"
    SCOPES: ClassVar[frozenset[ScopeId]] = frozenset({Scope.USER_READ_SUBSCRIPTIONS})
    RESPONSE: ClassVar[type[BaseModel]] = UserSubscription
    SINGLE: ClassVar[bool] = True

    broadcaster_id: Annotated[str, Scalar]
    user_id: Annotated[list[str], Repeated] = Field(default_factory=list)
