"""Helix endpoint definitions."""

from helix_sdk.endpoints.games import Game, GetGamesRequest, GetTopGamesRequest
from helix_sdk.endpoints.subscriptions import (
    CheckUserSubscriptionRequest,
    SubscriptionTier,
    UserSubscription,
)

__all__ = [
    "Game",
    "GetGamesRequest",
    "GetTopGamesRequest",
    "CheckUserSubscriptionRequest",
    "SubscriptionTier",
    "UserSubscription",
]
