"""OAuth scopes and the pre-dispatch scope check."""

from collections.abc import Iterable
from enum import Enum

from helix_sdk.exceptions import ScopeError


class Scope(str, Enum):
    """Twitch OAuth scopes known to the SDK."""

    ANALYTICS_READ_EXTENSIONS = "analytics:read:extensions"
    ANALYTICS_READ_GAMES = "analytics:read:games"
    BITS_READ = "bits:read"
    CHANNEL_EDIT_COMMERCIAL = "channel:edit:commercial"
    CHANNEL_MANAGE_BROADCAST = "channel:manage:broadcast"
    CHANNEL_MANAGE_EXTENSIONS = "channel:manage:extensions"
    CHANNEL_MANAGE_REDEMPTIONS = "channel:manage:redemptions"
    CHANNEL_MANAGE_VIDEOS = "channel:manage:videos"
    CHANNEL_MODERATE = "channel:moderate"
    CHANNEL_READ_EDITORS = "channel:read:editors"
    CHANNEL_READ_HYPE_TRAIN = "channel:read:hype_train"
    CHANNEL_READ_REDEMPTIONS = "channel:read:redemptions"
    CHANNEL_READ_STREAM_KEY = "channel:read:stream_key"
    CHANNEL_READ_SUBSCRIPTIONS = "channel:read:subscriptions"
    CLIPS_EDIT = "clips:edit"
    MODERATION_READ = "moderation:read"
    USER_EDIT = "user:edit"
    USER_EDIT_FOLLOWS = "user:edit:follows"
    USER_MANAGE_BLOCKED_USERS = "user:manage:blocked_users"
    USER_READ_BLOCKED_USERS = "user:read:blocked_users"
    USER_READ_BROADCAST = "user:read:broadcast"
    USER_READ_EMAIL = "user:read:email"
    USER_READ_SUBSCRIPTIONS = "user:read:subscriptions"


ScopeId = Scope | str


def parse_scope(value: ScopeId) -> ScopeId:
    """Return the matching Scope member, or the raw string if unknown."""
    if isinstance(value, Scope):
        return value
    try:
        return Scope(value)
    except ValueError:
        return value


def normalize_scopes(scopes: Iterable[ScopeId]) -> frozenset[ScopeId]:
    return frozenset(parse_scope(s) for s in scopes)


def missing_scopes(
    required: Iterable[ScopeId], granted: Iterable[ScopeId]
) -> frozenset[ScopeId]:
    """Compute ``required - granted``."""
    return normalize_scopes(required) - normalize_scopes(granted)


def check_scopes(required: Iterable[ScopeId], granted: Iterable[ScopeId]) -> None:
    """Raise ScopeError naming exactly the scopes in ``required`` not in ``granted``.

    An empty ``required`` always passes.
    """
    missing = missing_scopes(required, granted)
    if missing:
        raise ScopeError(missing)
