"""Credential capability read by the client.

The SDK never acquires or refreshes tokens. Callers supply any object
implementing :class:`Credential`; :class:`StaticCredential` covers the
common case of an already-issued token.
"""

import os
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from helix_sdk.exceptions import HelixConfigError
from helix_sdk.scopes import ScopeId, normalize_scopes


@runtime_checkable
class Credential(Protocol):
    def bearer_token(self) -> str: ...

    def granted_scopes(self) -> frozenset[ScopeId]: ...

    def client_id(self) -> str: ...


class StaticCredential(BaseModel):
    """An already-issued access token with its granted scopes."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(min_length=1)
    client: str = Field(min_length=1)
    scopes: frozenset[str] = frozenset()

    @classmethod
    def from_env(cls) -> "StaticCredential":
        """Create a credential from environment variables.

        Required environment variables:
            HELIX_ACCESS_TOKEN: The OAuth access token.
            HELIX_CLIENT_ID: The application client ID.

        Optional environment variables:
            HELIX_SCOPES: Space-separated list of granted scopes.

        Raises:
            HelixConfigError: If a required variable is missing.
        """
        access_token = os.environ.get("HELIX_ACCESS_TOKEN")
        client_id = os.environ.get("HELIX_CLIENT_ID")
        if not access_token or not client_id:
            raise HelixConfigError("HELIX_ACCESS_TOKEN and HELIX_CLIENT_ID must be set")

        scopes = frozenset(os.environ.get("HELIX_SCOPES", "").split())
        return cls(access_token=access_token, client=client_id, scopes=scopes)

    def bearer_token(self) -> str:
        return self.access_token

    def granted_scopes(self) -> frozenset[ScopeId]:
        return normalize_scopes(self.scopes)

    def client_id(self) -> str:
        return self.client
