"""Public response models for the Helix SDK."""

from helix_sdk.models.response import Pagination, Response

__all__ = ["Pagination", "Response"]
