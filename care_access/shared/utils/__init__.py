"""Shared utilities: generators."""

from care_access.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid"]
