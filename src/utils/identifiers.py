# SPDX-License-Identifier: MIT
"""Identifier helpers for routes and route responses."""

from __future__ import annotations

from uuid import uuid4


def new_uuid() -> str:
    """Return a fresh, globally unique identifier string."""
    return str(uuid4())


__all__ = ["new_uuid"]
