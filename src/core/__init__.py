# SPDX-License-Identifier: MIT
"""Core helpers shared by the command-line interface and batch service."""

from .environment import new_environment, new_route, new_route_response

__all__ = ["new_environment", "new_route", "new_route_response"]
