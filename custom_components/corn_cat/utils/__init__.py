"""Pure Python utilities for Corn Cat.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Submodules:
    - dt_utils: Timestamp parsing, UTC date extraction, countdown math

Usage:
    from ..utils.dt_utils import dt_now_utc
"""

from . import dt_utils

__all__ = ["dt_utils"]
