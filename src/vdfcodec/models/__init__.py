"""Pydantic record modeling for vdfcodec.

This module provides the BaseRecord class, the VDFField helper, and the stock
Shortcut record.
"""

from __future__ import annotations

from .base import BaseRecord
from .fields import VDFField
from .shortcut import Shortcut

__all__ = [
    "BaseRecord",
    "VDFField",
    "Shortcut",
]
