"""
Core enumerations for the trading simulation.

This module provides centralized enumerations for domain concepts
like order types, asset sectors, price triggers and risk checks.
"""

from .assets import AssetType, Sector
from .order_types import OrderSide, OrderStatus, OrderType
from .risk import RiskCheckType
from .triggers import TrendDirection, TriggerType, VolumeSentiment

__all__ = [
    "AssetType",
    "Sector",
    "OrderType",
    "OrderSide",
    "OrderStatus",
    "RiskCheckType",
    "TriggerType",
    "TrendDirection",
    "VolumeSentiment",
]
