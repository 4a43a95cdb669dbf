"""
DataFrame adapter over the generated bindings.
"""

from .base_indicator import BaseIndicator, IndicatorConfig, IndicatorResult
from .indicator_registry import IndicatorRegistry

__all__ = ["BaseIndicator", "IndicatorConfig", "IndicatorResult", "IndicatorRegistry"]
