"""
Indicator bindings generated from the native signature table, plus the DataFrame
adapter that applies them to OHLCV frames.
"""

from .momentum import (
    chande_momentum_oscillator,
    commodity_channel_index,
    relative_strength_index,
    williams_percent_r,
)
from .overlap import (
    MovingAverageType,
    bollinger_bands,
    double_exponential_moving_average,
    exponential_moving_average,
    simple_moving_average,
    triple_exponential_moving_average,
    weighted_moving_average,
)
from .templates import BandsOutput, Binding, IndicatorOutput, available_bindings, get_binding
from .trend import (
    average_directional_movement_index,
    negative_directional_indicator,
    positive_directional_indicator,
)
from .volatility import average_true_range, normalized_average_true_range, true_range
from .volume import on_balance_volume

from .base.base_indicator import BaseIndicator, IndicatorConfig, IndicatorResult
from .base.indicator_registry import IndicatorRegistry
from .main import IndicatorCalculator

__all__ = [
    "average_directional_movement_index",
    "average_true_range",
    "normalized_average_true_range",
    "negative_directional_indicator",
    "positive_directional_indicator",
    "true_range",
    "exponential_moving_average",
    "simple_moving_average",
    "weighted_moving_average",
    "double_exponential_moving_average",
    "triple_exponential_moving_average",
    "bollinger_bands",
    "on_balance_volume",
    "relative_strength_index",
    "chande_momentum_oscillator",
    "williams_percent_r",
    "commodity_channel_index",
    "MovingAverageType",
    "IndicatorOutput",
    "BandsOutput",
    "Binding",
    "available_bindings",
    "get_binding",
    "BaseIndicator",
    "IndicatorConfig",
    "IndicatorResult",
    "IndicatorRegistry",
    "IndicatorCalculator",
]
