"""
Safe Python bindings for a subset of the TA-Lib technical analysis library.

Example::

    from ta_binding import simple_moving_average

    close_prices = [1.08701, 1.08712, 1.08708, 1.08717, 1.08711, 1.08701, 1.08710, 1.08712]
    sma_values, begin = simple_moving_average(close_prices, period=5)
    # sma_values[i] belongs to close_prices[begin + i]
"""

from ta_binding.core.indicators import (
    BandsOutput,
    IndicatorOutput,
    MovingAverageType,
    available_bindings,
    average_directional_movement_index,
    average_true_range,
    bollinger_bands,
    chande_momentum_oscillator,
    commodity_channel_index,
    double_exponential_moving_average,
    exponential_moving_average,
    get_binding,
    negative_directional_indicator,
    normalized_average_true_range,
    on_balance_volume,
    positive_directional_indicator,
    relative_strength_index,
    simple_moving_average,
    triple_exponential_moving_average,
    true_range,
    weighted_moving_average,
    williams_percent_r,
)
from ta_binding.errors import InputError, LibraryUnavailableError, NativeCallError, ParameterError, TALibError
from ta_binding.native.constants import RetCode

__version__ = "0.1.0"

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
    "available_bindings",
    "get_binding",
    "TALibError",
    "InputError",
    "ParameterError",
    "NativeCallError",
    "LibraryUnavailableError",
    "RetCode",
]
