"""
Directional movement indicators.
"""

from ta_binding.core.indicators.templates import define_high_low_close_period_fn

average_directional_movement_index = define_high_low_close_period_fn(
    "average_directional_movement_index",
    "ADX",
    "Compute the Average Directional (Movement) Index (https://www.tadoc.org/indicator/ADX.htm) over a period.",
    "trend",
    __name__,
)

negative_directional_indicator = define_high_low_close_period_fn(
    "negative_directional_indicator",
    "MINUS_DI",
    "Compute the Negative Directional Indicator (https://www.tadoc.org/indicator/MINUS_DI.htm) over a period.",
    "trend",
    __name__,
)

positive_directional_indicator = define_high_low_close_period_fn(
    "positive_directional_indicator",
    "PLUS_DI",
    "Compute the Positive Directional Indicator (https://www.tadoc.org/indicator/PLUS_DI.htm) over a period.",
    "trend",
    __name__,
)
