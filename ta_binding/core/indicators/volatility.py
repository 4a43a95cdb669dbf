"""
Volatility indicators.
"""

from ta_binding.core.indicators.templates import define_high_low_close_fn, define_high_low_close_period_fn

average_true_range = define_high_low_close_period_fn(
    "average_true_range",
    "ATR",
    "Compute the Average True Range (https://www.tadoc.org/indicator/ATR.htm) over a period.",
    "volatility",
    __name__,
)

normalized_average_true_range = define_high_low_close_period_fn(
    "normalized_average_true_range",
    "NATR",
    "Compute the Normalized Average True Range (https://www.tadoc.org/indicator/NATR.htm) over a period.",
    "volatility",
    __name__,
)

true_range = define_high_low_close_fn(
    "true_range",
    "TRANGE",
    "Compute the True Range (https://www.tadoc.org/indicator/TRANGE.htm) of each bar.",
    "volatility",
    __name__,
)
