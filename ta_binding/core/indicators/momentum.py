"""
Momentum oscillators.
"""

from ta_binding.core.indicators.templates import define_high_low_close_period_fn, define_values_period_fn

relative_strength_index = define_values_period_fn(
    "relative_strength_index",
    "RSI",
    "Compute the Relative Strength Index (https://www.tadoc.org/indicator/RSI.htm) over a period.",
    "momentum",
    __name__,
)

chande_momentum_oscillator = define_values_period_fn(
    "chande_momentum_oscillator",
    "CMO",
    "Compute the Chande Momentum Oscillator (https://www.tadoc.org/indicator/CMO.htm) over a period.",
    "momentum",
    __name__,
)

williams_percent_r = define_high_low_close_period_fn(
    "williams_percent_r",
    "WILLR",
    "Compute Williams' %R (https://www.tadoc.org/indicator/WILLR.htm) over a period.",
    "momentum",
    __name__,
)

commodity_channel_index = define_high_low_close_period_fn(
    "commodity_channel_index",
    "CCI",
    "Compute the Commodity Channel Index (https://www.tadoc.org/indicator/CCI.htm) over a period.",
    "momentum",
    __name__,
)
