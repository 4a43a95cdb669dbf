"""
Volume indicators.
"""

from ta_binding.core.indicators.templates import define_close_volume_fn

on_balance_volume = define_close_volume_fn(
    "on_balance_volume",
    "OBV",
    "Compute On Balance Volume (https://www.tadoc.org/indicator/OBV.htm).",
    "volume",
    __name__,
)
