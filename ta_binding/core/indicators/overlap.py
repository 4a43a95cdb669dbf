"""
Overlap studies: moving averages and Bollinger Bands.
"""

from enum import IntEnum
from typing import Any, Optional, Union

from ta_binding.core.indicators.templates import (
    BandsOutput,
    Binding,
    define_values_period_fn,
    prepare_inputs,
    register_binding,
)
from ta_binding.native.constants import MAType
from ta_binding.native.library import bind


class MovingAverageType(IntEnum):
    """Moving average variants accepted wherever the native library takes an MA type."""

    SimpleMovingAverage = MAType.SMA
    ExponentialMovingAverage = MAType.EMA
    WeightedMovingAverage = MAType.WMA
    DoubleExponentialMovingAverage = MAType.DEMA
    TripleExponentialMovingAverage = MAType.TEMA
    TriangularMovingAverage = MAType.TRIMA
    KaufmanAdaptiveMovingAverage = MAType.KAMA
    MesaAdaptiveMovingAverage = MAType.MAMA
    TripleGeneralizedDoubleExponentialMovingAverage = MAType.T3


simple_moving_average = define_values_period_fn(
    "simple_moving_average",
    "SMA",
    "Compute the Simple Moving Average (https://www.tadoc.org/indicator/SMA.htm) over a period.",
    "overlap",
    __name__,
)

exponential_moving_average = define_values_period_fn(
    "exponential_moving_average",
    "EMA",
    "Compute the Exponential Moving Average (https://www.tadoc.org/indicator/EMA.htm) over a period.",
    "overlap",
    __name__,
)

weighted_moving_average = define_values_period_fn(
    "weighted_moving_average",
    "WMA",
    "Compute the Weighted Moving Average (https://www.tadoc.org/indicator/WMA.htm) over a period.",
    "overlap",
    __name__,
)

double_exponential_moving_average = define_values_period_fn(
    "double_exponential_moving_average",
    "DEMA",
    "Compute the Double Exponential Moving Average (https://www.tadoc.org/indicator/DEMA.htm) over a period.",
    "overlap",
    __name__,
)

triple_exponential_moving_average = define_values_period_fn(
    "triple_exponential_moving_average",
    "TEMA",
    "Compute the Triple Exponential Moving Average (https://www.tadoc.org/indicator/TEMA.htm) over a period.",
    "overlap",
    __name__,
)

_BBANDS = bind("BBANDS")


def bollinger_bands(
    values: Any,
    period: Optional[int] = None,
    num_std_deviations_up: Optional[float] = None,
    num_std_deviations_down: Optional[float] = None,
    moving_average_type: Optional[Union[MovingAverageType, int]] = None,
) -> BandsOutput:
    """
    Compute Bollinger Bands (https://www.tadoc.org/indicator/BBANDS.htm).

    Args:
        values: input series.
        period: lookback period; None lets the native library pick its default.
        num_std_deviations_up: deviation multiplier for the upper band; None selects the native default.
        num_std_deviations_down: deviation multiplier for the lower band; None selects the native default.
        moving_average_type: moving average used for the middle band. Defaults to
            ``MovingAverageType.ExponentialMovingAverage``.

    Returns:
        BandsOutput with the upper, middle and lower bands and the index of the first
        input sample that has associated band values.

    Raises:
        InputError: the input is empty or not numeric.
        ParameterError: ``moving_average_type`` is not a known moving average.
        NativeCallError: the native routine rejected the call.
    """
    if moving_average_type is None:
        moving_average_type = MovingAverageType.ExponentialMovingAverage

    buffers = prepare_inputs(_BBANDS.name, "values", {"values": values})
    result = _BBANDS(
        *buffers,
        timeperiod=period,
        nbdevup=num_std_deviations_up,
        nbdevdn=num_std_deviations_down,
        matype=moving_average_type,
    )
    upper, middle, lower = result.outputs
    return BandsOutput(upper, middle, lower, result.begin)


register_binding(
    Binding(
        name="bollinger_bands",
        function=_BBANDS.name,
        category="overlap",
        inputs=("values",),
        params=("period", "num_std_deviations_up", "num_std_deviations_down", "moving_average_type"),
        outputs=("upper", "middle", "lower"),
        primary="values",
        func=bollinger_bands,
    )
)
