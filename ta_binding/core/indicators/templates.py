"""
Templates that generate the per-indicator functions.

Most wrapped routines share one of a few shapes: a single price series with a
lookback period, a high/low/close triple with or without a period, or a
close/volume pair. Each ``define_*_fn`` template produces a documented function
for one native routine and records it in the binding catalogue, so adding a
binding for another routine of the same shape is a single call.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

import numpy as np
import numpy.typing as npt

from ta_binding.errors import InputError
from ta_binding.native.library import NativeFunction, as_buffer, bind


class IndicatorOutput(NamedTuple):
    """Output values and the index of the first input sample that has one."""

    values: npt.NDArray[np.float64]
    begin: int


class BandsOutput(NamedTuple):
    upper: npt.NDArray[np.float64]
    middle: npt.NDArray[np.float64]
    lower: npt.NDArray[np.float64]
    begin: int


@dataclass(frozen=True)
class Binding:
    """Catalogue entry for a generated indicator function."""

    name: str
    function: str
    category: str
    inputs: tuple[str, ...]
    params: tuple[str, ...]
    outputs: tuple[str, ...]
    primary: str
    func: Callable[..., Any]

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.func(*args, **kwargs)


_BINDINGS: dict[str, Binding] = {}


def register_binding(binding: Binding) -> Binding:
    if binding.name in _BINDINGS:
        raise ValueError(f"Binding '{binding.name}' is already registered")
    _BINDINGS[binding.name] = binding
    return binding


def get_binding(name: str) -> Binding:
    """Look a binding up by function name (``simple_moving_average``) or native name (``SMA``)."""
    if name in _BINDINGS:
        return _BINDINGS[name]
    for binding in _BINDINGS.values():
        if binding.function == name.upper():
            return binding
    raise KeyError(f"No binding named '{name}'")


def available_bindings() -> list[Binding]:
    return sorted(_BINDINGS.values(), key=lambda binding: (binding.category, binding.name))


def prepare_inputs(function: str, primary: str, series: dict[str, Any]) -> list[npt.NDArray[np.float64]]:
    """
    Convert the caller's series to native buffers.

    The primary series decides how many samples are processed; every other series
    must be at least as long and is truncated to the primary length.
    """
    buffers = {name: as_buffer(function, name, values) for name, values in series.items()}
    size = len(buffers[primary])
    if size == 0:
        raise InputError(f"{function}: input '{primary}' is empty")

    for name, buffer in buffers.items():
        if len(buffer) < size:
            raise InputError(f"{function}: input '{name}' has {len(buffer)} samples but '{primary}' has {size}")

    return [buffer[:size] for buffer in buffers.values()]


def _describe(summary: str, native: NativeFunction, inputs: dict[str, str], params: dict[str, str]) -> str:
    lines = [summary, "", "Args:"]
    lines.extend(f"    {name}: {description}" for name, description in inputs.items())
    lines.extend(f"    {name}: {description}" for name, description in params.items())
    lines.extend(
        [
            "",
            "Returns:",
            f"    IndicatorOutput with the {native.name} values and the index of the first",
            f"    input sample that has an associated {native.name} value.",
            "",
            "Raises:",
            "    InputError: an input is empty, not numeric, or shorter than the primary input.",
            "    NativeCallError: the native routine rejected the call.",
        ]
    )
    return "\n".join(lines)


def _export(
    func: Callable[..., Any],
    module: str,
    name: str,
    native: NativeFunction,
    category: str,
    inputs: tuple[str, ...],
    params: tuple[str, ...],
    primary: str,
    doc: str,
) -> Callable[..., Any]:
    func.__name__ = name
    func.__qualname__ = name
    func.__module__ = module
    func.__doc__ = doc
    register_binding(Binding(name, native.name, category, inputs, params, ("values",), primary, func))
    return func


_PERIOD_DOC = "lookback period; None lets the native library pick its default."
_HLC_DOCS = {
    "high": "high prices, at least as long as close.",
    "low": "low prices, at least as long as close.",
    "close": "close prices; their length sets the number of samples processed.",
}


def define_values_period_fn(name: str, function: str, summary: str, category: str, module: str) -> Callable[..., Any]:
    """Generate ``name(values, period=None) -> IndicatorOutput`` over a single series."""
    native = bind(function)

    def indicator(values: Any, period: Optional[int] = None) -> IndicatorOutput:
        buffers = prepare_inputs(native.name, "values", {"values": values})
        result = native(*buffers, timeperiod=period)
        return IndicatorOutput(result.outputs[0], result.begin)

    doc = _describe(summary, native, {"values": "input series."}, {"period": _PERIOD_DOC})
    return _export(indicator, module, name, native, category, ("values",), ("period",), "values", doc)


def define_high_low_close_period_fn(
    name: str, function: str, summary: str, category: str, module: str
) -> Callable[..., Any]:
    """Generate ``name(high, low, close, period=None) -> IndicatorOutput``."""
    native = bind(function)

    def indicator(high: Any, low: Any, close: Any, period: Optional[int] = None) -> IndicatorOutput:
        buffers = prepare_inputs(native.name, "close", {"high": high, "low": low, "close": close})
        result = native(*buffers, timeperiod=period)
        return IndicatorOutput(result.outputs[0], result.begin)

    doc = _describe(summary, native, _HLC_DOCS, {"period": _PERIOD_DOC})
    return _export(indicator, module, name, native, category, ("high", "low", "close"), ("period",), "close", doc)


def define_high_low_close_fn(name: str, function: str, summary: str, category: str, module: str) -> Callable[..., Any]:
    """Generate ``name(high, low, close) -> IndicatorOutput`` for routines without tunables."""
    native = bind(function)

    def indicator(high: Any, low: Any, close: Any) -> IndicatorOutput:
        buffers = prepare_inputs(native.name, "close", {"high": high, "low": low, "close": close})
        result = native(*buffers)
        return IndicatorOutput(result.outputs[0], result.begin)

    doc = _describe(summary, native, _HLC_DOCS, {})
    return _export(indicator, module, name, native, category, ("high", "low", "close"), (), "close", doc)


def define_close_volume_fn(name: str, function: str, summary: str, category: str, module: str) -> Callable[..., Any]:
    """Generate ``name(close, volume) -> IndicatorOutput``."""
    native = bind(function)

    def indicator(close: Any, volume: Any) -> IndicatorOutput:
        buffers = prepare_inputs(native.name, "close", {"close": close, "volume": volume})
        result = native(*buffers)
        return IndicatorOutput(result.outputs[0], result.begin)

    inputs = {
        "close": "close prices; their length sets the number of samples processed.",
        "volume": "traded volume, at least as long as close.",
    }
    doc = _describe(summary, native, inputs, {})
    return _export(indicator, module, name, native, category, ("close", "volume"), (), "close", doc)
