"""
Signature table and safe callables for the wrapped native functions.

Each entry of ``SIGNATURES`` describes one native routine the way its C prototype
does: the input buffers it reads, the optional inputs it accepts and the output
buffers it fills. ``NativeFunction`` turns an entry into a Python callable that

- converts every buffer to a contiguous one-dimensional ``float64`` array,
- maps ``None`` optional inputs onto the native default sentinels,
- invokes the native routine and translates its return code into ``NativeCallError``,
- trims the warm-up region so the outputs start at the native ``begin`` index.
"""

import importlib
import math
import operator
import re
from dataclasses import dataclass
from functools import lru_cache
from types import ModuleType
from typing import Any, Final, NamedTuple, Optional

import numpy as np
import numpy.typing as npt

from ta_binding.errors import InputError, LibraryUnavailableError, NativeCallError, ParameterError
from ta_binding.native.constants import (
    INT32_MAX,
    INT32_MIN,
    INTEGER_DEFAULT,
    REAL_DEFAULT,
    REAL_LOWER_BOUND,
    REAL_UPPER_BOUND,
    MAType,
    OptInputKind,
    RetCode,
)
from ta_binding.utils.logger import LOGGER as logger

NATIVE_MODULE: Final[str] = "talib"

_ERROR_CODE_PATTERN = re.compile(r"error code (\d+)")


@dataclass(frozen=True)
class OptInput:
    name: str
    kind: OptInputKind


@dataclass(frozen=True)
class FunctionSignature:
    name: str
    inputs: tuple[str, ...]
    opt_inputs: tuple[OptInput, ...] = ()
    outputs: tuple[str, ...] = ("real",)

    @property
    def opt_input_names(self) -> tuple[str, ...]:
        return tuple(opt.name for opt in self.opt_inputs)


class NativeResult(NamedTuple):
    outputs: tuple[npt.NDArray[np.float64], ...]
    begin: int


_TIMEPERIOD = OptInput("timeperiod", OptInputKind.INTEGER)
_REAL = ("real",)
_HLC = ("high", "low", "close")

SIGNATURES: Final[dict[str, FunctionSignature]] = {
    signature.name: signature
    for signature in (
        # Directional movement
        FunctionSignature("ADX", _HLC, (_TIMEPERIOD,)),
        FunctionSignature("MINUS_DI", _HLC, (_TIMEPERIOD,)),
        FunctionSignature("PLUS_DI", _HLC, (_TIMEPERIOD,)),
        # Volatility
        FunctionSignature("ATR", _HLC, (_TIMEPERIOD,)),
        FunctionSignature("NATR", _HLC, (_TIMEPERIOD,)),
        FunctionSignature("TRANGE", _HLC),
        # Overlap studies
        FunctionSignature("SMA", _REAL, (_TIMEPERIOD,)),
        FunctionSignature("EMA", _REAL, (_TIMEPERIOD,)),
        FunctionSignature("WMA", _REAL, (_TIMEPERIOD,)),
        FunctionSignature("DEMA", _REAL, (_TIMEPERIOD,)),
        FunctionSignature("TEMA", _REAL, (_TIMEPERIOD,)),
        FunctionSignature(
            "BBANDS",
            _REAL,
            (
                _TIMEPERIOD,
                OptInput("nbdevup", OptInputKind.REAL),
                OptInput("nbdevdn", OptInputKind.REAL),
                OptInput("matype", OptInputKind.MA_TYPE),
            ),
            ("upperband", "middleband", "lowerband"),
        ),
        # Momentum
        FunctionSignature("RSI", _REAL, (_TIMEPERIOD,)),
        FunctionSignature("CMO", _REAL, (_TIMEPERIOD,)),
        FunctionSignature("WILLR", _HLC, (_TIMEPERIOD,)),
        FunctionSignature("CCI", _HLC, (_TIMEPERIOD,)),
        # Volume
        FunctionSignature("OBV", ("real", "volume")),
    )
}


@lru_cache(maxsize=None)
def get_library() -> ModuleType:
    """Import the native module once. Raises ``LibraryUnavailableError`` when it is missing."""
    try:
        module = importlib.import_module(NATIVE_MODULE)
    except ImportError as e:
        raise LibraryUnavailableError(
            f"Native module '{NATIVE_MODULE}' is not importable; install the 'TA-Lib' distribution: {e}"
        ) from e
    logger.debug(f"Loaded native module '{NATIVE_MODULE}' (TA-Lib {getattr(module, '__ta_version__', 'unknown')})")
    return module


@lru_cache(maxsize=None)
def get_abstract() -> ModuleType:
    get_library()
    return importlib.import_module(f"{NATIVE_MODULE}.abstract")


def native_version() -> str:
    version = getattr(get_library(), "__ta_version__", "unknown")
    return version.decode() if isinstance(version, bytes) else str(version)


def supported_functions() -> list[str]:
    return sorted(SIGNATURES)


def as_buffer(function: str, name: str, values: Any) -> npt.NDArray[np.float64]:
    """Coerce a caller-supplied series into the buffer layout the native routine expects."""
    try:
        array = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InputError(f"{function}: input '{name}' is not a numeric series: {e}") from e

    if array.ndim != 1:
        raise InputError(f"{function}: input '{name}' must be one-dimensional, got shape {array.shape}")
    return np.ascontiguousarray(array)


def marshal_opt_input(function: str, opt: OptInput, value: Any) -> Any:
    """Convert an optional input to its native representation. ``None`` selects the native default."""
    if value is None:
        return REAL_DEFAULT if opt.kind is OptInputKind.REAL else INTEGER_DEFAULT

    if isinstance(value, bool):
        raise ParameterError(f"{function}: '{opt.name}' must be a number, got a bool")

    if opt.kind is OptInputKind.REAL:
        try:
            real = float(value)
        except (TypeError, ValueError) as e:
            raise ParameterError(f"{function}: '{opt.name}' must be a real number, got {value!r}") from e
        if not math.isfinite(real) or not REAL_LOWER_BOUND <= real <= REAL_UPPER_BOUND:
            raise ParameterError(f"{function}: '{opt.name}' is not representable natively: {real!r}")
        return real

    try:
        integer = operator.index(value)
    except TypeError as e:
        raise ParameterError(f"{function}: '{opt.name}' must be an integer, got {value!r}") from e

    if opt.kind is OptInputKind.MA_TYPE:
        try:
            return int(MAType(integer))
        except ValueError as e:
            raise ParameterError(f"{function}: '{opt.name}' is not a moving average type: {value!r}") from e

    if not INT32_MIN <= integer <= INT32_MAX:
        raise ParameterError(f"{function}: '{opt.name}' does not fit a 32-bit integer: {integer}")
    return integer


def translate_native_error(function: str, error: Exception) -> NativeCallError:
    """Recover the return code from a native exception message."""
    message = str(error)
    match = _ERROR_CODE_PATTERN.search(message)
    ret_code = RetCode.from_code(int(match.group(1))) if match else RetCode.UNKNOWN_ERR
    return NativeCallError(function, ret_code, None if match else message)


def first_valid_index(buffers: tuple[npt.NDArray[np.float64], ...]) -> Optional[int]:
    """Index of the first sample where no buffer holds NaN; the native layer starts there."""
    valid = ~np.isnan(np.vstack(buffers)).any(axis=0)
    if not valid.any():
        return None
    return int(np.argmax(valid))


class NativeFunction:
    """Safe callable for one entry of ``SIGNATURES``. Buffers must already have equal lengths."""

    def __init__(self, signature: FunctionSignature) -> None:
        self.signature = signature
        self.name = signature.name

    def _marshal_params(self, params: dict[str, Any]) -> dict[str, Any]:
        unknown = sorted(set(params) - set(self.signature.opt_input_names))
        if unknown:
            raise ParameterError(
                f"{self.name}: unknown parameters {unknown}; accepted: {list(self.signature.opt_input_names)}"
            )
        return {opt.name: marshal_opt_input(self.name, opt, params.get(opt.name)) for opt in self.signature.opt_inputs}

    def lookback(self, **params: Any) -> int:
        """Number of samples the native routine consumes before its first output."""
        explicit = {
            opt.name: marshal_opt_input(self.name, opt, params[opt.name])
            for opt in self.signature.opt_inputs
            if params.get(opt.name) is not None
        }
        try:
            function = get_abstract().Function(self.name)
            if explicit:
                function.set_parameters(explicit)
            value = int(function.lookback)
        except Exception as e:
            raise translate_native_error(self.name, e) from e

        if value < 0:
            raise NativeCallError(self.name, RetCode.BAD_PARAM, "parameters rejected by the lookback routine")
        return value

    def __call__(self, *buffers: Any, **params: Any) -> NativeResult:
        if len(buffers) != len(self.signature.inputs):
            raise InputError(f"{self.name}: expected inputs {list(self.signature.inputs)}, got {len(buffers)} buffers")

        arrays = tuple(as_buffer(self.name, name, values) for name, values in zip(self.signature.inputs, buffers))
        size = len(arrays[0])
        if size == 0:
            raise InputError(f"{self.name}: input series is empty")
        if any(len(array) != size for array in arrays):
            raise InputError(
                f"{self.name}: input lengths differ: {dict(zip(self.signature.inputs, map(len, arrays)))}"
            )

        start = first_valid_index(arrays)
        if start is None:
            raise InputError(f"{self.name}: inputs are all NaN")

        kwargs = self._marshal_params(params)
        native = getattr(get_library(), self.name)
        logger.debug(f"Calling native {self.name} on {size} samples with {kwargs}")
        try:
            raw = native(*arrays, **kwargs)
        except Exception as e:
            error = translate_native_error(self.name, e)
            logger.debug(f"Native {self.name} failed: {error}")
            raise error from e

        padded = (raw,) if isinstance(raw, np.ndarray) else tuple(raw)
        begin = min(start + self.lookback(**params), size)
        if begin == size:
            logger.warning(f"Insufficient data for {self.name}: {size} samples do not cover the warm-up period")

        outputs = tuple(np.array(output[begin:], dtype=np.float64) for output in padded)
        return NativeResult(outputs, begin)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', inputs={self.signature.inputs})"


def bind(name: str) -> NativeFunction:
    """Return the safe callable for a native function name such as ``"SMA"``; names are case-insensitive."""
    return _bind(name.upper())


@lru_cache(maxsize=None)
def _bind(name: str) -> NativeFunction:
    signature = SIGNATURES.get(name)
    if signature is None:
        raise NativeCallError(name, RetCode.FUNC_NOT_FOUND, f"not one of {supported_functions()}")
    return NativeFunction(signature)
