from collections.abc import Generator

import numpy as np
import pytest
import talib

from ta_binding.errors import InputError, LibraryUnavailableError, NativeCallError, ParameterError
from ta_binding.native import library
from ta_binding.native.constants import INTEGER_DEFAULT, REAL_DEFAULT, MAType, OptInputKind, RetCode
from ta_binding.native.library import (
    SIGNATURES,
    NativeFunction,
    OptInput,
    as_buffer,
    bind,
    first_valid_index,
    marshal_opt_input,
    translate_native_error,
)

PERIOD = OptInput("timeperiod", OptInputKind.INTEGER)
DEVIATION = OptInput("nbdevup", OptInputKind.REAL)
MA = OptInput("matype", OptInputKind.MA_TYPE)


@pytest.fixture
def missing_native_module(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setattr(library, "NATIVE_MODULE", "ta_binding_missing_native_module")
    library.get_library.cache_clear()
    yield
    library.get_library.cache_clear()


class TestRetCode:
    def test_known_code(self) -> None:
        assert RetCode.from_code(2) is RetCode.BAD_PARAM
        assert RetCode.BAD_PARAM.description == "Bad Parameter"

    def test_internal_error_range(self) -> None:
        assert RetCode.from_code(5000) is RetCode.INTERNAL_ERROR
        assert RetCode.from_code(5123) is RetCode.INTERNAL_ERROR

    def test_unknown_code(self) -> None:
        assert RetCode.from_code(999) is RetCode.UNKNOWN_ERR


class TestMarshalOptInput:
    def test_none_selects_sentinels(self) -> None:
        assert marshal_opt_input("SMA", PERIOD, None) == INTEGER_DEFAULT
        assert marshal_opt_input("BBANDS", MA, None) == INTEGER_DEFAULT
        assert marshal_opt_input("BBANDS", DEVIATION, None) == REAL_DEFAULT

    def test_integer_values(self) -> None:
        assert marshal_opt_input("SMA", PERIOD, 14) == 14
        assert marshal_opt_input("SMA", PERIOD, np.int64(7)) == 7

    @pytest.mark.parametrize("value", [True, 2.5, "14", 2**40])
    def test_rejects_bad_integers(self, value: object) -> None:
        with pytest.raises(ParameterError):
            marshal_opt_input("SMA", PERIOD, value)

    def test_real_values(self) -> None:
        assert marshal_opt_input("BBANDS", DEVIATION, 2) == 2.0
        assert isinstance(marshal_opt_input("BBANDS", DEVIATION, 2), float)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), 1e38, "wide"])
    def test_rejects_bad_reals(self, value: object) -> None:
        with pytest.raises(ParameterError):
            marshal_opt_input("BBANDS", DEVIATION, value)

    def test_moving_average_type(self) -> None:
        assert marshal_opt_input("BBANDS", MA, MAType.EMA) == 1
        with pytest.raises(ParameterError, match="not a moving average type"):
            marshal_opt_input("BBANDS", MA, 42)


class TestTranslateNativeError:
    def test_parses_return_code(self) -> None:
        error = translate_native_error(
            "SMA", Exception("TA_SMA function failed with error code 2: Bad Parameter (TA_BAD_PARAM)")
        )

        assert error.ret_code is RetCode.BAD_PARAM
        assert error.function == "SMA"
        assert "BAD_PARAM" in str(error)

    def test_unparseable_message(self) -> None:
        error = translate_native_error("SMA", Exception("something odd"))

        assert error.ret_code is RetCode.UNKNOWN_ERR
        assert error.detail == "something odd"


class TestBuffers:
    def test_as_buffer_converts_to_float64(self) -> None:
        buffer = as_buffer("SMA", "real", [1, 2, 3])

        assert buffer.dtype == np.float64
        assert buffer.flags["C_CONTIGUOUS"]

    def test_as_buffer_makes_strided_input_contiguous(self) -> None:
        buffer = as_buffer("SMA", "real", np.arange(10.0)[::2])

        assert buffer.flags["C_CONTIGUOUS"]
        np.testing.assert_array_equal(buffer, [0.0, 2.0, 4.0, 6.0, 8.0])

    def test_as_buffer_rejects_text(self) -> None:
        with pytest.raises(InputError, match="not a numeric series"):
            as_buffer("SMA", "real", ["a", "b"])

    def test_as_buffer_rejects_matrix(self) -> None:
        with pytest.raises(InputError, match="one-dimensional"):
            as_buffer("SMA", "real", np.ones((3, 3)))

    def test_first_valid_index(self) -> None:
        buffers = (np.array([np.nan, 1.0, 2.0, 3.0]), np.array([1.0, np.nan, 2.0, 3.0]))

        assert first_valid_index(buffers) == 2
        assert first_valid_index((np.array([np.nan, np.nan]),)) is None


class TestBind:
    def test_every_signature_exists_natively(self) -> None:
        for name in SIGNATURES:
            assert callable(getattr(talib, name))

    def test_bind_is_case_insensitive_and_cached(self) -> None:
        assert bind("sma") is bind("SMA")
        assert bind("Sma") is bind("SMA")
        assert isinstance(bind("SMA"), NativeFunction)

    def test_unknown_function(self) -> None:
        with pytest.raises(NativeCallError) as exc_info:
            bind("NOT_A_FUNCTION")
        assert exc_info.value.ret_code is RetCode.FUNC_NOT_FOUND


class TestNativeFunction:
    def test_sma_trims_warm_up(self) -> None:
        result = bind("SMA")(np.arange(1.0, 11.0), timeperiod=3)

        assert result.begin == 2
        np.testing.assert_allclose(result.outputs[0], np.arange(2.0, 10.0))

    def test_leading_nan_shifts_begin(self) -> None:
        values = np.concatenate([[np.nan, np.nan], np.arange(1.0, 11.0)])

        result = bind("SMA")(values, timeperiod=3)

        assert result.begin == 4
        np.testing.assert_allclose(result.outputs[0], np.arange(2.0, 10.0))

    @pytest.mark.parametrize(
        ("name", "params", "expected"),
        [
            ("SMA", {"timeperiod": 10}, 9),
            ("SMA", {}, 29),
            ("EMA", {"timeperiod": 5}, 4),
            ("DEMA", {"timeperiod": 5}, 8),
            ("TEMA", {"timeperiod": 5}, 12),
            ("ADX", {"timeperiod": 7}, 13),
            ("ATR", {"timeperiod": 7}, 7),
            ("TRANGE", {}, 1),
            ("OBV", {}, 0),
        ],
    )
    def test_lookback(self, name: str, params: dict[str, int], expected: int) -> None:
        assert bind(name).lookback(**params) == expected

    def test_bad_parameter_is_reported(self) -> None:
        with pytest.raises(NativeCallError) as exc_info:
            bind("SMA")(np.arange(1.0, 11.0), timeperiod=0)
        assert exc_info.value.ret_code is RetCode.BAD_PARAM

    def test_unknown_parameter(self) -> None:
        with pytest.raises(ParameterError, match="unknown parameters"):
            bind("SMA")(np.arange(1.0, 11.0), window=3)

    def test_wrong_buffer_count(self) -> None:
        with pytest.raises(InputError, match="expected inputs"):
            bind("ATR")(np.arange(1.0, 11.0))

    def test_empty_input(self) -> None:
        with pytest.raises(InputError, match="empty"):
            bind("SMA")([], timeperiod=3)

    def test_mismatched_lengths(self) -> None:
        with pytest.raises(InputError, match="lengths differ"):
            bind("OBV")(np.arange(1.0, 11.0), np.arange(1.0, 5.0))

    def test_all_nan(self) -> None:
        with pytest.raises(InputError, match="all NaN"):
            bind("SMA")([np.nan, np.nan, np.nan], timeperiod=2)

    def test_insufficient_data(self) -> None:
        result = bind("SMA")(np.arange(1.0, 6.0), timeperiod=10)

        assert result.begin == 5
        assert len(result.outputs[0]) == 0

    def test_outputs_are_copies(self) -> None:
        values = np.arange(1.0, 11.0)

        result = bind("SMA")(values, timeperiod=3)
        result.outputs[0][:] = 0.0

        np.testing.assert_array_equal(values, np.arange(1.0, 11.0))


class TestLibraryLoading:
    def test_native_version(self) -> None:
        version = library.native_version()

        assert version
        assert not version.startswith("b'")

    def test_missing_module(self, missing_native_module: None) -> None:
        with pytest.raises(LibraryUnavailableError, match="ta_binding_missing_native_module") as exc_info:
            library.get_library()
        assert isinstance(exc_info.value, ImportError)
