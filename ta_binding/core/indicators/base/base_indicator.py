import time
from typing import Any, Optional, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field

from ta_binding.core.indicators.overlap import MovingAverageType
from ta_binding.core.indicators.templates import Binding, get_binding
from ta_binding.errors import InputError, ParameterError, TALibError
from ta_binding.utils.logger import LOGGER as logger

# Binding inputs that read a differently named DataFrame column unless configured otherwise.
DEFAULT_COLUMNS: dict[str, str] = {"values": "close"}


class IndicatorConfig(BaseModel):
    """Configuration model for one indicator applied to OHLCV frames."""

    name: str
    function: str
    category: Optional[str] = None
    enabled: bool = True
    params: dict[str, Any] = Field(default_factory=dict)
    timeframe_params: dict[str, dict[str, Any]] = Field(default_factory=dict)
    columns: dict[str, str] = Field(default_factory=dict)
    validation_enabled: bool = True


class IndicatorResult(BaseModel):
    """Model for indicator calculation results."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    success: bool
    data: Optional[Union[pd.Series, pd.DataFrame]] = None
    begin: Optional[int] = None
    error_message: Optional[str] = None
    calculation_time_ms: float = 0.0
    validation_passed: bool = True


class BaseIndicator:
    """
    Applies one generated binding to an OHLCV DataFrame.

    Provides:
    - Column mapping from binding inputs to DataFrame columns
    - Timeframe-specific parameter support
    - Parameter and data validation
    - Re-alignment of trimmed native output onto the frame index
    - Conversion of binding failures into a failed ``IndicatorResult``

    Subclasses may override the ``validate_*`` hooks.
    """

    def __init__(self, config: IndicatorConfig, binding: Optional[Binding] = None):
        self.config = config
        self.name = config.name
        self.enabled = config.enabled
        self.validation_enabled = config.validation_enabled
        try:
            self.binding = binding or get_binding(config.function)
        except KeyError as e:
            raise ParameterError(f"Indicator {self.name}: unknown function '{config.function}'") from e
        self.category = config.category or self.binding.category

    def get_timeframe_params(self, timeframe_minutes: Optional[int]) -> dict[str, Any]:
        """Get parameters for specific timeframe with fallback to defaults."""
        final_params = self.config.params.copy()
        if timeframe_minutes is not None:
            final_params.update(self.config.timeframe_params.get(f"{timeframe_minutes}m", {}))
        return final_params

    def get_columns(self) -> dict[str, str]:
        """Binding input name -> DataFrame column."""
        return {
            input_name: self.config.columns.get(input_name, DEFAULT_COLUMNS.get(input_name, input_name))
            for input_name in self.binding.inputs
        }

    def validate_params(self, params: dict[str, Any]) -> bool:
        unknown = sorted(set(params) - set(self.binding.params))
        if unknown:
            logger.error(f"{self.name}: unknown parameters {unknown} for {self.binding.name}")
            return False
        return True

    def validate_data(self, df: pd.DataFrame) -> bool:
        return not df.empty

    def select_inputs(self, df: pd.DataFrame) -> list[pd.Series]:
        """Pick the binding inputs out of ``df`` in signature order."""
        columns = list(self.get_columns().values())
        missing_columns = [column for column in columns if column not in df.columns]
        if missing_columns:
            raise InputError(f"Indicator {self.name} cannot proceed - missing required data columns: {missing_columns}")
        return [df[column] for column in columns]

    def validate_result(self, result: Union[pd.Series, pd.DataFrame]) -> bool:
        return len(result) > 0

    def _coerce_params(self, params: dict[str, Any]) -> dict[str, Any]:
        coerced = dict(params)
        ma_type = coerced.get("moving_average_type")
        if isinstance(ma_type, str):
            try:
                coerced["moving_average_type"] = MovingAverageType[ma_type]
            except KeyError as e:
                raise ParameterError(f"{self.name}: unknown moving average type '{ma_type}'") from e
        return coerced

    def _align(self, output: tuple[Any, ...], index: pd.Index) -> Union[pd.Series, pd.DataFrame]:
        """Pad trimmed outputs with NaN up to ``begin`` so they line up with the input rows."""
        *arrays, begin = output
        aligned = {}
        for output_name, values in zip(self.binding.outputs, arrays):
            padded = np.full(len(index), np.nan, dtype=np.float64)
            padded[begin : begin + len(values)] = values
            aligned[output_name] = padded

        if len(aligned) == 1:
            return pd.Series(next(iter(aligned.values())), index=index, name=self.name)
        return pd.DataFrame(aligned, index=index)

    def calculate(self, df: pd.DataFrame, timeframe_minutes: Optional[int] = None) -> IndicatorResult:
        """
        Main calculation method.

        Args:
            df: OHLCV DataFrame
            timeframe_minutes: Timeframe for parameter selection

        Returns:
            IndicatorResult with calculation outcome
        """
        start_time = time.perf_counter()

        if not self.enabled:
            return IndicatorResult(
                name=self.name,
                success=False,
                error_message=f"Indicator {self.name} is disabled",
            )

        params = self.get_timeframe_params(timeframe_minutes)
        logger.debug(f"{self.name}: Calculating {self.binding.name} with params: {params}")

        try:
            if self.validation_enabled and not self.validate_data(df):
                return IndicatorResult(
                    name=self.name,
                    success=False,
                    error_message=f"Input data validation failed for {self.name}",
                    validation_passed=False,
                )

            if self.validation_enabled and not self.validate_params(params):
                return IndicatorResult(
                    name=self.name,
                    success=False,
                    error_message=f"Parameter validation failed for {self.name}",
                    validation_passed=False,
                )

            inputs = self.select_inputs(df)
            output = self.binding(*inputs, **self._coerce_params(params))
        except TALibError as e:
            logger.error(f"{self.name} calculation failed for {len(df)} data points with params {params}: {e}")
            return IndicatorResult(name=self.name, success=False, error_message=str(e))

        data = self._align(output, df.index)
        validation_passed = not self.validation_enabled or self.validate_result(data)

        return IndicatorResult(
            name=self.name,
            success=validation_passed,
            data=data,
            begin=output[-1],
            error_message=None if validation_passed else f"Result validation failed for {self.name}",
            calculation_time_ms=(time.perf_counter() - start_time) * 1000,
            validation_passed=validation_passed,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', function='{self.binding.function}', enabled={self.enabled})"
