from typing import Optional

import pandas as pd

from ta_binding.core.indicators.base.base_indicator import IndicatorConfig
from ta_binding.core.indicators.base.indicator_registry import IndicatorRegistry
from ta_binding.errors import TALibError
from ta_binding.utils.config_loader import AppConfig, ConfigLoader
from ta_binding.utils.logger import LOGGER as logger


class IndicatorCalculator:
    """Applies every configured indicator to an OHLCV DataFrame."""

    def __init__(self, config: Optional[AppConfig] = None, config_loader: Optional[ConfigLoader] = None) -> None:
        """
        Initialize indicator calculator.

        Args:
            config: Application configuration. When omitted it is read through ``config_loader``.
            config_loader: Loader used when ``config`` is not given; defaults to ``ConfigLoader()``.
        """
        if config is None:
            config = (config_loader or ConfigLoader()).get_config()
        self.config = config
        self.registry = IndicatorRegistry(config.indicators)
        self._load_indicators()

    def _load_indicators(self) -> None:
        configurations = self.config.indicators.configurations
        if not configurations:
            raise RuntimeError("No indicator configurations found in indicators.configurations")

        for configuration in configurations:
            params = configuration.params
            config = IndicatorConfig(
                name=configuration.name,
                function=configuration.function,
                category=configuration.category,
                enabled=configuration.enabled,
                params=params.get("default", {}),
                timeframe_params={tf: p for tf, p in params.items() if tf != "default"},
                columns=configuration.columns,
            )
            try:
                self.registry.register_indicator(config)
            except TALibError as e:
                raise RuntimeError(f"Failed to register indicator {configuration.name}: {e}") from e

        total_indicators = len(self.registry.get_all_indicators())
        enabled_indicators = len(self.registry.get_enabled_indicators())
        if enabled_indicators == 0:
            raise RuntimeError("All indicators are disabled! Check indicators.disabled_indicators configuration.")

        logger.info(f"Loaded {total_indicators} indicators ({enabled_indicators} enabled)")

    def calculate_timeframe_features(self, df: pd.DataFrame, timeframe_minutes: Optional[int] = None) -> pd.DataFrame:
        """
        Calculate every enabled indicator over ``df``.

        Single-output indicators become a column named after the indicator; multi-output
        indicators become ``{name}_{output}`` columns. Rows before an indicator's first
        output hold NaN.
        """
        if df.empty:
            return pd.DataFrame()

        features = pd.DataFrame(index=df.index)

        for name, indicator in self.registry.get_enabled_indicators().items():
            result = indicator.calculate(df, timeframe_minutes)
            if not result.success or result.data is None:
                raise RuntimeError(f"Indicator {name} calculation failed: {result.error_message}")

            if isinstance(result.data, pd.Series):
                features[result.name] = result.data
            else:
                for column in result.data.columns:
                    features[f"{result.name}_{column}"] = result.data[column]

        logger.debug(f"Calculated {len(features.columns)} feature columns over {len(df)} rows")
        return features
