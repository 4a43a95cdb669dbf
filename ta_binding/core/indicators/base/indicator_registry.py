from collections import defaultdict
from typing import Any, Optional

from ta_binding.core.indicators.templates import available_bindings
from ta_binding.utils.config_loader import IndicatorsConfig
from ta_binding.utils.logger import LOGGER as logger

from .base_indicator import BaseIndicator, IndicatorConfig


class IndicatorRegistry:
    """
    Named ``BaseIndicator`` instances grouped by binding category.

    ``disabled_indicators`` and ``categories`` from ``IndicatorsConfig`` decide
    whether an indicator starts enabled; either can be toggled afterwards.
    """

    def __init__(self, indicator_control: Optional[IndicatorsConfig] = None) -> None:
        self._control = indicator_control or IndicatorsConfig()
        self._indicators: dict[str, BaseIndicator] = {}
        self._categories: defaultdict[str, list[str]] = defaultdict(
            list, {binding.category: [] for binding in available_bindings()}
        )

    def _starts_enabled(self, indicator: BaseIndicator) -> bool:
        if not indicator.enabled:
            return False
        if indicator.name in self._control.disabled_indicators:
            logger.info(f"Indicator {indicator.name} is listed in disabled_indicators")
            return False
        if not self._control.categories.get(indicator.category, True):
            logger.info(f"Category {indicator.category} is disabled, {indicator.name} starts disabled")
            return False
        return True

    def register_indicator(
        self,
        config: IndicatorConfig,
        indicator_class: type[BaseIndicator] = BaseIndicator,
    ) -> BaseIndicator:
        """
        Build an indicator from ``config`` and add it under ``config.name``.

        Raises:
            ValueError: the name is already registered.
            ParameterError: ``config.function`` names no binding.
        """
        if config.name in self._indicators:
            raise ValueError(f"Indicator {config.name} is already registered")

        indicator = indicator_class(config)
        indicator.enabled = self._starts_enabled(indicator)
        self._indicators[config.name] = indicator
        self._categories[indicator.category].append(config.name)

        logger.info(
            f"Registered indicator {config.name} -> {indicator.binding.function} "
            f"(category: {indicator.category}, enabled: {indicator.enabled})"
        )
        return indicator

    def get_indicator(self, name: str) -> Optional[BaseIndicator]:
        return self._indicators.get(name)

    def get_indicators_by_category(self, category: str) -> list[BaseIndicator]:
        return [self._indicators[name] for name in self._categories.get(category, [])]

    def get_all_indicators(self) -> dict[str, BaseIndicator]:
        return dict(self._indicators)

    def get_enabled_indicators(self) -> dict[str, BaseIndicator]:
        """Enabled indicators in registration order."""
        return {name: indicator for name, indicator in self._indicators.items() if indicator.enabled}

    def _set_enabled(self, name: str, enabled: bool) -> bool:
        indicator = self._indicators.get(name)
        if indicator is None:
            return False
        indicator.enabled = enabled
        logger.info(f"{'Enabled' if enabled else 'Disabled'} indicator: {name}")
        return True

    def enable_indicator(self, name: str) -> bool:
        return self._set_enabled(name, True)

    def disable_indicator(self, name: str) -> bool:
        return self._set_enabled(name, False)

    def enable_category(self, category: str) -> None:
        for name in self._categories.get(category, []):
            self._set_enabled(name, True)

    def disable_category(self, category: str) -> None:
        for name in self._categories.get(category, []):
            self._set_enabled(name, False)

    def get_registry_stats(self) -> dict[str, Any]:
        enabled = len(self.get_enabled_indicators())
        return {
            "total_indicators": len(self._indicators),
            "enabled_indicators": enabled,
            "disabled_indicators": len(self._indicators) - enabled,
            "categories": {category: len(names) for category, names in self._categories.items()},
        }

    def list_indicators(self) -> dict[str, dict[str, Any]]:
        """Status and binding details of every registered indicator."""
        return {
            name: {
                "enabled": indicator.enabled,
                "category": indicator.category,
                "function": indicator.binding.function,
                "inputs": dict(indicator.get_columns()),
                "params": indicator.config.params,
            }
            for name, indicator in self._indicators.items()
        }

    def clear_registry(self) -> None:
        self._indicators.clear()
        for names in self._categories.values():
            names.clear()
        logger.info("Cleared all indicators from registry")
