"""
Command line access to the indicator bindings.
Reads OHLCV data from CSV files and prints aligned results as CSV.
"""

from enum import Enum
from typing import Annotated, Any, Optional

import pandas as pd
import typer
import yaml

from ta_binding.core.indicators import (
    BaseIndicator,
    IndicatorCalculator,
    IndicatorConfig,
    available_bindings,
    get_binding,
)
from ta_binding.errors import TALibError
from ta_binding.native.library import native_version
from ta_binding.utils.config_loader import ConfigLoader, LoggingConfig
from ta_binding.utils.logger import LoggerSetup

app = typer.Typer(
    name="ta-binding",
    help="Run TA-Lib indicator bindings over CSV price data.",
    no_args_is_help=True,
)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# --- Helper Functions --- #
def _configure_logging(ctx: typer.Context, base: Optional[LoggingConfig] = None) -> None:
    settings = (base or LoggingConfig()).model_dump()
    settings.update(level=ctx.obj["log_level"], colorize=False)
    LoggerSetup.reset()
    LoggerSetup.setup_logger(LoggingConfig(**settings))


def _parse_pairs(pairs: Optional[list[str]], option: str) -> dict[str, Any]:
    """Parse repeated ``key=value`` options; values are read as YAML scalars."""
    parsed: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got '{pair}'", param_hint=option)
        parsed[key.strip()] = yaml.safe_load(value)
    return parsed


def _read_csv(path: str) -> pd.DataFrame:
    try:
        return pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        print(f"Error: could not read '{path}': {e}")
        raise typer.Exit(code=1) from e


# --- CLI Commands --- #


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[LogLevel, typer.Option(case_sensitive=False, help="Log level for stderr output.")] = (
        LogLevel.WARNING
    ),
) -> None:
    ctx.obj = {"log_level": log_level.value}


@app.command("list")
def list_bindings() -> None:
    """List the available indicator bindings."""
    for binding in available_bindings():
        inputs = ", ".join(binding.inputs)
        params = ", ".join(binding.params) or "-"
        print(f"{binding.name:<40} {binding.function:<10} {binding.category:<11} ({inputs}) [{params}]")


@app.command()
def version() -> None:
    """Show the version of the native TA-Lib library."""
    try:
        print(native_version())
    except TALibError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1) from e


@app.command()
def compute(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Binding name (e.g., simple_moving_average) or native name (e.g., SMA).")],
    csv_path: Annotated[str, typer.Argument(help="CSV file with a header row of column names.")],
    param: Annotated[
        Optional[list[str]], typer.Option(help="Indicator parameter as key=value (e.g., period=14).")
    ] = None,
    column: Annotated[
        Optional[list[str]], typer.Option(help="Map a binding input to a CSV column as input=column (e.g., values=open).")
    ] = None,
) -> None:
    """Compute one indicator over a CSV file and print the aligned result."""
    _configure_logging(ctx)
    try:
        binding = get_binding(name)
    except KeyError as e:
        print(f"Error: unknown indicator '{name}'. Run 'list' to see the available bindings.")
        raise typer.Exit(code=1) from e

    columns = {key: str(value) for key, value in _parse_pairs(column, "--column").items()}
    config = IndicatorConfig(
        name=binding.name, function=binding.name, params=_parse_pairs(param, "--param"), columns=columns
    )
    indicator = BaseIndicator(config, binding)

    result = indicator.calculate(_read_csv(csv_path))
    if not result.success or result.data is None:
        print(f"Error: {result.error_message}")
        raise typer.Exit(code=1)
    print(result.data.to_csv(), end="")


@app.command()
def features(
    ctx: typer.Context,
    csv_path: Annotated[str, typer.Argument(help="OHLCV CSV file with a header row.")],
    config_path: Annotated[Optional[str], typer.Option("--config", help="Path to the YAML configuration.")] = None,
    timeframe: Annotated[Optional[int], typer.Option(help="Timeframe in minutes for parameter overrides.")] = None,
) -> None:
    """Compute every configured indicator over a CSV file."""
    try:
        config = ConfigLoader(config_path).get_config()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1) from e

    _configure_logging(ctx, config.logging)
    df = _read_csv(csv_path)
    try:
        feature_frame = IndicatorCalculator(config).calculate_timeframe_features(df, timeframe)
    except (RuntimeError, TALibError) as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1) from e
    print(feature_frame.to_csv(), end="")


if __name__ == "__main__":
    app()
