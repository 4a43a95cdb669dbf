import sys
from collections.abc import Generator

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from ta_binding.utils.logger import LoggerSetup

HIGH = [
    1.087130, 1.087120, 1.087220, 1.087230, 1.087180, 1.087160, 1.087210, 1.087150, 1.087200, 1.087230,
    1.087070, 1.087000, 1.086630, 1.086650, 1.086680, 1.086690, 1.086690, 1.086690, 1.086690, 1.086650,
]
LOW = [
    1.087010, 1.087120, 1.087080, 1.087170, 1.087110, 1.087010, 1.087100, 1.087120, 1.087110, 1.087080,
    1.087000, 1.086630, 1.086630, 1.086610, 1.086630, 1.086640, 1.086650, 1.086650, 1.086670, 1.086630,
]
CLOSE = [
    1.087130, 1.087120, 1.087220, 1.087230, 1.087110, 1.087120, 1.087100, 1.087120, 1.087130, 1.087080,
    1.087000, 1.086630, 1.086630, 1.086650, 1.086640, 1.086690, 1.086650, 1.086690, 1.086670, 1.086640,
]


@pytest.fixture
def high() -> list[float]:
    return list(HIGH)


@pytest.fixture
def low() -> list[float]:
    return list(LOW)


@pytest.fixture
def close() -> list[float]:
    return list(CLOSE)


@pytest.fixture
def ohlcv_df() -> pd.DataFrame:
    rng = np.random.default_rng(42)
    n = 120
    close = 100 + np.cumsum(rng.normal(0, 1, n))
    open_ = close + rng.normal(0, 0.3, n)
    high = np.maximum(open_, close) + rng.uniform(0.1, 1.0, n)
    low = np.minimum(open_, close) - rng.uniform(0.1, 1.0, n)
    volume = rng.integers(1_000, 10_000, n).astype(float)
    index = pd.date_range("2024-01-01 09:15", periods=n, freq="15min")
    return pd.DataFrame({"open": open_, "high": high, "low": low, "close": close, "volume": volume}, index=index)


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    LoggerSetup.reset()
    yield
    logger.remove()
    LoggerSetup.reset()
    logger.add(sys.stderr)
