"""
Centralized logging configuration using Loguru.
Library modules log through ``LOGGER``; applications call ``LoggerSetup.setup_logger`` once.
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from loguru import logger

if TYPE_CHECKING:
    from types import FrameType

    from ta_binding.utils.config_loader import LoggingConfig


class InterceptHandler(logging.Handler):
    """Route records emitted through the standard ``logging`` module into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)

        depth: int = 1
        frame: Optional[FrameType] = sys._getframe(depth)
        while frame and (frame.f_code.co_filename == logging.__file__ or frame.f_code.co_filename == __file__):
            depth += 1
            try:
                frame = sys._getframe(depth)
            except ValueError:
                break

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


class LoggerSetup:
    """Centralized logger setup driven by ``LoggingConfig``."""

    _initialized: bool = False

    @classmethod
    def setup_logger(cls, logging_config: Optional["LoggingConfig"]) -> None:
        """Setup logger sinks. Safe to call more than once; only the first call takes effect."""
        if cls._initialized:
            return

        logger.remove()

        if logging_config:
            if logging_config.file:
                try:
                    log_file_path = Path(logging_config.file)
                    log_file_path.parent.mkdir(parents=True, exist_ok=True)

                    logger.add(
                        logging_config.file,
                        level=logging_config.level,
                        format=logging_config.format,
                        rotation=logging_config.rotation,
                        compression=logging_config.compression,
                        retention=logging_config.retention,
                        enqueue=True,
                        backtrace=False,
                        diagnose=False,
                        catch=True,
                        serialize=False,
                    )
                except OSError as e:
                    logger.opt(raw=True).error(
                        f"Failed to set up file logger: {e}\nLogging will proceed to console only.\n"
                    )

            logger.add(
                sys.stderr,
                level=logging_config.level,
                format=logging_config.format,
                colorize=logging_config.colorize,
                backtrace=False,
                diagnose=False,
                catch=True,
            )
            logging.basicConfig(handlers=[InterceptHandler()], level=getattr(logging, logging_config.level), force=True)
        else:
            logger.add(sys.stderr, level="INFO")
            logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)

        cls._initialized = True
        logger.debug("Logging initialized")

    @classmethod
    def reset(cls) -> None:
        """Allow a later ``setup_logger`` call to reconfigure the sinks."""
        cls._initialized = False


LOGGER = logger
__all__ = ["logger", "LOGGER", "LoggerSetup", "InterceptHandler"]
