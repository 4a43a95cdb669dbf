"""
Exception hierarchy for the binding layer.

Every failure raised by an indicator call derives from ``TALibError`` so callers
can catch one type; the subclasses also derive from the builtin they refine.
"""

from typing import Optional

from ta_binding.native.constants import RetCode


class TALibError(Exception):
    """Base class for all errors raised by ta_binding."""


class LibraryUnavailableError(TALibError, ImportError):
    """Raised when the native TA-Lib module cannot be imported."""


class InputError(TALibError, ValueError):
    """Raised when an input series cannot be handed to the native library."""


class ParameterError(TALibError, ValueError):
    """Raised when a parameter is not representable in the native signature."""


class NativeCallError(TALibError):
    """Raised when the native library reports a non-success return code."""

    def __init__(self, function: str, ret_code: RetCode, detail: Optional[str] = None) -> None:
        self.function = function
        self.ret_code = ret_code
        self.detail = detail
        message = f"Could not compute {function}; error: {ret_code.name} ({ret_code.description})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
