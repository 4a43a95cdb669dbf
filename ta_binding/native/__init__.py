"""
Low-level binding surface over the native TA-Lib library.

``ta_binding.native.library`` holds the signature table and the callable wrappers;
this package namespace only re-exports the native constants.
"""

from .constants import INTEGER_DEFAULT, REAL_DEFAULT, MAType, OptInputKind, RetCode

__all__ = ["INTEGER_DEFAULT", "REAL_DEFAULT", "MAType", "OptInputKind", "RetCode"]
