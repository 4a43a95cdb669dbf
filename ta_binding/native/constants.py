"""
Constants shared with the native TA-Lib library.

Values match ``ta_defs.h``; the native side interprets them, this module only names them.
"""

from enum import Enum, IntEnum
from typing import Final

# Sentinels asking the native library to use its own default for an optional input.
INTEGER_DEFAULT: Final[int] = -(2**31)
REAL_DEFAULT: Final[float] = -4e37

INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1

# Reals below this (other than REAL_DEFAULT) are rejected natively as out of range.
REAL_LOWER_BOUND: Final[float] = -3e37
REAL_UPPER_BOUND: Final[float] = 3e37


class RetCode(IntEnum):
    SUCCESS = 0
    LIB_NOT_INITIALIZE = 1
    BAD_PARAM = 2
    ALLOC_ERR = 3
    GROUP_NOT_FOUND = 4
    FUNC_NOT_FOUND = 5
    INVALID_HANDLE = 6
    INVALID_PARAM_HOLDER = 7
    INVALID_PARAM_HOLDER_TYPE = 8
    INVALID_PARAM_FUNCTION = 9
    INPUT_NOT_ALL_INITIALIZE = 10
    OUTPUT_NOT_ALL_INITIALIZE = 11
    OUT_OF_RANGE_START_INDEX = 12
    OUT_OF_RANGE_END_INDEX = 13
    INVALID_LIST_TYPE = 14
    BAD_OBJECT = 15
    NOT_SUPPORTED = 16
    INTERNAL_ERROR = 5000
    UNKNOWN_ERR = 0xFFFF

    @property
    def description(self) -> str:
        return _RET_CODE_DESCRIPTIONS[self]

    @classmethod
    def from_code(cls, code: int) -> "RetCode":
        """Map a raw native code onto the enum. Codes 5000-5999 are internal errors."""
        try:
            return cls(code)
        except ValueError:
            if 5000 <= code < 6000:
                return cls.INTERNAL_ERROR
            return cls.UNKNOWN_ERR


_RET_CODE_DESCRIPTIONS: Final[dict[RetCode, str]] = {
    RetCode.SUCCESS: "Success",
    RetCode.LIB_NOT_INITIALIZE: "Library Not Initialized",
    RetCode.BAD_PARAM: "Bad Parameter",
    RetCode.ALLOC_ERR: "Allocation Error",
    RetCode.GROUP_NOT_FOUND: "Group Not Found",
    RetCode.FUNC_NOT_FOUND: "Function Not Found",
    RetCode.INVALID_HANDLE: "Invalid Handle",
    RetCode.INVALID_PARAM_HOLDER: "Invalid Parameter Holder",
    RetCode.INVALID_PARAM_HOLDER_TYPE: "Invalid Parameter Holder Type",
    RetCode.INVALID_PARAM_FUNCTION: "Invalid Parameter Function",
    RetCode.INPUT_NOT_ALL_INITIALIZE: "Input Not All Initialized",
    RetCode.OUTPUT_NOT_ALL_INITIALIZE: "Output Not All Initialized",
    RetCode.OUT_OF_RANGE_START_INDEX: "Out-of-Range Start Index",
    RetCode.OUT_OF_RANGE_END_INDEX: "Out-of-Range End Index",
    RetCode.INVALID_LIST_TYPE: "Invalid List Type",
    RetCode.BAD_OBJECT: "Bad Object",
    RetCode.NOT_SUPPORTED: "Not Supported",
    RetCode.INTERNAL_ERROR: "Internal Error",
    RetCode.UNKNOWN_ERR: "Unknown Error",
}


class MAType(IntEnum):
    SMA = 0
    EMA = 1
    WMA = 2
    DEMA = 3
    TEMA = 4
    TRIMA = 5
    KAMA = 6
    MAMA = 7
    T3 = 8


class OptInputKind(Enum):
    INTEGER = "integer"
    REAL = "real"
    MA_TYPE = "ma_type"
