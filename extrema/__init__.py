"""
Extrema — Edge-biased value generation for property-based tests.

Public API::

    from extrema import extreme_values, check, CheckConfig

    def prop(x: Int32) -> bool:
        return abs2(x) >= 0

    check(prop, CheckConfig(values=extreme_values(prop)))
"""
from extrema.config import ENGINE_VERSION
from extrema.fallback import value
from extrema.harness import CheckConfig, check, check_equal, extreme_arguments
from extrema.inference import describe_parameters
from extrema.kinds import (
    Complex64, Float32,
    Int8, Int16, Int32, Int64,
    UInt, UInt8, UInt16, UInt32, UInt64, UIntPtr,
    NearZeroVariant, ScalarKind, StrategyChoice,
    kind_of,
)
from extrema.selector import StrategySelector, extreme_values
from extrema.table import ExtremeValueTable
from extrema.types import (
    CheckEqualError, CheckError, ExtremaError,
    ParameterDescriptor, SetupError,
)

__version__ = ENGINE_VERSION.split("-", 1)[1]

__all__ = [
    "CheckConfig",
    "CheckEqualError",
    "CheckError",
    "Complex64",
    "ExtremaError",
    "ExtremeValueTable",
    "Float32",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "NearZeroVariant",
    "ParameterDescriptor",
    "ScalarKind",
    "SetupError",
    "StrategyChoice",
    "StrategySelector",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UIntPtr",
    "check",
    "check_equal",
    "describe_parameters",
    "extreme_arguments",
    "extreme_values",
    "kind_of",
    "value",
]
