"""
Extrema — Test-harness integrations.

Public API::

    from extrema.harness import check, check_equal, CheckConfig
    from extrema.harness import extreme_arguments
"""
from extrema.harness.quick import CheckConfig, check, check_equal
from extrema.harness.strategies import extreme_arguments

__all__ = ["CheckConfig", "check", "check_equal", "extreme_arguments"]
