# pysem/validation/__init__.py

from .checks import (
    ProjectionError,
    validate_time_axis,
    require_previous_activity,
    check_category_sum,
)

__all__ = [
    'ProjectionError',
    'validate_time_axis',
    'require_previous_activity',
    'check_category_sum',
]
