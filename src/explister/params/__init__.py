"""
Typed param/metric values and the filter and sort engines that work on them.
"""

from explister.params.value import (
    ParamType,
    Value,
    Incomparable,
)

from explister.params.filters import (
    Filter,
    Filters,
    FilterError,
)

from explister.params.sorter import (
    Sorter,
    DEFAULT_SORT_KEY,
)

__all__ = [
    # Values
    "ParamType",
    "Value",
    "Incomparable",
    # Filtering
    "Filter",
    "Filters",
    "FilterError",
    # Sorting
    "Sorter",
    "DEFAULT_SORT_KEY",
]
