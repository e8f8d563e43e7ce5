"""
Experiment listings: records, field resolution, column selection and output.

Usage:
    >>> from explister.listing import Format, list_experiments
    >>> from explister.project import ExperimentRepository
    >>>
    >>> repo = ExperimentRepository(".")
    >>> list_experiments(repo, Format.TABLE)
"""

from explister.listing.record import (
    ListRecord,
    FIELD_RESOLVERS,
    VIRTUAL_FIELDS,
)

from explister.listing.builder import (
    build_list_records,
    create_list_record,
)

from explister.listing.columns import (
    metrics_to_display,
    params_to_display,
)

from explister.listing.output import (
    Format,
    list_experiments,
    build_table,
    format_columns,
    record_to_dict,
    render_json,
    render_quiet,
    render_table,
)

__all__ = [
    # Records
    "ListRecord",
    "FIELD_RESOLVERS",
    "VIRTUAL_FIELDS",
    # Building
    "build_list_records",
    "create_list_record",
    # Columns
    "metrics_to_display",
    "params_to_display",
    # Output
    "Format",
    "list_experiments",
    "build_table",
    "format_columns",
    "record_to_dict",
    "render_json",
    "render_quiet",
    "render_table",
]
