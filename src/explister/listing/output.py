"""
Render experiment listings.

Three formats:
- JSON: every record with its checkpoints, for scripting
- TABLE: aligned text columns for people
- QUIET: one experiment ID per line, for piping into other commands

The whole report is built in memory and written to the stream in one call
after every stage has succeeded. If reading, filtering or sorting fails,
nothing is written.

Example table:

    EXPERIMENT  STARTED         STATUS   HOST      USER     LR   LATEST CHECKPOINT  LOSS   BEST CHECKPOINT    LOSS
    1eeeeee     10 seconds ago  running  10.1.1.1  andreas  0.1  3cccccc (step 20)  0.02   2cccccc (step 15)  0.01
    2eeeeee     2 minutes ago   stopped  10.1.1.2  andreas  0.2  4cccccc (step 5)
"""

import io
import json
import logging
import sys
from dataclasses import fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, TextIO

from explister.listing.builder import ExperimentSource, build_list_records
from explister.listing.columns import metrics_to_display, params_to_display
from explister.listing.record import ListRecord
from explister.params.filters import Filters
from explister.params.sorter import Sorter
from explister.params.value import Value
from explister.project.checkpoint import Checkpoint
from explister.utils.timefmt import format_time, format_timestamp, utcnow

logger = logging.getLogger(__name__)

VALUE_MAX_LENGTH = 20
"""Cell values longer than this are truncated."""

VALUE_TRUNCATE_LENGTH = 5
"""Characters kept from a truncated value (an ellipsis is appended)."""

ID_LENGTH = 7
"""Characters of the experiment ID shown in tables."""

COLUMN_PADDING = 2
"""Minimum spaces between table columns."""

NO_EXPERIMENTS_MESSAGE = "No experiments found"

# Fields left out of JSON output
_JSON_EXCLUDED_FIELDS = ("config",)


class Format(Enum):
    """Output format of a listing."""

    JSON = "json"
    TABLE = "table"
    QUIET = "quiet"


# =============================================================================
# Entry Point
# =============================================================================


def list_experiments(
    source: ExperimentSource,
    fmt: Format,
    all_params: bool = False,
    filters: Optional[Filters] = None,
    sorter: Optional[Sorter] = None,
    stream: Optional[TextIO] = None,
    now: Optional[datetime] = None,
) -> None:
    """
    Print a listing of experiments.

    Args:
        source: Repository to read experiments from.
        fmt: Output format.
        all_params: Show every param column, not only those that differ.
        filters: Only list experiments matching these.
        sorter: Final ordering (default: by start time).
        stream: Output stream (default: stdout).
        now: Reference time for relative timestamps (default: current time).

    Raises:
        RepositoryError: If experiment data cannot be read.
        FilterError: If a filter cannot be evaluated.
        AssertionError: If ``fmt`` is not a Format.
    """
    if sorter is None:
        sorter = Sorter()

    records = build_list_records(source, filters)
    records = sorter.sort(records)
    logger.debug(f"Listing {len(records)} experiments sorted by {sorter}")

    if fmt == Format.JSON:
        text = render_json(records)
    elif fmt == Format.TABLE:
        text = render_table(records, all_params=all_params, now=now)
    elif fmt == Format.QUIET:
        text = render_quiet(records)
    else:
        raise AssertionError(f"Unknown format: {fmt!r}")

    if stream is None:
        stream = sys.stdout
    stream.write(text)
    stream.flush()


# =============================================================================
# Quiet
# =============================================================================


def render_quiet(records: Sequence[ListRecord]) -> str:
    return "".join(f"{record.id}\n" for record in records)


# =============================================================================
# JSON
# =============================================================================


def _to_json(obj: Any) -> Any:
    if isinstance(obj, Value):
        return obj.to_json()
    if isinstance(obj, Checkpoint):
        return obj.to_dict()
    if isinstance(obj, datetime):
        return format_timestamp(obj)
    if isinstance(obj, dict):
        return {k: _to_json(v) for k, v in obj.items()}
    return obj


def record_to_dict(record: ListRecord) -> Dict[str, Any]:
    """JSON-ready dict of a record, keys in field declaration order."""
    return {
        f.name: _to_json(getattr(record, f.name))
        for f in fields(record)
        if f.name not in _JSON_EXCLUDED_FIELDS
    }


def render_json(records: Sequence[ListRecord]) -> str:
    return json.dumps([record_to_dict(r) for r in records], indent=2, allow_nan=False) + "\n"


# =============================================================================
# Table
# =============================================================================


def _short(value: Optional[Value]) -> str:
    if value is None:
        return ""
    return value.short_string(VALUE_MAX_LENGTH, VALUE_TRUNCATE_LENGTH)


def _checkpoint_cells(checkpoint: Optional[Checkpoint], metrics: List[str]) -> List[str]:
    """Checkpoint label followed by one cell per metric."""
    if checkpoint is None:
        return [""] + [""] * len(metrics)
    label = f"{checkpoint.short_id()} (step {checkpoint.step})"
    return [label] + [_short(checkpoint.metrics.get(m)) for m in metrics]


def build_table(
    records: Sequence[ListRecord],
    all_params: bool = False,
    now: Optional[datetime] = None,
) -> List[List[str]]:
    """
    Header and data rows of the table view.

    The best checkpoint block is included only if at least one record has
    a best checkpoint. Every row has as many cells as the header.

    Returns:
        Rows of cells, header first. Empty if there are no records.
    """
    if not records:
        return []
    if now is None:
        now = utcnow()

    params = params_to_display(records, only_changed=not all_params)
    metrics = metrics_to_display(records)
    metric_headings = [m.upper() for m in metrics]
    show_best = any(r.best_checkpoint is not None for r in records)

    header = ["EXPERIMENT", "STARTED", "STATUS", "HOST", "USER"]
    header += [p.upper() for p in params]
    header += ["LATEST CHECKPOINT"] + metric_headings
    if show_best:
        header += ["BEST CHECKPOINT"] + metric_headings

    rows = [header]
    for record in records:
        row = [
            record.id[:ID_LENGTH],
            format_time(record.created, now=now),
            record.status,
            record.host,
            record.user,
        ]
        row += [_short(record.params.get(p)) for p in params]
        row += _checkpoint_cells(record.latest_checkpoint, metrics)
        if show_best:
            row += _checkpoint_cells(record.best_checkpoint, metrics)
        rows.append(row)

    return rows


def format_columns(rows: Sequence[Sequence[str]], padding: int = COLUMN_PADDING) -> str:
    """
    Align cells into columns separated by at least ``padding`` spaces.

    Trailing whitespace is stripped from each line.
    """
    if not rows:
        return ""
    n_cols = max(len(row) for row in rows)
    widths = [0] * n_cols
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    buf = io.StringIO()
    for row in rows:
        line = "".join(cell.ljust(widths[i] + padding) for i, cell in enumerate(row))
        buf.write(line.rstrip() + "\n")
    return buf.getvalue()


def render_table(
    records: Sequence[ListRecord],
    all_params: bool = False,
    now: Optional[datetime] = None,
) -> str:
    if not records:
        return NO_EXPERIMENTS_MESSAGE + "\n"
    return format_columns(build_table(records, all_params=all_params, now=now))
