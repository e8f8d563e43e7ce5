"""
Choose which param and metric columns a table shows.

Param columns:
- Object-valued params (dicts, lists) are never shown.
- By default only params whose value differs between at least two records
  are shown.

Metric columns are the primary metric names of the records' best
checkpoints.

Both are returned sorted so that output does not depend on dict order.
"""

import logging
from typing import Dict, List, Sequence, Set

from explister.listing.record import ListRecord
from explister.params.value import Incomparable, ParamType, Value

logger = logging.getLogger(__name__)


def params_to_display(records: Sequence[ListRecord], only_changed: bool = True) -> List[str]:
    """
    Param names to show as columns.

    In changed-only mode a param is shown when two of its values are proven
    unequal. Each value is compared against the values already kept for that
    param, starting with the first one seen; the first comparison that
    succeeds decides. A value that cannot be compared with any kept value
    (e.g. a string where numbers were seen) is logged as a warning and kept
    as another reference value. A failed comparison on its own never causes
    the param to be shown.

    Args:
        records: Records to consider.
        only_changed: If False, show every non-object param.

    Returns:
        Sorted param names.
    """
    headings: Set[str] = set()
    baselines: Dict[str, List[Value]] = {}

    for record in records:
        for key, value in record.params.items():
            if value.type == ParamType.OBJECT:
                continue

            if not only_changed:
                headings.add(key)
                continue

            if key in headings:
                continue

            if key not in baselines:
                baselines[key] = [value]
                continue

            compared = False
            for baseline in baselines[key]:
                not_equal = baseline.not_equal(value)
                if isinstance(not_equal, Incomparable):
                    continue
                compared = True
                if not_equal:
                    headings.add(key)
                break

            if not compared:
                logger.warning(f"Param '{key}' of experiment {record.id[:7]}: {not_equal}")
                baselines[key].append(value)

    return sorted(headings)


def metrics_to_display(records: Sequence[ListRecord]) -> List[str]:
    """Sorted primary metric names of all best checkpoints."""
    metrics: Set[str] = set()
    for record in records:
        checkpoint = record.best_checkpoint
        if checkpoint is None or checkpoint.primary_metric is None:
            continue
        metrics.add(checkpoint.primary_metric.name)
    return sorted(metrics)
