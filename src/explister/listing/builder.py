"""
Build list records from repository experiments.

Any error while reading experiments, checking run state or evaluating
filters aborts the whole listing. No experiment is skipped.
"""

import logging
from typing import List, Optional, Protocol

from explister.listing.record import ListRecord
from explister.params.filters import Filters
from explister.project.experiment import Experiment

logger = logging.getLogger(__name__)


class ExperimentSource(Protocol):
    """What the builder needs from a repository."""

    def list_experiments(self) -> List[Experiment]:
        ...

    def experiment_is_running(self, experiment_id: str) -> bool:
        ...


def create_list_record(experiment: Experiment, running: bool) -> ListRecord:
    """Snapshot one experiment as a list record."""
    return ListRecord(
        id=experiment.id,
        created=experiment.created,
        params=experiment.params,
        command=experiment.command,
        num_checkpoints=len(experiment.checkpoints),
        latest_checkpoint=experiment.latest_checkpoint(),
        best_checkpoint=experiment.best_checkpoint(),
        user=experiment.user,
        host=experiment.host,
        running=running,
        config=experiment.config,
    )


def build_list_records(
    source: ExperimentSource,
    filters: Optional[Filters] = None,
) -> List[ListRecord]:
    """
    Build, filter and order list records.

    Args:
        source: Repository to read experiments from.
        filters: Records not matching are dropped (default: keep all).

    Returns:
        Matching records, oldest first. Records with the same creation
        time keep repository order.

    Raises:
        RepositoryError: If experiments or run state cannot be read.
        FilterError: If a filter cannot be evaluated on a record.
    """
    if filters is None:
        filters = Filters()

    records = []
    experiments = source.list_experiments()
    for experiment in experiments:
        running = source.experiment_is_running(experiment.id)
        record = create_list_record(experiment, running)
        if not filters.matches(record):
            continue
        records.append(record)

    logger.debug(f"{len(records)} of {len(experiments)} experiments match filters")

    records.sort(key=lambda r: r.created)
    return records
