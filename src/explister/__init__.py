"""
Experiment Lister: tabular, JSON and ID listings of tracked ML experiments.

Reads experiments and checkpoints recorded by the tracker in a project
directory and prints them as a report. Params that are identical across
all listed experiments are hidden by default, so the table shows what
actually distinguishes one run from another.

Field names available to filters and sorting:
    - Virtual: started, step, user, host, command, status
    - Metrics of each experiment's best checkpoint
    - Experiment params

Quick Start:
    >>> from explister import ExperimentRepository, Format, Filters, Sorter, list_experiments
    >>>
    >>> repo = ExperimentRepository("path/to/project")
    >>> list_experiments(
    ...     repo,
    ...     Format.TABLE,
    ...     filters=Filters.parse(["status = stopped"]),
    ...     sorter=Sorter.parse("val_loss"),
    ... )
"""

__version__ = "0.1.0"

# Values, filtering, sorting
from explister.params import (
    ParamType,
    Value,
    Filters,
    FilterError,
    Sorter,
)

# Tracker data
from explister.project import (
    Checkpoint,
    Experiment,
    ExperimentRepository,
    MetricGoal,
    PrimaryMetric,
    RepositoryError,
)

# Listing
from explister.listing import (
    Format,
    ListRecord,
    list_experiments,
)

# Configuration
from explister.config import (
    ListingConfig,
    load_config,
    save_config,
)

__all__ = [
    # Version
    "__version__",
    # Values
    "ParamType",
    "Value",
    "Filters",
    "FilterError",
    "Sorter",
    # Tracker data
    "Checkpoint",
    "Experiment",
    "ExperimentRepository",
    "MetricGoal",
    "PrimaryMetric",
    "RepositoryError",
    # Listing
    "Format",
    "ListRecord",
    "list_experiments",
    # Configuration
    "ListingConfig",
    "load_config",
    "save_config",
]
