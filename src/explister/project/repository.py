"""
File-based experiment repository.

The tracker writes one JSON document per experiment, with its checkpoints
embedded, and a heartbeat file that a running experiment refreshes
periodically. The lister only reads from it; the write methods exist for
the tracker side and for tests.

Directory structure:
    base_dir/
    └── metadata/
        ├── experiments/
        │   ├── {experiment_id}.json   # Experiment with its checkpoints
        │   └── ...
        └── heartbeats/
            ├── {experiment_id}.json   # {"last_heartbeat": "<ISO timestamp>"}
            └── ...

An experiment is considered running when its heartbeat is younger than
``heartbeat_timeout`` seconds.

Usage:
    >>> repo = ExperimentRepository("path/to/project")
    >>> for exp in repo.list_experiments():
    ...     print(exp.id, repo.experiment_is_running(exp.id))
"""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Union

from explister.project.experiment import Experiment
from explister.utils.timefmt import format_timestamp, parse_timestamp, utcnow

logger = logging.getLogger(__name__)

DEFAULT_HEARTBEAT_TIMEOUT = 30.0
"""Seconds after the last heartbeat at which an experiment counts as stopped."""


class RepositoryError(Exception):
    """Raised when experiment data cannot be read."""


class ExperimentRepository:
    """
    Reads and writes experiments under a project directory.

    Args:
        base_dir: Project directory containing ``metadata/``.
        heartbeat_timeout: Seconds before a silent experiment counts as stopped.
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        heartbeat_timeout: float = DEFAULT_HEARTBEAT_TIMEOUT,
    ):
        if heartbeat_timeout <= 0:
            raise ValueError(f"heartbeat_timeout must be > 0, got {heartbeat_timeout}")

        self.base_dir = Path(base_dir)
        self.heartbeat_timeout = heartbeat_timeout
        self._experiments_dir = self.base_dir / "metadata" / "experiments"
        self._heartbeats_dir = self.base_dir / "metadata" / "heartbeats"

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def list_experiments(self) -> List[Experiment]:
        """
        Load every experiment in the repository.

        Order follows the file system and is not meaningful.

        Raises:
            RepositoryError: If the repository is missing or a file is corrupt.
        """
        if not self.base_dir.is_dir():
            raise RepositoryError(f"Repository does not exist: {self.base_dir}")
        if not self._experiments_dir.exists():
            logger.debug(f"No experiments directory in {self.base_dir}")
            return []

        experiments = []
        for path in self._experiments_dir.glob("*.json"):
            experiments.append(self._load_experiment(path))

        logger.debug(f"Loaded {len(experiments)} experiments from {self._experiments_dir}")
        return experiments

    def get(self, experiment_id: str) -> Optional[Experiment]:
        """
        Load one experiment by ID.

        Returns:
            Experiment or None if not found.
        """
        path = self._experiments_dir / f"{experiment_id}.json"
        if not path.exists():
            return None
        return self._load_experiment(path)

    def experiment_is_running(self, experiment_id: str) -> bool:
        """
        Whether the experiment has sent a heartbeat recently.

        A missing heartbeat file means the experiment is not running.

        Raises:
            RepositoryError: If the heartbeat file cannot be read or parsed.
        """
        path = self._heartbeats_dir / f"{experiment_id}.json"
        if not path.exists():
            return False

        try:
            with open(path) as f:
                data = json.load(f)
            last_heartbeat = parse_timestamp(data["last_heartbeat"])
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise RepositoryError(f"Failed to read heartbeat for {experiment_id}: {e}") from e

        age = utcnow() - last_heartbeat
        return age < timedelta(seconds=self.heartbeat_timeout)

    def _load_experiment(self, path: Path) -> Experiment:
        try:
            with open(path) as f:
                data = json.load(f)
            return Experiment.from_dict(data)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise RepositoryError(f"Failed to load experiment from {path}: {e}") from e

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def save_experiment(self, experiment: Experiment) -> Path:
        """
        Write an experiment (and its checkpoints) to disk.

        Returns:
            Path of the written file.
        """
        self._experiments_dir.mkdir(parents=True, exist_ok=True)
        path = self._experiments_dir / f"{experiment.id}.json"
        with open(path, "w") as f:
            json.dump(experiment.to_dict(), f, indent=2)

        logger.info(f"Saved experiment: {experiment.id}")
        return path

    def write_heartbeat(self, experiment_id: str, when: Optional[datetime] = None) -> None:
        """Record that an experiment is alive at ``when`` (default: now)."""
        self._heartbeats_dir.mkdir(parents=True, exist_ok=True)
        path = self._heartbeats_dir / f"{experiment_id}.json"
        with open(path, "w") as f:
            json.dump({"last_heartbeat": format_timestamp(when or utcnow())}, f)
