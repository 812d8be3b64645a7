from dataclasses import dataclass
from typing import Sequence

from bigq.errors import ArgumentError, ConfigError
from common.config.env import get_env_str


@dataclass(frozen=True)
class Config:
    """Project and default dataset every query is scoped to."""

    project_id: str
    dataset_id: str

    def __post_init__(self) -> None:
        """Reject empty project or dataset identifiers."""
        missing = [
            name
            for name, value in {
                "project_id": self.project_id,
                "dataset_id": self.dataset_id,
            }.items()
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise ConfigError(
                f"dataset and project can not be empty (missing: {', '.join(missing)})"
            )

    @classmethod
    def from_env(cls) -> "Config":
        """Load the query scope from BIGQUERY_PROJECT and BIGQUERY_DATASET."""
        project = get_env_str("BIGQUERY_PROJECT")
        dataset = get_env_str("BIGQUERY_DATASET")

        missing = [
            name
            for name, value in {
                "BIGQUERY_PROJECT": project,
                "BIGQUERY_DATASET": dataset,
            }.items()
            if not value
        ]
        if missing:
            missing_list = ", ".join(missing)
            raise ConfigError(
                f"bigq missing required config: {missing_list}. "
                "Set BIGQUERY_PROJECT and BIGQUERY_DATASET."
            )

        return cls(project_id=project, dataset_id=dataset)


@dataclass(frozen=True)
class QueryOptions:
    """Result window for a query.

    ``offset`` is the index of the first row to return. ``page_size`` is the
    maximum number of rows per backend page; 0 lets the backend choose.
    """

    offset: int = 0
    page_size: int = 0

    def __post_init__(self) -> None:
        """Enforce unsigned integer semantics."""
        for name in ("offset", "page_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ArgumentError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ArgumentError(f"{name} must be non-negative, got {value}")

    @property
    def max_results(self):
        """Return the result-limit hint for the backend, or None when unset."""
        return self.page_size if self.page_size > 0 else None

    @classmethod
    def from_args(cls, args: Sequence[int]) -> "QueryOptions":
        """Interpret positional query arguments as ``(offset[, page_size])``."""
        if len(args) > 2:
            raise ArgumentError(f"too many arguments given to query: {len(args)}")
        return cls(*args)
