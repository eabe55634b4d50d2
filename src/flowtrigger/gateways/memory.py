"""In-memory project resolver backed by a JSON project catalogue."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from flowtrigger.exceptions import FlowTriggerError
from flowtrigger.models.project import Flow, Project

logger = logging.getLogger(__name__)


class InMemoryProjectResolver:
    """ProjectResolver over a dict of projects keyed by id.

    Reads are lock-free; ``add_project`` swaps entries under a lock so the
    resolver can be shared by concurrently firing actions.

    Catalogue format::

        {"projects": [{"id": 1, "name": "etl", "version": 3,
                       "flows": {"daily": {"id": "daily",
                                           "failureEmails": ["ops@x"]}}}]}
    """

    def __init__(self, projects: list[Project] | None = None) -> None:
        self._projects: dict[int, Project] = {}
        self._lock = threading.Lock()
        for project in projects or []:
            self.add_project(project)

    def add_project(self, project: Project) -> None:
        with self._lock:
            self._projects[project.id] = project

    def remove_project(self, project_id: int) -> None:
        with self._lock:
            self._projects.pop(project_id, None)

    def get_project(self, project_id: int) -> Project | None:
        return self._projects.get(project_id)

    def get_flow(self, project: Project, flow_name: str) -> Flow | None:
        return project.get_flow(flow_name)

    @property
    def project_ids(self) -> list[int]:
        return sorted(self._projects)

    @classmethod
    def from_object(cls, obj: dict) -> InMemoryProjectResolver:
        """Build a resolver from a parsed catalogue dict.

        Raises:
            FlowTriggerError: If the catalogue does not validate.
        """
        if not isinstance(obj, dict):
            raise FlowTriggerError("Project catalogue must be a JSON object")
        try:
            projects = [Project.model_validate(p) for p in obj.get("projects", [])]
        except ValidationError as e:
            raise FlowTriggerError(f"Invalid project catalogue: {e}") from e
        logger.debug("Loaded %d project(s) into resolver", len(projects))
        return cls(projects)

    @classmethod
    def from_file(cls, path: str | Path) -> InMemoryProjectResolver:
        """Load a catalogue from a JSON file."""
        with open(path, encoding="utf-8") as f:
            return cls.from_object(json.load(f))
