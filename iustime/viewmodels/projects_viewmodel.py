# Rev 0.2.0
# iustime/viewmodels/projects_viewmodel.py
from __future__ import annotations

import dataclasses
from typing import List, Optional

from PySide6.QtCore import Signal

from iustime.models.entities import Project
from iustime.viewmodels.base import LineScopedViewModel


class ProjectsViewModel(LineScopedViewModel):
    """
    Emits:
      - projectsReloaded(projects: list[Project])
    Project progress shown here is the cached value the store maintains.
    """

    projectsReloaded = Signal(list)

    def reload(self) -> None:
        self.projectsReloaded.emit(self.list_projects())

    def list_projects(self) -> List[Project]:
        return self._store.projects_for_line(self._line_id)

    def get_project(self, project_id: str) -> Optional[Project]:
        return self._store.projects.get(project_id)

    def task_count(self, project_id: str) -> int:
        return sum(1 for t in self._store.tasks.list() if t.project_id == project_id)

    def new_project(self) -> Project:
        return Project(id="", line_id=self._line_id or "", name="")

    def create_project(self, project: Project) -> Optional[Project]:
        project = dataclasses.replace(project, line_id=project.line_id or self._line_id or "")
        return self._mutate(lambda: self._store.add_project(project), None)

    def update_project(self, project: Project) -> bool:
        return self._mutate(lambda: self._store.update_project(project), False)

    def delete_project(self, project_id: str) -> bool:
        return self._mutate(lambda: self._store.delete_project(project_id), False)
