"""
Maintenance Project Use Cases
"""

from .archive_maintenance_project_use_case import (
    ArchiveMaintenanceProjectUseCase,
    UnarchiveMaintenanceProjectUseCase,
)
from .create_maintenance_project_use_case import CreateMaintenanceProjectUseCase
from .delete_maintenance_project_use_case import DeleteMaintenanceProjectUseCase
from .dtos import CreateMaintenanceProjectCommand, ProjectTransitionCommand
from .get_maintenance_project_use_case import GetMaintenanceProjectUseCase
from .list_maintenance_projects_use_case import ListMaintenanceProjectsUseCase
from .transition_maintenance_project_use_case import TransitionMaintenanceProjectUseCase

__all__ = [
    "ArchiveMaintenanceProjectUseCase",
    "UnarchiveMaintenanceProjectUseCase",
    "CreateMaintenanceProjectUseCase",
    "DeleteMaintenanceProjectUseCase",
    "GetMaintenanceProjectUseCase",
    "ListMaintenanceProjectsUseCase",
    "TransitionMaintenanceProjectUseCase",
    "CreateMaintenanceProjectCommand",
    "ProjectTransitionCommand",
]
