"""
Repair Request Use Cases

Suggestion, approval workflow and conversion into maintenance projects.
"""

from .convert_repair_request_use_case import ConvertRepairRequestUseCase
from .create_repair_request_use_case import CreateRepairRequestUseCase
from .dtos import (
    ConvertRepairRequestResponse,
    CreateRepairRequestCommand,
    RepairRequestStats,
    TransitionCommand,
)
from .get_repair_request_stats_use_case import GetRepairRequestStatsUseCase
from .get_repair_request_use_case import GetRepairRequestUseCase
from .list_repair_requests_use_case import ListRepairRequestsUseCase
from .transition_repair_request_use_case import TransitionRepairRequestUseCase

__all__ = [
    "ConvertRepairRequestUseCase",
    "CreateRepairRequestUseCase",
    "GetRepairRequestStatsUseCase",
    "GetRepairRequestUseCase",
    "ListRepairRequestsUseCase",
    "TransitionRepairRequestUseCase",
    "ConvertRepairRequestResponse",
    "CreateRepairRequestCommand",
    "RepairRequestStats",
    "TransitionCommand",
]
