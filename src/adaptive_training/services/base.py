"""
Base service classes and protocols.

Defines the collaborator interfaces the engine talks to and the base class
shared by all engine services.
"""

from abc import ABC
from typing import Optional, Protocol, runtime_checkable
import logging

from ..config import Settings, get_settings
from ..models.plans import ProgressionPlan, WorkoutPlan


@runtime_checkable
class PlanStore(Protocol):
    """
    Protocol for the persistence collaborator.

    The engine only writes; reads and transactional guarantees belong to
    the implementation.
    """

    def update_workout_plan(self, plan_id: str, plan: WorkoutPlan) -> None:
        """Replace the stored plan with the given id."""
        ...

    def add_progression_plan(self, entry: ProgressionPlan) -> None:
        """Record a progression entry."""
        ...


class BaseService(ABC):
    """
    Abstract base class for engine services.

    Provides common functionality:
    - Logging setup (the diagnostics port)
    - Settings injection
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._logger = logger or logging.getLogger(self.__class__.__module__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    @property
    def settings(self) -> Settings:
        """Get the settings instance."""
        return self._settings
