"""
Abstract interfaces for storage providers.

Defines the contract for reminder persistence.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from pixs.core.entities.reminder import Reminder


class IReminderStore(ABC):
    """
    Abstract interface for reminder storage.

    The store owns the reminder collection; callers get values back and
    must persist changes through ``update``.
    """

    @abstractmethod
    async def create(self, reminder: Reminder) -> Reminder:
        """Create a new reminder."""
        pass

    @abstractmethod
    async def get(self, reminder_id: UUID) -> Reminder | None:
        """Get reminder by ID."""
        pass

    @abstractmethod
    async def update(self, reminder: Reminder) -> Reminder:
        """Update an existing reminder."""
        pass

    @abstractmethod
    async def delete(self, reminder_id: UUID) -> bool:
        """Delete a reminder by ID."""
        pass

    @abstractmethod
    async def list_reminders(
        self,
        include_complete: bool = True,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Reminder]:
        """List reminders, newest first."""
        pass

    @abstractmethod
    async def list_schedulable(self) -> list[Reminder]:
        """List reminders that are not complete and have a date."""
        pass

    @abstractmethod
    async def find_by_note(self, note_id: UUID) -> list[Reminder]:
        """Find reminders pointing at a note."""
        pass
