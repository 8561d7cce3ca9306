"""Interfaces of the services the interpreter and its caller talk to."""
import logging
from typing import Any, Optional, Protocol

from models.command import CommandResult
from integrations.llm.client import LLMResponse

logger = logging.getLogger(__name__)


class LanguageModel(Protocol):
    async def generate(self, model_id: str, prompt: str) -> LLMResponse: ...


class Notifier(Protocol):
    """User-facing, toast-style notifications."""

    def error(self, message: str) -> None: ...


class DomainStore(Protocol):
    """Persistence layer that turns a confirmed command into an entity."""

    async def persist(self, result: CommandResult) -> dict[str, Any]:
        """Create the entity and return its stored record (including ``id``)."""
        ...


class KnowledgeIndex(Protocol):
    """Semantic store for created artifacts."""

    async def add(self, content: str, metadata: dict[str, Any]) -> bool: ...

    async def search(self, query: str) -> Optional[str]: ...


class LoggingNotifier:
    """Notifier for headless use: the notification goes to the log."""

    def error(self, message: str) -> None:
        logger.warning(f"User notification: {message}")
