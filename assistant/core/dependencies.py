"""
Shared singleton dependencies.

The LLM client owns an httpx connection pool, so it is created once and
reused by every interpreter built through ``get_interpreter()``.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from config.logging_config import setup_logging
from config.settings import settings
from core.collaborators import Notifier
from core.interpreter import CommandInterpreter
from integrations.llm.client import LLMClient

logger = logging.getLogger(__name__)

# Module-level singleton, initialized once via init_dependencies()
_llm_client: Optional[LLMClient] = None


def init_dependencies() -> None:
    """Initialize shared singletons. Safe to call more than once."""
    global _llm_client

    if _llm_client is not None:
        return

    setup_logging(settings.LOG_LEVEL)
    logger.info("Initializing shared dependencies...")
    _llm_client = LLMClient()
    logger.info(f"LLM client ready: provider={settings.LLM_PROVIDER}, model={settings.LLM_MODEL}")


async def shutdown_dependencies() -> None:
    """Clean up resources on shutdown."""
    global _llm_client
    if _llm_client:
        await _llm_client.close()
        _llm_client = None
        logger.info("LLMClient closed")


def get_llm_client() -> LLMClient:
    if _llm_client is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")
    return _llm_client


def get_interpreter(notifier: Optional[Notifier] = None) -> CommandInterpreter:
    """
    Build a CommandInterpreter on the shared LLM client.

    Each UI surface should hold its own interpreter: the processing flag is
    per instance.
    """
    return CommandInterpreter(get_llm_client(), notifier=notifier)


@asynccontextmanager
async def interpreter_session(notifier: Optional[Notifier] = None) -> AsyncIterator[CommandInterpreter]:
    """Startup / shutdown lifecycle around a single interpreter."""
    init_dependencies()
    try:
        yield get_interpreter(notifier)
    finally:
        await shutdown_dependencies()
