"""Command dispatcher: executes a confirmed CommandResult against the domain store."""
import time
import logging
from typing import Any, Optional

from pydantic import BaseModel

from models.intent import INTENT_CATALOG, Intent
from models.command import CommandResult
from core.collaborators import DomainStore, KnowledgeIndex

logger = logging.getLogger(__name__)

# Intents that only talk, or need more input before anything can be stored
_NON_PERSISTING = {Intent.SEARCH_KNOWLEDGE, Intent.GENERAL_CHAT, Intent.UNKNOWN}


class DispatchOutcome(BaseModel):
    """Result of executing one confirmed command."""
    success: bool
    intent: Intent
    record: Optional[dict[str, Any]] = None
    indexed: bool = False
    answer: Optional[str] = None
    error: Optional[str] = None
    execution_time_ms: int = 0


def knowledge_text(intent: Intent, params: dict[str, Any]) -> str:
    """Text registered with the knowledge index for a created artifact."""
    if intent == Intent.CREATE_TASK:
        title = str(params.get("title", ""))
        description = params.get("description")
        return f"{title}\n\n{description}" if description else title
    if intent in (Intent.CREATE_NOTE, Intent.CREATE_JOURNAL):
        return str(params.get("content", ""))

    entity_type = INTENT_CATALOG[intent].entity_type or intent.value
    header = entity_type.replace("_", " ").title()
    lines = [f"{header}: {params.get('name') or params.get('description') or ''}".rstrip()]
    for key, value in params.items():
        if key in ("name", "description") or value is None:
            continue
        lines.append(f"{key.replace('_', ' ').capitalize()}: {value}")
    return "\n".join(lines)


def index_metadata(entity_type: str, params: dict[str, Any], original_id: Any) -> dict[str, Any]:
    """
    Metadata stored alongside an indexed artifact.

    ``type`` is reserved for the entity tag, so a slot of the same name is
    kept as ``<entity>_type`` (e.g. ``transaction_type``).
    """
    metadata: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        metadata[f"{entity_type}_type" if key == "type" else key] = value
    metadata["type"] = entity_type
    metadata["original_id"] = original_id
    return metadata


class CommandDispatcher:
    """
    Caller-side executor for interpreter output.

    Creation intents are persisted, then registered with the knowledge
    index; searches are answered by the index. Must be called once per
    confirmed command.
    """

    def __init__(self, store: DomainStore, knowledge_index: KnowledgeIndex):
        self.store = store
        self.knowledge_index = knowledge_index

    async def execute(self, result: CommandResult) -> DispatchOutcome:
        start_time = time.time()
        intent = result.intent

        if intent == Intent.SEARCH_KNOWLEDGE:
            try:
                answer = await self.knowledge_index.search(result.original_query)
            except Exception as e:
                logger.error(f"Knowledge search failed: {e}", exc_info=True)
                return DispatchOutcome(success=False, intent=intent, error=str(e))
            return DispatchOutcome(
                success=True,
                intent=intent,
                answer=answer,
                execution_time_ms=int((time.time() - start_time) * 1000),
            )

        if intent in _NON_PERSISTING:
            return DispatchOutcome(success=True, intent=intent)

        if result.missing_fields:
            return DispatchOutcome(
                success=False,
                intent=intent,
                error=f"Missing required field(s): {', '.join(result.missing_fields)}",
            )

        # ACT: persist the entity
        try:
            record = await self.store.persist(result)
        except Exception as e:
            logger.error(f"Persisting {intent.value} failed: {e}", exc_info=True)
            return DispatchOutcome(success=False, intent=intent, error=str(e))

        indexed = await self._index(intent, result.params, record)

        execution_time = int((time.time() - start_time) * 1000)
        logger.info(f"Executed {intent.value} in {execution_time}ms (indexed={indexed})")
        return DispatchOutcome(
            success=True,
            intent=intent,
            record=record,
            indexed=indexed,
            execution_time_ms=execution_time,
        )

    async def _index(self, intent: Intent, params: dict[str, Any], record: dict[str, Any]) -> bool:
        entity_type = INTENT_CATALOG[intent].entity_type
        if entity_type is None:
            return False

        metadata = index_metadata(entity_type, params, record.get("id"))
        try:
            return bool(await self.knowledge_index.add(knowledge_text(intent, params), metadata))
        except Exception as e:
            # The entity already exists; a missing index entry is recoverable later
            logger.warning(f"Indexing {entity_type} {record.get('id')} failed: {e}")
            return False
