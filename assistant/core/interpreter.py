"""Command interpreter: one free-text utterance in, one CommandResult out."""
import time
import logging
from datetime import date
from typing import Callable, Optional

from models.intent import Intent
from models.command import CommandResult, ExtractionResult
from core.mentions import parse_mention, strip_mention
from core.classifier import IntentClassifier
from core.extractors import SLOT_SCHEMAS, SlotExtractor
from core.confirmation import synthesize_confirmation
from core.collaborators import LanguageModel, LoggingNotifier, Notifier
from integrations.llm.client import LLMServiceError
from config.settings import settings

logger = logging.getLogger(__name__)

# Fields collected interactively by the caller; never sent to the model
CREDENTIAL_FIELDS = ["platform", "title", "email", "password"]


class CommandInterpreter:
    """
    Natural-language command pipeline:
    Mention → Classify → Extract → Confirm → Assemble

    Not safe for overlapping calls on one instance; ``is_processing`` is the
    caller's guard against resubmission.
    """

    def __init__(
        self,
        llm: LanguageModel,
        notifier: Optional[Notifier] = None,
        model_id: Optional[str] = None,
        today: Callable[[], date] = date.today,
    ):
        self.llm = llm
        self.notifier = notifier or LoggingNotifier()
        self.model_id = model_id or settings.LLM_MODEL
        self.classifier = IntentClassifier(llm, self.model_id)
        self.extractor = SlotExtractor(llm, self.model_id, today=today)
        self._processing = False

    @property
    def is_processing(self) -> bool:
        return self._processing

    async def process_query(self, query: str) -> Optional[CommandResult]:
        """
        Interpret one utterance.

        Returns None only when the language-model service itself failed; a
        single user notification is emitted in that case. Malformed model
        output still yields a (degraded) CommandResult.
        """
        self._processing = True
        start_time = time.time()

        try:
            # 1. MENTION: explicit @shortcut skips classification
            intent = parse_mention(query)
            if intent is not None:
                clean_query = strip_mention(query)
                logger.info(f"MENTION: {intent.value}")
            else:
                # 2. CLASSIFY
                clean_query = query
                intent = await self.classifier.classify(query)
                logger.info(f"CLASSIFY: {intent.value}")

            # 3. EXTRACT
            extraction = await self.extractor.extract(intent, clean_query)

            # 4. CONFIRM + ASSEMBLE
            result = self._assemble(intent, extraction, query)

            execution_time = int((time.time() - start_time) * 1000)
            logger.info(
                f"Interpreted query as {intent.value} in {execution_time}ms"
                + (f" (degraded: {extraction.reason})" if extraction.degraded else "")
            )
            return result

        except Exception as e:
            error_code = _classify_error(e)
            logger.error(
                f"Error in process_query (code={error_code}): {e}",
                exc_info=True,
            )
            self.notifier.error(settings.ERROR_NOTIFICATION)
            return None

        finally:
            self._processing = False

    def _assemble(self, intent: Intent, extraction: ExtractionResult, query: str) -> CommandResult:
        schema = SLOT_SCHEMAS.get(intent)
        params = extraction.params

        if schema is None:
            message = synthesize_confirmation(intent, params)
            missing = list(CREDENTIAL_FIELDS) if intent == Intent.CREATE_ACCOUNT else []
        elif extraction.degraded and not schema.echo_fallback:
            message = schema.fallback_message
            missing = schema.missing_required(params)
        else:
            message = synthesize_confirmation(intent, params, generic=schema.fallback_message)
            missing = schema.missing_required(params)

        return CommandResult(
            intent=intent,
            params=params,
            confirmation_message=message,
            original_query=query,
            degraded=extraction.degraded,
            reason=extraction.reason,
            missing_fields=missing,
        )


# ---------------------------------------------------------------------------
# Error classification helpers
# ---------------------------------------------------------------------------

def _classify_error(exc: Exception) -> str:
    """Return a machine-readable error code for the exception."""
    if isinstance(exc, TimeoutError):
        return "llm_timeout"
    if isinstance(exc, (ConnectionError, OSError)):
        return "connection_error"
    if isinstance(exc, LLMServiceError):
        return "llm_service_error"
    msg = str(exc).lower()
    if "timeout" in msg:
        return "llm_timeout"
    if "connection" in msg or "unreachable" in msg:
        return "connection_error"
    return "internal_error"
