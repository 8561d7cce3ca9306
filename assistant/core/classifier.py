"""Intent classification through the language model."""
import logging

from models.intent import Intent, classifiable_intents
from integrations.llm.prompts import build_classification_prompt

logger = logging.getLogger(__name__)

_STRIP_CHARS = " \t\r\n\"'`.*"


class IntentClassifier:
    """Asks the model which intent an utterance expresses; never trusts the raw answer."""

    def __init__(self, llm, model_id: str):
        self.llm = llm
        self.model_id = model_id
        self._allowed = {intent.value: intent for intent in classifiable_intents()}

    async def classify(self, utterance: str) -> Intent:
        """
        Classify an utterance that carried no @mention.

        Model-call failures propagate to the caller; only the answer is
        sanitised here.
        """
        prompt = build_classification_prompt(utterance)
        response = await self.llm.generate(self.model_id, prompt)
        return self.resolve(response.text)

    def resolve(self, answer: str) -> Intent:
        """Map the model's answer onto the closed intent set."""
        token = (answer or "").strip(_STRIP_CHARS).lower()
        intent = self._allowed.get(token)
        if intent is None:
            logger.info(f"Unrecognized intent answer {token[:40]!r}, using general_chat")
            return Intent.GENERAL_CHAT
        return intent
