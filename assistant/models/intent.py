"""Intent data models"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class Intent(str, Enum):
    """Closed set of actions an utterance can map to."""
    CREATE_TASK = "create_task"
    CREATE_NOTE = "create_note"
    CREATE_JOURNAL = "create_journal"
    CREATE_TRANSACTION = "create_transaction"
    CREATE_RECURRING = "create_recurring"
    CREATE_BUDGET = "create_budget"
    CREATE_CATEGORY = "create_category"
    CREATE_FINANCIAL_ACCOUNT = "create_financial_account"
    CREATE_GOAL = "create_goal"
    CONTRIBUTE_GOAL = "contribute_goal"
    CREATE_LIABILITY = "create_liability"
    TRANSFER_FUNDS = "transfer_funds"
    CREATE_ACCOUNT = "create_account"
    SEARCH_KNOWLEDGE = "search_knowledge"
    GENERAL_CHAT = "general_chat"
    UNKNOWN = "unknown"


class IntentInfo(BaseModel):
    """How an intent is presented to the classifier and to the knowledge index."""
    intent: Intent
    examples: list[str]
    entity_type: Optional[str] = None  # knowledge-index type of the created artifact
    classifiable: bool = True


INTENT_CATALOG: dict[Intent, IntentInfo] = {
    info.intent: info
    for info in [
        IntentInfo(
            intent=Intent.CREATE_TASK,
            examples=["remind me to...", "add task...", "buy milk"],
            entity_type="task",
        ),
        IntentInfo(
            intent=Intent.CREATE_NOTE,
            examples=["note that...", "save idea...", "remember to"],
            entity_type="note",
        ),
        IntentInfo(
            intent=Intent.CREATE_JOURNAL,
            examples=["dear diary...", "today I...", "I felt..."],
            entity_type="journal",
        ),
        IntentInfo(
            intent=Intent.CREATE_TRANSACTION,
            examples=["spent $50...", "bought pizza...", "paid rent"],
            entity_type="transaction",
        ),
        IntentInfo(
            intent=Intent.CREATE_RECURRING,
            examples=["monthly subscription", "recurring payment", "auto-pay rent"],
            entity_type="recurring_transaction",
        ),
        IntentInfo(
            intent=Intent.CREATE_BUDGET,
            examples=["create budget", "set budget for groceries", "monthly budget"],
            entity_type="budget",
        ),
        IntentInfo(
            intent=Intent.CREATE_CATEGORY,
            examples=["add category", "new expense category", "create category for..."],
        ),
        IntentInfo(
            intent=Intent.CREATE_FINANCIAL_ACCOUNT,
            examples=["open a savings account with 5000", "add my HDFC bank account", "new wallet with 200 balance"],
            entity_type="account",
        ),
        IntentInfo(
            intent=Intent.CREATE_GOAL,
            examples=["save for vacation", "goal to buy laptop", "emergency fund target"],
            entity_type="financial_goal",
        ),
        IntentInfo(
            intent=Intent.CONTRIBUTE_GOAL,
            examples=["add 5000 to vacation goal", "contribute to emergency fund", "deposit 2000 to laptop goal"],
        ),
        IntentInfo(
            intent=Intent.CREATE_LIABILITY,
            examples=["track loan", "add mortgage", "credit card debt"],
            entity_type="liability",
        ),
        IntentInfo(
            intent=Intent.TRANSFER_FUNDS,
            examples=["transfer money", "move funds", "transfer $100 from..."],
        ),
        IntentInfo(
            intent=Intent.CREATE_ACCOUNT,
            examples=["save my Netflix login", "store my GitHub credentials", "add account for..."],
        ),
        IntentInfo(
            intent=Intent.SEARCH_KNOWLEDGE,
            examples=[
                "what did I do...", "search for...", "find...", "show me...",
                "when did I...", "list my...", "do I have...", "where is...",
            ],
        ),
        IntentInfo(
            intent=Intent.GENERAL_CHAT,
            examples=["hello", "tell me a joke", "how are you", "what is the capital of..."],
        ),
        IntentInfo(
            intent=Intent.UNKNOWN,
            examples=[],
            classifiable=False,
        ),
    ]
}


def classifiable_intents() -> list[Intent]:
    """Intents the classifier is allowed to answer with, in catalogue order."""
    return [info.intent for info in INTENT_CATALOG.values() if info.classifiable]
