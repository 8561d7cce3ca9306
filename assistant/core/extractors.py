"""Slot extraction: turns an utterance into the parameter bag for its intent."""
import logging
from datetime import date, timedelta
from typing import Any, Callable, Optional

from models.intent import Intent
from models.command import ExtractionResult
from models.slots import SlotExample, SlotField, SlotSchema
from integrations.llm.client import parse_json_object
from integrations.llm.prompts import build_description_prompt, build_extraction_prompt
from config.settings import settings

logger = logging.getLogger(__name__)

_EXPENSE_INCOME = ["expense", "income"]

SLOT_SCHEMAS: dict[Intent, SlotSchema] = {
    Intent.CREATE_TASK: SlotSchema(
        label="task",
        slots=[
            SlotField(name="title", type="string", required=True, description="Short action-oriented title"),
            SlotField(name="description", type="string"),
            SlotField(name="priority", type="enum", enum=["low", "medium", "high"], default="medium"),
        ],
        rules=[
            "Use a short, action-oriented title.",
            "Include a description only if the text gives details beyond the title.",
            "Use high priority for urgent wording, low for optional wording, otherwise medium.",
        ],
        examples=[
            SlotExample(
                text="buy groceries urgently",
                params={"title": "Buy groceries", "priority": "high"},
            ),
            SlotExample(
                text="call the dentist to move my cleaning to next month",
                params={
                    "title": "Call the dentist",
                    "description": "Move the cleaning appointment to next month.",
                    "priority": "medium",
                },
            ),
        ],
        forbidden=["due_date"],
        fallback_message="I'll create a task.",
        echo_fallback=True,
    ),
    Intent.CREATE_TRANSACTION: SlotSchema(
        label="transaction",
        slots=[
            SlotField(name="amount", type="number", required=True),
            SlotField(name="description", type="string", required=True),
            SlotField(name="category", type="string", description="Best guess"),
            SlotField(name="type", type="enum", enum=_EXPENSE_INCOME, required=True),
        ],
        rules=["Guess a category such as Food, Transport, Shopping, Bills or Salary."],
        examples=[
            SlotExample(
                text="I spent 25 on lunch today",
                params={"amount": 25, "description": "Lunch", "category": "Food", "type": "expense"},
            ),
            SlotExample(
                text="got my 3000 salary",
                params={"amount": 3000, "description": "Salary", "category": "Salary", "type": "income"},
            ),
        ],
        fallback_message="I couldn't understand the transaction details.",
    ),
    Intent.CREATE_BUDGET: SlotSchema(
        label="budget",
        slots=[
            SlotField(name="name", type="string", required=True),
            SlotField(name="amount", type="number", required=True),
            SlotField(name="period", type="enum", enum=["weekly", "monthly", "yearly"], default="monthly"),
        ],
        rules=['If period is not mentioned, use "monthly".'],
        examples=[
            SlotExample(
                text="set 500 for haircut",
                params={"name": "haircut", "amount": 500, "period": "monthly"},
            ),
        ],
        fallback_message="I'll help you create a budget.",
    ),
    Intent.CREATE_RECURRING: SlotSchema(
        label="recurring payment",
        slots=[
            SlotField(name="description", type="string", required=True),
            SlotField(name="amount", type="number", required=True),
            SlotField(name="frequency", type="enum", enum=["daily", "weekly", "monthly", "yearly"]),
            SlotField(name="type", type="enum", enum=_EXPENSE_INCOME),
        ],
        examples=[
            SlotExample(
                text="Netflix subscription 15.99 every month",
                params={"description": "Netflix subscription", "amount": 15.99, "frequency": "monthly", "type": "expense"},
            ),
        ],
        fallback_message="I'll help you set up a recurring payment.",
    ),
    Intent.CREATE_CATEGORY: SlotSchema(
        label="category",
        slots=[
            SlotField(name="name", type="string", required=True),
            SlotField(name="type", type="enum", enum=_EXPENSE_INCOME),
        ],
        examples=[
            SlotExample(text="new expense category for pets", params={"name": "Pets", "type": "expense"}),
        ],
        fallback_message="I'll help you create a category.",
    ),
    Intent.CREATE_FINANCIAL_ACCOUNT: SlotSchema(
        label="financial account",
        slots=[
            SlotField(name="name", type="string", required=True, nullable=True),
            SlotField(
                name="type",
                type="enum",
                enum=["cash", "bank", "credit_card", "digital_wallet", "investment", "savings"],
                default="bank",
            ),
            SlotField(name="balance", type="number"),
        ],
        rules=[
            'Extract a specific account name if mentioned (e.g., "HDFC Bank", "Chase Savings", "Emergency Fund").',
            'If NO specific name is mentioned, return "name": null.',
            'If type is not mentioned, use "bank".',
        ],
        examples=[
            SlotExample(
                text="create HDFC savings account with 50000",
                params={"name": "HDFC Savings", "type": "savings", "balance": 50000},
            ),
            SlotExample(
                text="create account with 50000 balance",
                params={"name": None, "type": "bank", "balance": 50000},
            ),
        ],
        fallback_message="I'll help you create a financial account.",
    ),
    Intent.CREATE_GOAL: SlotSchema(
        label="financial goal",
        slots=[
            SlotField(name="name", type="string", required=True),
            SlotField(name="target_amount", type="number", required=True),
            SlotField(name="current_amount", type="number", default=0),
            SlotField(name="target_date", type="date"),
        ],
        rules=[
            "Current amount defaults to 0 if not mentioned.",
            "Target date in YYYY-MM-DD format (estimate if vague).",
        ],
        examples=[
            SlotExample(
                text="emergency fund goal 100000",
                params={"name": "Emergency Fund", "target_amount": 100000, "current_amount": 0},
            ),
            SlotExample(
                text="save 50000 for vacation, already have 5000",
                params={"name": "Vacation", "target_amount": 50000, "current_amount": 5000},
            ),
        ],
        fallback_message="I'll help you create a financial goal.",
    ),
    Intent.CONTRIBUTE_GOAL: SlotSchema(
        label="goal contribution",
        slots=[
            SlotField(name="goal_name", type="string", required=True, description="Partial match is ok"),
            SlotField(name="amount", type="number", required=True),
            SlotField(name="from_account", type="string", nullable=True),
        ],
        rules=["Extract the source account name only if mentioned."],
        examples=[
            SlotExample(
                text="add 5000 to vacation goal from savings",
                params={"goal_name": "vacation", "amount": 5000, "from_account": "savings"},
            ),
            SlotExample(
                text="contribute 2000 to emergency fund",
                params={"goal_name": "emergency", "amount": 2000, "from_account": None},
            ),
            SlotExample(
                text="500 to vacation",
                params={"goal_name": "vacation", "amount": 500, "from_account": None},
            ),
        ],
        fallback_message="I'll help you contribute to a goal.",
    ),
    Intent.CREATE_LIABILITY: SlotSchema(
        label="liability",
        slots=[
            SlotField(name="name", type="string", required=True),
            SlotField(name="type", type="enum", enum=["loan", "credit_card", "mortgage", "other"], default="other"),
            SlotField(name="amount", type="number", required=True, description="Amount owed"),
            SlotField(name="interest_rate", type="number", default=0),
            SlotField(name="minimum_payment", type="number", default=0),
            SlotField(name="due_date", type="date"),
        ],
        rules=[
            "Interest rate and minimum payment default to 0 if not mentioned.",
            "Due date in YYYY-MM-DD format.",
        ],
        examples=[
            SlotExample(
                text="track car loan 500000 at 8% interest",
                params={"name": "Car Loan", "type": "loan", "amount": 500000, "interest_rate": 8, "minimum_payment": 0},
            ),
            SlotExample(
                text="credit card debt 25000",
                params={"name": "Credit Card", "type": "credit_card", "amount": 25000, "interest_rate": 0, "minimum_payment": 0},
            ),
        ],
        fallback_message="I'll help you track a liability.",
    ),
    Intent.TRANSFER_FUNDS: SlotSchema(
        label="transfer",
        slots=[
            SlotField(name="amount", type="number", required=True),
            SlotField(name="from_account", type="string"),
            SlotField(name="to_account", type="string"),
        ],
        examples=[
            SlotExample(
                text="transfer 1000 from savings to checking",
                params={"amount": 1000, "from_account": "savings", "to_account": "checking"},
            ),
            SlotExample(
                text="move 500 from NIC to HDFC",
                params={"amount": 500, "from_account": "NIC", "to_account": "HDFC"},
            ),
        ],
        fallback_message="I'll help you transfer funds.",
    ),
}

# Content is the utterance itself; the model is never consulted
VERBATIM_INTENTS = {Intent.CREATE_NOTE, Intent.CREATE_JOURNAL}


def needs_description(params: dict[str, Any]) -> bool:
    """Second stage of task extraction runs only when the first left no description."""
    description = params.get("description")
    return not isinstance(description, str) or not description.strip()


def with_description(params: dict[str, Any], description: str) -> dict[str, Any]:
    return {**params, "description": description.strip().strip('"')}


class SlotExtractor:
    """
    Runs the per-intent extraction contract.

    Model-call failures on the primary extraction propagate; malformed output
    never does, it becomes a degraded ExtractionResult instead.
    """

    def __init__(
        self,
        llm,
        model_id: str,
        today: Callable[[], date] = date.today,
        due_in_days: Optional[int] = None,
    ):
        self.llm = llm
        self.model_id = model_id
        self.today = today
        self.due_in_days = due_in_days or settings.TASK_DUE_IN_DAYS

    def task_due_date(self) -> str:
        return (self.today() + timedelta(days=self.due_in_days)).isoformat()

    async def extract(self, intent: Intent, utterance: str) -> ExtractionResult:
        if intent in VERBATIM_INTENTS:
            return ExtractionResult.ok({"content": utterance})

        schema = SLOT_SCHEMAS.get(intent)
        if schema is None:
            return ExtractionResult.ok({})

        prompt = build_extraction_prompt(schema, utterance)
        response = await self.llm.generate(self.model_id, prompt)
        result = self.parse(schema, response.text, utterance)

        if intent == Intent.CREATE_TASK:
            result = self.apply_task_policy(result)
            if not result.degraded and needs_description(result.params):
                result = await self.enrich_task(result)

        return result

    def parse(self, schema: SlotSchema, text: str, utterance: str) -> ExtractionResult:
        """Decode and validate model output against a schema, degrading on any data problem."""
        try:
            params = schema.validate_params(parse_json_object(text or ""))
        except ValueError as e:
            logger.warning(f"Failed to parse {schema.label} parameters: {e}")
            logger.debug(f"Raw response: {(text or '')[:500]}")
            return ExtractionResult.fallback(
                schema.fallback_params(utterance),
                reason=f"unparseable model output: {e}",
            )
        return ExtractionResult.ok(params)

    def apply_task_policy(self, result: ExtractionResult) -> ExtractionResult:
        """Tasks are always due a fixed number of days out, whatever the text said."""
        params = {**result.params, "due_date": self.task_due_date()}
        return result.model_copy(update={"params": params})

    async def enrich_task(self, result: ExtractionResult) -> ExtractionResult:
        """Backfill a missing task description with a dedicated model call."""
        title = str(result.params.get("title", ""))
        warnings = list(result.warnings)
        try:
            response = await self.llm.generate(self.model_id, build_description_prompt(title))
            description = response.text or ""
        except Exception as e:
            # A failed backfill must not abort task creation
            logger.warning(f"Description generation failed for task {title!r}: {e}")
            description = ""
            warnings.append("description_generation_failed")
        return result.model_copy(
            update={"params": with_description(result.params, description), "warnings": warnings}
        )
