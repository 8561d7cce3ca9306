"""Human-readable "here's what I'll do" messages built from extracted params."""
import math
from typing import Any, Callable, Optional

from models.intent import Intent
from config.settings import settings

SEARCH_MESSAGE = "Searching your second brain..."
CREDENTIALS_MESSAGE = (
    "I'll help you save account credentials securely. "
    "What platform is this for? (e.g., Netflix, GitHub, Google)"
)


def format_amount(value: Any, symbol: str = "") -> str:
    """25.0 -> "25", 1200.5 -> "1,200.5"; non-numbers pass through as text."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"{symbol}{value}"
    if isinstance(value, int):
        return f"{symbol}{value:,}"
    if not math.isfinite(value):
        return f"{symbol}{value}"
    if value.is_integer():
        return f"{symbol}{int(value):,}"
    return f"{symbol}{value:,.2f}".rstrip("0").rstrip(".")


def _a(word: Any) -> str:
    """Indefinite article for word."""
    return f"an {word}" if str(word)[:1].lower() in "aeiou" else f"a {word}"


def _has(params: dict[str, Any], *names: str) -> bool:
    return all(params.get(name) not in (None, "") for name in names)


def _money(value: Any) -> str:
    return format_amount(value, settings.CURRENCY_SYMBOL)


def _task(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "title"):
        return None
    due = f" due {p['due_date']}" if _has(p, "due_date") else ""
    return f'I\'ll create a task: "{p["title"]}"{due}.'


def _transaction(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "type", "description", "amount"):
        return None
    return f"I'll track {_a(p['type'])}: {p['description']} ({_money(p['amount'])})."


def _budget(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "name", "amount"):
        return None
    kind = _a(f"{p['period']} budget") if _has(p, "period") else "a budget"
    return f"I'll create {kind}: {p['name']} ({_money(p['amount'])})."


def _recurring(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "description", "amount"):
        return None
    if _has(p, "frequency", "type"):
        return (
            f"I'll set up {_a(p['frequency'])} recurring {p['type']}: "
            f"{p['description']} ({_money(p['amount'])})."
        )
    return f"I'll set up a recurring payment: {p['description']} ({_money(p['amount'])})."


def _category(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "name"):
        return None
    if _has(p, "type"):
        return f"I'll create {_a(p['type'])} category: {p['name']}."
    return f"I'll create a category: {p['name']}."


def _financial_account(p: dict[str, Any]) -> Optional[str]:
    # A null name means the caller picks one; don't claim a name we don't have
    if not _has(p, "name", "type", "balance"):
        return None
    account_type = str(p["type"]).replace("_", " ")
    return f"I'll create {_a(account_type)} account: {p['name']} with balance {format_amount(p['balance'])}."


def _goal(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "name", "target_amount"):
        return None
    by = f" by {p['target_date']}" if _has(p, "target_date") else ""
    return f"I'll create a goal: {p['name']} (Target: {format_amount(p['target_amount'])}){by}."


def _contribution(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "goal_name", "amount"):
        return None
    source = f" from {p['from_account']}" if _has(p, "from_account") else ""
    return f"I'll add {format_amount(p['amount'])} to your {p['goal_name']} goal{source}."


def _liability(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "name", "amount"):
        return None
    kind = f"{str(p['type']).replace('_', ' ')}, " if _has(p, "type") else ""
    return f"I'll track liability: {p['name']} ({kind}Amount: {format_amount(p['amount'])})."


def _transfer(p: dict[str, Any]) -> Optional[str]:
    if not _has(p, "amount", "from_account", "to_account"):
        return None
    return f"I'll transfer {format_amount(p['amount'])} from {p['from_account']} to {p['to_account']}."


_TEMPLATES: dict[Intent, Callable[[dict[str, Any]], Optional[str]]] = {
    Intent.CREATE_TASK: _task,
    Intent.CREATE_TRANSACTION: _transaction,
    Intent.CREATE_BUDGET: _budget,
    Intent.CREATE_RECURRING: _recurring,
    Intent.CREATE_CATEGORY: _category,
    Intent.CREATE_FINANCIAL_ACCOUNT: _financial_account,
    Intent.CREATE_GOAL: _goal,
    Intent.CONTRIBUTE_GOAL: _contribution,
    Intent.CREATE_LIABILITY: _liability,
    Intent.TRANSFER_FUNDS: _transfer,
}

_FIXED: dict[Intent, str] = {
    Intent.CREATE_NOTE: "I'll save this note.",
    Intent.CREATE_JOURNAL: "I'll add this to your journal.",
    Intent.CREATE_ACCOUNT: CREDENTIALS_MESSAGE,
    Intent.SEARCH_KNOWLEDGE: SEARCH_MESSAGE,
}


def synthesize_confirmation(intent: Intent, params: dict[str, Any], generic: str = "") -> str:
    """
    Confirmation text for an intent.

    ``generic`` is returned when the params are too incomplete for the full
    template, so no message ever contains an empty placeholder.
    """
    if intent in _FIXED:
        return _FIXED[intent]
    template = _TEMPLATES.get(intent)
    if template is None:
        return ""
    return template(params) or generic
