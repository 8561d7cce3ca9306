"""@mention shortcuts that name an intent explicitly and skip classification."""
import re
from typing import Callable, List, Optional

from models.intent import Intent

_MENTION_RE = re.compile(r"^@\w+\s*")


def _compile_word_patterns(keywords: List[str]) -> re.Pattern:
    """
    Build a single compiled regex that matches any of the keywords on word
    boundaries, so "add" does not fire inside "address".
    """
    escaped = [re.escape(kw) for kw in keywords]
    pattern = r"\b(?:" + "|".join(escaped) + r")\b"
    return re.compile(pattern, re.IGNORECASE)


_CONTRIBUTION_WORDS = _compile_word_patterns([
    "add", "adds", "added", "adding",
    "contribute", "contributes", "contributed", "contributing", "contribution",
    "deposit", "deposits", "deposited", "depositing",
])
_ACCOUNT_WORDS = _compile_word_patterns(["account", "accounts", "accounting", "balance", "balances"])


def _goal(text: str) -> Intent:
    if _CONTRIBUTION_WORDS.search(text):
        return Intent.CONTRIBUTE_GOAL
    return Intent.CREATE_GOAL


def _finance(text: str) -> Intent:
    if _ACCOUNT_WORDS.search(text):
        return Intent.CREATE_FINANCIAL_ACCOUNT
    return Intent.CREATE_TRANSACTION


# Checked in order; the first matching prefix wins
MENTION_RULES: list[tuple[tuple[str, ...], Callable[[str], Intent]]] = [
    (("@task",), lambda _: Intent.CREATE_TASK),
    (("@note",), lambda _: Intent.CREATE_NOTE),
    (("@journal",), lambda _: Intent.CREATE_JOURNAL),
    (("@transaction",), lambda _: Intent.CREATE_TRANSACTION),
    (("@recurring",), lambda _: Intent.CREATE_RECURRING),
    (("@budget",), lambda _: Intent.CREATE_BUDGET),
    (("@category",), lambda _: Intent.CREATE_CATEGORY),
    (("@goal",), _goal),
    (("@contribute", "@deposit"), lambda _: Intent.CONTRIBUTE_GOAL),
    (("@liability", "@debt"), lambda _: Intent.CREATE_LIABILITY),
    (("@transfer",), lambda _: Intent.TRANSFER_FUNDS),
    (("@account", "@credential"), lambda _: Intent.CREATE_ACCOUNT),
    (("@finance",), _finance),
]


def parse_mention(text: str) -> Optional[Intent]:
    """Intent named by a leading @mention, or None to fall through to classification."""
    lowered = text.strip().lower()
    if not lowered.startswith("@"):
        return None
    for prefixes, resolve in MENTION_RULES:
        if lowered.startswith(prefixes):
            return resolve(lowered)
    return None


def strip_mention(text: str) -> str:
    """Drop the leading @word and the whitespace after it."""
    return _MENTION_RE.sub("", text.strip(), count=1)
