"""Tests for confirmation message synthesis."""
import pytest

from core.confirmation import (
    CREDENTIALS_MESSAGE,
    SEARCH_MESSAGE,
    format_amount,
    synthesize_confirmation,
)
from models.intent import Intent


class TestFormatAmount:
    def test_integral_float(self):
        assert format_amount(25.0) == "25"

    def test_thousands(self):
        assert format_amount(50000) == "50,000"

    def test_decimal(self):
        assert format_amount(15.99, "$") == "$15.99"

    def test_trailing_zero_trimmed(self):
        assert format_amount(1200.5) == "1,200.5"

    def test_int_beyond_float_range(self):
        huge = 10 ** 400
        assert format_amount(huge, "$") == f"${huge:,}"

    def test_non_finite_float(self):
        assert format_amount(float("inf")) == "inf"

    def test_non_number_passthrough(self):
        assert format_amount("lots") == "lots"


class TestTemplates:
    def test_task(self):
        msg = synthesize_confirmation(
            Intent.CREATE_TASK, {"title": "Buy groceries", "due_date": "2026-10-26"}
        )
        assert msg == 'I\'ll create a task: "Buy groceries" due 2026-10-26.'

    def test_transaction(self):
        msg = synthesize_confirmation(
            Intent.CREATE_TRANSACTION,
            {"amount": 25, "description": "lunch", "category": "Food", "type": "expense"},
        )
        assert msg == "I'll track an expense: lunch ($25)."

    def test_budget(self):
        msg = synthesize_confirmation(
            Intent.CREATE_BUDGET, {"name": "haircut", "amount": 500, "period": "monthly"}
        )
        assert msg == "I'll create a monthly budget: haircut ($500)."

    def test_recurring_full_and_partial(self):
        full = synthesize_confirmation(
            Intent.CREATE_RECURRING,
            {"description": "Netflix", "amount": 15.99, "frequency": "monthly", "type": "expense"},
        )
        assert full == "I'll set up a monthly recurring expense: Netflix ($15.99)."
        partial = synthesize_confirmation(
            Intent.CREATE_RECURRING, {"description": "Netflix", "amount": 15.99}
        )
        assert partial == "I'll set up a recurring payment: Netflix ($15.99)."

    def test_category(self):
        assert synthesize_confirmation(
            Intent.CREATE_CATEGORY, {"name": "Pets", "type": "expense"}
        ) == "I'll create an expense category: Pets."
        assert synthesize_confirmation(
            Intent.CREATE_CATEGORY, {"name": "Pets"}
        ) == "I'll create a category: Pets."

    def test_financial_account_named(self):
        msg = synthesize_confirmation(
            Intent.CREATE_FINANCIAL_ACCOUNT,
            {"name": "HDFC Savings", "type": "savings", "balance": 50000},
        )
        assert msg == "I'll create a savings account: HDFC Savings with balance 50,000."

    def test_financial_account_null_name_uses_generic(self):
        msg = synthesize_confirmation(
            Intent.CREATE_FINANCIAL_ACCOUNT,
            {"name": None, "type": "bank", "balance": 50000},
            generic="I'll help you create a financial account.",
        )
        assert msg == "I'll help you create a financial account."

    def test_goal(self):
        msg = synthesize_confirmation(
            Intent.CREATE_GOAL, {"name": "Vacation", "target_amount": 50000, "current_amount": 0}
        )
        assert msg == "I'll create a goal: Vacation (Target: 50,000)."

    def test_contribution_with_and_without_source(self):
        with_source = synthesize_confirmation(
            Intent.CONTRIBUTE_GOAL, {"goal_name": "vacation", "amount": 5000, "from_account": "savings"}
        )
        assert with_source == "I'll add 5,000 to your vacation goal from savings."
        without = synthesize_confirmation(
            Intent.CONTRIBUTE_GOAL, {"goal_name": "vacation", "amount": 5000, "from_account": None}
        )
        assert without == "I'll add 5,000 to your vacation goal."

    def test_liability(self):
        msg = synthesize_confirmation(
            Intent.CREATE_LIABILITY, {"name": "Credit Card", "type": "credit_card", "amount": 25000}
        )
        assert msg == "I'll track liability: Credit Card (credit card, Amount: 25,000)."

    def test_transfer_full(self):
        msg = synthesize_confirmation(
            Intent.TRANSFER_FUNDS, {"amount": 1000, "from_account": "savings", "to_account": "checking"}
        )
        assert msg == "I'll transfer 1,000 from savings to checking."

    def test_transfer_missing_source_does_not_claim(self):
        msg = synthesize_confirmation(
            Intent.TRANSFER_FUNDS,
            {"amount": 1000, "to_account": "checking"},
            generic="I'll help you transfer funds.",
        )
        assert msg == "I'll help you transfer funds."
        assert "from" not in msg


class TestFixedMessages:
    @pytest.mark.parametrize(
        "intent,expected",
        [
            (Intent.CREATE_NOTE, "I'll save this note."),
            (Intent.CREATE_JOURNAL, "I'll add this to your journal."),
            (Intent.SEARCH_KNOWLEDGE, SEARCH_MESSAGE),
            (Intent.CREATE_ACCOUNT, CREDENTIALS_MESSAGE),
            (Intent.GENERAL_CHAT, ""),
            (Intent.UNKNOWN, ""),
        ],
    )
    def test_fixed(self, intent, expected):
        assert synthesize_confirmation(intent, {"content": "whatever"}) == expected

    def test_no_placeholders_leak(self):
        for intent in Intent:
            msg = synthesize_confirmation(intent, {}, generic="generic")
            assert "None" not in msg
            assert "{" not in msg
