"""Tests for @mention parsing and stripping."""
import pytest

from core.mentions import parse_mention, strip_mention
from models.intent import Intent


class TestParseMention:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("@task Buy groceries tomorrow", Intent.CREATE_TASK),
            ("@note the wifi password is on the fridge", Intent.CREATE_NOTE),
            ("@journal today was long", Intent.CREATE_JOURNAL),
            ("@transaction 40 for gas", Intent.CREATE_TRANSACTION),
            ("@recurring spotify 9.99 monthly", Intent.CREATE_RECURRING),
            ("@budget 500 for groceries", Intent.CREATE_BUDGET),
            ("@category pets", Intent.CREATE_CATEGORY),
            ("@contribute 200 to laptop", Intent.CONTRIBUTE_GOAL),
            ("@deposit 200 to laptop", Intent.CONTRIBUTE_GOAL),
            ("@liability car loan 5000", Intent.CREATE_LIABILITY),
            ("@debt credit card 900", Intent.CREATE_LIABILITY),
            ("@transfer 100 from savings to checking", Intent.TRANSFER_FUNDS),
            ("@account netflix", Intent.CREATE_ACCOUNT),
            ("@credential github", Intent.CREATE_ACCOUNT),
        ],
    )
    def test_prefixes(self, text, expected):
        assert parse_mention(text) == expected

    def test_goal_with_add_is_contribution(self):
        assert parse_mention("@goal add 5000 to vacation") == Intent.CONTRIBUTE_GOAL

    def test_goal_with_deposit_is_contribution(self):
        assert parse_mention("@goal deposit 100 into laptop fund") == Intent.CONTRIBUTE_GOAL

    @pytest.mark.parametrize(
        "text",
        [
            "@goal added 500 to laptop",
            "@goal contributed 200 to vacation",
            "@goal deposited 1000 in emergency fund",
            "@goal adds 50 to bike",
        ],
    )
    def test_goal_with_inflected_keyword_is_contribution(self, text):
        assert parse_mention(text) == Intent.CONTRIBUTE_GOAL

    def test_finance_with_accounting_is_financial_account(self):
        assert parse_mention("@finance accounting software 40") == Intent.CREATE_FINANCIAL_ACCOUNT

    def test_goal_without_keyword_is_creation(self):
        assert parse_mention("@goal save 50000 for vacation") == Intent.CREATE_GOAL

    def test_goal_keyword_inside_other_word_does_not_count(self):
        """'address' contains 'add' but is not a contribution."""
        assert parse_mention("@goal new address deposit fund") == Intent.CONTRIBUTE_GOAL
        assert parse_mention("@goal save for new address") == Intent.CREATE_GOAL

    def test_finance_with_account_is_financial_account(self):
        assert parse_mention("@finance new HDFC account") == Intent.CREATE_FINANCIAL_ACCOUNT

    def test_finance_with_balance_is_financial_account(self):
        assert parse_mention("@finance wallet with 200 balance") == Intent.CREATE_FINANCIAL_ACCOUNT

    def test_finance_otherwise_is_transaction(self):
        assert parse_mention("@finance spent 20 on coffee") == Intent.CREATE_TRANSACTION

    def test_case_insensitive_and_trimmed(self):
        assert parse_mention("   @TASK call mom") == Intent.CREATE_TASK

    def test_mid_sentence_mention_does_not_trigger(self):
        assert parse_mention("please @task call mom") is None

    def test_no_mention(self):
        assert parse_mention("I spent 25 on lunch today") is None

    def test_unknown_mention(self):
        assert parse_mention("@pomodoro start") is None

    def test_empty_string(self):
        assert parse_mention("") is None


class TestStripMention:
    def test_strips_prefix_and_space(self):
        assert strip_mention("@task Buy groceries tomorrow") == "Buy groceries tomorrow"

    def test_strips_leading_whitespace_first(self):
        assert strip_mention("  @note   remember the milk") == "remember the milk"

    def test_only_first_mention_removed(self):
        assert strip_mention("@note ping @alice later") == "ping @alice later"

    def test_bare_mention_becomes_empty(self):
        assert strip_mention("@journal") == ""
