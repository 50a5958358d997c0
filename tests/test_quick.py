"""Tests for quick module."""

import logging
from datetime import timedelta

import pytest
from freezegun import freeze_time

from vaultterm.models import Page, ResultKind
from vaultterm.quick import QUICK_HELP, QuickCommandBar


class Answers:
    """Confirm double returning a fixed answer and recording questions."""

    def __init__(self, answer):
        self.answer = answer
        self.questions = []

    def __call__(self, question):
        self.questions.append(question)
        return self.answer


@pytest.fixture
def make_bar(store, navigator, clipboard):
    def _make(answer=True, **kwargs):
        confirm = Answers(answer)
        bar = QuickCommandBar(store, navigator, confirm, clipboard=clipboard, **kwargs)
        return bar, confirm

    return _make


class TestQuickCommands:
    """Test the reduced command subset."""

    def test_help(self, make_bar):
        bar, _ = make_bar()

        entry = bar.submit("help")

        assert entry.kind == ResultKind.INFO
        assert entry.message == QUICK_HELP

    def test_blank_line(self, make_bar):
        bar, _ = make_bar()

        assert bar.submit("  ") is None
        assert bar.feedback is None

    def test_exit_returns_to_overview(self, make_bar, navigator):
        bar, _ = make_bar()

        entry = bar.submit("exit")

        assert entry.message == "Returning to overview..."
        assert navigator.calls == [Page.OVERVIEW]

    def test_open_navigates(self, make_bar, navigator):
        bar, _ = make_bar()

        bar.submit("open profile")

        assert navigator.calls == [Page.PROFILE]

    def test_failing_navigation_becomes_error(self, store, caplog):
        def navigator(page):
            raise RuntimeError("host navigation failed")

        caplog.set_level(logging.INFO, logger="vaultterm")
        bar = QuickCommandBar(store, navigator, Answers(True))

        entry = bar.submit("open vaults")

        assert entry.kind == ResultKind.ERROR
        assert entry.message == "Unexpected error: host navigation failed"
        assert bar.feedback == entry
        assert '"event":"command_error"' in caplog.text

    @pytest.mark.parametrize(
        "line",
        ["stats", "search gmail", "clear"],
    )
    def test_commands_outside_subset(self, make_bar, line):
        bar, _ = make_bar()

        entry = bar.submit(line)

        assert entry.kind == ResultKind.ERROR
        assert "Unknown command" in entry.message

    def test_vault_list_not_available(self, make_bar):
        bar, _ = make_bar()

        entry = bar.submit("vault list")

        assert entry.message == "Unknown vault command. Use: create, delete"

    def test_shares_parser_with_full_interpreter(self, make_bar, store):
        bar, _ = make_bar()

        bar.submit('account create --vault "Personal" --name Slack --username a@b.com --password "p w"')

        created = store.list_accounts()[-1]
        assert created.name == "Slack"
        assert created.password == "p w"

    def test_password_not_echoed(self, make_bar, clipboard):
        bar, _ = make_bar()

        entry = bar.submit('account password --name "Gmail"')

        assert clipboard.calls == ["hunter2"]
        assert entry.message == 'Password for "Gmail" copied to clipboard.'

    def test_usage_error(self, make_bar):
        bar, _ = make_bar()

        entry = bar.submit("vault delete")

        assert entry.kind == ResultKind.ERROR
        assert entry.message.startswith("Usage: vault delete")


class TestQuickDeletes:
    """Deletes ask the host's confirm callback instead of a gate."""

    def test_confirmed_delete_runs_immediately(self, make_bar, store):
        bar, confirm = make_bar(answer=True)

        entry = bar.submit('vault delete --name "Work"')

        assert entry.kind == ResultKind.SUCCESS
        assert confirm.questions == ['Delete vault "Work"? This action cannot be undone.']
        assert [vault.name for vault in store.list_vaults()] == ["Personal"]

    def test_declined_delete_does_nothing(self, make_bar, store):
        bar, confirm = make_bar(answer=False)

        entry = bar.submit('account delete --name "gmail"')

        assert entry is None
        assert confirm.questions == ['Delete account "Gmail"? This action cannot be undone.']
        assert len(store.list_accounts()) == 3

    def test_missing_target_never_asks(self, make_bar):
        bar, confirm = make_bar()

        entry = bar.submit('account delete --name "Nope"')

        assert entry.kind == ResultKind.ERROR
        assert confirm.questions == []


class TestFeedbackExpiry:
    def test_feedback_clears_after_three_seconds(self, make_bar):
        with freeze_time("2026-03-01 12:00:00") as frozen:
            bar, _ = make_bar()
            entry = bar.submit("help")

            assert bar.feedback == entry
            frozen.tick(timedelta(seconds=2.9))
            assert bar.feedback == entry
            frozen.tick(timedelta(seconds=0.2))
            assert bar.feedback is None

    def test_new_feedback_replaces_old(self, make_bar):
        with freeze_time("2026-03-01 12:00:00") as frozen:
            bar, _ = make_bar(feedback_seconds=1.0)
            bar.submit("help")
            frozen.tick(timedelta(seconds=0.5))
            second = bar.submit("nope")

            frozen.tick(timedelta(seconds=0.8))
            assert bar.feedback == second
            frozen.tick(timedelta(seconds=0.3))
            assert bar.feedback is None
