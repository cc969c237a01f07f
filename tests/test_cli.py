"""
Tests for the command line interface.

The event service is mocked; these tests cover option handling,
output formats and exit codes.
"""

import json
import pytest
from datetime import datetime, timezone
from unittest.mock import patch

from click.testing import CliRunner

from defevents.cli import cli
from defevents.config import get_default_config
from defevents.domain import ChangeEvent, EventBatch, EventType, Hunk, SubscriptionUpdate, Tag
from defevents.exit_codes import VCS_ERROR, TAGS_ERROR, TagExtractionError, VCSError

EVENT = ChangeEvent(
    id="modified:Foo:a.go:https://github.com/acme/widgets/commit/abc",
    title="Jane Doe modified func Foo()",
    body="Jane Doe modified func Foo() in a.go on branch main of github.com/acme/widgets",
    url="https://github.com/acme/widgets/commit/abc",
    type=EventType.MODIFIED,
    time=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
)

BATCH = EventBatch(
    events=[EVENT],
    subscriptions=[
        SubscriptionUpdate(src="Jane", dsts=("Foo",)),
        SubscriptionUpdate(src="Jane Doe", dsts=("Foo",)),
    ],
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def service():
    with patch('defevents.commands.events.load_config', side_effect=get_default_config), \
            patch('defevents.commands.events.ChangeEventService') as service_cls:
        yield service_cls


class TestEventsCommand:
    """Tests for `defevents events`."""

    def test_json_batch(self, runner, service, tmp_path):
        service.return_value.collect.return_value = BATCH

        result = runner.invoke(cli, ['events', '--repo', str(tmp_path), '--rev', 'abc'])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data['events'][0]['id'] == EVENT.id
        assert data['subscriptions'] == [
            {'src': "Jane", 'dsts': ["Foo"]},
            {'src': "Jane Doe", 'dsts': ["Foo"]},
        ]
        service.return_value.collect.assert_called_once_with(str(tmp_path), 'abc')

    def test_jsonl(self, runner, service, tmp_path):
        service.return_value.collect.return_value = BATCH

        result = runner.invoke(cli, ['events', '-r', str(tmp_path), '--jsonl'])

        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])['type'] == "modified"

    def test_pretty(self, runner, service, tmp_path):
        service.return_value.collect.return_value = BATCH

        result = runner.invoke(cli, ['events', '-r', str(tmp_path), '--pretty'])

        assert result.exit_code == 0
        assert "modified" in result.stdout

    def test_no_references_disables_scanner(self, runner, service, tmp_path):
        service.return_value.collect.return_value = EventBatch()

        result = runner.invoke(cli, ['events', '-r', str(tmp_path), '--no-references'])

        assert result.exit_code == 0
        config = service.call_args.kwargs['config']
        assert config['references']['enabled'] is False

    def test_vcs_error_exit_code(self, runner, service, tmp_path):
        service.return_value.collect.side_effect = VCSError("git show HEAD failed")

        result = runner.invoke(cli, ['events', '-r', str(tmp_path)])

        assert result.exit_code == VCS_ERROR
        assert "git show HEAD failed" in result.output
        assert '"events"' not in result.output

    def test_tags_error_exit_code(self, runner, service, tmp_path):
        service.return_value.collect.side_effect = TagExtractionError("ctags failed")

        result = runner.invoke(cli, ['events', '-r', str(tmp_path)])

        assert result.exit_code == TAGS_ERROR

    def test_missing_repo_dir(self, runner, service, tmp_path):
        result = runner.invoke(cli, ['events', '-r', str(tmp_path / "nope")])

        assert result.exit_code == 2
        service.assert_not_called()


class TestStageCommands:
    """Tests for `defevents hunks` and `defevents tags`."""

    def test_hunks(self, runner, service, tmp_path):
        service.return_value.hunks.return_value = [Hunk("a.go", 10, 10, 10, 12)]

        result = runner.invoke(cli, ['hunks', '-r', str(tmp_path)])

        assert result.exit_code == 0
        assert json.loads(result.stdout)['new_end'] == 12

    def test_tags(self, runner, service, tmp_path):
        service.return_value.tags.return_value = [Tag("a.go", "Foo", "func", "()", 9)]

        result = runner.invoke(cli, ['tags', '-r', str(tmp_path)])

        assert result.exit_code == 0
        assert json.loads(result.stdout)['name'] == "Foo"

    def test_tags_pretty_empty(self, runner, service, tmp_path):
        service.return_value.tags.return_value = []

        result = runner.invoke(cli, ['tags', '-r', str(tmp_path), '--pretty'])

        assert result.exit_code == 0
        assert "No results found" in result.stdout


class TestConfigCommand:
    """Tests for `defevents config`."""

    def test_init_and_show(self, runner, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        monkeypatch.setenv('HOME', str(tmp_path))
        monkeypatch.setenv('DEFEVENTS_CONFIG', str(config_file))

        # The path does not exist yet, so the default location is used
        result = runner.invoke(cli, ['config', 'init'])
        assert result.exit_code == 0
        assert (tmp_path / '.defevents' / 'config.json').exists()

        result = runner.invoke(cli, ['config', 'init'])
        assert "already exists" in result.output

        result = runner.invoke(cli, ['config', 'show'])
        assert result.exit_code == 0
        assert json.loads(result.stdout)['ctags']['format'] == 'json'

    def test_show_path(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv('HOME', str(tmp_path))
        monkeypatch.delenv('DEFEVENTS_CONFIG', raising=False)

        result = runner.invoke(cli, ['config', 'show', '--path'])

        assert json.loads(result.stdout)['config_path'].endswith('config.json')


def test_version(runner):
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert "version" in result.output
