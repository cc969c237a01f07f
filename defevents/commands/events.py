"""
Event commands for defevents.

Runs the commit analysis pipeline on a repository and prints its
result or one of its intermediate stages.
"""

import click

from ..cli_utils import handle_errors
from ..config import load_config, configure_logging
from ..output import emit, emit_batch
from ..services import ChangeEventService


def _service(no_references: bool = False) -> ChangeEventService:
    config = load_config()
    configure_logging(config)
    if no_references:
        config['references']['enabled'] = False
    return ChangeEventService(config=config)


@click.command('events')
@click.option('--repo', '-r', 'repo_path', default='.', type=click.Path(exists=True, file_okay=False),
              help='Repository to analyze (default: current directory)')
@click.option('--rev', default='HEAD', help='Commit to analyze (default: HEAD)')
@click.option('--jsonl', is_flag=True, help='Stream events as JSONL instead of one JSON object')
@click.option('--pretty', is_flag=True, help='Display events as a table')
@click.option('--indent', type=int, default=None, help='Indent the JSON object')
@click.option('--no-references', is_flag=True, help='Only report modified definitions')
@handle_errors
def events_handler(repo_path, rev, jsonl, pretty, indent, no_references):
    """
    Emit change events for the definitions touched by a commit.

    Output is a JSON object with "events" and "subscriptions" lists.

    \b
    Examples:
        defevents events
        defevents events --repo ~/src/project --rev HEAD~1
        defevents events --jsonl | jq '.id'
        defevents events --pretty
    """
    batch = _service(no_references).collect(repo_path, rev)

    if pretty:
        emit(batch.events, pretty=True, columns=['type', 'title', 'time'])
    elif jsonl:
        emit(batch.events)
    else:
        emit_batch(batch, indent=indent)


@click.command('hunks')
@click.option('--repo', '-r', 'repo_path', default='.', type=click.Path(exists=True, file_okay=False),
              help='Repository to analyze (default: current directory)')
@click.option('--rev', default='HEAD', help='Commit to analyze (default: HEAD)')
@click.option('--pretty', is_flag=True, help='Display hunks as a table')
@handle_errors
def hunks_handler(repo_path, rev, pretty):
    """Print the parsed diff hunks of a commit as JSONL."""
    hunks = _service().hunks(repo_path, rev)
    emit(hunks, pretty=pretty,
         columns=['filename', 'old_start', 'old_end', 'new_start', 'new_end', 'new_lines', 'old_lines'])


@click.command('tags')
@click.option('--repo', '-r', 'repo_path', default='.', type=click.Path(exists=True, file_okay=False),
              help='Repository to analyze (default: current directory)')
@click.option('--rev', default='HEAD', help='Commit to analyze (default: HEAD)')
@click.option('--pretty', is_flag=True, help='Display tags as a table')
@handle_errors
def tags_handler(repo_path, rev, pretty):
    """Print the symbol definitions of the files changed by a commit."""
    tags = _service().tags(repo_path, rev)
    emit(tags, pretty=pretty, columns=['file', 'line', 'kind', 'name', 'signature'])
