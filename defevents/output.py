"""
Output module for defevents.

Provides consistent output formatting across all commands:
- JSON: The event batch as one JSON object (events + subscriptions)
- JSONL: Newline-delimited JSON for piping
- Pretty: Human-readable tables using Rich

Usage:
    from defevents.output import emit, emit_batch, emit_error

    emit_batch(batch)
    emit(hunks, pretty=True, columns=['filename', 'new_start', 'new_end'])
    emit_error("git show failed", type="vcs_error")
"""

import json
import sys
from typing import Iterable, Any, Dict, Optional, List

from rich.console import Console
from rich.table import Table


def emit(
    items: Iterable[Any],
    pretty: bool = False,
    columns: Optional[List[str]] = None,
    err: bool = False
) -> None:
    """
    Emit items as JSONL or pretty table.

    Args:
        items: Items to emit (should have to_dict() method or be dicts)
        pretty: If True, render as table. If False, output JSONL
        columns: Column names for table (auto-detected if None)
        err: If True, output to stderr instead of stdout
    """
    stream = sys.stderr if err else sys.stdout

    if pretty:
        _emit_table(items, columns, stream)
    else:
        _emit_jsonl(items, stream)


def emit_batch(batch: Any, indent: Optional[int] = None, stream=None) -> None:
    """Write an EventBatch as a single JSON object."""
    stream = stream or sys.stdout
    print(json.dumps(batch.to_dict(), indent=indent, ensure_ascii=False), file=stream, flush=True)


def _to_dict(item: Any) -> Dict[str, Any]:
    if hasattr(item, 'to_dict'):
        return item.to_dict()
    if isinstance(item, dict):
        return item
    return {'value': str(item)}


def _emit_jsonl(items: Iterable[Any], stream=sys.stdout) -> None:
    """Emit items as JSONL."""
    for item in items:
        print(json.dumps(_to_dict(item), ensure_ascii=False), file=stream, flush=True)


def _emit_table(items: Iterable[Any], columns: Optional[List[str]] = None, stream=sys.stdout) -> None:
    """Emit items as a Rich table."""
    rows = [_to_dict(item) for item in items]

    console = Console(file=stream)
    if not rows:
        console.print("[yellow]No results found[/yellow]")
        return

    # Auto-detect columns if not provided
    if not columns:
        columns = _auto_columns(rows)

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col)

    for row in rows:
        values = [_format_value(row.get(col, '')) for col in columns]
        table.add_row(*values)

    console.print(table)


def _auto_columns(rows: List[Dict]) -> List[str]:
    """Auto-detect columns from rows."""
    if not rows:
        return []

    # Common column order preference
    preferred = ['type', 'title', 'file', 'filename', 'name', 'kind', 'line', 'time']

    all_keys = set(rows[0].keys())

    # Start with preferred columns that exist
    columns = [col for col in preferred if col in all_keys]

    # Add remaining columns
    for key in sorted(all_keys):
        if key not in columns:
            columns.append(key)

    # Limit to reasonable number
    return columns[:8]


def _format_value(value: Any, max_len: int = 60) -> str:
    """Format a value for table display."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    if isinstance(value, list):
        return str(len(value))
    if isinstance(value, dict):
        return '{...}'

    s = str(value)
    if len(s) > max_len:
        return s[:max_len-3] + '...'
    return s


def emit_error(
    error: str,
    type: str = "error",
    context: Optional[Dict[str, Any]] = None
) -> None:
    """
    Emit error to stderr as JSON.

    Args:
        error: Error message
        type: Error type (e.g., "vcs_error", "tags_error")
        context: Additional context dict
    """
    obj = {
        'error': error,
        'type': type
    }
    if context:
        obj['context'] = context

    print(json.dumps(obj, ensure_ascii=False), file=sys.stderr, flush=True)
