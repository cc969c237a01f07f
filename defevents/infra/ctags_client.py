"""
Tag extraction through ctags.

Runs ctags over the files touched by a commit and returns their symbol
definitions as Tag objects. Two output formats are supported:

- json: universal-ctags ``--output-format=json`` (default)
- etags: Emacs TAGS format, parsed with EtagsParser
"""

import json
import subprocess
from pathlib import Path
from typing import Iterable, List
import logging

from ..domain import Tag
from ..exit_codes import ConfigError, TagExtractionError, TagFormatError
from ..utils import run_command
from .etags import EtagsParser

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('json', 'etags')


class CtagsClient:
    """
    Extract symbol definitions with ctags.

    Example:
        client = CtagsClient()
        tags = client.extract("/path/to/repo", ["main.go", "util/strings.go"])
    """

    def __init__(self, command: str = "ctags", output_format: str = "json", timeout: int = 60):
        if output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unknown ctags output format {output_format!r}, expected one of {OUTPUT_FORMATS}"
            )
        self.command = command
        self.output_format = output_format
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: dict) -> 'CtagsClient':
        section = config.get('ctags', {})
        return cls(
            command=section.get('command', 'ctags'),
            output_format=section.get('format', 'json'),
            timeout=section.get('timeout_seconds', 60),
        )

    def build_command(self, files: List[str]) -> List[str]:
        if self.output_format == 'etags':
            return [self.command, '-e', '-f', '-'] + files
        return [self.command, '--output-format=json', '--fields=+nKS', '-f', '-'] + files

    def extract(self, path: str, files: Iterable[str]) -> List[Tag]:
        """
        Symbol definitions in ``files``.

        Args:
            path: Repository root; files are relative to it
            files: Files to index; files missing from the working tree are skipped

        Returns:
            Tags in ctags output order

        Raises:
            TagExtractionError: If ctags fails
            TagFormatError: If its output cannot be parsed
        """
        root = Path(path)
        existing = []
        for f in files:
            if (root / f).is_file():
                existing.append(f)
            else:
                logger.debug(f"Skipping {f}: not in working tree")
        if not existing:
            return []

        try:
            output, _ = run_command(
                self.build_command(existing),
                cwd=str(root),
                capture_output=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise TagExtractionError(f"{self.command} failed: {stderr or e}") from e
        except subprocess.TimeoutExpired as e:
            raise TagExtractionError(f"{self.command} timed out after {self.timeout}s") from e
        except OSError as e:
            raise TagExtractionError(f"Could not run {self.command}: {e}") from e

        if self.output_format == 'etags':
            parser = EtagsParser()
            parser.parse(output or "")
            tags = parser.to_tags()
        else:
            tags = parse_json_tags(output or "")
        logger.debug(f"Extracted {len(tags)} tags from {len(existing)} files")
        return tags


def parse_json_tags(output: str) -> List[Tag]:
    """
    Parse universal-ctags JSON lines output.

    Only ``_type == "tag"`` records are kept; pseudo-tags are skipped.

    Raises:
        TagFormatError: If a line is not valid JSON or lacks name, path or line
    """
    tags = []
    for raw in output.splitlines():
        raw = raw.strip()
        if not raw:
            continue
        try:
            record = json.loads(raw)
        except json.JSONDecodeError as e:
            raise TagFormatError(f"Invalid ctags JSON line {raw!r}: {e}") from e
        if record.get('_type') != 'tag':
            continue
        try:
            tags.append(Tag(
                file=record['path'],
                name=record['name'],
                kind=record.get('kind', ''),
                signature=record.get('signature', ''),
                line=int(record['line']),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise TagFormatError(f"Incomplete ctags record {raw!r}") from e
    return tags
