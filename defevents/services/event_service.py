"""
Event service for defevents.

Runs the full pipeline for one commit:

    git show --unified=1  ->  UnifiedDiffParser  ->  hunks
    ctags (changed files) ->  SymbolIndex        ->  OverlapCorrelator
    hunks                 ->  ReferenceScanner
    changed tags + references + commit metadata -> EventAssembler

Collaborator calls (git, ctags) happen before any event is built; if
one fails the error propagates and nothing is emitted.
"""

from typing import List, Optional
import logging

from ..assembler import EventAssembler
from ..config import get_default_config
from ..correlate import OverlapCorrelator
from ..diff_parser import changed_files, parse_unified_diff
from ..domain import CommitMetadata, EventBatch, Hunk, Tag
from ..infra import CtagsClient, GitClient
from ..references import ReferenceScanner
from ..symbol_index import SymbolIndex

logger = logging.getLogger(__name__)


class ChangeEventService:
    """
    Service for turning a commit into change events.

    Example:
        service = ChangeEventService()
        batch = service.collect("/path/to/repo")
        print(json.dumps(batch.to_dict()))
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        ctags_client: Optional[CtagsClient] = None,
        config: Optional[dict] = None,
    ):
        """
        Initialize ChangeEventService.

        Args:
            git_client: Git client instance (built from config if None)
            ctags_client: Ctags client instance (built from config if None)
            config: Configuration dict (defaults if None)
        """
        if config is None:
            config = get_default_config()
        self.config = config
        self.git = git_client or GitClient.from_config(config)
        self.ctags = ctags_client or CtagsClient.from_config(config)
        self.scanner = ReferenceScanner.from_config(config)
        self.include_references = config.get('references', {}).get('enabled', True)

    def build(
        self,
        diff_text: str,
        tags: List[Tag],
        metadata: CommitMetadata,
    ) -> EventBatch:
        """
        Pure pipeline from collaborator outputs to events.

        Args:
            diff_text: Unified diff text of the commit
            tags: Symbol definitions of the changed files
            metadata: Commit metadata

        Returns:
            EventBatch for the commit
        """
        hunks = parse_unified_diff(diff_text)
        changed = OverlapCorrelator(SymbolIndex(tags)).changed_tags(hunks)
        references = self.scanner.scan(hunks) if self.include_references else []
        logger.debug(
            f"{len(hunks)} hunks, {len(changed)} changed tags, {len(references)} references"
        )
        return EventAssembler(metadata).assemble(changed, references)

    def hunks(self, path: str = ".", rev: str = "HEAD") -> List[Hunk]:
        """Parsed hunks of ``rev``."""
        return parse_unified_diff(self.git.show(path, rev))

    def tags(self, path: str = ".", rev: str = "HEAD") -> List[Tag]:
        """Symbol definitions of the files changed by ``rev``, grouped by file in line order."""
        index = SymbolIndex(self.ctags.extract(path, changed_files(self.hunks(path, rev))))
        return [tag for file in index.files() for tag in index.for_file(file)]

    def collect(self, path: str = ".", rev: str = "HEAD") -> EventBatch:
        """
        Query git and ctags, then build the events for ``rev``.

        Raises:
            VCSError, MetadataError: If a git query fails
            TagExtractionError, TagFormatError: If tag extraction fails
        """
        diff_text = self.git.show(path, rev)
        metadata = self.git.metadata(path, rev)
        files = changed_files(parse_unified_diff(diff_text))
        tags = self.ctags.extract(path, files)
        logger.info(f"Analyzing {metadata.commit[:8]}: {len(files)} files, {len(tags)} tags")
        return self.build(diff_text, tags, metadata)
