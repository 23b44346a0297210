"""Batch session: folder selection, match pass and hand-off to a job queue."""

import logging
from collections.abc import Callable

from .errors import ConfigurationError, DirectoryReadError
from .matcher import PairMatcher
from .models import BatchJobItem, BatchParameters, FolderKind, MatchResult, PreviewRow
from .rules import RuleSet
from .scanner import DirectoryLister, DirectorySelector, MediaFolderLister

logger = logging.getLogger(__name__)

JobsCallback = Callable[[list[BatchJobItem]], None]


class BatchSession:
    """Holds the state of one batch screen and drives the matcher."""

    def __init__(
        self,
        on_add_to_queue: JobsCallback,
        on_jobs_change: JobsCallback | None = None,
        lister: DirectoryLister | None = None,
        matcher: PairMatcher | None = None,
        rule_set: RuleSet | None = None,
        parameters: BatchParameters | None = None,
    ):
        """
        Initialize the session.

        Args:
            on_add_to_queue: Receives the pending jobs when they are queued
            on_jobs_change: Optional notification whenever the pending jobs change
            lister: Folder lister, defaults to MediaFolderLister
            matcher: Pair matcher, defaults to PairMatcher()
            rule_set: Editable rules, defaults to the built-in rules
            parameters: Processing parameters copied onto new jobs
        """
        self.on_add_to_queue = on_add_to_queue
        self.on_jobs_change = on_jobs_change
        self.matcher = matcher or PairMatcher()
        self.lister = lister or MediaFolderLister()
        if rule_set is None:
            rule_set = RuleSet(self.matcher.config.default_patterns)
        self.rule_set = rule_set
        self.parameters = parameters or BatchParameters()

        self.folders: dict[FolderKind, str] = {}
        self._preview: list[PreviewRow] = []
        self._jobs: list[BatchJobItem] = []

    @property
    def preview(self) -> list[PreviewRow]:
        """Preview rows from the last successful load."""
        return list(self._preview)

    @property
    def jobs(self) -> list[BatchJobItem]:
        """Jobs waiting to be queued."""
        return list(self._jobs)

    def set_folder(self, kind: FolderKind, path: str) -> None:
        """Store the folder for ``kind``."""
        self.folders[FolderKind(kind)] = path

    def select_folder(self, kind: FolderKind, selector: DirectorySelector) -> bool:
        """
        Ask the selector for a folder and store it.

        Returns:
            False if the user cancelled, in which case the previous folder is kept
        """
        path = selector()
        if not path:
            logger.debug(f"Folder selection for {FolderKind(kind).value} cancelled")
            return False
        self.set_folder(kind, path)
        return True

    def missing_folders(self) -> list[FolderKind]:
        """Folder kinds that have not been set yet."""
        return [kind for kind in FolderKind if not self.folders.get(kind)]

    def load_jobs(self) -> MatchResult:
        """
        List both folders and pair their videos.

        The preview and pending jobs are only replaced when every step succeeds.

        Raises:
            ConfigurationError: If any of the three folders is unset
            CompileError: If a rule is invalid
            DirectoryReadError: If a folder cannot be listed
        """
        missing = self.missing_folders()
        if missing:
            raise ConfigurationError(missing)

        compiled_rules = self.rule_set.compile()

        ref_folder = self.folders[FolderKind.REFERENCE]
        foreign_folder = self.folders[FolderKind.FOREIGN]
        output_folder = self.folders[FolderKind.OUTPUT]

        ref_files = self._list(ref_folder)
        foreign_files = self._list(foreign_folder)

        result = self.matcher.match(
            ref_files,
            foreign_files,
            compiled_rules,
            ref_folder,
            foreign_folder,
            output_folder,
            self.parameters,
        )

        self._preview = list(result.preview)
        self._jobs = list(result.jobs)
        self._notify()
        return result

    def add_to_queue(self) -> int:
        """
        Hand the pending jobs over to the queue and reset the session.

        Returns:
            Number of jobs handed over
        """
        if not self._jobs:
            return 0

        jobs, self._jobs = self._jobs, []
        self._preview = []
        self.on_add_to_queue(jobs)
        logger.info(f"Added {len(jobs)} jobs to the queue")
        self._notify()
        return len(jobs)

    def clear(self) -> None:
        """Drop the preview and pending jobs."""
        self._preview = []
        self._jobs = []
        self._notify()

    def _list(self, path: str) -> list[str]:
        try:
            return list(self.lister(path))
        except DirectoryReadError:
            raise
        except OSError as e:
            logger.error(f"Error listing directory {path}: {e}")
            raise DirectoryReadError(path, str(e)) from e

    def _notify(self) -> None:
        if self.on_jobs_change:
            self.on_jobs_change(list(self._jobs))
