"""Match key derivation and reference/foreign join."""

import itertools
import logging
import re
import uuid
from collections.abc import Callable, Iterable, Sequence

from .models import (
    ApplicationConfig,
    BatchJobItem,
    BatchParameters,
    KeyCollision,
    MatchResult,
    PreviewRow,
)
from .rules import CompiledRules, RuleSet, compile_rules

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def uuid_id_factory(prefix: str = "batch") -> IdFactory:
    """Return a factory producing ``<prefix>-<uuid4 hex>`` identifiers."""

    def next_id() -> str:
        return f"{prefix}-{uuid.uuid4().hex}"

    return next_id


def sequential_id_factory(prefix: str = "batch", start: int = 1) -> IdFactory:
    """Return a factory producing ``<prefix>-1``, ``<prefix>-2``, ... identifiers."""
    counter = itertools.count(start)

    def next_id() -> str:
        return f"{prefix}-{next(counter)}"

    return next_id


def build_match_key(filename: str, compiled_rules: CompiledRules) -> str:
    """
    Reduce a filename to the key used to pair reference and foreign files.

    Args:
        filename: The filename to normalize
        compiled_rules: Compiled removal patterns, applied in order

    Returns:
        Lowercased filename with every rule removed, stripped of surrounding whitespace

    Example:
        >>> build_match_key("Show.S01E01.1080p.mkv", RuleSet().compile())
        'shows01e01'
    """
    key = filename.lower()
    for pattern in compiled_rules:
        key = pattern.sub("", key)
    return key.strip()


def is_video_file(filename: str, extensions: Iterable[str]) -> bool:
    """Check the filename's suffix against the allowed extensions, ignoring case."""
    name = filename.lower()
    return any(name.endswith(ext.lower()) for ext in extensions)


def filter_videos(filenames: Iterable[str], extensions: Iterable[str]) -> list[str]:
    """Keep only video filenames, preserving order."""
    extensions = list(extensions)
    return [name for name in filenames if is_video_file(name, extensions)]


class PairMatcher:
    """Pairs reference videos with foreign videos by match key."""

    def __init__(
        self, config: ApplicationConfig | None = None, id_factory: IdFactory | None = None
    ):
        """
        Initialize the matcher.

        Args:
            config: Application configuration, defaults to ApplicationConfig()
            id_factory: Generator for work item identifiers, defaults to UUIDs
        """
        self.config = config or ApplicationConfig()
        self.id_factory = id_factory or uuid_id_factory()

    def resolve_rules(
        self, rules: CompiledRules | RuleSet | Sequence[str | re.Pattern[str]] | str
    ) -> CompiledRules:
        """
        Turn whatever rule representation the caller holds into compiled rules.

        A single string is one rule. Sequences may mix raw strings and
        compiled patterns.

        Raises:
            CompileError: If raw rules do not compile
            TypeError: If a rule is neither a string nor a compiled pattern
        """
        if isinstance(rules, RuleSet):
            return rules.compile()
        if isinstance(rules, (str, re.Pattern)):
            rules = [rules]
        return compile_rules(rules)

    def join_path(self, folder: str, filename: str) -> str:
        """Concatenate folder and filename without any normalization."""
        return f"{folder}{self.config.path_separator}{filename}"

    def build_foreign_lookup(
        self, foreign_videos: Sequence[str], compiled_rules: CompiledRules
    ) -> tuple[dict[str, str], list[KeyCollision]]:
        """
        Map match keys to foreign filenames.

        When two foreign files share a key the later one wins. Every
        overwrite is reported so the caller can surface the ambiguity.

        Returns:
            Tuple of (key -> foreign filename, collisions)
        """
        lookup: dict[str, str] = {}
        collisions: list[KeyCollision] = []

        for name in foreign_videos:
            key = build_match_key(name, compiled_rules)
            previous = lookup.get(key)
            if previous is not None:
                logger.warning(
                    f"Foreign files {previous!r} and {name!r} share key {key!r}; keeping {name!r}"
                )
                collisions.append(KeyCollision(key=key, kept=name, discarded=previous))
            lookup[key] = name

        return lookup, collisions

    def match(
        self,
        reference_names: Iterable[str],
        foreign_names: Iterable[str],
        rules: CompiledRules | RuleSet | Sequence[str | re.Pattern[str]] | str,
        ref_folder: str,
        foreign_folder: str,
        output_folder: str,
        parameters: BatchParameters | None = None,
    ) -> MatchResult:
        """
        Pair reference videos with foreign videos.

        Args:
            reference_names: Filenames in the reference folder
            foreign_names: Filenames in the foreign folder
            rules: Compiled rules, a RuleSet, raw pattern strings, or a single pattern
            ref_folder: Folder holding the reference files
            foreign_folder: Folder holding the foreign files
            output_folder: Folder the processed videos will be written to
            parameters: Processing parameters copied onto each work item

        Returns:
            MatchResult with one preview row per reference video and one
            work item per matched reference video, both in reference order

        Raises:
            CompileError: If raw rules do not compile. Nothing is matched.

        Example:
            >>> result = PairMatcher().match(
            ...     ["Show.S01E01.1080p.mkv"], ["show_s01e01_eng.mp4"],
            ...     RuleSet(), "/ref", "/foreign", "/out")
            >>> result.jobs[0].output_video
            '/out/Show.S01E01.1080p.mkv'
        """
        compiled_rules = self.resolve_rules(rules)
        parameters = parameters or BatchParameters()
        extensions = self.config.video_extensions

        ref_videos = filter_videos(reference_names, extensions)
        foreign_videos = filter_videos(foreign_names, extensions)
        logger.info(
            f"Matching {len(ref_videos)} reference videos against "
            f"{len(foreign_videos)} foreign videos with {len(compiled_rules)} rules"
        )

        lookup, collisions = self.build_foreign_lookup(foreign_videos, compiled_rules)

        preview: list[PreviewRow] = []
        jobs: list[BatchJobItem] = []

        for ref_name in ref_videos:
            key = build_match_key(ref_name, compiled_rules)
            foreign_name = lookup.get(key)
            preview.append(PreviewRow(reference=ref_name, foreign=foreign_name, key=key))

            if foreign_name is None:
                logger.debug(f"No foreign match for {ref_name!r} (key {key!r})")
                continue

            logger.debug(f"Matched {ref_name!r} with {foreign_name!r} (key {key!r})")
            jobs.append(
                BatchJobItem(
                    id=self.id_factory(),
                    ref_video=self.join_path(ref_folder, ref_name),
                    foreign_video=self.join_path(foreign_folder, foreign_name),
                    output_video=self.join_path(output_folder, ref_name),
                    first_segment_adjust=parameters.first_segment_adjust,
                    last_segment_adjust=parameters.last_segment_adjust,
                    skip_subtitles=parameters.skip_subtitles,
                )
            )

        result = MatchResult(preview=preview, jobs=jobs, collisions=collisions)
        logger.info(f"Match pass complete: {result}")
        return result
