"""Core functionality for media pair matcher."""

from .errors import CompileError, ConfigurationError, DirectoryReadError, MatcherError
from .matcher import (
    PairMatcher,
    build_match_key,
    filter_videos,
    is_video_file,
    sequential_id_factory,
    uuid_id_factory,
)
from .models import (
    ApplicationConfig,
    BatchJobItem,
    BatchParameters,
    FolderKind,
    JobStatus,
    KeyCollision,
    MatchResult,
    PreviewRow,
)
from .rules import CompiledRules, RuleSet, compile_rules
from .scanner import MediaFolderLister
from .session import BatchSession

__all__ = [
    "ApplicationConfig",
    "BatchJobItem",
    "BatchParameters",
    "BatchSession",
    "CompileError",
    "CompiledRules",
    "ConfigurationError",
    "DirectoryReadError",
    "FolderKind",
    "JobStatus",
    "KeyCollision",
    "MatchResult",
    "MatcherError",
    "MediaFolderLister",
    "PairMatcher",
    "PreviewRow",
    "RuleSet",
    "build_match_key",
    "compile_rules",
    "filter_videos",
    "is_video_file",
    "sequential_id_factory",
    "uuid_id_factory",
]
