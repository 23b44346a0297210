"""Pydantic models for media pair matcher."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_VIDEO_EXTENSIONS = [".mkv", ".mp4", ".avi", ".mov", ".m4v"]

DEFAULT_PATTERNS = [
    r"\.[^.]+$",  # File extension
    r"\[.*?\]",  # Bracketed tags
    r"(1080p|720p|4k)",  # Resolution markers
    r"(ptbr|eng|jap|jp)",  # Language markers
    r"[-_.\s]",  # Separators
]


class JobStatus(str, Enum):
    """Lifecycle status of a batch work item."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class FolderKind(str, Enum):
    """The three folders a batch pass needs."""

    REFERENCE = "reference"
    FOREIGN = "foreign"
    OUTPUT = "output"


class BatchParameters(BaseModel):
    """Per-batch processing parameters copied onto every work item."""

    model_config = ConfigDict(populate_by_name=True)

    first_segment_adjust: float = Field(
        default=0, alias="firstSegmentAdjust", description="First segment timing adjustment"
    )
    last_segment_adjust: float = Field(
        default=0, alias="lastSegmentAdjust", description="Last segment timing adjustment"
    )
    skip_subtitles: bool = Field(
        default=False, alias="noSubtitles", description="Skip subtitle handling"
    )

    @field_validator("first_segment_adjust", "last_segment_adjust", mode="before")
    @classmethod
    def default_missing_adjustment(cls, v: float | None) -> float:
        """Treat an absent adjustment as zero."""
        return 0 if v is None else v

    @field_validator("skip_subtitles", mode="before")
    @classmethod
    def default_missing_flag(cls, v: bool | None) -> bool:
        """Treat an absent subtitle flag as False."""
        return False if v is None else v


class PreviewRow(BaseModel):
    """Diagnostic row showing the match result for one reference video."""

    reference: str = Field(..., description="Reference filename")
    foreign: str | None = Field(None, description="Matched foreign filename, if any")
    key: str = Field(..., description="Computed match key")

    @property
    def matched(self) -> bool:
        """Whether a foreign file was found for this reference file."""
        return self.foreign is not None

    def __str__(self) -> str:
        return f"{self.reference} -> {self.foreign or '(no match)'} [{self.key}]"


class BatchJobItem(BaseModel):
    """A matched reference/foreign pair queued for later processing."""

    id: str = Field(..., description="Process-unique identifier")
    ref_video: str = Field(..., description="Absolute path of the reference video")
    foreign_video: str = Field(..., description="Absolute path of the foreign video")
    output_video: str = Field(..., description="Absolute path of the output video")
    first_segment_adjust: float = Field(default=0)
    last_segment_adjust: float = Field(default=0)
    skip_subtitles: bool = Field(default=False)
    status: JobStatus = Field(default=JobStatus.PENDING)

    def __str__(self) -> str:
        return f"{self.ref_video} + {self.foreign_video} -> {self.output_video} ({self.status.value})"


class KeyCollision(BaseModel):
    """A foreign file shadowed by a later foreign file with the same key."""

    key: str
    kept: str = Field(..., description="Foreign filename retained in the lookup")
    discarded: str = Field(..., description="Foreign filename overwritten")


class MatchResult(BaseModel):
    """Outcome of one match pass."""

    preview: list[PreviewRow] = Field(default_factory=list)
    jobs: list[BatchJobItem] = Field(default_factory=list)
    collisions: list[KeyCollision] = Field(default_factory=list)

    @property
    def matched_count(self) -> int:
        """Number of reference videos that found a foreign match."""
        return len(self.jobs)

    @property
    def unmatched_count(self) -> int:
        """Number of reference videos left without a match."""
        return len(self.preview) - len(self.jobs)

    def __str__(self) -> str:
        return (
            f"{len(self.preview)} reference videos, {self.matched_count} matched, "
            f"{self.unmatched_count} unmatched"
        )


class ApplicationConfig(BaseModel):
    """Configuration settings for the application."""

    video_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_VIDEO_EXTENSIONS),
        description="File extensions to consider as videos",
    )
    default_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PATTERNS),
        description="Rules a fresh rule set starts with",
    )
    path_separator: str = Field(default="/", description="Separator between folder and filename")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("video_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Ensure all extensions start with a dot and are lowercase."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @field_validator("path_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """Reject an empty separator."""
        if not v:
            raise ValueError("path_separator must not be empty")
        return v
