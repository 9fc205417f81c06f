from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .time_utils import require_utc


class FrameIn(BaseModel):
    frame_number: int = Field(..., ge=1, le=10, alias="frameNumber")
    throws: List[int] = Field(default_factory=list, max_length=3)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("throws")
    @classmethod
    def _check_pin_counts(cls, value: List[int]) -> List[int]:
        for pins in value:
            if pins < 0 or pins > 10:
                raise ValueError("each throw must be between 0 and 10")
        return value


class GameScoreIn(BaseModel):
    frames: List[FrameIn] = Field(..., min_length=1, max_length=10)

    model_config = ConfigDict(extra="forbid")


class GameRecordIn(BaseModel):
    """A finished game submitted for hand-off to storage."""

    frames: List[dict]
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("created_at")
    @classmethod
    def _require_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return require_utc(value, field_name="createdAt")


class FrameOut(BaseModel):
    frame_number: int = Field(alias="frameNumber")
    throws: List[int]
    marks: List[str] = Field(default_factory=list)
    cumulative_score: Optional[int] = Field(default=None, alias="cumulativeScore")
    is_complete: bool = Field(alias="isComplete")

    model_config = ConfigDict(populate_by_name=True)


class GameStatsOut(BaseModel):
    strikes: int
    spares: int
    opens: int


class GameScoreOut(BaseModel):
    frames: List[FrameOut]
    total_score: int = Field(alias="totalScore")
    is_complete: bool = Field(alias="isComplete")
    stats: GameStatsOut

    model_config = ConfigDict(populate_by_name=True)


class GameRecordOut(BaseModel):
    frames: List[FrameOut]
    total_score: int = Field(alias="totalScore")
    strikes: int
    spares: int
    opens: int
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class SplitOut(BaseModel):
    name: str
    pins: List[int]
    difficulty: str
    conversion_rate: float = Field(alias="conversionRate")
    description: str
    advice: str

    model_config = ConfigDict(populate_by_name=True)


class SplitAnalyzeIn(BaseModel):
    knocked_down: List[int] = Field(..., alias="knockedDown", max_length=10)
    policy: Optional[Literal["catalog", "any"]] = None

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ThrowConfirmIn(BaseModel):
    pins: Optional[List[int]] = Field(default=None, max_length=10)

    model_config = ConfigDict(extra="forbid")


class SessionCreateIn(BaseModel):
    split_policy: Optional[Literal["catalog", "any"]] = Field(
        default=None, alias="splitPolicy"
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class SessionOut(BaseModel):
    id: str
    current_frame: int = Field(alias="currentFrame")
    current_throw: int = Field(alias="currentThrow")
    game_complete: bool = Field(alias="gameComplete")
    is_editing: bool = Field(alias="isEditing")
    selected_pins: List[int] = Field(alias="selectedPins")
    available_pins: List[int] = Field(alias="availablePins")
    frames: List[FrameOut]
    total_score: int = Field(alias="totalScore")
    pin_sets: dict[str, List[int]] = Field(alias="pinSets")
    split: Optional[SplitOut] = None

    model_config = ConfigDict(populate_by_name=True)
