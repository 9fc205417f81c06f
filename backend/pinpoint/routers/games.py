# backend/pinpoint/routers/games.py
from typing import Sequence

from fastapi import APIRouter

from ..exceptions import InvalidFrame
from ..schemas import (
    FrameOut,
    GameRecordIn,
    GameRecordOut,
    GameScoreIn,
    GameScoreOut,
    GameStatsOut,
)
from ..scoring.calculator import (
    calculate_game_score,
    get_game_statistics,
    is_game_complete,
    throw_display,
)
from ..scoring.frames import Frame, create_empty_game
from ..services.validation import validate_game_frames, validate_throw

# Resource-only prefix; versioning is added in main.py
router = APIRouter(prefix="/games", tags=["games"])


def frame_out(frame: Frame) -> FrameOut:
    return FrameOut(
        frame_number=frame.frame_number,
        throws=list(frame.throws),
        marks=[
            throw_display(frame.frame_number, i, frame.throws)
            for i in range(len(frame.throws))
        ],
        cumulative_score=frame.cumulative_score,
        is_complete=frame.is_complete,
    )


def _frames_from_body(body: GameScoreIn) -> list[Frame]:
    frames = create_empty_game().frames
    seen: set[int] = set()
    for frame_in in body.frames:
        if frame_in.frame_number in seen:
            raise InvalidFrame(f"frame {frame_in.frame_number} listed more than once")
        seen.add(frame_in.frame_number)
        for index, pins in enumerate(frame_in.throws):
            error = validate_throw(
                frame_in.frame_number, index, pins, frame_in.throws[:index]
            )
            if error:
                raise InvalidFrame(
                    f"frame {frame_in.frame_number} throw {index + 1}: {error}"
                )
        frames[frame_in.frame_number - 1].throws = list(frame_in.throws)
    return frames


def score_response(frames: Sequence[Frame]) -> GameScoreOut:
    stats = get_game_statistics(frames)
    return GameScoreOut(
        frames=[frame_out(f) for f in frames],
        total_score=frames[-1].cumulative_score or 0,
        is_complete=is_game_complete(frames),
        stats=GameStatsOut(**stats),
    )


# POST /api/v0/games/score
@router.post("/score", response_model=GameScoreOut)
async def score_game(body: GameScoreIn) -> GameScoreOut:
    """Score a full or partial game. Frames not supplied are treated as unbowled."""
    frames = calculate_game_score(_frames_from_body(body))
    return score_response(frames)


# POST /api/v0/games/record
@router.post("/record", response_model=GameRecordOut)
async def record_game(body: GameRecordIn) -> GameRecordOut:
    """Validate a finished game and return the record handed to storage."""
    # ValidationError is rendered as an invalid_frame problem by the app.
    throws_by_frame = validate_game_frames(body.frames)

    game = create_empty_game(body.created_at)
    for frame, throws in zip(game.frames, throws_by_frame):
        frame.throws = throws
    game.frames = calculate_game_score(game.frames)
    if not game.is_complete:
        raise InvalidFrame("game is not complete")

    record = game.to_record()
    return GameRecordOut(
        frames=[frame_out(f) for f in game.frames],
        total_score=record["totalScore"],
        strikes=record["strikes"],
        spares=record["spares"],
        opens=record["opens"],
        created_at=game.created_at,
    )
