# backend/pinpoint/routers/sessions.py
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Response

from .. import config
from ..cache import TTLCache, entry_sessions
from ..exceptions import GameIncomplete, SessionNotFound, http_problem
from ..schemas import (
    GameRecordOut,
    SessionCreateIn,
    SessionOut,
    ThrowConfirmIn,
)
from ..scoring.pin_entry import (
    GameNotFinished,
    InvalidPinSelection,
    PinEntryError,
    PinEntrySession,
)
from ..services.validation import ValidationError, validate_pin_selection
from .games import frame_out
from .splits import split_out

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def get_session_store() -> TTLCache:
    return entry_sessions


async def _load(session_id: str, store: TTLCache) -> PinEntrySession:
    session = await store.get(session_id, refresh=True)
    if session is None:
        raise SessionNotFound(session_id)
    return session


def _session_out(session_id: str, session: PinEntrySession) -> SessionOut:
    return SessionOut(
        id=session_id,
        current_frame=session.current_frame,
        current_throw=session.current_throw,
        game_complete=session.game_complete,
        is_editing=session.is_editing,
        selected_pins=sorted(session.selected_pins),
        available_pins=sorted(session.available_pins()),
        frames=[frame_out(f) for f in session.game.frames],
        total_score=session.game.total_score,
        pin_sets=session.pin_sets.to_dict(),
        split=split_out(session.last_split),
    )


def _entry_problem(exc: PinEntryError):
    code = (
        "session_invalid_pins"
        if isinstance(exc, InvalidPinSelection)
        else "session_invalid_move"
    )
    return http_problem(status_code=422, detail=str(exc), code=code)


# POST /api/v0/sessions
@router.post("", response_model=SessionOut, status_code=201)
async def create_session(
    body: Optional[SessionCreateIn] = None,
    store: TTLCache = Depends(get_session_store),
) -> SessionOut:
    purged = await store.purge_expired()
    if purged:
        logger.debug("Dropped %s expired entry session(s)", purged)
    sid = uuid.uuid4().hex
    policy = (body.split_policy if body else None) or config.SPLIT_POLICY
    session = PinEntrySession(split_policy=policy)
    session.on_frame_changed.append(
        lambda previous, current: logger.debug(
            "Session %s moved from frame %s to frame %s", sid, previous, current
        )
    )
    await store.set(sid, session)
    logger.info("Created entry session %s (split policy %s)", sid, policy)
    return _session_out(sid, session)


@router.get("/{session_id}", response_model=SessionOut)
async def get_entry_session(
    session_id: str, store: TTLCache = Depends(get_session_store)
) -> SessionOut:
    session = await _load(session_id, store)
    return _session_out(session_id, session)


@router.post("/{session_id}/pins/{pin}", response_model=SessionOut)
async def toggle_pin(
    session_id: str, pin: int, store: TTLCache = Depends(get_session_store)
) -> SessionOut:
    session = await _load(session_id, store)
    session.toggle_pin(pin)
    return _session_out(session_id, session)


@router.post("/{session_id}/quick/{kind}", response_model=SessionOut)
async def quick_select(
    session_id: str, kind: str, store: TTLCache = Depends(get_session_store)
) -> SessionOut:
    session = await _load(session_id, store)
    try:
        session.quick_select(kind)
    except PinEntryError as exc:
        raise _entry_problem(exc)
    return _session_out(session_id, session)


@router.post("/{session_id}/confirm", response_model=SessionOut)
async def confirm_throw(
    session_id: str,
    body: Optional[ThrowConfirmIn] = None,
    store: TTLCache = Depends(get_session_store),
) -> SessionOut:
    session = await _load(session_id, store)
    if session.game_complete:
        raise http_problem(
            status_code=409,
            detail="game is already complete",
            code="session_game_complete",
        )
    pins = None
    if body is not None and body.pins is not None:
        try:
            pins = validate_pin_selection(body.pins)
        except ValidationError as exc:
            raise http_problem(
                status_code=422, detail=str(exc), code="session_invalid_pins"
            )
    try:
        session.confirm_throw(pins)
    except PinEntryError as exc:
        raise _entry_problem(exc)
    return _session_out(session_id, session)


@router.post("/{session_id}/frames/{frame_number}/edit", response_model=SessionOut)
async def edit_frame(
    session_id: str,
    frame_number: int,
    throw: Optional[int] = None,
    store: TTLCache = Depends(get_session_store),
) -> SessionOut:
    session = await _load(session_id, store)
    try:
        if throw is None:
            session.select_frame_for_editing(frame_number)
        else:
            session.select_throw(frame_number, throw)
    except PinEntryError as exc:
        raise _entry_problem(exc)
    return _session_out(session_id, session)


@router.post("/{session_id}/reset", response_model=SessionOut)
async def reset_session(
    session_id: str, store: TTLCache = Depends(get_session_store)
) -> SessionOut:
    session = await _load(session_id, store)
    session.reset()
    return _session_out(session_id, session)


@router.get("/{session_id}/record", response_model=GameRecordOut)
async def session_record(
    session_id: str, store: TTLCache = Depends(get_session_store)
) -> GameRecordOut:
    session = await _load(session_id, store)
    try:
        record = session.to_record()
    except GameNotFinished as exc:
        raise GameIncomplete(str(exc))
    return GameRecordOut(
        frames=[frame_out(f) for f in session.game.frames],
        total_score=record["totalScore"],
        strikes=record["strikes"],
        spares=record["spares"],
        opens=record["opens"],
        created_at=session.game.created_at,
    )


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str, store: TTLCache = Depends(get_session_store)
):
    if not await store.invalidate(session_id):
        raise SessionNotFound(session_id)
    return Response(status_code=204)
