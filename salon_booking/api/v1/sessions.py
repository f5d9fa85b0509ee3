import logging
from dataclasses import replace

from fastapi import APIRouter, Depends, Header, HTTPException

from salon_booking.api.v1.mappers import booking_to_schema, session_to_schema
from salon_booking.api.v1.schemas import (
    ConfirmResponseSchema,
    CreateSessionRequestSchema,
    SelectDateRequestSchema,
    SelectTimeRequestSchema,
    SelectTimeResponseSchema,
    SessionSchema,
    SlotBoardSchema,
    SlotSchema,
    ToggleServiceRequestSchema,
)
from salon_booking.application.exceptions import (
    BackendContractError,
    BackendUpstreamError,
    BookingIncompleteError,
    InvalidSessionIdError,
    NonSelectableDateError,
    SlotSelectionError,
    UnknownServiceError,
)
from salon_booking.application.ports.identity import IdentityPort
from salon_booking.application.ports.session_store import SessionStorePort
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.application.use_cases.selection import SelectionUseCase
from salon_booking.domain.entities.profile import UserIdentity
from salon_booking.domain.entities.session import BookingSession
from salon_booking.wiring.dependencies import (
    get_booking_use_case,
    get_identity,
    get_selection_use_case,
    get_session_store,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def require_user(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
    identity: IdentityPort = Depends(get_identity),
) -> UserIdentity:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    try:
        user = identity.get_user(x_user_id)
    except (BackendUpstreamError, BackendContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def _load_session(store: SessionStorePort, session_id: str) -> BookingSession:
    try:
        session = store.get(session_id)
    except InvalidSessionIdError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/sessions", response_model=SessionSchema)
def create_session(
    req: CreateSessionRequestSchema | None = None,
    store: SessionStorePort = Depends(get_session_store),
):
    try:
        session = store.get_or_create(req.session_id if req else None)
    except InvalidSessionIdError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session_to_schema(session)


@router.get("/sessions/{session_id}", response_model=SessionSchema)
def get_session(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    return session_to_schema(_load_session(store, session_id))


@router.post("/sessions/{session_id}/services/toggle", response_model=SessionSchema)
def toggle_service(
    session_id: str,
    req: ToggleServiceRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
    uc: SelectionUseCase = Depends(get_selection_use_case),
    booking_uc: BookingUseCase = Depends(get_booking_use_case),
):
    session = _load_session(store, session_id)
    try:
        result = uc.toggle(session.selection, req.name)
    except UnknownServiceError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session = booking_uc.sync_session(replace(session, selection=result.updated_state))
    store.save(session)
    return session_to_schema(session)


@router.post("/sessions/{session_id}/reset", response_model=SessionSchema)
def reset_session(
    session_id: str,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _load_session(store, session_id)
    session = BookingSession(session_id=session.session_id)
    store.save(session)
    return session_to_schema(session)


@router.post("/sessions/{session_id}/date", response_model=SessionSchema)
def select_date(
    session_id: str,
    req: SelectDateRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    session = _load_session(store, session_id)
    try:
        session = uc.select_date(session, req.date)
    except NonSelectableDateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    store.save(session)
    return session_to_schema(session)


@router.get("/sessions/{session_id}/slots", response_model=SlotBoardSchema)
def get_slots(
    session_id: str,
    store: SessionStorePort = Depends(get_session_store),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    session = _load_session(store, session_id)
    try:
        session, board = uc.availability(session)
    except BookingIncompleteError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (BackendUpstreamError, BackendContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    return SlotBoardSchema(
        date=session.booking.selected_date,
        duration_minutes=session.booking.duration_minutes,
        duration_unset=session.booking.duration_minutes <= 0,
        slots=[
            SlotSchema(time=slot.time, booked=slot.booked, disabled=slot.disabled, selected=slot.selected)
            for slot in board
        ],
    )


@router.post("/sessions/{session_id}/time", response_model=SelectTimeResponseSchema)
def select_time(
    session_id: str,
    req: SelectTimeRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    session = _load_session(store, session_id)
    try:
        session, result = uc.choose_time(session, req.time)
    except (BackendUpstreamError, BackendContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    store.save(session)
    return SelectTimeResponseSchema(
        action=result.action,
        rejection=result.rejection,
        session=session_to_schema(session),
    )


@router.post("/sessions/{session_id}/confirm", response_model=ConfirmResponseSchema)
def confirm_booking(
    session_id: str,
    user: UserIdentity = Depends(require_user),
    store: SessionStorePort = Depends(get_session_store),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    session = _load_session(store, session_id)
    try:
        confirmation = uc.confirm(user.user_id, session)
    except (BookingIncompleteError, NonSelectableDateError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SlotSelectionError as e:
        raise HTTPException(status_code=409, detail={"reason": e.kind, "message": str(e)})
    except (BackendUpstreamError, BackendContractError) as e:
        logger.warning("Booking not stored", extra={"session_id": session_id, "error": str(e)})
        raise HTTPException(status_code=502, detail=str(e))

    store.save(confirmation.session)
    return ConfirmResponseSchema(
        booking=booking_to_schema(confirmation.booking),
        session=session_to_schema(confirmation.session),
    )
