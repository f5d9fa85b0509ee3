from fastapi import APIRouter, Depends, HTTPException

from salon_booking.api.v1.mappers import booking_to_schema
from salon_booking.api.v1.schemas import BookingListSchema
from salon_booking.api.v1.sessions import require_user
from salon_booking.application.exceptions import BackendContractError, BackendUpstreamError
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.domain.entities.profile import UserIdentity
from salon_booking.wiring.dependencies import get_booking_use_case

router = APIRouter()


@router.get("/bookings", response_model=BookingListSchema)
def list_bookings(
    user: UserIdentity = Depends(require_user),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        items = uc.list_bookings(user)
    except (BackendUpstreamError, BackendContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    return BookingListSchema(
        is_admin=uc.is_admin(user),
        bookings=[booking_to_schema(item.booking, is_today=item.is_today, client=item.client) for item in items],
    )
