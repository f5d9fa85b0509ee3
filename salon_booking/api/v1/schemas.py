from datetime import date

from pydantic import BaseModel, Field


class ServiceSchema(BaseModel):
    name: str
    category: str
    duration_minutes: int
    duration_label: str
    price: int | float | str
    price_label: str


class ServiceCategorySchema(BaseModel):
    category: str
    items: list[ServiceSchema] = Field(default_factory=list)


class DisabledDatesSchema(BaseModel):
    today: date
    horizon_days: int
    dates: list[date] = Field(default_factory=list)


class SelectedServiceSchema(BaseModel):
    name: str
    duration_minutes: int
    price: int | float
    price_max: int | float | None = None


class SelectionSchema(BaseModel):
    services: dict[str, bool] = Field(default_factory=dict)
    items: list[SelectedServiceSchema] = Field(default_factory=list)
    total_duration_minutes: int = 0
    total_duration_label: str = "0 min"
    total_price: int | float = 0
    total_price_max: int | float = 0


class BookingStateSchema(BaseModel):
    status: str
    selected_date: date | None = None
    duration_minutes: int = 0
    start_time: str | None = None
    reserved_slots: list[str] = Field(default_factory=list)
    last_rejection: str | None = None


class SessionSchema(BaseModel):
    session_id: str
    selection: SelectionSchema
    booking: BookingStateSchema


class CreateSessionRequestSchema(BaseModel):
    session_id: str | None = None


class ToggleServiceRequestSchema(BaseModel):
    name: str = Field(min_length=1)


class SelectDateRequestSchema(BaseModel):
    date: date


class SelectTimeRequestSchema(BaseModel):
    time: str = Field(min_length=1)


class SelectTimeResponseSchema(BaseModel):
    action: str
    rejection: str | None = None
    session: SessionSchema


class SlotSchema(BaseModel):
    time: str
    booked: bool
    disabled: bool
    selected: bool


class SlotBoardSchema(BaseModel):
    date: date
    duration_minutes: int
    duration_unset: bool
    slots: list[SlotSchema] = Field(default_factory=list)


class BookingSchema(BaseModel):
    id: str
    user_id: str
    date: date
    start_time: str
    duration_minutes: int
    duration_label: str
    time_slots: list[str] = Field(default_factory=list)
    services: list[str] = Field(default_factory=list)
    total_price: int | float = 0
    is_today: bool = False
    client_name: str | None = None
    client_phone: str | None = None


class ConfirmResponseSchema(BaseModel):
    booking: BookingSchema
    session: SessionSchema


class BookingListSchema(BaseModel):
    is_admin: bool
    bookings: list[BookingSchema] = Field(default_factory=list)
