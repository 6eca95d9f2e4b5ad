from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import time as dt_time
from typing import List, Optional


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class FieldDetail(BaseModel):
    """One field/court and its price tier; price stays text until derivation"""
    name: str
    price: str

    @field_validator('price', mode='before')
    @classmethod
    def stringify_price(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class OperatingHour(BaseModel):
    closed: bool = False
    openTime: Optional[dt_time] = None
    closeTime: Optional[dt_time] = None

    @field_validator('openTime', 'closeTime', mode='before')
    @classmethod
    def blank_times(cls, v):
        return _blank_to_none(v)

    @model_validator(mode='after')
    def require_times_when_open(self):
        if not self.closed and (self.openTime is None or self.closeTime is None):
            raise ValueError('openTime and closeTime are required for open days')
        return self


class PaymentPreferences(BaseModel):
    # Unknown keys are kept so a new channel can be toggled before it is declared here
    model_config = ConfigDict(extra='allow')

    cash: bool = False
    wechat: bool = False
    wechatName: Optional[str] = None
    wechatPhone: Optional[str] = None
    kpay: bool = False
    kpayName: Optional[str] = None
    kpayPhone: Optional[str] = None
    paylah: bool = False
    paylahName: Optional[str] = None
    paylahPhone: Optional[str] = None

    @field_validator('wechatName', 'wechatPhone', 'kpayName', 'kpayPhone', 'paylahName', 'paylahPhone', mode='before')
    @classmethod
    def stringify_account(cls, v):
        # Phone numbers often arrive as JSON numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class Attachment(BaseModel):
    filename: str
    content_type: str
    content: bytes

    @property
    def extension(self) -> str:
        if '.' not in self.filename:
            return 'bin'
        return self.filename.rsplit('.', 1)[-1].lower() or 'bin'


class ListingSubmission(BaseModel):
    """The whole multipart form, validated once before any side effect"""
    model_config = ConfigDict(populate_by_name=True)

    business_name: str = Field(alias='businessName', min_length=1)
    number_of_fields: int = Field(alias='numberOfFields', ge=1)
    street_address: Optional[str] = Field(None, alias='streetAddress')
    town: Optional[str] = None
    province: Optional[str] = None
    nearest_bus_stop: Optional[str] = Field(None, alias='nearestBusStop')
    nearest_train_station: Optional[str] = Field(None, alias='nearestTrainStation')
    google_map_location: Optional[str] = Field(None, alias='googleMapLocation')
    facebook: Optional[str] = None
    tiktok: Optional[str] = None
    info_website: Optional[str] = Field(None, alias='infoWebsite')
    price_currency: Optional[str] = Field(None, alias='priceCurrency')
    pos_lite_price: Optional[str] = Field(None, alias='posLitePrice')
    service_listing_price: Optional[str] = Field(None, alias='serviceListingPrice')
    pos_lite_option: Optional[str] = Field(None, alias='posLiteOption')
    phone_number: Optional[str] = Field(None, alias='phoneNumber')
    booking_start_time: Optional[dt_time] = Field(None, alias='bookingStartTime')
    booking_end_time: Optional[dt_time] = Field(None, alias='bookingEndTime')
    description: Optional[str] = None
    facilities: Optional[str] = None
    rules: Optional[str] = None
    popular_products: Optional[str] = Field(None, alias='popularProducts')
    max_capacity: int = Field(alias='maxCapacity', ge=0)
    field_type: str = Field(alias='fieldType', min_length=1)

    field_details: List[FieldDetail] = Field(alias='fieldDetails')
    operating_hours: List[OperatingHour] = Field(alias='operatingHours', min_length=7, max_length=7)
    payment_methods: PaymentPreferences = Field(alias='paymentMethods')

    images: List[Attachment] = []
    receipt: Optional[Attachment] = None

    @field_validator('booking_start_time', 'booking_end_time', mode='before')
    @classmethod
    def blank_times(cls, v):
        return _blank_to_none(v)

    @property
    def lite_pos_accepted(self) -> bool:
        # Anything other than an explicit "accept" means no add-on
        return self.pos_lite_option == 'accept'


class ListingCreated(BaseModel):
    success: bool = True
    business_id: str
    resource_id: str
    service_id: str


class ListingFailed(BaseModel):
    success: bool = False
    error: str
