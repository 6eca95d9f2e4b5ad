import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, JSON, Date, Time, Float, UniqueConstraint
from sqlalchemy.orm import relationship
from config.database import Base


def generate_uuid():
    return str(uuid.uuid4())


class PaymentStatus(str, enum.Enum):
    TO_BE_CONFIRMED = "to_be_confirmed"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class Business(Base):
    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    address = Column(Text, nullable=True)
    towns = Column(String(255), nullable=True)
    province_district = Column(String(255), nullable=True)
    google_map_location = Column(Text, nullable=True)
    nearest_bus_stop = Column(String(255), nullable=True)
    nearest_train_station = Column(String(255), nullable=True)

    facebook_page = Column(String(500), nullable=True)
    tiktok_url = Column(String(500), nullable=True)
    website = Column(String(500), nullable=True)

    price_currency = Column(String(10), nullable=True)
    pos_lite_price = Column(String(50), nullable=True)
    service_listing_price = Column(String(50), nullable=True)
    lite_pos = Column(Integer, nullable=True)  # 1 when the lite POS add-on was accepted
    lite_pos_expired = Column(Date, nullable=True)

    payment_status = Column(String(20), default=PaymentStatus.TO_BE_CONFIRMED.value, nullable=False)
    searchable_business = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    resources = relationship("BusinessResource", back_populates="business")
    payment_methods = relationship("PaymentMethod", back_populates="business")

    def __repr__(self):
        return f"<Business(id={self.id}, name={self.name})>"


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    category_id = Column(String(36), nullable=False, index=True)
    # "<category>_booking_<business_id>"
    service_key = Column(String(120), unique=True, nullable=False, index=True)

    popular_products = Column(Text, nullable=True)
    services_description = Column(Text, nullable=True)
    facilities = Column(Text, nullable=True)
    rules = Column(Text, nullable=True)
    service_images = Column(JSON, nullable=False, default=list)

    contact_phone = Column(String(50), nullable=True)
    contact_available_start = Column(Time, nullable=True)
    contact_available_until = Column(Time, nullable=True)

    service_listing_receipt = Column(String, nullable=True)
    service_listing_expired = Column(Date, nullable=False)
    default_duration_min = Column(Integer, default=60, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    resources = relationship("BusinessResource", back_populates="service")

    def __repr__(self):
        return f"<Service(id={self.id}, service_key={self.service_key})>"


class BusinessResource(Base):
    __tablename__ = "business_resources"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    max_capacity = Column(Integer, nullable=False)
    field_count = Column(Integer, nullable=True)
    base_price = Column(Float, nullable=False)  # minimum of the resource's slot prices
    field_type = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    business = relationship("Business", back_populates="resources")
    service = relationship("Service", back_populates="resources")
    slots = relationship("Slot", back_populates="resource")
    schedules = relationship("BusinessSchedule", back_populates="resource")

    def __repr__(self):
        return f"<BusinessResource(id={self.id}, base_price={self.base_price})>"


class Slot(Base):
    __tablename__ = "slots"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    resource_id = Column(String(36), ForeignKey("business_resources.id"), nullable=False, index=True)
    slot_name = Column(String(255), nullable=False)
    slot_price = Column(Float, nullable=False)

    # Placeholders until real slot scheduling exists
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    is_booked = Column(Boolean, default=False, nullable=False)

    resource = relationship("BusinessResource", back_populates="slots")


class BusinessSchedule(Base):
    __tablename__ = "business_schedules"
    __table_args__ = (
        UniqueConstraint("resource_id", "day_of_week", name="uq_schedule_resource_day"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    resource_id = Column(String(36), ForeignKey("business_resources.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 1 = Monday, 7 = Sunday
    is_open = Column(Boolean, default=True, nullable=False)
    open_time = Column(Time, nullable=False)
    close_time = Column(Time, nullable=False)

    resource = relationship("BusinessResource", back_populates="schedules")


class PaymentMethod(Base):
    __tablename__ = "payment_methods"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    method_type = Column(String(50), nullable=False)
    account_name = Column(String(255), nullable=True)
    account_number = Column(String(100), nullable=True)

    business = relationship("Business", back_populates="payment_methods")
