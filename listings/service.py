import logging
import uuid
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy import orm
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from config import settings
from shared_utils.storage_client import StorageClient
from .errors import ListingError, PersistenceError
from .media import MediaUploader
from .models import Business, Service, BusinessResource, Slot, BusinessSchedule, PaymentMethod, PaymentStatus
from .payments import assemble_payment_methods
from .pricing import derive_base_price, slot_prices
from .saga import ListingSaga
from .schedule import normalize_operating_hours
from .schema import ListingCreated, ListingSubmission

logger = logging.getLogger(__name__)


def build_service_key(category_slug: str, business_id: str) -> str:
    """Derived from the freshly generated business id, never from client input"""
    return f"{category_slug}_booking_{business_id}"


def expiry_from(today: date, days: int) -> date:
    return today + timedelta(days=days)


class ListingOrchestrator:
    """
    Creates Business -> Service -> Resource -> Slots -> Schedules -> Payment methods
    for one submission. Inserts share one transaction; uploads are undone by
    deleting the stored objects if anything after them fails.
    """

    def __init__(
        self,
        db: orm.Session,
        storage: StorageClient,
        category_id: str = settings.LISTING_CATEGORY_ID,
        category_slug: str = settings.LISTING_CATEGORY_SLUG,
        validity_days: int = settings.LISTING_VALIDITY_DAYS,
        default_duration_min: int = settings.DEFAULT_SLOT_DURATION_MIN,
    ):
        self.db = db
        self.storage = storage
        self.category_id = category_id
        self.category_slug = category_slug
        self.validity_days = validity_days
        self.default_duration_min = default_duration_min

    def _persist(self, step: str, rows: List) -> None:
        """Add rows and flush so generated keys are available to the next step"""
        try:
            self.db.add_all(rows)
            self.db.flush()
        except IntegrityError as e:
            raise PersistenceError(f"{step} violates a constraint: {e.orig}", step=step) from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"{step} failed: {e}", step=step) from e

    async def _rollback(self):
        self.db.rollback()

    async def create_listing(
        self,
        owner_id: str,
        submission: ListingSubmission,
        today: Optional[date] = None
    ) -> ListingCreated:
        today = today or date.today()
        saga = ListingSaga(submission_ref=f"{owner_id}:{uuid.uuid4().hex[:8]}")
        uploader = MediaUploader(self.storage, owner_id)

        logger.info(f"Processing futsal listing submission for user: {owner_id}")

        try:
            saga.begin("upload_media", compensation=uploader.remove_stored)
            image_urls = await uploader.upload_images(submission.images)
            receipt_url = await uploader.upload_receipt(submission.receipt)

            saga.begin("compute_dates")
            service_listing_expired = expiry_from(today, self.validity_days)
            lite_pos = None
            lite_pos_expired = None
            if submission.lite_pos_accepted:
                lite_pos = 1
                lite_pos_expired = expiry_from(today, self.validity_days)

            saga.begin("create_business", compensation=self._rollback)
            business = Business(
                owner_id=owner_id,
                name=submission.business_name,
                address=submission.street_address,
                towns=submission.town,
                province_district=submission.province,
                google_map_location=submission.google_map_location,
                facebook_page=submission.facebook,
                tiktok_url=submission.tiktok,
                website=submission.info_website,
                nearest_bus_stop=submission.nearest_bus_stop,
                nearest_train_station=submission.nearest_train_station,
                price_currency=submission.price_currency,
                pos_lite_price=submission.pos_lite_price,
                service_listing_price=submission.service_listing_price,
                lite_pos=lite_pos,
                lite_pos_expired=lite_pos_expired,
                payment_status=PaymentStatus.TO_BE_CONFIRMED.value,
                searchable_business=False,
            )
            self._persist("create_business", [business])
            logger.info(f"Business created: {business.id}")

            saga.begin("create_service")
            service = Service(
                category_id=self.category_id,
                service_key=build_service_key(self.category_slug, business.id),
                popular_products=submission.popular_products,
                services_description=submission.description,
                facilities=submission.facilities,
                rules=submission.rules,
                service_images=image_urls,
                contact_phone=submission.phone_number,
                contact_available_start=submission.booking_start_time,
                contact_available_until=submission.booking_end_time,
                service_listing_receipt=receipt_url,
                service_listing_expired=service_listing_expired,
                default_duration_min=self.default_duration_min,
            )
            self._persist("create_service", [service])
            logger.info(f"Service created: {service.id}")

            saga.begin("create_resource")
            resource = BusinessResource(
                business_id=business.id,
                service_id=service.id,
                name=submission.business_name,
                max_capacity=submission.max_capacity,
                field_count=submission.number_of_fields,
                base_price=derive_base_price(submission.field_details),
                field_type=submission.field_type,
            )
            self._persist("create_resource", [resource])
            logger.info(f"Resource created: {resource.id}")

            saga.begin("create_slots")
            placeholder = datetime.utcnow()
            slots = [
                Slot(
                    resource_id=resource.id,
                    slot_name=field.name,
                    slot_price=price,
                    start_time=placeholder,
                    end_time=placeholder,
                    is_booked=False,
                )
                for field, price in zip(submission.field_details, slot_prices(submission.field_details))
            ]
            self._persist("create_slots", slots)
            logger.info(f"Slots created: {len(slots)}")

            saga.begin("create_schedules")
            schedules = [
                BusinessSchedule(resource_id=resource.id, **row)
                for row in normalize_operating_hours(submission.operating_hours)
            ]
            if schedules:
                self._persist("create_schedules", schedules)
                logger.info(f"Schedules created: {len(schedules)}")
            else:
                logger.info("No open days - skipping schedule creation")

            saga.begin("create_payment_methods")
            payment_methods = [
                PaymentMethod(business_id=business.id, **row)
                for row in assemble_payment_methods(submission.payment_methods)
            ]
            if payment_methods:
                self._persist("create_payment_methods", payment_methods)
                logger.info(f"Payment methods created: {len(payment_methods)}")

            saga.begin("commit")
            try:
                self.db.commit()
            except SQLAlchemyError as e:
                raise PersistenceError(f"Failed to save listing: {e}", step="commit") from e

        except Exception as e:
            step = e.step if isinstance(e, ListingError) and e.step else saga.current_step
            logger.error(
                f"Listing creation failed at step {step}: {e}",
                extra={"extra_data": {"owner_id": owner_id, "step": step, "error": type(e).__name__}}
            )
            not_undone = await saga.compensate()
            if not_undone:
                logger.error(f"Listing for {owner_id} left partial state from steps: {not_undone}")
            raise

        return ListingCreated(
            business_id=business.id,
            resource_id=resource.id,
            service_id=service.id,
        )
