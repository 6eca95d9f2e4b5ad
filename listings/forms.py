import json
import re
import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import FormData, UploadFile

from .errors import ValidationError
from .pricing import derive_base_price
from .schema import Attachment, ListingSubmission

logger = logging.getLogger(__name__)

JSON_FIELDS = ("fieldDetails", "operatingHours", "paymentMethods")
IMAGE_FIELD = re.compile(r"^image_(\d+)$")
RECEIPT_FIELD = "receiptFile"


def _decode_json_field(form: FormData, key: str):
    raw = form.get(key)
    if raw is None or isinstance(raw, UploadFile) or not raw.strip():
        raise ValidationError(f"{key} is required", step="parse_form")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"{key} is not valid JSON: {e.msg}", step="parse_form")


async def _read_attachment(key: str, upload: UploadFile) -> Attachment:
    if not upload.content_type:
        raise ValidationError(f"{key} is missing a content type", step="parse_form")
    content = await upload.read()
    return Attachment(filename=upload.filename or key, content_type=upload.content_type, content=content)


def _format_pydantic_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


async def parse_listing_form(form: FormData) -> ListingSubmission:
    """
    Turn the multipart form into a validated ListingSubmission.
    Images are the `image_<n>` parts ordered by n; the receipt is optional.
    Prices are derived here so a bad price list fails before any upload or insert.
    """
    scalars = {}
    image_parts = []
    receipt: Optional[Attachment] = None

    for key, value in form.multi_items():
        match = IMAGE_FIELD.match(key)
        if match:
            if isinstance(value, UploadFile):
                image_parts.append((int(match.group(1)), key, value))
            continue
        if key == RECEIPT_FIELD:
            if isinstance(value, UploadFile) and value.filename:
                receipt = await _read_attachment(key, value)
            continue
        if key in JSON_FIELDS or isinstance(value, UploadFile):
            continue
        scalars[key] = value

    for key in JSON_FIELDS:
        scalars[key] = _decode_json_field(form, key)

    images = [await _read_attachment(key, upload) for _, key, upload in sorted(image_parts, key=lambda part: part[0])]

    try:
        submission = ListingSubmission.model_validate({**scalars, "images": images, "receipt": receipt})
    except PydanticValidationError as e:
        raise ValidationError(_format_pydantic_error(e), step="parse_form")

    # Fails with "No field details provided" / "Invalid price value: ..."
    derive_base_price(submission.field_details)

    logger.info(
        f"Parsed listing form: {len(submission.field_details)} fields, "
        f"{len(images)} images, receipt={'yes' if receipt else 'no'}"
    )
    return submission
