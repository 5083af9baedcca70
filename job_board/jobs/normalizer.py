"""Map raw upstream job objects onto the canonical Job record.

Every resolver here is total: missing, null or empty upstream values are
replaced by the documented default, never propagated. "Missing" means absent,
``None`` or an empty string; numeric zeros are real values.
"""

from typing import Any, Optional

from job_board.jobs.models import (
    NOT_SPECIFIED,
    AdditionalInfo,
    CompanyDetails,
    ContentField,
    Job,
    Media,
    MediaImage,
    Tag,
)

CURRENCY = "₹"


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _first(*values: Any, default: Any = None) -> Any:
    """Return the first non-missing value, else ``default``."""
    for value in values:
        if not _is_missing(value):
            return value
    return default


def _text(*values: Any, default: str = "") -> str:
    value = _first(*values)
    return default if value is None else str(value)


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _sequence(value: Any) -> list:
    return value if isinstance(value, (list, tuple)) else []


def _count(value: Any) -> int:
    if isinstance(value, bool) or _is_missing(value):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _primary(raw: dict) -> dict:
    return _mapping(raw.get("primary_details"))


def resolve_salary(raw: dict) -> str:
    """Structured display string, else "₹min - ₹max" when both bounds exist."""
    display = _primary(raw).get("Salary")
    if not _is_missing(display):
        return str(display)

    low, high = raw.get("salary_min"), raw.get("salary_max")
    if _is_missing(low) or _is_missing(high):
        return NOT_SPECIFIED
    return f"{CURRENCY}{low} - {CURRENCY}{high}"


def resolve_phone(raw: dict) -> str:
    """WhatsApp number, else the custom contact link without its tel: scheme."""
    whatsapp = raw.get("whatsapp_no")
    if not _is_missing(whatsapp):
        return str(whatsapp)

    link = raw.get("custom_link")
    if isinstance(link, str):
        number = link.replace("tel:", "", 1).strip()
        if number:
            return number
    return "Contact Not Available"


def resolve_location(raw: dict) -> str:
    return _text(
        _primary(raw).get("Place"),
        raw.get("job_location_slug"),
        default="Location Not Specified",
    )


def resolve_fees(raw: dict) -> str:
    return _text(raw.get("fees_text"), _primary(raw).get("Fees_Charged"), default="No fees")


def resolve_job_type(raw: dict) -> str:
    return _text(_primary(raw).get("Job_Type"), raw.get("job_hours"), default=NOT_SPECIFIED)


def resolve_company_details(raw: dict) -> CompanyDetails:
    preference = _mapping(raw.get("contact_preference"))
    return CompanyDetails(
        name=_text(raw.get("company_name"), default=NOT_SPECIFIED),
        contact_preference=dict(preference),
        whatsapp_link=_text(preference.get("whatsapp_link")),
        call_start_time=_text(preference.get("preferred_call_start_time")),
        call_end_time=_text(preference.get("preferred_call_end_time")),
        button_text=_text(raw.get("button_text")),
    )


def _resolve_tags(raw: dict) -> tuple[Tag, ...]:
    return tuple(
        Tag(
            value=_text(tag.get("value")),
            bg_color=_text(tag.get("bg_color")),
            text_color=_text(tag.get("text_color")),
        )
        for tag in _sequence(raw.get("job_tags"))
        if isinstance(tag, dict)
    )


def _resolve_content_fields(raw: dict) -> dict[str, ContentField]:
    items = _sequence(_mapping(raw.get("contentV3")).get("V3"))
    fields: dict[str, ContentField] = {}
    for item in items:
        if not isinstance(item, dict) or _is_missing(item.get("field_key")):
            continue
        fields[str(item["field_key"])] = ContentField(
            name=_text(item.get("field_name")),
            value=_text(item.get("field_value")),
        )
    return fields


def resolve_additional_info(raw: dict) -> AdditionalInfo:
    premium = raw.get("is_premium")
    return AdditionalInfo(
        views=_count(raw.get("views")),
        shares=_count(raw.get("shares")),
        fb_shares=_count(raw.get("fb_shares")),
        applications=_count(raw.get("num_applications")),
        is_premium=bool(premium) if premium is not None else False,
        tags=_resolve_tags(raw),
        content_fields=_resolve_content_fields(raw),
    )


def resolve_media(raw: dict) -> Media:
    images = tuple(
        MediaImage(url=_text(c.get("file")), thumbnail=_text(c.get("thumb_url")))
        for c in _sequence(raw.get("creatives"))
        if isinstance(c, dict)
    )
    videos = tuple(v for v in _sequence(raw.get("videos")) if v is not None)
    return Media(images=images, videos=videos)


def _resolve_id(raw: dict) -> Any:
    job_id: Optional[Any] = raw.get("id")
    if isinstance(job_id, (str, int)) and not isinstance(job_id, bool):
        return job_id
    return "" if job_id is None else str(job_id)


def normalize_job(raw: Any) -> Job:
    """Normalize one raw upstream job object. Never raises."""
    raw = _mapping(raw)
    primary = _primary(raw)
    openings = _first(raw.get("openings_count"), default=NOT_SPECIFIED)

    return Job(
        id=_resolve_id(raw),
        title=_text(raw.get("title"), default="Untitled Position"),
        company=_text(raw.get("company_name"), default="Company Not Listed"),
        location=resolve_location(raw),
        salary=resolve_salary(raw),
        phone=resolve_phone(raw),
        description=_text(raw.get("other_details")),
        requirements=_text(primary.get("Qualification"), default=NOT_SPECIFIED),
        experience=_text(primary.get("Experience"), default=NOT_SPECIFIED),
        job_type=resolve_job_type(raw),
        openings=openings if isinstance(openings, int) and not isinstance(openings, bool) else str(openings),
        role=_text(raw.get("job_role"), default=NOT_SPECIFIED),
        category=_text(raw.get("job_category"), default=NOT_SPECIFIED),
        created_on=_text(raw.get("created_on")),
        updated_on=_text(raw.get("updated_on")),
        expires_on=_text(raw.get("expire_on")),
        fees=resolve_fees(raw),
        company_details=resolve_company_details(raw),
        additional_info=resolve_additional_info(raw),
        media=resolve_media(raw),
    )
