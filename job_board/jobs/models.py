"""Job listing data model."""

from dataclasses import dataclass, field
from typing import Any, Union

NOT_SPECIFIED = "Not specified"

JobId = Union[str, int]


def bookmark_key(job_id: JobId) -> str:
    """Storage/membership key for a job id, so 42 and "42" are the same job."""
    return str(job_id)


@dataclass(frozen=True)
class Tag:
    value: str = ""
    bg_color: str = ""
    text_color: str = ""


@dataclass(frozen=True)
class ContentField:
    name: str = ""
    value: str = ""


@dataclass(frozen=True)
class MediaImage:
    url: str = ""
    thumbnail: str = ""


@dataclass(frozen=True)
class CompanyDetails:
    __hash__ = None  # contact_preference is a dict

    name: str = NOT_SPECIFIED
    contact_preference: dict = field(default_factory=dict)
    whatsapp_link: str = ""
    call_start_time: str = ""
    call_end_time: str = ""
    button_text: str = ""


@dataclass(frozen=True)
class AdditionalInfo:
    __hash__ = None  # content_fields is a dict

    views: int = 0
    shares: int = 0
    fb_shares: int = 0
    applications: int = 0
    is_premium: bool = False
    tags: tuple[Tag, ...] = ()
    content_fields: dict[str, ContentField] = field(default_factory=dict)


@dataclass(frozen=True)
class Media:
    images: tuple[MediaImage, ...] = ()
    videos: tuple[Any, ...] = ()


@dataclass(frozen=True)
class Job:
    """A job listing in its canonical, fully-defaulted shape.

    Instances are never mutated; a newer fetch produces a new ``Job``.
    """

    id: JobId = ""
    title: str = "Untitled Position"
    company: str = "Company Not Listed"
    location: str = "Location Not Specified"
    salary: str = NOT_SPECIFIED
    phone: str = "Contact Not Available"
    description: str = ""
    requirements: str = NOT_SPECIFIED
    experience: str = NOT_SPECIFIED
    job_type: str = NOT_SPECIFIED
    openings: Union[str, int] = NOT_SPECIFIED
    role: str = NOT_SPECIFIED
    category: str = NOT_SPECIFIED
    created_on: str = ""
    updated_on: str = ""
    expires_on: str = ""
    fees: str = "No fees"
    company_details: CompanyDetails = field(default_factory=CompanyDetails)
    additional_info: AdditionalInfo = field(default_factory=AdditionalInfo)
    media: Media = field(default_factory=Media)

    def __hash__(self):
        # nested dicts are not hashable; equal jobs always share a key
        return hash(self.key)

    @property
    def key(self) -> str:
        return bookmark_key(self.id)

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary for persistence."""
        details = self.company_details
        info = self.additional_info
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "salary": self.salary,
            "phone": self.phone,
            "description": self.description,
            "requirements": self.requirements,
            "experience": self.experience,
            "job_type": self.job_type,
            "openings": self.openings,
            "role": self.role,
            "category": self.category,
            "created_on": self.created_on,
            "updated_on": self.updated_on,
            "expires_on": self.expires_on,
            "fees": self.fees,
            "company_details": {
                "name": details.name,
                "contact_preference": dict(details.contact_preference),
                "whatsapp_link": details.whatsapp_link,
                "call_start_time": details.call_start_time,
                "call_end_time": details.call_end_time,
                "button_text": details.button_text,
            },
            "additional_info": {
                "views": info.views,
                "shares": info.shares,
                "fb_shares": info.fb_shares,
                "applications": info.applications,
                "is_premium": info.is_premium,
                "tags": [
                    {"value": t.value, "bg_color": t.bg_color, "text_color": t.text_color}
                    for t in info.tags
                ],
                "content_fields": {
                    key: {"name": f.name, "value": f.value}
                    for key, f in info.content_fields.items()
                },
            },
            "media": {
                "images": [
                    {"url": img.url, "thumbnail": img.thumbnail}
                    for img in self.media.images
                ],
                "videos": list(self.media.videos),
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Job":
        """Rebuild a Job from the output of :meth:`to_dict`.

        Raises KeyError, TypeError or AttributeError on payloads that did not come from ``to_dict``.
        """
        details = data["company_details"]
        info = data["additional_info"]
        media = data["media"]
        return cls(
            id=data["id"],
            title=data["title"],
            company=data["company"],
            location=data["location"],
            salary=data["salary"],
            phone=data["phone"],
            description=data["description"],
            requirements=data["requirements"],
            experience=data["experience"],
            job_type=data["job_type"],
            openings=data["openings"],
            role=data["role"],
            category=data["category"],
            created_on=data["created_on"],
            updated_on=data["updated_on"],
            expires_on=data["expires_on"],
            fees=data["fees"],
            company_details=CompanyDetails(**details),
            additional_info=AdditionalInfo(
                views=info["views"],
                shares=info["shares"],
                fb_shares=info["fb_shares"],
                applications=info["applications"],
                is_premium=info["is_premium"],
                tags=tuple(Tag(**t) for t in info["tags"]),
                content_fields={
                    key: ContentField(**f) for key, f in info["content_fields"].items()
                },
            ),
            media=Media(
                images=tuple(MediaImage(**img) for img in media["images"]),
                videos=tuple(media["videos"]),
            ),
        )
