import datetime
import logging
from typing import Optional, Tuple

import frontmatter
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from app.errors import MalformedContentError

logger = logging.getLogger(__name__)


class PostMetadata(BaseModel):
    """Validated front-matter of a single post. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    date: str
    description: Optional[str] = None
    micro: bool = False
    hidden: bool = False

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        value = convert_date_to_string(value)
        if not isinstance(value, str):
            raise ValueError("date must be an ISO-8601 date")
        parse_iso_date(value)
        return value

    @field_validator("micro", "hidden", mode="before")
    @classmethod
    def _none_is_false(cls, value):
        return False if value is None else value

    @property
    def dt(self) -> datetime.datetime:
        return parse_iso_date(self.date)


def parse_front_matter(text: str, slug: str) -> Tuple[PostMetadata, str]:
    """Split the leading front-matter block from the body and validate it."""
    try:
        parsed = frontmatter.loads(text)
    except yaml.YAMLError as e:
        raise MalformedContentError(slug, f"invalid front-matter: {e}") from e

    metadata = parsed.metadata
    if not metadata:
        raise MalformedContentError(slug, "missing front-matter block")

    try:
        return PostMetadata.model_validate(metadata), parsed.content
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "front-matter"
            for err in e.errors()
        )
        raise MalformedContentError(slug, f"invalid fields: {fields}") from e


def convert_date_to_string(value):
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value


def parse_iso_date(value: str) -> datetime.datetime:
    """Parse an ISO-8601 date or datetime into a naive UTC datetime."""
    parsed = datetime.datetime.fromisoformat(value.strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return parsed
