"""Value models for the structured fields a form can carry.

Form fields are mostly plain strings and numbers. The few structured
values (an uploaded file, a signature box, a document filter) get a model
here so rules can read them by attribute. Rules also accept plain mappings
with the same keys, which is what a form layer usually hands over.
"""

from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError


class DocumentStatus(str, Enum):
    """Signing state of a document."""

    PENDING = "pending"
    SIGNED = "signed"
    REJECTED = "rejected"


class Priority(str, Enum):
    """Priority of a document waiting for a signature."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FileRef(BaseModel):
    """A file picked for upload, described by name, size and media type.

    The media type is what the browser declared, not a sniffed type.
    `type` is accepted as an alias because that is the name `File` uses.
    """

    name: str = ""
    size: int  # bytes
    content_type: str = Field(
        default="",
        validation_alias=AliasChoices("content_type", "type"),
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SignaturePosition(BaseModel):
    """Placement of a signature on a page.

    x and y are percentages of the page, width and height are pixels.
    """

    x: float
    y: float
    width: float
    height: float
    page: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class DocumentFilter(BaseModel):
    """Filter applied to the signer's document list.

    The camelCase names a browser form sends (`dateFrom`, `activityType`)
    are accepted as aliases.
    """

    status: Optional[str] = None
    priority: Optional[str] = None
    activity_type: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("activity_type", "activityType"),
    )
    date_from: Optional[date | str] = Field(
        default=None,
        validation_alias=AliasChoices("date_from", "dateFrom"),
    )
    date_to: Optional[date | str] = Field(
        default=None,
        validation_alias=AliasChoices("date_to", "dateTo"),
    )
    search: Optional[str] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


ModelT = TypeVar("ModelT", bound=BaseModel)

MISSING = object()


def get_field(value: Any, name: str, default: Any = MISSING) -> Any:
    """Read `name` from a model or a mapping.

    Returns `default` when the value has no such field. Strings are never
    treated as structures.
    """
    if isinstance(value, Mapping):
        return value.get(name, default)
    if value is None or isinstance(value, (str, bytes)):
        return default
    return getattr(value, name, default)


def is_structure(value: Any) -> bool:
    """True for mappings and models, the shapes structured rules accept."""
    return isinstance(value, (Mapping, BaseModel))


def as_model(model: type[ModelT], value: Any) -> Optional[ModelT]:
    """Coerce a mapping or an attribute-bearing object to `model`.

    Instances of `model` pass through. Returns None when the value does not
    validate, or is None or a string.
    """
    if isinstance(value, model):
        return value
    if value is None or isinstance(value, (str, bytes)):
        return None
    try:
        if isinstance(value, Mapping):
            return model.model_validate(value)
        return model.model_validate(value, from_attributes=True)
    except ValidationError:
        return None


def as_file_ref(value: Any) -> Optional[FileRef]:
    """Coerce a value to a FileRef, or return None when it is not file-like."""
    return as_model(FileRef, value)
