"""Request models for the JSON API.

Each model declares the constraints for one route. Free-text fields are
trimmed and HTML-escaped on the way in so stored values are safe to render.
"""
from typing import Annotated, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
)

from heartlink.utils.helpers import sanitize

LINK_ID_LENGTH = 10
MIN_PASSWORD_LENGTH = 6


def _lower(value):
    return value.lower()


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _number_as_text(value):
    # JSON numbers count by their decimal text, so 1234567 is a 7-character password
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


NormalizedEmail = Annotated[EmailStr, BeforeValidator(_strip), AfterValidator(_lower)]
EscapedText = Annotated[str, StringConstraints(strip_whitespace=True), AfterValidator(sanitize)]
RequiredEscapedText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1), AfterValidator(sanitize)
]
LinkId = Annotated[str, StringConstraints(min_length=LINK_ID_LENGTH, max_length=LINK_ID_LENGTH)]


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RegisterRequest(RequestModel):
    email: NormalizedEmail
    password: Annotated[
        str, StringConstraints(min_length=MIN_PASSWORD_LENGTH), BeforeValidator(_number_as_text)
    ]


class LoginRequest(RequestModel):
    email: NormalizedEmail
    password: Annotated[str, StringConstraints(min_length=1), BeforeValidator(_number_as_text)]


class GenerateLinkRequest(RequestModel):
    name: RequiredEscapedText
    message: Optional[EscapedText] = None
    audio_file: Optional[str] = Field(default=None, alias="audioFile")


class GetLinkQuery(RequestModel):
    id: LinkId


class RespondRequest(RequestModel):
    link_id: LinkId = Field(alias="linkId")
    response: Literal["yes", "no"]
