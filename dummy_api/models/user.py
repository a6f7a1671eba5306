"""
User domain models.

Defines the Pydantic models for the user record and the request bodies of
the user and greeting endpoints. Field names follow the JSON wire format.
"""

from typing import Annotated, Optional

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


def _check_email(value: str) -> str:
    """Validate the address shape but keep the caller's spelling, it is the record key."""
    validate_email(value, check_deliverability=False)
    return value


# Unlike EmailStr this does not normalize, so "Ada@Example.COM" stays as sent
Email = Annotated[str, AfterValidator(_check_email)]


class User(BaseModel):
    """
    User record.

    The email doubles as the record key in the store. Unknown fields coming
    back from the store (such as "key") are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="First name")
    surname: str = Field(..., description="Last name")
    email: Email = Field(
        ...,
        description="Email address, also the record key",
        json_schema_extra={"format": "email"},
    )
    dob: Optional[str] = Field(default=None, description="Date of birth")
    profilePicture: Optional[str] = Field(
        default=None, description="Profile picture URL"
    )
    theme: Optional[str] = Field(
        default=None, description="UI theme, conventionally 'dark' or 'light'"
    )
    description: Optional[str] = Field(default=None, description="Free-form bio")


class UserPatch(BaseModel):
    """
    Partial user record; only the fields the caller sends are applied.

    The required fields of User may be omitted but not nulled.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    surname: Optional[str] = None
    email: Optional[Email] = Field(default=None, json_schema_extra={"format": "email"})
    dob: Optional[str] = None
    profilePicture: Optional[str] = None
    theme: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name", "surname", "email", mode="before")
    @classmethod
    def reject_null(cls, v):
        """Explicit null would leave a stored user without a required field."""
        if v is None:
            raise ValueError("field cannot be null")
        return v


class GreetingRequest(BaseModel):
    """Body of POST /greeting."""

    name: str = Field(..., description="user name")
