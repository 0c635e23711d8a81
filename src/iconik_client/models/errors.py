"""
Error Models

The Iconik API reports failures as a JSON body of the form
``{"errors": ["..."]}``. Bodies that cannot be decoded into that shape
are reported with a fixed sentinel message instead.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

UNPARSABLE_ERROR_MESSAGE = "UNKNOWN; error message not parsable"


class ErrorResponse(BaseModel):
    """Error body returned by the Iconik API."""

    model_config = ConfigDict(extra="ignore")

    errors: List[str] = Field(default_factory=list, description="Error messages")

    @field_validator("errors", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class IconikError(Exception):
    """
    Error message returned by the Iconik API.

    Raised for every non-2xx response. Networking problems are not wrapped
    and surface as ``httpx.HTTPError``.
    """

    def __init__(self, errors: List[str], status_code: Optional[int] = None):
        self.errors = list(errors)
        self.status_code = status_code
        super().__init__(str(self.errors))

    def __str__(self) -> str:
        return str(self.errors)

    @classmethod
    def from_body(cls, body: bytes, status_code: Optional[int] = None) -> "IconikError":
        """Build an error from a raw response body, falling back to the sentinel."""
        try:
            parsed = ErrorResponse.model_validate_json(body)
        except ValidationError:
            return cls([UNPARSABLE_ERROR_MESSAGE], status_code)
        return cls(parsed.errors, status_code)
