"""
Employee data model shared by the client, cache and routes.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class EmployeeRecord(BaseModel):
    """Immutable employee as returned by the upstream API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = Field(alias="employee_name", min_length=1)
    salary: int = Field(alias="employee_salary", ge=0)
    age: int = Field(alias="employee_age", gt=0)
    title: str = Field(default="", alias="employee_title")
    email: str = Field(default="", alias="employee_email")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Upstream ids are UUIDs; keep them opaque
        return str(value) if value is not None else value


class EmployeeInput(BaseModel):
    """Payload for creating an employee. Email is derived by the gateway."""

    name: str = Field(min_length=1)
    salary: int = Field(ge=0)
    age: int = Field(gt=0)
    title: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class DeleteRequest(BaseModel):
    """Body of the upstream delete call, which is keyed by name."""

    name: str


class UpstreamEnvelope(BaseModel):
    """Wrapper every upstream response uses."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[Any] = None
    status: Optional[str] = None
    error: Optional[str] = Field(default=None, validation_alias=AliasChoices("error", "errorMessage"))
