"""
Revue and user request/response Pydantic models
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class RevueDTO(BaseModel):
    """Payload for revue create and edit requests"""
    title: str = ""
    url: str = ""
    description: str = ""

    def to_payload(self) -> dict:
        return self.model_dump()


class ApiResponseDTO(BaseModel):
    """Message envelope returned by mutating revue operations"""
    model_config = ConfigDict(extra="ignore")

    msg: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def lowercase_keys(cls, data: Any) -> Any:
        # The service is not consistent about property casing
        if isinstance(data, dict):
            return {str(key).lower(): value for key, value in data.items()}
        return data

    @classmethod
    def from_body(cls, body: Any) -> "ApiResponseDTO":
        if not isinstance(body, dict):
            return cls()
        try:
            return cls.model_validate(body)
        except ValidationError:
            return cls()


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterUserRequest(BaseModel):
    user_name: str = Field(serialization_alias="userName")
    email: str
    password: str
    re_password: str = Field(serialization_alias="rePassword")
    accepted_agreement: bool = Field(default=True, serialization_alias="acceptedAgreement")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
