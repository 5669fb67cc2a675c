from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


class Inbound(BaseModel):
    """The HTTP response received by the transport."""

    status_code: int = Field()
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = Field(default=b"")

    @field_validator("headers")
    @classmethod
    def lower_case_names(cls, headers: Dict[str, str]) -> Dict[str, str]:
        return {name.lower(): value for name, value in headers.items()}

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())
