from typing import Any, Dict, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

from http_contract.core.slot import Slot

HeaderValue = Union[str, Slot]


class Outbound(BaseModel):
    """The HTTP request being built by the request arrows.

    Header names are stored lower-cased. A header value is either a literal
    string or a Slot read when the request is sent.
    """

    method: str = Field()
    url: httpx.URL = Field()
    headers: Dict[str, HeaderValue] = Field(default_factory=dict)
    # bytes, or an open binary stream sent as-is
    payload: Any = Field(default=b"")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def get_header(self, name: str) -> str | None:
        """Returns the resolved value of a header, if bound."""
        value = self.headers.get(name.lower())
        if isinstance(value, Slot):
            return value.value
        return value

    def resolved_headers(self) -> Dict[str, str]:
        """Returns headers with slots dereferenced; unset slots are skipped."""
        headers: Dict[str, str] = {}
        for name, value in self.headers.items():
            if isinstance(value, Slot):
                if value.value is None:
                    continue
                value = str(value.value)
            headers[name] = value
        return headers
