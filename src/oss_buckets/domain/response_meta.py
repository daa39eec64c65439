"""Response_Meta domain object describing the service reply of an operation."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class Response_Meta:
    """Status line and headers of the response that completed an operation.

    Attributes:
        status: HTTP status code returned by the service
        headers: Response headers (lower-cased names)
        request_id: Service request id from ``x-oss-request-id``, if present
    """

    status: int
    headers: Dict[str, str] = field(default_factory=dict, compare=False)
    request_id: Optional[str] = None

    def __hash__(self) -> int:
        return hash((self.status, self.request_id))
