"""Sub-resource domain objects.

Each bucket sub-resource (logging, website, lifecycle, referer) is a single
document the service replaces wholesale on every put. These dataclasses are
what ``get_*`` operations return; they carry the response metadata of the
read so callers can inspect the status the service answered with.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .response_meta import Response_Meta


@dataclass(frozen=True)
class Logging_Config:
    """Access logging settings of a bucket.

    Attributes:
        enabled: Whether access logging is turned on
        prefix: Key prefix access logs are written under (None when disabled)
        target_bucket: Bucket the logs are delivered to (None when disabled)
        response: Service response metadata
    """

    enabled: bool
    prefix: Optional[str]
    target_bucket: Optional[str]
    response: Response_Meta


@dataclass(frozen=True)
class Website_Config:
    """Static website hosting settings of a bucket.

    Attributes:
        index: Index document suffix, e.g. ``index.html``
        error: Error document key (optional)
        response: Service response metadata
    """

    index: str
    error: Optional[str]
    response: Response_Meta


@dataclass(frozen=True)
class Lifecycle_Rule:
    """One expiration rule of a bucket lifecycle.

    Exactly one of ``days`` and ``date`` is set.

    Attributes:
        id: Rule id (optional, the prefix identifies the rule otherwise)
        prefix: Key prefix the rule applies to
        status: ``Enabled`` or ``Disabled``
        days: Expire objects this many days after last modification
        date: Expire objects at this ISO 8601 instant
    """

    prefix: str
    status: str
    id: Optional[str] = None
    days: Optional[int] = None
    date: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.days is None) == (self.date is None):
            raise ValueError("Lifecycle rule needs exactly one of days or date")


@dataclass(frozen=True)
class Lifecycle_Config:
    """Full rule set of a bucket lifecycle, in service order."""

    rules: Tuple[Lifecycle_Rule, ...]
    response: Response_Meta


@dataclass(frozen=True)
class Referer_Config:
    """Hotlink protection settings of a bucket.

    Attributes:
        allow_empty: Whether requests without a Referer header are allowed
        referers: Allowed referer patterns, in order
        response: Service response metadata
    """

    allow_empty: bool
    referers: Tuple[str, ...] = field(default_factory=tuple)
    response: Optional[Response_Meta] = None
