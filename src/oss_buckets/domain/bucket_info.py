"""Bucket domain objects.

This module defines the dataclasses that represent bucket metadata and the
results of bucket lifecycle operations, independent of the wire format the
service uses to describe them.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .response_meta import Response_Meta


@dataclass(frozen=True)
class Owner_Info:
    """Identity of the account that owns a bucket.

    Attributes:
        id: Owner ID assigned by the service
        display_name: Human-readable owner name
    """

    id: str
    display_name: str


@dataclass(frozen=True)
class Bucket_Info:
    """Bucket summary as returned by a listing.

    Attributes:
        name: Globally unique bucket name
        region: Region the bucket was created in (immutable)
        created_date: ISO 8601 creation timestamp (optional)
    """

    name: str
    region: str
    created_date: Optional[str]

    def __post_init__(self) -> None:
        """Validate required fields after initialization."""
        if self.name is None:
            raise TypeError("name field is required and cannot be None")
        if not isinstance(self.name, str):
            raise TypeError("name field must be a string")
        if self.name == "":
            raise ValueError("name field cannot be empty")

        if self.region is None:
            raise TypeError("region field is required and cannot be None")
        if not isinstance(self.region, str):
            raise TypeError("region field must be a string")


@dataclass(frozen=True)
class Bucket_Result:
    """Result of an operation that targets one bucket and returns no document.

    Attributes:
        bucket: Name of the bucket the operation targeted
        response: Service response metadata
    """

    bucket: str
    response: Response_Meta

    @property
    def status(self) -> int:
        return self.response.status


@dataclass(frozen=True)
class Bucket_Listing:
    """One page of a bucket listing.

    The manager never follows ``next_marker`` itself; callers page by passing
    it back as ``marker``.

    Attributes:
        buckets: Bucket summaries in the order the service returned them
        owner: Owner of the listed buckets
        is_truncated: Whether more buckets are available
        next_marker: Marker for the next page, None when not truncated
        prefix: Prefix filter echoed by the service
        marker: Marker echoed by the service
        max_keys: Page size echoed by the service
        response: Service response metadata
    """

    buckets: Tuple[Bucket_Info, ...]
    owner: Optional[Owner_Info]
    is_truncated: bool
    next_marker: Optional[str]
    response: Response_Meta
    prefix: Optional[str] = None
    marker: Optional[str] = None
    max_keys: Optional[int] = None


@dataclass(frozen=True)
class Bucket_Acl:
    """Canned ACL of a bucket together with its owner.

    Attributes:
        bucket: Bucket name
        acl: One of ``private``, ``public-read``, ``public-read-write``
        owner: Bucket owner
        response: Service response metadata
    """

    bucket: str
    acl: str
    owner: Owner_Info
    response: Response_Meta
