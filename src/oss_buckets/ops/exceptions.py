"""Custom exceptions for bucket operations.

This module defines the typed error taxonomy surfaced by the bucket manager.
Every error carries a symbolic ``kind``, a human message and, where the
service answered, the HTTP status and service error code, so callers can
branch on ``err.kind`` or the exception class without matching messages.
"""

from typing import Any, Dict, Optional


BUCKET_LOCATION_IMMUTABLE_MESSAGE = "Bucket already exists can't modify location."


class OssError(Exception):
    """Base exception for all bucket operation errors.

    Attributes:
        kind: Symbolic error kind, stable across releases
        status: HTTP status returned by the service (None if never sent)
        code: Service error code from the response body, if any
        request_id: Service request id, if the service returned one
        context: Dictionary with error details for debugging
    """

    kind = "OssError"
    default_status: Optional[int] = None

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        request_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the error with message and optional response details.

        Args:
            message: Human-readable error message
            status: HTTP status code (defaults to the class status)
            code: Service error code
            request_id: Service request id
            context: Optional dictionary with error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status = status if status is not None else self.default_status
        self.code = code or self.kind
        self.request_id = request_id
        self.context = context or {}

    @property
    def name(self) -> str:
        return self.kind if self.kind.endswith("Error") else f"{self.kind}Error"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "request_id": self.request_id,
        }


class BucketAlreadyExistsError(OssError):
    """Raised when a bucket name exists in a different region than requested.

    Region is immutable once a bucket is created, so the caller has to pick a
    new name or correct the region.
    """

    kind = "BucketAlreadyExists"
    default_status = 409

    def __init__(self, message: str = BUCKET_LOCATION_IMMUTABLE_MESSAGE, **kwargs: Any):
        super().__init__(message, **kwargs)


class NoSuchBucketError(OssError):
    """Raised when the target bucket does not exist."""

    kind = "NoSuchBucket"
    default_status = 404


class BucketNotEmptyError(OssError):
    """Raised when deleting a bucket that still contains objects.

    Deletion never cascades; the caller must empty the bucket first.
    """

    kind = "BucketNotEmpty"
    default_status = 409


class NoSuchLifecycleError(OssError):
    """Raised when reading lifecycle rules from a bucket that has none."""

    kind = "NoSuchLifecycle"
    default_status = 404


class NoSuchWebsiteConfigurationError(OssError):
    """Raised when reading website settings from a bucket that has none."""

    kind = "NoSuchWebsiteConfiguration"
    default_status = 404


class AccessDeniedError(OssError):
    kind = "AccessDenied"
    default_status = 403


class InvalidBucketNameError(OssError):
    """Raised when the service rejects a bucket name."""

    kind = "InvalidBucketName"
    default_status = 400


class TransportFailureError(OssError):
    """Raised when the request never produced a response.

    Connection refused, DNS failures and transport timeouts land here. The
    bucket manager never retries; retry policy belongs to the caller.
    """

    kind = "TransportFailure"


class MalformedRequestError(OssError):
    """Raised when client-side validation fails before a request is sent.

    Attributes:
        context: Contains ``field`` and ``errors`` entries describing which
                input failed and why.
    """

    kind = "MalformedRequest"


class UnrecognizedServiceError(OssError):
    """Raised for non-2xx responses whose error code is not a known kind.

    Attributes:
        body: Raw response body, kept for diagnosis
    """

    kind = "UnrecognizedServiceError"

    def __init__(self, message: str, body: bytes = b"", **kwargs: Any):
        super().__init__(message, **kwargs)
        self.body = body


SERVICE_ERRORS = {
    cls.kind: cls
    for cls in (
        BucketAlreadyExistsError,
        NoSuchBucketError,
        BucketNotEmptyError,
        NoSuchLifecycleError,
        NoSuchWebsiteConfigurationError,
        AccessDeniedError,
        InvalidBucketNameError,
    )
}
