"""Bucket operations layer.

This module exposes the typed error taxonomy. ``BucketOps`` lives in
``oss_buckets.ops.bucket_ops`` and is re-exported from ``oss_buckets``.
"""

from .exceptions import (
    OssError,
    BucketAlreadyExistsError,
    NoSuchBucketError,
    BucketNotEmptyError,
    NoSuchLifecycleError,
    NoSuchWebsiteConfigurationError,
    AccessDeniedError,
    InvalidBucketNameError,
    TransportFailureError,
    MalformedRequestError,
    UnrecognizedServiceError,
)

__all__ = [
    "OssError",
    "BucketAlreadyExistsError",
    "NoSuchBucketError",
    "BucketNotEmptyError",
    "NoSuchLifecycleError",
    "NoSuchWebsiteConfigurationError",
    "AccessDeniedError",
    "InvalidBucketNameError",
    "TransportFailureError",
    "MalformedRequestError",
    "UnrecognizedServiceError",
]
