"""Client-side bucket management for Aliyun OSS style object storage."""

from .config import ClientConfig
from .ops.bucket_ops import BucketOps
from .ops.exceptions import (
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

__version__ = "0.1.0"

__all__ = [
    "BucketOps",
    "ClientConfig",
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
