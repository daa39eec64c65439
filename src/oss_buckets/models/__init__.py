"""Input models for bucket operations."""

from .inputs import (
    BucketAclParams,
    LifecycleParams,
    LifecycleRuleParams,
    ListBucketsParams,
    LoggingParams,
    RefererParams,
    WebsiteParams,
    parse_params,
    validate_bucket_name,
)

__all__ = [
    "BucketAclParams",
    "LifecycleParams",
    "LifecycleRuleParams",
    "ListBucketsParams",
    "LoggingParams",
    "RefererParams",
    "WebsiteParams",
    "parse_params",
    "validate_bucket_name",
]
