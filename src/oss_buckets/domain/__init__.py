"""Domain objects for bucket management.

This module contains wire-format-agnostic data structures that represent
buckets, their sub-resource documents and the responses that produced them.
"""

from .response_meta import Response_Meta
from .bucket_info import Owner_Info, Bucket_Info, Bucket_Result, Bucket_Listing, Bucket_Acl
from .subresources import (
    Logging_Config,
    Website_Config,
    Lifecycle_Rule,
    Lifecycle_Config,
    Referer_Config,
)

__all__ = [
    "Response_Meta",
    "Owner_Info",
    "Bucket_Info",
    "Bucket_Result",
    "Bucket_Listing",
    "Bucket_Acl",
    "Logging_Config",
    "Website_Config",
    "Lifecycle_Rule",
    "Lifecycle_Config",
    "Referer_Config",
]
