"""Pydantic models for bucket operation inputs.

This module defines the option objects accepted by the bucket manager and
the validation that runs before any request is built. Validation failures
surface as ``MalformedRequestError`` so callers only ever see the bucket
error taxonomy.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any, List, Literal, Mapping, Optional, Type, TypeVar, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from oss_buckets.ops.exceptions import MalformedRequestError


BUCKET_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]{1,61}[a-z0-9]$")

CannedAcl = Literal["private", "public-read", "public-read-write"]

ModelT = TypeVar("ModelT", bound=BaseModel)


# ============================================================================
# Bucket identity
# ============================================================================


def validate_bucket_name(name: Any) -> str:
    """Check a bucket name against the service naming rules.

    Names are 3-63 characters of lowercase letters, digits and hyphens and
    must start and end with a letter or digit. Availability is not checked;
    only the service knows whether a name is taken.

    Raises:
        MalformedRequestError: If the name breaks the naming rules
    """
    if not isinstance(name, str) or not BUCKET_NAME_PATTERN.match(name):
        raise MalformedRequestError(
            f"Invalid bucket name {name!r}: use 3-63 lowercase letters, digits or hyphens, "
            "starting and ending with a letter or digit",
            context={"field": "bucket", "value": name},
        )
    return name


class BucketAclParams(BaseModel):
    """Parameters for put_bucket_acl and put_bucket."""

    acl: Annotated[
        CannedAcl,
        Field(description="Canned ACL applied to the bucket", examples=["private", "public-read"]),
    ]


# ============================================================================
# Listing
# ============================================================================


class ListBucketsParams(BaseModel):
    """Parameters for list_buckets.

    Accepts ``max_keys`` as well as the wire spelling ``max-keys`` and the
    camel-case ``maxKeys``.
    """

    model_config = ConfigDict(populate_by_name=True)

    max_keys: Annotated[
        Optional[int],
        Field(
            default=None,
            ge=1,
            le=1000,
            validation_alias=AliasChoices("max_keys", "max-keys", "maxKeys"),
            description="Maximum number of buckets to return (1-1000)",
        ),
    ]
    marker: Annotated[
        Optional[str],
        Field(default=None, description="List buckets after this name (from a previous next_marker)"),
    ]
    prefix: Annotated[
        Optional[str],
        Field(default=None, description="Only list buckets whose name starts with this prefix"),
    ]

    def to_query(self) -> dict[str, str]:
        query: dict[str, str] = {}
        if self.prefix:
            query["prefix"] = self.prefix
        if self.marker:
            query["marker"] = self.marker
        if self.max_keys is not None:
            query["max-keys"] = str(self.max_keys)
        return query


# ============================================================================
# Sub-resources
# ============================================================================


class LoggingParams(BaseModel):
    """Parameters for put_bucket_logging."""

    prefix: Annotated[
        str,
        Field(description="Key prefix access logs are written under", examples=["logs/"]),
    ]


class WebsiteParams(BaseModel):
    """Parameters for put_bucket_website."""

    index: Annotated[
        str,
        Field(min_length=1, description="Index document suffix", examples=["index.html"]),
    ]
    error: Annotated[
        Optional[str],
        Field(default=None, min_length=1, description="Error document key", examples=["error.html"]),
    ]


class RefererParams(BaseModel):
    """Parameters for put_bucket_referer."""

    model_config = ConfigDict(populate_by_name=True)

    allow_empty: Annotated[
        bool,
        Field(
            validation_alias=AliasChoices("allow_empty", "allowEmpty"),
            description="Allow requests that carry no Referer header",
        ),
    ]
    referers: Annotated[
        List[str],
        Field(default_factory=list, description="Allowed referer patterns, in order"),
    ]

    @field_validator("referers", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class LifecycleRuleParams(BaseModel):
    """One lifecycle rule for put_bucket_lifecycle."""

    id: Annotated[Optional[str], Field(default=None, description="Rule id")]
    prefix: Annotated[str, Field(description="Key prefix the rule applies to", examples=["logs/"])]
    status: Annotated[Literal["Enabled", "Disabled"], Field(description="Rule status")]
    days: Annotated[Optional[int], Field(default=None, ge=1, description="Expire after this many days")]
    date: Annotated[
        Optional[str],
        Field(default=None, description="Expire at this ISO 8601 instant", examples=["2022-10-11T00:00:00.000Z"]),
    ]

    @field_validator("date")
    @classmethod
    def _iso_date(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"date must be an ISO 8601 instant, got {value!r}") from e
        return value

    @model_validator(mode="after")
    def _one_expiry_trigger(self) -> "LifecycleRuleParams":
        if self.days is not None and self.date is not None:
            raise ValueError("set either days or date, not both")
        if self.days is None and self.date is None:
            raise ValueError("one of days or date is required")
        return self


class LifecycleParams(BaseModel):
    """Full rule set for put_bucket_lifecycle."""

    rules: Annotated[List[LifecycleRuleParams], Field(min_length=1, description="Rules, in order")]


# ============================================================================
# Helpers
# ============================================================================


def parse_params(model: Type[ModelT], data: Union[Mapping[str, Any], BaseModel, None], field: str) -> ModelT:
    """Validate raw option data into ``model``.

    Args:
        model: Pydantic model to validate against
        data: Mapping of options, an existing model instance, or None
        field: Name of the argument being validated, reported in the error

    Returns:
        Validated model instance

    Raises:
        MalformedRequestError: If validation fails
    """
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return model.model_validate(data or {})
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc']) or field}: {err['msg']}" for err in e.errors()]
        raise MalformedRequestError(
            f"Invalid {field}: " + "; ".join(errors),
            context={"field": field, "errors": errors},
        ) from e
