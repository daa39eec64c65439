"""
Bucket sub-resource operations mixins.

Each mixin is a get/put/delete triplet over one bucket configuration
document: ACL, access logging, static website, lifecycle and referer. Puts
replace the whole document and go through ``ensure_bucket`` first, so a put
on a missing bucket creates it in the requested region and a put naming the
wrong region fails with ``BucketAlreadyExistsError``.

Settings written by a put propagate asynchronously on the service side. A
get issued right after a put may still return the previous document; the
mixins never wait or poll, callers that need read-after-write must retry
reads themselves.

These mixins use ``self._target``, ``self._request`` and ``self.ensure_bucket``
which are provided by BucketOps.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from oss_buckets.domain.bucket_info import Bucket_Acl, Bucket_Result
from oss_buckets.domain.subresources import Lifecycle_Config, Logging_Config, Referer_Config, Website_Config
from oss_buckets.models.inputs import (
    BucketAclParams,
    LifecycleParams,
    LoggingParams,
    RefererParams,
    WebsiteParams,
    parse_params,
)

from . import documents
from .exceptions import NoSuchLifecycleError, UnrecognizedServiceError

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

    from oss_buckets.domain.response_meta import Response_Meta

logger = logging.getLogger(__name__)


class _SubresourceBase:
    # Type hints for methods provided by BucketOps
    if TYPE_CHECKING:

        def _target(self, bucket: str, region: Optional[str], required: bool = False) -> Tuple[str, str]: ...

        def _request(
            self,
            method: str,
            region: str,
            bucket: Optional[str] = None,
            params: Optional[Mapping[str, str]] = None,
            headers: Optional[Mapping[str, str]] = None,
            body: Optional[bytes] = None,
            expected: Iterable[int] = ...,
        ) -> Tuple[Optional["ET.Element"], "Response_Meta"]: ...

        def ensure_bucket(self, name: str, region: str, acl: Optional[str] = None) -> Bucket_Result: ...


class Bucket_Acl_Ops(_SubresourceBase):
    """Mixin for bucket ACL operations."""

    def put_bucket_acl(self, name: str, region: str, acl: str) -> Bucket_Result:
        """Replace the canned ACL of a bucket, creating the bucket if missing.

        Repeating the call with the same ACL is a no-op that succeeds again.

        Raises:
            MalformedRequestError: Unknown ACL, invalid name or region
            BucketAlreadyExistsError: The bucket lives in another region
        """
        params = parse_params(BucketAclParams, {"acl": acl}, "acl")
        self.ensure_bucket(name, region, acl=params.acl)
        name, region = self._target(name, region, required=True)
        _, meta = self._request(
            "PUT", region, name, params={"acl": ""}, headers={"x-oss-acl": params.acl}, expected=(200,)
        )
        logger.info(f"Set ACL of bucket {name} to {params.acl}")
        return Bucket_Result(bucket=name, response=meta)

    def get_bucket_acl(self, name: str, region: Optional[str] = None) -> Bucket_Acl:
        """Return the canned ACL and owner of a bucket.

        Raises:
            NoSuchBucketError: The bucket does not exist
        """
        name, region = self._target(name, region)
        root, meta = self._request("GET", region, name, params={"acl": ""}, expected=(200,))
        acl, owner = documents.parse_acl(root)
        return Bucket_Acl(bucket=name, acl=acl, owner=owner, response=meta)


class Bucket_Logging_Ops(_SubresourceBase):
    """Mixin for bucket access logging operations."""

    def put_bucket_logging(self, name: str, region: str, prefix: str) -> Bucket_Result:
        """Write access logs of a bucket into itself under ``prefix``."""
        params = parse_params(LoggingParams, {"prefix": prefix}, "prefix")
        self.ensure_bucket(name, region)
        name, region = self._target(name, region, required=True)
        _, meta = self._request(
            "PUT",
            region,
            name,
            params={"logging": ""},
            body=documents.logging_document(name, params.prefix),
            expected=(200,),
        )
        logger.info(f"Enabled access logging of bucket {name} under {params.prefix!r}")
        return Bucket_Result(bucket=name, response=meta)

    def get_bucket_logging(self, name: str, region: Optional[str] = None) -> Logging_Config:
        name, region = self._target(name, region)
        root, meta = self._request("GET", region, name, params={"logging": ""}, expected=(200,))
        enabled, prefix, target_bucket = documents.parse_logging(root)
        return Logging_Config(enabled=enabled, prefix=prefix, target_bucket=target_bucket, response=meta)

    def delete_bucket_logging(self, name: str, region: Optional[str] = None) -> Bucket_Result:
        """Turn access logging off. Succeeds with 204 whether or not it was on."""
        name, region = self._target(name, region)
        _, meta = self._request("DELETE", region, name, params={"logging": ""})
        logger.info(f"Disabled access logging of bucket {name}")
        return Bucket_Result(bucket=name, response=meta)


class Bucket_Website_Ops(_SubresourceBase):
    """Mixin for static website hosting operations."""

    def put_bucket_website(
        self, name: str, region: str, config: Union[Mapping[str, Any], WebsiteParams]
    ) -> Bucket_Result:
        """Replace the website settings of a bucket.

        Args:
            name: Bucket name
            region: Bucket region
            config: ``{"index": ..., "error": ...}``; ``index`` is required and
                an omitted ``error`` removes any previous error document
        """
        params = parse_params(WebsiteParams, config, "website")
        self.ensure_bucket(name, region)
        name, region = self._target(name, region, required=True)
        _, meta = self._request(
            "PUT",
            region,
            name,
            params={"website": ""},
            body=documents.website_document(params.index, params.error),
            expected=(200,),
        )
        logger.info(f"Set website of bucket {name}: index={params.index} error={params.error}")
        return Bucket_Result(bucket=name, response=meta)

    def get_bucket_website(self, name: str, region: Optional[str] = None) -> Website_Config:
        """Return the website settings of a bucket.

        Raises:
            NoSuchWebsiteConfigurationError: Website hosting was never set
        """
        name, region = self._target(name, region)
        root, meta = self._request("GET", region, name, params={"website": ""}, expected=(200,))
        index, error = documents.parse_website(root)
        return Website_Config(index=index, error=error, response=meta)

    def delete_bucket_website(self, name: str, region: Optional[str] = None) -> Bucket_Result:
        name, region = self._target(name, region)
        _, meta = self._request("DELETE", region, name, params={"website": ""})
        logger.info(f"Removed website settings of bucket {name}")
        return Bucket_Result(bucket=name, response=meta)


class Bucket_Lifecycle_Ops(_SubresourceBase):
    """Mixin for lifecycle rule operations."""

    def put_bucket_lifecycle(self, name: str, region: str, rules: Sequence[Any]) -> Bucket_Result:
        """Replace the whole lifecycle rule set of a bucket.

        Every rule is validated before anything is sent; a rule with both
        ``days`` and ``date``, or neither, fails the whole call.

        Args:
            name: Bucket name
            region: Bucket region
            rules: Mappings with ``id`` (optional), ``prefix``, ``status`` and
                one of ``days``/``date``, or ``Lifecycle_Rule`` instances
        """
        raw_rules = [asdict(rule) if is_dataclass(rule) and not isinstance(rule, type) else rule for rule in rules or []]
        params = parse_params(LifecycleParams, {"rules": raw_rules}, "lifecycle")
        self.ensure_bucket(name, region)
        name, region = self._target(name, region, required=True)
        _, meta = self._request(
            "PUT",
            region,
            name,
            params={"lifecycle": ""},
            body=documents.lifecycle_document(params.rules),
            expected=(200,),
        )
        logger.info(f"Set {len(params.rules)} lifecycle rule(s) on bucket {name}")
        return Bucket_Result(bucket=name, response=meta)

    def get_bucket_lifecycle(self, name: str, region: Optional[str] = None) -> Lifecycle_Config:
        """Return the lifecycle rules of a bucket.

        Raises:
            NoSuchLifecycleError: No rules were ever set
            UnrecognizedServiceError: A rule has no expiration this client can represent
        """
        name, region = self._target(name, region)
        root, meta = self._request("GET", region, name, params={"lifecycle": ""}, expected=(200,))
        try:
            rules = documents.parse_lifecycle(root)
        except UnrecognizedServiceError as e:
            raise UnrecognizedServiceError(
                e.message,
                body=e.body,
                status=meta.status,
                request_id=meta.request_id,
                context={"bucket": name},
            ) from e
        if not rules:
            raise NoSuchLifecycleError(
                "The bucket has no lifecycle rules.",
                status=404,
                request_id=meta.request_id,
                context={"bucket": name},
            )
        return Lifecycle_Config(rules=tuple(rules), response=meta)

    def delete_bucket_lifecycle(self, name: str, region: Optional[str] = None) -> Bucket_Result:
        name, region = self._target(name, region)
        _, meta = self._request("DELETE", region, name, params={"lifecycle": ""})
        logger.info(f"Removed lifecycle rules of bucket {name}")
        return Bucket_Result(bucket=name, response=meta)


class Bucket_Referer_Ops(_SubresourceBase):
    """Mixin for referer (hotlink protection) operations."""

    def put_bucket_referer(
        self, name: str, region: str, allow_empty: bool, referers: Optional[Sequence[str]] = None
    ) -> Bucket_Result:
        """Replace the referer whitelist and empty-referer flag of a bucket.

        ``referers`` must be a list of patterns; a bare string is rejected
        rather than split into characters.
        """
        params = parse_params(RefererParams, {"allow_empty": allow_empty, "referers": referers}, "referer")
        self.ensure_bucket(name, region)
        name, region = self._target(name, region, required=True)
        return self._write_referer(name, region, params)

    def get_bucket_referer(self, name: str, region: Optional[str] = None) -> Referer_Config:
        name, region = self._target(name, region)
        root, meta = self._request("GET", region, name, params={"referer": ""}, expected=(200,))
        allow_empty, referers = documents.parse_referer(root)
        return Referer_Config(allow_empty=allow_empty, referers=tuple(referers), response=meta)

    def delete_bucket_referer(self, name: str, region: Optional[str] = None) -> Bucket_Result:
        """Reset referer settings to the service default (allow all).

        The service has no delete for this document, so the default is written
        back with a put, which answers 200 rather than the 204 the other
        sub-resource deletes return.
        """
        name, region = self._target(name, region)
        return self._write_referer(name, region, RefererParams(allow_empty=True, referers=[]))

    def _write_referer(self, name: str, region: str, params: RefererParams) -> Bucket_Result:
        _, meta = self._request(
            "PUT",
            region,
            name,
            params={"referer": ""},
            body=documents.referer_document(params.allow_empty, params.referers),
            expected=(200,),
        )
        logger.info(f"Set referer of bucket {name}: allow_empty={params.allow_empty} referers={len(params.referers)}")
        return Bucket_Result(bucket=name, response=meta)


__all__ = [
    "Bucket_Acl_Ops",
    "Bucket_Logging_Ops",
    "Bucket_Website_Ops",
    "Bucket_Lifecycle_Ops",
    "Bucket_Referer_Ops",
]
