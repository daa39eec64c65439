"""Client configuration for the bucket manager.

This module provides ClientConfig, which handles:
- Default region and the set of recognized region identifiers
- Endpoint resolution from a region (and bucket, for virtual-hosted addressing)
- Transport settings (timeout, request signing, AWS profile for credentials)
- Environment variable integration with explicit parameter precedence
"""

from __future__ import annotations

import os
import re
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple
from urllib.parse import urlparse

from .base import Configuration, ConfigValidationResult, SerializationError


KNOWN_REGIONS: FrozenSet[str] = frozenset(
    {
        "oss-cn-hangzhou",
        "oss-cn-shanghai",
        "oss-cn-qingdao",
        "oss-cn-beijing",
        "oss-cn-zhangjiakou",
        "oss-cn-huhehaote",
        "oss-cn-shenzhen",
        "oss-cn-hongkong",
        "oss-us-west-1",
        "oss-us-east-1",
        "oss-ap-southeast-1",
        "oss-ap-southeast-2",
        "oss-ap-northeast-1",
        "oss-ap-south-1",
        "oss-eu-central-1",
        "oss-eu-west-1",
        "oss-me-east-1",
    }
)

DEFAULT_REGION = "oss-cn-hangzhou"
DEFAULT_ENDPOINT_TEMPLATE = "https://{region}.aliyuncs.com"
DEFAULT_TIMEOUT = 60.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> Optional[bool]:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() in _TRUE_VALUES


def _env_list(name: str) -> Tuple[str, ...]:
    value = os.environ.get(name, "")
    return tuple(item.strip() for item in value.split(",") if item.strip())


class ClientConfig(Configuration):
    """Configuration for talking to the object-storage service.

    Example usage:
        # Direct instantiation
        config = ClientConfig(default_region="oss-cn-hongkong")

        # Local emulator with path-style addressing
        config = ClientConfig(
            endpoint_template="http://localhost:9000",
            use_path_style=True,
            extra_regions=["local"],
        )

        # From environment variables, explicit arguments win
        config = ClientConfig.with_defaults(timeout=10)
    """

    def __init__(
        self,
        default_region: str = DEFAULT_REGION,
        endpoint_template: str = DEFAULT_ENDPOINT_TEMPLATE,
        use_path_style: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        sign_requests: bool = True,
        profile_name: Optional[str] = None,
        extra_regions: Iterable[str] = (),
    ):
        """Initialize ClientConfig.

        Args:
            default_region: Region used when an operation does not name one
            endpoint_template: Service endpoint, ``{region}`` is substituted
            use_path_style: Address buckets as ``/{bucket}/`` instead of by host name
            timeout: Transport timeout in seconds
            sign_requests: Whether requests are signed with resolved credentials
            profile_name: AWS-style credentials profile used for signing
            extra_regions: Additional region identifiers to accept
        """
        self.default_region = default_region
        self.endpoint_template = endpoint_template
        self.use_path_style = use_path_style
        self.timeout = timeout
        self.sign_requests = sign_requests
        self.profile_name = profile_name
        self.extra_regions = tuple(extra_regions)

    @property
    def regions(self) -> FrozenSet[str]:
        return KNOWN_REGIONS | frozenset(self.extra_regions)

    def is_known_region(self, region: Optional[str]) -> bool:
        return bool(region) and region in self.regions

    def endpoint_for(self, region: str) -> str:
        """Render the service endpoint for a region."""
        return self.endpoint_template.format(region=region).rstrip("/")

    def bucket_address(self, bucket: Optional[str], region: str) -> Tuple[str, str]:
        """Resolve the endpoint and base path used to reach a bucket.

        Args:
            bucket: Bucket name, or None for service-level requests
            region: Region the bucket lives in

        Returns:
            Tuple of (endpoint URL, path) for the bucket root
        """
        endpoint = self.endpoint_for(region)
        if not bucket:
            return endpoint, "/"
        if self.use_path_style:
            return endpoint, f"/{bucket}/"
        parsed = urlparse(endpoint)
        return f"{parsed.scheme}://{bucket}.{parsed.netloc}", "/"

    def signing_region(self, region: str) -> str:
        """Region name used in request signatures (``oss-`` prefix dropped)."""
        return region[4:] if region.startswith("oss-") else region

    def validate(self) -> ConfigValidationResult:
        result = ConfigValidationResult.success_result()

        if not self.is_known_region(self.default_region):
            result.add_error(
                f"Default region '{self.default_region}' is not a recognized region "
                f"(known: {', '.join(sorted(self.regions))})"
            )

        if "{region}" not in self.endpoint_template and not self.use_path_style:
            result.add_error(
                "Endpoint template without '{region}' requires path-style addressing "
                "(set use_path_style=True)"
            )

        try:
            parsed = urlparse(self.endpoint_template.format(region="region"))
        except (KeyError, IndexError, ValueError):
            result.add_error(f"Endpoint template '{self.endpoint_template}' has invalid placeholders")
        else:
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                result.add_error(
                    "Endpoint template must be an http:// or https:// URL "
                    "(e.g., 'https://{region}.aliyuncs.com')"
                )

        if self.timeout is None or self.timeout <= 0:
            result.add_error("Timeout must be a positive number of seconds")

        for region in self.extra_regions:
            if not re.match(r"^[a-z0-9][a-z0-9-]*$", region):
                result.add_error(f"Extra region '{region}' must be lowercase letters, digits and hyphens")

        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "default_region": self.default_region,
            "endpoint_template": self.endpoint_template,
            "use_path_style": self.use_path_style,
            "timeout": self.timeout,
            "sign_requests": self.sign_requests,
            "profile_name": self.profile_name,
            "extra_regions": list(self.extra_regions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ClientConfig:
        try:
            return cls(**{key: value for key, value in data.items() if value is not None})
        except TypeError as e:
            raise SerializationError(f"Failed to deserialize ClientConfig: {e}") from e

    @classmethod
    def from_environment(cls) -> ClientConfig:
        """Create ClientConfig from environment variables.

        Reads:
        - OSS_REGION: Default region
        - OSS_ENDPOINT_TEMPLATE: Endpoint template
        - OSS_USE_PATH_STYLE: ``1``/``true`` for path-style addressing
        - OSS_TIMEOUT: Transport timeout in seconds
        - OSS_SIGN_REQUESTS: ``0``/``false`` to send unsigned requests
        - OSS_PROFILE: Credentials profile name
        - OSS_EXTRA_REGIONS: Comma-separated additional regions
        """
        data: Dict[str, Any] = {
            "default_region": os.environ.get("OSS_REGION"),
            "endpoint_template": os.environ.get("OSS_ENDPOINT_TEMPLATE"),
            "use_path_style": _env_flag("OSS_USE_PATH_STYLE"),
            "sign_requests": _env_flag("OSS_SIGN_REQUESTS"),
            "profile_name": os.environ.get("OSS_PROFILE"),
            "extra_regions": _env_list("OSS_EXTRA_REGIONS") or None,
        }
        timeout = os.environ.get("OSS_TIMEOUT")
        if timeout:
            try:
                data["timeout"] = float(timeout)
            except ValueError as e:
                raise SerializationError(f"OSS_TIMEOUT must be a number, got {timeout!r}") from e
        return cls.from_dict(data)

    @classmethod
    def with_defaults(cls, **kwargs: Any) -> ClientConfig:
        """Create ClientConfig with explicit parameters taking precedence over environment."""
        data = cls.from_environment().to_dict()
        data.update({key: value for key, value in kwargs.items() if value is not None})
        return cls.from_dict(data)
