"""Integration test fixtures.

Integration tests run against a real service and are skipped unless
``OSS_INTEGRATION_BUCKET`` names a bucket prefix the credentials may create
and delete buckets under. Client settings come from the usual OSS_*
environment variables.
"""

import os
import uuid

import pytest

from oss_buckets.config import ClientConfig
from oss_buckets.ops.bucket_ops import BucketOps
from oss_buckets.ops.exceptions import OssError


@pytest.fixture(autouse=True)
def clean_oss_environment():
    """Keep the caller's OSS_* settings for live runs."""
    yield


@pytest.fixture(scope="session")
def live_ops() -> BucketOps:
    if not os.environ.get("OSS_INTEGRATION_BUCKET"):
        pytest.skip("OSS_INTEGRATION_BUCKET not set")
    return BucketOps(config=ClientConfig.with_defaults())


@pytest.fixture
def live_bucket(live_ops):
    """Unique bucket name, deleted after the test if it still exists."""
    name = f"{os.environ['OSS_INTEGRATION_BUCKET']}-{uuid.uuid4().hex[:8]}"
    yield name
    try:
        live_ops.delete_bucket(name, live_ops.config.default_region)
    except OssError:
        pass
