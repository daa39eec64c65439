"""Test configuration for pytest."""

import os
import sys

import pytest

# Add the src directory to Python path so oss_buckets can be imported without installing
src_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

tests_dir = os.path.dirname(os.path.dirname(__file__))
if tests_dir not in sys.path:
    sys.path.insert(0, tests_dir)

from oss_buckets.config import ClientConfig  # noqa: E402
from oss_buckets.ops.bucket_ops import BucketOps  # noqa: E402
from tests.fixtures.fake_oss import FakeOss  # noqa: E402


HANGZHOU = "oss-cn-hangzhou"
HONGKONG = "oss-cn-hongkong"
SHENZHEN = "oss-cn-shenzhen"

OSS_ENV_VARS = (
    "OSS_REGION",
    "OSS_ENDPOINT_TEMPLATE",
    "OSS_USE_PATH_STYLE",
    "OSS_TIMEOUT",
    "OSS_SIGN_REQUESTS",
    "OSS_PROFILE",
    "OSS_EXTRA_REGIONS",
)


@pytest.fixture(autouse=True)
def clean_oss_environment(monkeypatch):
    """Keep tests independent of the developer's OSS_* settings."""
    for name in OSS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(default_region=HANGZHOU, sign_requests=False)


@pytest.fixture
def fake_oss() -> FakeOss:
    return FakeOss()


@pytest.fixture
def ops(fake_oss, client_config) -> BucketOps:
    return BucketOps(transport=fake_oss, config=client_config)
