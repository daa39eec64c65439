"""Tests for bucket domain objects.

Tests cover validation, required fields, immutability and
dataclasses.asdict() compatibility.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, asdict, fields

import pytest

from oss_buckets.domain import (
    Bucket_Info,
    Bucket_Listing,
    Bucket_Result,
    Lifecycle_Rule,
    Owner_Info,
    Referer_Config,
    Response_Meta,
)


class TestBucketInfoValidation:
    """Test Bucket_Info validation and field requirements."""

    def test_bucket_info_has_required_fields(self):
        field_names = {field.name for field in fields(Bucket_Info)}

        assert field_names == {"name", "region", "created_date"}

    def test_bucket_info_creation_with_all_fields(self):
        info = Bucket_Info(name="my-bucket", region="oss-cn-hangzhou", created_date="2024-01-15T10:30:00Z")

        assert info.name == "my-bucket"
        assert info.region == "oss-cn-hangzhou"
        assert info.created_date == "2024-01-15T10:30:00Z"

    def test_bucket_info_creation_without_created_date(self):
        assert Bucket_Info(name="my-bucket", region="oss-cn-hangzhou", created_date=None).created_date is None

    @pytest.mark.parametrize(
        "kwargs,error",
        [
            ({"name": None, "region": "oss-cn-hangzhou"}, TypeError),
            ({"name": 42, "region": "oss-cn-hangzhou"}, TypeError),
            ({"name": "", "region": "oss-cn-hangzhou"}, ValueError),
            ({"name": "my-bucket", "region": None}, TypeError),
        ],
    )
    def test_bucket_info_rejects_invalid_fields(self, kwargs, error):
        with pytest.raises(error):
            Bucket_Info(created_date=None, **kwargs)

    def test_bucket_info_is_frozen(self):
        info = Bucket_Info(name="my-bucket", region="oss-cn-hangzhou", created_date=None)

        with pytest.raises(FrozenInstanceError):
            info.region = "oss-cn-hongkong"  # type: ignore[misc]

    def test_bucket_info_asdict(self):
        info = Bucket_Info(name="my-bucket", region="oss-cn-hangzhou", created_date=None)

        assert asdict(info) == {"name": "my-bucket", "region": "oss-cn-hangzhou", "created_date": None}


class TestResponseCarriers:
    """Test result objects that carry response metadata."""

    def test_bucket_result_status_comes_from_response(self):
        result = Bucket_Result(bucket="my-bucket", response=Response_Meta(status=204, request_id="req-1"))

        assert result.status == 204

    def test_response_meta_equality_ignores_headers(self):
        first = Response_Meta(status=200, headers={"date": "a"}, request_id="req-1")
        second = Response_Meta(status=200, headers={"date": "b"}, request_id="req-1")

        assert first == second
        assert hash(first) == hash(second)

    def test_listing_serializes_with_nested_buckets(self):
        listing = Bucket_Listing(
            buckets=(Bucket_Info(name="a-bucket", region="oss-cn-hangzhou", created_date=None),),
            owner=Owner_Info(id="1", display_name="me"),
            is_truncated=False,
            next_marker=None,
            response=Response_Meta(status=200),
        )

        data = asdict(listing)

        assert data["buckets"][0]["name"] == "a-bucket"
        assert data["owner"] == {"id": "1", "display_name": "me"}
        assert data["next_marker"] is None

    def test_referer_config_defaults(self):
        config = Referer_Config(allow_empty=True)

        assert config.referers == ()
        assert config.response is None


class TestLifecycleRule:
    def test_days_rule(self):
        rule = Lifecycle_Rule(prefix="logs/", status="Enabled", days=1)

        assert rule.date is None
        assert rule.id is None

    def test_date_rule(self):
        assert Lifecycle_Rule(prefix="logs/", status="Enabled", date="2022-10-11T00:00:00.000Z").days is None

    @pytest.mark.parametrize("kwargs", [{}, {"days": 1, "date": "2022-10-11T00:00:00.000Z"}])
    def test_rule_needs_exactly_one_trigger(self, kwargs):
        with pytest.raises(ValueError):
            Lifecycle_Rule(prefix="logs/", status="Enabled", **kwargs)
