"""Tests for the oss-buckets command line entry point."""

import json
import os
from unittest.mock import patch

import pytest

from oss_buckets.main import build_parser, main, run
from oss_buckets.ops.bucket_ops import BucketOps
from oss_buckets.ops.exceptions import MalformedRequestError
from tests.conftest import HANGZHOU, HONGKONG, SHENZHEN


@pytest.fixture
def cli(fake_oss):
    """Run main() against the in-memory service and return (exit code, parsed stdout)."""

    def _run(argv, capsys):
        with patch("oss_buckets.main.load_dotenv"), patch(
            "oss_buckets.main.BucketOps", side_effect=lambda config: BucketOps(transport=fake_oss, config=config)
        ):
            code = main(["--unsigned", *argv])
        return code, json.loads(capsys.readouterr().out)

    return _run


class TestRun:
    def test_create_defaults_to_configured_region(self, ops, fake_oss):
        args = build_parser().parse_args(["create", "cli-bucket"])

        result = run(args, ops)

        assert result.status == 200
        assert fake_oss.buckets["cli-bucket"].region == HANGZHOU

    def test_put_lifecycle_parses_json_rules(self, ops):
        args = build_parser().parse_args(
            ["put-lifecycle", "cli-bucket", '[{"prefix": "logs/", "status": "Enabled", "days": 1}]']
        )

        run(args, ops)

        assert ops.get_bucket_lifecycle("cli-bucket").rules[0].days == 1

    @pytest.mark.parametrize("rules", ["not json", '{"prefix": "logs/"}'])
    def test_put_lifecycle_rejects_bad_json(self, ops, rules):
        args = build_parser().parse_args(["put-lifecycle", "cli-bucket", rules])

        with pytest.raises(MalformedRequestError):
            run(args, ops)

    def test_put_referer_deny_empty(self, ops):
        args = build_parser().parse_args(["put-referer", "cli-bucket", "http://a.example", "--deny-empty"])

        run(args, ops)

        config = ops.get_bucket_referer("cli-bucket")
        assert config.allow_empty is False
        assert config.referers == ("http://a.example",)

    def test_acl_has_no_delete_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["delete-acl", "cli-bucket"])


class TestMain:
    """Test JSON output and exit status."""

    def test_given_bucket_when_listing_then_json_listing_printed(self, cli, fake_oss, capsys):
        fake_oss.add_bucket("listed-bucket", HONGKONG)

        code, output = cli(["list", "--max-keys", "10"], capsys)

        assert code == 0
        assert output["buckets"][0]["name"] == "listed-bucket"
        assert output["buckets"][0]["region"] == HONGKONG
        assert output["is_truncated"] is False

    def test_given_location_command_then_region_printed(self, cli, fake_oss, capsys):
        fake_oss.add_bucket("located-bucket", HONGKONG)

        code, output = cli(["location", "located-bucket"], capsys)

        assert code == 0
        assert output == {"bucket": "located-bucket", "location": HONGKONG}

    def test_given_bucket_in_other_region_when_creating_then_error_and_exit_1(self, cli, fake_oss, capsys):
        fake_oss.add_bucket("taken-bucket", HONGKONG)

        code, output = cli(["create", "taken-bucket", "--region", HANGZHOU], capsys)

        assert code == 1
        assert output["error"]["kind"] == "BucketAlreadyExists"
        assert output["error"]["status"] == 409
        assert output["error"]["message"] == "Bucket already exists can't modify location."

    def test_given_invalid_default_region_then_configuration_error(self, cli, capsys):
        code, output = cli(["--default-region", "mars-1", "list"], capsys)

        assert code == 1
        assert output["error"]["kind"] == "ConfigurationError"
        assert "mars-1" in output["error"]["message"]


class TestDotenv:
    """Test OSS_* settings read from a .env file."""

    def test_given_env_file_in_working_directory_when_creating_then_its_region_is_the_default(
        self, fake_oss, tmp_path, monkeypatch, capsys
    ):
        # Given: A .env file naming the default region
        (tmp_path / ".env").write_text(f"OSS_REGION={SHENZHEN}\nOSS_SIGN_REQUESTS=0\n")
        monkeypatch.chdir(tmp_path)

        # When: Creating a bucket without naming a region
        with patch.dict(os.environ), patch(
            "oss_buckets.main.BucketOps", side_effect=lambda config: BucketOps(transport=fake_oss, config=config)
        ):
            code = main(["create", "dotenv-bucket"])

        # Then: The bucket lands in the region from the file
        assert code == 0
        assert json.loads(capsys.readouterr().out)["bucket"] == "dotenv-bucket"
        assert fake_oss.buckets["dotenv-bucket"].region == SHENZHEN

    def test_given_region_in_environment_when_env_file_disagrees_then_environment_wins(
        self, fake_oss, tmp_path, monkeypatch, capsys
    ):
        (tmp_path / ".env").write_text(f"OSS_REGION={SHENZHEN}\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("OSS_REGION", HONGKONG)

        with patch.dict(os.environ), patch(
            "oss_buckets.main.BucketOps", side_effect=lambda config: BucketOps(transport=fake_oss, config=config)
        ):
            code = main(["--unsigned", "create", "dotenv-bucket"])

        assert code == 0
        assert fake_oss.buckets["dotenv-bucket"].region == HONGKONG
