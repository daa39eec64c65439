#!/usr/bin/env python3
"""Command line entry point for bucket management.

Usage:
    oss-buckets list --max-keys 20
    oss-buckets create my-bucket --region oss-cn-hongkong --acl private
    oss-buckets put-acl my-bucket public-read --region oss-cn-hongkong
    oss-buckets put-website my-bucket --index index.html --error error.html
    oss-buckets put-lifecycle my-bucket '[{"prefix": "logs/", "status": "Enabled", "days": 1}]'
    oss-buckets delete my-bucket --region oss-cn-hongkong

Results and errors are printed as JSON on stdout; the exit status is 1 when
the operation failed.

Settings are read from OSS_* environment variables, which may also be put
in a .env file in the working directory.
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from typing import Any, Callable, Dict, List, Optional

from dotenv import find_dotenv, load_dotenv

from oss_buckets.config import ClientConfig, ConfigurationError
from oss_buckets.ops.bucket_ops import BucketOps
from oss_buckets.ops.exceptions import MalformedRequestError, OssError

logger = logging.getLogger(__name__)


SUBRESOURCES = ("acl", "logging", "website", "lifecycle", "referer")


def _to_jsonable(result: Any) -> Any:
    if is_dataclass(result) and not isinstance(result, type):
        return asdict(result)
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oss-buckets", description="Manage object-storage buckets")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    parser.add_argument("--endpoint-template", help="Endpoint template, e.g. https://{region}.aliyuncs.com")
    parser.add_argument("--path-style", action="store_true", default=None, help="Use path-style bucket addressing")
    parser.add_argument("--unsigned", action="store_true", help="Send requests without signing them")
    parser.add_argument("--default-region", help="Region used when a command does not name one")

    commands = parser.add_subparsers(dest="command", required=True)

    listing = commands.add_parser("list", help="List buckets")
    listing.add_argument("--max-keys", type=int)
    listing.add_argument("--marker")
    listing.add_argument("--prefix")

    def bucket_command(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("bucket")
        sub.add_argument("--region")
        return sub

    bucket_command("create", "Create a bucket (no-op if it exists in the region)").add_argument(
        "--acl", choices=["private", "public-read", "public-read-write"]
    )
    bucket_command("delete", "Delete an empty bucket")
    bucket_command("location", "Show the region of a bucket")

    for subresource in SUBRESOURCES:
        bucket_command(f"get-{subresource}", f"Show {subresource} settings")
        if subresource != "acl":
            bucket_command(f"delete-{subresource}", f"Remove {subresource} settings")

    bucket_command("put-acl", "Set the bucket ACL").add_argument(
        "acl", choices=["private", "public-read", "public-read-write"]
    )
    bucket_command("put-logging", "Enable access logging").add_argument("prefix")
    website = bucket_command("put-website", "Configure static website hosting")
    website.add_argument("--index", required=True)
    website.add_argument("--error")
    bucket_command("put-lifecycle", "Replace lifecycle rules").add_argument("rules", help="JSON list of rules")
    referer = bucket_command("put-referer", "Configure referer protection")
    referer.add_argument("referers", nargs="*")
    referer.add_argument("--deny-empty", action="store_true", help="Reject requests without a Referer header")
    return parser


def run(args: argparse.Namespace, ops: BucketOps) -> Any:
    """Dispatch a parsed command to the bucket manager."""
    command = args.command
    if command == "list":
        return ops.list_buckets({"max_keys": args.max_keys, "marker": args.marker, "prefix": args.prefix})

    region = args.region
    handlers: Dict[str, Callable[[], Any]] = {
        "create": lambda: ops.put_bucket(args.bucket, region or ops.config.default_region, acl=args.acl),
        "delete": lambda: ops.delete_bucket(args.bucket, region),
        "location": lambda: {"bucket": args.bucket, "location": ops.get_bucket_location(args.bucket, region)},
        "put-acl": lambda: ops.put_bucket_acl(args.bucket, region or ops.config.default_region, args.acl),
        "put-logging": lambda: ops.put_bucket_logging(args.bucket, region or ops.config.default_region, args.prefix),
        "put-website": lambda: ops.put_bucket_website(
            args.bucket, region or ops.config.default_region, {"index": args.index, "error": args.error}
        ),
        "put-lifecycle": lambda: ops.put_bucket_lifecycle(
            args.bucket, region or ops.config.default_region, _load_rules(args.rules)
        ),
        "put-referer": lambda: ops.put_bucket_referer(
            args.bucket, region or ops.config.default_region, not args.deny_empty, args.referers
        ),
    }
    for subresource in SUBRESOURCES:
        handlers[f"get-{subresource}"] = _deferred(ops, f"get_bucket_{subresource}", args.bucket, region)
        if subresource != "acl":
            handlers[f"delete-{subresource}"] = _deferred(ops, f"delete_bucket_{subresource}", args.bucket, region)
    return handlers[command]()


def _deferred(ops: BucketOps, method: str, bucket: str, region: Optional[str]) -> Callable[[], Any]:
    return lambda: getattr(ops, method)(bucket, region)


def _load_rules(raw: str) -> List[Dict[str, Any]]:
    try:
        rules = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedRequestError(f"Lifecycle rules are not valid JSON: {e}", context={"field": "rules"}) from e
    if not isinstance(rules, list):
        raise MalformedRequestError("Lifecycle rules must be a JSON list", context={"field": "rules"})
    return rules


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the oss-buckets command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    # OSS_* settings may come from a .env file in the working directory;
    # variables already set in the environment win
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = ClientConfig.with_defaults(
            endpoint_template=args.endpoint_template,
            use_path_style=args.path_style,
            sign_requests=False if args.unsigned else None,
            default_region=args.default_region,
        )
        ops = BucketOps(config=config)
        result = run(args, ops)
    except OssError as e:
        logger.error(f"{args.command} failed: {e.kind}: {e.message}")
        print(json.dumps({"error": e.to_dict()}, indent=2))
        return 1
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(json.dumps({"error": {"kind": "ConfigurationError", "message": str(e)}}, indent=2))
        return 1

    print(json.dumps(_to_jsonable(result), indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
