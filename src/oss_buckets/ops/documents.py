"""XML documents for bucket requests and responses.

Builders render validated inputs into request bodies; parsers turn response
roots (as returned by ``response_interpreter.interpret``) into the plain
values the domain objects are built from.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional, Sequence, Tuple

from oss_buckets.domain.bucket_info import Bucket_Info, Owner_Info
from oss_buckets.domain.subresources import Lifecycle_Rule
from oss_buckets.models.inputs import LifecycleRuleParams

from .exceptions import UnrecognizedServiceError


def _render(root: ET.Element) -> bytes:
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def _text(element: Optional[ET.Element], path: str) -> Optional[str]:
    if element is None:
        return None
    value = element.findtext(path)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _flag(element: Optional[ET.Element], path: str) -> bool:
    return (_text(element, path) or "").lower() == "true"


def _owner(element: Optional[ET.Element]) -> Optional[Owner_Info]:
    if element is None:
        return None
    owner = element.find("Owner")
    if owner is None:
        return None
    return Owner_Info(id=_text(owner, "ID") or "", display_name=_text(owner, "DisplayName") or "")


# ============================================================================
# Bucket
# ============================================================================


def create_bucket_document(region: str) -> bytes:
    root = ET.Element("CreateBucketConfiguration")
    ET.SubElement(root, "LocationConstraint").text = region
    return _render(root)


def parse_location(root: Optional[ET.Element]) -> Optional[str]:
    if root is None:
        return None
    if root.tag == "LocationConstraint":
        return (root.text or "").strip() or None
    return _text(root, "LocationConstraint")


def parse_bucket_listing(
    root: Optional[ET.Element],
) -> Tuple[List[Bucket_Info], Optional[Owner_Info], bool, Optional[str], Optional[str], Optional[str], Optional[int]]:
    """Parse a ``ListAllMyBucketsResult`` document.

    Returns:
        Tuple of (buckets, owner, is_truncated, next_marker, prefix, marker, max_keys)
    """
    buckets: List[Bucket_Info] = []
    if root is None:
        return buckets, None, False, None, None, None, None

    container = root.find("Buckets")
    for item in container.findall("Bucket") if container is not None else []:
        buckets.append(
            Bucket_Info(
                name=_text(item, "Name") or "",
                region=_text(item, "Location") or "",
                created_date=_text(item, "CreationDate"),
            )
        )

    is_truncated = _flag(root, "IsTruncated")
    next_marker = _text(root, "NextMarker") if is_truncated else None
    max_keys_text = _text(root, "MaxKeys")
    max_keys = int(max_keys_text) if max_keys_text and max_keys_text.isdigit() else None
    return buckets, _owner(root), is_truncated, next_marker, _text(root, "Prefix"), _text(root, "Marker"), max_keys


def parse_acl(root: Optional[ET.Element]) -> Tuple[str, Owner_Info]:
    """Parse an ``AccessControlPolicy`` document into (acl, owner)."""
    acl = _text(root, "AccessControlList/Grant") or "private"
    owner = _owner(root) or Owner_Info(id="", display_name="")
    return acl, owner


# ============================================================================
# Logging
# ============================================================================


def logging_document(target_bucket: str, prefix: str) -> bytes:
    root = ET.Element("BucketLoggingStatus")
    enabled = ET.SubElement(root, "LoggingEnabled")
    ET.SubElement(enabled, "TargetBucket").text = target_bucket
    ET.SubElement(enabled, "TargetPrefix").text = prefix
    return _render(root)


def parse_logging(root: Optional[ET.Element]) -> Tuple[bool, Optional[str], Optional[str]]:
    """Parse a ``BucketLoggingStatus`` document into (enabled, prefix, target_bucket)."""
    enabled = root.find("LoggingEnabled") if root is not None else None
    if enabled is None:
        return False, None, None
    return True, enabled.findtext("TargetPrefix", default=""), _text(enabled, "TargetBucket")


# ============================================================================
# Website
# ============================================================================


def website_document(index: str, error: Optional[str] = None) -> bytes:
    root = ET.Element("WebsiteConfiguration")
    ET.SubElement(ET.SubElement(root, "IndexDocument"), "Suffix").text = index
    if error:
        ET.SubElement(ET.SubElement(root, "ErrorDocument"), "Key").text = error
    return _render(root)


def parse_website(root: Optional[ET.Element]) -> Tuple[str, Optional[str]]:
    """Parse a ``WebsiteConfiguration`` document into (index, error)."""
    return _text(root, "IndexDocument/Suffix") or "", _text(root, "ErrorDocument/Key")


# ============================================================================
# Lifecycle
# ============================================================================


def lifecycle_document(rules: Sequence[LifecycleRuleParams]) -> bytes:
    root = ET.Element("LifecycleConfiguration")
    for rule in rules:
        node = ET.SubElement(root, "Rule")
        if rule.id:
            ET.SubElement(node, "ID").text = rule.id
        ET.SubElement(node, "Prefix").text = rule.prefix
        ET.SubElement(node, "Status").text = rule.status
        expiration = ET.SubElement(node, "Expiration")
        if rule.days is not None:
            ET.SubElement(expiration, "Days").text = str(rule.days)
        else:
            ET.SubElement(expiration, "Date").text = rule.date
    return _render(root)


def parse_lifecycle(root: Optional[ET.Element]) -> List[Lifecycle_Rule]:
    """Parse a ``LifecycleConfiguration`` document into rules, in order.

    An expiration by ``CreatedBeforeDate`` is read as ``date``.

    Raises:
        UnrecognizedServiceError: A rule has no expiration by days or date
            (e.g. a transition-only rule), or an unreadable one
    """
    rules: List[Lifecycle_Rule] = []
    for node in root.findall("Rule") if root is not None else []:
        days = _text(node, "Expiration/Days")
        date = _text(node, "Expiration/Date") or _text(node, "Expiration/CreatedBeforeDate")
        try:
            rules.append(
                Lifecycle_Rule(
                    id=_text(node, "ID"),
                    prefix=node.findtext("Prefix", default=""),
                    status=_text(node, "Status") or "Disabled",
                    days=int(days) if days else None,
                    date=None if days else date,
                )
            )
        except ValueError as e:
            raise UnrecognizedServiceError(
                f"Unsupported lifecycle rule {_text(node, 'ID') or _text(node, 'Prefix')!r}: {e}",
                body=_render(root),
            ) from e
    return rules


# ============================================================================
# Referer
# ============================================================================


def referer_document(allow_empty: bool, referers: Iterable[str]) -> bytes:
    root = ET.Element("RefererConfiguration")
    ET.SubElement(root, "AllowEmptyReferer").text = "true" if allow_empty else "false"
    container = ET.SubElement(root, "RefererList")
    for referer in referers:
        ET.SubElement(container, "Referer").text = referer
    return _render(root)


def parse_referer(root: Optional[ET.Element]) -> Tuple[bool, List[str]]:
    """Parse a ``RefererConfiguration`` document into (allow_empty, referers).

    A bucket that never had referer settings allows empty referers and lists
    none, which is also what the service reports for it.
    """
    if root is None:
        return True, []
    referers = [(item.text or "").strip() for item in root.findall("RefererList/Referer")]
    allow_empty = _text(root, "AllowEmptyReferer")
    return (allow_empty or "true").lower() == "true", [r for r in referers if r]
