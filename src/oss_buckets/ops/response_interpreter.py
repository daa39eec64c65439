"""Response interpretation for bucket requests.

Maps a ``Raw_Response`` to either the parsed XML document of a successful
reply or one of the typed errors in ``oss_buckets.ops.exceptions``. The
service reports failures as::

    <Error>
      <Code>NoSuchBucket</Code>
      <Message>The specified bucket does not exist.</Message>
      <RequestId>...</RequestId>
    </Error>
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Iterable, Optional

from oss_buckets.domain.response_meta import Response_Meta

from .exceptions import (
    BUCKET_LOCATION_IMMUTABLE_MESSAGE,
    SERVICE_ERRORS,
    BucketAlreadyExistsError,
    OssError,
    UnrecognizedServiceError,
)

if TYPE_CHECKING:
    from oss_buckets.clients.transport import Raw_Response

logger = logging.getLogger(__name__)


SUCCESS_STATUSES = (200, 204)


def response_meta(response: "Raw_Response") -> Response_Meta:
    return Response_Meta(
        status=response.status,
        headers=dict(response.headers),
        request_id=response.headers.get("x-oss-request-id"),
    )


def parse_document(body: bytes) -> Optional[ET.Element]:
    """Parse an XML body, dropping namespaces from every tag.

    Returns:
        Root element, or None for an empty body

    Raises:
        ET.ParseError: If the body is not well-formed XML
    """
    if not body or not body.strip():
        return None
    root = ET.fromstring(body)
    for element in root.iter():
        if isinstance(element.tag, str) and "}" in element.tag:
            element.tag = element.tag.split("}", 1)[1]
    return root


def interpret(
    response: "Raw_Response",
    expected: Iterable[int] = SUCCESS_STATUSES,
    bucket: Optional[str] = None,
) -> Optional[ET.Element]:
    """Return the parsed document of a successful response or raise its error.

    Args:
        response: Raw service response
        expected: Status codes treated as success
        bucket: Bucket the request targeted, recorded in error context

    Returns:
        Parsed XML root, or None when the response has no body

    Raises:
        OssError: The typed error the response maps to
    """
    if response.status in tuple(expected):
        try:
            return parse_document(response.body)
        except ET.ParseError as e:
            raise UnrecognizedServiceError(
                f"Malformed response body for status {response.status}: {e}",
                body=response.body,
                status=response.status,
                request_id=response.headers.get("x-oss-request-id"),
                context={"bucket": bucket},
            ) from e
    raise error_from_response(response, bucket=bucket)


def error_from_response(response: "Raw_Response", bucket: Optional[str] = None) -> OssError:
    """Build the typed error for a failed response."""
    code: Optional[str] = None
    message = ""
    request_id = response.headers.get("x-oss-request-id")
    try:
        root = parse_document(response.body)
    except ET.ParseError:
        root = None
    if root is not None and root.tag == "Error":
        code = (root.findtext("Code") or "").strip() or None
        message = (root.findtext("Message") or "").strip()
        request_id = (root.findtext("RequestId") or "").strip() or request_id

    context = {"bucket": bucket, "service_message": message}
    error_cls = SERVICE_ERRORS.get(code or "")
    if error_cls is BucketAlreadyExistsError:
        error: OssError = BucketAlreadyExistsError(
            BUCKET_LOCATION_IMMUTABLE_MESSAGE,
            status=response.status,
            code=code,
            request_id=request_id,
            context=context,
        )
    elif error_cls is not None:
        error = error_cls(
            message or code,
            status=response.status,
            code=code,
            request_id=request_id,
            context=context,
        )
    else:
        error = UnrecognizedServiceError(
            f"{code or 'Unknown error'} (status {response.status}){': ' + message if message else ''}",
            body=response.body,
            status=response.status,
            code=code,
            request_id=request_id,
            context=context,
        )
    logger.warning(f"Service error for bucket {bucket}: {error.kind} status={error.status} code={error.code}")
    return error
