"""Transport clients for the object-storage service."""

from .signing import SigV4Signer, SigningError
from .transport import Raw_Response, RequestsTransport, Transport

__all__ = ["SigV4Signer", "SigningError", "Raw_Response", "RequestsTransport", "Transport"]
