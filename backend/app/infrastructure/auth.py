"""Claims Extraction — pluggable authentication for mutating operations.

Invariants:
    - An extractor maps the raw credential header value to claims or None
    - None means "reject" (401); anything else is opaque to the core
    - Credential values are never logged

Design Decisions:
    - Plain callables over a class hierarchy: swapping auth is one dependency override
    - Default extractor accepts every request, like the upstream server stub;
      require_api_key=True turns a missing header into a rejection
"""

import logging
from dataclasses import dataclass

from app.core.domain_types import Claims, ClaimsExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiKeyClaims:
    """Opaque marker that a credential header was seen."""
    present: bool


def allow_all_claims(credentials: str | None) -> Claims | None:
    """Pass-through extractor: every caller gets claims."""
    return Claims(ApiKeyClaims(present=credentials is not None))


def require_api_key_claims(credentials: str | None) -> Claims | None:
    """Reject callers that sent no (or a blank) credential header."""
    if credentials is None or not credentials.strip():
        logger.info("Rejected mutating request without credentials")
        return None
    return Claims(ApiKeyClaims(present=True))


def build_claims_extractor(require_api_key: bool) -> ClaimsExtractor:
    return require_api_key_claims if require_api_key else allow_all_claims
