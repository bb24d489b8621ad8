from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TokenMetadata:
    """NEP-177 token metadata supplied at mint time.

    The contract owns validation; ``None`` fields are simply left out of the
    JSON payload.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    media: Optional[str] = None
    media_hash: Optional[str] = None
    copies: Optional[int] = None
    issued_at: Optional[int] = None
    expires_at: Optional[int] = None
    starts_at: Optional[int] = None
    updated_at: Optional[int] = None
    extra: Optional[str] = None
    reference: Optional[str] = None
    reference_hash: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}
