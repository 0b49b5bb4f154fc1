from __future__ import annotations

from typing import Optional, Protocol, Sequence


class ReceiptStorage(Protocol):
    """Object storage for PIX/card receipts, addressed by opaque path strings."""

    def put(self, data: bytes, name: str, *, content_type: Optional[str] = None) -> str:
        """Store the bytes under `name`; returns the storage path. Raises UploadError."""

        raise NotImplementedError

    def remove(self, paths: Sequence[str]) -> None:
        """Best-effort delete: failures are logged, never raised."""

        raise NotImplementedError

    def sign(self, path: str, ttl_seconds: int) -> str:
        """Temporary read URL for viewing/downloading a receipt."""

        raise NotImplementedError
