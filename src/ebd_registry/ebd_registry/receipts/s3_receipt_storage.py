from __future__ import annotations

import logging
import mimetypes
from typing import Optional, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.exceptions import PersistenceError, UploadError
from .storage import ReceiptStorage

log = logging.getLogger(__name__)


class S3ReceiptStorage(ReceiptStorage):
    """Receipts bucket on S3 (or any S3-compatible endpoint)."""

    def __init__(self, bucket: str, *, prefix: str = "receipts/", client=None, region_name: Optional[str] = None,
                 endpoint_url: Optional[str] = None):
        self._bucket = bucket
        self._prefix = prefix
        self._client = client or boto3.client("s3", region_name=region_name, endpoint_url=endpoint_url)

    def put(self, data: bytes, name: str, *, content_type: Optional[str] = None) -> str:
        key = f"{self._prefix}{name}"
        content_type = content_type or mimetypes.guess_type(name)[0] or "application/octet-stream"
        try:
            self._client.put_object(Bucket=self._bucket, Key=key, Body=data, ContentType=content_type)
        except (BotoCoreError, ClientError) as exc:
            log.error("receipt upload failed key=%s: %s", key, exc)
            raise UploadError(f"Falha ao enviar o comprovante {name}") from exc
        return key

    def remove(self, paths: Sequence[str]) -> None:
        keys = [p for p in paths if p]
        if not keys:
            return
        try:
            resp = self._client.delete_objects(
                Bucket=self._bucket,
                Delete={"Objects": [{"Key": k} for k in keys], "Quiet": True},
            )
        except (BotoCoreError, ClientError) as exc:
            log.warning("receipt removal failed for %d file(s): %s", len(keys), exc)
            return

        for err in resp.get("Errors", []) or []:
            log.warning("receipt removal failed key=%s: %s", err.get("Key"), err.get("Message"))

    def sign(self, path: str, ttl_seconds: int) -> str:
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self._bucket, "Key": path},
                ExpiresIn=int(ttl_seconds),
            )
        except (BotoCoreError, ClientError) as exc:
            raise PersistenceError(f"Falha ao gerar link do comprovante: {exc}") from exc
