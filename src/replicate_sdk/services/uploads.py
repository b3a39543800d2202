"""Dataset uploads for training."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import httpx

from replicate_sdk.clients.endpoint import Endpoint
from replicate_sdk.errors import APIError, UploadError
from replicate_sdk.records.upload import Upload
from replicate_sdk.services.validation import validate_upload_url, validate_zip_file

logger = logging.getLogger(__name__)

ZIP_CONTENT_TYPE = "application/zip"
CHUNK_SIZE = 1024 * 1024


class FileChunks:
    """Re-iterable byte stream over a file, so a retried PUT starts from byte 0."""

    def __init__(self, path: Path, chunk_size: int = CHUNK_SIZE) -> None:
        self.path = path
        self.chunk_size = chunk_size

    def __iter__(self) -> Iterator[bytes]:
        with self.path.open("rb") as f:
            while chunk := f.read(self.chunk_size):
                yield chunk


class UploadOperations:
    """Mixed into Client."""

    def upload_zip(self, zip_path: str | Path) -> Upload:
        """Validate a local zip, create an upload slot and PUT the file into it."""
        path = validate_zip_file(zip_path, self.upload_root)
        upload = self.create_upload(path.name)
        upload.attach(path)
        return upload

    def create_upload(self, filename: str = "data.zip") -> Upload:
        return Upload(self, self.dreambooth_endpoint.post(f"upload/{filename}"))

    def update_upload(self, upload_url: str, zip_path: str | Path) -> httpx.Response:
        """
        PUT the zip to a per-upload URL.

        The target is a one-off Endpoint: no bearer token, no JSON parsing.
        Content-Length is sent explicitly; Transfer-Encoding is left out since
        HTTP/1.1 forbids sending both.
        """
        validate_upload_url(upload_url, self.settings.upload_allowed_domains)
        path = validate_zip_file(zip_path, self.upload_root)
        size = path.stat().st_size

        endpoint = Endpoint(
            upload_url,
            api_token=None,
            content_type=ZIP_CONTENT_TYPE,
            http_client=self.http_client,
        )
        logger.debug("uploading %s (%d bytes)", path.name, size)
        try:
            endpoint.put(
                "",
                content=FileChunks(path),
                headers={"Content-Type": ZIP_CONTENT_TYPE, "Content-Length": str(size)},
            )
        except APIError as exc:
            raise UploadError(
                f"Upload of {path.name} failed: {exc.message}",
                exc.status_code,
                exc.response_body,
            ) from exc
        finally:
            endpoint.close()
        return endpoint.last_response
