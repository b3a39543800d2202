from __future__ import annotations

from pathlib import Path

import httpx

from replicate_sdk.records.base import Record


class Upload(Record):
    """Storage slot for a training dataset (a zip file)."""

    @property
    def upload_url(self) -> str | None:
        return self.get("upload_url")

    @property
    def serving_url(self) -> str | None:
        """URL to pass as training input once the file is attached."""
        return self.get("serving_url")

    def attach(self, path: str | Path) -> httpx.Response:
        return self.client.update_upload(self.upload_url, path)
