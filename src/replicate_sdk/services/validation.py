"""Guard clauses for caller input; every failure is a ValidationError."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from replicate_sdk.errors import ValidationError

MODEL_IDENTIFIER_RE = re.compile(r"\A[\w.-]+/[\w.-]+\Z")
COLLECTION_SLUG_RE = re.compile(r"\A[\w.-]+\Z")

MAX_ZIP_BYTES = 1024 * 1024 * 1024
ZIP_MAGIC = b"PK\x03\x04"


def is_valid_url(url: Any, schemes: tuple[str, ...] = ("http", "https")) -> bool:
    if not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme in schemes and parsed.hostname)


def require_non_empty_string(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value


def validate_model_identifier(model: Any) -> str:
    require_non_empty_string(model, "Model identifier must be a non-empty string")
    if not MODEL_IDENTIFIER_RE.match(model):
        raise ValidationError("Model identifier must be in format 'owner/name'")
    return model


def validate_version_parameter(version: Any) -> str:
    return require_non_empty_string(version, "Version must be 'latest', 'all', or a non-empty string")


def validate_collection_slug(slug: Any) -> str:
    require_non_empty_string(slug, "Collection slug must be a non-empty string")
    if not COLLECTION_SLUG_RE.match(slug):
        raise ValidationError("Collection slug contains invalid characters")
    return slug


def validate_resource_id(value: Any, label: str) -> str:
    return require_non_empty_string(value, f"{label} ID must be a non-empty string")


def validate_webhook(url: Any) -> str:
    webhook = str(url).strip() if url is not None else ""
    if not is_valid_url(webhook):
        raise ValidationError("Webhook URL must be a valid URL")
    return webhook


def validate_params_mapping(params: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(params, Mapping):
        raise ValidationError(f"{label} parameters must be a mapping")
    return params


def validate_zip_file(zip_path: Any, root: str | Path | None = None) -> Path:
    """
    Check a local zip before uploading it.

    Order: non-empty path, inside `root` (cwd by default), exists and is a
    regular file, `.zip` extension, at most 1 GiB, ZIP magic bytes.
    """
    if isinstance(zip_path, Path):
        zip_path = str(zip_path)
    require_non_empty_string(zip_path, "Zip path must be a non-empty string")

    permitted = Path(root if root is not None else Path.cwd()).resolve()
    resolved = Path(zip_path).expanduser().resolve()
    if resolved != permitted and permitted not in resolved.parents:
        raise ValidationError("Zip path contains invalid characters or path traversal")

    if not resolved.exists():
        raise ValidationError(f"Zip file does not exist: {zip_path}")
    if not resolved.is_file():
        raise ValidationError(f"Path is not a file: {zip_path}")
    if resolved.suffix.lower() != ".zip":
        raise ValidationError("File must have .zip extension")

    size = resolved.stat().st_size
    if size > MAX_ZIP_BYTES:
        raise ValidationError(f"Zip file too large (max 1GB): {size} bytes")

    try:
        with resolved.open("rb") as f:
            magic = f.read(4)
    except PermissionError as exc:
        raise ValidationError("Cannot read zip file: permission denied") from exc
    if magic != ZIP_MAGIC:
        raise ValidationError("File is not a valid ZIP file")
    return resolved


def validate_upload_url(url: Any, allowed_domains: list[str]) -> str:
    require_non_empty_string(url, "Upload URL must be a non-empty string")
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise ValidationError("Invalid upload URL format") from exc
    if parsed.scheme != "https":
        raise ValidationError("Upload URL must use HTTPS")
    host = parsed.hostname or ""
    if not any(host == d or host.endswith(f".{d}") for d in allowed_domains):
        raise ValidationError("Upload URL must be from allowed domain")
    return url
