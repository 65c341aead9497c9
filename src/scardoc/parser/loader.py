"""Load and save canonical documents, and read source units.

Canonical documents can be loaded from a URL, local file, or stdin, in JSON
or YAML with automatic format detection. They are written back as indented
JSON through an atomic rename.

The public functions are:

* :func:`load_document` -- Load and validate a document from any supported
  source.
* :func:`save_document` -- Persist a document in the interchange format.
* :func:`read_source_unit` -- Read a script file into an
  ``(identifier, lines)`` pair for the annotation parser.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from scardoc.config import atomic_write
from scardoc.exceptions import DocumentLoadError, SourceReadError
from scardoc.models import CanonicalDocument


def load_document(source: str) -> CanonicalDocument:
    """Load a canonical document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats and both current and legacy field names.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The validated document.

    Raises:
        DocumentLoadError: If the source cannot be loaded, parsed, or
            validated.
    """
    if source == "-":
        data = _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        data = _load_from_url(source)
    else:
        data = _load_from_file(source)

    try:
        return CanonicalDocument.from_wire(data)
    except ValidationError as exc:
        raise DocumentLoadError(f"Invalid canonical document from {source}: {exc}") from exc


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin.

    Raises:
        DocumentLoadError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise DocumentLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document from URL. Supports JSON and YAML responses.

    Raises:
        DocumentLoadError: If the URL cannot be fetched or content cannot be
            parsed.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DocumentLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DocumentLoadError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    Raises:
        DocumentLoadError: If the file cannot be read or content cannot be
            parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"Document file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"Failed to read document file {path}: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError(f"Document file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    A 'json' hint disables the fallback.

    Raises:
        DocumentLoadError: If the content cannot be parsed as either format
            or is not an object.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise DocumentLoadError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_object(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse document as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise DocumentLoadError(msg) from exc
    return _require_object(result)


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DocumentLoadError(f"Document must be a JSON/YAML object (got {kind})")
    return result


def save_document(document: CanonicalDocument, path: str | Path, indent: int = 2) -> Path:
    """Write *document* as interchange JSON, atomically.

    Args:
        document: The document to persist.
        path: Destination file path; parent directories are created.
        indent: JSON indentation.

    Returns:
        The destination path.
    """
    target = Path(path)
    text = json.dumps(document.to_wire(), indent=indent, ensure_ascii=False)
    atomic_write(target, text + "\n")
    return target


def read_source_unit(path: str | Path) -> tuple[str, list[str]]:
    """Read a script file into an ``(identifier, lines)`` pair.

    The identifier is the path as given. Undecodable bytes are replaced
    rather than failing the unit.

    Raises:
        SourceReadError: If the file is missing or cannot be opened.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SourceReadError(f"Source file not found: {path}")
    try:
        text = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceReadError(f"Failed to read source file {path}: {exc}") from exc
    return str(path), text.splitlines()
