# firefly/services/template_service.py
"""
Locate and read report templates under the configured template root.
"""

import logging
from pathlib import Path
from typing import Union
from urllib.parse import unquote

logger = logging.getLogger(__name__)


class TemplateNotFoundError(FileNotFoundError):
    pass


class InvalidTemplatePathError(ValueError):
    pass


class EmptyTemplateFileError(RuntimeError):
    pass


def resolve_template_path(template_root: Union[str, Path], template_path: str) -> Path:
    """
    Resolve a client-supplied relative path against ``template_root``.

    The path may be URL-encoded ("document%20template/...") and may start
    with a slash; it must stay inside the root.
    """
    if not template_path or not template_path.strip():
        raise InvalidTemplatePathError("Template path is required")

    root = Path(template_root).resolve()
    relative = unquote(template_path).lstrip("/\\")
    candidate = (root / relative).resolve()

    if candidate != root and root not in candidate.parents:
        raise InvalidTemplatePathError(f"Template path escapes template root: {template_path}")
    return candidate


def read_template(template_root: Union[str, Path], template_path: str) -> bytes:
    path = resolve_template_path(template_root, template_path)
    logger.info("Looking for template file at: %s", path)

    if not path.is_file():
        raise TemplateNotFoundError(f"Template file not found: {path}")

    data = path.read_bytes()
    if not data:
        raise EmptyTemplateFileError(f"Template file is empty: {path}")

    logger.info("Template file read successfully, size: %d", len(data))
    return data
