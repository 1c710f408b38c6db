# File: tests/test_template_and_webhook.py

import httpx
import pytest

from firefly.services import webhook_service
from firefly.services.template_service import (
    EmptyTemplateFileError,
    InvalidTemplatePathError,
    TemplateNotFoundError,
    read_template,
    resolve_template_path,
)
from firefly.services.webhook_service import notify_document_saved


def test_resolve_template_path(tmp_path):
    expected = (tmp_path / "document template" / "a.pdf").resolve()

    assert resolve_template_path(tmp_path, "document template/a.pdf") == expected
    assert resolve_template_path(tmp_path, "/document%20template/a.pdf") == expected

    with pytest.raises(InvalidTemplatePathError):
        resolve_template_path(tmp_path, "../outside.pdf")
    with pytest.raises(InvalidTemplatePathError):
        resolve_template_path(tmp_path, "  ")


def test_read_template(tmp_path):
    (tmp_path / "t.pdf").write_bytes(b"%PDF-1.4")
    (tmp_path / "empty.pdf").write_bytes(b"")

    assert read_template(tmp_path, "t.pdf") == b"%PDF-1.4"
    with pytest.raises(TemplateNotFoundError):
        read_template(tmp_path, "missing.pdf")
    with pytest.raises(EmptyTemplateFileError):
        read_template(tmp_path, "empty.pdf")


def test_webhook_success(monkeypatch):
    sent = {}

    def fake_post(url, json=None, timeout=None):
        sent.update(url=url, json=json, timeout=timeout)
        return httpx.Response(200, request=httpx.Request("POST", url))

    monkeypatch.setattr(webhook_service.httpx, "post", fake_post)

    assert notify_document_saved("http://hooks.test/x", {"id": "p1"}, timeout=2.0) is True
    assert sent == {"url": "http://hooks.test/x", "json": {"projectData": {"id": "p1"}}, "timeout": 2.0}


def test_webhook_failures_are_swallowed(monkeypatch):
    def rejected(url, json=None, timeout=None):
        return httpx.Response(500, text="boom", request=httpx.Request("POST", url))

    monkeypatch.setattr(webhook_service.httpx, "post", rejected)
    assert notify_document_saved("http://hooks.test/x", {"id": "p1"}) is False

    def unreachable(url, json=None, timeout=None):
        raise httpx.ConnectTimeout("timed out")

    monkeypatch.setattr(webhook_service.httpx, "post", unreachable)
    assert notify_document_saved("http://hooks.test/x", {"id": "p1"}) is False

    assert notify_document_saved(None, {"id": "p1"}) is False
