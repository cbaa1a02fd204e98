"""Tests for the validation API and service options."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import gtsval.deps as deps
from gtsval.main import _load_options, app, config_from_options
from gtsval.validator.models import DiscoveryMode, ValidationConfig


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setattr(deps, "_validation_config", ValidationConfig())
    return TestClient(app)


def _md(content: str, path: str = "doc.md") -> dict:
    return {"path": path, "content": content, "format": "markdown"}


class TestValidateEndpoint:
    def test_ok(self, client: TestClient) -> None:
        resp = client.post("/api/validate", json={"items": [_md("gts.x.core.pkg.mytype.v1~")]})
        assert resp.status_code == 200
        data = resp.json()
        assert data["ok"] is True
        assert data["scanned_files"] == 1
        assert data["errors_count"] == 0

    def test_vendor_override(self, client: TestClient) -> None:
        resp = client.post(
            "/api/validate",
            json={"items": [_md("gts.y.core.pkg.mytype.v1~")], "vendor": "x"},
        )
        data = resp.json()
        assert data["ok"] is False
        assert data["errors"][0]["kind"] == "vendor_mismatch"
        assert data["errors"][0]["location"] == "line 1"

    def test_strict_override(self, client: TestClient) -> None:
        item = _md("gts.my-vendor.core.events.type.v1~")
        assert client.post("/api/validate", json={"items": [item]}).json()["ok"] is True
        resp = client.post("/api/validate", json={"items": [item], "strict": True})
        assert resp.json()["errors"][0]["kind"] == "malformed_identifier"

    def test_json_and_yaml_items(self, client: TestClient) -> None:
        items = [
            {"path": "a.json", "content": '{"$id": "gts.invalid"}', "format": "json"},
            {"path": "b.yaml", "content": "id: gts.x.core.pkg.t.v1~\n", "format": "yaml"},
        ]
        data = client.post("/api/validate", json={"items": items}).json()
        assert data["scanned_files"] == 2
        assert [e["path"] for e in data["errors"]] == ["a.json"]

    def test_empty_items_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/validate", json={"items": []})
        assert resp.status_code == 422

    def test_unknown_format_rejected(self, client: TestClient) -> None:
        item = {"path": "a.txt", "content": "x", "format": "toml"}
        resp = client.post("/api/validate", json={"items": [item]})
        assert resp.status_code == 422


class TestConfigEndpoint:
    def test_returns_defaults(self, client: TestClient) -> None:
        data = client.get("/api/config").json()
        assert data["discovery_mode"] == "strict_spec_only"
        assert data["scan_keys"] is False
        assert data["vendor_policy"]["expected"] is None


class TestOptions:
    def test_env_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GTS_VALIDATOR_OPTIONS_PATH", str(tmp_path / "missing.json"))
        monkeypatch.setenv("GTS_VENDOR", "x")
        monkeypatch.setenv("GTS_STRICT", "true")
        monkeypatch.setenv("GTS_SKIP_TOKENS", "**given**, **when**")
        monkeypatch.delenv("GTS_SCAN_KEYS", raising=False)
        options = _load_options()
        assert options == {
            "vendor": "x",
            "strict": True,
            "scan_keys": False,
            "skip_tokens": ["**given**", "**when**"],
        }

    def test_options_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        opts = tmp_path / "options.json"
        opts.write_text('{"vendor": "acme", "scan_keys": true}')
        monkeypatch.setenv("GTS_VALIDATOR_OPTIONS_PATH", str(opts))
        config = config_from_options(_load_options())
        assert config.vendor_policy.expected == "acme"
        assert config.scan_keys is True
        assert config.discovery_mode == DiscoveryMode.strict_spec_only
