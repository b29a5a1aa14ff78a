import json
import tempfile
from dataclasses import replace
from pathlib import Path

from augment_engine.app.cli import main
from augment_engine.app.settings import AppSettings
from augment_engine.app.wiring import build_bundle, describe_plan


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("AE_STORE", "json")
    monkeypatch.setenv("AE_STORE_PATH", "/tmp/x.json")
    monkeypatch.setenv("AE_ENABLE_TENANT", "yes")
    monkeypatch.setenv("AE_TENANT", "acme")
    monkeypatch.setenv("AE_ENABLE_AUDIT", "off")
    monkeypatch.setenv("AE_ENTITY_MARKERS", "soft_delete, multi_tenant")
    monkeypatch.setenv("AE_LOG_LEVEL", "debug")

    s = AppSettings.from_env()
    assert s.store.backend == "json"
    assert s.store.path == "/tmp/x.json"
    assert s.store.entity_markers == frozenset({"soft_delete", "multi_tenant"})
    assert s.augment.enable_tenant is True
    assert s.augment.tenant_id == "acme"
    assert s.augment.enable_audit is False
    assert s.log_level == "DEBUG"


def test_settings_defaults_ignore_bad_values(monkeypatch):
    monkeypatch.setenv("AE_STORE", "postgres")
    monkeypatch.setenv("AE_LOG_LEVEL", "loud")

    s = AppSettings.from_env()
    assert s.store.backend == "memory"
    assert s.log_level == "INFO"
    assert s.augment.enable_soft_delete is True


def test_bundle_is_cached_and_plan_lists_order():
    s = AppSettings()
    s = replace(s, augment=replace(s.augment, enable_tenant=True), store=replace(s.store, collection="plan_docs"))

    bundle = build_bundle(s)
    assert build_bundle(s) is bundle

    plan = describe_plan(bundle)
    assert plan == {
        "DocumentQuery": ["TenantAugmentor", "SoftDeleteAugmentor", "AuditAugmentor"],
        "DocumentUpdate": ["TenantAugmentor", "SoftDeleteAugmentor", "AuditAugmentor"],
    }


def test_cli_save_find_delete_with_json_store(capsys, monkeypatch):
    monkeypatch.delenv("AE_ENABLE_TENANT", raising=False)
    with tempfile.TemporaryDirectory() as d:
        path = str(Path(d) / "docs.json")
        base = ["--store", "json", "--store-path", path]

        assert main(base + ["--save", json.dumps({"id": "1", "kind": "note"})]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["saved"]["id"] == "1"

        assert main(base + ["--find", "--where", "kind=note"]) == 0
        assert [doc["id"] for doc in json.loads(capsys.readouterr().out)] == ["1"]

        assert main(base + ["--delete", "1"]) == 0
        assert json.loads(capsys.readouterr().out) == {"deleted": False}

        assert main(base + ["--count"]) == 0
        assert capsys.readouterr().out.strip() == "0"

        assert main(base + ["--get", "1"]) == 1
        assert "not found" in capsys.readouterr().out


def test_cli_plan_and_help(capsys):
    assert main(["--plan", "--collection", "cli_plan"]) == 0
    plan = json.loads(capsys.readouterr().out)
    assert plan["DocumentQuery"] == ["SoftDeleteAugmentor", "AuditAugmentor"]

    assert main([]) == 2
