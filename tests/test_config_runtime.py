"""Tests for runtime configuration loading."""

import json

from bundlesqueeze.config_runtime import DEFAULTS, load_runtime_config


def _write_config(root, data):
    config_dir = root / ".squeeze"
    config_dir.mkdir(exist_ok=True)
    (config_dir / "config.json").write_text(
        data if isinstance(data, str) else json.dumps(data), encoding="utf-8"
    )


def test_defaults_without_config(tmp_path):
    assert load_runtime_config(str(tmp_path)) == DEFAULTS


def test_defaults_not_mutated(tmp_path):
    cfg = load_runtime_config(str(tmp_path))
    cfg["report"]["ignore"].append("x")
    assert DEFAULTS["report"]["ignore"] == []


def test_file_overrides(tmp_path):
    _write_config(tmp_path, {"limits": {"tree_depth": 4}, "report": {"ignore": ["node_modules/react"]}})
    cfg = load_runtime_config(str(tmp_path))
    assert cfg["limits"]["tree_depth"] == 4
    assert cfg["limits"]["max_children"] == 25
    assert cfg["report"]["ignore"] == ["node_modules/react"]


def test_file_values_of_wrong_type_ignored(tmp_path):
    _write_config(tmp_path, {"limits": {"tree_depth": "deep"}, "bogus": {"x": 1}, "report": {"nope": 1}})
    cfg = load_runtime_config(str(tmp_path))
    assert cfg["limits"]["tree_depth"] == 2
    assert "bogus" not in cfg
    assert "nope" not in cfg["report"]


def test_invalid_json_falls_back_to_defaults(tmp_path):
    _write_config(tmp_path, "{broken")
    assert load_runtime_config(str(tmp_path)) == DEFAULTS


def test_env_overrides(tmp_path, monkeypatch):
    _write_config(tmp_path, {"limits": {"tree_depth": 4}})
    monkeypatch.setenv("BUNDLESQUEEZE_LIMITS_TREE_DEPTH", "7")
    monkeypatch.setenv("BUNDLESQUEEZE_REPORT_IGNORE", "a.js, b.js,")
    monkeypatch.setenv("BUNDLESQUEEZE_REPORT_SIZE_UNIT", "MB")

    cfg = load_runtime_config(str(tmp_path))
    assert cfg["limits"]["tree_depth"] == 7
    assert cfg["report"]["ignore"] == ["a.js", "b.js"]
    assert cfg["report"]["size_unit"] == "MB"


def test_bad_env_int_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("BUNDLESQUEEZE_LIMITS_MAX_CHILDREN", "many")
    assert load_runtime_config(str(tmp_path))["limits"]["max_children"] == 25
