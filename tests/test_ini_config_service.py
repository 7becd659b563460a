# tests/test_ini_config_service.py
from __future__ import annotations

from pathlib import Path

import pytest

from mdsource.services.config.ini_config_service import IniConfigService


def write_ini(p: Path, text: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


@pytest.fixture
def user_dir(monkeypatch, tmp_path) -> Path:
    """Point platformdirs at an empty per-test directory."""
    target = tmp_path / "usercfg"
    monkeypatch.setattr(
        "mdsource.services.config.ini_config_service.user_config_dir",
        lambda appname: str(target),
    )
    return target


def test_defaults_when_no_config_files(user_dir):
    cfg = IniConfigService()
    assert cfg.app_version() == "0.0.0"
    assert cfg.loaded_from is None

    assert cfg.get("missing", "key", "x") == "x"
    assert cfg.get_int("source", "width", 42) == 42


def test_project_root_config_is_used_when_present(user_dir, tmp_path):
    proj_root = tmp_path / "repo"
    ini = proj_root / "config" / "config.ini"
    write_ini(ini, "[app]\nversion = 1.2.3\n[source]\nwidth = 1280\n")

    cfg = IniConfigService(project_root=proj_root)
    assert cfg.app_version() == "1.2.3"
    assert cfg.get_int("source", "width") == 1280
    assert cfg.loaded_from == ini


def test_user_dir_preferred_over_project_root(user_dir, tmp_path):
    plat_path = user_dir / IniConfigService.DEFAULT_FILE
    proj_root = tmp_path / "repo"
    write_ini(plat_path, "[app]\nversion = 2.0.0\n")
    write_ini(proj_root / "config" / "config.ini", "[app]\nversion = 1.0.0\n")

    cfg = IniConfigService(project_root=proj_root)
    assert cfg.app_version() == "2.0.0"
    assert cfg.loaded_from == plat_path


def test_explicit_path_overrides_everything(user_dir, tmp_path):
    explicit = tmp_path / "explicit.ini"
    write_ini(user_dir / IniConfigService.DEFAULT_FILE, "[app]\nversion = 2.0.0\n")
    write_ini(explicit, "[app]\nversion = 9.9.9\n")

    cfg = IniConfigService(explicit_path=explicit, project_root=tmp_path)
    assert cfg.app_version() == "9.9.9"
    assert cfg.loaded_from == explicit


def test_malformed_file_is_skipped(user_dir, tmp_path):
    bad = tmp_path / "bad.ini"
    write_ini(bad, "this is not [ini\n")
    write_ini(user_dir / IniConfigService.DEFAULT_FILE, "[app]\nversion = 3.0.0\n")

    cfg = IniConfigService(explicit_path=bad)
    assert cfg.app_version() == "3.0.0"


def test_percent_in_css_is_not_interpolated(user_dir, tmp_path):
    ini = tmp_path / "c.ini"
    write_ini(ini, "[source]\ncss = body { width: 100%; }\n")
    cfg = IniConfigService(explicit_path=ini)
    assert cfg.get("source", "css") == "body { width: 100%; }"


@pytest.mark.parametrize("raw, expected", [("42", 42), ("  7  ", 7), ("notanint", None), ("", None)])
def test_get_int_parsing(user_dir, tmp_path, raw, expected):
    ini = tmp_path / "c.ini"
    write_ini(ini, f"[limits]\nmax = {raw}\n")
    cfg = IniConfigService(explicit_path=ini)
    assert cfg.get_int("limits", "max", None) == expected
