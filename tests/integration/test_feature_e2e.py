"""Integration tests for the ``generate-feature`` command end to end.

Runs the real CLI entry points against a temporary project root and checks
the generated TypeScript tree.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tmi_cli.cli import generate_feature_main, main

pytestmark = pytest.mark.integration


def test_umbrella_command_generates_feature(tmp_path: Path, capsys):
    assert main(["generate-feature", "user-profile", "--root", str(tmp_path)]) == 0

    root = tmp_path / "src" / "features" / "user-profile"
    assert (root / "domain" / "entities" / "UserProfile.ts").is_file()
    assert "fetchUserProfiles" in (root / "data" / "userProfileSlice.ts").read_text(
        encoding="utf-8"
    )
    assert (root / "ui" / "screens" / "UserProfileScreen.tsx").is_file()

    out = capsys.readouterr().out
    assert "Clean Architecture" in out
    assert "userProfileModule" in out


def test_standalone_command_ui_only(tmp_path: Path):
    assert generate_feature_main(["settings", "--ui-only", "--root", str(tmp_path)]) == 0

    root = tmp_path / "src" / "features" / "settings"
    assert not (root / "domain").exists()
    assert not (root / "data").exists()
    assert (root / "ui" / "screens" / "SettingsScreen.tsx").is_file()


def test_no_slice_keeps_data_layer(tmp_path: Path):
    assert main(["generate-feature", "orders", "--no-slice", "--root", str(tmp_path)]) == 0

    root = tmp_path / "src" / "features" / "orders"
    assert (root / "data" / "repositories" / "OrdersRepositoryImpl.ts").is_file()
    assert not (root / "data" / "ordersSlice.ts").exists()


def test_rerun_reports_skipped_files(tmp_path: Path, capsys):
    args = ["generate-feature", "user-profile", "--root", str(tmp_path)]
    assert main(args) == 0
    capsys.readouterr()

    assert main(args) == 0
    out = capsys.readouterr().out
    assert "Skipped" in out
    assert "Created:" not in out


def test_features_dir_from_environment(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TMI_FEATURES_DIR", "app/modules")
    assert generate_feature_main(["billing", "--root", str(tmp_path)]) == 0
    assert (tmp_path / "app" / "modules" / "billing" / "module.ts").is_file()
