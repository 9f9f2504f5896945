"""Shared pytest fixtures for the tmi-cli test suite.

Provides reusable fixtures for:
- A miniature copy of the React Native template repository
- A fake ``git clone`` that copies that tree instead of hitting the network
- Default configuration and project parameters
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from tmi_cli.config import Config, ProjectParams


# ---------------------------------------------------------------------------
# Template repository
# ---------------------------------------------------------------------------

TEMPLATE_FILES: dict[str, str] = {
    "package.json": json.dumps(
        {
            "name": "tmi-rn-base",
            "version": "2.3.0",
            "bin": {"tmi": "cli/index.js"},
            "files": ["cli"],
            "repository": "https://github.com/DEV-TMI/tmi-rn-base.git",
            "keywords": ["react-native", "boilerplate"],
            "scripts": {"ios": "react-native run-ios"},
            "dependencies": {"react-native": "0.74.1"},
        },
        indent=2,
    )
    + "\n",
    "app.json": '{\n  "name": "TMI",\n  "displayName": "TMI"\n}\n',
    ".env.example": "APP_SCHEME=tmi\nAPI_URL=https://api.example.com\n",
    "README.md": "# tmi-rn-base\n\nTMI React Native boilerplate.\n",
    "cli/index.js": "#!/usr/bin/env node\nconsole.log('TMI');\n",
    ".git/HEAD": "ref: refs/heads/main\n",
    "src/config/featureFlags.ts": "export const featureFlags = {};\n",
    "src/app/App.tsx": "export const APP_NAME = 'TMI';\n",
    "ios/Podfile": "target 'TMI' do\n  use_react_native!\nend\n",
    "ios/TMI/AppDelegate.mm": '#import "AppDelegate.h"\nself.moduleName = @"TMI";\n',
    "ios/TMI/Info.plist": "<string>com.tmi.app</string>\n",
    "ios/TMI.xcodeproj/project.pbxproj": (
        "PRODUCT_BUNDLE_IDENTIFIER = com.tmi.app;\n"
        "PRODUCT_NAME = TMI;\n"
        "path = TMI.app;\n"
    ),
    "ios/TMI.xcodeproj/xcshareddata/xcschemes/TMI.xcscheme": (
        '<BuildableReference BuildableName = "TMI.app" />\n'
    ),
    "ios/TMI.xcworkspace/contents.xcworkspacedata": (
        '<FileRef location = "group:TMI.xcodeproj" />\n'
    ),
    "ios/TMITests/TMITests.m": "@interface TMITests : XCTestCase\n@end\n",
    "android/settings.gradle": "rootProject.name = 'TMI'\n",
    "android/app/build.gradle": (
        'namespace "com.tmi.app"\n'
        'applicationId "com.tmi.app"\n'
    ),
    "android/app/src/main/java/com/tmi/app/MainActivity.kt": (
        "package com.tmi.app\n\n"
        'override fun getMainComponentName(): String = "TMI"\n'
    ),
    "android/app/src/main/java/com/tmi/app/MainApplication.kt": "package com.tmi.app\n",
    "android/app/src/main/res/values/strings.xml": (
        '<resources><string name="app_name">TMI</string></resources>\n'
    ),
    "android/app/src/debug/java/com/tmi/app/ReactNativeFlipper.java": (
        "package com.tmi.app;\n"
    ),
    "node_modules/tmi-sentinel/index.js": "module.exports = 'TMI com.tmi.app';\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Materialise *files* (relative path -> content) under *root*."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def template_repo(tmp_path: Path) -> Path:
    """A miniature ``tmi-rn-base`` checkout on disk."""
    return write_tree(tmp_path / "template-src", TEMPLATE_FILES)


@pytest.fixture
def parent_dir(tmp_path: Path) -> Path:
    """Directory in which projects are bootstrapped."""
    directory = tmp_path / "workspace"
    directory.mkdir()
    return directory


# ---------------------------------------------------------------------------
# Mock external commands
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_run_checked(template_repo: Path) -> AsyncMock:
    """Stand-in for ``run_checked`` that serves ``git clone`` from disk.

    Every other command succeeds without doing anything.  The mock records
    each call so tests can assert on the command sequence.
    """

    async def _run(cmd: list[str], cwd: Any = None, timeout: int = 600, capture: bool = True) -> str:
        if cmd[:2] == ["git", "clone"]:
            shutil.copytree(template_repo, Path(cmd[-1]))
        return ""

    return AsyncMock(side_effect=_run)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration with a short command timeout."""
    return Config(command_timeout=30)


@pytest.fixture
def acme_params() -> ProjectParams:
    """Parameters for the ``Acme`` project used across bootstrap tests."""
    return ProjectParams(
        name="Acme",
        bundle_id="com.acme.app",
        display_name="Acme",
        install_dependencies=False,
        init_git=False,
    )
