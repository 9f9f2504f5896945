"""Manifest rewrites and path moves performed on a freshly cloned template.

These are the narrow, template-specific edits the generic substitution and
rename passes cannot express: JSON object mutation of ``package.json``, full
replacement of ``app.json``, the ``.env`` file, and the Android source
package directory that must follow the bundle identifier.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any

# Fields only meaningful for the template repository itself.
SCAFFOLD_ONLY_PACKAGE_FIELDS: tuple[str, ...] = ("bin", "files", "repository", "keywords")

INITIAL_VERSION = "0.0.1"


def _dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def rewrite_package_json(project_root: Path, slug: str) -> Path | None:
    """Set name/version/private and drop scaffolding-only fields.

    Returns the path written, or ``None`` when the project has no
    ``package.json``.
    """
    path = project_root / "package.json"
    if not path.exists():
        return None

    package: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    package["name"] = slug
    package["version"] = INITIAL_VERSION
    package["private"] = True
    for key in SCAFFOLD_ONLY_PACKAGE_FIELDS:
        package.pop(key, None)

    path.write_text(_dump_json(package), encoding="utf-8")
    return path


def write_app_json(project_root: Path, name: str, display_name: str) -> Path:
    """Replace ``app.json`` with the new app name and display name."""
    path = project_root / "app.json"
    path.write_text(_dump_json({"name": name, "displayName": display_name}), encoding="utf-8")
    return path


def materialize_env_file(project_root: Path) -> Path | None:
    """Copy ``.env.example`` to ``.env`` unless ``.env`` already exists."""
    example = project_root / ".env.example"
    target = project_root / ".env"
    if not example.is_file() or target.exists():
        return None
    shutil.copyfile(example, target)
    return target


def move_android_package(
    project_root: Path,
    old_bundle_id: str,
    new_bundle_id: str,
) -> list[tuple[Path, Path]]:
    """Move the Android source package to match *new_bundle_id*.

    For every source set under ``android/app/src`` that contains the
    directory for *old_bundle_id* (``java/com/tmi/app``), its contents are
    copied to the directory for *new_bundle_id* and the old directory is
    deleted afterwards, then any parents it leaves empty are pruned.  Copy
    first: the old and new paths can share leading segments.

    Returns:
        ``(old_dir, new_dir)`` pairs for every moved package.
    """
    moved: list[tuple[Path, Path]] = []
    if old_bundle_id == new_bundle_id:
        return moved

    src_root = project_root / "android" / "app" / "src"
    if not src_root.is_dir():
        return moved

    old_parts = old_bundle_id.split(".")
    new_parts = new_bundle_id.split(".")

    for source_set in sorted(p for p in src_root.iterdir() if p.is_dir()):
        for language_dir in ("java", "kotlin"):
            base = source_set / language_dir
            old_dir = base.joinpath(*old_parts)
            if not old_dir.is_dir():
                continue
            new_dir = base.joinpath(*new_parts)
            shutil.copytree(old_dir, new_dir, dirs_exist_ok=True)
            _remove_package_dir(old_dir, keep=new_dir)
            _prune_empty_parents(old_dir.parent, stop=base)
            moved.append((old_dir, new_dir))

    return moved


def _remove_package_dir(old_dir: Path, keep: Path) -> None:
    """Delete *old_dir* except for *keep* when the new package nests inside it."""
    if keep.is_relative_to(old_dir):
        for child in old_dir.iterdir():
            if keep.is_relative_to(child):
                continue
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()
        return
    shutil.rmtree(old_dir)


def _prune_empty_parents(directory: Path, stop: Path) -> None:
    while directory != stop and directory.is_dir() and not any(directory.iterdir()):
        directory.rmdir()
        directory = directory.parent
