"""Recursive content substitution and structural renaming of a directory tree.

Both passes share one exclusion set and never descend into dependency
caches, build output or VCS metadata.  Failures are not recovered here: any
``OSError`` or decoding error propagates and the caller is expected to treat
the whole tree as unusable.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Iterable

from tmi_cli.engine.substitution import SubstitutionRule, apply_rules

# ---------------------------------------------------------------------------
# Read-only catalogs
# ---------------------------------------------------------------------------

EXCLUDED_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
        ".yarn",
        ".gradle",
        ".idea",
        "Pods",
        "DerivedData",
        "build",
    }
)

CONTENT_EXTENSIONS: frozenset[str] = frozenset(
    {
        # source
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".java",
        ".kt",
        ".m",
        ".mm",
        ".h",
        ".swift",
        # markup / config
        ".json",
        ".xml",
        ".yml",
        ".yaml",
        ".md",
        ".properties",
        ".gradle",
        # Xcode project files
        ".pbxproj",
        ".plist",
        ".xcscheme",
        ".xcworkspacedata",
        ".storyboard",
    }
)

SPECIAL_FILENAMES: frozenset[str] = frozenset(
    {"Podfile", "Gemfile", ".env", ".env.example", ".watchmanconfig"}
)


def _scan(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def _is_eligible(name: str, extensions: frozenset[str] | set[str]) -> bool:
    if name in SPECIAL_FILENAMES:
        return True
    return Path(name).suffix in extensions


# ---------------------------------------------------------------------------
# Content pass
# ---------------------------------------------------------------------------


def substitute_file(path: Path, rules: Iterable[SubstitutionRule]) -> bool:
    """Rewrite *path* in place with *rules*; return ``True`` if it changed.

    Bytes are decoded as UTF-8 without newline translation so CRLF files
    keep their line endings.
    """
    original = path.read_bytes().decode("utf-8")
    updated = apply_rules(original, rules)
    if updated == original:
        return False
    path.write_bytes(updated.encode("utf-8"))
    return True


def walk_and_substitute(
    root: str | Path,
    rules: Iterable[SubstitutionRule],
    extensions: frozenset[str] | set[str] = CONTENT_EXTENSIONS,
    excluded: frozenset[str] | set[str] = EXCLUDED_DIRS,
) -> list[Path]:
    """Apply *rules* to every eligible file under *root*.

    Args:
        root: Directory to walk.
        rules: Ordered substitution rules.
        extensions: Suffixes (with the leading dot) whose files are rewritten.
        excluded: Directory names that are never entered.

    Returns:
        The files whose content changed.

    Raises:
        OSError: A file could not be read or written.
        UnicodeDecodeError: An eligible file is not valid UTF-8.
    """
    rules = tuple(rules)
    changed: list[Path] = []

    def _visit(directory: Path) -> None:
        for entry in _scan(directory):
            if entry.is_dir(follow_symlinks=False):
                if entry.name not in excluded:
                    _visit(Path(entry.path))
            elif entry.is_file(follow_symlinks=False) and _is_eligible(entry.name, extensions):
                path = Path(entry.path)
                if substitute_file(path, rules):
                    changed.append(path)

    _visit(Path(root))
    return changed


# ---------------------------------------------------------------------------
# Structural pass
# ---------------------------------------------------------------------------


def _rename_entry(path: Path, old_token: str, new_token: str) -> Path:
    target = path.with_name(path.name.replace(old_token, new_token))
    if target.exists():
        raise FileExistsError(f"Cannot rename {path} -> {target}: target exists")
    path.rename(target)
    return target


def rename_tree(
    root: str | Path,
    old_token: str,
    new_token: str,
    excluded: frozenset[str] | set[str] = EXCLUDED_DIRS,
) -> list[tuple[Path, Path]]:
    """Replace *old_token* with *new_token* in every file and directory name.

    A directory's children are fully processed under its original path
    before the directory itself is renamed, so no in-flight child path goes
    stale.  Only base names change; *root* itself is never renamed.

    Returns:
        ``(old_path, new_path)`` pairs in the order the renames happened.

    Raises:
        FileExistsError: A rename target is already taken.
    """
    renamed: list[tuple[Path, Path]] = []
    if not old_token or old_token == new_token:
        return renamed

    def _visit(directory: Path) -> None:
        for entry in _scan(directory):
            path = Path(entry.path)
            if entry.is_dir(follow_symlinks=False):
                if entry.name in excluded:
                    continue
                _visit(path)
            if old_token in entry.name:
                renamed.append((path, _rename_entry(path, old_token, new_token)))

    _visit(Path(root))
    return renamed


def remove_stale_paths(root: str | Path, names: Iterable[str]) -> list[Path]:
    """Delete ``root / name`` for each of *names* that still exists.

    Must run after :func:`rename_tree`; the paths are leftovers that the
    rename did not absorb.
    """
    removed: list[Path] = []
    for name in names:
        path = Path(root) / name
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
        else:
            continue
        removed.append(path)
    return removed
