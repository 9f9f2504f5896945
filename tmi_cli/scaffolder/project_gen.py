"""Project bootstrap orchestrator.

Clones the React Native template repository and turns it into a new,
independently named project:

1. Clone the template (shallow) into ``<parent>/<kebab-name>``.
2. Remove internal tooling (``.git``, ``cli``).
3. Rewrite file contents with the ordered substitution rules.
4. Rewrite ``package.json`` and replace ``app.json``.
5. Rename ``TMI`` in file/directory names under ``ios/`` and ``android/``.
6. Delete stale ``ios/TMI*`` leftovers.
7. Move the Android source package to the new bundle identifier.
8. Create ``.env`` from ``.env.example``.
9. Render ``featureFlags.ts``.
10. Install dependencies and create the initial git commit.

Once the target directory exists, any failure deletes it again before the
error propagates as :class:`~tmi_cli.errors.ScaffoldError`.
"""

from __future__ import annotations

import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable

from tmi_cli.config import Config, ProjectParams
from tmi_cli.engine.naming import CaseForms, derive_case_forms
from tmi_cli.engine.substitution import RuleSet, build_project_rules, find_rule_conflicts
from tmi_cli.engine.tree import remove_stale_paths, rename_tree, walk_and_substitute
from tmi_cli.errors import ScaffoldError, TargetExistsError, UsageError
from tmi_cli.utils import (
    format_duration,
    print_step,
    print_warning,
    run_checked,
)

from . import manifests
from .templates import TemplateRenderer, case_form_context

# Removed right after cloning; never part of a generated project.
INTERNAL_TOOLING_PATHS: tuple[str, ...] = (".git", "cli")

# Subtrees whose file and directory names carry the legacy app name.
PLATFORM_DIRS: tuple[str, ...] = ("ios", "android")

# ``ios/<legacy><suffix>`` paths left behind by the template's singletons.
STALE_IOS_SUFFIXES: tuple[str, ...] = ("", ".xcodeproj", ".xcworkspace")


@dataclass
class BootstrapResult:
    """Summary of one successful bootstrap run."""

    params: ProjectParams
    forms: CaseForms
    target: Path
    rules: RuleSet = ()
    changed_files: list[Path] = field(default_factory=list)
    renamed: list[tuple[Path, Path]] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    duration: float = 0.0

    def summary(self) -> dict[str, str]:
        return {
            "Project": self.forms.pascal,
            "Display name": self.params.display_name,
            "Bundle id": self.params.bundle_id,
            "Location": str(self.target),
            "Files rewritten": str(len(self.changed_files)),
            "Paths renamed": str(len(self.renamed)),
            "Duration": format_duration(self.duration),
        }


class ProjectBootstrapper:
    """Project-bootstrap orchestrator.

    Attributes:
        config: Template repository, legacy tokens and command settings.
        renderer: Renderer used for the feature-flags module.
    """

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def target_for(self, params: ProjectParams, parent_dir: str | Path) -> Path:
        return Path(parent_dir).resolve() / derive_case_forms(params.name).kebab

    async def bootstrap(self, params: ProjectParams, parent_dir: str | Path) -> BootstrapResult:
        """Create the project described by *params* inside *parent_dir*.

        Raises:
            UsageError: A replacement would be rewritten again by a later
                rule (e.g. a bundle id containing the legacy app name).
            TargetExistsError: The target directory already exists; nothing
                was created.
            ScaffoldError: A step failed; the target directory was removed.
        """
        forms = derive_case_forms(params.name)
        rules = build_project_rules(forms, params, self.config.legacy)
        conflicts = find_rule_conflicts(rules)
        if conflicts:
            earlier, later = conflicts[0]
            raise UsageError(
                f"'{earlier.replacement}' contains '{later.pattern}' and would be "
                f"rewritten again to use '{later.replacement}'"
            )

        target = self.target_for(params, parent_dir)
        if target.exists():
            raise TargetExistsError(forms.kebab)

        result = BootstrapResult(params=params, forms=forms, target=target, rules=rules)
        started = time.monotonic()

        steps: list[tuple[str, Callable[[BootstrapResult], Awaitable[None]]]] = [
            ("Cloning template from repository...", self._clone),
            ("Cleaning up...", self._strip_internal_tooling),
            ("Updating project configuration...", self._substitute_contents),
            ("Rewriting manifests...", self._rewrite_manifests),
            ("Renaming project files...", self._rename_platform_files),
            ("Moving Android package...", self._move_android_package),
            ("Preparing environment file...", self._materialize_env),
            ("Writing feature flags...", self._write_feature_flags),
        ]
        if params.install_dependencies:
            steps.append(
                ("Installing dependencies (this may take a while)...", self._install_dependencies)
            )
        if params.init_git:
            steps.append(("Initializing git repository...", self._init_git))

        for label, step in steps:
            print_step(label)
            try:
                await step(result)
            except Exception as exc:
                self._rollback(target)
                raise ScaffoldError(label.rstrip(".").rstrip(), str(exc)) from exc

        result.duration = time.monotonic() - started
        return result

    # -- Steps -------------------------------------------------------------

    async def _clone(self, result: BootstrapResult) -> None:
        await run_checked(
            ["git", "clone", "--depth", "1", self.config.template_repo, str(result.target)],
            timeout=self.config.command_timeout,
        )

    async def _strip_internal_tooling(self, result: BootstrapResult) -> None:
        result.removed.extend(remove_stale_paths(result.target, INTERNAL_TOOLING_PATHS))

    async def _substitute_contents(self, result: BootstrapResult) -> None:
        result.changed_files.extend(walk_and_substitute(result.target, result.rules))

    async def _rewrite_manifests(self, result: BootstrapResult) -> None:
        manifests.rewrite_package_json(result.target, result.forms.kebab)
        manifests.write_app_json(result.target, result.forms.pascal, result.params.display_name)

    async def _rename_platform_files(self, result: BootstrapResult) -> None:
        legacy_name = self.config.legacy.name
        for platform in PLATFORM_DIRS:
            platform_dir = result.target / platform
            if platform_dir.is_dir():
                result.renamed.extend(
                    rename_tree(platform_dir, legacy_name, result.forms.pascal)
                )

        # Leftovers are only stale once the rename pass has finished; when
        # the new name equals the legacy one they are the live project.
        ios_dir = result.target / "ios"
        if ios_dir.is_dir() and result.forms.pascal != legacy_name:
            stale = [f"{legacy_name}{suffix}" for suffix in STALE_IOS_SUFFIXES]
            result.removed.extend(remove_stale_paths(ios_dir, stale))

    async def _move_android_package(self, result: BootstrapResult) -> None:
        moved = manifests.move_android_package(
            result.target, self.config.legacy.bundle_id, result.params.bundle_id
        )
        result.renamed.extend(moved)

    async def _materialize_env(self, result: BootstrapResult) -> None:
        manifests.materialize_env_file(result.target)

    async def _write_feature_flags(self, result: BootstrapResult) -> None:
        context: dict[str, Any] = {
            **case_form_context(result.forms),
            "display_name": result.params.display_name,
            "flags": result.params.flags.model_dump(),
        }
        await self.renderer.render_to_file(
            "project/featureFlags.ts.j2",
            result.target / self.config.feature_flags_path,
            context,
        )

    async def _install_dependencies(self, result: BootstrapResult) -> None:
        await run_checked(
            [self.config.package_manager, *self.config.install_args],
            cwd=result.target,
            timeout=self.config.command_timeout,
            capture=False,
        )

    async def _init_git(self, result: BootstrapResult) -> None:
        for cmd in (
            ["git", "init"],
            ["git", "add", "-A"],
            ["git", "commit", "-m", self.config.initial_commit_message],
        ):
            await run_checked(cmd, cwd=result.target, timeout=self.config.command_timeout)

    # -- Failure handling --------------------------------------------------

    @staticmethod
    def _rollback(target: Path) -> None:
        if target.exists():
            print_warning(f"  Removing partially created project at {target}")
            shutil.rmtree(target)
