"""Feature-module scaffolding.

Generates one clean-architecture feature (domain, data and ui layers plus a
module descriptor) inside an existing React Native codebase.  Every file is
written skip-if-exists, so re-running the generator only fills in what is
missing and never touches hand-edited code.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tmi_cli.config import FeatureOptions
from tmi_cli.engine.naming import CaseForms, derive_case_forms
from tmi_cli.errors import UsageError
from tmi_cli.utils import console, display_path, print_created, print_skipped

from .templates import TemplateRenderer, case_form_context


@dataclass
class FeatureResult:
    """Outcome of one feature generation run."""

    name: str
    root: Path
    forms: CaseForms
    created: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


class FeatureGenerator:
    """Feature-module orchestrator.

    Given a feature name and :class:`FeatureOptions`, emits:
    - ``domain/`` entities, repository interface and usecase index
    - ``data/`` data source, repository implementation, optional Redux slice
    - ``ui/`` screen, components and hooks indices
    - ``module.ts`` descriptor and the feature ``index.ts``
    """

    # Template -> output path; ``{pascal}``/``{camel}`` are filled per feature.
    _DOMAIN_FILES: tuple[tuple[str, str], ...] = (
        ("feature/domain/entities/Entity.ts.j2", "domain/entities/{pascal}.ts"),
        ("feature/domain/entities/index.ts.j2", "domain/entities/index.ts"),
        ("feature/domain/repositories/IRepository.ts.j2", "domain/repositories/I{pascal}Repository.ts"),
        ("feature/domain/repositories/index.ts.j2", "domain/repositories/index.ts"),
        ("feature/domain/usecases/index.ts.j2", "domain/usecases/index.ts"),
        ("feature/domain/index.ts.j2", "domain/index.ts"),
    )

    _DATA_FILES: tuple[tuple[str, str], ...] = (
        ("feature/data/datasources/DataSource.ts.j2", "data/datasources/{pascal}DataSource.ts"),
        ("feature/data/datasources/index.ts.j2", "data/datasources/index.ts"),
        ("feature/data/repositories/RepositoryImpl.ts.j2", "data/repositories/{pascal}RepositoryImpl.ts"),
        ("feature/data/repositories/index.ts.j2", "data/repositories/index.ts"),
    )

    _SLICE_FILE: tuple[str, str] = ("feature/data/slice.ts.j2", "data/{camel}Slice.ts")
    _DATA_INDEX: tuple[str, str] = ("feature/data/index.ts.j2", "data/index.ts")

    _UI_FILES: tuple[tuple[str, str], ...] = (
        ("feature/ui/screens/Screen.tsx.j2", "ui/screens/{pascal}Screen.tsx"),
        ("feature/ui/screens/index.ts.j2", "ui/screens/index.ts"),
        ("feature/ui/components/index.ts.j2", "ui/components/index.ts"),
        ("feature/ui/hooks/index.ts.j2", "ui/hooks/index.ts"),
        ("feature/ui/index.ts.j2", "ui/index.ts"),
    )

    _MODULE_FILES: tuple[tuple[str, str], ...] = (
        ("feature/module.ts.j2", "module.ts"),
        ("feature/index.ts.j2", "index.ts"),
    )

    def __init__(
        self,
        features_dir: str | Path,
        options: FeatureOptions | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.features_dir = Path(features_dir)
        self.options = options or FeatureOptions()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, name: str) -> FeatureResult:
        """Generate the feature *name* under ``features_dir``.

        Args:
            name: Feature name as typed by the user; it is used verbatim as
                the directory name and case-converted for identifiers.

        Returns:
            A :class:`FeatureResult` listing created and skipped files.

        Raises:
            UsageError: *name* is missing or contains no letters or digits.
        """
        if not name or not name.strip():
            raise UsageError("Feature name is required")
        forms = derive_case_forms(name)
        if forms.is_empty():
            raise UsageError(f"Feature name {name!r} contains no letters or digits")

        feature_root = self.features_dir / name
        result = FeatureResult(name=name, root=feature_root, forms=forms)
        context = self._build_context(forms)

        await asyncio.to_thread(feature_root.mkdir, parents=True, exist_ok=True)

        for template_name, output_pattern in self._plan():
            output = feature_root / output_pattern.format(
                pascal=forms.pascal, camel=forms.camel
            )
            if await self.renderer.render_if_absent(template_name, output, context):
                result.created.append(output)
                print_created(display_path(output))
            else:
                result.skipped.append(output)
                print_skipped(display_path(output))

        return result

    # -- Planning ----------------------------------------------------------

    @property
    def with_slice(self) -> bool:
        return self.options.include_state_container and not self.options.ui_only

    def _plan(self) -> list[tuple[str, str]]:
        """Return the ordered ``(template, output)`` list for the options."""
        plan: list[tuple[str, str]] = []
        if not self.options.ui_only:
            plan.extend(self._DOMAIN_FILES)
            plan.extend(self._DATA_FILES)
            if self.with_slice:
                plan.append(self._SLICE_FILE)
            plan.append(self._DATA_INDEX)
        plan.extend(self._UI_FILES)
        plan.extend(self._MODULE_FILES)
        return plan

    def _build_context(self, forms: CaseForms) -> dict[str, Any]:
        """Build the Jinja2 template context for one feature."""
        return {
            **case_form_context(forms),
            "ui_only": self.options.ui_only,
            "include_state_container": self.with_slice,
            "with_slice": self.with_slice,
        }


def print_feature_summary(result: FeatureResult, ui_only: bool) -> None:
    """Print the structure overview and the registry next steps."""
    forms = result.forms
    console.print(
        f'\n[bold green]Feature "{result.name}" created with Clean Architecture![/bold green]'
        f" [dim]({len(result.created)} created, {len(result.skipped)} skipped)[/dim]"
    )
    console.print("\n[bold]Structure:[/bold]")
    console.print(f"  {display_path(result.root)}/")
    if not ui_only:
        console.print("  ├── domain/          # Business logic (entities, repositories)")
        console.print("  ├── data/            # Implementation (datasources, slices)")
    console.print("  ├── ui/              # Presentation (screens, components)")
    console.print("  ├── module.ts        # Module descriptor")
    console.print("  └── index.ts")

    console.print("\n[bold]Next steps:[/bold]")
    step = 1
    if not ui_only:
        console.print(f"{step}. Define your entities in domain/entities/{forms.pascal}.ts")
        console.print(f"{step + 1}. Implement datasource API calls in data/datasources/")
        step += 2
    console.print(f"{step}. Add module to src/app/modules/registry.ts:")
    console.print(f"   import {{{forms.camel}Module}} from '@features/{result.name}';")
    console.print(f"   const appModules = [..., {forms.camel}Module];")
    console.print(f"{step + 1}. Add route types to src/core/navigation/types.ts if needed")
