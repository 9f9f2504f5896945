"""Jinja2 template rendering for the template catalog.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``tmi_cli/scaffolder/templates/`` directory and renders them with a context
built from one :class:`~tmi_cli.engine.naming.CaseForms` instance.  Every
identifier shared between generated files therefore comes from the same
record, which keeps the files consistent with each other.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from tmi_cli.engine.naming import CaseForms, derive_case_forms


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates from the catalog.

    Undefined variables raise instead of rendering as empty strings, so a
    template referencing a name the generator did not supply fails loudly.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["camel_case"] = _camel_case_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"feature/domain/entities/Entity.ts.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Existing files are overwritten.  Parent directories are created
        automatically.  Returns the output path.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    async def render_if_absent(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> bool:
        """Render to *output_path* only when nothing exists there yet.

        Returns:
            ``True`` if the file was written, ``False`` if it was skipped.
        """
        out = Path(output_path)
        if out.exists():
            return False
        content = self.render(template_path, context)
        await asyncio.to_thread(_write_file, out, content)
        return True


def case_form_context(forms: CaseForms) -> dict[str, str]:
    """Return the template variables shared by every catalog entry."""
    return {
        "kebab": forms.kebab,
        "pascal": forms.pascal,
        "camel": forms.camel,
        "snake": forms.snake,
    }


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _camel_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    return derive_case_forms(str(value)).camel


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
