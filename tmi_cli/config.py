"""tmi-cli configuration.

Typed configuration and parameter records.  All settings use Pydantic v2
models so they are validated at construction time; interactive prompts rely
on that validation to decide when to re-ask a question.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tmi_cli.engine.naming import derive_case_forms

PROJECT_NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9_-]*$"
BUNDLE_ID_PATTERN = r"^[a-zA-Z][a-zA-Z0-9_]*(\.[a-zA-Z][a-zA-Z0-9_]*)+$"


class LegacyTokens(BaseModel):
    """Identifiers baked into the template repository that get replaced."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="TMI", description="PascalCase app name in the template")
    slug: str = Field(default="tmi-rn-base", description="npm package name of the template")
    bundle_id: str = Field(default="com.tmi.app", description="iOS/Android bundle identifier")


class Config(BaseModel):
    """Global tmi-cli configuration.

    Instances are created once by the CLI entry point and passed to the
    generators; nothing mutates them afterwards.
    """

    template_repo: str = Field(default="https://github.com/DEV-TMI/tmi-rn-base.git")
    legacy: LegacyTokens = Field(default_factory=LegacyTokens)
    package_manager: str = Field(default="yarn")
    install_args: list[str] = Field(default=["install"])
    initial_commit_message: str = Field(default="chore: initial commit from tmi-rn-base")
    features_dir: Path = Field(default=Path("src/features"))
    feature_flags_path: Path = Field(default=Path("src/config/featureFlags.ts"))
    command_timeout: int = Field(default=900, ge=10, description="Per-command timeout in seconds")

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            TMI_TEMPLATE_REPO, TMI_PACKAGE_MANAGER, TMI_FEATURES_DIR,
            TMI_COMMAND_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("TMI_TEMPLATE_REPO"):
            kwargs["template_repo"] = os.environ["TMI_TEMPLATE_REPO"]
        if os.environ.get("TMI_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["TMI_PACKAGE_MANAGER"]
        if os.environ.get("TMI_FEATURES_DIR"):
            kwargs["features_dir"] = Path(os.environ["TMI_FEATURES_DIR"])
        if os.environ.get("TMI_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["TMI_COMMAND_TIMEOUT"])
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Parameter records
# ---------------------------------------------------------------------------


class FeatureFlags(BaseModel):
    """Capabilities toggled in the generated ``featureFlags.ts`` module."""

    auth: bool = Field(default=True, description="Authentication screens and session handling")
    i18n: bool = Field(default=True, description="Translations via i18next")
    dark_mode: bool = Field(default=True, description="Dark theme support")
    analytics: bool = Field(default=False, description="Analytics event tracking")
    push_notifications: bool = Field(default=False, description="Push notification setup")


class ProjectParams(BaseModel):
    """Fully validated parameters for one project-bootstrap run."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=2, max_length=50, pattern=PROJECT_NAME_PATTERN)
    bundle_id: str = Field(default="", pattern=BUNDLE_ID_PATTERN)
    display_name: str = Field(default="")
    flags: FeatureFlags = Field(default_factory=FeatureFlags)
    install_dependencies: bool = True
    init_git: bool = True

    @field_validator("display_name")
    @classmethod
    def _strip_display_name(cls, value: str) -> str:
        return value.strip()

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        name = str(data.get("name") or "")
        data = dict(data)
        if not str(data.get("display_name") or "").strip():
            data["display_name"] = name
        if not data.get("bundle_id") and name:
            data["bundle_id"] = default_bundle_id(name)
        return data


class FeatureOptions(BaseModel):
    """Flags selecting which blocks the feature generator emits."""

    model_config = ConfigDict(frozen=True)

    ui_only: bool = False
    include_state_container: bool = True


def default_bundle_id(name: str) -> str:
    """Return ``com.<kebab name without dashes>`` for *name*."""
    return f"com.{derive_case_forms(name).compact}"
