"""Interactive parameter collection for project bootstrap.

Questions are asked with Rich prompts.  Each answer is validated through
:class:`~tmi_cli.config.ProjectParams`; an invalid answer prints the reason
and asks again.  The result handed to the bootstrapper is always a complete,
validated record.
"""

from __future__ import annotations

from typing import Callable

from pydantic import ValidationError
from rich.prompt import Confirm, Prompt

from tmi_cli.config import FeatureFlags, ProjectParams, default_bundle_id
from tmi_cli.errors import UsageError
from tmi_cli.utils import console, print_error

_FLAG_QUESTIONS: dict[str, str] = {
    "auth": "Include authentication flow?",
    "i18n": "Enable internationalization (i18n)?",
    "dark_mode": "Support dark mode?",
    "analytics": "Enable analytics tracking?",
    "push_notifications": "Enable push notifications?",
}


def _first_error(exc: ValidationError, field: str) -> str | None:
    for error in exc.errors():
        if error["loc"] and error["loc"][0] == field:
            return error["msg"]
    return None


def validate_project_name(value: str) -> str | None:
    """Return an error message for *value*, or ``None`` when it is valid."""
    if not value:
        return "Project name is required!"
    try:
        ProjectParams(name=value, bundle_id="com.placeholder")
    except ValidationError as exc:
        message = _first_error(exc, "name")
        if message:
            return (
                "Project name must start with a letter, contain only letters, "
                f"digits, '-' or '_' and be 2-50 characters long ({message})"
            )
    return None


def validate_bundle_id(value: str) -> str | None:
    """Return an error message for *value*, or ``None`` when it is valid."""
    try:
        ProjectParams(name="placeholder", bundle_id=value)
    except ValidationError as exc:
        message = _first_error(exc, "bundle_id")
        if message:
            return (
                "Bundle identifier must be reverse-DNS style, e.g. com.company.app "
                f"({message})"
            )
    return None


def ask_validated(
    question: str,
    validator: Callable[[str], str | None],
    default: str | None = None,
) -> str:
    """Ask *question* until *validator* accepts the answer."""
    while True:
        if default is None:
            answer = Prompt.ask(f"[yellow]{question}[/yellow]", console=console)
        else:
            answer = Prompt.ask(f"[yellow]{question}[/yellow]", default=default, console=console)
        answer = (answer or "").strip()
        error = validator(answer)
        if error is None:
            return answer
        print_error(error)


def collect_project_params(
    name: str | None = None,
    bundle_id: str | None = None,
    display_name: str | None = None,
    *,
    assume_yes: bool = False,
    install_dependencies: bool = True,
    init_git: bool = True,
) -> ProjectParams:
    """Gather every project parameter, prompting for what was not supplied.

    Args:
        name: Project name from the command line, if any.
        bundle_id: Bundle identifier from the command line, if any.
        display_name: Display name from the command line, if any.
        assume_yes: Accept the default for every question that has one.
        install_dependencies: Whether the bootstrapper runs the package manager.
        init_git: Whether the bootstrapper initialises a git repository.

    Raises:
        UsageError: A value given on the command line is invalid, or no name
            was supplied together with ``assume_yes``.
    """
    if name:
        error = validate_project_name(name)
        if error:
            raise UsageError(error)
    elif assume_yes:
        raise UsageError("Project name is required!")
    else:
        name = ask_validated("Enter project name (e.g., MyAwesomeApp)", validate_project_name)

    default_bundle = default_bundle_id(name)
    if bundle_id:
        error = validate_bundle_id(bundle_id)
        if error:
            raise UsageError(error)
    elif assume_yes:
        bundle_id = default_bundle
    else:
        bundle_id = ask_validated(
            "Enter bundle identifier", validate_bundle_id, default=default_bundle
        )

    if not display_name:
        if assume_yes:
            display_name = name
        else:
            display_name = Prompt.ask(
                "[yellow]Enter display name[/yellow]", default=name, console=console
            )

    defaults = FeatureFlags()
    if assume_yes:
        flags = defaults
    else:
        console.print("\n[cyan]Feature flags[/cyan]")
        flags = FeatureFlags(
            **{
                key: Confirm.ask(
                    f"  {question}", default=getattr(defaults, key), console=console
                )
                for key, question in _FLAG_QUESTIONS.items()
            }
        )

    return ProjectParams(
        name=name,
        bundle_id=bundle_id,
        display_name=display_name,
        flags=flags,
        install_dependencies=install_dependencies,
        init_git=init_git,
    )
