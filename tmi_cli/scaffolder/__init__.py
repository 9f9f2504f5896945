"""tmi-cli scaffolder -- feature modules and whole projects.

Quick usage::

    from tmi_cli.scaffolder import FeatureGenerator, ProjectBootstrapper

    result = await FeatureGenerator("src/features").generate("user-profile")

    bootstrapper = ProjectBootstrapper(Config())
    await bootstrapper.bootstrap(ProjectParams(name="Acme"), Path.cwd())
"""

from tmi_cli.scaffolder.feature_gen import FeatureGenerator, FeatureResult
from tmi_cli.scaffolder.project_gen import BootstrapResult, ProjectBootstrapper
from tmi_cli.scaffolder.templates import TemplateRenderer

__all__ = [
    "BootstrapResult",
    "FeatureGenerator",
    "FeatureResult",
    "ProjectBootstrapper",
    "TemplateRenderer",
]
