"""Project scaffolding: starter files, git setup and editor extensions."""

from devsetup.scaffold.extensions import DEFAULT_EXTENSIONS, ExtensionInstaller
from devsetup.scaffold.git import GitSetup
from devsetup.scaffold.starter_files import (
    DEFAULT_STARTER_FILES,
    StarterFile,
    StarterFileBootstrapper,
    write_if_absent,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "ExtensionInstaller",
    "GitSetup",
    "DEFAULT_STARTER_FILES",
    "StarterFile",
    "StarterFileBootstrapper",
    "write_if_absent",
]
