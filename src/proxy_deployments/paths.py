"""Path management utilities for proxy-deployments library."""

import os
from pathlib import Path
from typing import Optional, Union

from .constants import (
    BUILD_CONTRACTS_DIR,
    DEPENDENCIES_DIR,
    MANIFEST_FILENAME,
    NETWORK_FILENAME_TEMPLATE,
    PROJECT_ROOT_ENV,
)


def get_project_root(project_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get the project root directory.

    Args:
        project_root: Explicit root (defaults to $PROXY_DEPLOYMENTS_ROOT,
                      then the current directory)

    Returns:
        Absolute path to the project root
    """
    if project_root is None:
        project_root = os.environ.get(PROJECT_ROOT_ENV) or Path.cwd()
    return Path(project_root).absolute()


def get_manifest_path(project_root: Path) -> Path:
    """Path to the package manifest of the project at project_root."""
    return project_root / MANIFEST_FILENAME


def get_network_file_path(project_root: Path, network: str) -> Path:
    """Path to the network file for network."""
    return project_root / NETWORK_FILENAME_TEMPLATE.format(network=network)


def get_build_dir(project_root: Path) -> Path:
    """Directory holding compiled contract artifacts."""
    return project_root.joinpath(*BUILD_CONTRACTS_DIR)


def get_dependency_root(project_root: Path, dependency_name: str) -> Path:
    """
    Root directory of an installed dependency package.

    Scoped names (e.g., "@org/pkg") map to nested directories.
    """
    return project_root / DEPENDENCIES_DIR / Path(*dependency_name.split("/"))
