"""Contract and method catalogs for proxy-deployments library."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import questionary
import structlog

from .artifacts import get_contract_names, load_artifact, methods_from_artifact
from .constants import (
    LOCAL_CONTRACTS_LABEL,
    SOURCE_ALL,
    SOURCE_FROM_BUILD_DIR,
    SOURCE_FROM_LOCAL,
)
from .exceptions import ManifestNotFoundError
from .manifest import PackageManifest
from .naming import from_contract_full_name
from .paths import get_project_root
from .prompt import choice_question
from .types import ContractMethod, QuestionSpec

log = structlog.get_logger()


def section_separator(label: str) -> questionary.Separator:
    """Separator heading one section of a choice list."""
    return questionary.Separator(f" = {label} = ")


def contract_choices(
    source: Optional[str] = None, project_root: Optional[Union[Path, str]] = None
) -> List[Any]:
    """
    Build the list of selectable contracts.

    Args:
        source: Where contracts come from:
                - None or "fromBuildDir": compiled build artifacts
                - "fromLocal": contracts declared in the local manifest
                - "all": build artifacts plus every linked dependency's contracts
        project_root: Project directory (see paths.get_project_root)

    Returns:
        Choices and section separators; empty for an unknown source
    """
    root = get_project_root(project_root)

    if source is None or source == SOURCE_FROM_BUILD_DIR:
        return list(get_contract_names(root))

    if source == SOURCE_FROM_LOCAL:
        manifest = PackageManifest.load(root)
        return [
            questionary.Choice(title=_local_contract_label(entry), value=entry["alias"])
            for entry in manifest.contract_names_and_aliases
        ]

    if source == SOURCE_ALL:
        manifest = PackageManifest.load(root)
        choices: List[Any] = []

        local_contracts = get_contract_names(root)
        if local_contracts:
            choices.append(section_separator(LOCAL_CONTRACTS_LABEL))
            choices.extend(local_contracts)

        # Only direct dependencies are listed, not their own dependencies
        for dependency_name in manifest.dependency_names:
            dependency_contracts = [
                f"{dependency_name}/{alias}"
                for alias in _dependency_aliases(manifest, dependency_name)
            ]
            if dependency_contracts:
                choices.append(section_separator(dependency_name))
                choices.extend(dependency_contracts)

        return choices

    log.debug("catalog.unknown_source", source=source)
    return []


def contracts_list(
    name: str,
    message: str,
    type: str,
    source: Optional[str] = None,
    project_root: Optional[Union[Path, str]] = None,
) -> Dict[str, QuestionSpec]:
    """
    Build a question whose choices are the contracts from source.

    Returns:
        {name: QuestionSpec}, or {} for an unknown source
    """
    if source not in (None, SOURCE_FROM_BUILD_DIR, SOURCE_FROM_LOCAL, SOURCE_ALL):
        log.debug("catalog.unknown_source", source=source)
        return {}

    return choice_question(name, message, type, contract_choices(source, project_root))


def _local_contract_label(entry: Dict[str, str]) -> str:
    if entry["name"] == entry["alias"]:
        return entry["alias"]
    return f"{entry['alias']}[{entry['name']}]"


def _dependency_aliases(manifest: PackageManifest, dependency_name: str) -> List[str]:
    try:
        return manifest.dependency_manifest(dependency_name).contract_aliases
    except ManifestNotFoundError:
        log.warning("catalog.dependency_not_installed", dependency=dependency_name)
        return []


def contract_methods(
    contract_full_name: str, project_root: Optional[Union[Path, str]] = None
) -> List[ContractMethod]:
    """
    Introspect the methods of a local or dependency contract.

    Args:
        contract_full_name: "alias" for local contracts, "package/alias" otherwise
        project_root: Project directory

    Returns:
        The contract's methods; empty if the contract is unknown or not built
    """
    manifest = PackageManifest.load(project_root)
    package_name, alias = from_contract_full_name(contract_full_name, manifest.name)

    if package_name == manifest.name:
        owner = manifest
    elif manifest.has_dependency(package_name):
        try:
            owner = manifest.dependency_manifest(package_name)
        except ManifestNotFoundError:
            log.debug("catalog.dependency_not_installed", dependency=package_name)
            return []
    else:
        log.debug("catalog.unknown_package", package=package_name)
        return []

    contract_name = owner.contract_name(alias)
    if contract_name is None:
        log.debug("catalog.unknown_contract", package=package_name, contract=alias)
        return []

    artifact = load_artifact(owner.root, contract_name)
    if artifact is None:
        return []
    return methods_from_artifact(artifact)


def find_method(
    methods: List[ContractMethod], method_identifier: str
) -> Optional[ContractMethod]:
    """Find a method by selector, falling back to the first one with that name."""
    for method in methods:
        if method.selector == method_identifier:
            return method
    for method in methods:
        if method.name == method_identifier:
            return method
    return None


def method_label(method: ContractMethod) -> str:
    """Display label, e.g. "[Initializable] initialize(amount: uint256)"."""
    initializable = "[Initializable] " if method.has_initializer else ""
    args = ", ".join(f"{i.name}: {i.type}" for i in method.inputs)
    return f"{initializable}{method.name}({args})"


def methods_list(
    contract_full_name: str, project_root: Optional[Union[Path, str]] = None
) -> List[questionary.Choice]:
    """
    List the methods of a contract as choices.

    Each choice's value is {"name": ..., "selector": ...}.
    """
    return [
        questionary.Choice(
            title=method_label(method),
            value={"name": method.name, "selector": method.selector},
        )
        for method in contract_methods(contract_full_name, project_root)
    ]


def args_list(
    contract_full_name: str,
    method_identifier: str,
    project_root: Optional[Union[Path, str]] = None,
) -> List[str]:
    """
    Get the input parameter names of a method.

    Args:
        contract_full_name: Contract full name
        method_identifier: Method selector or name

    Returns:
        Input names, or [] if no method matches
    """
    method = find_method(contract_methods(contract_full_name, project_root), method_identifier)
    if method is None:
        return []
    return [i.name for i in method.inputs]


def init_args_for_prompt(
    contract_full_name: str,
    method_identifier: str,
    project_root: Optional[Union[Path, str]] = None,
) -> Dict[str, Any]:
    """Map each input of a method to None, ready to be passed as prompt args."""
    return {
        arg_name: None
        for arg_name in args_list(contract_full_name, method_identifier, project_root)
    }
