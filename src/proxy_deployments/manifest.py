"""Package manifest and network file accessors for proxy-deployments library."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog

from .constants import NETWORK_FILENAME_TEMPLATE
from .exceptions import ManifestError, ManifestNotFoundError
from .naming import from_contract_full_name
from .paths import (
    get_dependency_root,
    get_manifest_path,
    get_network_file_path,
    get_project_root,
)
from .types import ProxyQuery, ProxyRecord

log = structlog.get_logger()


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Expected a JSON object in {path}")
    return data


class PackageManifest:
    """The persisted description of a project's contracts and linked dependencies."""

    def __init__(self, data: Dict[str, Any], root: Path):
        """
        Wrap already-loaded manifest data.

        Args:
            data: Parsed manifest JSON
            root: Directory the manifest belongs to

        Raises:
            ManifestError: If the manifest has no package name
        """
        if not isinstance(data.get("name"), str) or not data["name"]:
            raise ManifestError(f"Manifest in {root} is missing a package name")

        self._data = data
        self.root = root

    @classmethod
    def load(cls, project_root: Optional[Union[Path, str]] = None) -> "PackageManifest":
        """
        Load the manifest of the project at project_root.

        Args:
            project_root: Project directory (see paths.get_project_root)

        Returns:
            PackageManifest

        Raises:
            ManifestNotFoundError: If the manifest file does not exist
            ManifestError: If the manifest is malformed
        """
        root = get_project_root(project_root)
        manifest_path = get_manifest_path(root)
        if not manifest_path.exists():
            raise ManifestNotFoundError(f"Package manifest not found at {manifest_path}")

        return cls(_read_json(manifest_path), root)

    @property
    def name(self) -> str:
        return self._data["name"]

    @property
    def contracts(self) -> Dict[str, str]:
        """Mapping of contract alias to contract name."""
        return dict(self._data.get("contracts", {}))

    @property
    def contract_aliases(self) -> List[str]:
        return list(self.contracts.keys())

    @property
    def contract_names_and_aliases(self) -> List[Dict[str, str]]:
        """List of {"name": contract_name, "alias": alias} entries, in manifest order."""
        return [
            {"name": contract_name, "alias": alias}
            for alias, contract_name in self.contracts.items()
        ]

    def contract_name(self, alias: str) -> Optional[str]:
        """Contract name registered under alias, or None."""
        return self.contracts.get(alias)

    def has_contract(self, alias: str) -> bool:
        return alias in self.contracts

    @property
    def dependencies(self) -> Dict[str, str]:
        """Mapping of linked dependency name to version range."""
        return dict(self._data.get("dependencies", {}))

    @property
    def dependency_names(self) -> List[str]:
        return list(self.dependencies.keys())

    def has_dependency(self, name: str) -> bool:
        return name in self.dependencies

    def dependency_manifest(self, name: str) -> "PackageManifest":
        """
        Load the manifest of an installed dependency.

        Args:
            name: Dependency package name

        Returns:
            PackageManifest rooted at the dependency's install directory

        Raises:
            ManifestNotFoundError: If the dependency is not installed
        """
        return PackageManifest.load(get_dependency_root(self.root, name))

    def network_file(self, network: str) -> "NetworkFile":
        return NetworkFile.load(self.root, network, self.name)

    def network_names(self) -> List[str]:
        """Names of networks with a network file in the project, sorted."""
        prefix, suffix = NETWORK_FILENAME_TEMPLATE.split("{network}")
        names = []
        for path in self.root.glob(f"{prefix}*{suffix}"):
            network = path.name[len(prefix) : len(path.name) - len(suffix)]
            if network:
                names.append(network)
        return sorted(names)


class NetworkFile:
    """Per-network persisted state: the proxies deployed on that network."""

    def __init__(self, network: str, data: Dict[str, Any], local_package: str):
        self.network = network
        self.local_package = local_package
        self._records = self._parse_proxies(data.get("proxies", {}))

    @classmethod
    def load(cls, project_root: Path, network: str, local_package: str) -> "NetworkFile":
        """
        Load the network file for network.

        A missing file means nothing has been deployed there yet and yields
        a network file without proxies.

        Raises:
            ManifestError: If the network file is malformed
        """
        path = get_network_file_path(project_root, network)
        if not path.exists():
            log.debug("network_file.missing", network=network, path=str(path))
            return cls(network, {}, local_package)

        return cls(network, _read_json(path), local_package)

    def _parse_proxies(self, proxies: Dict[str, Any]) -> List[ProxyRecord]:
        records = []
        for full_name, entries in proxies.items():
            package, contract = from_contract_full_name(full_name, self.local_package)
            for entry in entries:
                if "address" not in entry:
                    raise ManifestError(
                        f"Proxy of '{full_name}' on network '{self.network}' has no address"
                    )
                records.append(
                    ProxyRecord(
                        package=package,
                        contract=contract,
                        address=entry["address"],
                        implementation=entry.get("implementation"),
                        version=entry.get("version"),
                    )
                )
        return records

    @property
    def proxies(self) -> List[ProxyRecord]:
        """All proxy records, in file order."""
        return list(self._records)

    def get_proxies(self, query: Optional[ProxyQuery] = None) -> List[ProxyRecord]:
        """
        Get proxy records matching a query.

        Args:
            query: Partial filter (None or an empty query matches everything)

        Returns:
            Matching records, in file order
        """
        if query is None:
            return self.proxies
        return [record for record in self._records if query.matches(record)]

    def has_proxies(self, query: Optional[ProxyQuery] = None) -> bool:
        return bool(self.get_proxies(query))
