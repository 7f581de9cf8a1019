"""Contract full-name formatting and parsing for proxy-deployments library."""

from typing import Optional

from .types import ContractFullName


def to_contract_full_name(
    package_name: Optional[str], contract_alias: str, local_package: Optional[str] = None
) -> str:
    """
    Format a contract full name.

    Args:
        package_name: Package the contract belongs to (None for local)
        contract_alias: Contract alias within the package
        local_package: Name of the local project; its contracts are bare aliases

    Returns:
        "package/alias", or "alias" when the package is absent or local
    """
    if not package_name or package_name == local_package:
        return contract_alias
    return f"{package_name}/{contract_alias}"


def from_contract_full_name(
    contract_full_name: str, local_package: Optional[str] = None
) -> ContractFullName:
    """
    Parse a contract full name.

    The alias is everything after the last "/", so scoped package names
    such as "@org/pkg/Alias" keep their own slash.

    Args:
        contract_full_name: "package/alias" or bare "alias"
        local_package: Package assigned to bare aliases

    Returns:
        ContractFullName(package, alias)
    """
    package, sep, alias = contract_full_name.rpartition("/")
    if not sep or not package:
        return ContractFullName(local_package, alias)
    return ContractFullName(package, alias)
