"""Proxy reference resolution for proxy-deployments library."""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import questionary
import structlog

from .catalog import section_separator
from .constants import LOCAL_CONTRACTS_LABEL, PICK_BY_ADDRESS, PICK_BY_NAME, PICK_PROXY_BY
from .manifest import PackageManifest
from .naming import to_contract_full_name
from .types import (
    AnswerSet,
    DynamicChoices,
    ProxyQuery,
    ProxyRecord,
    QuestionSpec,
    ResolvedProxyReference,
    StaticChoices,
)

log = structlog.get_logger()


def proxy_info(
    contract_info: Dict[str, Optional[str]],
    network: str,
    project_root: Optional[Union[Path, str]] = None,
) -> ResolvedProxyReference:
    """
    Resolve a partial proxy reference against a network's proxies.

    Args:
        contract_info: Any of "contractAlias", "proxyAddress", "packageName"
        network: Network name
        project_root: Project directory (see paths.get_project_root)

    Returns:
        ResolvedProxyReference. Both fields are None when neither alias nor
        address is given. When several proxies match, the first one in the
        network file wins.
    """
    contract_alias = contract_info.get("contractAlias")
    proxy_address = contract_info.get("proxyAddress")
    package_name = contract_info.get("packageName")

    if not contract_alias and not proxy_address:
        return ResolvedProxyReference()

    manifest = PackageManifest.load(project_root)
    network_file = manifest.network_file(network)
    query = ProxyQuery(contract=contract_alias, address=proxy_address, package=package_name)
    proxies = network_file.get_proxies(query)

    if not proxies:
        log.debug("proxies.no_match", network=network, query=query)
        contract_full_name = to_contract_full_name(package_name, contract_alias, manifest.name)
        return ResolvedProxyReference(
            contract_full_name=contract_full_name,
            proxy_reference=proxy_address or contract_full_name,
        )

    if len(proxies) > 1:
        log.debug("proxies.ambiguous_match", network=network, query=query, matches=len(proxies))

    proxy = proxies[0]
    contract_full_name = to_contract_full_name(proxy.package, proxy.contract, manifest.name)
    return ResolvedProxyReference(
        contract_full_name=contract_full_name,
        address=proxy.address,
        proxy_reference=proxy_address or contract_full_name,
    )


def _group_by_package(proxies: List[ProxyRecord]) -> Dict[str, List[ProxyRecord]]:
    groups: Dict[str, List[ProxyRecord]] = {}
    for proxy in proxies:
        groups.setdefault(proxy.package, []).append(proxy)
    return groups


def _proxy_choice(proxy: ProxyRecord, local_package: str, by_address: bool) -> questionary.Choice:
    contract_full_name = to_contract_full_name(proxy.package, proxy.contract, local_package)
    if by_address:
        title = f"{proxy.contract} at {proxy.address}"
        proxy_reference = proxy.address
    else:
        title = proxy.contract
        proxy_reference = contract_full_name

    return questionary.Choice(
        title=title,
        value=ResolvedProxyReference(
            contract_full_name=contract_full_name,
            address=proxy.address,
            proxy_reference=proxy_reference,
        ),
    )


def proxies_list(
    network: str, project_root: Optional[Union[Path, str]] = None
) -> Callable[[AnswerSet], List[Any]]:
    """
    Build a choice producer listing every proxy on a network, grouped by package.

    The returned function takes the answers given so far; answers["pickProxyBy"]
    selects whether proxies are shown and referenced by address or by name.
    Within a package, proxies with the same display title collapse into one
    choice, so in by-name mode several instances of one contract show once.
    """

    def list_proxies(answers: AnswerSet) -> List[Any]:
        manifest = PackageManifest.load(project_root)
        proxies = manifest.network_file(network).get_proxies()
        by_address = answers.get(PICK_PROXY_BY) == PICK_BY_ADDRESS

        choices: List[Any] = []
        for package_name, package_proxies in _group_by_package(proxies).items():
            label = LOCAL_CONTRACTS_LABEL if package_name == manifest.name else package_name
            choices.append(section_separator(label))

            seen_titles = set()
            for proxy in package_proxies:
                choice = _proxy_choice(proxy, manifest.name, by_address)
                if choice.title in seen_titles:
                    continue
                seen_titles.add(choice.title)
                choices.append(choice)

        return choices

    return list_proxies


def proxy_selection_props(
    network: str, project_root: Optional[Union[Path, str]] = None
) -> Dict[str, QuestionSpec]:
    """
    Questions for picking a proxy: first how to identify it, then which one.

    The "proxy" answer is a ResolvedProxyReference.
    """
    return {
        PICK_PROXY_BY: QuestionSpec(
            message="Pick an upgradeable instance",
            type="select",
            choices=StaticChoices(
                [
                    questionary.Choice("By contract name", value=PICK_BY_NAME),
                    questionary.Choice("By address", value=PICK_BY_ADDRESS),
                ]
            ),
        ),
        "proxy": QuestionSpec(
            message="Choose an instance",
            type="select",
            choices=DynamicChoices(proxies_list(network, project_root)),
        ),
    }
