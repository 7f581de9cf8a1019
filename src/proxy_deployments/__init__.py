"""
proxy-deployments: parameter and reference resolution for upgradeable contract deployments
"""

from importlib.metadata import PackageNotFoundError, version

from .catalog import (
    args_list,
    contract_choices,
    contract_methods,
    contracts_list,
    init_args_for_prompt,
    methods_list,
)
from .exceptions import (
    InteractiveInputError,
    ManifestError,
    ManifestNotFoundError,
    ProxyDeploymentsError,
)
from .manifest import NetworkFile, PackageManifest
from .naming import from_contract_full_name, to_contract_full_name
from .prompt import networks_list, prompt_if_needed
from .proxies import proxies_list, proxy_info, proxy_selection_props
from .types import (
    ContractFullName,
    ContractMethod,
    DynamicChoices,
    MethodInput,
    ProxyQuery,
    ProxyRecord,
    QuestionSpec,
    ResolvedProxyReference,
    StaticChoices,
)

try:
    __version__ = version("proxy-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "prompt_if_needed",
    "networks_list",
    "proxy_info",
    "proxies_list",
    "proxy_selection_props",
    "contract_choices",
    "contracts_list",
    "contract_methods",
    "methods_list",
    "args_list",
    "init_args_for_prompt",
    "to_contract_full_name",
    "from_contract_full_name",
    "PackageManifest",
    "NetworkFile",
    "ContractFullName",
    "ContractMethod",
    "MethodInput",
    "ProxyRecord",
    "ProxyQuery",
    "ResolvedProxyReference",
    "QuestionSpec",
    "StaticChoices",
    "DynamicChoices",
    "ProxyDeploymentsError",
    "ManifestNotFoundError",
    "ManifestError",
    "InteractiveInputError",
]
