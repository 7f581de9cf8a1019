"""Compiled contract artifact accessors for proxy-deployments library."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import structlog

from .constants import INITIALIZER_MODIFIER
from .exceptions import ManifestError
from .paths import get_build_dir
from .types import ContractMethod, MethodInput

log = structlog.get_logger()

# Bytecode of contracts that cannot be deployed (interfaces, abstract contracts)
_EMPTY_BYTECODE = ("", "0x")


def parse_artifact(file_path: Path) -> Dict[str, Any]:
    """
    Parse a compiled contract artifact.

    Args:
        file_path: Path to build/contracts/<ContractName>.json

    Returns:
        Dictionary with:
        - Required: contract_name, abi
        - Optional: bytecode, ast

    Raises:
        ManifestError: If the file is not valid JSON or lacks a contract name
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in artifact {file_path}: {e}") from e

    if "contractName" not in data:
        raise ManifestError(f"Missing contractName in artifact {file_path}")

    result: Dict[str, Any] = {
        "contract_name": data["contractName"],
        "abi": data.get("abi", []),
    }

    if "bytecode" in data:
        result["bytecode"] = data["bytecode"]
    if "ast" in data:
        result["ast"] = data["ast"]

    return result


def get_contract_names(project_root: Path) -> List[str]:
    """
    Get names of deployable contracts in the project's build directory.

    Artifacts with empty bytecode (interfaces, abstract contracts) are skipped.

    Args:
        project_root: Project directory

    Returns:
        Contract names sorted by artifact file name; empty if nothing is built
    """
    build_dir = get_build_dir(project_root)
    if not build_dir.exists():
        log.debug("artifacts.no_build_dir", path=str(build_dir))
        return []

    names = []
    for artifact_file in sorted(build_dir.glob("*.json")):
        artifact = parse_artifact(artifact_file)
        if artifact.get("bytecode", "0x") in _EMPTY_BYTECODE:
            continue
        names.append(artifact["contract_name"])
    return names


def load_artifact(project_root: Path, contract_name: str) -> Optional[Dict[str, Any]]:
    """
    Load the artifact of one contract.

    Returns:
        Parsed artifact, or None if the contract has not been built
    """
    artifact_file = get_build_dir(project_root) / f"{contract_name}.json"
    if not artifact_file.exists():
        log.debug("artifacts.not_found", contract=contract_name, path=str(artifact_file))
        return None
    return parse_artifact(artifact_file)


def _find_contract_definition(ast: Dict[str, Any], contract_name: str) -> Optional[Dict[str, Any]]:
    for node in ast.get("nodes", []):
        if node.get("nodeType") == "ContractDefinition" and node.get("name") == contract_name:
            return node
    return None


def _is_callable_function(node: Dict[str, Any]) -> bool:
    if node.get("nodeType") != "FunctionDefinition":
        return False
    if node.get("isConstructor") or node.get("kind") in ("constructor", "fallback", "receive"):
        return False
    # Unnamed functions are pre-0.6 fallbacks
    if not node.get("name"):
        return False
    return node.get("visibility") in ("public", "external")


def _method_from_ast_node(node: Dict[str, Any]) -> ContractMethod:
    inputs = tuple(
        MethodInput(
            name=param.get("name", ""),
            type=param.get("typeDescriptions", {}).get("typeString", ""),
        )
        for param in node.get("parameters", {}).get("parameters", [])
    )
    has_initializer = any(
        modifier.get("modifierName", {}).get("name") == INITIALIZER_MODIFIER
        for modifier in node.get("modifiers", [])
    )
    return ContractMethod(
        name=node["name"],
        selector=method_selector(node["name"], inputs),
        inputs=inputs,
        has_initializer=has_initializer,
    )


def _method_from_abi_item(item: Dict[str, Any]) -> ContractMethod:
    inputs = tuple(
        MethodInput(name=param.get("name", ""), type=param.get("type", ""))
        for param in item.get("inputs", [])
    )
    return ContractMethod(
        name=item["name"],
        selector=method_selector(item["name"], inputs),
        inputs=inputs,
    )


def method_selector(name: str, inputs: Tuple[MethodInput, ...]) -> str:
    """Canonical signature of a method, e.g. "transfer(address,uint256)"."""
    return f"{name}({','.join(i.type for i in inputs)})"


def methods_from_artifact(artifact: Dict[str, Any]) -> List[ContractMethod]:
    """
    Introspect the public methods of a compiled contract.

    Uses the source AST when the artifact carries one, since only the AST
    records which methods are initializers. Otherwise falls back to the ABI.

    Args:
        artifact: Parsed artifact (see parse_artifact)

    Returns:
        Methods in declaration order
    """
    contract_name = artifact["contract_name"]
    definition = _find_contract_definition(artifact.get("ast") or {}, contract_name)
    if definition is not None:
        return [
            _method_from_ast_node(node)
            for node in definition.get("nodes", [])
            if _is_callable_function(node)
        ]

    log.debug("artifacts.no_ast", contract=contract_name)
    return [
        _method_from_abi_item(item)
        for item in artifact["abi"]
        if item.get("type") == "function" and item.get("name")
    ]
