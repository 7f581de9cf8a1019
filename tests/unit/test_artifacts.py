"""Unit tests for compiled contract artifacts."""

import json
from pathlib import Path

import pytest

from conftest import write_json

from proxy_deployments.artifacts import (
    get_contract_names,
    load_artifact,
    method_selector,
    methods_from_artifact,
    parse_artifact,
)
from proxy_deployments.exceptions import ManifestError
from proxy_deployments.types import ContractMethod, MethodInput


def function_node(name, params=(), visibility="public", modifiers=(), **extra):
    return {
        "nodeType": "FunctionDefinition",
        "name": name,
        "visibility": visibility,
        "modifiers": [{"modifierName": {"name": m}} for m in modifiers],
        "parameters": {
            "parameters": [
                {"name": p, "typeDescriptions": {"typeString": t}} for p, t in params
            ]
        },
        **extra,
    }


def artifact_with_ast(*nodes, contract_name="Box"):
    return {
        "contract_name": contract_name,
        "abi": [],
        "ast": {
            "nodes": [
                {"nodeType": "ContractDefinition", "name": "Base", "nodes": [function_node("base")]},
                {"nodeType": "ContractDefinition", "name": contract_name, "nodes": list(nodes)},
            ]
        },
    }


class TestParseArtifact:
    """Test the parse_artifact function."""

    def test_parses_sample_artifact(self, sample_project: Path):
        result = parse_artifact(sample_project / "build" / "contracts" / "Foo.json")

        assert result["contract_name"] == "Foo"
        assert len(result["abi"]) == 4
        assert result["bytecode"].startswith("0x6080")
        assert result["ast"]["nodeType"] == "SourceUnit"

    def test_minimal_artifact(self, tmp_path: Path):
        path = write_json(tmp_path / "Min.json", {"contractName": "Min"})

        assert parse_artifact(path) == {"contract_name": "Min", "abi": []}

    def test_missing_contract_name(self, tmp_path: Path):
        path = write_json(tmp_path / "Bad.json", {"abi": []})

        with pytest.raises(ManifestError):
            parse_artifact(path)

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "Bad.json"
        path.write_text("{ invalid json }")

        with pytest.raises((json.JSONDecodeError, ValueError)):
            parse_artifact(path)


class TestContractNames:
    """Test listing built contracts."""

    def test_skips_contracts_without_bytecode(self, sample_project: Path):
        """Test that interfaces are not listed."""
        assert get_contract_names(sample_project) == ["Foo", "Token"]

    def test_no_build_dir(self, tmp_path: Path):
        assert get_contract_names(tmp_path) == []

    def test_load_artifact(self, sample_project: Path):
        assert load_artifact(sample_project, "Token")["contract_name"] == "Token"
        assert load_artifact(sample_project, "Missing") is None


class TestMethodsFromArtifact:
    """Test method introspection."""

    def test_ast_methods(self):
        artifact = artifact_with_ast(
            function_node("initialize", [("owner", "address")], modifiers=["initializer"]),
            function_node("store", [("key", "bytes32"), ("value", "uint256")], visibility="external"),
        )

        assert methods_from_artifact(artifact) == [
            ContractMethod(
                name="initialize",
                selector="initialize(address)",
                inputs=(MethodInput("owner", "address"),),
                has_initializer=True,
            ),
            ContractMethod(
                name="store",
                selector="store(bytes32,uint256)",
                inputs=(MethodInput("key", "bytes32"), MethodInput("value", "uint256")),
            ),
        ]

    def test_ast_skips_non_callable_functions(self):
        """Test that constructors, fallbacks and non-public functions are skipped."""
        artifact = artifact_with_ast(
            function_node("", isConstructor=True),
            function_node("Box", kind="constructor"),
            function_node("", kind="fallback", visibility="external"),
            function_node("", kind="receive", visibility="external"),
            function_node("_internal", visibility="internal"),
            function_node("_private", visibility="private"),
            {"nodeType": "EventDefinition", "name": "Stored"},
            function_node("get"),
        )

        assert [m.name for m in methods_from_artifact(artifact)] == ["get"]

    def test_only_the_named_contract_is_introspected(self):
        """Test that other contracts in the same source unit are ignored."""
        artifact = artifact_with_ast(function_node("get"))

        assert "base" not in [m.name for m in methods_from_artifact(artifact)]

    def test_abi_fallback(self, sample_project: Path):
        """Test that artifacts without AST use their ABI functions."""
        artifact = load_artifact(sample_project, "Token")

        assert methods_from_artifact(artifact) == [
            ContractMethod(
                name="transfer",
                selector="transfer(address,uint256)",
                inputs=(MethodInput("to", "address"), MethodInput("amount", "uint256")),
            )
        ]

    def test_ast_without_contract_definition_uses_abi(self):
        artifact = {
            "contract_name": "Box",
            "abi": [{"type": "function", "name": "get", "inputs": []}],
            "ast": {"nodes": []},
        }

        assert [m.selector for m in methods_from_artifact(artifact)] == ["get()"]

    def test_method_selector(self):
        assert method_selector("pause", ()) == "pause()"
        assert method_selector("set", (MethodInput("a", "uint8"), MethodInput("b", "bool"))) == "set(uint8,bool)"
