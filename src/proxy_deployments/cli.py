"""proxy-deployments CLI - resolve command parameters and references."""

import dataclasses
import json
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import click

from .catalog import contracts_list, init_args_for_prompt, methods_list
from .constants import PICK_PROXY_BY, SOURCE_ALL, SOURCE_FROM_BUILD_DIR, SOURCE_FROM_LOCAL
from .exceptions import ProxyDeploymentsError
from .logging import configure_logging
from .manifest import PackageManifest
from .prompt import linked_dependencies_props, networks_list, prompt_if_needed
from .proxies import proxy_info, proxy_selection_props
from .types import QuestionSpec, ResolvedProxyReference, StaticChoices


def _echo_json(data: Dict[str, Any]) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def interactive_option(f: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--interactive/--no-interactive",
        default=True,
        show_default=True,
        help="Prompt for missing values",
    )(f)


def handle_errors(f: Callable[..., Any]) -> Callable[..., Any]:
    """Report library errors as CLI errors."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except ProxyDeploymentsError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


@click.group()
@click.version_option(package_name="proxy-deployments", prog_name="proxy-deployments")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (defaults to $PROXY_DEPLOYMENTS_ROOT, then the current directory)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, root: Optional[Path]) -> None:
    """Resolve parameters for upgradeable contract deployments."""
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    configure_logging(level="DEBUG" if verbose else "WARNING")


@cli.command("unlink")
@click.argument("dependencies", nargs=-1)
@interactive_option
@click.pass_obj
@handle_errors
def unlink_command(obj: Dict[str, Any], dependencies: Tuple[str, ...], interactive: bool) -> None:
    """Select linked dependencies to unlink.

    Prints the resolved dependency names as JSON.
    """
    manifest = PackageManifest.load(obj["root"])
    props = linked_dependencies_props(manifest.dependency_names)
    answers = prompt_if_needed(
        args={"dependencies": list(dependencies)}, props=props, interactive=interactive
    )
    _echo_json(answers)


@cli.command("proxy")
@click.argument("alias", required=False)
@click.option("--address", default=None, help="Proxy address")
@click.option("--package", default=None, help="Package the contract belongs to")
@click.option("--network", default=None, help="Network name")
@interactive_option
@click.pass_obj
@handle_errors
def proxy_command(
    obj: Dict[str, Any],
    alias: Optional[str],
    address: Optional[str],
    package: Optional[str],
    network: Optional[str],
    interactive: bool,
) -> None:
    """Resolve a proxy by contract alias and/or address.

    Without ALIAS or --address, the proxy is picked from the network's list.
    """
    root = obj["root"]
    answers = prompt_if_needed(
        opts={"network": network},
        props=networks_list("select", root),
        interactive=interactive,
    )
    network = answers["network"]
    if network is None:
        raise click.UsageError("No network given")

    if alias or address:
        contract_info = {"contractAlias": alias, "proxyAddress": address, "packageName": package}
        reference = proxy_info(contract_info, network, root)
    else:
        if not PackageManifest.load(root).network_file(network).has_proxies():
            raise click.ClickException(f"No proxies deployed on network '{network}'")
        picked = prompt_if_needed(
            args={PICK_PROXY_BY: None, "proxy": None},
            props=proxy_selection_props(network, root),
            interactive=interactive,
        )
        reference = picked["proxy"] or ResolvedProxyReference()

    _echo_json({"network": network, **dataclasses.asdict(reference)})


@cli.command("contracts")
@click.argument("contract", required=False)
@click.option(
    "--source",
    type=click.Choice([SOURCE_FROM_BUILD_DIR, SOURCE_FROM_LOCAL, SOURCE_ALL]),
    default=SOURCE_ALL,
    show_default=True,
    help="Where contracts are listed from",
)
@interactive_option
@click.pass_obj
@handle_errors
def contracts_command(
    obj: Dict[str, Any], contract: Optional[str], source: str, interactive: bool
) -> None:
    """Pick a contract from the project's catalog."""
    props = contracts_list("contract", "Pick a contract", "select", source, obj["root"])
    answers = prompt_if_needed(args={"contract": contract}, props=props, interactive=interactive)
    _echo_json(answers)


@cli.command("method")
@click.argument("contract")
@click.option("--method", default=None, help="Method name or selector")
@interactive_option
@click.pass_obj
@handle_errors
def method_command(
    obj: Dict[str, Any], contract: str, method: Optional[str], interactive: bool
) -> None:
    """Pick a method of CONTRACT and fill in its arguments."""
    root = obj["root"]
    props = {
        "method": QuestionSpec(
            message="Select a method",
            type="select",
            choices=StaticChoices(methods_list(contract, root)),
            # Picked choices carry {"name", "selector"}; prefer the selector
            normalize=lambda value: value["selector"] if isinstance(value, dict) else value,
        )
    }
    picked = prompt_if_needed(opts={"method": method}, props=props, interactive=interactive)
    method_identifier = picked["method"]
    if method_identifier is None:
        raise click.UsageError(f"No method given for contract '{contract}'")

    method_args = prompt_if_needed(
        args=init_args_for_prompt(contract, method_identifier, root), interactive=interactive
    )
    _echo_json({"contract": contract, "method": method_identifier, "args": method_args})


if __name__ == "__main__":
    cli()
