"""Data types and dataclasses for proxy-deployments library."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

# Mapping from parameter name to its final, normalized value
AnswerSet = Dict[str, Any]


class ContractFullName(NamedTuple):
    """Canonical identity of a contract: optional package plus alias."""

    package: Optional[str]
    alias: str


@dataclass(frozen=True)
class MethodInput:
    """One input parameter of a contract method."""

    name: str
    type: str  # e.g., "uint256", "address"


@dataclass(frozen=True)
class ContractMethod:
    """A callable method introspected from a compiled contract."""

    name: str
    selector: str  # Canonical signature, e.g., "initialize(uint256)"
    inputs: Tuple[MethodInput, ...] = ()
    has_initializer: bool = False


@dataclass(frozen=True)
class ProxyRecord:
    """A deployed upgradeable proxy instance recorded in a network file."""

    package: str
    contract: str  # Contract alias
    address: str

    # Optional fields (carried over from the network file)
    implementation: Optional[str] = None
    version: Optional[str] = None


@dataclass(frozen=True)
class ProxyQuery:
    """Partial filter over proxy records. Unset fields match anything."""

    contract: Optional[str] = None
    address: Optional[str] = None
    package: Optional[str] = None

    def matches(self, record: ProxyRecord) -> bool:
        return (
            (not self.package or record.package == self.package)
            and (not self.contract or record.contract == self.contract)
            and (not self.address or record.address == self.address)
        )


@dataclass(frozen=True)
class ResolvedProxyReference:
    """
    A proxy reference resolved against a network file.

    proxy_reference is whichever of address / contract_full_name later
    operations should use to address the proxy.
    """

    contract_full_name: Optional[str] = None
    address: Optional[str] = None
    proxy_reference: Optional[str] = None


@dataclass(frozen=True)
class StaticChoices:
    """A fixed list of choices for a question."""

    items: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence, store as tuple
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class DynamicChoices:
    """Choices computed from the answers given earlier in the same round."""

    produce: Callable[[AnswerSet], List[Any]]


Choices = Union[StaticChoices, DynamicChoices]


@dataclass
class QuestionSpec:
    """One unit of interactively-obtainable input."""

    message: str
    type: str = "text"  # questionary prompt type
    choices: Optional[Choices] = None
    default: Any = None
    normalize: Optional[Callable[[Any], Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)  # Extra questionary arguments

    def has_empty_choices(self) -> bool:
        """True when a static choice list is present but has nothing to pick."""
        return isinstance(self.choices, StaticChoices) and not self.choices.items

    @classmethod
    def with_choices(
        cls, message: str, type: str, choices: Optional[Sequence[Any]], **kwargs: Any
    ) -> "QuestionSpec":
        """Build a question with a static choice list (None means free input)."""
        static = StaticChoices(choices) if choices is not None else None
        return cls(message=message, type=type, choices=static, **kwargs)
