"""Base classes for enforcement rules.

Provides:
- Diagnostic: Dataclass for a reported violation
- BaseRule: Abstract base class for all rules
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ....config import Configuration
    from ....model import ClassNode

# Walk order of rule scopes within a class
SCOPES = ("class", "field", "method", "parameter")


@dataclass
class Diagnostic:
    """A policy violation attributed to a node.

    Attributes
    ----------
    message : str
        Compile error text for the host to report
    node : Any
        The violating node (ClassNode, FieldNode, MethodNode or ParameterNode)
    rule_id : str
        Rule that emitted the diagnostic
    owner : str
        Fully-qualified name of the enclosing class
    unit : str
        Name of the compilation unit
    metadata : Dict
        Additional metadata
    """

    message: str
    node: Any
    rule_id: str = ""
    owner: str = ""
    unit: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def node_kind(self) -> str:
        return getattr(self.node, "kind", type(self.node).__name__)

    @property
    def node_name(self) -> str:
        return getattr(self.node, "name", "")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "unit": self.unit,
            "owner": self.owner,
            "node_kind": self.node_kind,
            "node_name": self.node_name,
            "rule_id": self.rule_id,
            "message": self.message,
            **self.metadata,
        }


class BaseRule(ABC):
    """Abstract base class for enforcement rules.

    All rules must implement:
    - rule_id: Unique identifier
    - scope: Node kind the rule inspects (class, field, method, parameter)
    - check(): Main check method

    Attributes
    ----------
    rule_id : str
        Unique identifier for this rule
    scope : str
        Node kind this rule is applied to
    order : int
        Position among the rules of the same scope
    description : str
        Human-readable description
    """

    rule_id: str = "BASE_RULE"
    scope: str = "class"
    order: int = 0
    description: str = "Base rule"

    def __init__(self, config: "Configuration"):
        self.config = config

    def create_diagnostic(
        self,
        node: Any,
        owner: "ClassNode",
        message: str,
        **metadata,
    ) -> Diagnostic:
        """Create a Diagnostic with rule context."""
        return Diagnostic(
            message=message,
            node=node,
            rule_id=self.rule_id,
            owner=owner.name,
            metadata=metadata,
        )

    @abstractmethod
    def check(self, node: Any, owner: "ClassNode") -> List[Diagnostic]:
        """Run the rule against one node.

        Parameters
        ----------
        node : Any
            Node of this rule's scope
        owner : ClassNode
            Class that contains ``node`` (the node itself for class rules)

        Returns
        -------
        List[Diagnostic]
            Diagnostics (empty if the node passes)
        """
        pass

    def is_applicable(self) -> bool:
        """Check if the configuration enables this rule.

        Override in subclasses for flag-gated rules.
        """
        return True


def scope_index(scope: str) -> Optional[int]:
    """Position of a scope in the walk, or None if unknown."""
    try:
        return SCOPES.index(scope)
    except ValueError:
        return None
