"""EnforcementEngine - applies static compilation and conventions to a unit.

Coordinates marker attachment, rule execution and diagnostic collection.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import logging
import time

from ...config import Configuration, ConfigurationResolver, get_resolver
from ...model.nodes import (
    COMPILE_STATIC,
    EXCLUDED_ANNOTATIONS,
    EXTENSIONS_MEMBER,
    Annotation,
    AnnotationArgument,
    ClassNode,
    CompilationUnit,
)
from .inspector import has_any
from .rules import RuleRegistry
from .rules.base import BaseRule, Diagnostic
from .whitelist import is_whitelisted

logger = logging.getLogger(__name__)


@dataclass
class EnforcementResult:
    """Result of one or more engine walks.

    Attributes
    ----------
    diagnostics : List[Diagnostic]
        Diagnostics in emission order
    units_processed : List[str]
        Compilation units that were walked
    units_skipped : List[str]
        Compilation units skipped (engine disabled or whitelisted script)
    classes_checked : List[str]
        Classes that went through attachment and enforcement
    classes_exempt : List[str]
        Classes exempt through the whitelist or the default package
    annotated_classes : List[str]
        Classes that received a CompileStatic marker
    rules_run : List[str]
        Rules that were active for the walk
    rules_failed : List[str]
        Rules that raised during the walk
    execution_time_seconds : float
        Execution time
    """

    diagnostics: List[Diagnostic] = field(default_factory=list)
    units_processed: List[str] = field(default_factory=list)
    units_skipped: List[str] = field(default_factory=list)
    classes_checked: List[str] = field(default_factory=list)
    classes_exempt: List[str] = field(default_factory=list)
    annotated_classes: List[str] = field(default_factory=list)
    rules_run: List[str] = field(default_factory=list)
    rules_failed: List[str] = field(default_factory=list)
    execution_time_seconds: float = 0.0

    @property
    def n_diagnostics(self) -> int:
        return len(self.diagnostics)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    @property
    def messages(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def merge(self, other: "EnforcementResult") -> None:
        """Append another result, keeping emission order."""
        self.diagnostics.extend(other.diagnostics)
        self.units_processed.extend(other.units_processed)
        self.units_skipped.extend(other.units_skipped)
        self.classes_checked.extend(other.classes_checked)
        self.classes_exempt.extend(other.classes_exempt)
        self.annotated_classes.extend(other.annotated_classes)
        for rule_id in other.rules_run:
            if rule_id not in self.rules_run:
                self.rules_run.append(rule_id)
        for rule_id in other.rules_failed:
            if rule_id not in self.rules_failed:
                self.rules_failed.append(rule_id)
        self.execution_time_seconds += other.execution_time_seconds

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "n_diagnostics": self.n_diagnostics,
            "units_processed": self.units_processed,
            "units_skipped": self.units_skipped,
            "classes_checked": self.classes_checked,
            "classes_exempt": self.classes_exempt,
            "annotated_classes": self.annotated_classes,
            "rules_run": self.rules_run,
            "rules_failed": self.rules_failed,
            "execution_time_seconds": round(self.execution_time_seconds, 4),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


class EnforcementEngine:
    """Engine that applies static compilation and enforces conventions.

    Parameters
    ----------
    config : Configuration, optional
        Enforcement configuration. When omitted it is taken from ``resolver``
        on first use.
    resolver : ConfigurationResolver, optional
        Resolver used when no config is given. Defaults to the process-wide
        resolver.
    skip_rules : List[str], optional
        Rule IDs to leave out

    Example
    -------
    >>> from enterprise_groovy.config import Configuration
    >>> engine = EnforcementEngine(Configuration(dynamic_typing_allowed=False))
    >>> result = engine.execute(unit)
    >>> for d in result.diagnostics:
    ...     print(d.node_name, d.message)
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        resolver: Optional[ConfigurationResolver] = None,
        skip_rules: Optional[List[str]] = None,
    ):
        self._config = config
        self._resolver = resolver
        self.skip_rules = list(skip_rules or [])
        self._rules: Optional[Dict[str, List[BaseRule]]] = None

    @property
    def config(self) -> Configuration:
        if self._config is None:
            resolver = self._resolver or get_resolver()
            self._config = resolver.get()
        return self._config

    @property
    def rules(self) -> Dict[str, List[BaseRule]]:
        """Active rules grouped by scope, in check order."""
        if self._rules is None:
            self._rules = RuleRegistry.instantiate_all(
                config=self.config, skip_rules=self.skip_rules
            )
        return self._rules

    def list_available_rules(self) -> Dict[str, List[str]]:
        """List all registered rules by scope.

        Returns
        -------
        Dict[str, List[str]]
            Map of scope to rule IDs in check order
        """
        return RuleRegistry.summary()

    def active_rule_ids(self) -> List[str]:
        if not self.config.enforcement_active:
            return []
        return [rule.rule_id for rules in self.rules.values() for rule in rules]

    def execute(self, unit: CompilationUnit) -> EnforcementResult:
        """Walk one compilation unit.

        Parameters
        ----------
        unit : CompilationUnit
            Unit to walk; non-exempt classes receive the marker annotation

        Returns
        -------
        EnforcementResult
            Mutations and diagnostics for this unit
        """
        start_time = time.time()
        result = EnforcementResult()
        config = self.config

        if config.global_disable:
            logger.debug(f"Enforcement disabled, skipping {unit.name}")
            result.units_skipped.append(unit.name)
            return result

        if config.script_whitelist_enabled and not unit.has_target_directory:
            logger.debug(f"Skipping script {unit.name} (no target directory)")
            result.units_skipped.append(unit.name)
            return result

        result.units_processed.append(unit.name)
        result.rules_run = self.active_rule_ids()

        for class_node in unit.classes:
            if is_whitelisted(class_node.name, config.class_whitelist):
                logger.debug(f"{class_node.name} is whitelisted")
                result.classes_exempt.append(class_node.name)
                continue

            if config.skip_default_package and not class_node.package_name:
                logger.debug(f"{class_node.name} is in the default package")
                result.classes_exempt.append(class_node.name)
                continue

            result.classes_checked.append(class_node.name)
            if self.attach_marker(class_node):
                result.annotated_classes.append(class_node.name)

            self.run_enforcement(class_node, result, unit_name=unit.name)

        result.execution_time_seconds = time.time() - start_time
        logger.info(
            f"Enforcement complete for {unit.name or '<unnamed>'}: "
            f"{len(result.annotated_classes)} annotated, "
            f"{len(result.classes_exempt)} exempt, "
            f"{result.n_diagnostics} diagnostics"
        )
        return result

    def execute_many(self, units: Iterable[CompilationUnit]) -> EnforcementResult:
        """Walk several units into one combined result."""
        combined = EnforcementResult()
        for unit in units:
            combined.merge(self.execute(unit))
        return combined

    def attach_marker(self, class_node: ClassNode) -> bool:
        """Add CompileStatic to a class that has not chosen a compile mode.

        Parameters
        ----------
        class_node : ClassNode
            Class to annotate

        Returns
        -------
        bool
            True if a marker was attached
        """
        if has_any(class_node, EXCLUDED_ANNOTATIONS):
            return False

        marker = Annotation(name=COMPILE_STATIC)
        if self.config.allowed_extensions:
            marker.members[EXTENSIONS_MEMBER] = AnnotationArgument.list_of(
                self.config.allowed_extensions
            )
        class_node.add_annotation(marker)
        return True

    def run_enforcement(
        self,
        class_node: ClassNode,
        result: EnforcementResult,
        unit_name: str = "",
    ) -> None:
        """Run class, field, method and parameter rules for one class.

        Does nothing unless an enforcement flag is active.
        """
        if not self.config.enforcement_active:
            return

        rules = self.rules
        self._apply(rules["class"], class_node, class_node, result, unit_name)

        for field_node in class_node.fields:
            self._apply(rules["field"], field_node, class_node, result, unit_name)

        for method_node in class_node.methods:
            self._apply(rules["method"], method_node, class_node, result, unit_name)
            for parameter in method_node.parameters:
                self._apply(rules["parameter"], parameter, class_node, result, unit_name)

    def _apply(
        self,
        rules: List[BaseRule],
        node: Any,
        owner: ClassNode,
        result: EnforcementResult,
        unit_name: str,
    ) -> None:
        for rule in rules:
            try:
                diagnostics = rule.check(node, owner)
            except Exception as e:
                logger.warning(f"Rule {rule.rule_id} failed on {owner.name}: {e}")
                if rule.rule_id not in result.rules_failed:
                    result.rules_failed.append(rule.rule_id)
                continue

            for diagnostic in diagnostics:
                diagnostic.unit = unit_name
                result.add_diagnostic(diagnostic)
