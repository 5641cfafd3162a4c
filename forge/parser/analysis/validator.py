"""
Structural and annotation validation of an extracted definition.

Every check runs, every violation is logged, and the first one is raised
with the complete list attached as ``errors``. Nothing is resolved or
generated for a definition that fails here.
"""

import logging

from forge.parser.shared.constants import INIT_OPERATION, MARKER_CUSTOM, MARKER_FEEDS
from forge.parser.shared.exceptions import (
    AnnotationConflictError,
    ForgeError,
    StructuralError,
)
from forge.typing.model import (
    EmissionKind,
    EmissionSite,
    ExtractedDefinition,
    HandlerRole,
    OperationSignature,
    ReceiverKind,
)
from forge.typing.types import TypeTuple

logger = logging.getLogger(__name__)


class DefinitionValidator:
    """Rejects definitions the generators cannot handle."""

    def validate(
        self,
        definition: ExtractedDefinition,
        sites: dict[str, list[EmissionSite]],
        scan_errors: list[ForgeError] | None = None,
    ) -> None:
        """
        Validate a definition.

        Args:
            definition: Output of the signature extractor
            sites: Emission sites per exported operation name
            scan_errors: Emission calls the scanner could not read

        Raises:
            StructuralError: On a structural violation
            AnnotationConflictError: On conflicting or malformed markers
        """
        errors = self.collect_errors(definition, sites, scan_errors)
        if not errors:
            logger.debug("Definition passed validation")
            return

        for error in errors:
            logger.error(f"{type(error).__name__}: {error}")
        first = errors[0]
        first.errors = errors
        raise first

    def collect_errors(
        self,
        definition: ExtractedDefinition,
        sites: dict[str, list[EmissionSite]],
        scan_errors: list[ForgeError] | None = None,
    ) -> list[ForgeError]:
        errors: list[ForgeError] = list(definition.errors)
        errors.extend(self._check_component(definition))
        errors.extend(scan_errors or [])

        seen: set[str] = set()
        for operation in definition.exported:
            if operation.name in seen:
                errors.append(
                    StructuralError(
                        f"Operation '{operation.name}' is exported more than once",
                        operation=operation.name,
                    )
                )
            seen.add(operation.name)
            errors.extend(self._check_operation(operation))
            errors.extend(self._check_feeds(operation, sites.get(operation.name, [])))

        errors.extend(self._check_handlers(definition.handlers))
        return errors

    def _check_component(self, definition: ExtractedDefinition) -> list[ForgeError]:
        if not definition.structures:
            return [StructuralError("Definition has no public @dataclass component")]
        if len(definition.structures) > 1:
            names = ", ".join(definition.structures)
            return [StructuralError(f"Definition has more than one @dataclass component: {names}")]

        component = definition.structures[0]
        if not definition.constructors:
            return [
                StructuralError(
                    f"Component '{component}' has no constructor: a static or class method "
                    f"without parameters returning '{component}'"
                )
            ]
        if len(definition.constructors) > 1:
            names = ", ".join(c.name for c in definition.constructors)
            return [StructuralError(f"Component '{component}' has more than one constructor: {names}")]
        return []

    def _check_operation(self, operation: OperationSignature) -> list[ForgeError]:
        name = operation.name
        errors: list[ForgeError] = []

        if operation.is_async:
            errors.append(StructuralError(f"Operation '{name}' must not be async", operation=name))
        if operation.has_type_params:
            errors.append(
                StructuralError(f"Operation '{name}' must not declare type parameters", operation=name)
            )
        if operation.receiver_kind is ReceiverKind.CLASS:
            errors.append(
                StructuralError(
                    f"Operation '{name}' must take the component instance, not the class",
                    operation=name,
                )
            )
        elif operation.receiver_kind is ReceiverKind.NONE and not operation.is_default_stub:
            errors.append(
                StructuralError(
                    f"Operation '{name}' has no receiver; only trait defaults may be static",
                    operation=name,
                )
            )
        if operation.has_variadic:
            errors.append(
                StructuralError(
                    f"Operation '{name}' must only take positional parameters",
                    operation=name,
                )
            )
        for parameter in operation.missing_annotations:
            errors.append(
                StructuralError(
                    f"Parameter '{parameter}' of operation '{name}' has no type annotation",
                    operation=name,
                )
            )

        annotations = operation.annotations
        for problem in annotations.malformed:
            errors.append(AnnotationConflictError(f"Operation '{name}': {problem}", operation=name))
        for role, target in annotations.handler_bindings:
            errors.append(
                AnnotationConflictError(
                    f"Operation '{name}' binds {role.value} for '{target}'; handler bindings "
                    "belong on module-level functions",
                    operation=name,
                    annotation=role.value,
                )
            )
        if annotations.custom and annotations.feeds is not None:
            errors.append(
                AnnotationConflictError(
                    f"Operation '{name}' combines {MARKER_CUSTOM} with {MARKER_FEEDS}",
                    operation=name,
                    annotation=MARKER_CUSTOM,
                )
            )

        if name == INIT_OPERATION:
            if operation.receiver_kind is not ReceiverKind.MUTABLE:
                errors.append(
                    StructuralError("'init' must take a mutable receiver", operation=name)
                )
            if operation.return_type is not None:
                errors.append(StructuralError("'init' must not return a value", operation=name))
        return errors

    def _check_feeds(
        self, operation: OperationSignature, sites: list[EmissionSite]
    ) -> list[ForgeError]:
        name = operation.name
        feeds = operation.annotations.feeds
        feed_sites = [site for site in sites if site.kind is EmissionKind.FEED]

        if feeds is None:
            if feed_sites:
                return [
                    AnnotationConflictError(
                        f"Operation '{name}' calls feed but has no @{MARKER_FEEDS} annotation",
                        operation=name,
                        annotation=MARKER_FEEDS,
                    )
                ]
            return []

        if operation.is_default_stub:
            return []
        if len(feed_sites) != 1:
            return [
                AnnotationConflictError(
                    f"Operation '{name}' is annotated @{MARKER_FEEDS} but has "
                    f"{len(feed_sites)} feed calls; exactly one is required",
                    operation=name,
                    annotation=MARKER_FEEDS,
                )
            ]

        site = feed_sites[0]
        declared_tuple = isinstance(feeds, TypeTuple)
        if site.payload_is_tuple is not None and site.payload_is_tuple != declared_tuple:
            expected = "a tuple" if declared_tuple else "a single value"
            return [
                AnnotationConflictError(
                    f"Operation '{name}' declares @{MARKER_FEEDS}({operation.annotations.feeds_text}) "
                    f"but feeds {'a tuple' if site.payload_is_tuple else 'a single value'} "
                    f"on line {site.lineno}; expected {expected}",
                    operation=name,
                    annotation=MARKER_FEEDS,
                )
            ]
        return []

    def _check_handlers(self, handlers: tuple[OperationSignature, ...]) -> list[ForgeError]:
        errors: list[ForgeError] = []

        bound: dict[tuple[str, HandlerRole], str] = {}
        for handler in handlers:
            for role, target in handler.annotations.handler_bindings:
                previous = bound.get((target, role))
                if previous is not None:
                    errors.append(
                        AnnotationConflictError(
                            f"{role.value} for '{target}' is bound by both "
                            f"'{previous}' and '{handler.name}'",
                            operation=target,
                            annotation=role.value,
                        )
                    )
                else:
                    bound[(target, role)] = handler.name

        for handler in handlers:
            name = handler.name
            annotations = handler.annotations
            if len(annotations.handler_bindings) > 1:
                roles = ", ".join(role.value for role, _ in annotations.handler_bindings)
                errors.append(
                    AnnotationConflictError(
                        f"Handler '{name}' binds more than one role ({roles})",
                        operation=name,
                    )
                )
            if annotations.custom:
                errors.append(
                    AnnotationConflictError(
                        f"Handler '{name}' combines {MARKER_CUSTOM} with a handler binding",
                        operation=name,
                        annotation=MARKER_CUSTOM,
                    )
                )
            if annotations.feeds is not None:
                errors.append(
                    AnnotationConflictError(
                        f"Handler '{name}' combines {MARKER_FEEDS} with a handler binding",
                        operation=name,
                        annotation=MARKER_FEEDS,
                    )
                )
            for problem in annotations.malformed:
                errors.append(AnnotationConflictError(f"Handler '{name}': {problem}", operation=name))
            if handler.is_async:
                errors.append(StructuralError(f"Handler '{name}' must not be async", operation=name))
            if handler.has_variadic or len(handler.parameters) != 1:
                errors.append(
                    StructuralError(
                        f"Handler '{name}' must take exactly one positional parameter",
                        operation=name,
                    )
                )
        return errors
