"""
Rewrites short type names into fully-qualified paths.

Resolution is best effort: a name that matches no import, no built-in and
no module-local definition is kept as written and recorded as a
``ResolutionWarning``. Unrelated operations resolve as usual.
"""

import logging
from dataclasses import replace

from forge.parser.shared.constants import BUILTIN_TYPE_NAMES
from forge.parser.shared.exceptions import ResolutionWarning
from forge.typing.model import (
    EmissionKind,
    EmissionSite,
    ImportAlias,
    OperationSignature,
    Parameter,
    ResolvedOperation,
    TopicKind,
)
from forge.typing.types import TypeExpr, TypeNone, TypePath, TypeTuple, map_paths

logger = logging.getLogger(__name__)


class TypeResolver:
    """Resolves type expressions and topic paths against one import table."""

    def __init__(
        self,
        imports: list[ImportAlias],
        local_names: frozenset[str] = frozenset(),
        local_module: str | None = None,
    ) -> None:
        self._aliases = {alias.short_name: alias for alias in imports}
        self._local_names = local_names
        self._local_module = local_module
        self.diagnostics: list[ResolutionWarning] = []

    def lookup(self, segments: tuple[str, ...]) -> tuple[tuple[str, ...], str | None] | None:
        """
        Resolve a dotted name by its longest matching alias prefix.

        Returns:
            The resolved segments and the module the first resolved name is
            imported from, or None when nothing matches
        """
        for length in range(len(segments), 0, -1):
            alias = self._aliases.get(".".join(segments[:length]))
            if alias is not None:
                resolved = tuple(alias.resolved_path.split(".")) + segments[length:]
                return resolved, alias.source_module
        if segments[0] in self._local_names:
            if self._local_module:
                return (self._local_module, *segments), self._local_module
            return segments, None
        return None

    def resolve(self, expr: TypeExpr, operation: str | None = None) -> TypeExpr:
        expression = expr.render()
        return map_paths(expr, lambda path: self._resolve_path(path, operation, expression))

    def _resolve_path(self, path: TypePath, operation: str | None, expression: str) -> TypePath:
        found = self.lookup(path.segments)
        if found is not None:
            return TypePath(found[0])
        if len(path.segments) == 1 and path.segments[0] in BUILTIN_TYPE_NAMES:
            return path
        self._warn(operation, expression, path.dotted)
        return path

    def _warn(self, operation: str | None, expression: str, name: str) -> None:
        warning = ResolutionWarning(operation=operation, expression=expression, name=name)
        if warning not in self.diagnostics:
            logger.warning(f"Unresolved {warning}")
            self.diagnostics.append(warning)

    def resolve_site(self, site: EmissionSite) -> EmissionSite:
        payload_type = self.resolve(site.payload_type, site.owning_operation)
        if site.topic_kind is not TopicKind.PATH or site.topic is None:
            return replace(site, payload_type=payload_type)

        segments = tuple(site.topic.split("."))
        found = self.lookup(segments)
        if found is not None:
            resolved, module = found
            return replace(
                site, topic=".".join(resolved), topic_module=module, payload_type=payload_type
            )

        # A bare lower-case name is a runtime variable, not a constant path
        if not (len(segments) == 1 and segments[0].islower()):
            self._warn(site.owning_operation, site.topic, site.topic)
        return replace(site, payload_type=payload_type)

    def resolve_operation(
        self, operation: OperationSignature, sites: list[EmissionSite]
    ) -> ResolvedOperation:
        name = operation.name
        parameters = tuple(
            replace(parameter, type=self.resolve(parameter.type, name))
            for parameter in operation.parameters
            if parameter.type is not None
        )

        input_type: TypeExpr
        if not parameters:
            input_type = TypeNone()
        elif len(parameters) == 1:
            input_type = parameters[0].type
        else:
            input_type = TypeTuple(tuple(parameter.type for parameter in parameters))

        if operation.annotations.feeds is not None:
            output_type = self.resolve(operation.annotations.feeds, name)
        elif operation.return_type is not None:
            output_type = self.resolve(operation.return_type, name)
        else:
            output_type = TypeNone()

        resolved_sites = [self.resolve_site(site) for site in sites]
        events = tuple(site for site in resolved_sites if site.kind is EmissionKind.EMIT)
        feed_sites = [site for site in resolved_sites if site.kind is EmissionKind.FEED]

        trait = None
        if operation.trait is not None:
            trait = self.resolve(operation.trait, name).render()

        return ResolvedOperation(
            name=name,
            doc=operation.doc,
            receiver_kind=operation.receiver_kind,
            parameters=parameters,
            input_type=input_type,
            output_type=output_type,
            returns_reference=operation.returns_reference,
            events=events,
            feed=feed_sites[0] if feed_sites else None,
            is_custom=operation.annotations.custom,
            trait=trait,
            is_default_stub=operation.is_default_stub,
        )
