"""
Entity processing.

:class:`AnnotationProcessor` walks one entity through its passes::

    DISCOVERED ─► ENTITY_PASS ─► OPERATION_PASS(1) ─► ... ─► OPERATION_PASS(n) ─► DONE

Each pass normalizes the metadata declared on its target, queues the
resulting handlers by priority and dispatches the ones eligible for the
pass's target kind.  Handlers that were not eligible ride along into the
next pass; the queue is dropped once the entity is done.

Example:
    >>> processor = AnnotationProcessor()
    >>> result = processor.parse("app.controller.User")
    >>> result.context["prefix"]
    '/users'
    >>> result.operations["index"]["route"]
    ('GET', '/')
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from minimal_annotation.core.container import Container, get_container
from minimal_annotation.core.context import ProcessingContext, as_context
from minimal_annotation.core.errors import HandlerConstructionError
from minimal_annotation.core.logging import LogContext, get_logger
from minimal_annotation.core.naming import qualified_name
from minimal_annotation.core.settings import AnnotationSettings

from .dispatcher import run_eligible
from .handler import AnnotationHandler, Target
from .queue import AnnotationQueue
from .reflector import ModuleReflector, Reflector
from .resolver import Fact, HandlerRef, MetadataNormalizer

log = get_logger(__name__)


class ProcessingState(str, Enum):
    DISCOVERED = "discovered"
    ENTITY_PASS = "entity_pass"
    OPERATION_PASS = "operation_pass"
    DONE = "done"


class EntityInstance:
    """Entity instance slot, materialised at most once per entity run."""

    def __init__(self, container: Container, entity: Any) -> None:
        self._container = container
        self._entity = entity
        self._value: Any = None
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def value(self) -> Any:
        return self._value

    def get(self) -> Any:
        if not self._resolved:
            self._value = self._container.get(self._entity)
            self._resolved = True
        return self._value


@dataclass(frozen=True)
class PassResult:
    context: ProcessingContext
    queue: AnnotationQueue


@dataclass
class EntityResult:
    """Outcome of processing one entity."""

    entity: str
    context: ProcessingContext
    operations: dict[str, ProcessingContext] = field(default_factory=dict)
    leftover: AnnotationQueue = field(default_factory=AnnotationQueue)
    state: ProcessingState = ProcessingState.DONE

    @property
    def final_context(self) -> ProcessingContext:
        """Context after the last pass (the entity pass when there are no operations)."""
        if self.operations:
            return list(self.operations.values())[-1]
        return self.context


class AnnotationProcessor:
    """Resolves and dispatches the annotations of one entity at a time."""

    def __init__(
        self,
        container: Container | None = None,
        reflector: Reflector | None = None,
        normalizer: MetadataNormalizer | None = None,
        settings: AnnotationSettings | None = None,
    ) -> None:
        self.container = container or get_container()
        self.reflector: Reflector = reflector or ModuleReflector()
        self.normalizer = normalizer or MetadataNormalizer.default(
            settings or self.container.settings
        )
        self.state = ProcessingState.DISCOVERED

    # ── Entity ───────────────────────────────────────────────────

    def parse(self, entity: str | type, context: Mapping[str, Any] | None = None) -> EntityResult:
        """Run the entity pass, then one pass per public operation."""
        if isinstance(entity, str):
            entity_name, entity_type = entity, self.reflector.load(entity)
        else:
            entity_name, entity_type = qualified_name(entity), entity

        self.state = ProcessingState.DISCOVERED
        base = as_context(context).without("method", "instance")
        base = base.merge({"class": entity_name, "target": Target.ENTITY})
        instance = EntityInstance(self.container, entity_type)

        with LogContext(entity=entity_name):
            self.state = ProcessingState.ENTITY_PASS
            entity_pass = self.process(entity_type, base, AnnotationQueue(), instance)
            result = EntityResult(entity=entity_name, context=entity_pass.context)

            queue = entity_pass.queue
            self.state = ProcessingState.OPERATION_PASS
            for method in self.reflector.list_public_operations(entity_type):
                op_context = entity_pass.context.merge(target=Target.OPERATION, method=method)
                if instance.resolved:
                    op_context = op_context.merge(instance=instance.value)
                with LogContext(method=method):
                    op_pass = self.process(
                        self.reflector.operation(entity_type, method), op_context, queue, instance
                    )
                result.operations[method] = op_pass.context
                queue = op_pass.queue

            result.leftover = queue
            self.state = result.state = ProcessingState.DONE
            log.info(
                "entity.parsed",
                operations=len(result.operations),
                leftover=len(queue),
            )
        return result

    # ── Single pass ──────────────────────────────────────────────

    def process(
        self,
        target: Any,
        context: Mapping[str, Any],
        queue: AnnotationQueue | None = None,
        instance: EntityInstance | None = None,
    ) -> PassResult:
        """Normalize ``target``'s metadata, queue handlers, dispatch eligible ones.

        ``queue`` is not modified; the returned queue holds the handlers that
        were not eligible for ``context["target"]``.
        """
        context = as_context(context)
        queue = queue.copy() if queue is not None else AnnotationQueue()

        for entry in self.reflector.list_declared_metadata(target):
            normalized = self.normalizer.normalize(entry)
            if normalized is None:
                continue
            if isinstance(normalized, Fact):
                context = context.merge({normalized.key: normalized.value})
                continue
            context = self._materialize(context, instance)
            queue.insert_or_replace(self._construct(normalized, context))

        dispatched = run_eligible(queue, context)
        return PassResult(context=dispatched.context, queue=dispatched.remaining)

    def _materialize(
        self, context: ProcessingContext, instance: EntityInstance | None
    ) -> ProcessingContext:
        if "instance" in context or not context.get("class"):
            return context
        if instance is None:
            instance = EntityInstance(self.container, context["class"])
        return context.merge(instance=instance.get())

    def _construct(self, ref: HandlerRef, context: ProcessingContext) -> AnnotationHandler:
        handler_name = qualified_name(ref.handler_type)
        if inspect.isabstract(ref.handler_type):
            raise HandlerConstructionError(
                f"Handler {handler_name} is abstract and cannot be instantiated"
            ).with_context(entity=context.get("class"), method=context.get("method"), handler=handler_name)
        try:
            handler = self.container.make(ref.handler_type, *ref.entry.args, **ref.entry.kwargs)
        except Exception as exc:
            raise HandlerConstructionError(
                f"Could not construct {handler_name}: {exc}", cause=exc
            ).with_context(
                entity=context.get("class"), method=context.get("method"), handler=handler_name
            ) from exc
        log.debug("handler.queued", handler=handler_name, priority=handler.get_priority())
        return handler
