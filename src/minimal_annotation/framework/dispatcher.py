"""
Dispatch engine.

Runs the queued handlers that are eligible for the current target, folding
each result into the context, and hands back the handlers that were not
eligible so the next pass can try them.
"""

from __future__ import annotations

from dataclasses import dataclass

from minimal_annotation.core.context import ProcessingContext
from minimal_annotation.core.errors import HandlerError, HandlerInvocationError
from minimal_annotation.core.logging import get_logger
from minimal_annotation.core.naming import qualified_name

from .handler import AnnotationHandler
from .queue import AnnotationQueue

log = get_logger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    context: ProcessingContext
    remaining: AnnotationQueue
    invoked: int = 0


def run_eligible(queue: AnnotationQueue, context: ProcessingContext) -> DispatchResult:
    """Invoke eligible handlers in queue order.

    A handler runs when ``context["target"]`` is one of its targets.  A result
    is stored under the handler's context key when both are not None, and is
    visible to every handler that runs after it.

    Raises:
        HandlerInvocationError: a handler raised; the original error is the cause.
    """
    target = context.target
    remaining: list[AnnotationHandler] = []
    invoked = 0
    for handler in queue:
        if target not in handler.get_targets():
            remaining.append(handler)
            continue
        handler_name = qualified_name(type(handler))
        try:
            result = handler.handle(context)
        except HandlerError:
            raise
        except Exception as exc:
            raise HandlerInvocationError(
                f"Handler {handler_name} failed: {exc}", cause=exc
            ).with_context(
                entity=context.get("class"),
                method=context.get("method"),
                handler=handler_name,
            ) from exc
        invoked += 1
        key = handler.get_context_key()
        log.debug("handler.invoked", handler=handler_name, context_key=key, stored=result is not None)
        if result is not None and key is not None:
            context = context.merge({key: result})
    return DispatchResult(
        context=context, remaining=AnnotationQueue.from_ordered(remaining), invoked=invoked
    )
