"""
Ops — data-driven dispatch executed through nodnod.

Core idea:
- Op[T, E] is the base class for operations (frozen dataclasses)
- each handler becomes a nodnod node whose dependencies are its parameters
- the request itself and shared dependencies are injected into the scope
- the node's value is the handler's kungfu Result

Example:
    @dataclass(frozen=True, slots=True)
    class ResolveTiered(Op[DiscountDecision, Never]):
        context: CartDiscountContext

    async def resolve(req: ResolveTiered, settings: ResolverSettings) -> Result[...]:
        ...

    runner = ops().on(ResolveTiered, resolve).compile().inject(ResolverSettings, s)
    result = await runner.run(ResolveTiered(ctx))
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast, get_type_hints

from kungfu import Error, LazyCoroResult, Ok, Result, Some
from nodnod import EventLoopAgent, Node, Scope, Value
from nodnod.utils.create_node import create_node

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")
T_co = TypeVar("T_co", covariant=True)
E_co = TypeVar("E_co", covariant=True)

HandlerFunc = Callable[..., Awaitable[Result[Any, Any]]]


class Op(ABC, Generic[T_co, E_co]):
    """Base class for operations. ``T_co`` is the success type, ``E_co`` the error."""


@dataclass(frozen=True, slots=True)
class _OpReg:
    """Registration: Op type → handler + node + pre-built agent."""
    op_type: type[Op[Any, Any]]
    handler: HandlerFunc
    node_cls: type[Node[Any, Any]]
    agent: EventLoopAgent


def _create_node_for_handler(
    op_type: type[Op[Any, Any]],
    handler: HandlerFunc,
) -> type[Node[Any, Any]]:
    """
    Create a nodnod Node from a handler function.

    Every parameter is injected from the scope by its annotation; the one
    annotated with ``op_type`` receives the request.
    """
    sig = inspect.signature(handler)
    hints = get_type_hints(handler)

    compose_annotations: dict[str, Any] = {}
    compose_params: list[inspect.Parameter] = []
    for pname, p in sig.parameters.items():
        compose_annotations[pname] = hints.get(pname, p.annotation)
        compose_params.append(
            inspect.Parameter(pname, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        )
    compose_annotations["return"] = Result[Any, Any]

    async def compose_fn(**kwargs: Any) -> Result[Any, Any]:
        return await handler(**kwargs)

    compose_fn.__annotations__ = compose_annotations
    compose_fn.__signature__ = inspect.Signature(parameters=compose_params)  # type: ignore[attr-defined]
    compose_fn.__name__ = f"compose_{op_type.__name__}"

    return create_node(
        name=f"Node:{op_type.__name__}",
        base_node=Node,
        bases=(),
        namespace={
            "__compose__": compose_fn,
            "__module__": handler.__module__,
        },
    )


@dataclass(slots=True, frozen=True)
class OpsBuilder:
    """Builder for operation handlers."""
    _items: tuple[tuple[type[Op[Any, Any]], HandlerFunc], ...] = ()

    def on(self, op_type: type[Op[Any, Any]], handler: HandlerFunc) -> OpsBuilder:
        """Register handler for operation type. Last registration wins."""
        others = tuple(i for i in self._items if i[0] is not op_type)
        return OpsBuilder(_items=(*others, (op_type, handler)))

    def compile(self) -> Runner:
        """Build one node and one agent per registered op."""
        registrations: dict[type[Op[Any, Any]], _OpReg] = {}
        for op_type, handler in self._items:
            node_cls = _create_node_for_handler(op_type, handler)
            registrations[op_type] = _OpReg(
                op_type=op_type,
                handler=handler,
                node_cls=node_cls,
                agent=EventLoopAgent.build({node_cls}),
            )
        return Runner(_registry=registrations)


@dataclass(slots=True)
class Runner:
    """Executes registered operations; every outcome is a kungfu Result."""
    _registry: dict[type[Op[Any, Any]], _OpReg]
    _shared: list[tuple[type[Any], Any]] = field(default_factory=list[tuple[type[Any], Any]])

    def inject(self, typ: type[object], impl: object) -> Runner:
        """Inject a shared dependency, visible to every handler."""
        self._shared.append((typ, impl))
        return self

    def handles(self, op_type: type[Op[Any, Any]]) -> bool:
        return op_type in self._registry

    async def run(self, req: Op[T, E]) -> Result[T, E]:
        op_type = type(req)
        reg = self._registry.get(op_type)
        if reg is None:
            logger.error("Op not registered: %s", op_type.__name__)
            return cast(Result[T, E], Error(f"Op not registered: {op_type.__name__}"))

        scope = Scope(detail=f"ops:{op_type.__name__}")
        async with scope:
            for typ, impl in self._shared:
                scope.push(Value(typ, impl))
            scope.push(Value(op_type, req))

            await reg.agent.run(local_scope=scope, mapped_scopes={})  # type: ignore[misc]

            match scope.retrieve(reg.node_cls):
                case Some(val):
                    node_result = val.value
                    if isinstance(node_result, (Ok, Error)):
                        return cast(Result[T, E], node_result)
                    return cast(Result[T, E], Ok(node_result))
                case _:
                    return cast(Result[T, E], Error(f"Node not found: {reg.node_cls}"))

    def __call__(self, req: Op[T, E]) -> LazyCoroResult[T, E]:
        """Execute operation (returns awaitable)."""
        async def inner() -> Result[T, E]:
            return await self.run(req)
        return LazyCoroResult(inner)


def ops() -> OpsBuilder:
    """Create ops builder: ops().on(...).compile()"""
    return OpsBuilder()


# Aliases
Returns = Op
Returning = Op

__all__ = ("Op", "Returns", "Returning", "OpsBuilder", "Runner", "ops")
