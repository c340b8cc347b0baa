"""
Request/response codec — a transport model in, an Op out, a Result back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, get_type_hints

from kungfu import Result
from pydantic import BaseModel, ValidationError

from referral_discount.ops import Op


T_co = TypeVar("T_co", covariant=True)
E_co = TypeVar("E_co", covariant=True)
DomainT_co = TypeVar("DomainT_co", covariant=True)
DomainT_contra = TypeVar("DomainT_contra", contravariant=True)


class FunctionInputError(Exception):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ToDomain(Protocol[DomainT_co]):
    def to_domain(self) -> DomainT_co: ...


class FromDomain(Protocol[DomainT_contra]):
    @classmethod
    def from_domain(cls, dom: DomainT_contra) -> FromDomain[DomainT_contra]: ...


@dataclass(frozen=True, slots=True)
class RequestResponseCodec:
    request: type[ToDomain[Any]]
    response: type[FromDomain[Result[Any, Any]]]

    if TYPE_CHECKING:

        def __init__(
            self,
            request: type[ToDomain[Op[T_co, E_co]]],
            response: type[FromDomain[Result[T_co, E_co]]],
        ) -> None: ...

    @property
    def op_type(self) -> type[Op[Any, Any]] | None:
        """The Op class ``request.to_domain()`` is annotated to return."""
        hint = get_type_hints(self.request.to_domain).get("return")
        return hint if isinstance(hint, type) and issubclass(hint, Op) else None

    def decode(self, raw: str | bytes) -> Op[Any, Any]:
        """Parse a JSON document into the request model, then into its Op."""
        if not issubclass(self.request, BaseModel):
            raise TypeError(f"{self.request.__name__} is not a pydantic model")
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise FunctionInputError("invalid_input", f"not UTF-8: {exc}") from exc
        try:
            payload = self.request.model_validate_json(raw)
        except ValidationError as exc:
            raise FunctionInputError("invalid_input", str(exc)) from exc
        return payload.to_domain()  # type: ignore[attr-defined,no-any-return]

    def encode(self, result: Result[Any, Any]) -> Any:
        return self.response.from_domain(result)
