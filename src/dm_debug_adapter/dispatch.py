"""Command registry mapping DAP command names to handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError

from dm_debug_adapter.exceptions import DuplicateCommandError
from dm_debug_adapter.exceptions import InvalidArgumentsError
from dm_debug_adapter.exceptions import UnknownCommandError

if TYPE_CHECKING:
    from collections.abc import Awaitable
    from collections.abc import Callable
    from collections.abc import Iterable

    from dm_debug_adapter.adapter import DebugAdapter

ArgsT = TypeVar("ArgsT", bound=BaseModel)


class CommandHandler(Generic[ArgsT]):
    """A single DAP command: decode the arguments, run, encode the result."""

    def __init__(
        self,
        command: str,
        arguments_model: type[ArgsT],
        func: Callable[[DebugAdapter, ArgsT], Awaitable[BaseModel | None]],
    ) -> None:
        self.command = command
        self.arguments_model = arguments_model
        self.func = func

    def __repr__(self) -> str:
        return f"CommandHandler({self.command!r}, {self.arguments_model.__name__})"

    def decode(self, arguments: Any) -> ArgsT:
        """Validate raw request arguments into the command's argument model.

        Raises:
            InvalidArgumentsError: If the arguments do not fit the model.
        """
        try:
            return self.arguments_model.model_validate({} if arguments is None else arguments)
        except ValidationError as e:
            raise InvalidArgumentsError(f"invalid arguments for `{self.command}`: {e}") from e

    async def invoke(self, adapter: DebugAdapter, params: ArgsT) -> BaseModel | None:
        """Run the handler."""
        return await self.func(adapter, params)

    def encode(self, result: BaseModel | None) -> dict[str, Any] | None:
        """Turn the handler result into a response body."""
        if result is None:
            return None
        return result.model_dump(by_alias=True, exclude_none=True)

    async def __call__(self, adapter: DebugAdapter, arguments: Any) -> dict[str, Any] | None:
        params = self.decode(arguments)
        return self.encode(await self.invoke(adapter, params))


def command(
    name: str,
    arguments_model: type[ArgsT],
) -> Callable[
    [Callable[[DebugAdapter, ArgsT], Awaitable[BaseModel | None]]], CommandHandler[ArgsT]
]:
    """Decorator turning an async function into a ``CommandHandler``.

    Args:
        name: DAP command name, e.g. ``"initialize"``.
        arguments_model: Pydantic model the request arguments decode into.
    """

    def decorator(
        func: Callable[[DebugAdapter, ArgsT], Awaitable[BaseModel | None]],
    ) -> CommandHandler[ArgsT]:
        return CommandHandler(name, arguments_model, func)

    return decorator


class CommandRegistry:
    """Lookup table from command name to handler, fixed at construction."""

    def __init__(self, handlers: Iterable[CommandHandler[Any]]) -> None:
        self._handlers: dict[str, CommandHandler[Any]] = {}
        for handler in handlers:
            if handler.command in self._handlers:
                raise DuplicateCommandError(
                    f"command `{handler.command}` registered more than once"
                )
            self._handlers[handler.command] = handler

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    @property
    def commands(self) -> list[str]:
        """Registered command names."""
        return list(self._handlers)

    def get(self, name: str) -> CommandHandler[Any]:
        """Look up a handler.

        Raises:
            UnknownCommandError: If nothing handles ``name``.
        """
        try:
            return self._handlers[name]
        except KeyError:
            raise UnknownCommandError(f"unknown command `{name}`") from None

    async def dispatch(
        self,
        adapter: DebugAdapter,
        name: str,
        arguments: Any,
    ) -> dict[str, Any] | None:
        """Run the handler for ``name`` and return the response body."""
        return await self.get(name)(adapter, arguments)
