"""
Dynamic TLS option providers.

A provider is a deferred source of extra TLS options, invoked every time a
connection policy is resolved (e.g. to fetch a client certificate from a
secret store). It is one of two variants:

- ``DynamicCall``: a named function in a module, applied to fixed arguments.
- ``Closure``: a zero-argument callable.

Both must return ``ProviderOk(options)`` to add options or
``ProviderError(cause)`` to abort the connection attempt.
"""
import asyncio
import importlib
import inspect
import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Mapping, Tuple, Union

from .errors import InvalidProviderResultError, ProviderTargetNotFoundError, TlsConfigError
from .options import OptionList

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderOk:
    """Successful provider result carrying extra TLS options."""
    options: OptionList = ()

    def __post_init__(self):
        object.__setattr__(self, "options", OptionList.coerce(self.options))


@dataclass(frozen=True)
class ProviderError:
    """Explicit provider failure; ``cause`` is the exception to surface."""
    cause: BaseException


ProviderResult = Union[ProviderOk, ProviderError]


@dataclass(frozen=True)
class DynamicCall:
    """Call ``module.function(*args)``; ``module`` may be an import path."""
    module: Union[str, ModuleType]
    function: str
    args: Tuple[Any, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    @classmethod
    def from_path(cls, path: str, args: Any = ()) -> "DynamicCall":
        """Build from ``"package.module:function"`` or ``"package.module.function"``."""
        if ":" in path:
            module, _, function = path.partition(":")
        else:
            module, _, function = path.rpartition(".")
        if not module or not function:
            raise TlsConfigError(f"Invalid provider path '{path}', expected 'module:function'")
        return cls(module=module, function=function, args=tuple(args))

    @property
    def module_name(self) -> str:
        if isinstance(self.module, ModuleType):
            return self.module.__name__
        return self.module

    def target(self) -> Callable[..., Any]:
        if isinstance(self.module, ModuleType):
            module = self.module
        else:
            try:
                module = importlib.import_module(self.module)
            except ModuleNotFoundError as e:
                # Only a missing target module; failing imports inside it propagate
                if e.name != self.module and not self.module.startswith(f"{e.name}."):
                    raise
                raise ProviderTargetNotFoundError(self.module, self.function) from e
        fn = getattr(module, self.function, None)
        if not callable(fn):
            raise ProviderTargetNotFoundError(self.module_name, self.function)
        return fn

    def invoke(self) -> Any:
        logger.debug(f"Invoking TLS option provider {self.module_name}.{self.function}/{len(self.args)}")
        return self.target()(*self.args)


@dataclass(frozen=True)
class Closure:
    """Call a zero-argument function."""
    fn: Callable[[], Any]

    def __post_init__(self):
        if not callable(self.fn):
            raise TypeError(f"Closure provider must be callable, got {self.fn!r}")

    def invoke(self) -> Any:
        logger.debug(f"Invoking TLS option provider {getattr(self.fn, '__qualname__', repr(self.fn))}")
        return self.fn()


Provider = Union[DynamicCall, Closure]


def coerce_provider(value: Any) -> Union[Provider, None]:
    """Build a provider from its configuration form.

    Accepted forms: a DynamicCall or Closure, a ``"module:function"`` path,
    a ``(module, function, args)`` triple, a mapping with ``module``,
    ``function`` and ``args`` (or ``target`` and ``args``), or a zero-argument
    callable.
    """
    if value is None or isinstance(value, (DynamicCall, Closure)):
        return value
    if isinstance(value, str):
        return DynamicCall.from_path(value)
    if isinstance(value, tuple) and len(value) == 3 and isinstance(value[1], str):
        module, function, args = value
        return DynamicCall(module=module, function=function, args=tuple(args))
    if isinstance(value, Mapping):
        args = value.get("args") or ()
        if value.get("target"):
            return DynamicCall.from_path(value["target"], args)
        if value.get("module") and value.get("function"):
            return DynamicCall(module=value["module"], function=value["function"], args=tuple(args))
        raise TlsConfigError(f"Provider mapping needs 'target' or 'module' and 'function', got {dict(value)!r}")
    if callable(value):
        return Closure(value)
    raise TlsConfigError(f"Unsupported TLS option provider {value!r}")


def check_result(result: Any) -> ProviderResult:
    """Accept only the two provider result shapes.

    Anything else is a defect in the provider and is raised, never turned
    into a failed decision.
    """
    if isinstance(result, ProviderOk):
        return result
    if isinstance(result, ProviderError):
        if not isinstance(result.cause, BaseException):
            raise InvalidProviderResultError(result, "ProviderError cause must be an exception")
        return result
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        raise InvalidProviderResultError(result, "awaitable providers need resolve_async()")
    raise InvalidProviderResultError(result)


def invoke_provider(provider: Union[Provider, None]) -> ProviderResult:
    """Invoke ``provider`` and validate its result. No provider means no extra options."""
    if provider is None:
        return ProviderOk()
    if not isinstance(provider, (DynamicCall, Closure)):
        raise TypeError(f"Unsupported TLS option provider {provider!r}")
    return check_result(provider.invoke())


async def invoke_provider_async(provider: Union[Provider, None]) -> ProviderResult:
    """Async variant: awaitable results are awaited, blocking providers run in a thread."""
    if provider is None:
        return ProviderOk()
    if not isinstance(provider, (DynamicCall, Closure)):
        raise TypeError(f"Unsupported TLS option provider {provider!r}")

    if isinstance(provider, Closure):
        fn, args = provider.fn, ()
    else:
        # Importing the target module may block, keep it off the event loop
        fn, args = await asyncio.to_thread(provider.target), provider.args
    logger.debug(f"Invoking TLS option provider {getattr(fn, '__qualname__', repr(fn))} asynchronously")

    if inspect.iscoroutinefunction(fn):
        result = await fn(*args)
    else:
        result = await asyncio.to_thread(fn, *args)
        if inspect.isawaitable(result):
            result = await result
    return check_result(result)
