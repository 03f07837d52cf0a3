from __future__ import annotations
import logging
import reprlib
from functools import wraps
from typing import Any, Callable

_short = reprlib.Repr()
_short.maxstring = 60
_short.maxother = 60


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator logging calls and results at DEBUG; failures are logged and re-raised."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = logger_name or func.__module__
        logger = logging.getLogger(name)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Calling %s args=%s kwargs=%s",
                    func.__qualname__,
                    _short.repr(args),
                    _short.repr(kwargs),
                )
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.debug("Error in %s: %s", func.__qualname__, e)
                raise
            logger.debug("%s returned %s", func.__qualname__, _short.repr(result))
            return result

        return _wrapper

    return _decorator


def configure_logging(verbose: bool = False) -> None:
    """Root logging setup for command-line use; the library itself installs no handlers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
