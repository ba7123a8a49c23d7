import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class EventSystem:
    """Internal pub/sub used to hand gateway events to plugins."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable]] = {}
        self._middleware: list[Callable] = []

    def add_middleware(self, middleware: Callable) -> None:
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {type(middleware).__name__}")

    def add_listener(self, event_name: str, callback: Callable) -> None:
        self._listeners.setdefault(event_name, []).append(callback)
        logger.debug(f"Added listener for {event_name}: {callback.__name__}")

    def remove_listener(self, event_name: str, callback: Callable) -> None:
        if event_name in self._listeners:
            try:
                self._listeners[event_name].remove(callback)
                logger.debug(f"Removed listener for {event_name}: {callback.__name__}")
            except ValueError:
                logger.warning(f"Listener {callback.__name__} not found for {event_name}")

    async def emit(self, event_name: str, *args: Any, **kwargs: Any) -> None:
        listeners = self._listeners.get(event_name)
        if not listeners:
            return

        event_context = {
            "event_name": event_name,
            "args": args,
            "kwargs": kwargs,
            "stopped": False,
            "error": None,
        }

        # Run middleware (pre-processing)
        for middleware in self._middleware:
            try:
                result = await self._call_maybe_async(middleware, event_context, "pre")
                if result is False or event_context.get("stopped"):
                    logger.debug(f"Event {event_name} stopped by middleware")
                    return
            except Exception as e:
                logger.error(f"Error in middleware {type(middleware).__name__}: {e}")

        # Execute listeners concurrently; one failing listener does not stop the others
        listeners = list(listeners)
        results = await asyncio.gather(
            *(self._call_maybe_async(listener, *args, **kwargs) for listener in listeners),
            return_exceptions=True,
        )
        for listener, result in zip(listeners, results):
            if isinstance(result, Exception):
                logger.error(f"Error in listener {listener.__name__} for {event_name}: {result}")
                event_context["error"] = result

        # Run middleware (post-processing)
        for middleware in self._middleware:
            try:
                await self._call_maybe_async(middleware, event_context, "post")
            except Exception as e:
                logger.error(f"Error in middleware {type(middleware).__name__} (post): {e}")

    async def _call_maybe_async(self, func: Callable, *args: Any, **kwargs: Any) -> Any:
        result = func(*args, **kwargs)
        if asyncio.iscoroutine(result):
            return await result
        return result


# Decorator for event listeners
def event_listener(event_name: str) -> Callable:
    def decorator(func: Callable) -> Callable:
        func._event_listener = event_name
        return func

    return decorator
