import logging
import traceback
from typing import Any, Dict

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Reports listener failures recorded on the event context."""

    def __init__(self) -> None:
        self.error_counts: Dict[str, int] = {}

    async def __call__(self, event_context: Dict[str, Any], phase: str) -> None:
        if phase != "post":
            return

        error = event_context.get("error")
        if not error:
            return

        event_name = event_context.get("event_name", "unknown")
        self.error_counts[event_name] = self.error_counts.get(event_name, 0) + 1

        logger.error(f"Error in event {event_name}: {error}")
        logger.debug("".join(traceback.format_exception(type(error), error, error.__traceback__)))


# Global instance
error_handler_middleware = ErrorHandlerMiddleware()
