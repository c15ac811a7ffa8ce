"""
TUI decorators for safe action handling.
"""

import logging
from functools import wraps
from typing import Any, Callable, TypeVar


T = TypeVar("T")


def safe_action(action_func: Callable[..., Any]) -> Callable[..., Any]:
    """Skip the action until state is loaded; log and report failures."""

    @wraps(action_func)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        if getattr(self, "state", None) is None:
            return None

        try:
            return action_func(self, *args, **kwargs)
        except (RuntimeError, LookupError, ValueError, OSError) as e:
            logging.exception("Action %s failed", action_func.__name__)
            if hasattr(self, "notify"):
                self.notify(str(e), severity="error")
            return None

    return wrapper
