"""Toast notifications.

Mutations report their outcome as toasts. The Toaster keeps them in a
bounded queue, logs every one, and forwards them to an optional listener
(the CLI prints them).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Literal

import structlog

logger = structlog.get_logger(__name__)

ToastVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Toast:
    """A user-visible notification."""

    title: str
    description: str = ""
    variant: ToastVariant = "default"
    duration: int | None = None  # milliseconds, None = UI default

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


class Toaster:
    """Collects toasts and fans them out to a listener."""

    def __init__(
        self,
        listener: Callable[[Toast], None] | None = None,
        limit: int = 50,
    ):
        self._toasts: deque[Toast] = deque(maxlen=limit)
        self._listener = listener

    def toast(
        self,
        title: str,
        description: str = "",
        variant: ToastVariant = "default",
        duration: int | None = None,
    ) -> Toast:
        """Show a toast."""
        item = Toast(title=title, description=description, variant=variant, duration=duration)
        self._toasts.append(item)

        if item.is_error:
            logger.warning("toast_error", title=title, description=description)
        else:
            logger.info("toast", title=title, description=description)

        if self._listener is not None:
            self._listener(item)
        return item

    def success(self, description: str) -> Toast:
        return self.toast("Success", description)

    def error(self, description: str, title: str = "Error", duration: int | None = None) -> Toast:
        return self.toast(title, description, variant="destructive", duration=duration)

    @property
    def toasts(self) -> list[Toast]:
        """Toasts shown so far, oldest first."""
        return list(self._toasts)

    @property
    def last(self) -> Toast | None:
        return self._toasts[-1] if self._toasts else None

    def dismiss_all(self) -> None:
        self._toasts.clear()
