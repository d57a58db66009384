"""Render result wrapper for the viewer's composition root.

Screens build their content through render_safely so a failure while
loading or laying out a trip turns into a fallback view instead of
tearing down the whole app.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from photo_stories.app.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RenderError:
    """A failure captured while rendering.

    Attributes:
        title: Heading for the fallback view
        message: Human readable detail
        exception: The exception that was caught, if any
    """

    title: str
    message: str
    exception: Optional[BaseException] = None


@dataclass(frozen=True)
class RenderResult(Generic[T]):
    """Either a rendered value or the error that prevented it."""

    value: Optional[T] = None
    error: Optional[RenderError] = None

    @classmethod
    def ok(cls, value: T) -> "RenderResult[T]":
        return cls(value=value)

    @classmethod
    def err(cls, error: RenderError) -> "RenderResult[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None


def render_safely(
    fn: Callable[..., T], *args: Any, title: str = "Something went wrong", **kwargs: Any
) -> RenderResult[T]:
    """Call a render function, capturing any exception.

    Args:
        fn: Function producing the view or data to show
        *args: Positional arguments for fn
        title: Heading to use if fn raises
        **kwargs: Keyword arguments for fn

    Returns:
        RenderResult.ok with fn's return value, or RenderResult.err
    """
    try:
        return RenderResult.ok(fn(*args, **kwargs))
    except Exception as e:
        logger.exception(f"Render failed in {getattr(fn, '__name__', fn)!s}")
        return RenderResult.err(RenderError(title=title, message=str(e), exception=e))
