"""Typed render outcomes with a fallback variant."""

import html
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class RenderError:
    """Why a widget could not be rendered."""

    widget: str
    message: str
    error_type: str


@dataclass(frozen=True)
class RenderResult:
    """Either rendered HTML or a RenderError plus fallback HTML.

    ``html`` is always safe to display: on failure it holds the fallback.
    """

    html: str
    error: Optional[RenderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fallback_html(error: RenderError) -> str:
    return (
        f'<div class="fpv-render-error" data-widget="{html.escape(error.widget)}">'
        f"Unable to display {html.escape(error.widget)}: {html.escape(error.message)}"
        f"</div>"
    )


def render_with_fallback(widget: str, render: Callable[[], str]) -> RenderResult:
    """Run ``render`` and wrap the outcome.

    Errors are converted to a RenderResult carrying the error and fallback
    HTML, so a host can always display something.
    """
    try:
        return RenderResult(html=render())
    except Exception as e:
        error = RenderError(widget=widget, message=str(e), error_type=type(e).__name__)
        return RenderResult(html=fallback_html(error), error=error)
