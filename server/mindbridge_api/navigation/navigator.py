"""Fragment-driven navigation state machine.

A navigation resolves a fragment to a route and skips redundant re-renders.
Otherwise the title is set up front, the route renders (following
redirects) into the render target and its wiring runs; the loading
indicator is always hidden afterwards. Render failures never escape: they
are logged and replaced by the generic error view under the same title.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..errors import RouteContentError
from ..services.chart import ChartDrawing
from .content import ContentNode, render_html
from .pages import Redirect, RouteContext, RouteHandler, error_content

logger = logging.getLogger(__name__)

DEFAULT_ROUTE = "home"
MAX_REDIRECTS = 3


@dataclass
class RenderTarget:
    """The container whose whole content is replaced on every transition."""

    content: Optional[ContentNode] = None
    title: str = ""
    active_link: Optional[str] = None
    loading: bool = False
    loading_shown: int = 0
    effects: list[str] = field(default_factory=list)
    chart: Optional[ChartDrawing] = None

    def show_loading(self) -> None:
        self.loading = True
        self.loading_shown += 1

    def hide_loading(self) -> None:
        self.loading = False

    def replace(self, content: ContentNode) -> None:
        self.content = content
        self.effects = []
        self.chart = None

    @property
    def html(self) -> str:
        return render_html(self.content) if self.content is not None else ""


@dataclass
class NavigationResult:
    route: Optional[str]
    changed: bool
    fragment: str
    redirected_from: Optional[str] = None
    error: Optional[str] = None


class Navigator:
    """Maps location fragments to route handlers and tracks the current route."""

    def __init__(
        self,
        routes: dict[str, RouteHandler],
        context: RouteContext,
        target: Optional[RenderTarget] = None,
        default_route: str = DEFAULT_ROUTE,
    ):
        if default_route not in routes:
            raise ValueError(f"Default route {default_route!r} is not in the route table")
        self.routes = routes
        self.context = context
        self.target = target or RenderTarget()
        self.default_route = default_route
        self.current_route: Optional[str] = None
        self.fragment = ""

    def resolve(self, fragment: str) -> str:
        """Route name for a fragment; empty or unknown fragments go to the default route."""
        name = (fragment or "").lstrip("#").strip()
        if not name:
            return self.default_route
        if name not in self.routes:
            logger.info("Route %r not found, loading %s", name, self.default_route)
            return self.default_route
        return name

    def navigate(self, fragment: str) -> NavigationResult:
        self.fragment = f"#{(fragment or '').lstrip('#')}"
        return self._load(self.resolve(fragment), redirected_from=None, depth=0)

    def intercept_link(self, href: str) -> Optional[NavigationResult]:
        """Turn an in-page `#...` link into a navigation; other links are left alone."""
        if not href or not href.startswith("#"):
            return None
        return self.navigate(href)

    def reload(self) -> NavigationResult:
        """Re-render the current route, e.g. after logging in or out."""
        return self.reload_to(self.current_route or self.default_route)

    def reload_to(self, fragment: str) -> NavigationResult:
        """Navigate to fragment even when it is already the current route."""
        self.current_route = None
        return self.navigate(fragment)

    def _load(self, name: str, redirected_from: Optional[str], depth: int) -> NavigationResult:
        if self.current_route == name:
            return NavigationResult(route=name, changed=False, fragment=self.fragment, redirected_from=redirected_from)

        handler = self.routes[name]
        logger.debug("Loading route %s", name)
        previous_title = self.target.title
        self.target.title = handler.title
        self.target.show_loading()
        try:
            content = handler.render(self.context)

            if isinstance(content, Redirect):
                if depth >= MAX_REDIRECTS:
                    raise RuntimeError(f"Too many redirects starting at {redirected_from or name!r}")
                logger.info("Route %s redirected to %s", name, content.target)
                self.target.title = previous_title
                self.fragment = f"#{content.target}"
                return self._load(self.resolve(content.target), redirected_from=redirected_from or name, depth=depth + 1)

            self.target.replace(content)
            self.target.active_link = f"#{name}"
            handler.after_render(self.context, self.target)
            # only a fully wired route becomes current
            self.current_route = name
            return NavigationResult(route=name, changed=True, fragment=self.fragment, redirected_from=redirected_from)
        except Exception as e:
            error = RouteContentError(name, e)
            logger.exception("Error loading route %s", name)
            self.target.replace(error_content())
            return NavigationResult(
                route=self.current_route, changed=True, fragment=self.fragment,
                redirected_from=redirected_from, error=str(error),
            )
        finally:
            self.target.hide_loading()
