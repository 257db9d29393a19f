"""Client-side style navigation: route table, content tree and state machine."""
from .content import ContentNode, el, render_html
from .navigator import NavigationResult, Navigator, RenderTarget
from .pages import Redirect, RouteContext, RouteHandler, default_routes

__all__ = [
    "ContentNode",
    "el",
    "render_html",
    "NavigationResult",
    "Navigator",
    "RenderTarget",
    "Redirect",
    "RouteContext",
    "RouteHandler",
    "default_routes",
]
