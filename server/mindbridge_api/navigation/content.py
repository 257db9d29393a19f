"""Small content tree used as the router's render output."""
from dataclasses import dataclass, field
from html import escape
from typing import Iterator, Union

VOID_TAGS = {"br", "hr", "img", "input", "meta", "link"}


@dataclass
class ContentNode:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Union["ContentNode", str]] = field(default_factory=list)

    def iter(self) -> Iterator["ContentNode"]:
        """Depth-first walk over this node and every descendant element."""
        yield self
        for child in self.children:
            if isinstance(child, ContentNode):
                yield from child.iter()

    def find_all(self, tag: str) -> list["ContentNode"]:
        return [node for node in self.iter() if node.tag == tag]

    def find_id(self, element_id: str) -> "ContentNode | None":
        return next((node for node in self.iter() if node.attrs.get("id") == element_id), None)

    def text(self) -> str:
        parts = []
        for child in self.children:
            parts.append(child.text() if isinstance(child, ContentNode) else child)
        return " ".join(p.strip() for p in parts if p and p.strip())


def el(tag: str, *children: Union[ContentNode, str, None], **attrs) -> ContentNode:
    """
    Build a node. Keyword names map to attributes: a trailing underscore
    is dropped (`class_`) and other underscores become hyphens (`data_mood`).
    Boolean True renders as a bare attribute; False and None are omitted.
    """
    rendered = {}
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        key = name.rstrip("_").replace("_", "-")
        rendered[key] = "" if value is True else str(value)
    return ContentNode(tag=tag, attrs=rendered, children=[c for c in children if c is not None])


def render_html(node: Union[ContentNode, str]) -> str:
    if isinstance(node, str):
        return escape(node, quote=False)
    attrs = "".join(
        f" {key}" if value == "" else f' {key}="{escape(value, quote=True)}"'
        for key, value in node.attrs.items()
    )
    if node.tag in VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    inner = "".join(render_html(child) for child in node.children)
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"
