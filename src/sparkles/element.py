"""Minimal host element tree.

Sparkle effects attach to anything that reports a rendered width and height
and can hold child nodes. Element is a plain in-memory implementation used
for offline rendering and tests; sparkles.arcade_host.SpriteElement binds the
same interface to an arcade sprite.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class HostElement(Protocol):
    """Anything a sparkle overlay can be attached to."""

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    def append_child(self, node: Any) -> None: ...  # noqa: ANN401

    def remove_child(self, node: Any) -> None: ...  # noqa: ANN401


@dataclass(eq=False)
class Element:
    """A rectangular node with style classes and children.

    Attributes:
        width: Rendered width in pixels.
        height: Rendered height in pixels.
        classes: Style class names, matched by ".name" selectors.
        children: Child nodes in append order (elements and overlays).
        name: Optional label, only used in logs and reprs.
    """

    width: float
    height: float
    classes: set[str] = field(default_factory=set)
    children: list[Any] = field(default_factory=list)
    name: str = ""

    def append_child(self, node: Any) -> None:  # noqa: ANN401
        """Append node as the last child."""
        self.children.append(node)

    def remove_child(self, node: Any) -> None:  # noqa: ANN401
        """Remove node if it is a child; do nothing otherwise."""
        if node in self.children:
            self.children.remove(node)

    def has_class(self, name: str) -> bool:
        """Return True if the element carries the style class name."""
        return name in self.classes

    def iter_elements(self) -> Iterator[Element]:
        """Yield this element and every descendant element, depth first."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter_elements()

    def __repr__(self) -> str:
        label = self.name or "element"
        return f"<{label} {self.width}x{self.height} classes={sorted(self.classes)}>"


def query_selector_all(root: Element, selector: str) -> list[Element]:
    """Return every element under root (root included) matching a class selector.

    Args:
        root: Element whose subtree is searched.
        selector: A single class selector such as ".sparkle".

    Returns:
        Matching elements in document order.

    Raises:
        ValueError: If selector is not a single ".class" selector.
    """
    class_name = selector.strip()
    if not class_name.startswith(".") or len(class_name) < 2 or any(c in class_name[1:] for c in ". #>[:"):
        msg = f"Unsupported selector: {selector!r} (only '.class' selectors are supported)"
        raise ValueError(msg)
    class_name = class_name[1:]
    return [element for element in root.iter_elements() if element.has_class(class_name)]
