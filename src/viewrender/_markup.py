"""Markup tree construction and serialization.

Templates build trees with h() and the renderer serializes them with
render_to_string(). A markup node is one of:

- an Element created by h()
- a list or tuple whose items are all markup nodes
- a foreign element: a mapping with non-None ``"type"`` and ``"props"``
  keys, or an object with non-None ``type`` and ``props`` attributes

Text is escaped with markupsafe; wrap trusted HTML in ``markupsafe.Markup``
to emit it verbatim.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Final

from markupsafe import Markup, escape

from viewrender.exceptions import InvalidTemplateOutputError

from ._partial import Partial

VOID_ELEMENTS: Final = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Props that never become attributes
_RESERVED_PROPS: Final = frozenset({"children", "key"})

_ATTRIBUTE_ALIASES: Final = {"className": "class", "htmlFor": "for"}

type ElementType = str | Callable[[dict[str, object]], object] | type[Partial]


@dataclass(slots=True, frozen=True)
class Element:
    """An HTML element or component invocation.

    Attributes:
        type: Tag name, function component, or Partial subclass.
        props: Attributes for tags, or arguments for components.
        children: Child nodes, text, or nested sequences of either.
    """

    type: ElementType
    props: Mapping[str, object] = field(default_factory=dict)
    children: tuple[object, ...] = ()


def _split_children(
    props: Mapping[str, object],
) -> tuple[dict[str, object], tuple[object, ...]]:
    attributes = dict(props)
    children = attributes.pop("children", ())
    if isinstance(children, (list, tuple)):
        return attributes, tuple(children)
    return attributes, (children,)


def h(type_: ElementType, props: object = None, *children: object) -> Element:
    """Create an Element.

    ``props`` may be omitted: if the second argument is not a mapping it is
    treated as the first child, so ``h("p", "text")`` works. A ``children``
    prop is used as the children when none are passed positionally.

    Example:
        h("ul", {"class_": "nav"}, [h("li", item) for item in items])
    """
    if props is None:
        return Element(type_, {}, children)
    if isinstance(props, Mapping):
        attributes, prop_children = _split_children(props)
        return Element(type_, attributes, children or prop_children)
    return Element(type_, {}, (props, *children))


def Fragment(props: Mapping[str, object]) -> object:  # noqa: N802
    """Component that renders its children without a wrapping element."""
    return props.get("children", ())


def is_markup_node(value: object) -> bool:
    """Check whether a value can be serialized as markup.

    An empty list is valid. Strings, numbers, None and element-like values
    with a missing or None ``type`` or ``props`` are not.
    """
    match value:
        case Element():
            return True
        case list() | tuple():
            return all(is_markup_node(item) for item in value)
        case str() | bytes() | None:
            return False
        case Mapping():
            return value.get("type") is not None and value.get("props") is not None
        case _:
            return (
                getattr(value, "type", None) is not None
                and getattr(value, "props", None) is not None
            )


def assert_is_markup_node(value: object, message: str) -> None:
    """Raise InvalidTemplateOutputError with ``message`` unless ``value`` is markup."""
    if not is_markup_node(value):
        raise InvalidTemplateOutputError(message)


def _as_element(value: object) -> Element:
    if isinstance(value, Element):
        return value
    if isinstance(value, Mapping):
        type_, props = value["type"], value["props"]
    else:
        type_, props = getattr(value, "type"), getattr(value, "props")  # noqa: B009
    attributes, children = _split_children(props)
    return Element(type_, attributes, children)


def _attribute_name(name: str) -> str:
    if name in _ATTRIBUTE_ALIASES:
        return _ATTRIBUTE_ALIASES[name]
    return name.rstrip("_").replace("_", "-")


def _attribute_value(value: object) -> str:
    if isinstance(value, Mapping):
        return "; ".join(f"{key}: {item}" for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value if item)
    return str(value)


def render_attributes(props: Mapping[str, object]) -> str:
    """Serialize element props to an attribute string with a leading space.

    ``True`` renders a bare attribute, ``False`` and ``None`` are omitted,
    and a trailing underscore is dropped so ``class_`` becomes ``class``.
    """
    parts: list[str] = []
    for name, value in props.items():
        if name in _RESERVED_PROPS or value is None or value is False:
            continue
        attribute = _attribute_name(name)
        if value is True:
            parts.append(f" {attribute}")
        else:
            parts.append(f' {attribute}="{escape(_attribute_value(value))}"')
    return "".join(parts)


def _render_component(element: Element) -> object:
    props: dict[str, object] = {**element.props, "children": list(element.children)}
    component = element.type
    if isinstance(component, type) and issubclass(component, Partial):
        result = component(props).render()
    elif callable(component):
        result = component(props)
    else:
        msg = f"Invalid element type: {component!r}"
        raise TypeError(msg)

    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        msg = (
            f"Component {component!r} returned an awaitable; "
            "await data in the template before building markup"
        )
        raise TypeError(msg)
    return result


def _render_children(children: Iterable[object], out: list[str]) -> None:
    for child in children:
        _render_node(child, out)


def _render_node(node: object, out: list[str]) -> None:
    match node:
        case None | bool():
            return
        case Markup():
            out.append(str(node))
        case str():
            out.append(str(escape(node)))
        case Element(type=str() as tag, props=props, children=children):
            out.append(f"<{tag}{render_attributes(props)}>")
            if tag.lower() in VOID_ELEMENTS:
                return
            _render_children(children, out)
            out.append(f"</{tag}>")
        case Element():
            _render_node(_render_component(node), out)
        case Partial():
            _render_node(node.render(), out)
        case list() | tuple():
            _render_children(node, out)
        case _ if is_markup_node(node):
            _render_node(_as_element(node), out)
        case Iterable() if not isinstance(node, (bytes, Mapping)):
            _render_children(node, out)
        case _:
            out.append(str(escape(str(node))))


def render_to_string(node: object) -> str:
    """Serialize a markup tree to an HTML string.

    Raises:
        TypeError: If an element has an invalid type, or a component returns
            an awaitable.
    """
    out: list[str] = []
    _render_node(node, out)
    return "".join(out)
