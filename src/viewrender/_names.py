"""Template identifier parsing."""

from dataclasses import dataclass
from typing import Final

DEFAULT_NAMESPACE: Final = "__default"
DEFAULT_TEMPLATE: Final = "index"
NAMESPACE_SEPARATOR: Final = ":"


@dataclass(slots=True, frozen=True)
class ParsedTemplateName:
    """A template identifier split into namespace and template path.

    Attributes:
        namespace: Namespace name, or DEFAULT_NAMESPACE when none was given.
        template: Template path relative to the namespace base directory.
    """

    namespace: str
    template: str


def parse_template_name(identifier: str) -> ParsedTemplateName:
    """Parse a ``[namespace:]template`` identifier.

    Only the first separator is significant, so ``"admin:a:b"`` names the
    template ``"a:b"`` in the ``admin`` namespace. A missing or empty
    namespace selects the default namespace, and a missing or empty template
    selects ``"index"``.

    Args:
        identifier: The template identifier to parse.

    Returns:
        The parsed namespace and template.
    """
    namespace, separator, template = identifier.partition(NAMESPACE_SEPARATOR)
    if not separator:
        namespace, template = "", identifier

    return ParsedTemplateName(
        namespace=namespace or DEFAULT_NAMESPACE,
        template=template or DEFAULT_TEMPLATE,
    )
