"""
Type reference resolution.

Walks `of_type` chains down to the named type they wrap, builds
documentation URLs and renders GraphQL type notation (`[User!]!`).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .schema import NAMED_KINDS, Description, TypeKind
from .utils import CyclicTypeRefError, InvalidTypeRefError, slugify

logger = logging.getLogger(__name__)

# GraphQL schemas are acyclic, but a malformed payload must not hang the walk.
MAX_TYPE_REF_DEPTH = 32

INDEX_PAGE = "index.html"
PAGE_SUFFIX = ".doc.html"

# Anything with a name and kind, optionally wrapping another node via `of_type`.
# SchemaType qualifies as a chain of length zero.
RefToUrl = Callable[[Description], str]


def _chain(ref: Description) -> list[Description]:
    nodes = [ref]
    node = ref
    while getattr(node, "of_type", None) is not None:
        if len(nodes) >= MAX_TYPE_REF_DEPTH:
            label = ref.name or ref.kind or "<anonymous>"
            raise CyclicTypeRefError(
                f"Type reference {label} is wrapped more than {MAX_TYPE_REF_DEPTH - 1} times",
                type_name=label,
            )
        node = node.of_type
        nodes.append(node)
    return nodes


def terminal_of(ref: Description) -> Description:
    """
    Follow `of_type` links to the named type at the end of the chain.

    Raises:
        CyclicTypeRefError: If the chain has MAX_TYPE_REF_DEPTH links or more
        InvalidTypeRefError: If the terminal node has no name or is a wrapper
    """
    terminal = _chain(ref)[-1]
    if not terminal.name:
        raise InvalidTypeRefError(
            f"Type reference chain of kind {ref.kind} ends without a named type"
        )
    if terminal.kind not in NAMED_KINDS:
        raise InvalidTypeRefError(
            f"Type reference {terminal.name} ends in kind {terminal.kind}, not a named kind",
            type_name=terminal.name,
        )
    return terminal


def wrappers_of(ref: Description) -> list[str]:
    """Wrapper kinds from outermost to innermost, e.g. ["NON_NULL", "LIST"]."""
    return [node.kind for node in _chain(ref)[:-1]]


def type_ref_to_str(ref: Description) -> str:
    """
    Render a type reference in GraphQL notation.

    Example:
        NON_NULL -> LIST -> NON_NULL -> SCALAR "ID"  =>  "[ID!]!"
    """
    nodes = _chain(ref)
    text = terminal_of(ref).name
    for node in reversed(nodes[:-1]):
        if not node.is_wrapper:
            raise InvalidTypeRefError(
                f"Unexpected wrapper kind {node.kind} around {text}", type_name=text
            )
        if node.kind == TypeKind.NON_NULL.value:
            text = f"{text}!"
        elif node.kind == TypeKind.LIST.value:
            text = f"[{text}]"
    return text


def page_filename(type_name: Optional[str]) -> str:
    """File name of a type's page; None is the index page."""
    if type_name is None:
        return INDEX_PAGE
    return f"{slugify(type_name)}{PAGE_SUFFIX}"


def default_type_url(ref: Description) -> str:
    """Page of the named type behind `ref`, e.g. "user.doc.html"."""
    return page_filename(terminal_of(ref).name)


@dataclass(frozen=True)
class ResolvedTypeRef:
    """Canonical identity of a type reference."""
    canonical_name: str
    url: str


class TypeRefResolver:
    """
    Resolve type references to canonical names and URLs.

    The URL function receives the original, outermost reference so it can
    inspect the wrappers itself (e.g. to annotate "list of").
    """

    def __init__(self, url: Optional[RefToUrl] = None):
        self.url = url or default_type_url

    def resolve(self, ref: Description) -> ResolvedTypeRef:
        canonical_name = terminal_of(ref).name
        return ResolvedTypeRef(canonical_name=canonical_name, url=self.url(ref))
