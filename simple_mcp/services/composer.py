# simple_mcp/services/composer.py
"""
Feature-driven snippet composition.

A composer owns one category's fragments in a fixed precedence order. Output
order is a property of the category definition, never of how the caller
enumerated its selection.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Sequence, Tuple, Type, TypeVar

from simple_mcp.errors import CompositionDegenerate

SECTION_SEPARATOR = "\n\n"

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class Fragment:
    """
    A named, stateless text generator.
    `tags` is the applicability predicate: the fragment is pulled in when the
    selection contains any of them. `render` receives the composer context
    as keyword arguments and must be pure.
    """
    name: str
    tags: FrozenSet[Enum]
    render: Callable[..., str]

    def applies(self, selection: FrozenSet[Enum]) -> bool:
        return not self.tags.isdisjoint(selection)


def fragment(name: str, *tags: Enum) -> Callable[[Callable[..., str]], Fragment]:
    """Declare a render function as a fragment tied to `tags`."""
    def wrap(render: Callable[..., str]) -> Fragment:
        return Fragment(name=name, tags=frozenset(tags), render=render)
    return wrap


def code_block(body: str, lang: str = "typescript") -> str:
    body = body.strip("\n")
    return f"```{lang}\n{body}\n```"


def section(title: str, body: str, lang: str = "typescript") -> str:
    return f"### {title}\n{code_block(body, lang)}"


def join_sections(parts: Iterable[str], separator: str = SECTION_SEPARATOR) -> str:
    return separator.join(p for p in parts if p)


def require_exhaustive(category: str, table: Mapping[K, Any], keys: Iterable[K]) -> None:
    """Fail at definition time when a variant table does not cover its key space exactly."""
    expected = set(keys)
    missing = expected - set(table)
    extra = set(table) - expected
    if missing or extra:
        raise CompositionDegenerate(
            f"{category}: variant table mismatch (missing={sorted(map(str, missing))}, "
            f"extra={sorted(map(str, extra))})"
        )


def select_variant(category: str, table: Mapping[K, V], key: K) -> V:
    try:
        return table[key]
    except KeyError:
        raise CompositionDegenerate(f"{category}: no variant for {key!r}") from None


class SnippetComposer:
    """
    Compose one category's fragments into a single document.

    - `fragments` are evaluated in declaration order.
    - `preamble` fragments are emitted first for any non-empty selection.
    - `inert` tags are valid members that deliberately produce no fragment.
    """

    def __init__(
        self,
        category: str,
        tags: Type[Enum],
        fragments: Sequence[Fragment],
        *,
        preamble: Sequence[Fragment] = (),
        inert: Iterable[Enum] = (),
        separator: str = SECTION_SEPARATOR,
    ):
        self.category = category
        self.tags = tags
        self.fragments: Tuple[Fragment, ...] = tuple(fragments)
        self.preamble: Tuple[Fragment, ...] = tuple(preamble)
        self.inert: FrozenSet[Enum] = frozenset(inert)
        self.separator = separator
        self._by_name: Dict[str, Fragment] = {f.name: f for f in self.preamble + self.fragments}
        self._check_coverage()

    # ---------- Public API ----------

    def compose(self, selection: Iterable[Any], **context: Any) -> str:
        chosen = self.normalize(selection)
        if not chosen:
            return ""
        parts = [f.render(**context) for f in self.preamble + self.select(chosen)]
        return join_sections(parts, self.separator)

    def select(self, selection: Iterable[Any]) -> Tuple[Fragment, ...]:
        chosen = self.normalize(selection)
        return tuple(f for f in self.fragments if f.applies(chosen))

    def ordered(self, selection: Iterable[Any]) -> list:
        """Selected tags in precedence order."""
        chosen = self.normalize(selection)
        return [t for t in self.tags if t in chosen]

    def fragment(self, name: str) -> Fragment:
        return self._by_name[name]

    def normalize(self, selection: Iterable[Any]) -> FrozenSet[Enum]:
        chosen = set()
        for tag in selection:
            if not isinstance(tag, self.tags):
                try:
                    tag = self.tags(tag)
                except ValueError:
                    raise CompositionDegenerate(
                        f"{self.category}: tag {tag!r} reached the composer without validation"
                    ) from None
            chosen.add(tag)
        return frozenset(chosen)

    # ---------- Internals ----------

    def _check_coverage(self) -> None:
        members = frozenset(self.tags)
        covered = frozenset(t for f in self.fragments for t in f.tags)

        foreign = (covered | self.inert) - members
        if foreign:
            raise CompositionDegenerate(f"{self.category}: fragments reference foreign tags {foreign}")

        missing = members - covered - self.inert
        if missing:
            names = sorted(t.value for t in missing)
            raise CompositionDegenerate(f"{self.category}: no fragment for tag(s) {names}")

        both = covered & self.inert
        if both:
            names = sorted(t.value for t in both)
            raise CompositionDegenerate(f"{self.category}: tag(s) {names} are both inert and covered")

        if len(self._by_name) != len(self.preamble) + len(self.fragments):
            raise CompositionDegenerate(f"{self.category}: duplicate fragment names")
