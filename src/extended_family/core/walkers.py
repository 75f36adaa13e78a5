"""
Pattern walkers for the nine extended family categories.

Each walker is a fixed path of hops across the person/union graph:

    person --marital_unions--> union --spouses--> person
    person --parental_unions--> union --children--> person

`walk` expands a path depth-first in the order the graph returns nodes,
so results keep the order in which the records list them.

Ancestor-oriented walkers run their path once from the father and once
from the mother of the proband's first parental union. Descendant-oriented
walkers group results by the union at the proband's own generation the
path started from.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from extended_family.core.buckets import AncestorBucket, DescendantBucket
from extended_family.core.graph import FamilyGraph
from extended_family.core.models import Category, Family, Person, Side

Hop = Callable[[Any], Iterable[Any]]


def _expand(hop: Hop, nodes: Iterable[Any]) -> Iterator[Any]:
    for node in nodes:
        yield from hop(node)


def walk(start: Iterable[Any], *hops: Hop) -> Iterator[Any]:
    """Follow `hops` from every start node, depth-first."""
    nodes: Iterable[Any] = start
    for hop in hops:
        nodes = _expand(hop, nodes)
    return iter(nodes)


def excluding(person: Person | None) -> Hop:
    """A hop that drops `person` and passes everyone else through."""
    if person is None:
        return lambda node: (node,)
    key = person.key
    return lambda node: () if node.key == key else (node,)


# =============================================================================
# Ancestor-oriented categories
# =============================================================================


def _ancestor_bucket(graph: FamilyGraph, proband: Person) -> AncestorBucket:
    union = graph.parental_union_of(proband)
    if union is None:
        return AncestorBucket()
    return AncestorBucket(father=graph.husband_of(union), mother=graph.wife_of(union))


def _sides(bucket: AncestorBucket) -> Iterator[tuple[Side, Person, Person | None]]:
    """(side, parent on that side, the proband's other parent)"""
    if bucket.father is not None:
        yield Side.FATHER, bucket.father, bucket.mother
    if bucket.mother is not None:
        yield Side.MOTHER, bucket.mother, bucket.father


def _walk_sides(
    graph: FamilyGraph,
    proband: Person,
    path: Callable[[Person, Person | None], Iterable[Person]],
) -> AncestorBucket:
    bucket = _ancestor_bucket(graph, proband)
    for side, parent, other_parent in _sides(bucket):
        for person in path(parent, other_parent):
            bucket.insert(person, side)
    return bucket


def find_grandparents(graph: FamilyGraph, proband: Person) -> AncestorBucket:
    """Grandparents including step-grandparents through remarriages."""
    g = graph

    def path(parent, other_parent):
        return walk(
            [parent],
            g.marital_unions_of, g.spouses_of, excluding(other_parent),
            g.parental_unions_of, g.spouses_of,
            g.marital_unions_of, g.spouses_of,
            g.marital_unions_of, g.spouses_of,
        )

    return _walk_sides(graph, proband, path)


def find_parents(graph: FamilyGraph, proband: Person) -> AncestorBucket:
    """Parents and step-parents."""
    g = graph

    def path(parent, other_parent):
        return walk([parent], g.marital_unions_of, g.spouses_of, excluding(other_parent))

    return _walk_sides(graph, proband, path)


def _uncles_aunts_path(graph: FamilyGraph, parent: Person) -> Iterator[Person]:
    g = graph
    return walk(
        [parent],
        g.parental_unions_of, g.spouses_of,
        g.marital_unions_of, g.children_of, excluding(parent),
    )


def find_uncles_and_aunts(graph: FamilyGraph, proband: Person) -> AncestorBucket:
    """Full, half and step uncles and aunts (not their partners)."""
    return _walk_sides(graph, proband, lambda parent, _: _uncles_aunts_path(graph, parent))


def find_cousins(graph: FamilyGraph, proband: Person) -> AncestorBucket:
    """Full and half first cousins."""
    g = graph

    def path(parent, _):
        return walk(_uncles_aunts_path(g, parent), g.marital_unions_of, g.children_of)

    return _walk_sides(graph, proband, path)


# =============================================================================
# Descendant-oriented categories
# =============================================================================


def _grouped(
    unions: Iterable[Family],
    path: Callable[[Family], Iterable[Person]],
) -> DescendantBucket:
    bucket = DescendantBucket()
    for union in unions:
        for person in path(union):
            bucket.insert(person, union)
    return bucket


def _siblings_path(graph: FamilyGraph, proband: Person, union: Family) -> Iterator[Person]:
    g = graph
    return walk([union], g.spouses_of, g.marital_unions_of, g.children_of, excluding(proband))


def _children_path(graph: FamilyGraph, union: Family) -> Iterator[Person]:
    g = graph
    return walk([union], g.spouses_of, g.marital_unions_of, g.children_of)


def find_siblings(graph: FamilyGraph, proband: Person) -> DescendantBucket:
    """Full, half and step siblings, grouped by the proband's parental union."""
    return _grouped(
        graph.parental_unions_of(proband),
        lambda union: _siblings_path(graph, proband, union),
    )


def find_partners(graph: FamilyGraph, proband: Person) -> DescendantBucket:
    """Partners and partners of partners, grouped by the proband's union."""
    g = graph
    return _grouped(
        graph.marital_unions_of(proband),
        lambda union: walk(
            [union], g.spouses_of, g.marital_unions_of, g.spouses_of, excluding(proband),
        ),
    )


def find_nephews_and_nieces(graph: FamilyGraph, proband: Person) -> DescendantBucket:
    """Children of siblings and of the siblings' partners."""
    g = graph
    return _grouped(
        graph.parental_unions_of(proband),
        lambda union: walk(
            _siblings_path(g, proband, union),
            g.marital_unions_of, g.spouses_of, g.marital_unions_of, g.children_of,
        ),
    )


def find_children(graph: FamilyGraph, proband: Person) -> DescendantBucket:
    """Children and step-children, grouped by the proband's union."""
    return _grouped(
        graph.marital_unions_of(proband),
        lambda union: _children_path(graph, union),
    )


def find_grandchildren(graph: FamilyGraph, proband: Person) -> DescendantBucket:
    """Grandchildren including step- and step-step-grandchildren."""
    g = graph
    return _grouped(
        graph.marital_unions_of(proband),
        lambda union: walk(
            _children_path(g, union),
            g.marital_unions_of, g.spouses_of, g.marital_unions_of, g.children_of,
        ),
    )


Walker = Callable[[FamilyGraph, Person], "AncestorBucket | DescendantBucket"]

WALKERS: dict[Category, Walker] = {
    Category.GRANDPARENTS: find_grandparents,
    Category.PARENTS: find_parents,
    Category.UNCLES_AND_AUNTS: find_uncles_and_aunts,
    Category.SIBLINGS: find_siblings,
    Category.PARTNERS: find_partners,
    Category.COUSINS: find_cousins,
    Category.NEPHEWS_AND_NIECES: find_nephews_and_nieces,
    Category.CHILDREN: find_children,
    Category.GRANDCHILDREN: find_grandchildren,
}
