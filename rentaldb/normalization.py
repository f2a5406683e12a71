"""Functional-dependency analysis and the 1NF -> 2NF -> 3NF derivation.

The booking schema started life with free-text locations, repeated amenity
lists and payment-method details copied onto every payment. This module
records that starting point, the normal-form checks, and the decomposition
that produces the tables declared in ``rentaldb.models``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from itertools import combinations
from typing import Iterable, Mapping

from sqlalchemy import MetaData

logger = logging.getLogger(__name__)


def _attrs(value: str | Iterable[str]) -> frozenset[str]:
    if isinstance(value, str):
        return frozenset(value.split())
    return frozenset(value)


@dataclass(frozen=True)
class FunctionalDependency:
    lhs: frozenset[str]
    rhs: frozenset[str]

    @classmethod
    def of(cls, lhs: str | Iterable[str], rhs: str | Iterable[str]) -> FunctionalDependency:
        """Build from space-separated names or iterables: ``FD.of("zip country", "city state")``."""
        return cls(_attrs(lhs), _attrs(rhs))

    def __str__(self) -> str:
        return f"{{{', '.join(sorted(self.lhs))}}} -> {{{', '.join(sorted(self.rhs))}}}"


FD = FunctionalDependency


@dataclass(frozen=True)
class Relation:
    name: str
    attributes: tuple[str, ...]
    key: tuple[str, ...]
    fds: tuple[FunctionalDependency, ...] = ()
    # attributes holding composite or repeated values
    non_atomic: frozenset[str] = frozenset()
    references: Mapping[str, str] = field(default_factory=dict)
    derived_from: str | None = None
    # names, as they were in derived_from, of the attributes moved out of it
    origin_attributes: frozenset[str] = frozenset()

    @property
    def attribute_set(self) -> frozenset[str]:
        return frozenset(self.attributes)


def keyed(name: str, key: str, attributes: str, *fds: FunctionalDependency, **kwargs) -> Relation:
    """A relation whose key determines every attribute, plus any extra dependencies."""
    attrs = tuple(attributes.split())
    key_attrs = tuple(key.split())
    key_fd = FD.of(key_attrs, [a for a in attrs if a not in key_attrs])
    return Relation(name, attrs, key_attrs, (key_fd, *fds), **kwargs)


# ==== Dependency theory ====

def closure(attributes: Iterable[str], fds: Iterable[FunctionalDependency]) -> frozenset[str]:
    result = set(attributes)
    fds = list(fds)
    changed = True
    while changed:
        changed = False
        for fd in fds:
            if fd.lhs <= result and not fd.rhs <= result:
                result |= fd.rhs
                changed = True
    return frozenset(result)


def is_superkey(attributes: Iterable[str], relation: Relation) -> bool:
    return closure(attributes, relation.fds) >= relation.attribute_set


def candidate_keys(relation: Relation) -> list[frozenset[str]]:
    # attributes no dependency produces belong to every key
    core = relation.attribute_set - frozenset().union(*(fd.rhs for fd in relation.fds))
    if core and is_superkey(core, relation):
        return [core]
    keys: list[frozenset[str]] = []
    for size in range(1, len(relation.attributes) + 1):
        for combo in combinations(relation.attributes, size):
            attrs = frozenset(combo)
            if any(k <= attrs for k in keys):
                continue
            if is_superkey(attrs, relation):
                keys.append(attrs)
    return keys


def prime_attributes(relation: Relation) -> frozenset[str]:
    return frozenset().union(*candidate_keys(relation))


def first_normal_form_problems(relation: Relation) -> list[str]:
    problems = [f"{relation.name}.{a} is not atomic" for a in relation.attributes if a in relation.non_atomic]
    if not relation.key:
        problems.append(f"{relation.name} has no primary key")
    elif not set(relation.key) <= relation.attribute_set or not is_superkey(relation.key, relation):
        problems.append(f"{relation.name} key {relation.key} does not identify its rows")
    return problems


def partial_dependencies(relation: Relation) -> list[FunctionalDependency]:
    """Non-prime attributes that depend on part of a composite candidate key (2NF violations)."""
    prime = prime_attributes(relation)
    found: list[FunctionalDependency] = []
    for key in candidate_keys(relation):
        for size in range(1, len(key)):
            for subset in combinations(sorted(key), size):
                lhs = frozenset(subset)
                dependents = closure(lhs, relation.fds) - lhs - prime
                fd = FD(lhs, dependents)
                if dependents and fd not in found:
                    found.append(fd)
    return found


def transitive_dependencies(relation: Relation) -> list[FunctionalDependency]:
    """Non-prime attributes determined by a non-key attribute set (3NF violations)."""
    keys = candidate_keys(relation)
    prime = frozenset().union(*keys)
    found: list[FunctionalDependency] = []
    for declared in relation.fds:
        lhs = declared.lhs
        if is_superkey(lhs, relation) or any(lhs < k for k in keys):
            continue
        dependents = closure(lhs, relation.fds) - lhs - prime
        fd = FD(lhs, dependents)
        if dependents and fd not in found:
            found.append(fd)
    return found


def normal_form(relation: Relation) -> int:
    """Highest normal form the relation satisfies, 0 for unnormalized."""
    if first_normal_form_problems(relation):
        return 0
    if partial_dependencies(relation):
        return 1
    if transitive_dependencies(relation):
        return 2
    return 3


# ==== Decomposition ====

@dataclass(frozen=True)
class Extraction:
    """How to name the relation split off for one determinant."""

    determinant: frozenset[str]
    relation: str
    # surrogate key added to both sides in place of the determinant
    surrogate: str | None = None
    rename: Mapping[str, str] = field(default_factory=dict)


def _rename(attrs: Iterable[str], mapping: Mapping[str, str]) -> list[str]:
    return [mapping.get(a, a) for a in attrs]


def _rename_fd(fd: FunctionalDependency, mapping: Mapping[str, str]) -> FunctionalDependency:
    return FD(frozenset(_rename(fd.lhs, mapping)), frozenset(_rename(fd.rhs, mapping)))


def extract(relation: Relation, fd: FunctionalDependency, extraction: Extraction) -> tuple[Relation, Relation]:
    """Split ``fd.lhs | fd.rhs`` out of ``relation``; returns (remaining, extracted)."""
    x, y = fd.lhs, fd.rhs
    sk = extraction.surrogate
    moved = y | x if sk else y

    new_attrs = ([sk] if sk else []) + [a for a in relation.attributes if a in x | y]
    new_key = (sk,) if sk else tuple(a for a in relation.attributes if a in x)
    new_fds = [FD(frozenset(new_key), frozenset(new_attrs) - frozenset(new_key))]
    if sk:
        new_fds.append(FD(x, frozenset([sk]) | y))
    mapping = extraction.rename
    extracted = Relation(
        extraction.relation,
        tuple(_rename(new_attrs, mapping)),
        tuple(_rename(new_key, mapping)),
        tuple(_rename_fd(f, mapping) for f in new_fds),
        derived_from=relation.name,
        origin_attributes=frozenset(moved),
    )

    rest_attrs: list[str] = []
    for a in relation.attributes:
        if sk and a in x and sk not in rest_attrs:
            rest_attrs.append(sk)
        if a not in moved:
            rest_attrs.append(a)

    rest_key = relation.key
    if sk and x <= set(relation.key):
        rest_key = tuple(k for k in relation.key if k not in x) + (sk,)

    rest_fds = []
    for f in relation.fds:
        lhs, rhs = f.lhs, f.rhs
        if sk and x <= lhs:
            lhs = (lhs - x) | {sk}
        if lhs & moved:
            continue
        if sk and x <= f.rhs:
            rhs = rhs | {sk}
        rhs = rhs - moved - lhs
        if rhs:
            rest_fds.append(FD(frozenset(lhs), frozenset(rhs)))

    link = sk or (next(iter(x)) if len(x) == 1 else None)
    references = dict(relation.references)
    if link:
        references[link] = extraction.relation
    remaining = replace(
        relation,
        attributes=tuple(rest_attrs),
        key=rest_key,
        fds=tuple(rest_fds),
        references=references,
    )
    return remaining, extracted


def decompose(relation: Relation, extractions: Iterable[Extraction] = (), target: int = 3) -> list[Relation]:
    """
    Decompose ``relation`` until it reaches ``target`` (2 or 3).

    Every attribute set functionally determined by something other than a key
    is factored into its own relation keyed by its determinant (or by the
    surrogate named in the matching ``Extraction``) and referenced from the
    remaining relation.
    """
    by_determinant = {e.determinant: e for e in extractions}
    pending = [relation]
    done: list[Relation] = []
    while pending:
        current = pending.pop(0)
        violations = partial_dependencies(current)
        if target >= 3:
            violations += transitive_dependencies(current)
        if not violations:
            done.append(current)
            continue
        fd = violations[0]
        extraction = by_determinant.get(fd.lhs) or Extraction(
            fd.lhs, f"{current.name}_{'_'.join(sorted(fd.lhs))}"
        )
        logger.debug("%s: extracting %s into %s", current.name, fd, extraction.relation)
        remaining, extracted = extract(current, fd, extraction)
        pending[:0] = [remaining, extracted]
    return done


# ==== The booking schema derivation ====

UNNORMALIZED: list[Relation] = [
    keyed("users", "id", "id name email password_hash phone_number role created_at", non_atomic=frozenset({"name"})),
    keyed(
        "properties", "id",
        "id owner_id name description location property_type price_per_night amenities created_at updated_at",
        non_atomic=frozenset({"location", "amenities"}),
    ),
    keyed("bookings", "id", "id property_id user_id start_date end_date total_price status created_at"),
    keyed("payments", "id", "id booking_id amount payment_date payment_method", non_atomic=frozenset({"payment_method"})),
    keyed("reviews", "id", "id property_id user_id rating comment created_at"),
    keyed("messages", "id", "id sender_id recipient_id message_body sent_at"),
]

FIRST_NORMAL_FORM: list[Relation] = [
    keyed("users", "id", "id first_name last_name email password_hash phone_number role created_at",
          FD.of("email", "id")),
    keyed(
        "properties", "id",
        "id owner_id name description city state country postal_code type_name type_description "
        "price_per_night created_at updated_at",
        FD.of("postal_code country", "city state"),
        FD.of("type_name", "type_description"),
    ),
    Relation(
        "property_amenities",
        ("property_id", "amenity_name", "amenity_description"),
        ("property_id", "amenity_name"),
        (FD.of("amenity_name", "amenity_description"),),
    ),
    keyed("bookings", "id", "id property_id user_id start_date end_date total_price status created_at"),
    keyed(
        "payments", "id",
        "id booking_id payment_method_id amount status transaction_id payment_date "
        "method_type method_user_id method_is_default method_added_at",
        FD.of("booking_id", "id"),
        FD.of("payment_method_id", "method_type method_user_id method_is_default method_added_at"),
    ),
    keyed("reviews", "id", "id property_id user_id booking_id rating comment created_at"),
    keyed("messages", "id",
          "id sender_id recipient_id booking_id review_id subject message_body is_read sent_at"),
]

EXTRACTIONS: list[Extraction] = [
    Extraction(_attrs("postal_code country"), "locations", surrogate="location_id", rename={"location_id": "id"}),
    Extraction(
        _attrs("type_name"), "property_types", surrogate="property_type_id",
        rename={"property_type_id": "id", "type_description": "description"},
    ),
    Extraction(
        _attrs("amenity_name"), "amenities", surrogate="amenity_id",
        rename={"amenity_id": "id", "amenity_description": "description"},
    ),
    Extraction(
        _attrs("payment_method_id"), "payment_methods",
        rename={
            "payment_method_id": "id",
            "method_user_id": "user_id",
            "method_is_default": "is_default",
            "method_added_at": "added_at",
        },
    ),
]


@dataclass(frozen=True)
class Stage:
    form: int
    title: str
    relations: tuple[Relation, ...]
    note: str


def derive(relations: Iterable[Relation] = FIRST_NORMAL_FORM, extractions: Iterable[Extraction] = EXTRACTIONS) -> list[Stage]:
    relations = list(relations)
    extractions = list(extractions)
    second = [r for rel in relations for r in decompose(rel, extractions, target=2)]
    third = [r for rel in second for r in decompose(rel, extractions, target=3)]
    return [
        Stage(
            1, "First Normal Form", tuple(relations),
            "Names split into first/last, free-text locations into city/state/country/postal_code, "
            "the amenity list into one row per property and amenity, payment methods into their columns.",
        ),
        Stage(
            2, "Second Normal Form", tuple(second),
            "Amenity details depended on amenity_name alone, part of the composite junction key; "
            "they move to amenities.",
        ),
        Stage(
            3, "Third Normal Form", tuple(third),
            "Location, property type and payment method details depended on non-key attributes; "
            "each becomes a lookup table referenced by foreign key.",
        ),
    ]


DERIVATION: list[Stage] = derive()


def audit_metadata(metadata: MetaData, relations: Iterable[Relation] | None = None) -> list[str]:
    """
    Compare the final-stage relations with the live tables.

    Returns a list of problems; an empty list means every relation is
    materialized, in 3NF, and no moved attribute survives in its origin table.
    """
    relations = DERIVATION[-1].relations if relations is None else relations
    problems: list[str] = []
    for relation in relations:
        table = metadata.tables.get(relation.name)
        if table is None:
            problems.append(f"table {relation.name} is missing")
            continue
        columns = set(table.columns.keys())
        for attr in relation.attributes:
            if attr not in columns:
                problems.append(f"{relation.name}.{attr} is not a column")
        pk = {c.name for c in table.primary_key.columns}
        if pk != set(relation.key):
            problems.append(f"{relation.name} primary key {sorted(pk)} != {sorted(relation.key)}")
        form = normal_form(relation)
        if form < 3:
            problems.append(f"{relation.name} is only in normal form {form}")
        if relation.derived_from:
            origin = metadata.tables.get(relation.derived_from)
            if origin is not None:
                for attr in sorted(relation.origin_attributes & set(origin.columns.keys())):
                    problems.append(f"{relation.derived_from}.{attr} still stored alongside {relation.name}")
    return problems


def render(stages: Iterable[Stage] | None = None) -> str:
    lines: list[str] = []
    for stage in stages or DERIVATION:
        lines.append(f"{stage.form}NF - {stage.title}")
        lines.append(f"  {stage.note}")
        for relation in stage.relations:
            lines.append(f"  {relation.name}({', '.join(relation.attributes)})  key=({', '.join(relation.key)})")
            for fd in relation.fds:
                lines.append(f"      {fd}")
        lines.append("")
    return "\n".join(lines)
