"""
Declarative column rules.

Nullability, length bounds and uniqueness are described once here and handed
to the storage layer (column types, UNIQUE and CHECK constraints) and to the
input schemas. Models never validate values themselves; the database rejects
writes that break these rules.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import mapped_column


@dataclass(frozen=True, slots=True)
class ColumnRule:
    name: str
    max_length: int | None = None
    nullable: bool = True
    unique: bool = False
    unbounded_text: bool = False  # stored as TEXT, bound enforced by CHECK only

    def column_type(self):
        if self.unbounded_text or self.max_length is None:
            return Text()
        return String(self.max_length)


def rule_column(rule: ColumnRule, **kwargs: Any):
    """Build the mapped column for a rule."""
    return mapped_column(
        rule.column_type(),
        nullable=rule.nullable,
        unique=rule.unique or None,
        info={"rule": rule},
        **kwargs,
    )


def length_checks(rules: Iterable[ColumnRule]) -> list[CheckConstraint]:
    # VARCHAR(n) is not enforced by every backend, so every bound gets a CHECK.
    return [
        CheckConstraint(f"length({r.name}) <= {r.max_length}", name=f"{r.name}_length")
        for r in rules
        if r.max_length is not None
    ]


CUSTOMER_RULES: Mapping[str, ColumnRule] = {
    "name": ColumnRule("name", max_length=100, nullable=False),
    "email": ColumnRule("email", max_length=100, nullable=False, unique=True),
    "address": ColumnRule("address", max_length=300, unbounded_text=True),
    "tax_id": ColumnRule("tax_id", max_length=50, unique=True),
    "phone": ColumnRule("phone", max_length=50),
}
