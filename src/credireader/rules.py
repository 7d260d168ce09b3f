"""
Ordered decision tables.

Every tiered classification in the analyzers is written as a sequence of
``Rule`` entries evaluated top to bottom; the first rule whose predicate holds
decides the outcome. Tables end with a catch-all rule.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .models import Reason, ReasonType

C = TypeVar("C")
O = TypeVar("O")


@dataclass(frozen=True)
class Outcome:
    """Score plus the reason template attached to one branch of a table."""

    score: int
    reason_type: ReasonType | None = None
    title: str = ""
    description: str = ""

    def reason(self, description: str | None = None, **fields: object) -> Reason | None:
        if self.reason_type is None:
            return None
        text = description if description is not None else self.description.format(**fields)
        return Reason(type=self.reason_type, title=self.title, description=text)


@dataclass(frozen=True)
class Rule(Generic[C, O]):
    name: str
    predicate: Callable[[C], bool]
    outcome: O


def always(_: object) -> bool:
    return True


def first_match(rules: Sequence[Rule[C, O]], context: C) -> Rule[C, O]:
    for rule in rules:
        if rule.predicate(context):
            return rule
    raise LookupError("decision table has no catch-all rule")
