"""Query Compiler — Turns ``FilterCriteria`` into a RediSearch query string.

Segments are emitted in a fixed order and joined with single spaces::

    <free text> <set clauses...> <range clauses...>

Examples of the emitted syntax::

    @actors:{Chris Evans} @actors:{Scarlett Johansson}   # AND
    @genre:{Action|Sci\\-Fi}                              # OR
    -@genre:{Action|Adventure}                            # NOT
    @year:[(2016]  @rating:[-inf (5]  @year:[2005 inf]    # ranges
"""

from __future__ import annotations

import logging
from enum import Enum

from cinesift.exceptions import UnsupportedCriterionError
from cinesift.models.criteria import FilterCriteria, Operator, RangeCriterion, SetCriterion
from cinesift.models.fields import FieldKind
from cinesift.query.escape import escape
from cinesift.query.registry import FieldRegistry

logger = logging.getLogger(__name__)


class RangeShape(str, Enum):
    """Which bounds of a range criterion are set."""

    EXACT = "exact"
    UPPER_ONLY = "upper_only"
    LOWER_ONLY = "lower_only"
    BOUNDED = "bounded"
    ABSENT = "absent"

    @classmethod
    def of(cls, lower: float | None, upper: float | None) -> RangeShape:
        if lower is None and upper is None:
            return cls.ABSENT
        if lower is None:
            return cls.UPPER_ONLY
        if upper is None:
            return cls.LOWER_ONLY
        if lower == upper:
            return cls.EXACT
        return cls.BOUNDED


def format_number(value: float) -> str:
    """Render a bound without a trailing ``.0`` for integral values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class QueryCompiler:
    """Compiles filter criteria against a :class:`FieldRegistry`.

    The compiler holds no per-request state; one instance can serve any
    number of concurrent requests.

    Args:
        registry: Field registry used to resolve criterion field names.
        bounded_upper_first: Emit bounded ranges as ``[upper lower]``.
            This is the established clause order of the movie index;
            pass ``False`` to emit ``[lower upper]`` instead.
    """

    def __init__(self, registry: FieldRegistry, *, bounded_upper_first: bool = True) -> None:
        self.registry = registry
        self.bounded_upper_first = bounded_upper_first

    def compile(self, criteria: FilterCriteria) -> str:
        """Compile ``criteria`` into a single query string.

        An empty criteria object compiles to ``""``.

        Raises:
            UnknownFieldError: If a criterion references an unregistered field.
            UnsupportedCriterionError: If a criterion does not fit its field's kind.
        """
        segments: list[str] = []

        if criteria.text:
            segments.append(criteria.text.strip())

        for set_criterion in criteria.sets:
            segments.append(self.compile_set(set_criterion))

        for range_criterion in criteria.ranges:
            segments.append(self.compile_range(range_criterion))

        query = " ".join(segment for segment in segments if segment)
        logger.debug("Compiled query '%s'", query)
        return query

    def compile_set(self, criterion: SetCriterion) -> str:
        """Compile one set criterion into one or more clauses."""
        descriptor = self.registry.descriptor_of(criterion.field)
        if descriptor.kind is FieldKind.NUMERIC:
            raise UnsupportedCriterionError(
                f"Set criteria are not supported on NUMERIC field '{descriptor.name}'; use a range criterion"
            )

        # Sorted so the clause is identical for any iteration order of the set
        values = sorted(escape(value) for value in criterion.values)

        if criterion.operator is Operator.NOT:
            return descriptor.clause("|".join(values), negate=True)

        if len(values) == 1 or criterion.operator is Operator.OR:
            return descriptor.clause("|".join(values))

        # AND: adjacent top-level clauses intersect
        return " ".join(descriptor.clause(value) for value in values)

    def compile_range(self, criterion: RangeCriterion) -> str:
        """Compile one range criterion into a numeric clause, or ``""`` when unbounded."""
        descriptor = self.registry.descriptor_of(criterion.field)
        if descriptor.kind is not FieldKind.NUMERIC:
            raise UnsupportedCriterionError(
                f"Range criteria need a NUMERIC field, '{descriptor.name}' is {descriptor.kind.value}"
            )

        lower, upper = criterion.lower, criterion.upper
        shape = RangeShape.of(lower, upper)
        logger.debug("Range on '%s' classified as %s", descriptor.name, shape.value)

        if shape is RangeShape.ABSENT:
            return ""
        if shape is RangeShape.EXACT:
            return descriptor.clause(f"({format_number(lower)}")
        if shape is RangeShape.UPPER_ONLY:
            return descriptor.clause(f"-inf ({format_number(upper)}")
        if shape is RangeShape.LOWER_ONLY:
            return descriptor.clause(f"{format_number(lower)} inf")

        first, second = (upper, lower) if self.bounded_upper_first else (lower, upper)
        return descriptor.clause(f"{format_number(first)} {format_number(second)}")
