"""
Prompt Renderer

A prompt is an ordered tuple of sections, and rendering walks them
once, left to right:

- Text:  literal text, emitted as-is
- Value: a field of the input, interpolated without formatting
- When:  a block emitted only if a field is present and non-empty,
         with an optional `otherwise` block
- Each:  a block emitted once per item of a sequence field, with the
         item's fields in scope, or an `empty` block for an empty or
         absent sequence

DESIGN DECISION: This is deliberately not a template engine.
There is no parsing, no expressions and no helpers, so the same input
always yields the byte-identical prompt, and a template can be tested
without a model in sight.

Field paths are dotted ("current_financial_context.loans"). Inside an
Each block, names are looked up on the current item first and then on
the enclosing scopes.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Value:
    path: str


@dataclass(frozen=True)
class When:
    path: str
    then: tuple["Section", ...]
    otherwise: tuple["Section", ...] = ()


@dataclass(frozen=True)
class Each:
    path: str
    body: tuple["Section", ...]
    empty: tuple["Section", ...] = ()


Section = Union[Text, Value, When, Each]
Template = tuple[Section, ...]


def when(path: str, *then: Section, otherwise: Sequence[Section] = ()) -> When:
    return When(path=path, then=tuple(then), otherwise=tuple(otherwise))


def each(path: str, *body: Section, empty: Sequence[Section] = ()) -> Each:
    return Each(path=path, body=tuple(body), empty=tuple(empty))


_MISSING = object()


def _get(obj: Any, name: str) -> Any:
    if obj is None:
        return _MISSING
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def _resolve(scopes: tuple[Any, ...], path: str) -> Any:
    """Look a dotted path up, innermost scope first. Missing -> None."""
    head, *rest = path.split(".")

    value = _MISSING
    for scope in reversed(scopes):
        value = _get(scope, head)
        if value is not _MISSING:
            break

    for name in rest:
        if value is _MISSING:
            break
        value = _get(value, name)

    return None if value is _MISSING else value


def _is_present(value: Any) -> bool:
    """Absent, empty and zero values all count as 'not present'."""
    if value is None:
        return False
    if isinstance(value, (str, Sequence, Mapping)):
        return len(value) > 0
    if isinstance(value, Enum):
        return True
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    return bool(value)


def format_scalar(value: Any) -> str:
    """
    Interpolate a scalar literally.

    Whole numbers lose their trailing ".0" so that an amount of 500
    reads "500" whichever numeric type carried it. No thousands
    separators, no rounding, no currency symbols.
    """
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return str(int(value))
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def format_inr(value: Any, symbol: bool = False) -> str:
    """
    Whole rupees with Indian digit grouping: 1234567 -> "12,34,567".

    For simulation figures only, which the app shows the same way.
    Halves round away from zero; None reads "N/A".
    """
    if value is None:
        return "N/A"
    amount = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    digits = str(abs(int(amount)))

    head, groups = digits[:-3], [digits[-3:]]
    while head:
        groups.insert(0, head[-2:])
        head = head[:-2]

    sign = "-" if amount < 0 else ""
    return f"{sign}{'₹' if symbol else ''}{','.join(groups)}"


def _render(sections: Sequence[Section], scopes: tuple[Any, ...], out: list[str]) -> None:
    for section in sections:
        if isinstance(section, Text):
            out.append(section.text)
        elif isinstance(section, Value):
            out.append(format_scalar(_resolve(scopes, section.path)))
        elif isinstance(section, When):
            if _is_present(_resolve(scopes, section.path)):
                _render(section.then, scopes, out)
            else:
                _render(section.otherwise, scopes, out)
        elif isinstance(section, Each):
            items = _resolve(scopes, section.path)
            if _is_present(items):
                for item in items:
                    _render(section.body, scopes + (item,), out)
            else:
                _render(section.empty, scopes, out)
        else:
            raise TypeError(f"Unknown prompt section: {section!r}")


def render_prompt(template: Sequence[Section], context: Any) -> str:
    """
    Render a template against an input object.

    The input is only read, never modified.
    """
    out: list[str] = []
    _render(template, (context,), out)
    return "".join(out)
