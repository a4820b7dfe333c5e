"""
Template Helpers

Functions exposed to note templates as Jinja globals. The case helpers are
also registered as filters, so ``{{ subject.name | kebab_case }}`` and
``{{ kebab_case(subject.name) }}`` are equivalent.

Arithmetic helpers never raise: an argument of the wrong numeric kind, or a
zero divisor, is replaced by the operation's identity element.
"""

import math
from pathlib import Path
from typing import Any, Callable, Dict

from jinja2 import Environment

from noteshelf.utils.paths import relative_path_from
from noteshelf.utils.text_processing import (
    camel_case,
    kebab_case,
    lower_case,
    snake_case,
    title_case,
    upper_case,
)
from noteshelf.utils.timestamp import ISO_DATE_FORMAT, Clock, relative_date


def _is_int(value: Any) -> bool:
    # bool is a subclass of int but never a number in a template
    return isinstance(value, int) and not isinstance(value, bool)


def _is_float(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    return _is_int(value)


def _fold(args, accepts: Callable[[Any], bool], identity, combine, divisor: bool = False):
    """Combine the first argument with the rest, substituting the identity for rejects."""
    values = [arg if accepts(arg) else identity for arg in args]
    if not values:
        return identity

    result = values[0]
    for value in values[1:]:
        if divisor and value == 0:
            continue
        result = combine(result, value)
    return result


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def add_int(*args) -> int:
    """Example: ``add_int(1, 2.0, 3) == 4`` (the float counts as 0)."""
    return sum(arg for arg in args if _is_int(arg))


def add_float(*args) -> float:
    return float(sum(arg for arg in args if _is_float(arg)))


def sub_int(*args) -> int:
    return _fold(args, _is_int, 0, lambda a, b: a - b)


def sub_float(*args) -> float:
    return float(_fold(args, _is_float, 0, lambda a, b: a - b))


def mul_int(*args) -> int:
    return _fold(args, _is_int, 1, lambda a, b: a * b)


def mul_float(*args) -> float:
    return float(_fold(args, _is_float, 1, lambda a, b: a * b))


def div_int(*args) -> int:
    """Integer division truncating toward zero; zero divisors are skipped."""
    return _fold(args, _is_int, 1, _truncating_div, divisor=True)


def div_float(*args) -> float:
    return float(_fold(args, _is_float, 1, lambda a, b: a / b, divisor=True))


def relpath(destination: Any = None, base: Any = None) -> str:
    """
    Relative path from base to destination, or an empty string when either is
    missing or no lexical answer exists.
    """
    if not isinstance(destination, str) or not isinstance(base, str):
        return ""
    return relative_path_from(destination, base) or ""


def is_file(path: Any) -> bool:
    return isinstance(path, str) and Path(path).is_file()


def is_dir(path: Any) -> bool:
    return isinstance(path, str) and Path(path).is_dir()


def make_reldate(clock: Clock) -> Callable[..., str]:
    """
    Build the ``reldate`` helper bound to a clock.

    Example:
        {{ reldate() }}                    -> 2024-01-31
        {{ reldate("%B %d, %Y", days=-1) }} -> January 30, 2024

    A non-string format or non-integer offset falls back to the ISO date and
    no offset. A date outside the calendar raises OverflowError.
    """

    def reldate(format: Any = ISO_DATE_FORMAT, days: Any = 0) -> str:
        if not isinstance(format, str):
            format = ISO_DATE_FORMAT
        if not _is_int(days):
            days = 0
        return relative_date(clock, days=days, fmt=format)

    return reldate


ARITHMETIC_HELPERS: Dict[str, Callable] = {
    "add_int": add_int,
    "add_float": add_float,
    "sub_int": sub_int,
    "sub_float": sub_float,
    "mul_int": mul_int,
    "mul_float": mul_float,
    "div_int": div_int,
    "div_float": div_float,
}

CASE_HELPERS: Dict[str, Callable[[str], str]] = {
    "upper_case": upper_case,
    "lower_case": lower_case,
    "kebab_case": kebab_case,
    "snake_case": snake_case,
    "camel_case": camel_case,
    "title_case": title_case,
}

PATH_HELPERS: Dict[str, Callable] = {
    "relpath": relpath,
    "is_file": is_file,
    "is_dir": is_dir,
}


def register_helpers(env: Environment, clock: Clock) -> None:
    """Install every helper into a Jinja environment."""
    env.globals.update(ARITHMETIC_HELPERS)
    env.globals.update(CASE_HELPERS)
    env.globals.update(PATH_HELPERS)
    env.globals["reldate"] = make_reldate(clock)
    env.filters.update(CASE_HELPERS)
