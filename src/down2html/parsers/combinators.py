#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/parsers/combinators.py
"""Ordered-choice backtracking parser combinators.

A ``Parser`` wraps a function ``(text, position) -> Result``. Parsers never
mutate shared state, so rewinding after a failed alternative is simply a
matter of retrying from the original position.

Failures
--------
A failing ``Result`` carries a ``Failure`` describing the furthest position
reached and the names of the rules that could have matched there. When two
alternatives both fail, the one that got further wins; at equal positions
their expectation sets are merged. Successful results keep the furthest
failure seen along the way as a hint, so a later failure can still report
the most informative position.

A *committed* failure cannot be recovered by ordered choice, repetition or
``optional``. It propagates straight to the entry point, which is how a
mismatched closing tag aborts the whole parse instead of silently falling
back to another alternative.

Examples
--------
    >>> greeting = string("hello").then(take_while(str.isspace)).then(string("world"))
    >>> parse_all(greeting.skip(end()), "hello world")
    'world'

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from down2html.exceptions import ParseFailure

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Failure:
    """Where and why a parser failed.

    Parameters
    ----------
    position : int
        Offset at which the failure occurred
    expected : frozenset of str
        Names of rules that could have matched at ``position``
    committed : bool, default = False
        Whether alternatives may still be tried

    """

    position: int
    expected: frozenset[str] = field(default_factory=frozenset)
    committed: bool = False


def merge_failures(first: Optional[Failure], second: Optional[Failure]) -> Optional[Failure]:
    """Return the more informative of two failures.

    The failure at the greater position wins; failures at the same position
    merge their expectation sets.

    """
    if first is None:
        return second
    if second is None:
        return first
    if first.position > second.position:
        return first
    if second.position > first.position:
        return second
    return Failure(first.position, first.expected | second.expected, first.committed or second.committed)


def _combine(hint: Optional[Failure], failure: Failure) -> Failure:
    merged = merge_failures(hint, failure)
    assert merged is not None
    if merged.committed != failure.committed:
        merged = Failure(merged.position, merged.expected, failure.committed)
    return merged


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of running a parser at a position.

    Parameters
    ----------
    ok : bool
        Whether the parser matched
    position : int
        End offset on success, failure offset otherwise
    value : T or None
        Parsed value on success
    failure : Failure or None
        The failure on error; on success, the furthest failure seen while
        matching (used to improve error reports), if any

    """

    ok: bool
    position: int
    value: Optional[T] = None
    failure: Optional[Failure] = None

    @classmethod
    def success(cls, value: T, position: int, hint: Optional[Failure] = None) -> Result[T]:
        """Build a successful result."""
        return cls(True, position, value, hint)

    @classmethod
    def fail(cls, failure: Failure) -> Result[Any]:
        """Build a failed result."""
        return cls(False, failure.position, None, failure)

    @property
    def committed(self) -> bool:
        """Whether this is a failure that ordered choice must not recover from."""
        return not self.ok and self.failure is not None and self.failure.committed


ParseFn = Callable[[str, int], Result[T]]


class Parser(Generic[T]):
    """A composable parser over a string.

    Parameters
    ----------
    fn : callable
        Function taking ``(text, position)`` and returning a ``Result``
    name : str, optional
        Rule name reported in failures (see ``named``)

    """

    __slots__ = ("_fn", "name")

    def __init__(self, fn: ParseFn[T], name: Optional[str] = None):
        self._fn = fn
        self.name = name

    def __call__(self, text: str, position: int) -> Result[T]:
        return self._fn(text, position)

    def __repr__(self) -> str:
        return f"Parser({self.name or self._fn.__name__})"

    def named(self, name: str) -> Parser[T]:
        """Report failures that consumed no input as ``name``."""

        def run(text: str, position: int) -> Result[T]:
            result = self(text, position)
            if result.ok or result.committed:
                return result
            assert result.failure is not None
            if result.failure.position == position:
                return Result.fail(Failure(position, frozenset({name})))
            return result

        return Parser(run, name)

    def map(self, fn: Callable[[T], U]) -> Parser[U]:
        """Transform the parsed value."""

        def run(text: str, position: int) -> Result[U]:
            result = self(text, position)
            if not result.ok:
                return Result.fail(result.failure)  # type: ignore[arg-type]
            return Result.success(fn(result.value), result.position, result.failure)  # type: ignore[arg-type]

        return Parser(run, self.name)

    def bind(self, fn: Callable[[T], Parser[U]]) -> Parser[U]:
        """Sequence with a parser chosen from this parser's value."""

        def run(text: str, position: int) -> Result[U]:
            first = self(text, position)
            if not first.ok:
                return Result.fail(first.failure)  # type: ignore[arg-type]
            second = fn(first.value)(text, first.position)  # type: ignore[arg-type]
            if not second.ok:
                return Result.fail(_combine(first.failure, second.failure))  # type: ignore[arg-type]
            return Result.success(second.value, second.position, merge_failures(first.failure, second.failure))  # type: ignore[arg-type]

        return Parser(run, self.name)

    def then(self, other: Parser[U]) -> Parser[U]:
        """Sequence, keeping the value of ``other``."""
        return self.bind(lambda _: other)

    def skip(self, other: Parser[Any]) -> Parser[T]:
        """Sequence, keeping the value of this parser."""
        return self.bind(lambda value: other.map(lambda _: value))

    def __or__(self, other: Parser[U]) -> Parser[T | U]:
        """Ordered choice: try ``other`` only if this parser fails uncommitted."""

        def run(text: str, position: int) -> Result[T | U]:
            first = self(text, position)
            if first.ok or first.committed:
                return first  # type: ignore[return-value]
            second = other(text, position)
            if second.ok:
                return Result.success(second.value, second.position, merge_failures(first.failure, second.failure))
            return Result.fail(_combine(first.failure, second.failure))  # type: ignore[arg-type]

        return Parser(run)

    def many(self) -> Parser[list[T]]:
        """Match zero or more times, stopping at the first failure or empty match."""

        def run(text: str, position: int) -> Result[list[T]]:
            values: list[T] = []
            hint: Optional[Failure] = None
            while True:
                result = self(text, position)
                if not result.ok:
                    if result.committed:
                        return Result.fail(_combine(hint, result.failure))  # type: ignore[arg-type]
                    hint = merge_failures(hint, result.failure)
                    break
                hint = merge_failures(hint, result.failure)
                if result.position == position:
                    break
                values.append(result.value)  # type: ignore[arg-type]
                position = result.position
            return Result.success(values, position, hint)

        return Parser(run, self.name)

    def optional(self, default: Optional[U] = None) -> Parser[T | Optional[U]]:
        """Match zero or one time, yielding ``default`` when absent."""

        def run(text: str, position: int) -> Result[T | Optional[U]]:
            result = self(text, position)
            if result.ok or result.committed:
                return result  # type: ignore[return-value]
            return Result.success(default, position, result.failure)

        return Parser(run, self.name)

    def except_(self, excluded: Parser[Any]) -> Parser[T]:
        """Fail wherever ``excluded`` matches, otherwise run this parser."""

        def run(text: str, position: int) -> Result[T]:
            if excluded(text, position).ok:
                expected = frozenset({self.name}) if self.name else frozenset()
                return Result.fail(Failure(position, expected))
            return self(text, position)

        return Parser(run, self.name)

    def delimited_by(self, separator: Parser[Any]) -> Parser[list[T]]:
        """Match one or more times with ``separator`` between matches."""
        return self.bind(lambda first: separator.then(self).many().map(lambda rest: [first, *rest]))

    def followed_by(self, lookahead: Parser[Any]) -> Parser[T]:
        """Match, then require ``lookahead`` to match without consuming it."""

        def run(text: str, position: int) -> Result[T]:
            result = self(text, position)
            if not result.ok:
                return result
            ahead = lookahead(text, result.position)
            if not ahead.ok:
                return Result.fail(_combine(result.failure, ahead.failure))  # type: ignore[arg-type]
            return result

        return Parser(run, self.name)


def string(literal: str) -> Parser[str]:
    """Match ``literal`` exactly."""
    expected = frozenset({repr(literal)})

    def run(text: str, position: int) -> Result[str]:
        if text.startswith(literal, position):
            return Result.success(literal, position + len(literal))
        return Result.fail(Failure(position, expected))

    return Parser(run, repr(literal))


def strings(*literals: str) -> Parser[str]:
    """Ordered choice between several literals; the first that matches wins."""
    parser = string(literals[0])
    for literal in literals[1:]:
        parser = parser | string(literal)
    return parser


def char_in(chars: Iterable[str], name: str) -> Parser[str]:
    """Match one character from ``chars``."""
    allowed = frozenset(chars)
    expected = frozenset({name})

    def run(text: str, position: int) -> Result[str]:
        if position < len(text) and text[position] in allowed:
            return Result.success(text[position], position + 1)
        return Result.fail(Failure(position, expected))

    return Parser(run, name)


def take_while(predicate: Callable[[str], bool], min_count: int = 0, name: str = "text") -> Parser[str]:
    """Match the longest run of characters satisfying ``predicate``.

    Fails when the run is shorter than ``min_count`` characters.

    """
    expected = frozenset({name})

    def run(text: str, position: int) -> Result[str]:
        end_pos = position
        length = len(text)
        while end_pos < length and predicate(text[end_pos]):
            end_pos += 1
        if end_pos - position < min_count:
            return Result.fail(Failure(end_pos, expected))
        return Result.success(text[position:end_pos], end_pos)

    return Parser(run, name)


def take_until(terminator: str, name: str = "text") -> Parser[str]:
    """Match everything up to (not including) ``terminator`` or the end of input."""

    def run(text: str, position: int) -> Result[str]:
        end_pos = text.find(terminator, position)
        if end_pos == -1:
            end_pos = len(text)
        return Result.success(text[position:end_pos], end_pos)

    return Parser(run, name)


def end() -> Parser[None]:
    """Match only at the end of input."""
    expected = frozenset({"end of input"})

    def run(text: str, position: int) -> Result[None]:
        if position == len(text):
            return Result.success(None, position)
        return Result.fail(Failure(position, expected))

    return Parser(run, "end of input")


def seq(*parsers: Parser[Any]) -> Parser[tuple[Any, ...]]:
    """Match each parser in turn, yielding a tuple of their values."""

    def run(text: str, position: int) -> Result[tuple[Any, ...]]:
        values: list[Any] = []
        hint: Optional[Failure] = None
        for parser in parsers:
            result = parser(text, position)
            if not result.ok:
                return Result.fail(_combine(hint, result.failure))  # type: ignore[arg-type]
            hint = merge_failures(hint, result.failure)
            values.append(result.value)
            position = result.position
        return Result.success(tuple(values), position, hint)

    return Parser(run)


def choice(*parsers: Parser[Any], name: Optional[str] = None) -> Parser[Any]:
    """Ordered choice between several parsers.

    Behaves like chaining them with ``|`` but runs the alternatives in a loop,
    so it costs one stack frame however many alternatives there are.

    """

    def run(text: str, position: int) -> Result[Any]:
        failure: Optional[Failure] = None
        for parser in parsers:
            result = parser(text, position)
            if result.ok:
                return Result.success(result.value, result.position, merge_failures(failure, result.failure))
            if result.committed:
                return Result.fail(_combine(failure, result.failure))  # type: ignore[arg-type]
            failure = merge_failures(failure, result.failure)
        assert failure is not None
        return Result.fail(failure)

    return Parser(run, name)


def parse_all(parser: Parser[T], text: str) -> T:
    """Run ``parser`` from the start of ``text``.

    The parser is responsible for anchoring at the end of input; see ``end``.

    Raises
    ------
    ParseFailure
        If the parser does not match

    """
    result = parser(text, 0)
    if not result.ok:
        assert result.failure is not None
        raise ParseFailure(text, result.failure.position, result.failure.expected)
    return result.value  # type: ignore[return-value]
