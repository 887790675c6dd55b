"""
Optional results for short-circuiting computations.

A value is either ``Some(value)`` or the singleton ``NOTHING``. ``NOTHING``
carries no payload: it is the single failure signal used throughout the
library (a missing edge target, a failed pipeline step, ...).

Example:
    >>> Some(2).map(lambda x: x + 1)
    Some(value=3)
    >>> NOTHING.map(lambda x: x + 1)
    NOTHING
    >>> from_predicate(lambda x: x > 0)(-1).get_or_else(0)
    0
"""
import dataclasses
from typing import Any, Callable, Generic, TypeVar, Union

A = TypeVar('A')
B = TypeVar('B')


class UnwrapError(Exception):
    """Raised when unwrapping NOTHING."""
    pass


@dataclasses.dataclass(frozen=True)
class Some(Generic[A]):
    """A present result."""
    value: A

    def is_some(self) -> bool:
        return True

    def is_nothing(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return True

    def map(self, f: Callable[[A], B]) -> 'Option[B]':
        return Some(f(self.value))

    def chain(self, f: Callable[[A], 'Option[B]']) -> 'Option[B]':
        return f(self.value)

    def filter(self, predicate: Callable[[A], bool]) -> 'Option[A]':
        return self if predicate(self.value) else NOTHING

    def exists(self, predicate: Callable[[A], bool]) -> bool:
        return bool(predicate(self.value))

    def fold(self, on_nothing: Callable[[], B], on_some: Callable[[A], B]) -> B:
        return on_some(self.value)

    def get_or_else(self, default: Any) -> A:
        return self.value

    def get_or_else_lazy(self, default: Callable[[], Any]) -> A:
        return self.value

    def unwrap(self) -> A:
        return self.value


class _Nothing:
    """The absent result. Use the ``NOTHING`` singleton, never instantiate."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOTHING"

    def __reduce__(self):
        return (_Nothing, ())

    def is_some(self) -> bool:
        return False

    def is_nothing(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return False

    def map(self, f: Callable[[Any], B]) -> 'Option[B]':
        return self

    def chain(self, f: Callable[[Any], 'Option[B]']) -> 'Option[B]':
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> 'Option[Any]':
        return self

    def exists(self, predicate: Callable[[Any], bool]) -> bool:
        return False

    def fold(self, on_nothing: Callable[[], B], on_some: Callable[[Any], B]) -> B:
        return on_nothing()

    def get_or_else(self, default: A) -> A:
        return default

    def get_or_else_lazy(self, default: Callable[[], A]) -> A:
        return default()

    def unwrap(self):
        raise UnwrapError("called unwrap() on NOTHING")


NOTHING = _Nothing()

Option = Union[Some[A], _Nothing]


def some(value: A) -> 'Option[A]':
    return Some(value)


def from_nullable(value) -> 'Option[Any]':
    """Some(value) unless value is None."""
    return NOTHING if value is None else Some(value)


def from_predicate(predicate: Callable[[A], bool]) -> Callable[[A], 'Option[A]']:
    """
    Build a function that keeps its argument only when ``predicate`` holds.

    Args:
        predicate: Test applied to the argument

    Returns:
        Function returning Some(argument) or NOTHING
    """
    def check(value: A) -> 'Option[A]':
        return Some(value) if predicate(value) else NOTHING
    return check
