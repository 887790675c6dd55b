"""
Environment readers that may produce no result.

A ReaderOption[R, A] is a deferred computation R -> Option[A]: given a
read-only environment it yields Some(value) or NOTHING. Sequencing with
``chain`` runs the next step against the same environment and stops at the
first NOTHING.

Example:
    resolve = asks(lambda env: env["ids"]).chain(
        lambda ids: from_option(from_nullable(ids.get("a")))
    )
    resolve({"ids": {"a": "1"}})  # Some(value='1')
    resolve({"ids": {}})          # NOTHING

Viewed as arrows A -> Option[B], ReaderOptions form a category:
``compose(bc, ab)`` feeds the result of ``ab`` to ``bc`` as its environment
and ``identity()`` is neutral on both sides.
"""
import dataclasses
from typing import Any, Callable, Generic, TypeVar

from .option import NOTHING, Option, Some

R = TypeVar('R')
R2 = TypeVar('R2')
A = TypeVar('A')
B = TypeVar('B')
C = TypeVar('C')


@dataclasses.dataclass(frozen=True)
class ReaderOption(Generic[R, A]):
    """Computation reading an environment of type R, producing Option[A]."""
    run: Callable[[R], Option[A]]

    def __call__(self, env: R) -> Option[A]:
        return self.run(env)

    def map(self, f: Callable[[A], B]) -> 'ReaderOption[R, B]':
        """Transform the successful result. NOTHING is passed through."""
        return ReaderOption(lambda env: self.run(env).map(f))

    def chain(self, f: Callable[[A], 'ReaderOption[R, B]']) -> 'ReaderOption[R, B]':
        """Run ``f(result)`` against the same environment; stop on NOTHING."""
        return ReaderOption(lambda env: self.run(env).chain(lambda a: f(a).run(env)))

    def chain_first(self, f: Callable[[A], 'ReaderOption[R, Any]']) -> 'ReaderOption[R, A]':
        """Like chain, but keep this computation's result."""
        return self.chain(lambda a: f(a).map(lambda _: a))

    def ap(self, fa: 'ReaderOption[R, Any]') -> 'ReaderOption[R, Any]':
        """Apply the function produced by this computation to ``fa``'s result."""
        return self.chain(lambda f: fa.map(f))

    def ap_first(self, fb: 'ReaderOption[R, Any]') -> 'ReaderOption[R, A]':
        return self.chain(lambda a: fb.map(lambda _: a))

    def ap_second(self, fb: 'ReaderOption[R, B]') -> 'ReaderOption[R, B]':
        return self.chain(lambda _: fb)

    def promap(self, f: Callable[[R2], R], g: Callable[[A], B]) -> 'ReaderOption[R2, B]':
        """Pre-process the environment with ``f``, post-process the result with ``g``."""
        return ReaderOption(lambda env: self.run(f(env)).map(g))

    def local(self, f: Callable[[R2], R]) -> 'ReaderOption[R2, A]':
        """Run against an environment transformed by ``f``."""
        return ReaderOption(lambda env: self.run(f(env)))


def of(value: A) -> ReaderOption[Any, A]:
    return ReaderOption(lambda _: Some(value))


def none() -> ReaderOption[Any, Any]:
    return ReaderOption(lambda _: NOTHING)


def ask() -> ReaderOption[R, R]:
    """The environment itself."""
    return ReaderOption(Some)


def asks(f: Callable[[R], A]) -> ReaderOption[R, A]:
    """A value read from the environment."""
    return ReaderOption(lambda env: Some(f(env)))


def from_option(opt: Option[A]) -> ReaderOption[Any, A]:
    return ReaderOption(lambda _: opt)


def from_reader(f: Callable[[R], A]) -> ReaderOption[R, A]:
    return asks(f)


def local(f: Callable[[R2], R]) -> Callable[[ReaderOption[R, A]], ReaderOption[R2, A]]:
    return lambda ma: ma.local(f)


def flatten(mma: ReaderOption[R, ReaderOption[R, A]]) -> ReaderOption[R, A]:
    return mma.chain(lambda ma: ma)


def identity() -> ReaderOption[A, A]:
    """Arrow returning its input, always Some."""
    return ReaderOption(Some)


def compose(bc: ReaderOption[B, C], ab: ReaderOption[A, B]) -> ReaderOption[A, C]:
    """Run ``ab``, then ``bc`` with ``ab``'s result as its environment."""
    return ReaderOption(lambda a: ab.run(a).chain(bc.run))
