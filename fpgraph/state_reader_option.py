"""
State threading over environment readers that may fail.

A StateReaderOption[S, R, A] is a function S -> ReaderOption[R, (A, S)]:
given the current state it returns a reader that, given the environment,
yields NOTHING or a pair (result, next state).

Steps are sequenced with ``chain``. Each step receives the state produced by
the previous one; the first NOTHING aborts the whole computation, so the
caller never observes a partially updated state:

    step = modify(lambda s: s + 1).chain(lambda _: from_option(NOTHING))
    step.execute(0, env)  # NOTHING, not Some(1)

State is never mutated in place: steps return new state values.
"""
import dataclasses
import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Tuple, TypeVar

from . import reader_option as RO
from .option import NOTHING, Option, Some
from .reader_option import ReaderOption

logger = logging.getLogger(__name__)

S = TypeVar('S')
R = TypeVar('R')
R2 = TypeVar('R2')
A = TypeVar('A')
B = TypeVar('B')
C = TypeVar('C')


@dataclasses.dataclass(frozen=True)
class StateReaderOption(Generic[S, R, A]):
    """
    Computation threading state S through an environment R, producing A.

    Calling it with ``(state, env)`` runs it and returns Option[(A, S)].
    """
    run: Callable[[S], ReaderOption[R, Tuple[A, S]]]

    def __call__(self, state: S, env: R) -> Option[Tuple[A, S]]:
        return self.run(state).run(env)

    def map(self, f: Callable[[A], B]) -> 'StateReaderOption[S, R, B]':
        """Transform the result, leaving the state alone."""
        return _from_function(
            lambda state, env: self(state, env).map(lambda pair: (f(pair[0]), pair[1]))
        )

    def chain(self, f: Callable[[A], 'StateReaderOption[S, R, B]']) -> 'StateReaderOption[S, R, B]':
        """
        Run this computation, then ``f(result)`` with the new state.

        The environment is the same for both steps. NOTHING from either step
        makes the whole computation NOTHING.
        """
        return _from_function(
            lambda state, env: self(state, env).chain(lambda pair: f(pair[0])(pair[1], env))
        )

    def chain_first(self, f: Callable[[A], 'StateReaderOption[S, R, Any]']) -> 'StateReaderOption[S, R, A]':
        """Like chain, but keep this computation's result. State still flows through f."""
        return self.chain(lambda a: f(a).map(lambda _: a))

    def ap(self, fa: 'StateReaderOption[S, R, Any]') -> 'StateReaderOption[S, R, Any]':
        """Apply the function produced by this computation to ``fa``'s result."""
        return self.chain(lambda f: fa.map(f))

    def ap_first(self, fb: 'StateReaderOption[S, R, Any]') -> 'StateReaderOption[S, R, A]':
        return self.chain(lambda a: fb.map(lambda _: a))

    def ap_second(self, fb: 'StateReaderOption[S, R, B]') -> 'StateReaderOption[S, R, B]':
        return self.chain(lambda _: fb)

    def promap(self, f: Callable[[R2], R], g: Callable[[A], B]) -> 'StateReaderOption[S, R2, B]':
        """Pre-process the environment with ``f``, post-process the result with ``g``."""
        return _from_function(
            lambda state, env: self(state, f(env)).map(lambda pair: (g(pair[0]), pair[1]))
        )

    def local(self, f: Callable[[R2], R]) -> 'StateReaderOption[S, R2, A]':
        return _from_function(lambda state, env: self(state, f(env)))

    def evaluate(self, state: S, env: R) -> Option[A]:
        """Run and keep only the result."""
        return self(state, env).map(lambda pair: pair[0])

    def execute(self, state: S, env: R) -> Option[S]:
        """Run and keep only the final state."""
        return self(state, env).map(lambda pair: pair[1])

    # --- do notation ---

    def bind_to(self, name: str) -> 'StateReaderOption[S, R, Dict[str, Any]]':
        """Start a scope holding this computation's result under ``name``."""
        return self.map(lambda a: {name: a})

    def bind(
        self,
        name: str,
        f: Callable[[Dict[str, Any]], 'StateReaderOption[S, R, Any]'],
    ) -> 'StateReaderOption[S, R, Dict[str, Any]]':
        """
        Run ``f(scope)`` and add its result to the scope under ``name``.

        Raises:
            ValueError: If ``name`` is already bound in the scope
        """
        def step(scope: Dict[str, Any]) -> 'StateReaderOption[S, R, Dict[str, Any]]':
            if name in scope:
                raise ValueError(f"Name '{name}' is already bound")
            return f(scope).map(lambda b: {**scope, name: b})
        return self.chain(step)

    def let(self, name: str, f: Callable[[Dict[str, Any]], Any]) -> 'StateReaderOption[S, R, Dict[str, Any]]':
        """Add a pure value computed from the scope under ``name``."""
        return self.bind(name, lambda scope: of(f(scope)))


def _from_function(fn: Callable[[S, R], Option[Tuple[A, S]]]) -> StateReaderOption[S, R, A]:
    return StateReaderOption(lambda state: ReaderOption(lambda env: fn(state, env)))


def of(value: A) -> StateReaderOption[Any, Any, A]:
    return _from_function(lambda state, _: Some((value, state)))


def none() -> StateReaderOption[Any, Any, Any]:
    return _from_function(lambda state, _: NOTHING)


def do() -> StateReaderOption[Any, Any, Dict[str, Any]]:
    """Empty scope to start a ``bind`` chain."""
    return of({})


def get() -> StateReaderOption[S, Any, S]:
    return _from_function(lambda state, _: Some((state, state)))


def gets(f: Callable[[S], A]) -> StateReaderOption[S, Any, A]:
    return _from_function(lambda state, _: Some((f(state), state)))


def put(new_state: S) -> StateReaderOption[S, Any, None]:
    return _from_function(lambda _, __: Some((None, new_state)))


def modify(f: Callable[[S], S]) -> StateReaderOption[S, Any, None]:
    return _from_function(lambda state, _: Some((None, f(state))))


def from_reader_option(ro: ReaderOption[R, A]) -> StateReaderOption[Any, R, A]:
    """Lift a reader; the state passes through untouched."""
    return _from_function(lambda state, env: ro.run(env).map(lambda a: (a, state)))


def from_option(opt: Option[A]) -> StateReaderOption[Any, Any, A]:
    return from_reader_option(RO.from_option(opt))


def from_reader(f: Callable[[R], A]) -> StateReaderOption[Any, R, A]:
    return from_reader_option(RO.asks(f))


def from_state(f: Callable[[S], Tuple[A, S]]) -> StateReaderOption[S, Any, A]:
    """Lift a pure state transition S -> (A, S). Always succeeds."""
    return _from_function(lambda state, _: Some(f(state)))


def flatten(mma: StateReaderOption[S, R, StateReaderOption[S, R, A]]) -> StateReaderOption[S, R, A]:
    return mma.chain(lambda ma: ma)


def evaluate(state: S, env: R) -> Callable[[StateReaderOption[S, R, A]], Option[A]]:
    return lambda ma: ma.evaluate(state, env)


def execute(state: S, env: R) -> Callable[[StateReaderOption[S, R, A]], Option[S]]:
    return lambda ma: ma.execute(state, env)


def sequence(steps: Iterable[StateReaderOption[S, R, A]]) -> StateReaderOption[S, R, List[A]]:
    """
    Run ``steps`` in order, collecting their results.

    State flows from each step to the next. The first NOTHING aborts and
    discards everything computed so far.
    """
    steps = list(steps)

    def run(state: S, env: R) -> Option[Tuple[List[A], S]]:
        results = []
        for index, step in enumerate(steps):
            outcome = step(state, env)
            if outcome.is_nothing():
                logger.debug("Sequence aborted at step %d of %d", index + 1, len(steps))
                return NOTHING
            value, state = outcome.unwrap()
            results.append(value)
        return Some((results, state))

    return _from_function(run)


def identity() -> StateReaderOption[S, A, A]:
    """Arrow returning its input and state unchanged, always Some."""
    return _from_function(lambda state, env: Some((env, state)))


def compose(bc: StateReaderOption[S, B, C], ab: StateReaderOption[S, A, B]) -> StateReaderOption[S, A, C]:
    """
    Run ``ab``, then ``bc`` with ``ab``'s result as its environment.

    State threads from ``ab`` into ``bc``.
    """
    return _from_function(
        lambda state, env: ab(state, env).chain(lambda pair: bc(pair[1], pair[0]))
    )
