"""
Sequence combinators over lazily-produced sequences.

Every combinator returns a generator: nothing is produced until the consumer
pulls, and when the consumer stops pulling (break, close, abandoning the loop)
no further element is produced and no caller function is invoked again.
"""

import logging
import random
from typing import Any, Callable, Iterable, Iterator, MutableSequence, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "values",
    "push",
    "concat",
    "concat_iter",
    "reverse",
    "shuffle",
    "filter",
    "map",
    "for_each",
    "reduce",
]


# ---------- producer/consumer helpers ----------

def values(seq: Sequence[T]) -> Iterator[T]:
    """Lazy iterator over the elements of a materialized sequence."""
    for v in seq:
        yield v


def push(seq: Iterable[T], step: Callable[[T], bool]) -> bool:
    """
    Drive ``seq`` by handing each element to ``step``.

    ``step`` returns True to continue or False to stop. Returns True if the
    sequence was exhausted and False if ``step`` stopped it early.
    """
    it = iter(seq)
    try:
        for v in it:
            if not step(v):
                return False
        return True
    finally:
        close = getattr(it, "close", None)
        if close is not None:
            close()


# ---------- combinators ----------

def concat(*seqs: Sequence[T]) -> Iterator[T]:
    """Yield the elements of each sequence successively, in the order given."""
    for seq in seqs:
        for v in seq:
            yield v


def concat_iter(*iterables: Iterable[T]) -> Iterator[T]:
    """
    Yield the elements of each lazy sequence successively, in the order given.

    Each source is drained before the next is started, so a source that never
    ends keeps later sources from ever being reached.
    """
    for source in iterables:
        for v in source:
            yield v


def reverse(*seqs: Sequence[T]) -> Iterator[T]:
    """
    Yield the elements of the given sequences in fully reversed order.

    For example ``reverse([10, 20, 30], [40, 50, 60])`` yields
    ``60, 50, 40, 30, 20, 10``.
    """
    for i in range(len(seqs) - 1, -1, -1):
        seq = seqs[i]
        for j in range(len(seq) - 1, -1, -1):
            yield seq[j]


def shuffle(seq: MutableSequence[T], rng: Optional[random.Random] = None) -> Iterator[T]:
    """
    Shuffle ``seq`` in place and yield its elements in the new order.

    The shuffle happens on the first pull and mutates the caller's storage.
    Pass ``list(seq)`` to keep the original order intact.
    """
    logger.debug(f"Shuffling {len(seq)} elements in place")
    if rng is None:
        random.shuffle(seq)
    else:
        rng.shuffle(seq)
    for v in seq:
        yield v


def filter(seq: Iterable[T], fn: Callable[[T], bool]) -> Iterator[T]:
    """Yield the elements of ``seq`` for which ``fn`` returns true."""
    for v in seq:
        if fn(v):
            yield v


def map(seq: Iterable[T], fn: Callable[[int, T], T]) -> Iterator[Tuple[int, T]]:
    """Yield ``(index, fn(index, value))`` for each element of ``seq``."""
    for i, v in enumerate(seq):
        yield i, fn(i, v)


# ---------- consumers ----------

def for_each(seq: Iterable[T], fn: Callable[[int, T], Any]) -> None:
    """Call ``fn(index, value)`` on every element of ``seq``."""
    index = 0
    for v in seq:
        fn(index, v)
        index += 1


def reduce(seq: Iterable[T], fn: Callable[[T, T], T], init: T) -> T:
    """Fold ``seq`` left to right, starting from ``init``."""
    acc = init
    for v in seq:
        acc = fn(acc, v)
    return acc
