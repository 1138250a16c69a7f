import logging
import random
from collections.abc import Sequence
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from . import core
from .models import CollectionOptions, PageRequest

logger = logging.getLogger(__name__)


class LazyCollection:
    """
    A chainable, lazy collection. Steps are recorded and applied only when you
    iterate, by stacking the combinators from ``lazyseq.core`` over the source.
    Optionally memoizes realized results.
    """
    def __init__(self, source: Iterable[Any], ops=None, options: Optional[CollectionOptions] = None):
        self._source = source
        self._ops = ops or []          # sequence of ("op_name", arg)
        self._options = options or CollectionOptions()
        self._cache_enabled = self._options.cache_enabled
        self._cache: List[Any] = []    # realized items (post-ops)
        self._exhausted = False        # whether the cache holds a full pass

    # --------- chainable operators (lazy) ----------
    def map(self, fn: Callable[[int, Any], Any]) -> "LazyCollection":
        """fn receives (index, value); the index counts positions at this step."""
        return self._with_op(("map", fn))

    def filter(self, pred: Callable[[Any], bool]) -> "LazyCollection":
        return self._with_op(("filter", pred))

    def concat(self, *others: Iterable[Any]) -> "LazyCollection":
        """
        Continue with the elements of each other iterable, in order.

        One-shot iterators are realized into tuples here so every pass sees them.
        """
        others = tuple(o if isinstance(o, Sequence) else tuple(o) for o in others)
        return self._with_op(("concat", others))

    def reverse(self) -> "LazyCollection":
        """Yield the pipeline output back to front. Realizes upstream fully."""
        return self._with_op(("reverse", None))

    def shuffle(self, rng: Optional[random.Random] = None) -> "LazyCollection":
        """Yield the pipeline output in random order. The source is never mutated."""
        return self._with_op(("shuffle", rng))

    def skip(self, n: int) -> "LazyCollection":
        return self._with_op(("skip", int(n)))

    def take(self, n: int) -> "LazyCollection":
        return self._with_op(("take", int(n)))

    def batch(self, size: int) -> "LazyCollection":
        size = int(size)
        if size < 1:
            raise ValueError("Batch size must be >= 1")
        return self._with_op(("batch", size))

    def chunk(self, size: int) -> "LazyCollection":
        """Alias for batch() - groups elements into chunks of specified size"""
        return self.batch(size)

    def page(self, page_number: Union[int, PageRequest], page_size: Optional[int] = None) -> "LazyCollection":
        """Get a specific page of results (1-indexed)"""
        if isinstance(page_number, PageRequest):
            request = page_number
            return self.skip(request.offset).take(request.page_size)
        if page_number < 1:
            raise ValueError("Page number must be >= 1")
        if page_size is None or page_size < 1:
            raise ValueError("Page size must be >= 1")
        offset = (page_number - 1) * page_size
        return self.skip(offset).take(page_size)

    def paginate(self, page_size: int) -> Iterator[List[Any]]:
        """Return an iterator of pages, each containing up to page_size elements"""
        page_num = 1
        while True:
            page_data = self.page(page_num, page_size).to_list()
            if not page_data:
                break
            yield page_data
            page_num += 1

    def cache(self, enabled: bool = True) -> "LazyCollection":
        c = self._clone()
        c._cache_enabled = enabled
        return c

    # --------- forcing evaluation ----------
    def to_list(self) -> List[Any]:
        return list(self)

    def for_each(self, fn: Callable[[int, Any], Any]) -> None:
        """Call fn(index, value) for every element."""
        core.for_each(iter(self), fn)

    def reduce(self, fn: Callable[[Any, Any], Any], init: Any) -> Any:
        """Fold the elements left to right, starting from init."""
        return core.reduce(iter(self), fn, init)

    def push(self, step: Callable[[Any], bool]) -> bool:
        """Hand each element to step until it returns False; True if exhausted."""
        return core.push(iter(self), step)

    def sum(self, start=0):
        """Return the sum of all elements"""
        return self.reduce(lambda acc, cur: acc + cur, start)

    def count(self) -> int:
        """Return the count of elements"""
        return self.reduce(lambda acc, _: acc + 1, 0)

    def first(self, default=None):
        """Return the first element, or default if empty"""
        for item in self:
            return item
        return default

    def last(self, default=None):
        """Return the last element, or default if empty"""
        last_item = default
        for item in self:
            last_item = item
        return last_item

    # --------- iterator protocol ----------
    def __iter__(self):
        if self._cache_enabled and self._exhausted:
            logger.debug(f"Serving {len(self._cache)} cached items")
            yield from self._cache
            return

        it = self._build()
        if self._cache_enabled:
            # Only a finished pass is published; partial or overlapping passes recompute.
            realized = []
            for item in it:
                realized.append(item)
                yield item
            if not self._exhausted:
                self._cache = realized
                self._exhausted = True
        else:
            yield from it

    # --------- helpers ----------
    def _build(self) -> Iterator[Any]:
        """Stack one generator per recorded step over a fresh source iterator."""
        logger.debug(f"Building pipeline with {len(self._ops)} steps")
        it = iter(self._source)
        for op, arg in self._ops:
            if op == "map":
                it = _values_of(core.map(it, arg))
            elif op == "filter":
                it = core.filter(it, arg)
            elif op == "concat":
                it = core.concat_iter(it, *arg)
            elif op == "reverse":
                it = _realized(it, core.reverse)
            elif op == "shuffle":
                it = _realized(it, lambda items, rng=self._rng(arg): core.shuffle(items, rng))
            elif op == "skip":
                it = _skip(it, arg)
            elif op == "take":
                it = _take(it, arg)
            elif op == "batch":
                it = _batch(it, arg)
            else:
                raise ValueError(f"Unknown op: {op}")
        return it

    def _rng(self, rng: Optional[random.Random]) -> Optional[random.Random]:
        if rng is None and self._options.shuffle_seed is not None:
            return random.Random(self._options.shuffle_seed)
        return rng

    def _with_op(self, op_tuple) -> "LazyCollection":
        c = LazyCollection(self._source, self._ops + [op_tuple], self._options)
        c._cache_enabled = self._cache_enabled
        return c

    def _clone(self) -> "LazyCollection":
        c = LazyCollection(self._source, list(self._ops), self._options)
        # Caches are never shared between clones
        c._cache_enabled = self._cache_enabled
        return c


def _values_of(pairs):
    for _, v in pairs:
        yield v


def _realized(gen, combinator):
    # Materializing is deferred to the first pull like every other step.
    items = list(gen)
    yield from combinator(items)


def _skip(gen, k):
    skipped = 0
    for x in gen:
        if skipped < k:
            skipped += 1
            continue
        yield x


def _take(gen, n):
    if n <= 0:
        return
    taken = 0
    for x in gen:
        yield x
        taken += 1
        if taken >= n:
            return


def _batch(gen, size):
    bucket = []
    for x in gen:
        bucket.append(x)
        if len(bucket) == size:
            yield tuple(bucket)
            bucket = []
    if bucket:
        yield tuple(bucket)
