from itertools import count, islice
from time import sleep, perf_counter

from lazyseq import (
    LazyCollection,
    CollectionOptions,
    concat,
    concat_iter,
    reverse,
    shuffle,
    filter,
    map,
    for_each,
    reduce,
    push,
    values,
    setup_logging,
    measure_performance,
    get_performance_summary,
)

options = CollectionOptions(log_level="INFO", shuffle_seed=42)
logger = setup_logging(options.log_level)


def expensive_transform(i, x):
    # Simulate a costly step so laziness is visible
    print(f"  computing f({x}) ...")
    sleep(0.2)
    return x * x


print("\n--- Demo: combinators ---")
print("concat:     ", list(concat([1, 2, 3], [7, 8, 9])))
print("concat_iter:", list(islice(concat_iter(count(), values([99])), 5)), "(infinite first source)")
print("reverse:    ", list(reverse([1, 2, 3], [7, 8, 9])))
data = [1, 2, 3, 7, 8, 9]
print("shuffle:    ", list(shuffle(list(data))), "original kept:", data)
print("filter:     ", list(filter(data, lambda v: v % 2 == 0)))
print("map:        ", list(map([1, 2, 3], lambda i, v: v * 2)))
print("reduce:     ", reduce(values(data), lambda acc, cur: acc + cur, 0))
print("for_each:")
for_each(values(["hello", "world"]), lambda i, v: print(f"  {i}: {v}"))
print("push (stop after 3):", push(values(data), lambda v: v < 3))

print("\n--- Demo: laziness (no work until iterated) ---")
pipeline = (
    LazyCollection(range(1, 10_000), options=options)
    .map(expensive_transform)
    .filter(lambda v: v % 2 == 0)
    .skip(3)
    .take(5)
)
print("Constructed pipeline. No output yet (nothing computed).")
t0 = perf_counter()
out = pipeline.to_list()
t1 = perf_counter()
print(f"Result: {out}")
print(f"Time: {t1 - t0:.2f}s\n")

print("--- Demo: composed pipeline ---")
composed = (
    LazyCollection([1, 2, 3], options=options)
    .concat([7, 8, 9])
    .reverse()
    .map(lambda i, v: v * 10)
    .shuffle()
)
print("Seeded shuffle (same every pass):", composed.to_list(), composed.to_list())

print("\n--- Demo: pagination and batching ---")
for page in LazyCollection(range(1, 12)).paginate(4):
    print("  page:", page)
print("  batches:", LazyCollection(range(1, 8)).batch(3).to_list())

print("\n--- Demo: memory scales with output, not input ---")
info = measure_performance(
    "take_from_large",
    lambda: LazyCollection(range(10_000_000)).map(lambda i, x: x * 2).take(10).to_list(),
)
print(f"Result: {info['result']}")
print(f"Memory: {info['memory_usage_mb']:.4f} MB, time: {info['execution_time_ms']:.2f} ms")
logger.info(f"Performance summary: {get_performance_summary()}")
