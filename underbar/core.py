"""
underbar.core - Collection operations

This module contains the iteration core and every collection operation built
on top of it. Ordered sequences (lists and tuples) and mappings are both
accepted wherever a "collection" is expected.

Categories:
- Iteration core: each
- Array helpers: index_of, first, last
- Transformations: underbar_map, pluck, underbar_filter, reject, invoke
- Reducers: reduce, contains, every, some
- Set-like operations: uniq, intersection, difference
- Ordering and shape: sort_by, underbar_zip, flatten, shuffle
- Object merging: extend, defaults
"""

import inspect
import random
from functools import cmp_to_key
from typing import Any, Callable, Optional

from underbar.types import (
    _MISSING,
    Shape,
    identity,
    is_array,
    is_string,
    shape_of,
    strict_equals,
)

# =============================================================================
# Iteration Core
# =============================================================================

_MAX_VISITOR_ARGS = 3


def _visitor_arity(visitor: Callable) -> int:
    """
    Count how many of (value, key, collection) a visitor can accept.

    Callables whose signature cannot be inspected (some builtins) are given
    all three arguments.
    """
    try:
        sig = inspect.signature(visitor)
    except (TypeError, ValueError):
        return _MAX_VISITOR_ARGS

    count = 0
    for param in sig.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return _MAX_VISITOR_ARGS
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return min(count, _MAX_VISITOR_ARGS)


def each(collection, visitor: Callable) -> None:
    """
    Call visitor(value, key, collection) for each element of collection.

    Sequences are walked by ascending index and the length is re-read on
    every step, so a visitor may grow or shrink the list while it runs.
    Mappings are walked over a snapshot of their keys; a key deleted before
    it is reached is skipped. Anything that is neither (including None) is
    silently ignored.
    """
    shape = shape_of(collection)
    if shape is Shape.OTHER:
        return

    arity = _visitor_arity(visitor)

    if shape is Shape.SEQUENCE:
        index = 0
        while index < len(collection):
            args = (collection[index], index, collection)
            visitor(*args[:arity])
            index += 1
    else:
        for key in list(collection.keys()):
            if key in collection:
                args = (collection[key], key, collection)
                visitor(*args[:arity])


# =============================================================================
# Array Helpers
# =============================================================================


def index_of(array, target) -> int:
    """Return the index of the first element strictly equal to target, or -1."""
    result = -1

    def check(item, index):
        nonlocal result
        if result == -1 and strict_equals(item, target):
            result = index

    each(array, check)
    return result


def first(array, n: Optional[int] = None):
    """Return the first element, or the first n elements when n is given."""
    if n is None:
        return array[0] if len(array) > 0 else None
    return array[:n]


def last(array, n: Optional[int] = None):
    """Return the last element, or the last n elements when n is given.

    The input is never modified.
    """
    if n is None:
        return array[-1] if len(array) > 0 else None
    if n == 0:
        return []
    return array[-n:]


# =============================================================================
# Transformations
# =============================================================================


def _property(obj, key):
    """Look up a named property on a mapping, sequence or plain object.

    Missing properties come back as None.
    """
    shape = shape_of(obj)
    if shape is Shape.MAPPING:
        return obj.get(key)
    if shape is Shape.SEQUENCE:
        if isinstance(key, int) and -len(obj) <= key < len(obj):
            return obj[key]
        return None
    if is_string(key):
        return getattr(obj, key, None)
    return None


def underbar_map(collection, iterator: Callable) -> list:
    """Return a new list holding iterator(value) for each element."""
    results = []
    each(collection, lambda value: results.append(iterator(value)))
    return results


def pluck(collection, key) -> list:
    """Return the value of property `key` for each element of collection."""
    return underbar_map(collection, lambda item: _property(item, key))


def underbar_filter(collection, test: Callable) -> list:
    """Return the elements of collection that pass the test, in order."""
    result = []

    def keep(value):
        if test(value):
            result.append(value)

    each(collection, keep)
    return result


def reject(collection, test: Callable) -> list:
    """Return the elements of collection that fail the test, in order."""
    return underbar_filter(collection, lambda value: not test(value))


def invoke(collection, function_or_key, args=None) -> list:
    """
    Call a method on every element and collect the results.

    When function_or_key is a string, the element's method of that name is
    called with args. Otherwise function_or_key is called with the element
    as its first (receiver) argument followed by args.
    """
    args = tuple(args) if args is not None else ()

    def call(value):
        if is_string(function_or_key):
            return getattr(value, function_or_key)(*args)
        return function_or_key(value, *args)

    return underbar_map(collection, call)


# =============================================================================
# Reducers
# =============================================================================


def reduce(collection, iterator: Callable, seed: Any = _MISSING):
    """Reduce a collection to a single value.

    (reduce coll f)      - the first element seeds the accumulator and is
                           never passed to f
    (reduce coll f seed) - seed is used verbatim, even when falsy, and every
                           element is passed to f

    An empty collection with no seed reduces to None.
    """
    accumulator = seed

    def step(value):
        nonlocal accumulator
        if accumulator is _MISSING:
            accumulator = value
        else:
            accumulator = iterator(accumulator, value)

    each(collection, step)
    return None if accumulator is _MISSING else accumulator


def contains(collection, target) -> bool:
    """Return True if some element of collection is strictly equal to target."""
    return reduce(
        collection,
        lambda was_found, item: was_found or strict_equals(item, target),
        False,
    )


def every(collection, test: Callable = identity) -> bool:
    """Return True if test(x) is truthy for all x in collection."""
    return reduce(
        collection,
        lambda accumulator, value: accumulator and bool(test(value)),
        True,
    )


def some(collection, test: Callable = identity) -> bool:
    """Return True if test(x) is truthy for at least one x in collection."""
    return not every(collection, lambda value: not test(value))


# =============================================================================
# Set-like Operations
# =============================================================================


def uniq(array, is_sorted: bool = False, iterator: Callable = identity) -> list:
    """Return a duplicate-free copy of array.

    Unsorted input keeps the first occurrence of each value. Sorted input is
    walked once: each element is compared against iterator() of the last
    element kept, and appended when they differ. The raw element (not
    iterator(element)) is what gets compared.
    """
    result = []

    if is_sorted:
        if len(array) == 0:
            return result
        result.append(array[0])
        for i in range(1, len(array)):
            if not strict_equals(array[i], iterator(result[-1])):
                result.append(array[i])
    else:

        def keep_first(value):
            if index_of(result, value) == -1:
                result.append(value)

        each(array, keep_first)

    return result


def intersection(*arrays) -> list:
    """Return the values shared by every input array.

    Values come out once each, in the order they first appear.
    """
    if not arrays:
        return []
    others = arrays[1:]
    return underbar_filter(
        uniq(arrays[0]),
        lambda value: every(others, lambda other: contains(other, value)),
    )


def difference(array, *others) -> list:
    """Return the elements of array that appear in none of the other arrays."""

    def remove_shared(remaining, other):
        shared = intersection(remaining, other)
        return reject(remaining, lambda value: contains(shared, value))

    return reduce(others, remove_shared, list(array))


# =============================================================================
# Ordering and Shape
# =============================================================================


def sort_by(collection: list, iterator) -> list:
    """Sort a list in place by a numeric criterion and return it.

    If iterator is a string the list is ordered by that property of each
    element. Keys are compared by subtraction, so they must be numbers.
    """
    if is_string(iterator):
        name = iterator

        def criterion(value):
            return _property(value, name)

    else:
        criterion = iterator

    collection.sort(key=cmp_to_key(lambda a, b: criterion(a) - criterion(b)))
    return collection


def underbar_zip(*arrays) -> list:
    """Zip arrays together, padding the shorter ones with None.

    underbar_zip(['a', 'b', 'c', 'd'], [1, 2, 3])
    => [['a', 1], ['b', 2], ['c', 3], ['d', None]]
    """
    if not arrays:
        return []

    max_length = reduce(
        arrays, lambda longest, array: max(longest, len(array)), len(arrays[0])
    )

    zipped = []
    for i in range(max_length):
        zipped.append([array[i] if i < len(array) else None for array in arrays])
    return zipped


def flatten(nested_array, accumulator: Optional[list] = None) -> list:
    """Flatten arbitrarily nested lists/tuples into one list, depth first.

    When an accumulator is passed, elements are appended to it and it is
    returned.
    """
    if accumulator is None:
        accumulator = []

    def gather(result, item):
        if is_array(item):
            return flatten(item, result)
        result.append(item)
        return result

    return reduce(nested_array, gather, accumulator)


def shuffle(array, rng: Optional[random.Random] = None) -> list:
    """Return a shuffled copy of array (Fisher-Yates); the input is untouched."""
    rng = rng or random
    copy = list(array)
    for i in range(len(copy) - 1, 0, -1):
        j = rng.randrange(i + 1)
        copy[i], copy[j] = copy[j], copy[i]
    return copy


# =============================================================================
# Object Merging
# =============================================================================


def extend(destination, *sources):
    """Copy every property of each source into destination and return it.

    Later sources win over earlier ones and over destination's own values.
    """

    def copy_source(source):
        def copy_value(value, key):
            destination[key] = value

        each(source, copy_value)

    each(sources, copy_source)
    return destination


def defaults(destination, *sources):
    """Like extend, but never overwrites a key destination already has."""

    def copy_source(source):
        def copy_missing(value, key):
            if key not in destination:
                destination[key] = value

        each(source, copy_missing)

    each(sources, copy_source)
    return destination


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Iteration core
    "each",
    # Array helpers
    "index_of",
    "first",
    "last",
    # Transformations
    "underbar_map",
    "pluck",
    "underbar_filter",
    "reject",
    "invoke",
    # Reducers
    "reduce",
    "contains",
    "every",
    "some",
    # Set-like operations
    "uniq",
    "intersection",
    "difference",
    # Ordering and shape
    "sort_by",
    "underbar_zip",
    "flatten",
    "shuffle",
    # Object merging
    "extend",
    "defaults",
]
