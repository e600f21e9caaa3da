"""
underbar - A functional utility belt for Python

Collection operations and function decorators in one flat namespace:

    import underbar as _

    _.map([1, 2, 3], lambda n: n * 2)        # [2, 4, 6]
    _.reduce([1, 2, 3], lambda t, n: t + n)  # 6
    _.uniq([3, 1, 2, 1, 3])                  # [3, 1, 2]

Submodules:
- types: Sentinels, type predicates and strict equality
- core: The iteration core (each) and every collection operation
- decorators: once, memoize, delay, throttle
- scheduler: Timer scheduling used by delay and throttle
- config: Environment configuration and logging setup
"""

from underbar.config import UnderbarConfig, load_config, setup_logger
from underbar.core import (
    contains,
    defaults,
    difference,
    each,
    every,
    extend,
    first,
    flatten,
    index_of,
    intersection,
    invoke,
    last,
    pluck,
    reduce,
    reject,
    shuffle,
    some,
    sort_by,
    underbar_filter,
    underbar_map,
    underbar_zip,
    uniq,
)
from underbar.decorators import (
    Memoize,
    Once,
    Throttle,
    delay,
    memoize,
    once,
    throttle,
)
from underbar.scheduler import (
    ManualScheduler,
    Scheduler,
    ThreadingScheduler,
    get_default_scheduler,
    set_default_scheduler,
)
from underbar.types import (
    Shape,
    identity,
    is_array,
    is_boolean,
    is_defined,
    is_function,
    is_mapping,
    is_number,
    is_string,
    is_undefined,
    shape_of,
    strict_equals,
)

# Public names that would shadow builtins inside underbar.core
map = underbar_map
filter = underbar_filter
zip = underbar_zip

__version__ = "0.1.0"

__all__ = [
    # Predicates
    "identity",
    "is_array",
    "is_boolean",
    "is_defined",
    "is_function",
    "is_mapping",
    "is_number",
    "is_string",
    "is_undefined",
    "strict_equals",
    "Shape",
    "shape_of",
    # Collections
    "each",
    "index_of",
    "first",
    "last",
    "map",
    "pluck",
    "filter",
    "reject",
    "invoke",
    "reduce",
    "contains",
    "every",
    "some",
    "uniq",
    "intersection",
    "difference",
    "sort_by",
    "zip",
    "flatten",
    "shuffle",
    "extend",
    "defaults",
    # Decorators
    "once",
    "memoize",
    "delay",
    "throttle",
    "Once",
    "Memoize",
    "Throttle",
    # Scheduling
    "Scheduler",
    "ThreadingScheduler",
    "ManualScheduler",
    "get_default_scheduler",
    "set_default_scheduler",
    # Configuration
    "UnderbarConfig",
    "load_config",
    "setup_logger",
]
