"""Fuzz testing suite for underbar."""

from .fuzz import (
    Fuzzer,
    FuzzResult,
    FuzzRunner,
    discover_fuzzers,
    exit_code,
    random_value,
    run_suite,
    select_fuzzers,
)

__all__ = [
    "Fuzzer",
    "FuzzResult",
    "FuzzRunner",
    "discover_fuzzers",
    "exit_code",
    "random_value",
    "run_suite",
    "select_fuzzers",
]
