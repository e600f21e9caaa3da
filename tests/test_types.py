"""
Test suite for underbar's predicates and strict equality.
"""

import math
import unittest
from collections import OrderedDict

from underbar.types import (
    _MISSING,
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


class TestPredicates(unittest.TestCase):
    """Test the type predicates."""

    def test_is_string(self):
        self.assertTrue(is_string("x"))
        self.assertFalse(is_string(b"x"))

    def test_is_function(self):
        self.assertTrue(is_function(len))
        self.assertTrue(is_function(lambda: None))
        self.assertFalse(is_function(3))

    def test_is_boolean(self):
        self.assertTrue(is_boolean(False))
        self.assertFalse(is_boolean(0))

    def test_is_number(self):
        self.assertTrue(is_number(1))
        self.assertTrue(is_number(1.5))
        self.assertFalse(is_number(True))
        self.assertFalse(is_number("1"))

    def test_defined(self):
        self.assertTrue(is_undefined(None))
        self.assertTrue(is_undefined(_MISSING))
        self.assertFalse(is_undefined(0))
        self.assertTrue(is_defined(""))

    def test_is_array_and_mapping(self):
        self.assertTrue(is_array([]))
        self.assertTrue(is_array(()))
        self.assertFalse(is_array("abc"))
        self.assertTrue(is_mapping(OrderedDict()))
        self.assertFalse(is_mapping([]))

    def test_identity(self):
        value = object()
        self.assertIs(identity(value), value)


class TestShape(unittest.TestCase):
    """Test collection shape classification."""

    def test_shapes(self):
        self.assertIs(shape_of([1]), Shape.SEQUENCE)
        self.assertIs(shape_of((1,)), Shape.SEQUENCE)
        self.assertIs(shape_of({"a": 1}), Shape.MAPPING)
        self.assertIs(shape_of(None), Shape.OTHER)
        self.assertIs(shape_of("abc"), Shape.OTHER)
        self.assertIs(shape_of({1, 2}), Shape.OTHER)


class TestStrictEquals(unittest.TestCase):
    """Test equality without coercion."""

    def test_primitives(self):
        self.assertTrue(strict_equals(1, 1))
        self.assertTrue(strict_equals("a", "a"))
        self.assertTrue(strict_equals(None, None))
        self.assertFalse(strict_equals(1, True))
        self.assertFalse(strict_equals(1, 1.0))
        self.assertFalse(strict_equals(0, None))
        self.assertFalse(strict_equals("1", 1))

    def test_nan_is_never_equal(self):
        nan = math.nan
        self.assertFalse(strict_equals(nan, nan))

    def test_objects_compare_by_identity(self):
        items = [1]
        self.assertTrue(strict_equals(items, items))
        self.assertFalse(strict_equals(items, [1]))
        self.assertFalse(strict_equals({"a": 1}, {"a": 1}))


if __name__ == "__main__":
    unittest.main()
