"""
Tests for the internal helpers shared by the value objects.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, finality.
- coalesce(): only Unset is replaced.
- StorageGuard/Record: write-once backing storage, read-only views, repr and equality.
"""
import copy
import unittest
from unittest import TestCase

from rich.console import Console

from flagrelay.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testCoalesce(self) -> None:
        """
        Only Unset is replaced; other falsy values survive.
        """
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertEqual(coalesce(0, 1), 0)


class Point(Record):
    __fields__ = (
        "coordinates",
        "labels",
    )

    def __new__(cls, coordinates, labels):
        with super().__new__(cls) as self:
            setattr(self, "-coordinates", list(coordinates))
            setattr(self, "-labels", dict(labels))
        return self


class RecordTest(TestCase):
    """
    Test suite for write-once records.
    """

    def setUp(self) -> None:
        self.point = Point([1, 2], {"x": "left"})

    def testViewsAreReadOnly(self) -> None:
        # sequences come back as tuples, mappings as proxies
        self.assertEqual(self.point.coordinates, (1, 2))
        with self.assertRaises(TypeError):
            self.point.labels["y"] = "right"

    def testBackingStorageIsHidden(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(self.point, "-coordinates")

    def testBackingStorageIsLocked(self) -> None:
        with self.assertRaises(AttributeError):
            setattr(self.point, "-coordinates", [])
        with self.assertRaises(AttributeError):
            delattr(self.point, "-coordinates")

    def testTypename(self) -> None:
        self.assertEqual(Point.__typename__, "point")

    def testRepr(self) -> None:
        self.assertEqual(repr(self.point), "point(coordinates=(1, 2), labels=mappingproxy({'x': 'left'}))")

    def testRichPretty(self) -> None:
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(self.point)
        self.assertIn("coordinates=(1, 2)", capture.get())

    def testEquality(self) -> None:
        self.assertEqual(self.point, Point((1, 2), {"x": "left"}))
        self.assertNotEqual(self.point, Point((2, 1), {"x": "left"}))

    def testUnhashable(self) -> None:
        with self.assertRaises(TypeError):
            hash(self.point)


if __name__ == '__main__':
    unittest.main()
