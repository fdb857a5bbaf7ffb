"""
Faults module tests (codes, text form, rich rendering, replacement).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with color disabled for deterministic comparison.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from rich.console import Console

from flagrelay import (
    DuplicateNameWarning,
    EmptyPayloadError,
    FaultCode,
    FlagException,
    InternalError,
    InvalidUsageError,
    InvalidValueError,
    NotFoundError,
)


def render(renderable):
    console = Console(color_system=None, force_terminal=False, width=100)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestFaultCodes(TestCase):
    """Stable numeric identifiers per fault kind."""

    def testCodeValues(self):
        self.assertEqual(int(FaultCode.ERROR), 1)
        self.assertEqual(int(FaultCode.INVALID_USAGE), 2)
        self.assertEqual(int(FaultCode.INVALID_VALUE), 4)
        self.assertEqual(int(FaultCode.NOT_FOUND), 40)
        self.assertEqual(int(FaultCode.INTERNAL_ERROR), 99)

    def testKindsCarryTheirCode(self):
        self.assertIs(EmptyPayloadError.code, FaultCode.ERROR)
        self.assertIs(InvalidUsageError.code, FaultCode.INVALID_USAGE)
        self.assertIs(InvalidValueError.code, FaultCode.INVALID_VALUE)
        self.assertIs(NotFoundError.code, FaultCode.NOT_FOUND)
        self.assertIs(InternalError.code, FaultCode.INTERNAL_ERROR)

    def testKindsShareOneBase(self):
        for kind in (EmptyPayloadError, InvalidUsageError, InvalidValueError, NotFoundError, InternalError):
            with self.subTest(kind=kind.__name__):
                self.assertTrue(issubclass(kind, FlagException))

    def testNormalizeDefaultsToName(self):
        self.assertEqual(FaultCode.NOT_FOUND.normalize(), "NOT_FOUND")


class TestFlagException(TestCase):
    """Text form, options and replacement."""

    def testStr(self):
        self.assertEqual(str(InvalidUsageError("no flags provided")), "INVALID_USAGE: no flags provided")

    def testTitle(self):
        self.assertEqual(InvalidValueError("x").title, "Invalid Value")

    def testOptionsAreReadOnly(self):
        fault = NotFoundError("flag x not found in parsed result", flag="x")
        self.assertEqual(fault.options["flag"], "x")
        with self.assertRaises(TypeError):
            fault.options["flag"] = "y"  # type: ignore[index]

    def testReplace(self):
        fault = InvalidUsageError("unrecognized flag: -z", token="-z")
        replaced = copy.replace(fault, hint="declare the flag first")
        self.assertIsInstance(replaced, InvalidUsageError)
        self.assertEqual(replaced.message, fault.message)
        self.assertEqual(replaced.options["token"], "-z")
        self.assertEqual(replaced.options["hint"], "declare the flag first")

    def testRichRendering(self):
        output = render(InvalidValueError("invalid value 'x'", hint="pass a number"))
        self.assertIn("INVALID_VALUE", output)
        self.assertIn("Invalid Value", output)
        self.assertIn("invalid value 'x'", output)
        self.assertIn("pass a number", output)

    def testFancyRendering(self):
        output = render(InternalError("malformed token", fancy=True))
        self.assertIn("INTERNAL_ERROR", output)
        self.assertIn("malformed token", output)

    def testPlainRendering(self):
        output = render(EmptyPayloadError("parsed data can not be empty", colorful=False))
        self.assertIn("parsed data can not be empty", output)


class TestFlagWarning(TestCase):
    """Non-fatal diagnostics."""

    def testStrIsMessage(self):
        self.assertEqual(str(DuplicateNameWarning("flag name 's' is already declared")), "flag name 's' is already declared")

    def testTitle(self):
        self.assertEqual(DuplicateNameWarning("x").title, "duplicate name warning")

    def testIsWarning(self):
        self.assertTrue(issubclass(DuplicateNameWarning, Warning))
        self.assertIs(DuplicateNameWarning.code, FaultCode.INVALID_USAGE)

    def testRichRendering(self):
        self.assertIn("duplicate name warning", render(DuplicateNameWarning("x", hint="rename it")))


if __name__ == "__main__":
    unittest.main()
