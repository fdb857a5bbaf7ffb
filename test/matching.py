"""
Matching module behavioral tests (one flag against a token sequence).

Scope
- Head form and equals form extraction, for short and long names.
- Boolean lookahead: explicit "true"/"false" is consumed, anything else is left.
- Value-bearing flags: missing or flag-shaped values are rejected.
- Post-scan resolution: required, defaults, absent.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from flagrelay import FlagOptions, FlagSpec, FlagType, InvalidUsageError, InvalidValueError
from flagrelay.matching import match


class TestMatchValueFlags(TestCase):
    """String and number flags."""

    def setUp(self):
        self.spec = FlagSpec("n", "name", FlagType.STRING)

    def testShortAndLongHeads(self):
        self.assertEqual(match(self.spec, ["-n", "a", "--name", "b"]), (("a", "b"), ()))

    def testEqualsForm(self):
        self.assertEqual(match(self.spec, ["-n=a", "--name=b"]), (("a", "b"), ()))

    def testEqualsFormSplitsOnFirstEquals(self):
        self.assertEqual(match(self.spec, ["--name=a=b"]), (("a=b",), ()))

    def testEqualsFormAllowsEmptyValue(self):
        self.assertEqual(match(self.spec, ["--name="]), (("",), ()))

    def testEqualsFormAllowsDashValue(self):
        self.assertEqual(match(self.spec, ["--name=-x"]), (("-x",), ()))

    def testRemainderKeepsOrder(self):
        values, remainder = match(self.spec, ["x", "--name", "a", "y", "-q", "z"])
        self.assertEqual(values, ("a",))
        self.assertEqual(remainder, ("x", "y", "-q", "z"))

    def testInputIsNotMutated(self):
        tokens = ["--name", "a", "b"]
        match(self.spec, tokens)
        self.assertEqual(tokens, ["--name", "a", "b"])

    def testMissingValueAtEndRejected(self):
        with self.assertRaises(InvalidValueError) as context:
            match(self.spec, ["x", "--name"])
        self.assertIn("no value provided for flag --name", context.exception.message)

    def testFlagShapedValueRejected(self):
        with self.assertRaises(InvalidValueError):
            match(self.spec, ["-n", "-x"])

    def testNegativeNumberNeedsEqualsForm(self):
        spec = FlagSpec("c", "count", FlagType.NUMBER)
        with self.assertRaises(InvalidValueError):
            match(spec, ["--count", "-5"])
        self.assertEqual(match(spec, ["--count=-5"]), (("-5",), ()))

    def testInvalidValueAbortsScan(self):
        spec = FlagSpec("c", "count", FlagType.NUMBER)
        with self.assertRaises(InvalidValueError):
            match(spec, ["--count", "1", "--count", "many"])

    def testSimilarNamesDoNotMatch(self):
        values, remainder = match(self.spec, ["--names", "a", "-nx", "--name-b=c"])
        self.assertEqual(values, ())
        self.assertEqual(remainder, ("--names", "a", "-nx", "--name-b=c"))

    def testShortNameIsNotMatchedWithDoubleDash(self):
        spec = FlagSpec("n", "", FlagType.STRING)
        self.assertEqual(match(spec, ["--n", "a"]), ((), ("--n", "a")))

    def testMissingNameNeverMatchesBareDashes(self):
        spec = FlagSpec("", "name", FlagType.STRING)
        self.assertEqual(match(spec, ["-", "a", "-=b"]), ((), ("-", "a", "-=b")))


class TestMatchBooleanFlags(TestCase):
    """Boolean flags and their lookahead."""

    def setUp(self):
        self.spec = FlagSpec("v", "verbose", FlagType.BOOLEAN)

    def testImplicitTrue(self):
        self.assertEqual(match(self.spec, ["-v"]), (("true",), ()))

    def testExplicitValueConsumed(self):
        self.assertEqual(match(self.spec, ["-v", "false"]), (("false",), ()))
        self.assertEqual(match(self.spec, ["--verbose", "true"]), (("true",), ()))

    def testNonBooleanLookaheadLeftInStream(self):
        self.assertEqual(match(self.spec, ["-v", "extra"]), (("true",), ("extra",)))

    def testFlagLookaheadLeftInStream(self):
        self.assertEqual(match(self.spec, ["-v", "-v"]), (("true", "true"), ()))

    def testEqualsFormValidated(self):
        self.assertEqual(match(self.spec, ["--verbose=false"]), (("false",), ()))
        with self.assertRaises(InvalidValueError):
            match(self.spec, ["--verbose=yes"])


class TestMatchResolution(TestCase):
    """Post-scan resolution of flags that never matched."""

    def testRequiredMissingRejected(self):
        spec = FlagSpec("s", "short", FlagType.STRING, FlagOptions(required=True))
        with self.assertRaises(InvalidUsageError) as context:
            match(spec, ["a", "b"])
        self.assertIn("required flag missing: -s/--short", context.exception.message)

    def testDefaultsApplied(self):
        spec = FlagSpec("t", "type", FlagType.NUMBER, FlagOptions(default_values=("123",)))
        self.assertEqual(match(spec, ["a"]), (("123",), ("a",)))

    def testDefaultsReplacedByMatches(self):
        spec = FlagSpec("t", "type", FlagType.NUMBER, FlagOptions(default_values=("123",)))
        self.assertEqual(match(spec, ["-t", "7"]), (("7",), ()))

    def testAbsentFlagYieldsNothing(self):
        spec = FlagSpec("s", "", FlagType.STRING)
        self.assertEqual(match(spec, ["a"]), ((), ("a",)))


if __name__ == "__main__":
    unittest.main()
