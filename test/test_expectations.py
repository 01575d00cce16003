"""
Expectation normalization tests.

Scope
- Alias splitting/trimming for string and iterable names.
- Description trimming and absence rules.
- Default presence (Unset vs. falsy-but-present values).
- Convertor defaulting and validation.
- Loose mapping declarations through expect().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import Expectation, expect
from argot.expectations import identity
from argot.utils import Unset


class TestNames(TestCase):
    """Alias normalization."""

    def testCommaSeparated(self):
        self.assertEqual(Expectation("port,p").names, ("port", "p"))

    def testCommaWithSpaces(self):
        self.assertEqual(Expectation("port, p").names, ("port", "p"))
        self.assertEqual(Expectation("port , p").names, ("port", "p"))

    def testWhitespaceSeparated(self):
        self.assertEqual(Expectation("port   p").names, ("port", "p"))
        self.assertEqual(Expectation("port\tp").names, ("port", "p"))

    def testOuterWhitespaceTrimmed(self):
        self.assertEqual(Expectation("  port, p  ").names, ("port", "p"))

    def testStringAndIterableAgree(self):
        expected = Expectation(["port", "p"]).names
        for declaration in ("port, p", "port p", "port,p", "  port ,  p "):
            with self.subTest(declaration=declaration):
                self.assertEqual(Expectation(declaration).names, expected)

    def testIterableTrimmedNotSplit(self):
        self.assertEqual(Expectation([" port,p ", "x "]).names, ("port,p", "x"))

    def testTupleAccepted(self):
        self.assertEqual(Expectation(("verbose", "v")).names, ("verbose", "v"))

    def testDuplicatesCollapseInOrder(self):
        self.assertEqual(Expectation("port, p, port").names, ("port", "p"))

    def testPrimaryIsFirstAlias(self):
        self.assertEqual(Expectation("port, p").primary, "port")

    def testContainsAlias(self):
        expectation = Expectation("port, p")
        self.assertIn("p", expectation)
        self.assertNotIn("q", expectation)

    def testEmptyStringRejected(self):
        with self.assertRaises(ValueError):
            Expectation("")
        with self.assertRaises(ValueError):
            Expectation(" , ")

    def testEmptyIterableRejected(self):
        with self.assertRaises(ValueError):
            Expectation([])

    def testEmptyElementsDropped(self):
        self.assertEqual(Expectation(["port", "", "  ", "p"]).names, ("port", "p"))
        self.assertEqual(Expectation("port,,p").names, ("port", "p"))

    def testOnlyEmptyElementsRejected(self):
        with self.assertRaises(ValueError):
            Expectation(["", "  "])

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            Expectation(42)
        with self.assertRaises(TypeError):
            Expectation(["port", 1])


class TestDescription(TestCase):
    """Description normalization."""

    def testTrimmed(self):
        self.assertEqual(Expectation("port", description="  Port to use.\n").description, "Port to use.")

    def testInnerNewlinesKept(self):
        self.assertEqual(Expectation("port", description="one\ntwo").description, "one\ntwo")

    def testMissingIsNone(self):
        self.assertIsNone(Expectation("port").description)

    def testEmptyIsNone(self):
        self.assertIsNone(Expectation("port", description="").description)
        self.assertIsNone(Expectation("port", description="   ").description)

    def testExplicitNoneIsNone(self):
        self.assertIsNone(Expectation("port", description=None).description)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            Expectation("port", description=42)


class TestDefault(TestCase):
    """Default presence rules."""

    def testMissingIsUnset(self):
        expectation = Expectation("port")
        self.assertIs(expectation.default, Unset)
        self.assertFalse(expectation.has_default())

    def testFalsyValuesArePresent(self):
        for default in (0, False, "", []):
            with self.subTest(default=default):
                expectation = Expectation("port", default=default)
                self.assertTrue(expectation.has_default())
                self.assertEqual(expectation.default, default)

    def testNoneMeansNoDefault(self):
        expectation = Expectation("port", default=None)
        self.assertIs(expectation.default, Unset)
        self.assertFalse(expectation.has_default())
        self.assertFalse(expect({"name": "port", "default": None}).has_default())

    def testDefaultNotCopied(self):
        default = [1, 2]
        self.assertIs(Expectation("ids", default=default).default, default)


class TestConvertor(TestCase):
    """Convertor defaulting and validation."""

    def testDefaultsToIdentity(self):
        expectation = Expectation("port")
        self.assertIs(expectation.convertor, identity)
        marker = object()
        self.assertIs(expectation.convertor(marker), marker)

    def testCustomConvertorKept(self):
        self.assertIs(Expectation("port", convertor=int).convertor, int)

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            Expectation("port", convertor="int")


class TestExpectationObject(TestCase):
    """Immutability, sealing and representation."""

    def testReadOnly(self):
        expectation = Expectation("port")
        with self.assertRaises(AttributeError):
            expectation.names = ("other",)
        with self.assertRaises(AttributeError):
            expectation.extra = 1

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Custom", (Expectation,), {})

    def testRepr(self):
        self.assertTrue(repr(Expectation("port, p")).startswith("expectation(names=('port', 'p')"))

    def testRichRepr(self):
        fields = dict(Expectation("port", default=1).__rich_repr__())
        self.assertEqual(fields["names"], ("port",))
        self.assertEqual(fields["default"], 1)


class TestExpect(TestCase):
    """Loose declarations."""

    def testMapping(self):
        expectation = expect({"name": "port,p", "default": 3000, "convertor": int, "description": "Port."})
        self.assertEqual(expectation.names, ("port", "p"))
        self.assertEqual(expectation.default, 3000)
        self.assertIs(expectation.convertor, int)
        self.assertEqual(expectation.description, "Port.")

    def testMappingWithoutDefault(self):
        self.assertFalse(expect({"name": "port"}).has_default())

    def testExpectationPassesThrough(self):
        expectation = Expectation("port")
        self.assertIs(expect(expectation), expectation)

    def testMissingNameRejected(self):
        with self.assertRaises(TypeError):
            expect({"default": 1})

    def testUnknownKeyRejected(self):
        with self.assertRaises(TypeError):
            expect({"name": "port", "type": int})

    def testOtherObjectRejected(self):
        with self.assertRaises(TypeError):
            expect("port")


if __name__ == "__main__":
    unittest.main()
