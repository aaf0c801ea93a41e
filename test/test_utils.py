"""
Utility tests (sentinel, coalesce, hyphenated spellings, logging hook).

Conventions
- Test method names follow CamelCase per project convention.
"""

import logging
import unittest
from unittest import TestCase

from rich.logging import RichHandler

from commandeer.utils import *


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel and coalesce()."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestKebabize(TestCase):
    """Behavioral tests for kebabize()."""

    def testCamelCase(self):
        self.assertEqual(kebabize("androidMax"), "android-max")
        self.assertEqual(kebabize("expiresInDays"), "expires-in-days")

    def testSnakeCase(self):
        self.assertEqual(kebabize("dry_run"), "dry-run")

    def testUnchanged(self):
        self.assertEqual(kebabize("verbose"), "verbose")

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            kebabize(1)


class TestVerbose(TestCase):
    """Behavioral tests for verbose()."""

    def tearDown(self):
        logger = logging.getLogger("commandeer")
        for handler in [handler for handler in logger.handlers if isinstance(handler, RichHandler)]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def testSingleHandler(self):
        logger = verbose()
        verbose(logging.INFO)
        self.assertEqual(logger.name, "commandeer")
        self.assertEqual(logger.level, logging.INFO)
        self.assertEqual(sum(isinstance(handler, RichHandler) for handler in logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
