"""
Resolution stage tests (aliases, hyphenated names, unknown options, arrays).

Scope
- Validate alias precedence and spelling bookkeeping.
- Validate hyphenated-to-canonical moves and the "canonical already present" rule.
- Validate unknown-option detection, reserved keys and reported spellings.
- Validate array normalization against pydantic-backed schemas.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from typing import Optional
from unittest import TestCase

from pydantic import BaseModel, Field

from commandeer.faults import FaultCode, UnknownOptionError
from commandeer.resolution import resolve_aliases, resolve_kebab_case, detect_unknown, normalize_arrays
from commandeer.schemas import ModelSchema
from commandeer.tokens import tokenize


class Build(BaseModel):
    androidMax: Optional[str] = None
    dry_run: bool = False
    files: list[str] = Field(default_factory=list)
    tags: Optional[list[str]] = None
    verbose: bool = False


class TestAliases(TestCase):
    """Behavioral tests for resolve_aliases."""

    def testAliasReplacedByCanonical(self):
        resolved = resolve_aliases(tokenize(["-v", "-n", "x"]), {"v": "verbose", "n": "name"})
        self.assertEqual(resolved.flags, {"verbose": True, "name": "x"})

    def testAliasWinsOverCanonical(self):
        tokens = tokenize(["-v"])
        tokens.flags["verbose"] = False
        resolved = resolve_aliases(tokens, {"v": "verbose"})
        self.assertEqual(resolved.flags, {"verbose": True})

    def testInputIsNotMutated(self):
        tokens = tokenize(["-v"])
        resolve_aliases(tokens, {"v": "verbose"})
        self.assertEqual(tokens.flags, {"v": True})

    def testSpellingFollowsAlias(self):
        resolved = resolve_aliases(tokenize(["-x"]), {"x": "extra"})
        self.assertEqual(resolved.spellings, {"extra": "-x"})

    def testNoAliases(self):
        tokens = tokenize(["-v"])
        self.assertIs(resolve_aliases(tokens, None), tokens)


class TestKebabCase(TestCase):
    """Behavioral tests for resolve_kebab_case."""

    def testCamelCaseField(self):
        resolved = resolve_kebab_case(tokenize(["--android-max", "10"]), ["androidMax"])
        self.assertEqual(resolved.flags, {"androidMax": "10"})

    def testSnakeCaseField(self):
        resolved = resolve_kebab_case(tokenize(["--dry-run"]), ["dry_run"])
        self.assertEqual(resolved.flags, {"dry_run": True})

    def testCanonicalAlreadyPresentLeavesHyphenatedUntouched(self):
        tokens = tokenize(["--android-max", "10", "--androidMax", "5"])
        resolved = resolve_kebab_case(tokens, ["androidMax"])
        self.assertEqual(resolved.flags, {"android-max": "10", "androidMax": "5"})

    def testUndeclaredHyphenatedKeyIsKept(self):
        resolved = resolve_kebab_case(tokenize(["--other-thing"]), ["androidMax"])
        self.assertEqual(resolved.flags, {"other-thing": True})


class TestUnknownOptions(TestCase):
    """Behavioral tests for detect_unknown."""

    def testDeclaredAndReservedPass(self):
        detect_unknown(tokenize(["--verbose", "--help", "--version"]), {"verbose"})

    def testNoSchemaOnlyReservedPass(self):
        detect_unknown(tokenize(["--help"]), ())
        with self.assertRaises(UnknownOptionError):
            detect_unknown(tokenize(["--verbose"]), ())

    def testLongSpellingReported(self):
        with self.assertRaises(UnknownOptionError) as context:
            detect_unknown(tokenize(["--unknown"]), {"verbose"}, command="test")
        fault = context.exception
        self.assertEqual(fault.options["input"], "--unknown")
        self.assertIs(fault.code, FaultCode.UNKNOWN_OPTION)
        self.assertIn("'--unknown'", str(fault))
        self.assertIn("'test'", str(fault))

    def testShortSpellingReported(self):
        with self.assertRaises(UnknownOptionError) as context:
            detect_unknown(tokenize(["-xv"]), {"verbose"})
        self.assertEqual(context.exception.options["unknown"], ("-x", "-v"))

    def testAliasToUndeclaredFieldReportsAlias(self):
        tokens = resolve_aliases(tokenize(["-q"]), {"q": "quiet"})
        with self.assertRaises(UnknownOptionError) as context:
            detect_unknown(tokens, {"verbose"})
        self.assertEqual(context.exception.options["input"], "-q")


class TestArrays(TestCase):
    """Behavioral tests for normalize_arrays."""

    schema = ModelSchema(Build)

    def testLoneValueIsWrapped(self):
        self.assertEqual(normalize_arrays({"files": "a.txt"}, self.schema), {"files": ["a.txt"]})

    def testOptionalArrayIsWrapped(self):
        self.assertEqual(normalize_arrays({"tags": "x"}, self.schema), {"tags": ["x"]})

    def testListsAndScalarsUntouched(self):
        flags = {"files": ["a", "b"], "verbose": True, "androidMax": "3"}
        self.assertEqual(normalize_arrays(flags, self.schema), flags)

    def testAbsentFieldsStayAbsent(self):
        self.assertEqual(normalize_arrays({}, self.schema), {})


if __name__ == "__main__":
    unittest.main()
