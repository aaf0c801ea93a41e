"""
Definition tests (Options, Command, Meta, Config and their factories).

Scope
- Validate sanitization errors (TypeError for wrong types, ValueError for bad values).
- Validate read-only, copy-on-read public attributes.
- Validate the decorator form of define_command and the program-name fallback.

Conventions
- Test method names follow CamelCase per project convention.
"""

import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from pydantic import BaseModel

from commandeer import *
from commandeer.schemas import ModelSchema, TypeSchema


class Build(BaseModel):
    verbose: bool = False
    target: str = "debug"


def _noop(options, args):
    return None


class TestOptions(TestCase):
    """Behavioral tests for Options."""

    def testModelIsAdapted(self):
        options = define_options(Build, {"v": "verbose"})
        self.assertIsInstance(options.schema, ModelSchema)
        self.assertEqual(options.aliases, {"v": "verbose"})

    def testAliasLookup(self):
        options = define_options(Build, {"v": "verbose", "V": "verbose"})
        self.assertEqual(options.alias("verbose"), "v")
        self.assertIsNone(options.alias("target"))

    def testAliasesAreCopies(self):
        options = define_options(Build, {"v": "verbose"})
        options.aliases["t"] = "target"
        self.assertNotIn("t", options.aliases)

    def testRejectsPositionalShapes(self):
        with self.assertRaises(TypeError):
            Options(list[str])

    def testRejectsBadAliases(self):
        with self.assertRaises(TypeError):
            Options(Build, ["v"])
        with self.assertRaises(TypeError):
            Options(Build, {"v": 1})
        with self.assertRaises(ValueError):
            Options(Build, {"": "verbose"})


class TestCommand(TestCase):
    """Behavioral tests for Command and define_command."""

    def testDirectForm(self):
        command = define_command(_noop, descr="  Build it  ", options=Build, args=list[str])
        self.assertIs(command.action, _noop)
        self.assertEqual(command.descr, "Build it")
        self.assertIsInstance(command.options, Options)
        self.assertIsInstance(command.args, TypeSchema)

    def testDecoratorForm(self):
        @define_command(descr="Build it")
        def build(options, args):
            return "built"

        self.assertIsInstance(build, Command)
        self.assertEqual(build.action(None, None), "built")

    def testMissingSchemasAreNone(self):
        command = define_command(_noop)
        self.assertIsNone(command.descr)
        self.assertIsNone(command.options)
        self.assertIsNone(command.args)

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            define_command(_noop).descr = "x"

    def testRejectsBadDefinitions(self):
        with self.assertRaises(TypeError):
            Command("not callable")
        with self.assertRaises(TypeError):
            Command(_noop, descr=1)
        with self.assertRaises(ValueError):
            Command(_noop, descr="   ")
        with self.assertRaises(TypeError):
            define_command(descr="x")("not callable")


class TestConfig(TestCase):
    """Behavioral tests for Config and define_config."""

    def testRegistry(self):
        build = define_command(_noop)
        config = define_config({"build": build}, default=build)
        self.assertIs(config.lookup("build"), build)
        self.assertIsNone(config.lookup("missing"))
        self.assertIs(config.default, build)
        self.assertEqual(list(config.commands), ["build"])

    def testSwitchDefaults(self):
        config = define_config({})
        self.assertTrue(config.colorful)
        self.assertFalse(config.fancy)
        self.assertTrue(config.shell)

    def testMetaFromMapping(self):
        config = define_config({}, meta={"name": "tool", "version": "2.0.0"})
        self.assertEqual(config.meta, Meta("tool", "2.0.0"))

    def testProgFallback(self):
        self.assertEqual(define_config({}, meta=Meta("tool")).prog, "tool")
        with patch.object(sys.modules["__main__"], "__prog__", "hosted", create=True):
            self.assertEqual(define_config({}).prog, "hosted")

    def testCommandsAreCopies(self):
        config = define_config({"build": define_command(_noop)})
        config.commands["other"] = define_command(_noop)
        self.assertIsNone(config.lookup("other"))

    def testRejectsBadDefinitions(self):
        with self.assertRaises(TypeError):
            define_config([])
        with self.assertRaises(TypeError):
            define_config({"build": _noop})
        with self.assertRaises(ValueError):
            define_config({"--build": define_command(_noop)})
        with self.assertRaises(TypeError):
            define_config({}, default=_noop)
        with self.assertRaises(TypeError):
            define_config({}, meta="tool")
        with self.assertRaises(TypeError):
            define_config({}, shell="yes")


if __name__ == "__main__":
    unittest.main()
