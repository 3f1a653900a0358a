# python
"""
Faults module behavioral tests (typed errors, warnings, trigger, rendering).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from flagset.faults import (
    ArgumentException,
    FaultCode,
    MissingRequiredValueError,
    MissingValueWarning,
    Termination,
    trigger,
)


def capture():
    return Console(file=io.StringIO(), color_system=None, force_terminal=False, width=120)


class TestFaultCode(TestCase):

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_REQUIRED_VALUE.normalize(), "11201")

    def testNormalizeHonorsHostCodes(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.MISSING_VALUE: "E-VALUE"}, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-VALUE")
            self.assertEqual(FaultCode.MISSING_REQUIRED_VALUE.normalize(), "11201")


class TestMissingRequiredValueError(TestCase):

    def testCarriesStructuredData(self):
        error = MissingRequiredValueError("missing required value for argument 'out'", name="out")
        self.assertEqual(error.name, "out")
        self.assertIs(error.code, FaultCode.MISSING_REQUIRED_VALUE)
        self.assertEqual(str(error), "missing required value for argument 'out'")
        self.assertIsInstance(error, ArgumentException)

    def testReplaceMergesOptions(self):
        error = MissingRequiredValueError("message", name="out")
        replaced = copy.replace(error, hint="try --out")
        self.assertIsNot(replaced, error)
        self.assertEqual(replaced.name, "out")
        self.assertEqual(replaced.hint, "try --out")
        self.assertEqual(replaced.message, "message")

    def testTriggerRaisesUnderRaisePolicy(self):
        with self.assertRaises(MissingRequiredValueError) as caught:
            trigger(MissingRequiredValueError("message"), name="out", termination=Termination.RAISE)
        self.assertEqual(caught.exception.name, "out")

    def testTriggerPrintsAndExitsUnderExitPolicy(self):
        console = capture()
        statuses = []
        trigger(
            MissingRequiredValueError("missing required value for argument 'out'"),
            name="out",
            title="missing required value",
            hint="pass it as --out VALUE",
            console=console,
            exit=statuses.append,
            termination=Termination.EXIT,
            colorful=False,
        )
        output = console.file.getvalue()
        self.assertEqual(statuses, [1])
        self.assertIn("11201", output)
        self.assertIn("Missing Required Value", output)
        self.assertIn("missing required value for argument 'out'", output)
        self.assertIn("pass it as --out VALUE", output)

    def testFancyRenderingUsesPanel(self):
        console = capture()
        error = MissingRequiredValueError("missing", name="out", fancy=True, colorful=False)
        console.print(error)
        output = console.file.getvalue()
        self.assertIn("╭", output)
        self.assertIn("missing", output)


class TestMissingValueWarning(TestCase):

    def testTriggerWarns(self):
        with self.assertWarns(MissingValueWarning) as caught:
            trigger(MissingValueWarning("no value follows '--out'"), name="out")
        self.assertEqual(caught.warning.name, "out")
        self.assertIs(caught.warning.code, FaultCode.MISSING_VALUE)


class TestTrigger(TestCase):

    def testRejectsNonTriggerables(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
