"""Signature validation for test methods.

The reason strings are shown to users by reporting tools and must stay
stable.
"""

import inspect

from case_builder.models.test import ArgumentSet, TestMethod

RETURN_NOT_VOID = "must return void"
KEYWORD_ONLY_REQUIRED = "keyword-only parameters cannot be supplied: {names}"
ARGUMENTS_NOT_ALLOWED = "arguments may not be specified for a method with no parameters"
ARGUMENTS_MISSING = "no arguments provided for a method requiring them"
ARGUMENT_COUNT_MISMATCH = "expected {needed} arguments, but received {passed}"

_VOID_ANNOTATIONS = (inspect.Signature.empty, None, type(None), "None")


def returns_void(method: TestMethod) -> bool:
    """Check that a method produces no result value.

    Generator and coroutine functions always produce one, whatever their
    annotation.
    """
    function = method.function
    if (
        inspect.isgeneratorfunction(function)
        or inspect.isasyncgenfunction(function)
        or inspect.iscoroutinefunction(function)
    ):
        return False
    annotation = method.return_annotation
    return any(annotation is void or annotation == void for void in _VOID_ANNOTATIONS)


def validate_signature(method: TestMethod, arguments: ArgumentSet | None) -> str | None:
    """Return why ``method`` cannot run with ``arguments``, or None if it can.

    Rules are checked in order and the first failure wins.
    """
    if not returns_void(method):
        return RETURN_NOT_VOID

    if required := method.required_keywords:
        return KEYWORD_ONLY_REQUIRED.format(names=", ".join(p.name for p in required))

    needed = method.parameter_count
    passed = len(arguments) if arguments is not None else 0

    if needed == 0 and passed > 0:
        return ARGUMENTS_NOT_ALLOWED

    if needed > 0 and passed == 0:
        return ARGUMENTS_MISSING

    if needed != passed:
        return ARGUMENT_COUNT_MISMATCH.format(needed=needed, passed=passed)

    return None
