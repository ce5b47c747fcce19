"""
mockverify — Diagnostic Formatting

Renders invocation listings and matcher/argument comparisons for failure
messages. Only called on failing paths.
"""

from __future__ import annotations

from collections.abc import Sequence

from mockverify.primitives.invocation import Invocation
from mockverify.verification.types import Call, InvocationMatcher

_MISSING = "<missing>"


def format_calls(calls: Sequence[Invocation], limit: int | None = None) -> str:
    """One invocation per line, optionally truncated to the first ``limit``."""
    shown = calls if limit is None else calls[:limit]
    lines = [str(c) for c in shown]
    hidden = len(calls) - len(shown)
    if hidden > 0:
        lines.append(f"... ({hidden} more)")
    return "\n".join(lines)


def report_calls(
    calls: Sequence[Call],
    all_calls: Sequence[Invocation],
    limit: int | None = None,
) -> str:
    """Matcher list followed by the chronological call listing."""
    matchers = "\n".join(str(c.matcher) for c in calls)
    return f"\nMatchers: \n{matchers}\nCalls: \n{format_calls(all_calls, limit)}"


def at_most_msg(maximum: int | None) -> str:
    return "" if maximum is None else f" and at most {maximum}"


def describe_argument_difference(matcher: InvocationMatcher, invocation: Invocation) -> str:
    """
    Per-argument breakdown: index, value, matcher, and +/- outcome.

    Positions present on only one side are shown as <missing> and count as a
    mismatch.
    """
    lines: list[str] = []
    for i in range(max(len(invocation.args), len(matcher.args))):
        has_arg = i < len(invocation.args)
        has_matcher = i < len(matcher.args)
        arg = repr(invocation.args[i]) if has_arg else _MISSING
        arg_matcher = matcher.args[i] if has_matcher else _MISSING
        matches = has_arg and has_matcher and matcher.args[i].match(invocation.args[i])
        lines.append(
            f"[{i}]: argument: {arg}, matcher: {arg_matcher}, "
            f"result: {'+' if matches else '-'}\n"
        )
    return "".join(lines)
