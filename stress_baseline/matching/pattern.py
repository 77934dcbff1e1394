"""
Pattern Matcher
===============
Optional-equality and wildcard matching used by every baseline comparison.

Absence Rules (all field kinds):
    specification is None              → match (field is unconstrained)
    specification set, input is None   → no match
    otherwise                          → compare

String Comparison:
    - No '*' in the specification → exact, case-sensitive equality.
    - One or more '*'             → the literal segments between wildcards are
      located left to right with a casefolded substring search. A pattern
      that does not start with '*' is anchored at the start of the
      input; one that does not end with '*' is anchored at the end. Empty
      segments (doubled or edge wildcards) are skipped, so a pattern made only
      of '*' matches any input.

Contract:
    - PURE and TOTAL: every (input, specification) pair yields a bool.
"""
from typing import Any, Optional

from stress_baseline.core.constants import WILDCARD


def match_value(input: Any, specification: Any) -> bool:
    """
    Match an equatable scalar (int, enum member) against an optional specification.

    Parameters
    ----------
    input : Any
        The observed value, possibly None.
    specification : Any
        The baseline value. None means "don't constrain this field".

    Returns
    -------
    bool
        True if the specification is absent or equals the input.
    """
    if specification is None:
        return True
    if input is None:
        return False
    return input == specification


def match_pattern(input: Optional[str], specification: Optional[str]) -> bool:
    """
    Match a string against an optional '*' wildcard pattern.

    Parameters
    ----------
    input : str or None
        The observed string (a path, an argument list, replacement text...).
    specification : str or None
        The baseline pattern. None matches anything, including None.

    Returns
    -------
    bool
        True if the input satisfies the pattern.
    """
    if specification is None:
        return True
    if input is None:
        return False
    if WILDCARD not in specification:
        return input == specification

    segments = [s.casefold() for s in specification.split(WILDCARD) if s]
    if not segments:
        return True

    anchored_start = not specification.startswith(WILDCARD)
    anchored_end = not specification.endswith(WILDCARD)
    text = input.casefold()
    cursor = 0
    last = len(segments) - 1

    for index, segment in enumerate(segments):
        if index == 0 and anchored_start:
            if not text.startswith(segment):
                return False
            found = 0
        elif index == last and anchored_end:
            # The tail must sit at the very end, after everything matched so far
            found = text.rfind(segment, cursor)
            if found == -1 or found + len(segment) != len(text):
                return False
        else:
            found = text.find(segment, cursor)
            if found == -1:
                return False
        cursor = found + len(segment)

    return True


def match_field(input: Any, specification: Any) -> bool:
    """Dispatch to match_pattern for strings and match_value for everything else."""
    if isinstance(specification, str):
        if input is not None and not isinstance(input, str):
            return False
        return match_pattern(input, specification)
    return match_value(input, specification)
