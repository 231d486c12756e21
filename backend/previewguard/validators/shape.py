"""Shape gate — a cheap heuristic that rejects input which cannot be a component."""

import re

HAS_COMPONENT = re.compile(r"function\s+\w+\s*\(|(?:const|let|var)\s+\w+\s*=")
HAS_JSX = re.compile(r"<[A-Za-z][^>]*>")
HAS_JSX_RETURN = re.compile(r"return\s*\(?\s*<")


def looks_like_react_code(code: str) -> bool:
    """Quick check that code has a component declaration that returns JSX.

    No parsing, no compilation: this runs before any LLM call.
    """
    return bool(
        HAS_COMPONENT.search(code)
        and HAS_JSX.search(code)
        and HAS_JSX_RETURN.search(code)
    )
