"""Balance scanner — delimiter counting that understands comments, strings and templates.

The scanner walks the source once and yields only the characters that are
"code": comment text, quoted-string bodies and template-literal bodies are
skipped, while ``${...}`` interpolation regions inside a template are code
again and are scanned normally (templates can nest inside them).

There is no JSX parsing. A quote directly after an identifier character
(``Don't``, ``12" pizza``) cannot open a JS string, so it is treated as text.
A quote at the start of a word in JSX text (``'Tis``) still opens a string;
since strings end at a newline, only the rest of that line is hidden.

Context stack entries:
    _TEMPLATE  — inside a back-tick literal body
    int        — inside an interpolation; the value is the number of plain
                 ``{`` opened within it that are still unclosed
"""

from typing import Iterator

from previewguard.validators.models import BraceBalance

_TEMPLATE = None

_OPENERS = {"{": "curly", "(": "paren", "[": "bracket"}
_CLOSERS = {"}": "curly", ")": "paren", "]": "bracket"}


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def _skip_quoted(code: str, start: int) -> int:
    """Return the index just past the string literal opening at ``start``."""
    quote = code[start]
    i = start + 1
    n = len(code)
    while i < n:
        ch = code[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n":
            # Unterminated on this line: JS strings cannot span lines
            return i
        i += 1
    return n


def _iter_code_chars(code: str) -> Iterator[str]:
    """Yield every character of ``code`` that is in code mode."""
    contexts: list = []
    i = 0
    n = len(code)

    while i < n:
        ch = code[i]
        nxt = code[i + 1] if i + 1 < n else ""

        # ── Template literal body ──
        if contexts and contexts[-1] is _TEMPLATE:
            if ch == "\\":
                i += 2
            elif ch == "`":
                contexts.pop()
                i += 1
            elif ch == "$" and nxt == "{":
                contexts.append(0)
                yield "{"
                i += 2
            else:
                i += 1
            continue

        # ── Code mode (top level or inside an interpolation) ──
        if ch == "/" and nxt == "/":
            end = code.find("\n", i)
            i = n if end == -1 else end
            continue
        if ch == "/" and nxt == "*":
            end = code.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        if ch in ("'", '"') and not (i and _is_word_char(code[i - 1])):
            i = _skip_quoted(code, i)
            continue
        if ch == "`":
            contexts.append(_TEMPLATE)
            i += 1
            continue

        if contexts:
            if ch == "{":
                contexts[-1] += 1
            elif ch == "}":
                if contexts[-1] == 0:
                    # Closes the interpolation, back to the template body
                    contexts.pop()
                else:
                    contexts[-1] -= 1

        yield ch
        i += 1


def check_brace_balance(code: str) -> BraceBalance:
    """Count structural delimiters outside comments, strings and template bodies."""
    counts = {"curly": 0, "paren": 0, "bracket": 0}
    for ch in _iter_code_chars(code):
        if ch in _OPENERS:
            counts[_OPENERS[ch]] += 1
        elif ch in _CLOSERS:
            counts[_CLOSERS[ch]] -= 1
    return BraceBalance(**counts)


def strip_comments_and_strings(code: str) -> str:
    """Return only the code-mode text of ``code``."""
    return "".join(_iter_code_chars(code))
