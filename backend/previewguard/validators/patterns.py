"""Rule tables for preview code validation and repair.

Every structural check lives here as data so the rule set can be audited and
tested independently of the validators and the sanitizer loop.
"""

import re
from dataclasses import dataclass
from typing import Optional

from previewguard.validators.models import ErrorType

CANONICAL_COMPONENT = "Preview"

# ── Forbidden patterns (full validator) ──

FORBIDDEN_PATTERNS: dict[ErrorType, list[re.Pattern]] = {
    ErrorType.IMPORT: [
        re.compile(r"^import\s+.*\s+from\s+['\"].*['\"];?\s*$", re.MULTILINE),
        re.compile(r"^import\s+['\"].*['\"];?\s*$", re.MULTILINE),
        re.compile(r"^import\s*\{[^}]*\}\s*from\s*['\"].*['\"];?\s*$", re.MULTILINE),
        re.compile(r"require\s*\(['\"].*?['\"]\)"),
    ],
    ErrorType.EXPORT: [
        re.compile(r"^export\s+default\s+", re.MULTILINE),
        re.compile(r"^export\s+\{[^}]*\};?\s*$", re.MULTILINE),
        re.compile(r"^export\s+(?:const|let|var|function|class)\s+", re.MULTILINE),
        re.compile(r"module\.exports\s*="),
    ],
    ErrorType.DIRECTIVE: [
        re.compile(r"^['\"]use client['\"];?\s*$", re.MULTILINE),
        re.compile(r"^['\"]use server['\"];?\s*$", re.MULTILINE),
    ],
    # The preview compiler tolerates these, so the minimal path ignores them
    ErrorType.TYPESCRIPT: [
        re.compile(r"^[ \t]*(?:export\s+)?interface\s+\w+", re.MULTILINE),
        re.compile(r"^[ \t]*(?:export\s+)?type\s+\w+(?:<[^>\n]*>)?\s*=", re.MULTILINE),
    ],
    ErrorType.DANGEROUS: [
        re.compile(r"\beval\s*\("),
        re.compile(r"\bnew\s+Function\s*\("),
        re.compile(r"\bdocument\.write(?:ln)?\s*\("),
    ],
    ErrorType.MARKDOWN: [
        re.compile(r"^```(?:jsx?|tsx?|javascript|typescript)?\s*$", re.MULTILINE),
    ],
}

# Human-readable names for the dangerous calls (minimal validator messages)
DANGEROUS_CALLS: list[tuple[re.Pattern, str]] = list(zip(
    FORBIDDEN_PATTERNS[ErrorType.DANGEROUS],
    ["eval()", "new Function()", "document.write()"],
))

# ── Component declarations ──

PREVIEW_DECLARATION = re.compile(
    r"\bfunction\s+Preview\s*\(|\b(?:const|let|var)\s+Preview\b\s*(?::[^=\n]+)?="
)

COMPONENT_NAME_PATTERNS = [
    re.compile(r"function\s+(\w+)\s*\("),
    re.compile(r"const\s+(\w+)\s*=\s*\(\s*\)\s*=>"),
    re.compile(r"const\s+(\w+)\s*=\s*function"),
    re.compile(r"class\s+(\w+)\s+extends"),
]

# Checked in this order, first declaration found wins
ALTERNATE_COMPONENT_NAMES = [
    "HomePage",
    "Home",
    "App",
    "Main",
    "Landing",
    "LandingPage",
    "Page",
    "Website",
    "Site",
    "Component",
    "Design",
]


def declaration_patterns(name: str) -> list[re.Pattern]:
    """Declaration forms for ``name``; group 1 is everything before the identifier."""
    ident = re.escape(name)
    return [
        re.compile(rf"(\bfunction\s+){ident}(?=\s*\()"),
        re.compile(
            rf"(\b(?:const|let|var)\s+){ident}"
            rf"(?=\s*(?::[^=\n]+)?=\s*(?:async\s+)?"
            rf"(?:\([^)]*\)\s*(?::[^=\n]+)?=>|\w+\s*=>|function\b|(?:React\.)?(?:memo|forwardRef)\s*\())"
        ),
        re.compile(rf"(\bclass\s+){ident}(?=\s+extends\b)"),
    ]


# ── Minimal validator ──

MARKDOWN_FENCE_START = re.compile(r"^\s*```[\w+-]*[ \t]*\r?\n")
MARKDOWN_FENCE_END = re.compile(r"\r?\n[ \t]*```[ \t]*\s*$")
END_SENTINEL = re.compile(
    r"\s*(?://[ \t]*END OF CODE[ \t]*|/\*\s*END OF CODE\s*\*/)\s*$",
    re.IGNORECASE,
)

# ── Auto-fix rules ──


@dataclass(frozen=True)
class FixRule:
    """A single mechanical rewrite.

    ``description`` may contain ``{count}``, filled with the number of matches.
    """

    description: str
    pattern: re.Pattern
    replacement: str = ""


FIX_RULES_BEFORE_RENAME: list[FixRule] = [
    FixRule(
        "Removed markdown code blocks",
        re.compile(r"^[ \t]*```[\w+-]*[ \t]*$\n?", re.MULTILINE),
    ),
    FixRule(
        "Removed {count} named import statement(s)",
        re.compile(
            r"^[ \t]*import\s+(?:type\s+)?(?:[\w$]+\s*,\s*)?\{[^}]*\}\s*from\s*['\"][^'\"\n]*['\"][ \t]*;?[ \t]*$\n?",
            re.MULTILINE,
        ),
    ),
    FixRule(
        "Removed {count} import statement(s)",
        re.compile(r"^[ \t]*import[ \t]+[^\n]*?['\"][^'\"\n]*['\"][ \t]*;?[ \t]*$\n?", re.MULTILINE),
    ),
    FixRule(
        "Removed {count} require statement(s)",
        re.compile(
            r"^[ \t]*(?:const|let|var)\s+[^=\n]+=\s*require\s*\(\s*['\"][^'\"\n]*['\"]\s*\)[\w.]*[ \t]*;?[ \t]*$\n?",
            re.MULTILINE,
        ),
    ),
    FixRule(
        "Removed export default statement",
        re.compile(r"^[ \t]*export[ \t]+default[ \t]+[A-Za-z_$][\w$]*[ \t]*;?[ \t]*$\n?", re.MULTILINE),
    ),
    FixRule(
        "Removed export default",
        re.compile(r"^([ \t]*)export\s+default\s+", re.MULTILINE),
        r"\1",
    ),
    FixRule(
        "Removed named exports",
        re.compile(r"^[ \t]*export\s*\{[^}]*\}(?:\s*from\s*['\"][^'\"\n]*['\"])?[ \t]*;?[ \t]*$\n?", re.MULTILINE),
    ),
    FixRule(
        "Removed export keyword from declarations",
        re.compile(
            r"^([ \t]*)export\s+(?=(?:async\s+)?(?:const|let|var|function|class|interface|type)\b)",
            re.MULTILINE,
        ),
        r"\1",
    ),
    FixRule(
        "Removed directive",
        re.compile(r"^[ \t]*['\"]use (?:client|server|strict)['\"][ \t]*;?[ \t]*$\n?", re.MULTILINE),
    ),
    FixRule(
        "Removed module.exports",
        re.compile(r"^[ \t]*module\.exports\s*=\s*[\w$.{}, \t]*;?[ \t]*$\n?", re.MULTILINE),
    ),
]

FIX_RULES_AFTER_RENAME: list[FixRule] = [
    FixRule(
        "Removed simple TypeScript annotations",
        # Only after a declared name, a parameter name, or a parameter list's ")"
        re.compile(
            r"(\b(?:const|let|var)\s+[\w$]+|[(,]\s*[\w$]+\??|\))"
            r"[ \t]*:[ \t]*(?:string|number|boolean|any|void|unknown|never)(?:\[\])?(?=\s*[,)\]=;{])"
        ),
        r"\1",
    ),
    FixRule(
        "Removed FC type annotation",
        re.compile(r"[ \t]*:[ \t]*(?:React\.)?(?:FC|FunctionComponent)(?:<[^>\n]*>)?\s*="),
        " =",
    ),
    FixRule(
        "Removed interface declarations",
        re.compile(
            r"^[ \t]*interface\s+\w+(?:<[^>\n]*>)?(?:\s+extends\s+[^{\n]+)?\s*"
            r"\{(?:[^\n]*\}|[ \t]*\n[\s\S]*?^\})[ \t]*;?[ \t]*$\n?",
            re.MULTILINE,
        ),
    ),
    FixRule(
        "Removed type declarations",
        re.compile(
            r"^[ \t]*type\s+\w+(?:<[^>\n]*>)?\s*=\s*"
            r"(?:\{[^\n]*\}|\{[ \t]*\n[\s\S]*?^\}|[^;\n{]+)[ \t]*;?[ \t]*$\n?",
            re.MULTILINE,
        ),
    ),
]


EXCESS_BLANK_LINES = re.compile(r"\n{4,}")


def find_line_number(code: str, fragment: str, start: Optional[int] = None) -> int:
    """1-based line of ``fragment`` (or of offset ``start``) in ``code``, -1 if absent."""
    index = code.find(fragment) if start is None else start
    if index == -1:
        return -1
    return code.count("\n", 0, index) + 1
