"""Lexical extraction of selectors, assertions, imports and timeouts from test source.

Everything here is a pure function of the file text. Nothing is parsed into a
syntax tree: each fact is recognized by a regular expression, so results are
best-effort and may include matches inside comments or strings.

Line numbers are computed from the offset of the match that produced each
record, so every extracted selector and assertion carries a real line number.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from uxdash.models.test_metadata import Assertion, Selector

# ---------------------------------------------------------------------------
# Selector patterns
# ---------------------------------------------------------------------------

# (group name, pattern) in match order. Every group captures one literal.
SELECTOR_PATTERNS: list[tuple[str, str]] = [
    ("locator", r"""page\.locator\(['"](?P<locator>.*?)['"]\)"""),
    ("action", r"""page\.(?P<action>click|fill|check|uncheck|hover)\(['"](?P<action_target>.*?)['"]"""),
    ("test_id", r"""page\.getByTestId\(['"](?P<test_id>.*?)['"]"""),
    ("text", r"""page\.getByText\(['"](?P<text>.*?)['"]"""),
    ("role", r"""page\.getByRole\(['"](?P<role>.*?)['"]"""),
    ("label", r"""page\.getByLabel\(['"](?P<label>.*?)['"]"""),
    ("placeholder", r"""page\.getByPlaceholder\(['"](?P<placeholder>.*?)['"]\)"""),
]

# The selector value is the first non-empty literal in this order.
SELECTOR_VALUE_PRIORITY: tuple[str, ...] = (
    "locator",
    "action_target",
    "test_id",
    "text",
    "role",
    "label",
    "placeholder",
)

# Checked in order against the raw match text; first hit decides the type.
ACCESSOR_TYPES: tuple[tuple[str, str], ...] = (
    ("getByTestId", "testId"),
    ("getByText", "text"),
    ("getByRole", "role"),
    ("getByLabel", "label"),
    ("getByPlaceholder", "placeholder"),
)

DEFAULT_USAGE = "locator"

SELECTOR_RE = re.compile("|".join(pattern for _, pattern in SELECTOR_PATTERNS))

# ---------------------------------------------------------------------------
# Assertion, timeout and import patterns
# ---------------------------------------------------------------------------

ASSERTION_VERBS: tuple[str, ...] = ("Be", "Have", "Contain", "Include", "Equal", "Match")

ASSERTION_RE = re.compile(
    r"expect\((?P<condition>.*?)\)\.to(?P<verb>"
    + "|".join(ASSERTION_VERBS)
    + r")(?P<qualifier>.*?)[(;]"
)

TIMEOUT_RE = re.compile(r"timeout:\s*(\d+)", re.ASCII)

IMPORT_RE = re.compile(r"""import\s+.*?\s+from\s+['"](.+?)['"];""")

# ---------------------------------------------------------------------------
# Title and description patterns
# ---------------------------------------------------------------------------

TITLE_PATTERNS: list[tuple[str, str]] = [
    ("suite", r"""test\.describe\(['"](?P<suite>.*?)['"]"""),
    ("group", r"""describe\(['"](?P<group>.*?)['"]"""),
    ("case", r"""test\(['"](?P<case>.*?)['"]"""),
]

TITLE_PRIORITY: tuple[str, ...] = ("suite", "group", "case")

TITLE_RE = re.compile("|".join(pattern for _, pattern in TITLE_PATTERNS))

DOC_COMMENT_RE = re.compile(r"/\*\*([\s\S]*?)\*/")
SUITE_DESCRIPTION_RE = re.compile(r"""test\.describe\(['"](.*?)['"],""")

# ---------------------------------------------------------------------------
# Classification tables
# ---------------------------------------------------------------------------

# First rule whose marker occurs in the text wins.
TEST_TYPE_RULES: tuple[tuple[str, str], ...] = (
    ("test.describe", "UI"),
    ("expect(page)", "UI"),
    ("test(", "Funktional"),
    ("describe(", "Integration"),
)
UNKNOWN_TEST_TYPE = "Unbekannt"

# Matched case-insensitively; every area whose keywords occur applies.
FUNCTIONAL_AREA_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Authentifizierung", ("login", "auth")),
    ("Dashboard", ("dashboard",)),
    ("Benutzerverwaltung", ("user", "profil")),
)

TEST_FILE_SUFFIX_RE = re.compile(r"\.(spec|test)\.(ts|js)$")


class ExtractedPatterns(BaseModel):
    selectors: list[Selector] = Field(default_factory=list)
    assertions: list[Assertion] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    timeouts: list[int] = Field(default_factory=list)


def line_number(text: str, offset: int) -> int:
    """1-based line number of the character at ``offset``."""
    return text.count("\n", 0, offset) + 1


def first_literal(match: re.Match, priority: tuple[str, ...]) -> str:
    """Return the first non-empty named group of ``match`` in ``priority`` order."""
    for name in priority:
        literal = match.group(name)
        if literal:
            return literal
    return ""


def selector_type(match_text: str, value: str) -> str:
    """Accessor keyword beats a leading ``//``, which beats plain CSS."""
    for keyword, kind in ACCESSOR_TYPES:
        if keyword in match_text:
            return kind
    if value.startswith("//"):
        return "xpath"
    return "css"


def extract_selectors(text: str) -> list[Selector]:
    selectors = []
    for match in SELECTOR_RE.finditer(text):
        value = first_literal(match, SELECTOR_VALUE_PRIORITY)
        selectors.append(Selector(
            type=selector_type(match.group(0), value),
            value=value,
            usage=match.group("action") or DEFAULT_USAGE,
            line=line_number(text, match.start()),
        ))
    return selectors


def extract_assertions(text: str) -> list[Assertion]:
    assertions = []
    for match in ASSERTION_RE.finditer(text):
        assertions.append(Assertion(
            type=f"to{match.group('verb')}{match.group('qualifier').strip()}",
            condition=match.group("condition"),
            line=line_number(text, match.start()),
        ))
    return assertions


def extract_timeouts(text: str) -> list[int]:
    """Every integer following a ``timeout:`` key, wherever it appears."""
    return [int(m.group(1)) for m in TIMEOUT_RE.finditer(text)]


def extract_dependencies(text: str) -> list[str]:
    """Import sources in file order, duplicates kept."""
    return [m.group(1) for m in IMPORT_RE.finditer(text)]


def extract(text: str) -> ExtractedPatterns:
    return ExtractedPatterns(
        selectors=extract_selectors(text),
        assertions=extract_assertions(text),
        dependencies=extract_dependencies(text),
        timeouts=extract_timeouts(text),
    )


def classify_test_type(text: str) -> str:
    for marker, test_type in TEST_TYPE_RULES:
        if marker in text:
            return test_type
    return UNKNOWN_TEST_TYPE


def classify_functional_areas(text: str) -> list[str]:
    lowered = text.lower()
    return [
        area for area, keywords in FUNCTIONAL_AREA_KEYWORDS
        if any(keyword in lowered for keyword in keywords)
    ]


def strip_test_suffix(file_name: str) -> str:
    return TEST_FILE_SUFFIX_RE.sub("", file_name)


def extract_title(text: str, file_name: str) -> str:
    """Literal of the first describe/test declaration, else the bare file name."""
    match = TITLE_RE.search(text)
    if match:
        title = first_literal(match, TITLE_PRIORITY)
        if title:
            return title
    return strip_test_suffix(file_name)


def extract_description(text: str) -> str:
    """First doc comment flattened to one line, else the suite title, else empty."""
    doc = DOC_COMMENT_RE.search(text)
    if doc:
        lines = (line.strip() for line in doc.group(1).split("\n"))
        lines = (re.sub(r"^\*\s*", "", line) for line in lines)
        return " ".join(line for line in lines if line).strip()

    suite = SUITE_DESCRIPTION_RE.search(text)
    if suite and suite.group(1):
        return suite.group(1)
    return ""
