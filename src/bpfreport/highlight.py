"""Syntax highlighting of single source lines for terminal and HTML output."""

from __future__ import annotations

import html
import logging
from abc import ABC, abstractmethod
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
    Whitespace,
)
from pygments.util import ClassNotFound

from bpfreport.ansi import (
    COLOR_DARKGRAY,
    COLOR_GRAY,
    COLOR_INDIGO,
    COLOR_PINK,
    COLOR_PURPLE,
    COLOR_RESET,
    COLOR_TEAL,
)
from bpfreport.errors import HighlightConfigError, HighlightError
from bpfreport.lexer import BpfCLexer

if TYPE_CHECKING:
    from pygments.token import _TokenType

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "bpf-c"


class Backend(Enum):
    TERMINAL = "terminal"
    HTML = "html"


class Category(Enum):
    """Highlight groups, named after the tree-sitter capture names."""

    FUNCTION = "function"
    FUNCTION_BUILTIN = "function.builtin"
    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    TYPE = "type"
    CONSTANT = "constant"
    VARIABLE = "variable"
    NUMBER = "number"
    OPERATOR = "operator"
    ATTRIBUTE = "attribute"
    PROPERTY = "property"
    PUNCTUATION = "punctuation"
    MACRO = "macro"
    NAMESPACE = "namespace"
    UNKNOWN = "unknown"


# Syntax highlight mapping for the GitHub Sublime theme (24-bit colors).
# UNKNOWN resets to the terminal's default style.
ANSI_STYLES = MappingProxyType({
    Category.FUNCTION: COLOR_PURPLE,
    Category.FUNCTION_BUILTIN: COLOR_TEAL,
    Category.KEYWORD: COLOR_PINK,
    Category.STRING: COLOR_INDIGO,
    Category.COMMENT: COLOR_GRAY,
    Category.TYPE: COLOR_PINK,
    Category.CONSTANT: COLOR_TEAL,
    Category.VARIABLE: COLOR_TEAL,
    Category.NUMBER: COLOR_TEAL,
    Category.OPERATOR: COLOR_PINK,
    Category.ATTRIBUTE: COLOR_PURPLE,
    Category.PROPERTY: COLOR_TEAL,
    Category.PUNCTUATION: COLOR_DARKGRAY,
    Category.MACRO: COLOR_TEAL,
    Category.NAMESPACE: COLOR_DARKGRAY,
    Category.UNKNOWN: COLOR_RESET,
})

# CSS classes for HTML output. UNKNOWN text is emitted without a wrapper.
HTML_STYLES = MappingProxyType({
    Category.FUNCTION: "hl-function",
    Category.FUNCTION_BUILTIN: "hl-function",
    Category.KEYWORD: "hl-keyword",
    Category.STRING: "hl-string",
    Category.COMMENT: "hl-comment",
    Category.TYPE: "hl-type",
    Category.CONSTANT: "hl-constant",
    Category.VARIABLE: "hl-variable",
    Category.NUMBER: "hl-number",
    Category.OPERATOR: "hl-operator",
    Category.ATTRIBUTE: "hl-attribute",
    Category.PROPERTY: "hl-property",
    Category.PUNCTUATION: "hl-punctuation",
    Category.MACRO: "hl-function",
    Category.NAMESPACE: "hl-type",
    Category.UNKNOWN: "",
})

# Most specific token types first; the first ancestor match wins.
_TOKEN_CATEGORIES: tuple[tuple[_TokenType, Category], ...] = (
    (Name.Function.Magic, Category.MACRO),
    (Name.Builtin, Category.FUNCTION_BUILTIN),
    (Name.Function, Category.FUNCTION),
    (Name.Constant, Category.CONSTANT),
    (Name.Attribute, Category.ATTRIBUTE),
    (Name.Property, Category.PROPERTY),
    (Name.Namespace, Category.NAMESPACE),
    (Name.Class, Category.TYPE),
    (Name.Variable, Category.VARIABLE),
    (Keyword.Type, Category.TYPE),
    (Keyword.Reserved, Category.TYPE),
    (Keyword.Constant, Category.CONSTANT),
    (Keyword.Namespace, Category.NAMESPACE),
    (Keyword, Category.KEYWORD),
    (Comment.PreprocFile, Category.STRING),
    (Comment.Preproc, Category.MACRO),
    (Comment, Category.COMMENT),
    (String, Category.STRING),
    (Number, Category.NUMBER),
    (Operator, Category.OPERATOR),
    (Punctuation, Category.PUNCTUATION),
)


def category_for(ttype: _TokenType) -> Category | None:
    """Map a Pygments token type onto a highlight group.

    Returns None for text that is never styled (whitespace, plain text).
    """
    if ttype in Whitespace or ttype is Text:
        return None
    if ttype is Name:
        return Category.VARIABLE
    for parent, category in _TOKEN_CATEGORIES:
        if ttype in parent:
            return category
    return Category.UNKNOWN


def _decode(code: bytes) -> str:
    return bytes(code).decode("utf-8", errors="replace")


class Highlighter(ABC):
    """Turns one line of source bytes into styled text for a backend."""

    def __init__(self, backend: Backend = Backend.TERMINAL) -> None:
        self.backend = backend

    def _escape(self, text: str) -> str:
        if self.backend is Backend.HTML:
            return html.escape(text)
        return text

    @abstractmethod
    def highlight(self, code: bytes) -> str: ...


class NopHighlighter(Highlighter):
    """Pass code through unstyled."""

    def highlight(self, code: bytes) -> str:
        return self._escape(_decode(code))


class SyntaxHighlighter(Highlighter):
    """Style code tokens with Pygments.

    Lines are lexed independently, so constructs spanning several lines
    (block comments, continued macros) are only styled on their first line.
    """

    def __init__(
        self,
        backend: Backend = Backend.TERMINAL,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        super().__init__(backend)
        self.language = language
        self.lexer = _make_lexer(language)

    def _open(self, category: Category) -> str:
        if self.backend is Backend.HTML:
            css = HTML_STYLES[category]
            return f'<span class="{css}">' if css else ""
        return ANSI_STYLES[category]

    def _close(self, category: Category) -> str:
        if self.backend is Backend.HTML:
            return "</span>" if HTML_STYLES[category] else ""
        return COLOR_RESET

    def highlight(self, code: bytes) -> str:
        text = _decode(code)
        try:
            # Unprocessed, so line endings and a leading BOM are kept.
            tokens = [(ttype, value) for _, ttype, value in self.lexer.get_tokens_unprocessed(text)]
        except Exception as e:
            raise HighlightError(bytes(code), e) from e

        # Merge adjacent tokens of the same group so that e.g. a string
        # literal is wrapped once, not once per quote.
        runs: list[tuple[Category | None, str]] = []
        for ttype, value in tokens:
            category = category_for(ttype)
            if runs and runs[-1][0] is category:
                runs[-1] = (category, runs[-1][1] + value)
            else:
                runs.append((category, value))

        parts: list[str] = []
        for category, value in runs:
            if category is None:
                parts.append(self._escape(value))
            else:
                parts.append(self._open(category))
                parts.append(self._escape(value))
                parts.append(self._close(category))
        return "".join(parts)


def _make_lexer(language: str) -> Lexer:
    if language in BpfCLexer.aliases:
        return BpfCLexer()
    try:
        return get_lexer_by_name(language)
    except ClassNotFound as e:
        raise HighlightConfigError(language, str(e)) from e


def create_highlighter(
    color: bool,
    backend: Backend = Backend.TERMINAL,
    language: str = DEFAULT_LANGUAGE,
) -> Highlighter:
    """Select a highlighter for the given output settings.

    HTML output is always syntax highlighted; ``color`` only controls
    terminal output.
    """
    if backend is Backend.TERMINAL and not color:
        logger.debug("color disabled, using pass-through highlighter")
        return NopHighlighter(backend)
    logger.debug("using %s highlighter for %s output", language, backend.value)
    return SyntaxHighlighter(backend, language)
