"""Query Parser - 쿼리 문자열을 AST로 변환

문법 (키워드 대소문자 무시, 문자열은 작은/큰따옴표):

    query     := ["get"] ITEM "where" condition [["sorted"] ("asc" | "desc")]
    ITEM      := "page" | "author" | "category"
    condition := and_expr ("or" and_expr)*
    and_expr  := primary ("and" primary)*
    primary   := "(" condition ")" | leaf
    leaf      := ("category" | "title" | "author") ["is"] STRING

예:
    page WHERE category "Illinois state senators" SORTED asc
    get author where (title is 'Barack Obama' or category is 'US Presidents') desc
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from src.core.exceptions import InvalidQueryException

from .ast import And, Condition, ItemKind, Leaf, LeafKind, Or, Query, SortOrder


_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<lparen>\()
  | (?P<rparen>\))
  | "(?P<dq>[^"]*)"
  | '(?P<sq>[^']*)'
  | (?P<word>[A-Za-z_]+)
    """,
    re.VERBOSE,
)

_KEYWORDS = {
    "get", "where", "and", "or", "sorted", "asc", "desc", "is",
    "page", "author", "category", "title",
}


@dataclass(frozen=True)
class Token:
    kind: str  # "lparen" | "rparen" | "string" | "keyword" | "eof"
    value: str
    position: int


def tokenize(text: str) -> List[Token]:
    """쿼리 문자열 → 토큰 목록

    Raises:
        InvalidQueryException: 알 수 없는 문자, 닫히지 않은 따옴표, 모르는 단어
    """
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            if text[pos] in "\"'":
                raise InvalidQueryException("unterminated string", position=pos)
            raise InvalidQueryException(f"unexpected character {text[pos]!r}", position=pos)

        kind = match.lastgroup
        if kind == "lparen":
            tokens.append(Token("lparen", "(", pos))
        elif kind == "rparen":
            tokens.append(Token("rparen", ")", pos))
        elif kind in ("dq", "sq"):
            tokens.append(Token("string", match.group(kind), pos))
        elif kind == "word":
            word = match.group("word").lower()
            if word not in _KEYWORDS:
                raise InvalidQueryException(f"unknown keyword {match.group('word')!r}", position=pos)
            tokens.append(Token("keyword", word, pos))
        pos = match.end()

    tokens.append(Token("eof", "", len(text)))
    return tokens


class QueryParser:
    """재귀 하강 파서

    Usage:
        query = QueryParser().parse('page where category "Cats" sorted asc')
    """

    def parse(self, text: str) -> Query:
        if text is None or not text.strip():
            raise InvalidQueryException("empty query", position=0)
        self._tokens = tokenize(text)
        self._index = 0
        return self._query()

    # ------------------------------------------------------------------
    # 토큰 커서
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind != "eof":
            self._index += 1
        return token

    def _accept_keyword(self, *words: str) -> Optional[str]:
        token = self._peek()
        if token.kind == "keyword" and token.value in words:
            self._advance()
            return token.value
        return None

    def _expect_keyword(self, *words: str) -> str:
        word = self._accept_keyword(*words)
        if word is None:
            token = self._peek()
            found = token.value or "end of query"
            raise InvalidQueryException(
                f"expected {' or '.join(words)}, found {found!r}", position=token.position
            )
        return word

    def _expect(self, kind: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            found = token.value or "end of query"
            raise InvalidQueryException(f"expected {kind}, found {found!r}", position=token.position)
        return self._advance()

    # ------------------------------------------------------------------
    # 문법 규칙
    # ------------------------------------------------------------------

    def _query(self) -> Query:
        self._accept_keyword("get")
        item = ItemKind(self._expect_keyword("page", "author", "category"))
        self._expect_keyword("where")
        condition = self._condition()

        sort: Optional[SortOrder] = None
        if self._accept_keyword("sorted"):
            sort = SortOrder(self._expect_keyword("asc", "desc"))
        else:
            order = self._accept_keyword("asc", "desc")
            if order is not None:
                sort = SortOrder(order)

        self._expect("eof")
        return Query(item=item, condition=condition, sort=sort)

    def _condition(self) -> Condition:
        node = self._and_expr()
        while self._accept_keyword("or"):
            node = Or(node, self._and_expr())
        return node

    def _and_expr(self) -> Condition:
        node = self._primary()
        while self._accept_keyword("and"):
            node = And(node, self._primary())
        return node

    def _primary(self) -> Condition:
        if self._peek().kind == "lparen":
            self._advance()
            node = self._condition()
            self._expect("rparen")
            return node
        return self._leaf()

    def _leaf(self) -> Leaf:
        kind = LeafKind(self._expect_keyword("category", "title", "author"))
        self._accept_keyword("is")
        value = self._expect("string").value
        return Leaf(kind=kind, value=value)


def parse_query(text: str) -> Query:
    """QueryParser().parse 단축 함수"""
    return QueryParser().parse(text)
