"""Query Engine - AST 평가기

각 condition 노드는 ResultSet을 값으로 반환합니다. ResultSet은
- 구체 집합: 순서 있는 중복 없는 문자열 목록
- 작성자 필터: AUTHOR "X" 리프 (그 자체로는 열거 불가)
둘 중 하나입니다. 평가 컨텍스트(결과 모드)는 불변이고 재귀로 전달됩니다.

리프 평가 (모드별):
    CATEGORY "X": page → 카테고리 멤버 / author → 멤버들의 마지막 편집자
                  / category → Category:X 페이지의 카테고리
    TITLE "X":    page → [X] / author → [X의 마지막 편집자]
                  / category → X 페이지의 카테고리
    AUTHOR "X":   작성자 필터

결합:
    AND: 구체 ∩ 구체 (왼쪽 순서), 구체 ∧ 필터 → 필터 통과 항목만
    OR:  구체 ∪ 구체 (왼쪽 순서 후 오른쪽의 새 항목), 필터는 author 모드에서만 작성자 이름 기여
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from src.core.exceptions import InvalidQueryException
from src.core.logging import logger, sanitize_for_log
from src.crawlers.content_source import ContentSource

from .ast import And, Condition, ItemKind, Leaf, LeafKind, Or, Query, SortOrder
from .parser import QueryParser

CATEGORY_PREFIX = "Category:"


def _unique(items: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class EvalContext:
    """평가 컨텍스트 (불변)"""

    mode: ItemKind


@dataclass(frozen=True)
class ResultSet:
    """condition 평가 결과"""

    items: Tuple[str, ...] = ()
    author: Optional[str] = None

    @property
    def is_filter(self) -> bool:
        return self.author is not None

    @classmethod
    def of(cls, items: Iterable[str]) -> "ResultSet":
        return cls(items=_unique(items))

    @classmethod
    def author_filter(cls, author: str) -> "ResultSet":
        return cls(author=author)


class QueryEngine:
    """쿼리 언어 실행기

    Usage:
        engine = QueryEngine(source)
        titles = engine.execute('page where category "Cats" sorted asc')
    """

    def __init__(
        self,
        source: ContentSource,
        parser_factory: Callable[[], QueryParser] = QueryParser,
    ):
        if source is None:
            raise ValueError("source must not be None")
        self.source = source
        self._parser_factory = parser_factory

    def execute(self, text: str) -> List[str]:
        """쿼리 문자열 실행

        문법 오류는 경고 로그를 남기고 빈 목록을 반환합니다.
        콘텐츠 소스 오류는 그대로 전파됩니다.
        """
        try:
            query = self._parser_factory().parse(text)
        except InvalidQueryException as e:
            logger.warning(f"[Query] invalid query '{sanitize_for_log(text or '')}': {e.message}")
            return []
        return self.evaluate(query)

    def evaluate(self, query: Query) -> List[str]:
        ctx = EvalContext(mode=query.item)
        # 한 번의 평가 동안 같은 제목의 편집자 조회는 한 번만
        editors: Dict[str, str] = {}
        result = self._eval(query.condition, ctx, editors)

        if result.is_filter:
            output = [result.author] if ctx.mode is ItemKind.AUTHOR else []
        else:
            output = list(result.items)

        if query.sort is not None:
            output.sort(reverse=query.sort is SortOrder.DESC)

        logger.info(f"[Query] {query.item.value} query returned {len(output)} items")
        return output

    # ------------------------------------------------------------------
    # 재귀 평가
    # ------------------------------------------------------------------

    def _eval(self, node: Condition, ctx: EvalContext, editors: Dict[str, str]) -> ResultSet:
        if isinstance(node, Leaf):
            return self._leaf(node, ctx, editors)
        left = self._eval(node.left, ctx, editors)
        right = self._eval(node.right, ctx, editors)
        if isinstance(node, And):
            return self._and(left, right, ctx, editors)
        if isinstance(node, Or):
            return self._or(left, right, ctx)
        raise TypeError(f"Unknown condition node: {type(node).__name__}")

    def _leaf(self, leaf: Leaf, ctx: EvalContext, editors: Dict[str, str]) -> ResultSet:
        if leaf.kind is LeafKind.AUTHOR:
            return ResultSet.author_filter(leaf.value)

        if leaf.kind is LeafKind.CATEGORY:
            category = _category_title(leaf.value)
            if ctx.mode is ItemKind.PAGE:
                return ResultSet.of(self.source.category_members(category))
            if ctx.mode is ItemKind.AUTHOR:
                members = self.source.category_members(category)
                return ResultSet.of(
                    editor for editor in (self._editor(m, editors) for m in members) if editor
                )
            return ResultSet.of(self.source.categories_on_page(category))

        # TITLE
        if ctx.mode is ItemKind.PAGE:
            return ResultSet.of([leaf.value])
        if ctx.mode is ItemKind.AUTHOR:
            editor = self._editor(leaf.value, editors)
            return ResultSet.of([editor] if editor else [])
        return ResultSet.of(self.source.categories_on_page(leaf.value))

    def _and(
        self, left: ResultSet, right: ResultSet, ctx: EvalContext, editors: Dict[str, str]
    ) -> ResultSet:
        if left.is_filter and right.is_filter:
            if left.author == right.author:
                return left
            return ResultSet()
        if left.is_filter:
            return self._apply_author(right, left.author, ctx, editors)
        if right.is_filter:
            return self._apply_author(left, right.author, ctx, editors)
        keep = set(right.items)
        return ResultSet(items=tuple(item for item in left.items if item in keep))

    def _or(self, left: ResultSet, right: ResultSet, ctx: EvalContext) -> ResultSet:
        return ResultSet.of(self._enumerable(left, ctx) + self._enumerable(right, ctx))

    @staticmethod
    def _enumerable(result: ResultSet, ctx: EvalContext) -> Tuple[str, ...]:
        if not result.is_filter:
            return result.items
        if ctx.mode is ItemKind.AUTHOR:
            return (result.author,)
        return ()

    def _apply_author(
        self, result: ResultSet, author: str, ctx: EvalContext, editors: Dict[str, str]
    ) -> ResultSet:
        return ResultSet(
            items=tuple(
                item for item in result.items if self._matches_author(item, author, ctx, editors)
            )
        )

    def _matches_author(
        self, item: str, author: str, ctx: EvalContext, editors: Dict[str, str]
    ) -> bool:
        if item == author:
            return True
        if ctx.mode is ItemKind.AUTHOR:
            return False
        return self.source.exists(item) and self._editor(item, editors) == author

    def _editor(self, title: str, editors: Dict[str, str]) -> str:
        if title not in editors:
            editors[title] = self.source.last_editor(title)
        return editors[title]


def _category_title(name: str) -> str:
    if name.startswith(CATEGORY_PREFIX):
        return name
    return CATEGORY_PREFIX + name
