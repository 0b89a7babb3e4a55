"""전역 테스트 설정

역할:
- 테스트 환경 구성 (src import 전에 환경 변수 고정)
- 공통 Fake 주입 (콘텐츠 소스, 시계)

금지:
- 실제 Wikipedia 호출
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# src.core.config는 import 시점에 설정을 읽으므로 먼저 고정
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "INFO"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["TELEMETRY_AUTOSAVE_SECONDS"] = "0"
os.environ["TELEMETRY_LOAD_ON_STARTUP"] = "false"

# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class FakeClock:
    """수동으로 진행시키는 시계"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeContentSource:
    """메모리 기반 ContentSource

    - links: 제목 → 링크 목록
    - categories: "Category:X" → 멤버 목록
    - page_categories: 제목 → 카테고리 목록
    - editors: 제목 → 마지막 편집자
    - texts: 제목 → 본문
    호출 횟수는 calls에 기록됩니다.
    """

    def __init__(
        self,
        links: Optional[Dict[str, List[str]]] = None,
        categories: Optional[Dict[str, List[str]]] = None,
        page_categories: Optional[Dict[str, List[str]]] = None,
        editors: Optional[Dict[str, str]] = None,
        texts: Optional[Dict[str, str]] = None,
        search_results: Optional[Dict[str, List[str]]] = None,
    ):
        self.links = links or {}
        self.categories = categories or {}
        self.page_categories = page_categories or {}
        self.editors = editors or {}
        self.texts = texts or {}
        self.search_results = search_results or {}
        self.calls: Dict[str, int] = {}

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    def search(self, term: str, limit: int) -> List[str]:
        self._count("search")
        return list(self.search_results.get(term, []))[:limit]

    def get_page_text(self, title: str) -> str:
        self._count("get_page_text")
        return self.texts.get(title, "")

    def links_on_page(self, title: str) -> List[str]:
        self._count("links_on_page")
        return list(self.links.get(title, []))

    def category_members(self, category: str) -> List[str]:
        self._count("category_members")
        return list(self.categories.get(category, []))

    def categories_on_page(self, title: str) -> List[str]:
        self._count("categories_on_page")
        return list(self.page_categories.get(title, []))

    def last_editor(self, title: str) -> str:
        self._count("last_editor")
        return self.editors.get(title, "")

    def exists(self, title: str) -> bool:
        self._count("exists")
        return (
            title in self.texts
            or title in self.editors
            or title in self.links
            or title in self.page_categories
        )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def abd_source() -> FakeContentSource:
    """A → B → D 그래프 (C는 막다른 페이지)"""
    return FakeContentSource(links={"A": ["B", "C"], "B": ["D"], "C": [], "D": []})


@pytest.fixture
def wiki_source() -> FakeContentSource:
    """쿼리/중계자 테스트용 작은 위키"""
    return FakeContentSource(
        links={
            "Barack Obama": ["Illinois", "Chicago", "Michelle Obama"],
            "Illinois": ["Chicago"],
            "Chicago": ["Illinois", "Lake Michigan"],
            "Michelle Obama": ["Barack Obama", "Chicago"],
        },
        categories={
            "Category:Illinois state senators": ["Barack Obama", "Dick Durbin", "Adlai Stevenson"],
            "Category:US Presidents": ["Barack Obama", "Joe Biden"],
        },
        page_categories={
            "Barack Obama": ["Category:US Presidents", "Category:Illinois state senators"],
            "Joe Biden": ["Category:US Presidents"],
            "Category:US Presidents": ["Category:Heads of state"],
        },
        editors={
            "Barack Obama": "Alice",
            "Dick Durbin": "Bob",
            "Adlai Stevenson": "Alice",
            "Joe Biden": "Carol",
        },
        texts={
            "Barack Obama": "Barack Hussein Obama II is an American politician.",
            "Chicago": "Chicago is a city in Illinois.",
        },
        search_results={
            "Obama": ["Barack Obama", "Michelle Obama", "Obama family"],
        },
    )
