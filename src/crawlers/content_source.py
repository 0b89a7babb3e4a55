"""콘텐츠 소스 인터페이스

WikiMediator / PathFinder / QueryEngine이 기대하는 최소 계약입니다.
테스트는 이 Protocol을 만족하는 가짜 구현을 주입합니다.
"""

from __future__ import annotations

from typing import List, Protocol


class ContentSource(Protocol):
    def search(self, term: str, limit: int) -> List[str]:
        ...

    def get_page_text(self, title: str) -> str:
        ...

    def links_on_page(self, title: str) -> List[str]:
        ...

    def category_members(self, category: str) -> List[str]:
        ...

    def categories_on_page(self, title: str) -> List[str]:
        ...

    def last_editor(self, title: str) -> str:
        ...

    def exists(self, title: str) -> bool:
        ...
