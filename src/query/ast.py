"""Query AST

    <item> WHERE <condition> [SORTED asc|desc]

condition 노드는 Leaf / And / Or 세 가지 변형입니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ItemKind(str, Enum):
    """결과 해석 모드"""

    PAGE = "page"
    AUTHOR = "author"
    CATEGORY = "category"


class LeafKind(str, Enum):
    CATEGORY = "category"
    TITLE = "title"
    AUTHOR = "author"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Leaf:
    kind: LeafKind
    value: str


@dataclass(frozen=True)
class And:
    left: "Condition"
    right: "Condition"


@dataclass(frozen=True)
class Or:
    left: "Condition"
    right: "Condition"


Condition = Union[Leaf, And, Or]


@dataclass(frozen=True)
class Query:
    item: ItemKind
    condition: Condition
    sort: Optional[SortOrder] = None
