"""
CodeMaps Types - Dataclasses cho declaration summary

Dinh nghia cac types co ban cho symbol summarizer.
"""

from dataclasses import dataclass
from enum import Enum


class DeclarationKind(Enum):
    """Loai declaration duoc thu thap (value = prefix khi render)."""

    FUNCTION = "fn"  # function / method
    CLASS = "class"  # class / struct
    ENUM = "enum"


@dataclass(frozen=True)
class DeclaredSymbol:
    """
    Mot declaration tim thay trong file.

    Attributes:
        name: Ten duoc khai bao
        kind: Loai declaration
        line: Dong bat dau (1-indexed)
    """

    name: str
    kind: DeclarationKind
    line: int

    def render(self) -> str:
        return f"{self.kind.value} {self.name}"
