"""
CodeMaps - Tom tat cau truc code (declarations) su dung Tree-sitter.

Public API:
    - extract_declarations: List DeclaredSymbol cua mot file
    - summarize: Text summary "<kind> <name>" moi dong
"""

from core.codemaps.types import DeclarationKind, DeclaredSymbol
from core.codemaps.symbol_extractor import extract_declarations, summarize

__all__ = [
    "DeclarationKind",
    "DeclaredSymbol",
    "extract_declarations",
    "summarize",
]
