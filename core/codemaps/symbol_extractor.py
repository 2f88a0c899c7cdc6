"""
Symbol Extractor - Tom tat cac declaration trong file su dung Tree-sitter

Module nay parse code va thu thap ten cua moi function/method, class/struct
va enum gap duoc khi duyet cay cu phap theo chieu sau (pre-order).

Khong duoc goi tu scan pipeline; caller nao muon tom tat cau truc
thay vi noi dung tho co the compose truc tiep.
"""

import os
from typing import List, Optional

from tree_sitter import Node, Parser  # type: ignore

from core.codemaps.languages import LanguageConfig, get_config_by_extension, get_language
from core.codemaps.types import DeclaredSymbol
from core.logging_config import log_debug


def extract_declarations(file_name: str, content: str) -> Optional[List[DeclaredSymbol]]:
    """
    Extract tat ca declarations tu file content.

    Args:
        file_name: Ten/duong dan file (de xac dinh ngon ngu qua extension)
        content: Noi dung raw cua file

    Returns:
        List DeclaredSymbol theo thu tu xuat hien, hoac None neu extension
        khong duoc ho tro hay khong tim thay declaration nao

    Example:
        >>> symbols = extract_declarations("app.py", "class Foo:\\n    def bar(self): pass")
        >>> [s.render() for s in symbols]
        ['class Foo', 'fn bar']
    """
    _, ext = os.path.splitext(file_name)
    config = get_config_by_extension(ext)
    if config is None:
        return None

    parser = Parser(get_language(config))
    source = content.encode("utf-8")
    tree = parser.parse(source)
    if tree is None or tree.root_node is None:
        return None

    symbols = _collect_declarations(tree.root_node, config)
    log_debug(f"[SymbolExtractor] {file_name}: {len(symbols)} declaration(s)")
    return symbols or None


def summarize(file_name: str, content: str) -> Optional[str]:
    """
    Tom tat declarations thanh text, moi dong "<kind> <name>".

    Returns:
        Summary string, hoac None neu khong co gi de tom tat
    """
    symbols = extract_declarations(file_name, content)
    if not symbols:
        return None
    return "".join(f"{symbol.render()}\n" for symbol in symbols)


def _collect_declarations(root: Node, config: LanguageConfig) -> List[DeclaredSymbol]:
    """
    Duyet pre-order bang TreeCursor (khong de quy) va thu thap declarations.
    """
    symbols: List[DeclaredSymbol] = []
    cursor = root.walk()

    while True:
        node = cursor.node
        kind = config.node_kinds.get(node.type)
        if kind is not None:
            name = _declared_name(node)
            if name:
                symbols.append(
                    DeclaredSymbol(name=name, kind=kind, line=node.start_point[0] + 1)
                )

        if cursor.goto_first_child():
            continue
        if cursor.goto_next_sibling():
            continue

        # Di nguoc len cho den khi tim duoc sibling tiep theo
        while True:
            if not cursor.goto_parent():
                return symbols
            if cursor.goto_next_sibling():
                break


def _declared_name(node: Node) -> Optional[str]:
    """Lay text cua field "name" cua declaration node."""
    name_node = node.child_by_field_name("name")
    if name_node is None or name_node.text is None:
        return None
    return name_node.text.decode("utf-8", errors="replace")
