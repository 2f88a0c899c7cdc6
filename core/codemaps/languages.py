"""
Language Configuration Registry

Dinh nghia LanguageConfig va LANGUAGE_CONFIGS registry cho symbol summarizer.
Moi ngon ngu map node types cua Tree-sitter sang DeclarationKind.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from tree_sitter import Language  # type: ignore

import tree_sitter_javascript as tsjavascript  # type: ignore
import tree_sitter_python as tspython  # type: ignore
import tree_sitter_rust as tsrust  # type: ignore
import tree_sitter_typescript as tstypescript  # type: ignore

from core.codemaps.types import DeclarationKind

_FN = DeclarationKind.FUNCTION
_CLASS = DeclarationKind.CLASS
_ENUM = DeclarationKind.ENUM

_JS_NODE_KINDS: Dict[str, DeclarationKind] = {
    "function_declaration": _FN,
    "generator_function_declaration": _FN,
    "method_definition": _FN,
    "class_declaration": _CLASS,
}


@dataclass(frozen=True)
class LanguageConfig:
    """
    Cau hinh cho mot ngon ngu lap trinh.

    Attributes:
        name: Ten ngon ngu (unique identifier)
        extensions: Danh sach file extensions (khong co dau cham)
        node_kinds: Map node type -> DeclarationKind
        loader: Function de load Tree-sitter Language object
    """

    name: str
    extensions: tuple[str, ...]
    node_kinds: Dict[str, DeclarationKind]
    loader: Callable[[], Language]


# Registry tat ca language configurations
LANGUAGE_CONFIGS: list[LanguageConfig] = [
    LanguageConfig(
        name="rust",
        extensions=("rs",),
        node_kinds={
            "function_item": _FN,
            "struct_item": _CLASS,
            "enum_item": _ENUM,
        },
        loader=lambda: Language(tsrust.language()),
    ),
    LanguageConfig(
        name="javascript",
        extensions=("js", "jsx", "mjs", "cjs"),
        node_kinds=_JS_NODE_KINDS,
        loader=lambda: Language(tsjavascript.language()),
    ),
    LanguageConfig(
        name="typescript",
        extensions=("ts", "mts", "cts"),
        node_kinds={
            **_JS_NODE_KINDS,
            "abstract_class_declaration": _CLASS,
            "enum_declaration": _ENUM,
        },
        loader=lambda: Language(tstypescript.language_typescript()),
    ),
    LanguageConfig(
        name="tsx",
        extensions=("tsx",),
        node_kinds={
            **_JS_NODE_KINDS,
            "abstract_class_declaration": _CLASS,
            "enum_declaration": _ENUM,
        },
        loader=lambda: Language(tstypescript.language_tsx()),
    ),
    LanguageConfig(
        name="python",
        extensions=("py", "pyw"),
        node_kinds={
            "function_definition": _FN,
            "class_definition": _CLASS,
        },
        loader=lambda: Language(tspython.language()),
    ),
]

_extension_to_config: Dict[str, LanguageConfig] = {
    ext: config for config in LANGUAGE_CONFIGS for ext in config.extensions
}

# Cache da load languages
_language_cache: Dict[str, Language] = {}


def get_config_by_extension(extension: str) -> Optional[LanguageConfig]:
    """
    Lay language config theo file extension.

    Args:
        extension: Extension co hoac khong co dau cham (e.g., 'py', '.rs')

    Returns:
        LanguageConfig hoac None neu khong ho tro
    """
    return _extension_to_config.get(extension.lstrip(".").lower())


def get_language(config: LanguageConfig) -> Language:
    """Lay Tree-sitter Language object (co cache)."""
    if config.name not in _language_cache:
        _language_cache[config.name] = config.loader()
    return _language_cache[config.name]
