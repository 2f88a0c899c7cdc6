"""
Ignore Engine - Single source of truth cho logic ignore khi scan.

Cung cap:
- compile_patterns(): Compile danh sach glob patterns tu request thanh IgnoreMatcher
- IgnoreMatcher.matches(): Quyet dinh mot relative path co bi prune khong

Moi pattern la glob match tren TOAN BO path tuong doi voi scan root
(dang posix, "/"), khong phai gitignore:
- "*" va "?" cung match qua "/" ("src/*.rs" match ca "src/a/b.rs")
- "**/" match 0 hoac nhieu directory
- Pattern khong co "/" chi match entry o cap dau tien ("node_modules"
  KHONG match "lib/node_modules")
- "!", "#" va chuoi rong la text binh thuong, khong co y nghia dac biet

Pattern sai cu phap bi bo qua (khong raise) va duoc ghi lai trong
invalid_patterns de caller hien thi warning.

SOLID: Single Responsibility - chi lo viec quyet dinh "file/folder nay co bi ignore khong"
"""

import fnmatch
import itertools
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterable, List, Optional, Tuple, Union

from core.logging_config import log_debug, log_warning

# "**/" o bat ky vi tri nao co the match 0 directory
_RECURSIVE_PREFIX = "**/"


@dataclass
class IgnoreMatcher:
    """
    Tap hop cac ignore patterns da compile cho mot lan scan.

    Attributes:
        patterns: Cac pattern strings da duoc chap nhan (theo thu tu input)
        invalid_patterns: Cac pattern strings bi bo qua (sai cu phap)
        globs: Moi pattern da expand thanh cac bien the fnmatch tuong duong
    """

    patterns: List[str] = field(default_factory=list)
    invalid_patterns: List[str] = field(default_factory=list)
    globs: List[Tuple[str, ...]] = field(default_factory=list)

    def matches(self, relative_path: Union[str, PurePath]) -> bool:
        """
        Kiem tra relative path co match bat ky pattern nao khong.

        Args:
            relative_path: Path tuong doi voi scan root

        Returns:
            True neu entry (va subtree cua no) phai bi loai
        """
        if not self.globs:
            return False

        rel = _to_posix(relative_path)
        if not rel:
            return False

        for variants in self.globs:
            if any(fnmatch.fnmatchcase(rel, glob) for glob in variants):
                return True
        return False

    @property
    def warnings(self) -> List[str]:
        """Warning messages cho cac pattern bi bo qua."""
        return [f"Ignored invalid pattern: {p!r}" for p in self.invalid_patterns]


def compile_patterns(patterns: Iterable[str]) -> IgnoreMatcher:
    """
    Compile tung pattern rieng biet thanh IgnoreMatcher.

    Pattern sai cu phap ("***", "a**", "[" khong dong) bi bo qua,
    khong lam hong cac pattern khac.

    Args:
        patterns: Danh sach glob patterns tu user

    Returns:
        IgnoreMatcher cho lan scan hien tai
    """
    matcher = IgnoreMatcher()

    for raw in patterns:
        if not isinstance(raw, str):
            matcher.invalid_patterns.append(str(raw))
            continue

        error = _syntax_error(raw)
        if error is not None:
            log_debug(f"[IgnoreEngine] Pattern {raw!r} rejected: {error}")
            matcher.invalid_patterns.append(raw)
            continue

        matcher.patterns.append(raw)
        matcher.globs.append(_expand_recursive(raw))

    if matcher.invalid_patterns:
        log_warning(
            f"[IgnoreEngine] Dropped {len(matcher.invalid_patterns)} invalid pattern(s): "
            f"{matcher.invalid_patterns}"
        )

    return matcher


def _syntax_error(pattern: str) -> Optional[str]:
    """
    Kiem tra cu phap glob.

    Returns:
        Mo ta loi, hoac None neu pattern hop le
    """
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]

        if char == "*":
            end = i
            while end < n and pattern[end] == "*":
                end += 1
            stars = end - i
            if stars > 2:
                return "wildcards are either '*' or '**'"
            if stars == 2:
                starts_component = i == 0 or pattern[i - 1] == "/"
                ends_component = end == n or pattern[end] == "/"
                if not (starts_component and ends_component):
                    return "'**' must form a whole path component"
            i = end
            continue

        if char == "[":
            start = i + 1
            if start < n and pattern[start] == "!":
                start += 1
            # Ky tu dau tien trong class co the la "]"
            close = pattern.find("]", start + 1)
            if start >= n or close == -1:
                return "unclosed character class"
            i = close + 1
            continue

        i += 1

    return None


def _expand_recursive(pattern: str) -> Tuple[str, ...]:
    """
    Expand moi "**/" thanh 2 bien the: giu nguyen hoac bo han.

    fnmatch coi "**" nhu "*", nen "a/**/b" can them bien the "a/b"
    de match truong hop 0 directory.
    """
    parts = pattern.split(_RECURSIVE_PREFIX)
    if len(parts) == 1:
        return (pattern,)

    variants = []
    for choice in itertools.product((_RECURSIVE_PREFIX, ""), repeat=len(parts) - 1):
        glob = parts[0] + "".join(sep + part for sep, part in zip(choice, parts[1:]))
        if glob not in variants:
            variants.append(glob)
    return tuple(variants)


def _to_posix(relative_path: Union[str, PurePath]) -> str:
    """Chuan hoa path ve dang posix, bo "./" va "/" o dau."""
    if isinstance(relative_path, PurePath):
        rel = relative_path.as_posix()
    else:
        rel = relative_path.replace("\\", "/")
    while rel.startswith("./"):
        rel = rel[2:]
    rel = rel.lstrip("/")
    return "" if rel == "." else rel
