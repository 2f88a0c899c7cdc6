"""
File Walker - Mot lan traverse filesystem cho scan pipeline.

Duyet pre-order, depth-first bat dau tu root (root khong duoc liet ke),
ap dung IgnoreMatcher de prune ca subtree. Tra ve:
- tree_text: tree listing, moi entry mot dong
- file_paths: danh sach file theo dung thu tu duyet

Thu tu entries giu nguyen thu tu os.scandir tra ve, KHONG sort.

Features:
- Entry loi khi stat/enumerate (vd: permission denied) bi bo qua, walk tiep tuc
- Symlink toi directory chi duoc liet ke, khong di vao (tru khi follow_symlinks=True)
- Khi follow_symlinks=True, track (st_dev, st_ino) da tham de tranh vong lap
- Cancellation checkpoint truoc moi lan enumerate directory
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple, Union

from core.cancellation import CancellationToken, checkpoint
from core.constants import TREE_BRANCH, TREE_INDENT, TREE_ROOT_MARKER
from core.ignore_engine import IgnoreMatcher
from core.logging_config import log_debug


@dataclass(frozen=True)
class FileSystemEntry:
    """
    Mot entry da duoc tham trong lan traverse.

    Attributes:
        relative_path: Path tuong doi voi root (posix)
        depth: So component cua relative_path
        is_file: True neu la file (symlink toi file cung tinh la file)
    """

    relative_path: str
    depth: int
    is_file: bool

    @property
    def name(self) -> str:
        return self.relative_path.rsplit("/", 1)[-1]


@dataclass
class WalkResult:
    """Ket qua cua TreeWalker.walk()."""

    tree_text: str
    file_paths: List[Path] = field(default_factory=list)
    entries: List[FileSystemEntry] = field(default_factory=list)


# Stack frame: (iterator cac entries con, relative prefix, depth cua cac con)
_Frame = Tuple[Iterator[os.DirEntry], str, int]


class TreeWalker:
    """
    Walker cho mot lan scan.

    Moi instance chi dung cho mot lan walk (state khong chia se giua cac scan).
    """

    def __init__(
        self,
        matcher: IgnoreMatcher,
        cancel_token: Optional[CancellationToken] = None,
        follow_symlinks: bool = False,
    ):
        self._matcher = matcher
        self._cancel_token = cancel_token
        self._follow_symlinks = follow_symlinks
        self._visited_dirs: Set[Tuple[int, int]] = set()

    def walk(self, root: Union[str, Path]) -> WalkResult:
        """
        Traverse root va build tree listing + danh sach file.

        Dung stack tuong minh thay vi de quy de khong bi gioi han
        recursion depth voi cay thu muc rat sau.

        Args:
            root: Thu muc goc can scan

        Returns:
            WalkResult
        """
        root_path = Path(root)
        lines: List[str] = [TREE_ROOT_MARKER]
        file_paths: List[Path] = []
        entries: List[FileSystemEntry] = []

        if self._follow_symlinks:
            self._remember_dir(str(root_path))

        checkpoint(self._cancel_token)
        stack: List[_Frame] = [(iter(self._list_dir(str(root_path))), "", 1)]

        while stack:
            children, prefix, depth = stack[-1]
            entry = next(children, None)
            if entry is None:
                stack.pop()
                continue

            relative_path = f"{prefix}/{entry.name}" if prefix else entry.name

            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
                is_link = entry.is_symlink()
            except OSError as e:
                log_debug(f"[FileWalker] Skip {relative_path}: {e}")
                continue

            if self._matcher.matches(relative_path):
                log_debug(f"[FileWalker] Ignoring {relative_path}")
                continue

            lines.append(f"{TREE_INDENT * depth}{TREE_BRANCH}{entry.name}")
            entries.append(
                FileSystemEntry(relative_path=relative_path, depth=depth, is_file=is_file)
            )

            if is_file:
                file_paths.append(Path(entry.path))
                continue

            if is_dir and self._should_descend(entry, is_link):
                checkpoint(self._cancel_token)
                stack.append((iter(self._list_dir(entry.path)), relative_path, depth + 1))

        return WalkResult(
            tree_text="\n".join(lines) + "\n",
            file_paths=file_paths,
            entries=entries,
        )

    def _should_descend(self, entry: os.DirEntry, is_link: bool) -> bool:
        if not is_link:
            if self._follow_symlinks:
                return self._remember_dir(entry.path)
            return True
        if not self._follow_symlinks:
            return False
        return self._remember_dir(entry.path)

    def _remember_dir(self, path: str) -> bool:
        """Ghi nhan directory da tham; False neu da tham roi (vong lap symlink)."""
        try:
            st = os.stat(path)
        except OSError:
            return False
        identity = (st.st_dev, st.st_ino)
        if identity in self._visited_dirs:
            log_debug(f"[FileWalker] Symlink cycle detected at {path}")
            return False
        self._visited_dirs.add(identity)
        return True

    @staticmethod
    def _list_dir(path: str) -> List[os.DirEntry]:
        """Doc toan bo entries cua mot directory; tra ve [] neu khong doc duoc."""
        try:
            with os.scandir(path) as entries_iter:
                return list(entries_iter)
        except OSError as e:
            log_debug(f"[FileWalker] Cannot enumerate {path}: {e}")
            return []


# Convenience function
def walk_tree(
    root: Union[str, Path],
    matcher: IgnoreMatcher,
    cancel_token: Optional[CancellationToken] = None,
    follow_symlinks: bool = False,
) -> WalkResult:
    """
    Traverse root mot lan voi IgnoreMatcher.

    Args:
        root: Thu muc goc can scan
        matcher: IgnoreMatcher da compile
        cancel_token: Token de dung walk giua chung (optional)
        follow_symlinks: Co di vao symlink toi directory khong

    Returns:
        WalkResult voi tree_text va file_paths theo thu tu duyet
    """
    walker = TreeWalker(matcher, cancel_token=cancel_token, follow_symlinks=follow_symlinks)
    return walker.walk(root)
