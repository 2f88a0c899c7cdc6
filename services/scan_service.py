"""
ScanService - Pipeline duy nhat: walk -> render -> count tokens.

Thay the cac bien the song song (render, render + token count,
render + progress + token count) bang MOT pipeline nhan ProgressReporter
va CancellationToken optional tai thoi diem goi.

Note: run_scan() la blocking (filesystem I/O), phai chay tren worker thread,
khong chay truc tiep tren event loop.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from core.cancellation import CancellationToken, checkpoint
from core.constants import SECTION_SEPARATOR
from core.content_renderer import render_contents
from core.file_walker import walk_tree
from core.ignore_engine import compile_patterns
from core.logging_config import log_debug, log_info
from core.progress import ProgressReporter
from core.token_counter import ENCODING_NAME, count_tokens, is_using_estimation

ESTIMATED_TOKENS_WARNING = f"token_count is an estimate ({ENCODING_NAME} unavailable)"


class ScanRootError(Exception):
    """Scan root khong ton tai hoac khong phai directory."""


@dataclass
class ScanResult:
    """
    Ket qua cua mot lan scan.

    Attributes:
        content: Tree listing + noi dung da render (dung text tra ve cho caller)
        token_count: So token cua content
        file_count: So file da render
        warnings: Canh bao khong fatal (vd: pattern khong hop le)
    """

    content: str
    token_count: int
    file_count: int = 0
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "token_count": self.token_count,
            "warnings": list(self.warnings),
        }


def generate_tree_and_content(
    root: Union[str, Path],
    ignore_patterns: Sequence[str],
    reporter: Optional[ProgressReporter] = None,
    cancel_token: Optional[CancellationToken] = None,
    follow_symlinks: bool = False,
) -> tuple[str, int, List[str]]:
    """
    Walk + render, chua dem token.

    Returns:
        Tuple (document_text, file_count, warnings)

    Raises:
        ScanRootError: Neu root khong phai directory
        ScanCancelledError: Neu bi cancel giua chung
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise ScanRootError(f"Scan root is not a directory: {root_path}")

    matcher = compile_patterns(ignore_patterns)
    log_debug(f"[ScanService] Scanning {root_path} with patterns {matcher.patterns}")

    walk = walk_tree(
        root_path,
        matcher,
        cancel_token=cancel_token,
        follow_symlinks=follow_symlinks,
    )
    contents = render_contents(
        walk.file_paths,
        root_path,
        reporter=reporter,
        cancel_token=cancel_token,
    )

    dir_count = sum(1 for entry in walk.entries if not entry.is_file)
    log_debug(
        f"[ScanService] Finished scanning {root_path}: "
        f"{len(walk.entries)} entries, {dir_count} director(ies)"
    )
    document = walk.tree_text + SECTION_SEPARATOR + contents
    return document, len(walk.file_paths), matcher.warnings


def run_scan(
    root: Union[str, Path],
    ignore_patterns: Sequence[str],
    reporter: Optional[ProgressReporter] = None,
    cancel_token: Optional[CancellationToken] = None,
    follow_symlinks: bool = False,
) -> ScanResult:
    """
    Chay toan bo pipeline va tra ve document + token count.

    Token count duoc tinh tren CHINH XAC text tra ve.

    Args:
        root: Thu muc goc da resolve
        ignore_patterns: Glob patterns de loai tru
        reporter: Event sink cho progress (optional)
        cancel_token: Token de dung scan (optional)
        follow_symlinks: Co di vao symlink toi directory khong

    Returns:
        ScanResult
    """
    document, file_count, warnings = generate_tree_and_content(
        root,
        ignore_patterns,
        reporter=reporter,
        cancel_token=cancel_token,
        follow_symlinks=follow_symlinks,
    )
    checkpoint(cancel_token)
    token_count = count_tokens(document)
    if is_using_estimation():
        warnings = [*warnings, ESTIMATED_TOKENS_WARNING]
    log_info(f"[ScanService] {root}: {file_count} file(s), {token_count} token(s)")
    return ScanResult(
        content=document,
        token_count=token_count,
        file_count=file_count,
        warnings=warnings,
    )
