"""
Content Renderer - Render noi dung cac file thanh text co danh so dong.

Doc tung file theo dung thu tu TreeWalker tra ve, moi file thanh mot block:

    --------------------------------------------------
    /relative/path
    --------------------------------------------------

      1 | first line
    ...
    100 | last line


Partial-failure policy: file khong doc duoc (binary, permission, I/O)
duoc render thanh MOT dong placeholder, scan tiep tuc voi cac file sau.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from core.cancellation import CancellationToken, checkpoint
from core.constants import (
    BLOCK_DELIMITER,
    LINE_NUMBER_SEPARATOR,
    UNREADABLE_PLACEHOLDER,
)
from core.logging_config import log_debug, log_warning
from core.progress import ProgressReporter, ScanProgress, emit_progress


class UnreadableFileError(Exception):
    """File khong the doc duoi dang text."""


def line_number_width(line_count: int) -> int:
    """So chu so thap phan cua line_count, toi thieu 1 (file rong -> 1)."""
    if line_count <= 0:
        return 1
    return len(str(line_count))


def split_lines(content: str) -> List[str]:
    """
    Tach content thanh cac dong.

    Chi tach theo "\\n", bo "\\r" cuoi dong (CRLF), va khong tao
    dong rong thua o cuoi khi file ket thuc bang newline.
    Khac str.splitlines(): khong tach theo \\x0b, \\x0c, \\u2028...
    """
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def format_numbered_lines(content: str) -> List[str]:
    """
    Render moi dong thanh "right-aligned(so dong, width) | noi dung".

    Args:
        content: Noi dung text cua file

    Returns:
        List cac dong da danh so (1-indexed)
    """
    lines = split_lines(content)
    width = line_number_width(len(lines))
    return [
        f"{number:>{width}}{LINE_NUMBER_SEPARATOR}{line}"
        for number, line in enumerate(lines, start=1)
    ]


def read_text_file(file_path: Path) -> str:
    """
    Doc file duoi dang UTF-8 strict.

    Raises:
        UnreadableFileError: Neu file chua null bytes (binary),
            khong phai UTF-8 hop le, hoac loi I/O
    """
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise UnreadableFileError(str(e)) from e

    # Null bytes -> binary (giong check nhanh trong is_binary_file)
    if b"\x00" in data:
        raise UnreadableFileError("binary content")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise UnreadableFileError(f"not valid UTF-8: {e.reason}") from e


def display_path(file_path: Path, root: Path) -> str:
    """Header path cua block: "/" + path tuong doi voi root (posix)."""
    try:
        relative = file_path.relative_to(root)
    except ValueError:
        relative = file_path
    return "/" + relative.as_posix().lstrip("/")


def render_file_block(file_path: Path, root: Path) -> str:
    """
    Render mot file thanh block (header + noi dung/placeholder + separator).

    Khong bao gio raise loi doc file.
    """
    header = display_path(file_path, root)
    parts = [BLOCK_DELIMITER, header, BLOCK_DELIMITER, ""]

    log_debug(f"[Renderer] Reading {header}")
    try:
        content = read_text_file(file_path)
        parts.extend(format_numbered_lines(content))
    except UnreadableFileError as e:
        log_warning(f"[Renderer] Failed to read {file_path}: {e}")
        parts.append(UNREADABLE_PLACEHOLDER)

    # Moi dong ket thuc bang "\n", sau do them 2 newline lam separator
    return "\n".join(parts) + "\n\n\n"


def render_contents(
    file_paths: Sequence[Path],
    root: Union[str, Path],
    reporter: Optional[ProgressReporter] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> str:
    """
    Render tat ca file theo thu tu thanh mot chuoi.

    Progress: ScanProgress(0, total) truoc file dau tien,
    sau do ScanProgress(i + 1, total) sau moi file.

    Args:
        file_paths: Danh sach file theo thu tu tu TreeWalker
        root: Scan root (de tinh header path)
        reporter: Event sink cho progress (optional)
        cancel_token: Token de dung giua cac file (optional)

    Returns:
        Noi dung da render cua tat ca file

    Raises:
        ScanCancelledError: Neu cancel_token bi cancel giua chung
    """
    root_path = Path(root)
    total = len(file_paths)
    blocks: List[str] = []

    emit_progress(reporter, ScanProgress(processed=0, total=total))

    for index, file_path in enumerate(file_paths):
        checkpoint(cancel_token)
        blocks.append(render_file_block(Path(file_path), root_path))
        emit_progress(reporter, ScanProgress(processed=index + 1, total=total))

    return "".join(blocks)
