"""
Path Guard - Resolve path tu request trong pham vi base directory.

Path cua request duoc join vao base_dir va canonicalize (resolve symlinks,
"..") TRUOC khi traverse. Path khong ton tai hoac nam ngoai base_dir
la loi phia client.
"""

from pathlib import Path
from typing import Union


class InvalidPathError(ValueError):
    """Path tu request khong hop le (khong ton tai hoac nam ngoai base dir)."""


def resolve_request_path(base_dir: Union[str, Path], requested: str) -> Path:
    """
    Join requested vao base_dir, canonicalize va kiem tra sandbox.

    Args:
        base_dir: Thu muc goc duoc phep
        requested: Path do client gui len (tuong doi voi base_dir)

    Returns:
        Path tuyet doi da canonicalize, nam trong base_dir

    Raises:
        InvalidPathError: Neu path khong ton tai, khong hop le
            hoac thoat ra ngoai base_dir
    """
    try:
        base = Path(base_dir).resolve(strict=True)
        resolved = (base / requested).resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as e:
        raise InvalidPathError(
            f"Error: path '{requested}' does not exist or is invalid."
        ) from e

    if resolved != base and base not in resolved.parents:
        raise InvalidPathError(
            f"Error: path '{requested}' is outside the allowed base directory."
        )

    return resolved
