"""
Token Counter - Dem token su dung tiktoken (cl100k_base).

Encoder la singleton duy nhat duoc chia se giua cac lan scan:
khoi tao lazy (thread-safe) o lan dung dau tien, sau do chi doc.

Neu vocabulary khong load duoc (vd: moi truong offline khong tai duoc BPE file),
fallback ve uoc luong ~4 ky tu/token va log warning mot lan.
"""

import threading
from typing import Optional

import tiktoken

from core.logging_config import log_info, log_warning

ENCODING_NAME = "cl100k_base"

# Lazy-loaded encoder singleton
_encoder: Optional[tiktoken.Encoding] = None
_encoder_lock = threading.Lock()
_load_attempted = False
_using_estimation = False


def get_encoder() -> Optional[tiktoken.Encoding]:
    """
    Lay encoder singleton (double-checked locking).

    Returns:
        tiktoken.Encoding, hoac None neu khong load duoc vocabulary
    """
    global _encoder, _load_attempted, _using_estimation

    if _load_attempted:
        return _encoder

    with _encoder_lock:
        if not _load_attempted:
            try:
                _encoder = tiktoken.get_encoding(ENCODING_NAME)
                log_info(f"[TokenCounter] Loaded {ENCODING_NAME} vocabulary")
            except Exception as e:
                _encoder = None
                _using_estimation = True
                log_warning(
                    f"[TokenCounter] Khong load duoc {ENCODING_NAME} ({e}), "
                    "dang su dung uoc luong (~4 ky tu/token)."
                )
            _load_attempted = True

    return _encoder


def is_using_estimation() -> bool:
    """True neu token count dang la gia tri uoc luong."""
    get_encoder()
    return _using_estimation


def _estimate_tokens(text: str) -> int:
    """
    Uoc luong so token khi tiktoken khong available.

    Quy tac: ~4 ky tu = 1 token. Deterministic voi cung input.
    """
    if not text:
        return 0
    return max(1, len(text) // 4)


def count_tokens(text: str) -> int:
    """
    Dem so token trong mot doan text.

    Special tokens (vd: "<|endoftext|>") xuat hien trong text duoc
    encode thanh special token tuong ung thay vi raise loi.

    Args:
        text: Text can dem token

    Returns:
        So luong tokens
    """
    if not text:
        return 0

    encoder = get_encoder()
    if encoder is None:
        return _estimate_tokens(text)

    return len(encoder.encode(text, allowed_special="all"))


def reset_encoder() -> None:
    """Reset singleton (chi dung trong tests)."""
    global _encoder, _load_attempted, _using_estimation
    with _encoder_lock:
        _encoder = None
        _load_attempted = False
        _using_estimation = False
