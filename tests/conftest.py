"""
Shared fixtures cho tests.

- make_tree: tao cay thu muc tu dict {relative_path: content}
- fresh_encoder: reset tokenizer singleton truoc/sau test
"""

from pathlib import Path
from typing import Callable, Dict, Optional, Union

import pytest

from core.token_counter import reset_encoder


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Dict[str, Optional[Union[str, bytes]]]], Path]:
    """
    Tao cay thu muc duoi tmp_path/"root".

    Value None = tao directory rong, str = noi dung text, bytes = noi dung binary.
    """

    def _make(spec: Dict[str, Optional[Union[str, bytes]]]) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        for rel, content in spec.items():
            target = root / rel
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def fresh_encoder():
    """Dam bao moi test bat dau voi encoder chua load."""
    reset_encoder()
    yield
    reset_encoder()
