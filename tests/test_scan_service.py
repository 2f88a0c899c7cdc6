"""
Tests cho services/scan_service.py - Pipeline walk -> render -> count tokens.

Scenarios:
1. Ignore patterns loai file/directory khoi listing va content
2. File 100 dong -> width 3
3. File 9 dong -> width 1
4. Thu muc rong -> chi co root marker, content rong, progress 100%
"""

from typing import List

import pytest

from core.cancellation import CancellationToken, ScanCancelledError
from core.constants import BLOCK_DELIMITER, UNREADABLE_PLACEHOLDER
from core.progress import CallbackProgressReporter, ScanProgress
from core import token_counter
from core.token_counter import count_tokens, is_using_estimation
from services.scan_service import (
    ESTIMATED_TOKENS_WARNING,
    ScanResult,
    ScanRootError,
    generate_tree_and_content,
    run_scan,
)


def _lines(count: int) -> str:
    return "\n".join(f"line{i}" for i in range(1, count + 1))


class TestScenarios:
    """End-to-end scenarios cua pipeline."""

    def test_ignore_patterns_loai_entries(self, make_tree):
        root = make_tree(
            {
                "keep.txt": "hello",
                "src/lib.rs": "fn add() {}",
                "error.log": "boom",
                "node_modules/mod.js": "module.exports = 1",
                "target/debug/out.txt": "binary output",
            }
        )

        result = run_scan(root, ["*.log", "node_modules", "target"])

        for expected in ("keep.txt", "src", "lib.rs"):
            assert expected in result.content
        for excluded in ("error.log", "node_modules", "target", "mod.js", "out.txt"):
            assert excluded not in result.content
        assert result.file_count == 2

    def test_file_100_dong(self, make_tree):
        root = make_tree({"file.txt": _lines(100)})

        content = run_scan(root, []).content

        assert "\n  1 | line1\n" in content
        assert "\n 50 | line50\n" in content
        assert "\n100 | line100\n" in content

    def test_file_9_dong(self, make_tree):
        root = make_tree({"file.txt": _lines(9)})

        content = run_scan(root, []).content

        assert "\n1 | line1\n" in content
        assert "\n9 | line9\n" in content

    def test_thu_muc_rong(self, make_tree):
        root = make_tree({})
        events: List[ScanProgress] = []

        result = run_scan(root, [], reporter=CallbackProgressReporter(events.append))

        assert result.content == ".\n\n\n"
        assert result.file_count == 0
        assert events == [ScanProgress(processed=0, total=0)]
        assert events[0].percent == 100.0


class TestDocumentLayout:
    """Test layout cua document tra ve."""

    def test_document_day_du(self, make_tree):
        root = make_tree({"a.txt": "alpha\nbeta\n"})

        result = run_scan(root, [])

        expected = (
            ".\n  ├── a.txt\n"
            "\n\n"
            f"{BLOCK_DELIMITER}\n/a.txt\n{BLOCK_DELIMITER}\n\n"
            "1 | alpha\n2 | beta\n\n\n"
        )
        assert result.content == expected

    def test_token_count_tinh_tren_document_tra_ve(self, make_tree):
        root = make_tree({"a.txt": "some text", "b/c.py": "print('x')"})

        result = run_scan(root, [])

        assert result.token_count == count_tokens(result.content)

    def test_token_count_deterministic(self, make_tree):
        root = make_tree({"a.txt": "same input", "b.md": "# title"})

        assert run_scan(root, []).token_count == run_scan(root, []).token_count

    def test_file_binary_placeholder_va_tiep_tuc(self, make_tree):
        root = make_tree({"blob.bin": b"\x00\x01", "readme.md": "hi"})

        result = run_scan(root, [])

        assert UNREADABLE_PLACEHOLDER in result.content
        assert "1 | hi" in result.content
        assert result.file_count == 2

    def test_progress_cuoi_bang_total(self, make_tree):
        root = make_tree({"a.txt": "a", "b.txt": "b", "c/d.txt": "d"})
        events: List[ScanProgress] = []

        run_scan(root, [], reporter=CallbackProgressReporter(events.append))

        assert events[0].processed == 0
        assert events[-1].processed == events[-1].total == 3
        processed = [e.processed for e in events]
        assert processed == sorted(processed)

    def test_generate_tree_and_content(self, make_tree):
        root = make_tree({"x.txt": "x"})

        document, file_count, warnings = generate_tree_and_content(root, [])

        assert document.startswith(".\n  ├── x.txt\n\n\n")
        assert file_count == 1
        assert warnings == []


class TestWarningsAndErrors:
    """Test warnings va loi."""

    def test_pattern_khong_hop_le_co_warning(self, make_tree):
        root = make_tree({"a.log": "x", "b.txt": "y"})

        result = run_scan(root, ["***", "*.log"])

        assert "a.log" not in result.content
        assert "Ignored invalid pattern: '***'" in result.warnings
        assert result.to_dict()["warnings"] == result.warnings

    def test_root_khong_ton_tai(self, tmp_path):
        with pytest.raises(ScanRootError):
            run_scan(tmp_path / "missing", [])

    def test_root_la_file(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("x", encoding="utf-8")

        with pytest.raises(ScanRootError):
            run_scan(f, [])

    def test_token_da_cancel_dung_scan(self, make_tree):
        root = make_tree({"a.txt": "a"})
        token = CancellationToken()
        token.cancel("timeout")

        with pytest.raises(ScanCancelledError):
            run_scan(root, [], cancel_token=token)

    def test_to_dict(self):
        result = ScanResult(content="c", token_count=3, file_count=1, warnings=["w"])

        assert result.to_dict() == {"content": "c", "token_count": 3, "warnings": ["w"]}

    def test_token_uoc_luong_co_warning(self, make_tree, fresh_encoder, monkeypatch):
        """Khong load duoc vocabulary -> token_count uoc luong va co warning."""
        root = make_tree({"a.txt": "some text"})

        def fail(_name):
            raise OSError("offline")

        monkeypatch.setattr(token_counter.tiktoken, "get_encoding", fail)

        result = run_scan(root, [])

        assert ESTIMATED_TOKENS_WARNING in result.warnings
        assert result.token_count == max(1, len(result.content) // 4)

    def test_token_chinh_xac_khong_co_warning(self, make_tree, fresh_encoder):
        if is_using_estimation():
            pytest.skip("cl100k_base vocabulary khong kha dung")
        root = make_tree({"a.txt": "some text"})

        assert ESTIMATED_TOKENS_WARNING not in run_scan(root, []).warnings


class TestPatternSemantics:
    """Pattern la glob tren toan bo relative path."""

    def test_pattern_khong_co_slash_chi_match_cap_dau(self, make_tree):
        root = make_tree({"node_modules/a.js": "a", "lib/node_modules/b.js": "b"})

        content = run_scan(root, ["node_modules"]).content

        assert "a.js" not in content
        assert "/lib/node_modules/b.js" in content

    def test_dau_cham_than_la_ky_tu_thuong(self, make_tree):
        """Dau "!" khong phai negation, khong dua file da bi loai tro lai."""
        root = make_tree({"keep.txt": "k", "!notes.md": "n", "readme.md": "r"})

        content = run_scan(root, ["*.txt", "!keep.txt", "!notes.md"]).content

        assert "keep.txt" not in content
        assert "!notes.md" not in content
        assert "/readme.md" in content

    def test_sao_match_qua_slash(self, make_tree):
        root = make_tree({"src/a/b.rs": "fn x(){}", "src/main.py": "print()"})

        content = run_scan(root, ["src/*.rs"]).content

        assert "b.rs" not in content
        assert "/src/main.py" in content
