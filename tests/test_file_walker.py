"""
Tests cho file_walker.py - Traverse mot lan, build tree listing + danh sach file.

Test cases:
1. Root khong duoc liet ke, dong dau la "."
2. Indent theo depth, moi entry "  " * depth + "├── " + name
3. Pattern match directory -> prune ca subtree
4. Pattern match ten file -> chi loai file, sibling giu nguyen
5. Thu muc rong chi co root marker
6. Symlink toi directory khong duoc di vao; follow_symlinks co guard vong lap
7. Cancel truoc khi walk -> ScanCancelledError
"""

import os

import pytest

from core.cancellation import CancellationToken, ScanCancelledError
from core.file_walker import FileSystemEntry, TreeWalker, walk_tree
from core.ignore_engine import compile_patterns


def _names(result) -> set:
    return {entry.name for entry in result.entries}


class TestTreeListing:
    """Test format cua tree listing."""

    def test_thu_muc_rong_chi_co_root_marker(self, make_tree):
        root = make_tree({})

        result = walk_tree(root, compile_patterns([]))

        assert result.tree_text == ".\n"
        assert result.file_paths == []
        assert result.entries == []

    def test_root_khong_duoc_liet_ke(self, make_tree):
        root = make_tree({"a.txt": "a"})

        result = walk_tree(root, compile_patterns([]))

        lines = result.tree_text.splitlines()
        assert lines[0] == "."
        assert root.name not in lines[1:]
        assert lines[1:] == ["  ├── a.txt"]

    def test_indent_theo_depth(self, make_tree):
        root = make_tree({"src/core/lib.rs": "fn x() {}"})

        result = walk_tree(root, compile_patterns([]))

        assert result.tree_text == ".\n  ├── src\n    ├── core\n      ├── lib.rs\n"
        assert [e.depth for e in result.entries] == [1, 2, 3]

    def test_pre_order_children_ngay_sau_parent(self, make_tree):
        root = make_tree({"dir/inner.txt": "x", "top.txt": "y"})

        result = walk_tree(root, compile_patterns([]))

        rels = [e.relative_path for e in result.entries]
        assert rels.index("dir/inner.txt") == rels.index("dir") + 1

    def test_file_paths_cung_thu_tu_voi_listing(self, make_tree):
        root = make_tree({"b.txt": "b", "a/x.txt": "x", "c.txt": "c"})

        result = walk_tree(root, compile_patterns([]))

        file_entries = [e.relative_path for e in result.entries if e.is_file]
        walked = [p.relative_to(root).as_posix() for p in result.file_paths]
        assert walked == file_entries
        assert sorted(walked) == ["a/x.txt", "b.txt", "c.txt"]

    def test_directory_rong_van_duoc_liet_ke(self, make_tree):
        root = make_tree({"empty": None})

        result = walk_tree(root, compile_patterns([]))

        assert result.entries == [FileSystemEntry("empty", 1, False)]
        assert result.file_paths == []


class TestPruning:
    """Test ignore patterns trong luc walk."""

    def test_prune_ca_subtree(self, make_tree):
        root = make_tree(
            {
                "keep.txt": "k",
                "node_modules/pkg/index.js": "module.exports = 1",
                "target/debug/out.txt": "bin",
            }
        )

        result = walk_tree(root, compile_patterns(["node_modules", "target"]))

        assert _names(result) == {"keep.txt"}
        assert "node_modules" not in result.tree_text
        assert "index.js" not in result.tree_text
        assert len(result.file_paths) == 1

    def test_pattern_file_khong_anh_huong_sibling(self, make_tree):
        root = make_tree({"error.log": "e", "app.py": "a", "logs/keep.md": "m"})

        result = walk_tree(root, compile_patterns(["*.log"]))

        assert _names(result) == {"app.py", "logs", "keep.md"}

    def test_pattern_match_path_tuong_doi(self, make_tree):
        root = make_tree({"src/gen/a.rs": "a", "gen/b.rs": "b"})

        result = walk_tree(root, compile_patterns(["src/gen"]))

        rels = {e.relative_path for e in result.entries}
        assert "src/gen" not in rels
        assert "gen/b.rs" in rels


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlink khong ho tro")
class TestSymlinks:
    """Test xu ly symlink."""

    def test_symlink_directory_khong_duoc_di_vao(self, make_tree):
        root = make_tree({"real/file.txt": "x"})
        os.symlink(root / "real", root / "link", target_is_directory=True)

        result = walk_tree(root, compile_patterns([]))

        rels = {e.relative_path for e in result.entries}
        assert "link" in rels
        assert "link/file.txt" not in rels
        assert len(result.file_paths) == 1

    def test_follow_symlinks_khong_lap_vo_han(self, make_tree):
        root = make_tree({"a/file.txt": "x"})
        # a/loop -> root: vong lap
        os.symlink(root, root / "a" / "loop", target_is_directory=True)

        result = walk_tree(root, compile_patterns([]), follow_symlinks=True)

        rels = {e.relative_path for e in result.entries}
        assert "a/loop" in rels
        assert not any(r.startswith("a/loop/") for r in rels)

    def test_follow_symlinks_di_vao_directory_khac(self, tmp_path, make_tree):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "shared.txt").write_text("s", encoding="utf-8")
        root = make_tree({"local.txt": "l"})
        os.symlink(outside, root / "shared", target_is_directory=True)

        result = walk_tree(root, compile_patterns([]), follow_symlinks=True)

        rels = {e.relative_path for e in result.entries}
        assert "shared/shared.txt" in rels

    def test_broken_symlink_khong_lam_hong_walk(self, make_tree):
        root = make_tree({"ok.txt": "ok"})
        os.symlink(root / "missing", root / "dangling")

        result = walk_tree(root, compile_patterns([]))

        assert "ok.txt" in _names(result)
        assert len(result.file_paths) == 1


class TestCancellation:
    """Test cancel trong luc walk."""

    def test_cancel_truoc_khi_walk(self, make_tree):
        root = make_tree({"a.txt": "a"})
        token = CancellationToken()
        token.cancel("timeout")

        with pytest.raises(ScanCancelledError):
            TreeWalker(compile_patterns([]), cancel_token=token).walk(root)

    def test_token_chua_cancel_walk_binh_thuong(self, make_tree):
        root = make_tree({"a.txt": "a"})

        result = TreeWalker(compile_patterns([]), cancel_token=CancellationToken()).walk(root)

        assert len(result.file_paths) == 1


class TestUnreadableDirectories:
    """Directory khong enumerate duoc bi bo qua."""

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="root bo qua permission",
    )
    def test_directory_khong_doc_duoc(self, make_tree):
        root = make_tree({"locked/secret.txt": "s", "open.txt": "o"})
        locked = root / "locked"
        locked.chmod(0o000)
        try:
            result = walk_tree(root, compile_patterns([]))
        finally:
            locked.chmod(0o755)

        rels = {e.relative_path for e in result.entries}
        assert "locked" in rels
        assert "locked/secret.txt" not in rels
        assert "open.txt" in rels
