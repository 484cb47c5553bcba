"""Tests for the porcelain worktree listing parser."""

from __future__ import annotations

import unittest
from pathlib import Path

from git_manager.models import WorktreeRecord
from git_manager.porcelain import parse_worktree_porcelain


class ParseWorktreePorcelainTests(unittest.TestCase):
    def test_parses_branch_and_bare_blocks(self) -> None:
        text = "worktree /a\nbranch refs/heads/main\nHEAD abc123\n\nworktree /b\nbare\n\n"

        records = parse_worktree_porcelain(text)

        self.assertEqual(
            records,
            [
                WorktreeRecord(path=Path("/a"), branch="main", commit="abc123", is_bare=False),
                WorktreeRecord(path=Path("/b"), branch="", commit="", is_bare=True),
            ],
        )

    def test_keeps_emitted_order(self) -> None:
        names = ["zeta", "alpha", "mid"]
        text = "".join(
            f"worktree /w/{name}\nHEAD {index:040d}\nbranch refs/heads/{name}\n\n"
            for index, name in enumerate(names)
        )

        records = parse_worktree_porcelain(text)

        self.assertEqual([record.path for record in records], [Path(f"/w/{name}") for name in names])
        self.assertEqual([record.branch for record in records], names)
        self.assertEqual(records[2].commit, f"{2:040d}")

    def test_missing_branch_means_detached(self) -> None:
        records = parse_worktree_porcelain("worktree /a\nHEAD abc123\ndetached\n\n")

        self.assertEqual(records[0].branch, "")
        self.assertTrue(records[0].is_detached)

    def test_trailing_record_without_blank_line_is_emitted(self) -> None:
        records = parse_worktree_porcelain("worktree /a\nHEAD 1\n\nworktree /b\nHEAD 2\nbranch refs/heads/dev")

        self.assertEqual(len(records), 2)
        self.assertEqual(records[1], WorktreeRecord(path=Path("/b"), branch="dev", commit="2"))

    def test_new_worktree_line_closes_open_record(self) -> None:
        records = parse_worktree_porcelain("worktree /a\nHEAD 1\nworktree /b\nHEAD 2\n")

        self.assertEqual([record.commit for record in records], ["1", "2"])

    def test_branch_takes_last_ref_segment(self) -> None:
        records = parse_worktree_porcelain("worktree /a\nbranch refs/heads/foo/bar\n")

        self.assertEqual(records[0].branch, "bar")

    def test_ignores_noise_and_unknown_attributes(self) -> None:
        text = "HEAD deadbeef\nbare\n\n\nworktree /a\n  HEAD abc  \nsomething new\n\n\n"

        records = parse_worktree_porcelain(text)

        self.assertEqual(records, [WorktreeRecord(path=Path("/a"), commit="abc")])

    def test_blank_input_yields_nothing(self) -> None:
        self.assertEqual(parse_worktree_porcelain(""), [])
        self.assertEqual(parse_worktree_porcelain("\n\n  \n"), [])

    def test_locked_and_prunable_flags(self) -> None:
        text = (
            "worktree /a\nHEAD 1\nbranch refs/heads/a\nlocked reason here\n\n"
            "worktree /b\nHEAD 2\ndetached\nprunable gitdir file points to non-existent location\n\n"
        )

        first, second = parse_worktree_porcelain(text)

        self.assertTrue(first.locked)
        self.assertEqual(first.status, "locked")
        self.assertTrue(second.prunable)
        self.assertEqual(second.status, "prunable")


class WorktreeRecordTests(unittest.TestCase):
    def test_derived_properties(self) -> None:
        record = WorktreeRecord(path=Path("/ws/feature"), branch="feature", commit="0123456789abcdef")

        self.assertEqual(record.name, "feature")
        self.assertEqual(record.short_commit, "0123456")
        self.assertEqual(record.status, "active")
        self.assertFalse(record.is_detached)
        self.assertEqual(record.display_name, "feature (feature)")

    def test_bare_record_is_not_detached(self) -> None:
        record = WorktreeRecord(path=Path("/ws/.git"), is_bare=True)

        self.assertFalse(record.is_detached)
        self.assertEqual(record.display_name, ".git (bare)")


if __name__ == "__main__":
    unittest.main()
