"""
Tests for the directory crawler.

Tests recursive discovery, extension filtering, recorded modification
times, and resilience against unreadable or cyclic directory trees.
"""

import os
import pytest
from pathlib import Path

from pdf_scout.index.crawler import Crawler, CrawlStats


@pytest.fixture
def crawler():
    return Crawler(extensions=[".pdf"], follow_symlinks=False, max_depth=32)


class TestCrawler:
    """Tests for Crawler.crawl."""

    def test_finds_all_pdfs(self, crawler, sample_pdf_collection: Path):
        """Test that PDFs at every depth are found, case-insensitively."""
        files = crawler.crawl(sample_pdf_collection)

        names = sorted(f.filename for f in files)
        assert names == ["doc1.pdf", "doc2.PDF", "doc3.pdf", "root_doc.pdf"]

    def test_ignores_other_extensions(self, crawler, sample_pdf_collection: Path):
        files = crawler.crawl(sample_pdf_collection)

        assert not any(f.path.endswith((".txt", ".bak")) for f in files)

    def test_records_absolute_paths_and_mtimes(self, crawler, sample_pdf_collection: Path):
        """Test that each record carries the file's absolute path and current mtime."""
        files = crawler.crawl(sample_pdf_collection)

        for indexed in files:
            assert os.path.isabs(indexed.path)
            assert indexed.mtime == os.stat(indexed.path).st_mtime

    def test_results_sorted_by_path(self, crawler, sample_pdf_collection: Path):
        files = crawler.crawl(sample_pdf_collection)

        assert [f.path for f in files] == sorted(f.path for f in files)

    def test_crawl_is_repeatable(self, crawler, sample_pdf_collection: Path):
        """Test that crawling an unchanged tree twice gives the same index."""
        assert crawler.crawl(sample_pdf_collection) == crawler.crawl(sample_pdf_collection)

    def test_empty_directory(self, crawler, temp_dir: Path):
        empty = temp_dir / "empty"
        empty.mkdir()

        assert crawler.crawl(empty) == []

    def test_many_files_at_varied_depth(self, crawler, temp_dir: Path):
        """Test that the count matches exactly the files that exist."""
        root = temp_dir / "tree"
        expected = []
        for i in range(12):
            directory = root.joinpath(*[f"d{j}" for j in range(i % 5)])
            directory.mkdir(parents=True, exist_ok=True)
            pdf = directory / f"file{i}.pdf"
            pdf.write_bytes(b"%PDF-1.4")
            expected.append(str(pdf))

        files = crawler.crawl(root)

        assert sorted(f.path for f in files) == sorted(expected)

    def test_missing_root_is_skipped(self, crawler, temp_dir: Path):
        """Test that a missing root yields nothing and is reported."""
        stats = CrawlStats()

        files = crawler.crawl(temp_dir / "does-not-exist", stats)

        assert files == []
        assert stats.skipped_count == 1

    def test_expands_home(self, crawler, temp_dir: Path, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        (temp_dir / "data" / "home.pdf").write_bytes(b"%PDF-1.4")

        files = crawler.crawl("~/data")

        assert [f.filename for f in files] == ["home.pdf"]

    def test_unreadable_directory_is_skipped(self, crawler, sample_pdf_collection: Path, monkeypatch):
        """Test that an unreadable subtree is skipped and the crawl continues."""
        blocked = str(sample_pdf_collection / "folder1")
        real_scandir = os.scandir

        def guarded_scandir(path):
            if str(path) == blocked:
                raise PermissionError(13, "Permission denied", blocked)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", guarded_scandir)
        stats = CrawlStats()

        files = crawler.crawl(sample_pdf_collection, stats)

        assert sorted(f.filename for f in files) == ["doc3.pdf", "root_doc.pdf"]
        assert stats.skipped_paths == [blocked]

    def test_max_depth_limits_descent(self, temp_dir: Path):
        root = temp_dir / "deep"
        (root / "a" / "b").mkdir(parents=True)
        (root / "top.pdf").write_bytes(b"%PDF-1.4")
        (root / "a" / "mid.pdf").write_bytes(b"%PDF-1.4")
        (root / "a" / "b" / "low.pdf").write_bytes(b"%PDF-1.4")
        stats = CrawlStats()

        files = Crawler(max_depth=1).crawl(root, stats)

        assert sorted(f.filename for f in files) == ["mid.pdf", "top.pdf"]
        assert stats.skipped_paths == [str(root / "a" / "b")]

    def test_stats_accumulate(self, crawler, sample_pdf_collection: Path):
        stats = CrawlStats()

        crawler.crawl(sample_pdf_collection, stats)
        crawler.crawl(sample_pdf_collection, stats)

        assert stats.files_found == 8
        assert stats.directories_visited == 8


class TestCrawlerSymlinks:
    """Tests for symlink handling."""

    def test_symlinks_not_followed_by_default(self, temp_dir: Path):
        root = temp_dir / "root"
        outside = temp_dir / "outside"
        root.mkdir()
        outside.mkdir()
        (outside / "linked.pdf").write_bytes(b"%PDF-1.4")
        os.symlink(outside, root / "link")
        stats = CrawlStats()

        files = Crawler(follow_symlinks=False).crawl(root, stats)

        assert files == []
        assert stats.symlinks_skipped == 1

    def test_symlink_cycle_terminates(self, temp_dir: Path):
        """Test that a link back to an ancestor is not walked twice."""
        root = temp_dir / "cyclic"
        (root / "sub").mkdir(parents=True)
        (root / "sub" / "inner.pdf").write_bytes(b"%PDF-1.4")
        os.symlink(root, root / "sub" / "back")

        files = Crawler(follow_symlinks=True).crawl(root)

        assert [f.filename for f in files] == ["inner.pdf"]

    def test_followed_symlink_is_indexed_once(self, temp_dir: Path):
        root = temp_dir / "root"
        outside = temp_dir / "outside"
        root.mkdir()
        outside.mkdir()
        (outside / "linked.pdf").write_bytes(b"%PDF-1.4")
        os.symlink(outside, root / "link")
        os.symlink(outside, root / "link2")

        files = Crawler(follow_symlinks=True).crawl(root)

        assert len(files) == 1
        assert files[0].path in (str(root / "link" / "linked.pdf"), str(root / "link2" / "linked.pdf"))
        assert files[0].mtime == os.stat(outside / "linked.pdf").st_mtime
