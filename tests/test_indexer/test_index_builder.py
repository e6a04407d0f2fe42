"""
Tests for the indexing pipeline.

Tests full rebuilds, cache reconciliation, initial builds and the
background indexer thread.
"""

import threading
import pytest
from pathlib import Path

from pdf_scout.index import CacheEntry, ContentCache, FileIndex
from pdf_scout.indexer import BackgroundIndexer, IndexBuilder, IndexingStats


@pytest.fixture
def builder(cache_dir: Path, sample_pdf_collection: Path) -> IndexBuilder:
    return IndexBuilder(
        roots=[sample_pdf_collection],
        file_index=FileIndex(index_path=cache_dir / "files.json"),
        cache=ContentCache(cache_path=cache_dir / "content.json")
    )


class TestIndexBuilder:
    """Tests for IndexBuilder."""

    def test_roots_default_to_config(self, configured):
        builder = IndexBuilder()

        assert builder.roots == configured.crawl.roots

    def test_rebuild_returns_stats(self, builder, sample_pdf_collection: Path):
        stats = builder.rebuild()

        assert isinstance(stats, IndexingStats)
        assert stats.roots == [str(sample_pdf_collection)]
        assert stats.files_indexed == 4
        assert stats.directories_visited == 4
        assert stats.skipped_paths == []

    def test_rebuild_persists_index(self, builder):
        builder.rebuild()

        assert len(builder.file_index.load()) == 4

    def test_rebuild_prunes_removed_files(self, builder, sample_pdf_collection: Path):
        """Test that cache entries for files no longer indexed are dropped."""
        builder.rebuild()
        kept = builder.file_index.load()[0].path
        builder.cache.put(kept, CacheEntry(mtime=1, text="kept"))
        builder.cache.put("/gone/old.pdf", CacheEntry(mtime=1, text="gone"))
        builder.cache.save()

        stats = builder.rebuild()

        assert stats.cache_entries_pruned == 1
        reloaded = ContentCache(cache_path=builder.cache.path)
        assert kept in reloaded
        assert "/gone/old.pdf" not in reloaded

    def test_rebuild_with_root_override(self, builder, sample_pdf_collection: Path):
        stats = builder.rebuild([sample_pdf_collection / "folder1"])

        assert stats.files_indexed == 2

    def test_missing_root_reported(self, builder, temp_dir: Path):
        stats = builder.rebuild([temp_dir / "nowhere"])

        assert stats.files_indexed == 0
        assert len(stats.skipped_paths) == 1

    def test_load_or_build_builds_once(self, builder, sample_pdf_collection: Path):
        """Test that the initial build happens only when no index exists."""
        files = builder.load_or_build()
        assert len(files) == 4

        (sample_pdf_collection / "late.pdf").write_bytes(b"%PDF-1.4")

        assert builder.load_or_build() == files

    def test_load_or_build_with_empty_roots(self, cache_dir: Path):
        builder = IndexBuilder(
            roots=[],
            file_index=FileIndex(index_path=cache_dir / "files.json"),
            cache=ContentCache(cache_path=cache_dir / "content.json")
        )

        assert builder.load_or_build() == []
        assert builder.file_index.exists()


class TestBackgroundIndexer:
    """Tests for BackgroundIndexer."""

    def test_completes_and_calls_back(self, builder):
        """Test that a background rebuild reports files and stats."""
        completed = []
        indexer = BackgroundIndexer(
            builder=builder,
            on_complete=lambda files, stats: completed.append((files, stats))
        )

        assert indexer.start()
        assert indexer.wait(timeout=10)

        assert indexer.error is None
        assert len(indexer.files) == 4
        assert indexer.stats.files_indexed == 4
        assert len(completed) == 1
        assert completed[0][0] == indexer.files

    def test_error_is_reported(self, builder):
        """Test that a failing rebuild calls on_error instead of raising."""
        errors = []

        class BrokenIndex(FileIndex):
            def build(self, roots):
                raise OSError("disk full")

        builder.file_index = BrokenIndex(index_path=builder.file_index.path)
        indexer = BackgroundIndexer(builder=builder, on_error=errors.append)

        indexer.start()
        assert indexer.wait(timeout=10)

        assert isinstance(indexer.error, OSError)
        assert errors == [indexer.error]
        assert indexer.files is None

    def test_only_one_rebuild_at_a_time(self, builder):
        """Test that start() refuses while a rebuild is running."""
        entered = threading.Event()
        release = threading.Event()
        original_build = builder.file_index.build

        def slow_build(roots):
            entered.set()
            release.wait(5)
            return original_build(roots)

        builder.file_index.build = slow_build
        indexer = BackgroundIndexer(builder=builder)

        assert indexer.start()
        assert entered.wait(5)
        assert indexer.is_running
        assert indexer.start() is False

        release.set()
        assert indexer.wait(timeout=10)
        indexer._thread.join(5)
        assert not indexer.is_running

    def test_can_restart_after_completion(self, builder):
        indexer = BackgroundIndexer(builder=builder)

        indexer.start()
        indexer.wait(timeout=10)
        indexer._thread.join(5)

        assert indexer.start()
        assert indexer.wait(timeout=10)
