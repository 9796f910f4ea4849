"""Tests for the JSON file cache store and cache record serialization."""

import json
import os
import stat
from datetime import datetime, timezone

import pytest

from whatsnew.cache import FileCacher, MemoryCacher, NoopCacher
from whatsnew.errors import CacheError
from whatsnew.models import EPOCH, CacheRecord, parse_timestamp


class TestFileCacher:
    """Test file cache reads and writes."""

    def test_set_then_get(self, tmp_path):
        cacher = FileCacher(str(tmp_path / "update-cache.json"))
        record = CacheRecord(
            check_time=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            version="v1.2.3",
            etag='W/"abc"',
        )

        cacher.set(record)

        assert cacher.get() == record

    def test_file_layout(self, tmp_path):
        path = tmp_path / "update-cache.json"
        FileCacher(str(path)).set(CacheRecord(version="v1.0.0", etag="e"))

        text = path.read_text(encoding="utf-8")
        data = json.loads(text)

        assert set(data) == {"check_time", "version", "etag"}
        assert data["version"] == "v1.0.0"
        assert '\n  "version"' in text

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "a" / "b" / "cache.json"
        FileCacher(str(path)).set(CacheRecord())
        assert path.exists()

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_parent_directory_mode(self, tmp_path):
        old_umask = os.umask(0)
        try:
            FileCacher(str(tmp_path / "d" / "cache.json")).set(CacheRecord())
        finally:
            os.umask(old_umask)
        assert stat.S_IMODE(os.stat(tmp_path / "d").st_mode) == 0o750

    def test_overwrites_existing(self, tmp_path):
        cacher = FileCacher(str(tmp_path / "cache.json"))
        cacher.set(CacheRecord(version="v1.0.0"))
        cacher.set(CacheRecord(version="v2.0.0"))
        assert cacher.get().version == "v2.0.0"
        assert [p.name for p in tmp_path.iterdir()] == ["cache.json"]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CacheError, match="not found"):
            FileCacher(str(tmp_path / "nope.json")).get()

    def test_corrupt_json_raises(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CacheError):
            FileCacher(str(path)).get()

    def test_wrong_shape_raises(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(CacheError, match="corrupt"):
            FileCacher(str(path)).get()

    def test_bad_timestamp_raises(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text('{"check_time": "yesterday", "version": "v1.0.0"}', encoding="utf-8")
        with pytest.raises(CacheError):
            FileCacher(str(path)).get()

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(CacheError):
            FileCacher(str(blocker / "cache.json")).set(CacheRecord())

    def test_reads_rfc3339_with_nanoseconds(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text(
            '{"check_time": "2021-06-01T10:20:30.123456789Z", "version": "v0.2.0", "etag": "whatever"}',
            encoding="utf-8",
        )
        record = FileCacher(str(path)).get()
        assert record.check_time == datetime(2021, 6, 1, 10, 20, 30, 123456, tzinfo=timezone.utc)
        assert record.version == "v0.2.0"
        assert record.etag == "whatever"


class TestCacheRecord:
    """Test record (de)serialization details."""

    def test_defaults(self):
        record = CacheRecord.from_dict({})
        assert record == CacheRecord(check_time=EPOCH, version="", etag="")

    def test_null_fields(self):
        record = CacheRecord.from_dict({"check_time": None, "version": None, "etag": None})
        assert record == CacheRecord()

    def test_parse_timestamp_offsets(self):
        assert parse_timestamp("2024-01-01T02:00:00+02:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_parse_timestamp_naive_is_utc(self):
        assert parse_timestamp("2024-01-01T00:00:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestMemoryCachers:
    """Test in-process cachers."""

    def test_memory_cacher_empty_raises(self):
        with pytest.raises(CacheError):
            MemoryCacher().get()

    def test_memory_cacher_counts_writes(self):
        cacher = MemoryCacher()
        cacher.set(CacheRecord(version="v1.0.0"))
        assert cacher.get().version == "v1.0.0"
        assert cacher.writes == 1

    def test_noop_cacher(self):
        cacher = NoopCacher()
        cacher.set(CacheRecord(version="v1.0.0"))
        assert cacher.get() == CacheRecord()
