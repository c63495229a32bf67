"""Tests for page-based file reads."""

import struct
from pathlib import Path

import pytest

from builders import build_leaf_page, write_database
from exceptions import InvalidHeader, PageIOError
from models.header import HEADER_SIZE, FileHeader
from storage.pager import Pager, btree_header_offset


class TestPager:
    """Tests for Pager file I/O."""

    @pytest.mark.parametrize("page_size", [512, 1024, 4096, 8192, 32768, 65536])
    def test_page_size_recovered_from_header(self, tmp_path: Path, page_size: int):
        db_path = write_database(tmp_path / "test.db", [], [build_leaf_page([], page_size)], page_size=page_size)

        with Pager(db_path) as pager:
            assert pager.page_size == page_size
            page = pager.read_page(1)
            assert len(page) == page_size
            assert FileHeader.from_bytes(page).page_size == page_size

    def test_page_size_65536_stored_as_one(self, tmp_path: Path):
        db_path = write_database(tmp_path / "test.db", [], [], page_size=65536)

        with Pager(db_path) as pager:
            (raw,) = struct.unpack(">H", pager.read_page(1)[16:18])
            assert raw == 1
            assert pager.page_size == 65536

    def test_read_page_offsets(self, tmp_path: Path):
        page_two = bytearray(1024)
        page_two[0] = 0xAB
        page_three = bytearray(1024)
        page_three[0] = 0xCD
        db_path = write_database(tmp_path / "test.db", [], [page_two, page_three], page_size=1024)

        with Pager(db_path) as pager:
            assert pager.read_page(2)[0] == 0xAB
            assert pager.read_page(3)[0] == 0xCD
            assert pager.page_count == 3

    def test_pages_read_fresh(self, tmp_path: Path):
        db_path = write_database(tmp_path / "test.db", [], [bytearray(1024)], page_size=1024)

        with Pager(db_path) as pager:
            first = pager.read_page(2)
            with open(db_path, "r+b") as f:
                f.seek(1024)
                f.write(b"\x7f")
            assert pager.read_page(2)[0] == 0x7F
            assert first[0] == 0

    def test_short_read(self, tmp_path: Path):
        db_path = write_database(tmp_path / "test.db", [], [bytearray(1024)], page_size=1024)

        with Pager(db_path) as pager:
            with pytest.raises(PageIOError, match="Incomplete page read") as exc_info:
                pager.read_page(3)
            assert exc_info.value.page_number == 3

    def test_truncated_last_page(self, tmp_path: Path):
        db_path = write_database(tmp_path / "test.db", [], [bytearray(1024)], page_size=1024)
        with open(db_path, "r+b") as f:
            f.truncate(1024 + 500)

        with Pager(db_path) as pager:
            with pytest.raises(PageIOError):
                pager.read_page(2)

    def test_invalid_page_number(self, tmp_path: Path):
        db_path = write_database(tmp_path / "test.db", [], [])

        with Pager(db_path) as pager:
            with pytest.raises(PageIOError, match="Invalid page number"):
                pager.read_page(0)

    def test_closed_pager(self, tmp_path: Path):
        db_path = write_database(tmp_path / "test.db", [], [])

        pager = Pager(db_path)
        pager.close()
        with pytest.raises(PageIOError, match="closed"):
            pager.read_page(1)

    def test_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Pager(tmp_path / "nonexistent.db")

    def test_invalid_magic(self, tmp_path: Path):
        db_path = tmp_path / "bad.db"
        db_path.write_bytes(b"XXXX" + b"\x00" * 4092)

        with pytest.raises(InvalidHeader, match="Invalid magic bytes"):
            Pager(db_path)

    def test_file_shorter_than_header(self, tmp_path: Path):
        db_path = tmp_path / "short.db"
        db_path.write_bytes(b"SQLite format 3\x00")

        with pytest.raises(PageIOError):
            Pager(db_path)

    def test_real_database(self, sample_db: Path):
        with Pager(sample_db) as pager:
            assert pager.page_size == 4096
            assert pager.header.encoding == "utf-8"
            assert pager.header.database_size == pager.page_count


class TestBtreeHeaderOffset:
    def test_page_one_skips_file_header(self):
        assert btree_header_offset(1) == HEADER_SIZE

    def test_other_pages_start_at_zero(self):
        assert btree_header_offset(2) == 0
        assert btree_header_offset(100) == 0
