"""Unit tests for upload sources."""

from pathlib import Path

import pytest

from formulaic.exceptions import InvalidFileTypeError
from formulaic.files import BytesSource, PathSource, as_file_source


class TestAsFileSource:
    @pytest.mark.parametrize("data", [b"abc", bytearray(b"abc"), memoryview(b"abc")])
    def test_buffers(self, data):
        source = as_file_source(data)
        assert source == BytesSource(b"abc")
        with source.open() as stream:
            assert stream.read() == b"abc"

    def test_str_path(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("hi")
        source = as_file_source(str(path))
        assert source == PathSource(path)
        with source.open() as stream:
            assert stream.read() == b"hi"

    def test_pathlike(self, tmp_path):
        assert isinstance(as_file_source(tmp_path / "x"), PathSource)

    def test_existing_source_passes_through(self):
        source = BytesSource(b"x")
        assert as_file_source(source) is source

    @pytest.mark.parametrize("bad", [None, 1, 1.5, ["a"], object()])
    def test_rejects_other_types(self, bad):
        with pytest.raises(InvalidFileTypeError, match="expected bytes or a file path"):
            as_file_source(bad)

    def test_missing_path_fails_on_open(self):
        source = PathSource(Path("/nonexistent/file.bin"))
        with pytest.raises(FileNotFoundError):
            source.open()
