"""Tests for reading and writing N-Triples files."""
import pytest
from pathlib import Path

from ntriples_collection.config import CodecConfig, InvalidLiteralPolicy
from ntriples_collection.files import FileError, WriteResult, read_ntriples_file, write_ntriples_file
from ntriples_collection.formats import ParseError
from ntriples_collection.models import Triple
from ntriples_collection.terms import InvalidLiteralError

FIXTURES = Path(__file__).parent / "fixtures"
DC = "http://purl.org/dc/elements/1.1/"


@pytest.fixture
def write_triples():
    graph = "/only-for-quad"
    rows = [
        ('"Publisher Alpha"', "publisher", "http://www.site.org/version/123/"),
        ('"Creator Alpha"', "creator", "http://www.site.org/version/123/"),
        ('"Publisher Beta"', "publisher", "http://www.site.org/version/124/"),
        ('"Creator Beta"', "creator", "http://www.site.org/version/124/"),
        ('"Dave Beckett"', "creator", "http://www.site.org/version/125/"),
        ('"Art Barstow"', "creator", "http://www.site.org/version/125/"),
        ("http://www.w3.org/", "publisher", "http://www.site.org/version/125/"),
    ]
    return [
        {"graph": graph, "object": obj, "predicate": f"{DC}{pred}", "subject": subj}
        for obj, pred, subj in rows
    ]


# ========== Read Tests ==========

class TestReadNTriplesFile:
    def test_read_reference(self):
        triples = read_ntriples_file(FIXTURES / "reference.nt")
        assert len(triples) == 7
        assert triples[0] == Triple("http://www.site.org/version/123/", f"{DC}publisher", '"Publisher Alpha"')
        assert triples[4].object == '"Dave Beckett"@fr-be'
        assert triples[6].object == "http://www.w3.org/"

    def test_read_str_path(self):
        assert len(read_ntriples_file(str(FIXTURES / "reference.nt"))) == 7

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.nt"
        with pytest.raises(FileError) as exc_info:
            read_ntriples_file(missing)
        assert exc_info.value.filename == str(missing)
        assert isinstance(exc_info.value.error, FileNotFoundError)

    def test_parse_error_propagates(self, tmp_path):
        path = tmp_path / "bad.nt"
        path.write_text("<http://s> <http://p> oops .\n", encoding="utf-8")
        with pytest.raises(ParseError):
            read_ntriples_file(path)

    def test_encoding_from_config(self, tmp_path):
        path = tmp_path / "latin.nt"
        path.write_bytes('<http://s> <http://p> "café" .\n'.encode("latin-1"))
        triples = read_ntriples_file(path, CodecConfig(encoding="latin-1"))
        assert triples[0].object == '"café"'


# ========== Write Tests ==========

class TestWriteNTriplesFile:
    def test_write_reference(self, tmp_path, write_triples):
        path = tmp_path / "write-example.nt"
        result = write_ntriples_file(path, write_triples)

        assert result == WriteResult(count=7)
        expected = (FIXTURES / "write-reference.nt").read_text(encoding="utf-8")
        assert path.read_text(encoding="utf-8") == expected

    def test_write_then_read(self, tmp_path):
        triples = [
            Triple("http://s", "http://p", '"line\nbreak"@en'),
            Triple("_:b0", "http://p", "http://o"),
        ]
        path = tmp_path / "round.nt"
        write_ntriples_file(path, triples)
        assert read_ntriples_file(path) == triples

    def test_without_trailing_newline(self, tmp_path):
        path = tmp_path / "plain.nt"
        write_ntriples_file(path, [Triple("http://s", "http://p", "http://o")], CodecConfig(trailing_newline=False))
        assert path.read_text(encoding="utf-8") == "<http://s> <http://p> <http://o>."

    def test_empty(self, tmp_path):
        path = tmp_path / "empty.nt"
        assert write_ntriples_file(path, []).count == 0
        assert path.read_text(encoding="utf-8") == ""

    def test_count_includes_skipped(self, tmp_path):
        triples = [
            Triple("http://s", "http://p", '"ok"'),
            Triple("http://s", "http://p", '"broken'),
        ]
        config = CodecConfig(invalid_literal_policy=InvalidLiteralPolicy.SKIP)
        path = tmp_path / "skip.nt"
        assert write_ntriples_file(path, triples, config).count == 2
        assert read_ntriples_file(path) == [triples[0]]

    def test_invalid_literal_aborts(self, tmp_path):
        with pytest.raises(InvalidLiteralError):
            write_ntriples_file(tmp_path / "abort.nt", [Triple("http://s", "http://p", '"broken')])

    def test_unwritable_path(self, tmp_path):
        with pytest.raises(FileError) as exc_info:
            write_ntriples_file(tmp_path / "no-such-dir" / "out.nt", [])
        assert isinstance(exc_info.value.error, OSError)


# ========== Encoding Failure Tests ==========

class TestEncodingFailures:
    def test_undecodable_bytes(self, tmp_path):
        path = tmp_path / "bad-bytes.nt"
        path.write_bytes(b'<http://s> <http://p> "\xff" .\n')
        with pytest.raises(FileError) as exc_info:
            read_ntriples_file(path)
        assert exc_info.value.filename == str(path)
        assert isinstance(exc_info.value.error, UnicodeDecodeError)

    def test_unencodable_text(self, tmp_path):
        path = tmp_path / "ascii.nt"
        with pytest.raises(FileError) as exc_info:
            write_ntriples_file(path, [Triple("http://s", "http://p", '"café"')], CodecConfig(encoding="ascii"))
        assert isinstance(exc_info.value.error, UnicodeEncodeError)

    def test_failed_write_keeps_existing_file(self, tmp_path):
        path = tmp_path / "out.nt"
        write_ntriples_file(path, [Triple("http://s", "http://p", '"old"')])
        before = path.read_text(encoding="utf-8")

        with pytest.raises(FileError):
            write_ntriples_file(path, [Triple("http://s", "http://p", '"café"')], CodecConfig(encoding="ascii"))
        assert path.read_text(encoding="utf-8") == before

    def test_lone_low_surrogate_written_escaped(self, tmp_path):
        path = tmp_path / "surrogate.nt"
        write_ntriples_file(path, [Triple("http://s", "http://p", '"\udc00"')])
        assert path.read_text(encoding="utf-8") == '<http://s> <http://p> "\\uDC00".\n'
