import io

import pytest

from bookshelf import codec
from bookshelf.errors import InvalidArgumentError
from bookshelf.storage import (
    FileStorage,
    FramingError,
    Storage,
    read_7bit_int,
    write_7bit_int,
    write_chunk,
)


@pytest.mark.parametrize(
    "value, encoded",
    [
        (0, b"\x00"),
        (42, b"\x2a"),
        (127, b"\x7f"),
        (128, b"\x80\x01"),
        (300, b"\xac\x02"),
        (16384, b"\x80\x80\x01"),
        (2**31 - 1, b"\xff\xff\xff\xff\x07"),
    ],
)
def test_7bit_length_prefix(value, encoded):
    out = io.BytesIO()
    write_7bit_int(out, value)
    assert out.getvalue() == encoded
    assert read_7bit_int(io.BytesIO(encoded)) == value


def test_negative_length_is_rejected():
    with pytest.raises(ValueError):
        write_7bit_int(io.BytesIO(), -1)


def test_read_prefix_at_end_of_stream_returns_none():
    assert read_7bit_int(io.BytesIO(b"")) is None


def test_read_prefix_cut_short_raises():
    with pytest.raises(FramingError):
        read_7bit_int(io.BytesIO(b"\x80"))


def test_read_prefix_longer_than_five_bytes_raises():
    with pytest.raises(FramingError):
        read_7bit_int(io.BytesIO(b"\x80\x80\x80\x80\x80\x01"))


def test_file_storage_requires_a_path():
    with pytest.raises(InvalidArgumentError):
        FileStorage(None)


def test_file_storage_satisfies_protocol(file_storage):
    assert isinstance(file_storage, Storage)


def test_write_produces_length_prefixed_chunks(file_storage, book_file, book):
    file_storage.write([book])
    text = b"978-1/A. Author/Title/Pub/2001/300/19.99/"
    assert book_file.read_bytes() == bytes([len(text)]) + text


def test_long_record_uses_multi_byte_prefix(file_storage, book_file, make_book):
    book = make_book(title="T" * 200)
    file_storage.write([book])
    data = book_file.read_bytes()
    payload_length = len(codec.encode(book).encode("utf-8"))
    assert payload_length > 127
    assert data[:2] == bytes([(payload_length & 0x7F) | 0x80, payload_length >> 7])
    assert file_storage.read() == [book]


def test_prefix_counts_bytes_not_characters(file_storage, book_file, make_book):
    book = make_book(author="Ёж")
    file_storage.write([book])
    data = book_file.read_bytes()
    assert data[0] == len(codec.encode(book).encode("utf-8"))
    assert file_storage.read() == [book]


def test_read_missing_file_creates_it_empty(file_storage, book_file):
    assert not book_file.exists()
    assert file_storage.read() == []
    assert book_file.exists()


def test_write_then_read_keeps_order(file_storage, make_book):
    books = [make_book(isbn=str(i), year=2000 + i) for i in range(5)]
    file_storage.write(books)
    assert file_storage.read() == books


def test_write_truncates_previous_content(file_storage, make_book):
    file_storage.write([make_book(isbn="1"), make_book(isbn="2")])
    file_storage.write([make_book(isbn="3")])
    assert file_storage.read() == [make_book(isbn="3")]


def test_read_stops_quietly_at_truncated_payload(file_storage, book_file, make_book):
    books = [make_book(isbn="1"), make_book(isbn="2")]
    file_storage.write(books)
    with book_file.open("ab") as f:
        f.write(bytes([50]) + b"978-3/Half a rec")
    assert file_storage.read() == books


def test_read_stops_quietly_at_truncated_prefix(file_storage, book_file, make_book):
    books = [make_book(isbn="1")]
    file_storage.write(books)
    with book_file.open("ab") as f:
        f.write(b"\x80")
    assert file_storage.read() == books


def test_read_skips_malformed_record_and_continues(book_file, make_book):
    first, last = make_book(isbn="1"), make_book(isbn="2")
    with book_file.open("wb") as f:
        write_chunk(f, codec.encode(first))
        write_chunk(f, "978-9/Only/Three/")
        write_chunk(f, "978-9/A/T/P/not-a-year/1/1.00/")
        write_chunk(f, codec.encode(last))
    assert FileStorage(book_file).read() == [first, last]


def test_read_skips_record_with_invalid_utf8(book_file, make_book):
    first, last = make_book(isbn="1"), make_book(isbn="2")
    with book_file.open("wb") as f:
        write_chunk(f, codec.encode(first))
        f.write(b"\x03\xff\xfe\xfd")
        write_chunk(f, codec.encode(last))
    assert FileStorage(book_file).read() == [first, last]


def test_io_errors_propagate(tmp_path, book):
    storage = FileStorage(tmp_path)
    with pytest.raises(OSError):
        storage.write([book])
    with pytest.raises(OSError):
        storage.read()


def test_missing_directory_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileStorage(tmp_path / "missing" / "Book.txt").read()
