# tests/test_file_store.py
import os

import pytest

from utils.errors import InvalidArgument, NotFound
from utils.file_store import FileStore, STORED_NAME_RE, is_stored_name
from conftest import PDF_BYTES


@pytest.fixture
def store(tmp_path):
    return FileStore(str(tmp_path / "files"))


def test_store_and_open(store):
    name = store.store("ssc_doc", "Marks Memo.PDF", PDF_BYTES, "application/pdf")
    assert STORED_NAME_RE.match(name)
    assert name.startswith("ssc_doc-")
    assert name.endswith(".pdf")
    with store.open(name) as fh:
        assert fh.read() == PDF_BYTES


def test_identical_uploads_get_distinct_names(store):
    names = {store.store("ssc_doc", "a.pdf", PDF_BYTES, "application/pdf") for _ in range(20)}
    assert len(names) == 20


def test_unsafe_extension_is_dropped(store):
    name = store.store("ssc_doc", "evil.pdf/../../x", PDF_BYTES, "application/pdf")
    assert is_stored_name(name)
    assert "/" not in name


def test_rejects_non_pdf_without_writing(store):
    with pytest.raises(InvalidArgument):
        store.store("ssc_doc", "photo.png", b"\x89PNG", "image/png")
    assert os.listdir(store.root) == []


def test_rejects_oversized_without_writing(store):
    data = b"0" * (6 * 1024 * 1024)
    with pytest.raises(InvalidArgument):
        store.store("ssc_doc", "big.pdf", data, "application/pdf")
    assert os.listdir(store.root) == []


def test_exactly_at_limit_is_accepted(tmp_path):
    store = FileStore(str(tmp_path / "small"), max_bytes=10)
    assert store.store("ssc_doc", "a.pdf", b"0" * 10, "application/pdf")
    with pytest.raises(InvalidArgument):
        store.check("a.pdf", 11, "application/pdf")


@pytest.mark.parametrize("name", [
    "../secret.pdf",
    "ssc_doc-123.pdf",
    "..%2Fetc%2Fpasswd",
    "",
])
def test_open_refuses_names_it_did_not_generate(store, name):
    with pytest.raises(NotFound):
        store.open(name)


def test_open_missing_file(store):
    with pytest.raises(NotFound):
        store.open("ssc_doc-1700000000000-" + "0" * 32 + ".pdf")


def test_remove(store):
    name = store.store("offerLetter", "offer.pdf", PDF_BYTES, "application/pdf")
    assert store.exists(name)
    store.remove(name)
    assert not store.exists(name)
    # removing twice is harmless
    store.remove(name)
