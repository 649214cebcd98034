import logging
from urllib.parse import quote_plus

import pytest

from notifier.embed import (
    EMBED_COLOR, UploadEvent, build_document, normalize_key, path_escape, query_unescape,
)
from notifier.errors import KeyDecodeWarning


def _event(key, bucket="my-bucket", region="us-east-1", event_time="2024-01-01T00:00:00Z"):
    return UploadEvent(bucket=bucket, key=key, region=region, event_time=event_time)


@pytest.mark.parametrize("key", [
    "folder/my file.txt",
    "plain.txt",
    "a+b=c&d.csv",
    "100% done.txt",
    "報告/二〇二四 年度.pdf",
    "",
])
def test_normalize_key_inverts_query_encoding(key):
    assert normalize_key(quote_plus(key)) == key


@pytest.mark.parametrize("raw", [
    "100%",
    "bad%zzescape",
    "a+b%2",
])
def test_normalize_key_falls_back_to_raw(raw, caplog):
    with caplog.at_level(logging.WARNING, logger="notifier.embed"):
        assert normalize_key(raw) == raw
    assert "could not URL-decode" in caplog.text


def test_query_unescape_raises_on_bad_escape():
    with pytest.raises(KeyDecodeWarning):
        query_unescape("%G1")


def test_normalize_key_decodes_once():
    assert normalize_key("a%2520b") == "a%20b"


def test_path_escape_keeps_separators():
    assert path_escape("a b/c+d?.txt") == "a%20b/c%2Bd%3F.txt"
    assert path_escape("報告.pdf") == "%E5%A0%B1%E5%91%8A.pdf"


def test_build_document_scenario_a():
    doc = build_document(_event("folder/my%20file.txt"))

    assert doc.url == "https://my-bucket.s3.us-east-1.amazonaws.com/folder/my%20file.txt"
    assert doc.fields[2].value == "`folder/my file.txt`"
    assert doc.timestamp == "2024-01-01T00:00:00Z"
    assert doc.color == EMBED_COLOR == 3447003


@pytest.mark.parametrize("key", ["", "a/b/c", "%E5%A0%B1%E5%91%8A.pdf", "100%", "x+y"])
def test_build_document_fields_are_fixed(key):
    doc = build_document(_event(key, bucket="b-1", region="eu-west-3"))

    assert [(f.value, f.inline) for f in doc.fields[:2]] == [("b-1", True), ("eu-west-3", True)]
    assert len(doc.fields) == 3
    assert doc.fields[2].inline is False
    assert doc.fields[2].value == f"`{normalize_key(key)}`"
    assert doc.url.startswith("https://b-1.s3.eu-west-3.amazonaws.com/")


def test_build_document_undecodable_key_keeps_raw():
    doc = build_document(_event("odd%key name"))
    assert doc.fields[2].value == "`odd%key name`"
    assert doc.url.endswith("/odd%25key%20name")


def test_timestamp_is_not_reformatted():
    doc = build_document(_event("k", event_time="not a date"))
    assert doc.timestamp == "not a date"


def test_to_dict_wire_shape():
    d = build_document(_event("k.txt")).to_dict()
    assert list(d) == ["title", "description", "url", "color", "fields", "timestamp"]
    assert d["fields"][0] == {"name": "Bucket 名稱", "value": "my-bucket", "inline": True}


def test_non_utf8_bytes_survive_into_the_link():
    doc = build_document(_event("dump/%ff%fe.bin", bucket="b", region="r"))

    assert doc.url == "https://b.s3.r.amazonaws.com/dump/%FF%FE.bin"
    assert doc.fields[2].value == "`dump/\ufffd\ufffd.bin`"
    doc.to_dict()["fields"][2]["value"].encode("utf-8")


def test_non_utf8_key_is_not_a_decode_failure(caplog):
    with caplog.at_level(logging.WARNING, logger="notifier.embed"):
        normalize_key("%ff")
    assert caplog.text == ""
