import datetime

import pytest
from bson import ObjectId

from measurestore.core.errors import ParseError
from measurestore.domain.documents import parse_document


def test_plain_json():
    doc = parse_document(b'{"a": 1, "b": [true, null, "x"], "c": {"d": 2.5}}')
    assert doc == {"a": 1, "b": [True, None, "x"], "c": {"d": 2.5}}


def test_extended_json_type_tags():
    doc = parse_document(
        b'{"_id": {"$oid": "65f1c0ffee0000000000abcd"}, "at": {"$date": {"$numberLong": "0"}}}'
    )
    assert doc["_id"] == ObjectId("65f1c0ffee0000000000abcd")
    assert isinstance(doc["at"], datetime.datetime)


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"{",
        b"{'single': 'quotes'}",
        b'{"_id": {"$oid": "not-hex"}}',
        b"\xff\xfe\x00",
    ],
)
def test_malformed_input(raw):
    with pytest.raises(ParseError):
        parse_document(raw)


@pytest.mark.parametrize("raw", [b"[]", b"42", b'"text"', b"null"])
def test_top_level_must_be_object(raw):
    with pytest.raises(ParseError, match="must be an object"):
        parse_document(raw)


def test_deeply_nested_document():
    depth = 100_000
    raw = b'{"a": ' + b"[" * depth + b"]" * depth + b"}"
    with pytest.raises(ParseError, match="invalid JSON document"):
        parse_document(raw)


def test_large_flat_document():
    raw = b"{" + b", ".join(b'"k%d": %d' % (i, i) for i in range(50_000)) + b"}"
    doc = parse_document(raw)
    assert len(doc) == 50_000
    assert doc["k49999"] == 49999
