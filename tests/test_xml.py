import struct

from tdsvalues.xml import XmlData, XmlSchema


def test_encode_header_and_terminator():
    encoded = XmlData("<a/>").encode()
    assert encoded[:8] == struct.pack("<Q", 0xFFFFFFFFFFFFFFFE)
    assert encoded[-4:] == b"\x00\x00\x00\x00"


def test_encode_chunk_length_counts_bytes():
    text = "<root><child attr=\"attr-value\"/></root>"
    encoded = XmlData(text).encode()
    (chunk_length,) = struct.unpack("<I", encoded[8:12])
    payload = encoded[12:-4]
    assert chunk_length == len(payload)
    assert payload.decode("utf-16-le") == text


def test_encode_non_bmp_characters():
    text = "<x>\U0001F600余</x>"
    encoded = XmlData(text).encode()
    (chunk_length,) = struct.unpack("<I", encoded[8:12])
    assert encoded[12:12 + chunk_length].decode("utf-16-le") == text
    assert len(encoded) == 8 + 4 + chunk_length + 4


def test_empty_document():
    encoded = XmlData("").encode()
    assert struct.unpack("<I", encoded[8:12]) == (0,)
    assert len(encoded) == 16


def test_string_form_is_the_data():
    xml = XmlData("<foo>lol</foo>")
    assert str(xml) == "<foo>lol</foo>"
    assert xml.schema is None


def test_equality_includes_schema():
    schema = XmlSchema("db", "dbo", "collection")
    assert XmlData("<a/>", schema) == XmlData("<a/>", XmlSchema("db", "dbo", "collection"))
    assert XmlData("<a/>", schema) != XmlData("<a/>")
    assert schema.db_name == "db"
    assert schema.owner == "dbo"
    assert schema.collection == "collection"