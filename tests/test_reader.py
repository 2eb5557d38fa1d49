from __future__ import annotations

import io

import pytest
from license_render.exceptions import MarkupSyntaxError
from license_render.models import EndElement, EndOfStream, StartElement, Text
from license_render.reader import MarkupEventReader, iter_events


def test_reads_events_in_document_order():
    reader = MarkupEventReader(b"<text><p>Hello</p></text>")

    assert list(reader) == [
        StartElement("text"),
        StartElement("p"),
        Text("Hello"),
        EndElement("p"),
        EndElement("text"),
    ]


def test_end_of_stream_is_repeated_after_document_end():
    reader = MarkupEventReader(b"<text/>")
    list(reader)

    assert reader.next_event() == EndOfStream()
    assert reader.next_event() == EndOfStream()


def test_entities_are_unescaped():
    reader = MarkupEventReader(b"<p>&lt;year&gt; &amp; &#169; &quot;x&quot;</p>")

    assert Text('<year> & © "x"') in list(reader)


def test_text_split_across_chunks_is_coalesced():
    reader = MarkupEventReader(io.BytesIO(b"<p>one &amp; two three</p>"), chunk_size=3)

    events = list(reader)

    assert events == [StartElement("p"), Text("one & two three"), EndElement("p")]


def test_trim_text_drops_whitespace_only_runs_and_strips_text():
    reader = MarkupEventReader(
        b"<text>\n  <p>\n    spaced out \n  </p>\n</text>", trim_text=True
    )

    assert list(reader) == [
        StartElement("text"),
        StartElement("p"),
        Text("spaced out"),
        EndElement("p"),
        EndElement("text"),
    ]


def test_whitespace_is_preserved_by_default():
    reader = MarkupEventReader(b"<p>Copyright (c) <alt>year</alt></p>")

    assert list(reader) == [
        StartElement("p"),
        Text("Copyright (c) "),
        StartElement("alt"),
        Text("year"),
        EndElement("alt"),
        EndElement("p"),
    ]


def test_prefixed_names_are_reported_by_local_name():
    reader = MarkupEventReader(b'<s:text xmlns:s="urn:spdx"><s:p>x</s:p></s:text>')

    assert list(reader)[:2] == [StartElement("text"), StartElement("p")]


def test_mismatched_tag_raises_with_position():
    reader = MarkupEventReader(b"<text><p>x</text>")

    with pytest.raises(MarkupSyntaxError) as excinfo:
        list(reader)

    assert excinfo.value.line == 1
    assert excinfo.value.column is not None


def test_empty_document_is_malformed():
    with pytest.raises(MarkupSyntaxError):
        MarkupEventReader(b"").next_event()


def test_truncated_document_is_malformed():
    with pytest.raises(MarkupSyntaxError):
        list(MarkupEventReader(b"<text><p>Hello"))


def test_entity_declarations_are_forbidden():
    document = b'<!DOCTYPE text [<!ENTITY boom "boom">]><text>&boom;</text>'

    with pytest.raises(MarkupSyntaxError, match="Forbidden"):
        list(MarkupEventReader(document))


def test_reader_pulls_input_lazily():
    source = io.BytesIO(b"<text><p>first</p>" + b" " * 10_000 + b"</text>")
    reader = MarkupEventReader(source, chunk_size=32)

    assert reader.next_event() == StartElement("text")
    assert source.tell() < 10_000


def test_iter_events_terminates_with_end_of_stream():
    events = iter_events([StartElement("text")])

    assert events.next_event() == StartElement("text")
    assert events.next_event() == EndOfStream()
    assert events.next_event() == EndOfStream()
