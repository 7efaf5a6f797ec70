"""Unit tests for the entry-level state machine."""

from __future__ import annotations

from conftest import Game, entry_bytes

from vdfcodec import EntryDecoder, RecordSchema, decode
from vdfcodec.codec.decoder import EntryState


def make_decoder() -> EntryDecoder:
    return EntryDecoder(RecordSchema.from_model(Game))


class TestEntries:
    """Test splitting a stream into entries."""

    def test_single_entry(self, doom_entry: bytes) -> None:
        """One entry decodes to one record after flush."""
        decoder = make_decoder()
        ended = decoder.feed_bytes(doom_entry + b"\x08\x08")
        decoder.flush()

        assert ended == 1
        assert decoder.records == [Game(index=0, app_id=42, name="Doom", tags=["fps", "retro"])]
        assert decoder.entries[0].complete is True

    def test_entry_committed_on_next_start(self, doom_entry: bytes, quake_entry: bytes) -> None:
        """An ended entry is committed when the next entry starts."""
        decoder = make_decoder()
        decoder.feed_bytes(doom_entry)
        assert decoder.entries == []

        decoder.feed(0x00)
        assert [e.index for e in decoder.entries] == [0]

        decoder.feed_bytes(quake_entry[1:])
        decoder.flush()
        records = decoder.records
        assert [r.name for r in records] == ["Doom", "Quake"]
        assert records[1].app_id == -1
        assert records[1].tags == []

    def test_raw_entries_without_schema(self, doom_entry: bytes) -> None:
        """Without a schema, entries carry raw fields only."""
        decoder = EntryDecoder()
        decoder.feed_bytes(doom_entry)
        decoder.flush()

        entry = decoder.entries[0]
        assert entry.record is None
        assert entry.fields["appid"] == b"\x2a\x00\x00\x00"
        assert entry.fields["AppName"] == b"Doom"
        assert decoder.records == []

    def test_padding_between_entries_is_ignored(self, doom_entry: bytes, quake_entry: bytes) -> None:
        """Non-sentinel bytes between entries are skipped."""
        decoder = make_decoder()
        decoder.feed_bytes(doom_entry + b"\x08\x08\x7f\x08" + quake_entry + b"\x08\x08")
        decoder.flush()

        assert [r.name for r in decoder.records] == ["Doom", "Quake"]

    def test_index_is_informational(self) -> None:
        """Entry indices are parsed but not checked against position."""
        decoder = make_decoder()
        decoder.feed_bytes(entry_bytes(b"17", b"\x01\x00\x00\x00", b"A", b""))
        decoder.feed_bytes(entry_bytes(b"3", b"\x02\x00\x00\x00", b"B", b""))
        decoder.flush()

        assert [(r.index, r.name) for r in decoder.records] == [(17, "A"), (3, "B")]

    def test_unknown_fields_are_ignored(self) -> None:
        """Fields outside the schema do not affect the record."""
        data = (
            b"\x000\x00"
            b"\x02LastPlayTime\x00\x01\x02\x03\x04"
            b"\x01appname\x00Doom\x00"
            b"\x00tags\x00\x08\x08"
        )
        decoder = make_decoder()
        decoder.feed_bytes(data)
        decoder.flush()

        assert decoder.records == [Game(index=0, name="Doom")]
        assert decoder.stats.unknown_fields == 1
        assert "LastPlayTime" in decoder.entries[0].fields

    def test_state_transitions(self) -> None:
        """The decoder walks start -> index -> fields -> start."""
        decoder = make_decoder()
        assert decoder.state is EntryState.ENTRY_START

        decoder.feed(0x00)
        assert decoder.state is EntryState.INDEX

        decoder.feed_bytes(b"0\x00")
        assert decoder.state is EntryState.FIELDS

        assert decoder.feed_bytes(b"\x00tags\x00\x08\x08") == 1
        assert decoder.state is EntryState.ENTRY_START


class TestTruncatedStream:
    """Test flushing of streams that end early."""

    def test_partial_index_is_not_an_entry(self, doom_entry: bytes) -> None:
        """A second entry with only part of its index is not committed."""
        decoder = make_decoder()
        decoder.feed_bytes(doom_entry + b"\x001")
        decoder.flush()

        assert len(decoder.entries) == 1
        assert decoder.entries[0].complete is True
        assert decoder.stats.truncated_entries == 0

    def test_index_only_entry_is_committed_empty(self, doom_entry: bytes) -> None:
        """An entry whose index was parsed is committed even with no fields."""
        decoder = make_decoder()
        decoder.feed_bytes(doom_entry + b"\x001\x00")
        decoder.flush()

        entries = decoder.entries
        assert len(entries) == 2
        assert entries[1].complete is False
        assert entries[1].fields == {}
        assert entries[1].record == Game(index=1)
        assert decoder.stats.truncated_entries == 1

    def test_truncated_entry_keeps_completed_fields(self) -> None:
        """Fields finished before the stream ended are kept; the partial one is not."""
        decoder = make_decoder()
        decoder.feed_bytes(b"\x000\x00\x02appid\x00\x07\x00\x00\x00\x01AppName\x00Do")
        entry = decoder.flush()

        assert entry is not None
        assert entry.complete is False
        assert entry.record == Game(index=0, app_id=7)

    def test_flush_is_idempotent(self, doom_entry: bytes) -> None:
        """A second flush commits nothing."""
        decoder = make_decoder()
        decoder.feed_bytes(doom_entry)

        assert decoder.flush() is not None
        assert decoder.flush() is None
        assert len(decoder.entries) == 1


class TestMalformedInput:
    """Test recovery from malformed entries."""

    def test_malformed_index_drops_entry(self, quake_entry: bytes) -> None:
        """An entry with a non-numeric index is dropped; the next one decodes."""
        bad = b"\x00xx\x00\x01AppName\x00Doom\x00\x08\x08"
        decoder = make_decoder()
        decoder.feed_bytes(bad + quake_entry)
        decoder.flush()

        assert [r.name for r in decoder.records] == ["Quake"]
        assert decoder.records[0].index == 1
        assert decoder.stats.malformed_indices == 1

    def test_malformed_index_with_full_field_run(self, doom_entry: bytes, quake_entry: bytes) -> None:
        """A well-formed entry with a bad index is skipped exactly."""
        bad = b"\x00-3" + doom_entry[2:]
        decoder = make_decoder()
        decoder.feed_bytes(bad + quake_entry)
        decoder.flush()

        assert [r.name for r in decoder.records] == ["Quake"]
        assert decoder.stats.malformed_indices == 1

    def test_empty_index_is_malformed(self, quake_entry: bytes) -> None:
        """An index with no digits is malformed."""
        decoder = make_decoder()
        decoder.feed_bytes(b"\x00\x00\x00tags\x00\x08\x08" + quake_entry)
        decoder.flush()

        assert [r.name for r in decoder.records] == ["Quake"]
        assert decoder.stats.malformed_indices == 1

    def test_overlong_index_is_malformed(self, quake_entry: bytes) -> None:
        """A huge digit run is dropped like any other bad index."""
        bad = b"\x00" + b"1" * 5000 + b"\x00\x00tags\x00\x08\x08"
        decoder = make_decoder()
        decoder.feed_bytes(bad + quake_entry)
        decoder.flush()

        assert [r.name for r in decoder.records] == ["Quake"]
        assert decoder.stats.malformed_indices == 1

    def test_overlong_index_through_decode(self, header: bytes, quake_entry: bytes) -> None:
        """decode() keeps going past an overlong index."""
        bad = b"\x00" + b"1" * 5000 + b"\x00\x00tags\x00\x08\x08"

        assert [r.name for r in decode(Game, header + bad + quake_entry)] == ["Quake"]

    def test_index_beyond_int32_is_malformed(self, quake_entry: bytes) -> None:
        """Indices above the signed 32-bit range do not parse."""
        decoder = make_decoder()
        decoder.feed_bytes(entry_bytes(b"99999999999", b"\x01\x00\x00\x00", b"A", b""))
        decoder.feed_bytes(entry_bytes(b"2147483648", b"\x01\x00\x00\x00", b"B", b""))
        decoder.feed_bytes(quake_entry)
        decoder.flush()

        assert [(r.index, r.name) for r in decoder.records] == [(1, "Quake")]
        assert decoder.stats.malformed_indices == 2

    def test_largest_index_parses(self) -> None:
        """The int32 maximum is a valid index, leading zeros included."""
        decoder = make_decoder()
        decoder.feed_bytes(entry_bytes(b"2147483647", b"\x01\x00\x00\x00", b"A", b""))
        decoder.feed_bytes(entry_bytes(b"000000000007", b"\x01\x00\x00\x00", b"B", b""))
        decoder.flush()

        assert [r.index for r in decoder.records] == [2147483647, 7]
        assert decoder.stats.malformed_indices == 0

    def test_dropped_entry_is_not_counted_as_ended(self, quake_entry: bytes) -> None:
        """feed_bytes() only counts entries that are committed."""
        decoder = make_decoder()
        ended = decoder.feed_bytes(entry_bytes(b"xx", b"\x01\x00\x00\x00", b"A", b"") + quake_entry)
        decoder.flush()

        assert ended == 1
        assert len(decoder.entries) == 1

    def test_unrecognized_type_byte_resyncs(self) -> None:
        """An unknown type byte inside an entry is skipped up to the next sentinel."""
        data = (
            b"\x000\x00"
            b"\x01AppName\x00Doom\x00"
            b"\x07garbage\x00"
            b"\x00tags\x00\x010\x00fps\x00\x08\x08"
        )
        resyncs: list[int] = []
        decoder = EntryDecoder(RecordSchema.from_model(Game), on_resync=resyncs.append)
        decoder.feed_bytes(data)
        decoder.flush()

        assert decoder.records == [Game(index=0, name="Doom", tags=["fps"])]
        assert decoder.stats.resyncs == 1
        assert resyncs == [0x07]
