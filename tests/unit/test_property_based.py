"""Property-based tests using hypothesis."""

from __future__ import annotations

from typing import Optional

from conftest import Game
from hypothesis import given
from hypothesis import strategies as st

from vdfcodec import SHORTCUTS_HEADER, FieldDecoder, decode, encode
from vdfcodec.codec.wire import INT32_MAX, INT32_MIN

# Text the wire can carry: no sentinel, no surrogates
wire_text = st.text(alphabet=st.characters(blacklist_characters="\x00", blacklist_categories=("Cs",)))
list_text = wire_text.filter(lambda s: "\x08\x08" not in s)


class TestCodecProperties:
    """Property-based tests for the codec."""

    @given(value=st.integers(min_value=INT32_MIN, max_value=INT32_MAX))
    def test_integer_roundtrip(self, value: int) -> None:
        """Every signed 32-bit integer survives a round trip."""
        decoded = decode(Game, encode([Game(app_id=value)]))
        assert decoded[0].app_id == value

    @given(value=wire_text)
    def test_string_roundtrip(self, value: str) -> None:
        """Any NUL-free text survives a round trip unchanged."""
        decoded = decode(Game, encode([Game(name=value)]))
        assert decoded[0].name == value

    @given(items=st.lists(list_text, max_size=12))
    def test_list_roundtrip(self, items: list[str]) -> None:
        """Any sequence of strings, including the empty one, keeps its order."""
        decoded = decode(Game, encode([Game(tags=items)]))
        assert decoded[0].tags == items

    @given(
        records=st.lists(
            st.builds(
                Game,
                app_id=st.integers(min_value=INT32_MIN, max_value=INT32_MAX),
                name=st.one_of(st.none(), wire_text),
                tags=st.lists(list_text, max_size=4),
            ),
            max_size=6,
        )
    )
    def test_records_roundtrip(self, records: list[Game]) -> None:
        """Sequences of records decode to equal records, numbered by position."""
        decoded = decode(Game, encode(records, Game))

        assert len(decoded) == len(records)
        for i, (before, after) in enumerate(zip(records, decoded)):
            assert after.index == i
            assert after.app_id == before.app_id
            assert after.name == (before.name or "")
            assert after.tags == before.tags

    @given(records=st.lists(st.builds(Game, name=st.one_of(st.none(), wire_text)), max_size=4))
    def test_encode_deterministic(self, records: list[Game]) -> None:
        """Encoding is deterministic."""
        assert encode(records, Game) == encode(records, Game)


class TestFieldDecoderProperties:
    """Property-based tests for the field decoder."""

    @given(prefix=st.binary(max_size=40), data=st.binary(max_size=80))
    def test_reset_is_idempotent(self, prefix: bytes, data: bytes) -> None:
        """After reset, a decoder behaves like a fresh one."""
        used = FieldDecoder()
        for b in prefix:
            used.feed(b)
        used.reset()
        fresh = FieldDecoder()

        assert [used.feed(b) for b in data] == [fresh.feed(b) for b in data]
        assert used.fields == fresh.fields
        assert used.state is fresh.state

    @given(data=st.binary(max_size=200))
    def test_arbitrary_bytes_never_raise(self, data: bytes) -> None:
        """Decoding never fails on arbitrary bytes once the header is present."""
        decode(Game, SHORTCUTS_HEADER + data)

    @given(name=st.one_of(st.none(), wire_text))
    def test_optional_name_is_absent_or_text(self, name: Optional[str]) -> None:
        """An absent string decodes to the empty string."""
        decoded = decode(Game, encode([Game(name=name)]))
        assert decoded[0].name == (name or "")
