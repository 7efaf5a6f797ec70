#!/usr/bin/env python3
"""Basic usage example for vdfcodec.

This example demonstrates:
1. Defining a custom record with Pydantic
2. Encoding records to a binary VDF stream
3. Decoding the stream back to records
4. Recovering what is left of a truncated stream
"""

from __future__ import annotations

from typing import Optional

from vdfcodec import BaseRecord, VDFField, decode, decode_entries, encode


class Bookmark(BaseRecord):
    """Browser-style bookmark stored as a VDF entry.

    The list attribute comes last: its end marker also closes the entry.
    """

    title: Optional[str] = VDFField("Title", default=None)
    url: Optional[str] = VDFField("URL", default=None)
    visits: int = VDFField("Visits", default=0)
    folders: list[str] = VDFField("Folders", default_factory=list)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("vdfcodec Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating bookmarks...")
    bookmarks = [
        Bookmark(index=0, title="Python", url="https://www.python.org", visits=12, folders=["dev"]),
        Bookmark(index=1, title="Pydantic", url="https://docs.pydantic.dev", folders=["dev", "docs"]),
    ]
    for b in bookmarks:
        print(f"   {b.title}: {b.url} ({b.visits} visits) {b.folders}")
    print()

    print("2. Encoding to binary VDF...")
    data = encode(bookmarks)
    print(f"   Encoded size: {len(data)} bytes")
    print(f"   Hex: {data[:48].hex()}...")
    print()

    print("3. Decoding from binary...")
    decoded = decode(Bookmark, data)
    for b in decoded:
        print(f"   [{b.index}] {b.title}: {b.url} {b.folders}")
    print()

    print("4. Verifying round-trip...")
    if decoded == bookmarks:
        print("   Round-trip successful")
    else:
        print("   Round-trip FAILED")
    print()

    print("5. Decoding a truncated stream...")
    entries = decode_entries(data[:-20], Bookmark)
    for entry in entries:
        state = "complete" if entry.complete else "truncated"
        print(f"   [{entry.index}] {state}: fields {list(entry.fields)}")
    print()


if __name__ == "__main__":
    main()
