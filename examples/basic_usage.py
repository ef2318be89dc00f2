#!/usr/bin/env python3
"""Basic usage example for chatsafe.

This example demonstrates:
1. Serializing nested data to a chat-safe string
2. Inspecting the token breakdown
3. Unserializing it back, shared tables included
4. Handling malformed input
"""

from __future__ import annotations

from chatsafe import FormatError, serialize, token_counts, unserialize


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("chatsafe Basic Usage Example")
    print("=" * 60)
    print()

    # Build a message with a shared table and a cycle
    print("1. Building a raid roster...")
    healer = {"class": "Priest", "role": "healer"}
    raid: dict = {"name": "Molten Core", "note": "Meet at: the gate | 8pm"}
    raid["players"] = [
        {"name": "Anduin", "spec": healer, "raid": raid},
        {"name": "Velen", "spec": healer, "raid": raid},
    ]
    print(f"   Players: {len(raid['players'])}")
    print()

    # Encode it
    print("2. Serializing...")
    encoded = serialize(raid)
    print(f"   {encoded}")
    print(f"   Length: {len(encoded)} characters")
    print()

    # Inspect it
    print("3. Token breakdown...")
    for kind, count in token_counts(encoded).items():
        print(f"   {kind}: {count}")
    print()

    # Decode it
    print("4. Unserializing...")
    decoded = unserialize(encoded)
    players = decoded["players"]
    print(f"   Note: {decoded['note']}")
    print(f"   Healer table shared: {players[1]['spec'] is players[2]['spec']}")
    print(f"   Cycle preserved: {players[1]['raid'] is decoded}")
    print()

    # Malformed input
    print("5. Rejecting a truncated string...")
    try:
        unserialize(encoded[:-1])
    except FormatError as e:
        print(f"   {e} ({e.reason.value})")
    print()


if __name__ == "__main__":
    main()
