"""
L1 Domain — pure logic: errors, capability resolution, digests, rendering.

Nothing here touches the host except the PATH lookup in
``resolve_first_available``'s default probe.
"""
