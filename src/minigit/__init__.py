"""
minigit

A minimal local content-addressable object store and snapshot builder.
Hashes file content into immutable blob objects, snapshots directory trees
into tree objects, and wraps snapshots in commit objects.
"""

__version__ = "0.1.0"
