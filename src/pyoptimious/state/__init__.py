"""Snapshot state layer.

Pure functions that compare and patch parameter snapshots.  The poller is
the only component that owns a snapshot; everything here works on copies.
"""
