"""Snapshot export and import (JSON documents)."""

from stockscope.snapshot.codec import SNAPSHOT_VERSION
from stockscope.snapshot.exporter import SnapshotExporter
from stockscope.snapshot.importer import SnapshotImporter, ParsedSnapshot

__all__ = [
    "SNAPSHOT_VERSION",
    "SnapshotExporter",
    "SnapshotImporter",
    "ParsedSnapshot",
]
