from .errors import LoaderError, SnapshotMismatchError
from .snapshot_files import match_snapshot, read_snapshot, write_snapshot

__all__ = ["LoaderError", "SnapshotMismatchError", "match_snapshot", "read_snapshot", "write_snapshot"]
