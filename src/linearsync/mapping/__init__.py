"""Task-to-issue mapping persistence."""

from linearsync.mapping.store import MappingStore, decode_mappings, encode_mappings

__all__ = ["MappingStore", "decode_mappings", "encode_mappings"]
