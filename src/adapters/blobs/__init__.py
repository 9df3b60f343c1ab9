"""State blob converters."""

from adapters.blobs.mapping_converter import CompoundBlob, MappingBlobConverter

__all__ = [
	"CompoundBlob",
	"MappingBlobConverter",
]
