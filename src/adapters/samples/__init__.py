"""Sample lifecycle controllers."""

from adapters.samples.factory_provider import FactorySampleProvider

__all__ = [
	"FactorySampleProvider",
]
