"""Ports consumed by the capability resolver.

- Structural contracts (Protocol) implemented by the adapters.
- The core depends on these abstractions, never on concrete collaborators.
"""

from core.interfaces.enumerator import CandidateEnumerator
from core.interfaces.host import HostEnvironment
from core.interfaces.sample_provider import SampleProvider
from core.interfaces.state_blob import StateBlobConverter

__all__ = [
    "CandidateEnumerator",
    "HostEnvironment",
    "SampleProvider",
    "StateBlobConverter",
]
