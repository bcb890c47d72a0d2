"""
moi-identifiers - 32-byte protocol identifiers

Typed, validated identifiers for participant, asset and logic accounts, with
a small CLI for inspecting and generating them.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from moi_identifiers.core.config.models import MoiIdConfig
from moi_identifiers.core.ids import (
    Address,
    AssetID,
    Identifier,
    IdentifierError,
    LogicID,
    ParticipantID,
    parse_identifier,
)

__all__ = [
    "Address",
    "AssetID",
    "Identifier",
    "IdentifierError",
    "LogicID",
    "MoiIdConfig",
    "ParticipantID",
    "parse_identifier",
    "__version__",
]
