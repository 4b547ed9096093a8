"""Download verified contract sources and rebuild their file trees."""

from .clients import ExplorerClient
from .core import ContractSourcePipeline
from .errors import ContractSourcesError, NetworkError, ProxyResolutionFailure, UnsafePathError
from .extraction import ProxyResolver, SourcePayloadParser
from .models import (
    AddressOutcome,
    MultiFile,
    RunReport,
    SingleFile,
    SourceBundle,
    Unverified,
    VerificationRecord,
)
from .storage import FileTreeWriter

__all__ = [
    "AddressOutcome",
    "ContractSourcePipeline",
    "ContractSourcesError",
    "ExplorerClient",
    "FileTreeWriter",
    "MultiFile",
    "NetworkError",
    "ProxyResolutionFailure",
    "ProxyResolver",
    "RunReport",
    "SingleFile",
    "SourceBundle",
    "SourcePayloadParser",
    "Unverified",
    "UnsafePathError",
    "VerificationRecord",
]
