"""Exception types raised by the contract source pipeline."""


class ContractSourcesError(Exception):
    """Base class for all pipeline errors."""


class NetworkError(ContractSourcesError):
    """Explorer lookup failed: transport error or undecodable response envelope."""

    def __init__(self, address: str, message: str):
        self.address = address
        super().__init__(f"{address}: {message}")


class ProxyResolutionFailure(ContractSourcesError):
    """Implementation lookup for a proxy failed or returned no verified source."""

    def __init__(self, address: str, implementation_address: str, message: str):
        self.address = address
        self.implementation_address = implementation_address
        super().__init__(f"{address} -> {implementation_address}: {message}")


class UnsafePathError(ContractSourcesError, ValueError):
    """A bundled source path would be written outside its output directory."""
