"""One-hop proxy -> implementation resolution."""

from typing import Optional, Tuple

from ...addresses import same_address
from ...errors import NetworkError, ProxyResolutionFailure
from ...models import VerificationRecord
from .shared import logger


class ProxyResolver:
    """Follows an explorer-reported proxy link exactly once."""

    def __init__(self, client):
        """
        Args:
            client: Object exposing ``request(address) -> VerificationRecord``
        """
        self.client = client

    def needs_resolution(self, address: str, record: VerificationRecord) -> bool:
        """True when the record points at a distinct implementation contract."""
        if not record.is_proxy:
            return False
        if not record.implementation_address:
            logger.warning(f"Proxy detected at {address}, but the explorer reported no implementation address")
            return False
        if same_address(record.implementation_address, address):
            logger.warning(f"Proxy at {address} reports itself as implementation, not following")
            return False
        return True

    def resolve(self, address: str, record: VerificationRecord) -> Optional[Tuple[str, VerificationRecord]]:
        """
        Fetch the implementation record for a proxy.

        The implementation's own proxy flag is never inspected, so an address
        costs at most two lookups.

        Args:
            address: Address of the outer contract
            record: Lookup result for the outer contract

        Returns:
            (implementation_address, implementation_record) or None when no
            second lookup is needed

        Raises:
            ProxyResolutionFailure: If the implementation lookup fails
        """
        if not self.needs_resolution(address, record):
            return None

        implementation = record.implementation_address
        logger.info(f"Proxy detected at {address}, implementation at {implementation}")
        try:
            implementation_record = self.client.request(implementation)
        except NetworkError as e:
            raise ProxyResolutionFailure(address, implementation, str(e)) from e

        if implementation_record.is_proxy:
            logger.info(f"  Implementation {implementation} is flagged as a proxy too, not following further")
        return implementation, implementation_record
