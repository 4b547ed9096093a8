"""Pipeline stage: primary lookup and one-hop implementation lookup."""

import logging
from typing import Optional, Tuple

from ...errors import ProxyResolutionFailure
from ...models import AddressOutcome, VerificationRecord

logger = logging.getLogger(__name__)


class ContractPipelineFetchMixin:
    def _fetch_record(self, address: str) -> VerificationRecord:
        """Primary lookup; NetworkError propagates to the workflow."""
        record = self.client.request(address)
        logger.info(f"  Lookup OK: name={record.contract_name or '-'} proxy={record.is_proxy}")
        return record

    def _maybe_fetch_implementation(
        self,
        address: str,
        record: VerificationRecord,
        outcome: AddressOutcome,
    ) -> Optional[Tuple[str, VerificationRecord]]:
        """
        Issue the single implementation lookup when the record is a proxy.

        A failed lookup is recorded on the outcome and does not stop the
        outer contract from being written.
        """
        if record.is_proxy and not record.implementation_address:
            outcome.implementation_status = "failed"
            outcome.implementation_error = "proxy without implementation address"

        try:
            resolved = self.resolver.resolve(address, record)
        except ProxyResolutionFailure as e:
            logger.warning(f"⚠️  Could not fetch implementation for {address}: {e}")
            outcome.implementation_address = e.implementation_address
            outcome.implementation_status = "failed"
            outcome.implementation_error = str(e)
            return None
        except Exception as e:
            implementation = record.implementation_address
            logger.warning(f"⚠️  Unexpected error fetching implementation {implementation} for {address}: {e}")
            outcome.implementation_address = implementation
            outcome.implementation_status = "failed"
            outcome.implementation_error = str(ProxyResolutionFailure(address, implementation, str(e)))
            return None

        if resolved is not None:
            outcome.implementation_address = resolved[0]
        return resolved
