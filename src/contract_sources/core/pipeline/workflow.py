"""Per-address state machine and batch driver."""

import logging
from typing import Iterable

from ...addresses import dedupe_addresses, normalize_address
from ...models import AddressOutcome, RunReport
from .fetch import ContractPipelineFetchMixin
from .write import ContractPipelineWriteMixin

logger = logging.getLogger(__name__)


class ContractPipelineMixin(ContractPipelineFetchMixin, ContractPipelineWriteMixin):
    """
    Runs each address through
    validate -> fetch -> classify -> fetch_implementation -> write.

    Stages run once each, in order; the implementation lookup is a single
    optional step, never a loop back to fetch.
    """

    def process_address(self, address: str) -> AddressOutcome:
        """Process one address; never raises."""
        outcome = AddressOutcome(address=address)
        stage = "validate"
        try:
            address = normalize_address(address)
            outcome.address = address

            stage = "fetch"
            record = self._fetch_record(address)

            stage = "classify"
            bundle = self.parser.decode_record(record)
            outcome.bundle_kind = bundle.kind
            outcome.contract_name = record.contract_name or None

            stage = "fetch_implementation"
            resolved = self._maybe_fetch_implementation(address, record, outcome)

            stage = "write"
            base_dir = self.output_dir / address
            self._write_contract(base_dir, bundle, record, outcome)
            if resolved is not None:
                self._write_implementation(base_dir, resolved[1], outcome)
        except Exception as e:
            outcome.status = "failed"
            outcome.failed_stage = stage
            outcome.error = str(e)
            logger.error(f"❌ {address} failed during {stage}: {e}")
        return outcome

    def run(self, addresses: Iterable[str]) -> RunReport:
        """
        Process every address in order.

        A failing address is recorded in the report and the batch moves on.

        Args:
            addresses: Ordered address list (duplicates are dropped)

        Returns:
            RunReport with one outcome per processed address
        """
        queue = dedupe_addresses(addresses)
        report = RunReport(output_dir=str(self.output_dir))

        logger.info(f"\n{'='*60}")
        logger.info(f"Fetching verified sources for {len(queue)} address(es) into {self.output_dir}")
        logger.info(f"{'='*60}")

        for idx, address in enumerate(queue, 1):
            logger.info(f"\n📦 [{idx}/{len(queue)}] {address}")
            report.outcomes.append(self.process_address(address))

        report.finish()
        return report
