"""Pipeline stage: decode and write contract and implementation trees."""

import logging
from pathlib import Path

from ...errors import ProxyResolutionFailure, UnsafePathError
from ...models import AddressOutcome, SourceBundle, Unverified, VerificationRecord
from ...storage import IMPLEMENTATION_DIRNAME

logger = logging.getLogger(__name__)


class ContractPipelineWriteMixin:
    def _write_contract(self, base_dir: Path, bundle: SourceBundle, record: VerificationRecord, outcome: AddressOutcome) -> None:
        """Write the outer contract tree; errors propagate to the workflow."""
        written = self.writer.write(base_dir, bundle, record.raw_response)
        outcome.files_written = len(written) - 1

        if isinstance(bundle, Unverified):
            outcome.status = "unverified"
            logger.info(f"Contract at {record.address} is not verified, saved raw response only")
        else:
            outcome.status = "written"
            logger.info(f"✓ Wrote {bundle.kind}-file contract for {record.address} ({outcome.files_written} file(s))")

    def _write_implementation(self, base_dir: Path, implementation_record: VerificationRecord, outcome: AddressOutcome) -> None:
        """
        Write the implementation subtree under ``base_dir/implementation``.

        Failures here are scoped to the implementation and recorded on the
        outcome; the outer tree is already on disk.
        """
        implementation = implementation_record.address
        bundle = self.parser.decode_record(implementation_record)
        try:
            self.writer.write(base_dir / IMPLEMENTATION_DIRNAME, bundle, implementation_record.raw_response)
        except (UnsafePathError, OSError) as e:
            logger.error(f"Failed to write implementation {implementation} for {outcome.address}: {e}")
            outcome.implementation_status = "failed"
            outcome.implementation_error = str(e)
            return

        if isinstance(bundle, Unverified):
            failure = ProxyResolutionFailure(outcome.address, implementation, "implementation is not verified")
            logger.warning(f"⚠️  {failure}")
            outcome.implementation_status = "unverified"
            outcome.implementation_error = str(failure)
        else:
            outcome.implementation_status = "written"
            logger.info(f"✓ Wrote {bundle.kind}-file implementation contract for {implementation}")
