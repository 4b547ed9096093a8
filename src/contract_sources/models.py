"""Structured models shared by the fetch, decode and write stages."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

OutcomeStatus = Literal["written", "unverified", "failed"]
Stage = Literal["validate", "fetch", "classify", "fetch_implementation", "write"]
BundleKind = Literal["unverified", "single", "multi"]


class VerificationRecord(BaseModel):
    """
    Result of one getsourcecode lookup.

    Created once per lookup and never mutated. ``raw_response`` is the exact
    response body so it can be persisted verbatim.
    """
    model_config = ConfigDict(frozen=True)

    address: str
    raw_source_field: str = ""
    contract_name: str = ""
    is_proxy: bool = False
    implementation_address: Optional[str] = None
    language: str = ""
    compiler_version: str = ""
    raw_response: str = ""


@dataclass(frozen=True)
class Unverified:
    """No verified source is published for the address."""

    kind: BundleKind = field(default="unverified", init=False)


@dataclass(frozen=True)
class SingleFile:
    """Flattened source published as one file."""

    name: str
    content: str
    kind: BundleKind = field(default="single", init=False)


@dataclass(frozen=True)
class MultiFile:
    """Compiler-input bundle: relative path -> file content."""

    files: Dict[str, str]
    kind: BundleKind = field(default="multi", init=False)


SourceBundle = Union[Unverified, SingleFile, MultiFile]


class AddressOutcome(BaseModel):
    """Per-address row of the run report."""
    model_config = ConfigDict(extra="forbid")

    address: str
    status: OutcomeStatus = "failed"
    failed_stage: Optional[Stage] = None
    bundle_kind: Optional[BundleKind] = None
    contract_name: Optional[str] = None
    files_written: int = 0
    implementation_address: Optional[str] = None
    implementation_status: Optional[OutcomeStatus] = None
    implementation_error: Optional[str] = None
    error: Optional[str] = None


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


class RunReport(BaseModel):
    """Ordered outcomes of one batch run."""

    started_at: str = Field(default_factory=_utc_now_iso)
    finished_at: Optional[str] = None
    output_dir: str = ""
    outcomes: List[AddressOutcome] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    def finish(self) -> None:
        self.finished_at = _utc_now_iso()
