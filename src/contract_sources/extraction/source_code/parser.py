"""Classification and decoding of the explorer ``SourceCode`` field."""

import json
import re
from typing import Any, Dict, Optional

from ...models import MultiFile, SingleFile, SourceBundle, Unverified, VerificationRecord
from .shared import DEFAULT_CONTRACT_NAME, SOLIDITY_EXTENSION, VYPER_EXTENSION, logger

VYPER_PATTERNS = [
    r'^\s*#\s*@version',
    r'@external',
    r'@internal',
    r'def\s+__init__\(',
    r':\s*constant\(',
]


def _load_json(text: str) -> Any:
    """json.loads that reports failure as None instead of raising."""
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


class SourcePayloadParser:
    """
    Turns a raw ``SourceCode`` field into a SourceBundle.

    Explorers return one of:
    - an empty string for unverified contracts
    - the flattened source as plain text
    - a standard-JSON compiler input, sometimes wrapped in an extra pair of
      braces (``{{ ... }}``) or encoded twice as a JSON string

    Decoding is best-effort and never raises; anything that does not parse
    into a clean ``sources`` mapping is kept as literal single-file text.
    """

    def decode(self, raw_field: Optional[str], contract_name: str = "", language: str = "") -> SourceBundle:
        """
        Decode a raw SourceCode field.

        Args:
            raw_field: SourceCode exactly as returned by the explorer
            contract_name: Reported ContractName, used to name single files
            language: Reported language or compiler version (picks .sol/.vy)

        Returns:
            Unverified, SingleFile or MultiFile
        """
        if not raw_field or not raw_field.strip():
            return Unverified()

        text = raw_field.strip()
        if text.startswith('{{') and text.endswith('}}'):
            text = text[1:-1]

        parsed = self._parse_payload(text)
        files = self._extract_sources(parsed)
        if files is not None:
            logger.debug(f"Decoded multi-file bundle with {len(files)} files")
            return MultiFile(files=files)

        if text.startswith('{'):
            logger.debug("SourceCode looks like JSON but has no usable sources mapping, keeping it as one file")

        name = f"{contract_name.strip() or DEFAULT_CONTRACT_NAME}.{self._extension(raw_field, language)}"
        return SingleFile(name=name, content=raw_field)

    def decode_record(self, record: VerificationRecord) -> SourceBundle:
        """Decode the SourceCode field of a lookup result."""
        language = record.language or record.compiler_version
        return self.decode(record.raw_source_field, record.contract_name, language)

    def encode(self, bundle: MultiFile) -> str:
        """
        Serialize a multi-file bundle as standard-JSON compiler input.

        Raises:
            ValueError: If the bundle is empty or has a blank path, which
                decode would not read back as the same bundle
        """
        if not bundle.files:
            raise ValueError("Cannot encode an empty multi-file bundle")
        blank = [path for path in bundle.files if not path.strip()]
        if blank:
            raise ValueError(f"Cannot encode blank source paths: {blank!r}")
        sources = {path: {"content": content} for path, content in bundle.files.items()}
        return json.dumps({"sources": sources}, indent=2)

    def _parse_payload(self, text: str) -> Any:
        parsed = _load_json(text)
        if parsed is None:
            # Escaped JSON without its surrounding quotes, e.g. {\"sources\": ...}
            parsed = _load_json(f'"{text}"')
        if isinstance(parsed, str):
            parsed = _load_json(parsed)
        return parsed

    def _extract_sources(self, parsed: Any) -> Optional[Dict[str, str]]:
        """Return path -> content when parsed exposes a clean sources mapping."""
        if not isinstance(parsed, dict):
            return None

        # Legacy multi-file submissions put the path mapping at the top level
        mapping = parsed.get('sources') if 'sources' in parsed else parsed
        if not isinstance(mapping, dict) or not mapping:
            return None

        files = {}
        for path, entry in mapping.items():
            if not isinstance(path, str) or not path.strip():
                return None
            if not isinstance(entry, dict) or not isinstance(entry.get('content'), str):
                return None
            files[path] = entry['content']
        return files

    def _extension(self, source: str, language: str) -> str:
        if 'vyper' in (language or '').lower():
            return VYPER_EXTENSION
        if language:
            return SOLIDITY_EXTENSION
        for pattern in VYPER_PATTERNS:
            if re.search(pattern, source, re.MULTILINE):
                return VYPER_EXTENSION
        return SOLIDITY_EXTENSION
