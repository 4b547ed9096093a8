"""Address list loading and normalization."""

import json
import logging
from pathlib import Path
from typing import Iterable, List

from eth_utils import is_address, to_normalized_address

logger = logging.getLogger(__name__)


def normalize_address(address: str) -> str:
    """
    Normalize an address to lowercase 0x-prefixed hex.

    Args:
        address: Address in any case (checksummed or not)

    Returns:
        Lowercase address

    Raises:
        ValueError: If the string is not a valid address
    """
    candidate = (address or "").strip()
    # Checksum validation only recognizes prefixed addresses
    if len(candidate) == 40 and not candidate.lower().startswith("0x"):
        candidate = "0x" + candidate
    if not is_address(candidate):
        raise ValueError(f"Invalid address: {address!r}")
    return to_normalized_address(candidate)


def address_key(address: str) -> str:
    """Identity key: the normalized address, or the trimmed lowercase text if invalid."""
    try:
        return normalize_address(address)
    except ValueError:
        return (address or "").strip().lower()


def same_address(a: str, b: str) -> bool:
    """Address identity ignoring case and the 0x prefix."""
    return address_key(a) == address_key(b)


def dedupe_addresses(addresses: Iterable[str]) -> List[str]:
    """Drop duplicates by address identity, keeping first occurrence and order."""
    seen = set()
    unique = []
    for address in addresses:
        address = address.strip()
        if not address:
            continue
        key = address_key(address)
        if key in seen:
            logger.info(f"Skipping duplicate address {address}")
            continue
        seen.add(key)
        unique.append(address)
    return unique


def load_addresses_file(path: Path) -> List[str]:
    """
    Load an ordered address list from a file.

    Supports a JSON array (of strings or objects with an ``address`` key) or
    plain text with one address per line; blank lines and ``#`` comments are
    ignored.
    """
    text = Path(path).read_text(encoding="utf-8")

    if text.lstrip().startswith("["):
        data = json.loads(text)
        addresses = []
        for idx, item in enumerate(data):
            if isinstance(item, dict):
                item = item.get("address")
            if not isinstance(item, str):
                raise ValueError(f"Expected an address at index {idx} of {path}")
            addresses.append(item)
        return addresses

    addresses = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            addresses.append(line)
    return addresses
