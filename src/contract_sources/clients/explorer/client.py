"""Rate-limited getsourcecode client for Etherscan-compatible explorers."""

import logging
import time
from typing import Any, Dict, Optional

import requests

from ...errors import NetworkError
from ...models import VerificationRecord
from .constants import (
    DEFAULT_API_URL,
    DEFAULT_CHAIN_ID,
    DEFAULT_REQUEST_TIMEOUT_S,
    MIN_REQUEST_DELAY_S,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


class ExplorerClient:
    """
    Issues one verification lookup per call.

    Every request, successful or not, is followed by a fixed sleep before
    control returns to the caller, so sequential use never exceeds
    ``1 / delay_s`` requests per second. Failed requests are not retried.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        chain_id: Optional[int] = DEFAULT_CHAIN_ID,
        delay_s: float = MIN_REQUEST_DELAY_S,
        timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S,
    ):
        """
        Initialize the client.

        Args:
            api_key: Explorer API key
            api_url: getsourcecode endpoint (Etherscan v2 by default)
            chain_id: Chain ID sent as ``chainid``; None omits the parameter
            delay_s: Post-request delay, never lower than 200ms
            timeout_s: Per-request timeout
        """
        if delay_s < MIN_REQUEST_DELAY_S:
            logger.warning(f"Request delay {delay_s}s is below the {MIN_REQUEST_DELAY_S}s floor, using the floor")
        self.api_key = api_key
        self.api_url = api_url
        self.chain_id = chain_id
        self.delay_s = max(delay_s, MIN_REQUEST_DELAY_S)
        self.timeout_s = timeout_s
        self.request_count = 0

    def request(self, address: str) -> VerificationRecord:
        """
        Look up verified source for an address.

        Args:
            address: Contract address

        Returns:
            VerificationRecord for the address

        Raises:
            NetworkError: On transport failure, HTTP error status, or an
                envelope that cannot be decoded (including rate-limit replies)
        """
        self.request_count += 1
        logger.info(f"Requesting source code for {address}")
        try:
            return self._fetch(address)
        finally:
            time.sleep(self.delay_s)

    def _build_params(self, address: str) -> Dict[str, Any]:
        params = {
            'module': 'contract',
            'action': 'getsourcecode',
            'address': address,
            'apikey': self.api_key,
        }
        if self.chain_id is not None:
            params['chainid'] = self.chain_id
        return params

    def _fetch(self, address: str) -> VerificationRecord:
        try:
            response = requests.get(
                self.api_url,
                params=self._build_params(address),
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                timeout=self.timeout_s,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(address, f"request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError(address, f"response is not JSON: {e}") from e

        return self._parse_envelope(address, data, response.text)

    def _parse_envelope(self, address: str, data: Any, raw_text: str) -> VerificationRecord:
        """Validate the getsourcecode envelope and build the record."""
        if not isinstance(data, dict):
            raise NetworkError(address, f"unexpected response shape: {type(data).__name__}")

        status = str(data.get('status') or '').strip()
        message = str(data.get('message') or '').strip()
        result = data.get('result')

        # status=0 covers rate limits, bad keys and invalid addresses
        if status == '0' or message.upper() == 'NOTOK':
            raise NetworkError(address, f"explorer error: {message or 'NOTOK'} ({result})")

        if not isinstance(result, list) or not result or not isinstance(result[0], dict):
            raise NetworkError(address, f"unexpected result field: {result!r}")

        entry = result[0]
        implementation = str(entry.get('Implementation') or '').strip()
        return VerificationRecord(
            address=address,
            raw_source_field=str(entry.get('SourceCode') or ''),
            contract_name=str(entry.get('ContractName') or ''),
            is_proxy=str(entry.get('Proxy') or '0').strip() == '1',
            implementation_address=implementation or None,
            language=str(entry.get('Language') or ''),
            compiler_version=str(entry.get('CompilerVersion') or ''),
            raw_response=raw_text,
        )
