"""Shared constants/logging for source decoding and proxy resolution."""

import logging

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_NAME = "Contract"
SOLIDITY_EXTENSION = "sol"
VYPER_EXTENSION = "vy"
