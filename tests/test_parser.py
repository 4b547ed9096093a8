import json

import pytest

from contract_sources.extraction.source_code import SourcePayloadParser
from contract_sources.models import MultiFile, SingleFile, Unverified

from .helpers import PLAIN, SINGLE_SOURCE, make_record, standard_json

FILES = {
    "contracts/Vault.sol": "pragma solidity ^0.8.0;\nimport \"@openzeppelin/contracts/token/ERC20/IERC20.sol\";\ncontract Vault {}\n",
    "@openzeppelin/contracts/token/ERC20/IERC20.sol": "pragma solidity ^0.8.0;\ninterface IERC20 {}\n",
}


@pytest.fixture
def parser():
    return SourcePayloadParser()


@pytest.mark.parametrize("raw", ["", "   ", "\n\t", None])
def test_empty_field_is_unverified(parser, raw):
    assert parser.decode(raw, "Token") == Unverified()


def test_plain_source_is_single_file(parser):
    bundle = parser.decode(SINGLE_SOURCE, "Token", "v0.8.19+commit.7dd6d404")
    assert bundle == SingleFile(name="Token.sol", content=SINGLE_SOURCE)


def test_single_file_defaults_to_contract_name(parser):
    bundle = parser.decode(SINGLE_SOURCE)
    assert isinstance(bundle, SingleFile)
    assert bundle.name == "Contract.sol"


def test_vyper_source_gets_vy_extension(parser):
    source = "# @version 0.3.7\n@external\ndef foo() -> uint256:\n    return 1\n"
    assert parser.decode(source, "Vault", "vyper:0.3.7").name == "Vault.vy"
    assert parser.decode(source, "Vault").name == "Vault.vy"


def test_standard_json_is_multi_file(parser):
    bundle = parser.decode(standard_json(FILES), "Vault")
    assert bundle == MultiFile(files=FILES)


def test_double_brace_wrapping_decodes_like_unwrapped(parser):
    payload = standard_json(FILES)
    wrapped = "{" + payload + "}"
    assert wrapped.startswith("{{")
    assert parser.decode(wrapped, "Vault") == parser.decode(payload, "Vault")
    assert isinstance(parser.decode(wrapped, "Vault"), MultiFile)


def test_double_encoded_payload(parser):
    double_encoded = json.dumps(standard_json(FILES))
    assert parser.decode(double_encoded, "Vault") == MultiFile(files=FILES)


def test_escaped_payload_without_outer_quotes(parser):
    escaped = json.dumps(standard_json(FILES))[1:-1]
    assert parser.decode(escaped, "Vault") == MultiFile(files=FILES)


def test_legacy_top_level_mapping(parser):
    legacy = json.dumps({path: {"content": content} for path, content in FILES.items()})
    assert parser.decode(legacy) == MultiFile(files=FILES)


def test_encode_then_decode_is_stable(parser):
    bundle = MultiFile(files=FILES)
    assert parser.decode(parser.encode(bundle)) == bundle
    assert parser.decode("{" + parser.encode(bundle) + "}") == bundle


@pytest.mark.parametrize(
    "raw",
    [
        "{{ not json at all }}",
        '{"sources": {"A.sol": {"content": 1}}}',
        '{"sources": {}}',
        '{"sources": ["A.sol"]}',
        '{"language": "Solidity"}',
        "[1, 2, 3]",
        "[" * 100000,
    ],
)
def test_malformed_payload_degrades_to_raw_text(parser, raw):
    bundle = parser.decode(raw, "Broken")
    assert bundle == SingleFile(name="Broken.sol", content=raw)


def test_single_file_keeps_original_field(parser):
    raw = "  \n" + SINGLE_SOURCE
    assert parser.decode(raw, "Token").content == raw


def test_decode_record_uses_reported_name(parser):
    record = make_record(PLAIN, SINGLE_SOURCE, "Token")
    assert parser.decode_record(record) == SingleFile(name="Token.sol", content=SINGLE_SOURCE)


@pytest.mark.parametrize("files", [{}, {"": "x"}, {"   ": "x", "A.sol": "y"}])
def test_encode_rejects_bundles_that_cannot_round_trip(parser, files):
    with pytest.raises(ValueError):
        parser.encode(MultiFile(files=files))
