"""Shared builders for explorer responses and fake clients."""

import json
from typing import Dict, List, Optional, Union

from contract_sources.models import VerificationRecord

PROXY = "0x62ee80f068dce30ea4a275e91bb733fb17fd0ac0"
IMPLEMENTATION = "0xede8ec3dbb11055a736612e174ab7b0b41028ac0"
PLAIN = "0x83863f772f93e2a209dab0af924ca3d6764a40c4"
UNVERIFIED = "0x0000fe59823933ac763611a69c88f91d45f81888"
OTHER = "0x5287e8915445aee78e10190559d8dd21e0e9ea88"

SINGLE_SOURCE = "// SPDX-License-Identifier: MIT\npragma solidity ^0.8.0;\n\ncontract Token {}\n"


def standard_json(files: Dict[str, str]) -> str:
    return json.dumps({
        "language": "Solidity",
        "sources": {path: {"content": content} for path, content in files.items()},
        "settings": {"optimizer": {"enabled": True, "runs": 200}},
    })


def envelope(
    source: str = "",
    name: str = "",
    proxy: bool = False,
    implementation: str = "",
    compiler: str = "v0.8.19+commit.7dd6d404",
) -> dict:
    return {
        "status": "1",
        "message": "OK",
        "result": [{
            "SourceCode": source,
            "ABI": "[]" if source else "Contract source code not verified",
            "ContractName": name,
            "CompilerVersion": compiler if source else "",
            "Proxy": "1" if proxy else "0",
            "Implementation": implementation,
        }],
    }


def make_record(
    address: str,
    source: str = "",
    name: str = "",
    proxy: bool = False,
    implementation: Optional[str] = None,
) -> VerificationRecord:
    data = envelope(source, name, proxy, implementation or "")
    return VerificationRecord(
        address=address,
        raw_source_field=source,
        contract_name=name,
        is_proxy=proxy,
        implementation_address=implementation,
        compiler_version=data["result"][0]["CompilerVersion"],
        raw_response=json.dumps(data, indent=2),
    )


class FakeClient:
    """In-memory stand-in for ExplorerClient."""

    def __init__(self, responses: Dict[str, Union[VerificationRecord, Exception]]):
        self.responses = {k.lower(): v for k, v in responses.items()}
        self.calls: List[str] = []

    @property
    def request_count(self) -> int:
        return len(self.calls)

    def request(self, address: str) -> VerificationRecord:
        self.calls.append(address)
        response = self.responses[address.lower()]
        if isinstance(response, Exception):
            raise response
        return response


