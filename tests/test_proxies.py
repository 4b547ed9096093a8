import pytest

from contract_sources.errors import NetworkError, ProxyResolutionFailure
from contract_sources.extraction.source_code import ProxyResolver

from .helpers import IMPLEMENTATION, OTHER, PLAIN, PROXY, SINGLE_SOURCE, FakeClient, make_record


def test_non_proxy_issues_no_lookup():
    client = FakeClient({})
    resolver = ProxyResolver(client)
    assert resolver.resolve(PLAIN, make_record(PLAIN, SINGLE_SOURCE, "Token")) is None
    assert client.calls == []


def test_proxy_resolves_one_hop():
    implementation_record = make_record(IMPLEMENTATION, SINGLE_SOURCE, "Logic")
    client = FakeClient({IMPLEMENTATION: implementation_record})
    resolver = ProxyResolver(client)

    resolved = resolver.resolve(PROXY, make_record(PROXY, SINGLE_SOURCE, "Proxy", True, IMPLEMENTATION))

    assert resolved == (IMPLEMENTATION, implementation_record)
    assert client.calls == [IMPLEMENTATION]


def test_implementation_proxy_flag_is_not_followed():
    client = FakeClient({
        IMPLEMENTATION: make_record(IMPLEMENTATION, SINGLE_SOURCE, "Logic", True, OTHER),
        OTHER: make_record(OTHER, SINGLE_SOURCE, "Deeper"),
    })
    resolver = ProxyResolver(client)

    address, record = resolver.resolve(PROXY, make_record(PROXY, SINGLE_SOURCE, "Proxy", True, IMPLEMENTATION))

    assert address == IMPLEMENTATION
    assert record.is_proxy is True
    assert client.calls == [IMPLEMENTATION]


@pytest.mark.parametrize("implementation", [None, "", PROXY, PROXY.upper().replace("0X", "0x")])
def test_missing_or_self_implementation_is_not_followed(implementation):
    client = FakeClient({})
    resolver = ProxyResolver(client)
    record = make_record(PROXY, SINGLE_SOURCE, "Proxy", True, implementation)
    assert resolver.resolve(PROXY, record) is None
    assert client.calls == []


def test_failed_lookup_raises_resolution_failure():
    client = FakeClient({IMPLEMENTATION: NetworkError(IMPLEMENTATION, "timeout")})
    resolver = ProxyResolver(client)

    with pytest.raises(ProxyResolutionFailure) as exc_info:
        resolver.resolve(PROXY, make_record(PROXY, SINGLE_SOURCE, "Proxy", True, IMPLEMENTATION))

    assert exc_info.value.address == PROXY
    assert exc_info.value.implementation_address == IMPLEMENTATION
    assert isinstance(exc_info.value.__cause__, NetworkError)


def test_self_reference_without_prefix_is_not_followed():
    client = FakeClient({})
    resolver = ProxyResolver(client)
    record = make_record(PROXY, SINGLE_SOURCE, "Proxy", True, PROXY[2:])
    assert resolver.resolve(PROXY, record) is None
    assert client.calls == []
