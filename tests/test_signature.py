import pytest

from zcap_invoke.signature import (
    build_authorization_header,
    build_signature_string,
    include_headers,
    parse_authorization_header,
)

HEADERS = {
    "host": "example.org",
    "capability-invocation": 'zcap id="urn:zcap:root:x",action="write"',
    "content-type": "application/json",
    "digest": "mh=uEiAabc",
}


def test_include_headers_order() -> None:
    assert include_headers(False) == [
        "(key-id)",
        "(created)",
        "(expires)",
        "(request-target)",
        "host",
        "capability-invocation",
    ]
    assert include_headers(True)[-2:] == ["content-type", "digest"]


def test_build_signature_string() -> None:
    plaintext = build_signature_string(
        include_headers(True),
        url="https://example.org/read/foo?x=1",
        method="POST",
        headers=HEADERS,
        created=1000,
        expires=1600,
        key_id="did:key:z6MkAbc",
    )

    assert plaintext == (
        "(key-id): did:key:z6MkAbc\n"
        "(created): 1000\n"
        "(expires): 1600\n"
        "(request-target): post /read/foo?x=1\n"
        "host: example.org\n"
        'capability-invocation: zcap id="urn:zcap:root:x",action="write"\n'
        "content-type: application/json\n"
        "digest: mh=uEiAabc"
    )


def test_build_signature_string_requires_listed_headers() -> None:
    with pytest.raises(KeyError):
        build_signature_string(
            ["host", "digest"],
            url="https://example.org/",
            method="GET",
            headers={"host": "example.org"},
            created=1,
            expires=2,
            key_id="k",
        )


def test_build_authorization_header() -> None:
    header = build_authorization_header(
        ["(key-id)", "host"],
        key_id="did:key:z6MkAbc",
        signature="c2lnbmF0dXJl",
        created=1000,
        expires=1600,
    )

    assert header == (
        'Signature keyId="did:key:z6MkAbc",algorithm="hs2019",created=1000,expires=1600,'
        'headers="(key-id) host",signature="c2lnbmF0dXJl"'
    )


def test_parse_authorization_header() -> None:
    header = build_authorization_header(
        include_headers(True),
        key_id="did:key:z6MkAbc#z6MkAbc",
        signature="YWJj+/8=",
        created=1000,
        expires=1600,
    )

    assert parse_authorization_header(header) == {
        "keyId": "did:key:z6MkAbc#z6MkAbc",
        "algorithm": "hs2019",
        "created": "1000",
        "expires": "1600",
        "headers": " ".join(include_headers(True)),
        "signature": "YWJj+/8=",
    }


def test_parse_authorization_header_rejects_other_schemes() -> None:
    with pytest.raises(ValueError):
        parse_authorization_header("Bearer abc")
