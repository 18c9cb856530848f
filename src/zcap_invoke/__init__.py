from zcap_invoke.canonical import canonicalize
from zcap_invoke.capability import (
    ZCAP_ROOT_PREFIX,
    DelegatedCapability,
    RootCapability,
    build_invocation_header,
    classify_capability,
    decode_capability,
    encode_capability,
    root_capability_id,
)
from zcap_invoke.client import AsyncZcapClient, ZcapClient
from zcap_invoke.digest import create_digest_header
from zcap_invoke.errors import (
    CapabilityInvocationError,
    InvalidCapability,
    InvalidCapabilityAction,
    InvalidHeaders,
    InvalidInvocationSigner,
    InvalidMethod,
    InvalidTimestamp,
    InvalidURL,
    InvocationErrorKind,
    InvocationValidationError,
    SigningFailure,
)
from zcap_invoke.invocation import sign_capability_invocation
from zcap_invoke.signature import (
    build_authorization_header,
    build_signature_string,
    parse_authorization_header,
)
from zcap_invoke.signer import Ed25519InvocationSigner, InvocationSigner, generate_keys

__all__ = [
    "canonicalize",
    "sign_capability_invocation",
    "ZCAP_ROOT_PREFIX",
    "RootCapability",
    "DelegatedCapability",
    "root_capability_id",
    "classify_capability",
    "encode_capability",
    "decode_capability",
    "build_invocation_header",
    "create_digest_header",
    "build_signature_string",
    "build_authorization_header",
    "parse_authorization_header",
    "InvocationSigner",
    "Ed25519InvocationSigner",
    "generate_keys",
    "ZcapClient",
    "AsyncZcapClient",
    "InvocationErrorKind",
    "CapabilityInvocationError",
    "InvocationValidationError",
    "InvalidMethod",
    "InvalidCapabilityAction",
    "InvalidInvocationSigner",
    "InvalidCapability",
    "InvalidURL",
    "InvalidHeaders",
    "InvalidTimestamp",
    "SigningFailure",
]
