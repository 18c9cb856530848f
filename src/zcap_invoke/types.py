from typing import Any, TypedDict

SignedHeaders = dict[str, str]


class GeneratedKeys(TypedDict):
    public_key_base64: str
    private_key_base64: str


class CapabilityDocument(TypedDict, total=False):
    id: str
    controller: str | list[str]
    invocationTarget: str
    parentCapability: str
    allowedAction: str | list[str]
    expires: str
    proof: dict[str, Any] | list[dict[str, Any]]
