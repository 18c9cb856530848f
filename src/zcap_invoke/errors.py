from enum import Enum


class InvocationErrorKind(str, Enum):
    INVALID_METHOD = "InvalidMethod"
    INVALID_CAPABILITY_ACTION = "InvalidCapabilityAction"
    INVALID_INVOCATION_SIGNER = "InvalidInvocationSigner"
    INVALID_CAPABILITY = "InvalidCapability"
    INVALID_URL = "InvalidURL"
    INVALID_HEADERS = "InvalidHeaders"
    INVALID_TIMESTAMP = "InvalidTimestamp"
    SIGNING_FAILURE = "SigningFailure"


class CapabilityInvocationError(Exception):
    kind: InvocationErrorKind

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvocationValidationError(CapabilityInvocationError, TypeError):
    """Raised before any signing work starts; never retried."""


class InvalidMethod(InvocationValidationError):
    kind = InvocationErrorKind.INVALID_METHOD


class InvalidCapabilityAction(InvocationValidationError):
    kind = InvocationErrorKind.INVALID_CAPABILITY_ACTION


class InvalidInvocationSigner(InvocationValidationError):
    kind = InvocationErrorKind.INVALID_INVOCATION_SIGNER


class InvalidCapability(InvocationValidationError):
    kind = InvocationErrorKind.INVALID_CAPABILITY


class InvalidURL(InvocationValidationError):
    kind = InvocationErrorKind.INVALID_URL


class InvalidHeaders(InvocationValidationError):
    kind = InvocationErrorKind.INVALID_HEADERS


class InvalidTimestamp(InvocationValidationError):
    kind = InvocationErrorKind.INVALID_TIMESTAMP


class SigningFailure(CapabilityInvocationError):
    kind = InvocationErrorKind.SIGNING_FAILURE

    def __init__(
        self,
        *,
        url: str,
        method: str,
        action: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            f'Error signing capability invocation (method: "{method}", '
            f'url: "{url}", action: "{action}")',
            cause=cause,
        )
        self.url = url
        self.method = method
        self.action = action
