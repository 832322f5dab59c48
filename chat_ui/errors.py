class AdapterError(Exception):
    """The generative API answered, but not with something usable."""


class TransportError(Exception):
    """No response was received: connection refused, DNS failure, dropped socket."""


class GatewayError(Exception):
    """The auth gateway answered with an error status."""

    def __init__(self, status_code: int, kind: str, message: str):
        self.status_code = status_code
        self.kind = kind
        self.message = message
        super().__init__(f"{status_code} {kind}: {message}")
