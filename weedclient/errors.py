"""
Error types for master and volume server operations.
"""


class WeedError(Exception):
    """Base exception for all weedclient errors."""

    def __init__(
        self,
        message: str,
        code: str = None,
        fid: str = None,
        status: int = None,
    ):
        self.message = message
        self.code = code or "WeedError"
        self.fid = fid
        self.status = status
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        context = ", ".join(
            f"{name}={value}"
            for name, value in (("fid", self.fid), ("status", self.status))
            if value is not None
        )
        return f"[{self.code}] {self.message}" + (f" ({context})" if context else "")


class MalformedHandle(WeedError, ValueError):
    """Exception raised when a file id does not match volumeId,key[_generation]."""

    def __init__(self, message: str, fid: str = None):
        super().__init__(message, code="MalformedHandle", fid=fid)


class MalformedAddress(WeedError, ValueError):
    """Exception raised when an address does not match host:port."""

    def __init__(self, message: str, address: str = None):
        self.address = address
        if address is not None:
            message = f"{message}: {address!r}"
        super().__init__(message, code="MalformedAddress")


class InvalidRequest(WeedError):
    """Exception raised when a server answers with an unexpected status."""

    def __init__(self, body: str, status: int = None, fid: str = None):
        self.body = body
        super().__init__(body, code="InvalidRequest", fid=fid, status=status)


class FileNotFound(WeedError):
    """Exception raised when a volume server has no such file."""

    def __init__(self, fid: str = None):
        super().__init__(
            "File not found on volume server", code="FileNotFound", fid=fid, status=404
        )


class NotCreated(WeedError):
    """Exception raised when an upload is not answered with 201 Created."""

    def __init__(self, body: str, status: int = None, fid: str = None):
        self.body = body
        super().__init__(body, code="NotCreated", fid=fid, status=status)


class NotAccepted(WeedError):
    """Exception raised when a delete is not answered with 202 Accepted."""

    def __init__(self, body: str, status: int = None, fid: str = None):
        self.body = body
        super().__init__(body, code="NotAccepted", fid=fid, status=status)


class TransportFailure(WeedError):
    """Exception raised for network errors and undecodable responses."""

    def __init__(self, message: str, fid: str = None):
        super().__init__(message, code="TransportFailure", fid=fid)
