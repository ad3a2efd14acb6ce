from typing import Optional


class APIError(Exception):
    """An upstream call that failed, raised when its fetch result is unwrapped."""

    def __init__(self, source: str, code: str, path: Optional[str] = None, details: Optional[str] = None):
        super().__init__(f"{source} request failed: code={code} path={path or '-'}")
        self.source = source
        self.code = code
        self.path = path
        self.details = details

    @property
    def status_code(self) -> Optional[int]:
        return int(self.code) if self.code.isdigit() else None

    def to_dict(self) -> dict:
        payload = {"source": self.source, "code": self.code}
        if self.path:
            payload["path"] = self.path
        if self.details:
            payload["details"] = self.details
        return payload
