from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


HTTP_TO_GREET_CODE = {
    400: "GREET-400",
    404: "GREET-404",
    405: "GREET-405",
    422: "GREET-422",
    500: "GREET-500",
    503: "GREET-503",
}

CONFIG_ERROR_CODE = "GREET-CONFIG"


@dataclass(frozen=True)
class GreeterError:
    error_id: str
    error_code: str
    message: str
    retryable: bool

    def to_response(self) -> dict:
        return {
            "id": self.error_id,
            "code": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
        }


def build_error(status_code: int, message: str, *, retryable: bool = False) -> GreeterError:
    return GreeterError(
        error_id=f"err_{uuid4().hex[:12]}",
        error_code=HTTP_TO_GREET_CODE.get(status_code, "GREET-500"),
        message=message,
        retryable=retryable,
    )


class ConfigurationError(ValueError):
    """Raised when an environment setting cannot be used."""

    def __init__(self, setting: str, message: str):
        super().__init__(message)
        self.setting = setting

    def to_error(self) -> GreeterError:
        return GreeterError(
            error_id=f"err_{uuid4().hex[:12]}",
            error_code=CONFIG_ERROR_CODE,
            message=str(self),
            retryable=False,
        )
