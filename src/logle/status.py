from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Code(str, Enum):
    """
    Status codes used across the front-end.

    - OK: success
    - INVALID_ARGUMENT: bad or missing configuration / input content
    - EXTERNAL: I/O open or close failure (caller-correctable environment issue)
    - INTERNAL: mid-operation write failure or protocol misuse
    """
    OK = "OK"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    EXTERNAL = "EXTERNAL"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True)
class Status:
    code: Code = Code.OK
    message: str = ""

    OK: ClassVar["Status"]

    @property
    def ok(self) -> bool:
        return self.code == Code.OK

    def __str__(self) -> str:
        if self.ok:
            return "OK"
        return f"{self.code.value}: {self.message}"

    @classmethod
    def invalid_argument(cls, message: str) -> "Status":
        return cls(Code.INVALID_ARGUMENT, message)

    @classmethod
    def external(cls, message: str) -> "Status":
        return cls(Code.EXTERNAL, message)

    @classmethod
    def internal(cls, message: str) -> "Status":
        return cls(Code.INTERNAL, message)


Status.OK = Status()
