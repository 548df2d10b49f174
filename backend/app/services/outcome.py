"""Structured results returned by the lead services.

Services report expected failures (bad input, missing rows, rule violations)
through an ``Outcome`` instead of raising, so routers decide how to present them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

INVALID = "invalid"
NOT_FOUND = "not_found"
FORBIDDEN = "forbidden"
CONFLICT = "conflict"


@dataclass
class Outcome:
    ok: bool
    message: str = ""
    changed: bool = False
    code: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, message: str = "", **data: Any) -> "Outcome":
        return cls(ok=True, message=message, changed=True, data=data)

    @classmethod
    def noop(cls, message: str = "") -> "Outcome":
        return cls(ok=True, message=message, changed=False)

    @classmethod
    def failure(cls, code: str, message: str) -> "Outcome":
        return cls(ok=False, message=message, code=code)
