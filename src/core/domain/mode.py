"""Work modes supported by am-silence.

Living in the domain layer lets both the CLI and the pipeline validate the
mode against a single source of truth.
"""

from __future__ import annotations

from enum import Enum

from core.errors import RequestValidationError


class SilenceMode(str, Enum):
    """Terminal request modes; each invocation runs exactly one."""

    CREATE = "create"
    DELETE = "delete"
    SHOW = "show"

    @classmethod
    def default(cls) -> "SilenceMode":
        return cls.SHOW

    @classmethod
    def parse(cls, value: "str | SilenceMode") -> "SilenceMode":
        """Resolve a raw mode string, failing before any network activity.

        Matching is exact: `CREATE` or ` create ` are rejected.
        """

        if isinstance(value, SilenceMode):
            return value
        try:
            return cls(value)
        except ValueError:
            raise RequestValidationError(f"Unrecognized mode parameter: {value!r}") from None

    @property
    def requires_labels(self) -> bool:
        return self is not SilenceMode.SHOW
