"""
Diagnostics collected during reconciliation.

Reconcilers never raise out of read/update; every failure becomes a
Diagnostic so the engine can report all failing sub-domains in one pass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str
    subdomain: Optional[str] = None

    def __str__(self) -> str:
        scope = f"[{self.subdomain}] " if self.subdomain else ""
        return f"{scope}{self.summary}: {self.detail}"


class Diagnostics(list):
    """List of Diagnostic with helpers mirroring the framework's diagnostics"""

    def add_error(self, summary: str, detail: str, subdomain: Optional[str] = None) -> None:
        self.append(Diagnostic(Severity.ERROR, summary, detail, subdomain))

    def add_warning(self, summary: str, detail: str, subdomain: Optional[str] = None) -> None:
        self.append(Diagnostic(Severity.WARNING, summary, detail, subdomain))

    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self)

    def errors(self) -> List[Diagnostic]:
        return [d for d in self if d.severity is Severity.ERROR]

    def for_subdomain(self, subdomain: str) -> List[Diagnostic]:
        return [d for d in self if d.subdomain == subdomain]
