from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from poolguard.models.call_site import CallSite
from poolguard.models.diagnostic import Diagnostic


@runtime_checkable
class AnalysisContext(Protocol):
    """What a rule sees of the host while analyzing one call site."""

    @property
    def call_site(self) -> CallSite:
        """The call expression under analysis."""
        ...

    def prior_diagnostics(self) -> Sequence[Diagnostic]:
        """Diagnostics already produced for the containing file."""
        ...

    def is_target_constructor(self, call_site: CallSite) -> bool:
        """Whether the call constructs one of the checked client types."""
        ...

    def report_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Hand a diagnostic to the reporting channel."""
        ...
