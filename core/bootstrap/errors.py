"""
Khata Bootstrap — System Errors
=================================
If a ledger invariant is violated at startup, the ledger must
refuse to open.
"""


class SystemBootstrapError(Exception):
    """
    Raised when a critical invariant is violated while wiring the ledger.

    If this exception is raised:
    - The KhataBook is not returned
    - No fallback
    - Error message names the invariant
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"KHATA BOOTSTRAP FAILURE: {invariant}: {detail}"
        )
