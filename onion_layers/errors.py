"""
Error Taxonomy
==============

Bounded Context: Precondition failures of the onion structure.

All errors are local and deterministic: retrying with the same input
cannot change the outcome, so nothing in the package retries.

- Build failures abort the whole build().
- Query failures abort only that query; the Onion stays usable.
"""


class OnionError(Exception):
    """Base class for every error raised by onion_layers."""
    pass


class InsufficientPointsError(OnionError, ValueError):
    """Raised when build() receives an empty point set."""
    pass


class DegenerateLayerError(OnionError):
    """
    Raised when a boundary walk reaches a layer with fewer than 3 vertices
    and the query policy is "raise".
    """

    def __init__(self, layer_index: int, size: int):
        self.layer_index = layer_index
        self.size = size
        super().__init__(
            f"Layer {layer_index} has {size} vertices; "
            f"a boundary walk needs at least 3"
        )


class DegenerateQueryLineError(OnionError, ValueError):
    """Raised when a query line has identical endpoints."""
    pass


class NumericDomainError(OnionError, ArithmeticError):
    """Raised when an angle computation sees NaN or a zero-length direction."""
    pass
