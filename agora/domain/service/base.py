"""Base service class for domain services."""


class Service:
    """Marker base for the forum's domain services.

    Services own the rules that span aggregates (ledger rows and the
    counters they feed, polls and their posts) and open the atomic blocks
    those rules need.
    """
