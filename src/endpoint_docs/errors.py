"""Exception hierarchy for endpoint-docs.

A request that matches no routes is not an error: the selector and the
handler report it by returning ``None``.
"""


class DocsError(Exception):
    """Base class for all endpoint-docs errors."""


class ConfigurationError(DocsError):
    """Invalid documentation settings, raised before anything is served."""


class MalformedDescriptorError(DocsError):
    """A schema descriptor does not follow the expected structure."""


class RoutingTableError(DocsError):
    """A routing table file could not be read or parsed."""
