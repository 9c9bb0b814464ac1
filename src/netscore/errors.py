"""Exception hierarchy shared by clients, resolver and calculators."""


class NetScoreError(Exception):
    """Base class for all netscore errors."""


class ResolutionError(NetScoreError):
    """A registry package could not be mapped to a source repository."""


class TransportError(NetScoreError):
    """Network, HTTP status or GraphQL-level failure on a client call."""


class DataShapeError(NetScoreError):
    """A response was missing fields the caller depends on."""


class FilesystemError(NetScoreError):
    """Cloning or reading the scratch workspace failed."""
