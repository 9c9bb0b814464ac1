"""NetScore - composite trustworthiness scoring for open source packages."""

__version__ = "0.1.0"
