"""pkgorder — package installation order resolver."""

__version__ = "0.1.0"
