"""dddscaffold: generate layered-architecture Go projects and bounded contexts."""

__version__ = "0.1.0"
