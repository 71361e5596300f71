"""Training pipelines for SynapseNet."""

from . import pipelines

__all__ = ["pipelines"]
