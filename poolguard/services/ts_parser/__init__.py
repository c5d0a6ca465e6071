from .call_site_builder import CallSiteBuilder
from .semantic_model import SemanticModel

__all__ = ["CallSiteBuilder", "SemanticModel"]
