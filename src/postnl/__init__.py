"""Cliente Python de la API de PostNL (REST y SOAP legacy)."""

from postnl.client import PostNL
from postnl.core.domain.api_mode import ApiMode

__all__ = ["ApiMode", "PostNL"]
__version__ = "0.1.0"
