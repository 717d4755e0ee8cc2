from .transport_abc import TransportABC
from .client import AiohttpTransport

__all__ = [
	"TransportABC",
	"AiohttpTransport",
]
