from .errors import RestLinkError, ConfigurationError, BindingError, HTTPStatusError
from .datamodel import RequestDescriptor, TransportResponse, ResponseEnvelope
from .normalizer import normalize, wrap
from .builder import RequestBuilder
from .registry import OperationRegistry
from .resource import RestResource
from .transport import TransportABC, AiohttpTransport
from .template import OperationTemplate, OperationDocument, CompiledOperation, OperationFunction, compile_template
from .svc_rest import RestService

__all__ = [
	"RestLinkError",
	"ConfigurationError",
	"BindingError",
	"HTTPStatusError",
	"RequestDescriptor",
	"TransportResponse",
	"ResponseEnvelope",
	"normalize",
	"wrap",
	"RequestBuilder",
	"OperationRegistry",
	"RestResource",
	"TransportABC",
	"AiohttpTransport",
	"OperationTemplate",
	"OperationDocument",
	"CompiledOperation",
	"OperationFunction",
	"compile_template",
	"RestService",
]
