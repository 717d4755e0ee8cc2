import logging

import asab

from .builder import RequestBuilder
from .registry import OperationRegistry
from .resource import RestResource
from .template.compiler import OperationFunction
from .template.datamodel import OperationDocument
from .transport.client import AiohttpTransport

#

L = logging.getLogger(__name__)

#

asab.Config.add_defaults({
	"rest": {
		"base_url": "",
		"spec": "",
		"debug": "no",
		"timeout": "60",
	}
})


class RestService(asab.Service):


	def __init__(self, app, service_name="RestService"):
		super().__init__(app, service_name)

		config = asab.Config["rest"]
		self.BaseURL = config.get("base_url")
		self.SpecPath = config.get("spec")

		self.Transport = AiohttpTransport(timeout=config.getfloat("timeout"))
		self.Builder = RequestBuilder(self.Transport, debug=config.getboolean("debug"))
		self.Registry = OperationRegistry(self.Builder)


	async def initialize(self, app):
		if not self.SpecPath:
			return

		document = OperationDocument.load(self.SpecPath)
		self.Registry = OperationRegistry.from_document(document, self.Builder)

		L.log(asab.LOG_NOTICE, "Loaded operation document", struct_data={
			"path": self.SpecPath,
			"functions": len(self.Registry.Functions),
		})


	def resource(self, plural_model_name: str, base_url: str = None) -> RestResource:
		base_url = base_url or self.BaseURL
		assert base_url, "Base URL is not configured"
		return RestResource(plural_model_name, base_url, self.Builder)


	def function(self, name: str) -> OperationFunction:
		return self.Registry.function(name)
