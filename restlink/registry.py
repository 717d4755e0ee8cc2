import logging

import asab

from .errors import ConfigurationError
from .builder import RequestBuilder
from .template.compiler import CompiledOperation, OperationFunction
from .template.datamodel import OperationDocument

#

L = logging.getLogger(__name__)

#


class OperationRegistry(object):
	'''
	A table of named functions compiled from an operation document.

		registry = OperationRegistry.from_document(OperationDocument.load("widgets.yaml"), builder)
		err, widget, response = await registry["findById"]("42")
	'''

	def __init__(self, builder: RequestBuilder):
		self.Builder = builder
		self.Operations: list[CompiledOperation] = []
		self.Functions: dict[str, OperationFunction] = {}


	@classmethod
	def from_document(cls, document: OperationDocument, builder: RequestBuilder) -> 'OperationRegistry':
		if document.debug:
			builder.set_debug(True)

		registry = cls(builder)
		for index, op in enumerate(document.operations):
			if op.template is None:
				raise ConfigurationError("The operation template is missing: operations[{}] {}".format(index, op.model_dump()))
			registry.register(builder.compile(op.template, op.functions))

		return registry


	def register(self, operation: CompiledOperation) -> None:
		for name in operation.Functions:
			if name in self.Functions:
				raise ConfigurationError("Function '{}' is defined more than once".format(name))

		for name in operation.Functions:
			if self.Builder.Debug:
				L.log(asab.LOG_NOTICE, "Mixing in function", struct_data={
					"name": name,
					"method": operation.Method,
					"url": operation.Template.url,
				})
			self.Functions[name] = operation.operation(name)

		self.Operations.append(operation)


	def function(self, name: str) -> OperationFunction:
		fn = self.Functions.get(name)
		if fn is None:
			raise KeyError("Unknown function '{}'".format(name))
		return fn


	def __getitem__(self, name: str) -> OperationFunction:
		return self.function(name)


	def __contains__(self, name: str) -> bool:
		return name in self.Functions


	def names(self) -> list[str]:
		return list(self.Functions.keys())
