import types
import typing
import itertools

import jsonata
import pydantic

from ..errors import ConfigurationError
from ..datamodel import RequestDescriptor, ResponseEnvelope
from .datamodel import OperationTemplate
from .placeholder import Binding, compile_url, compile_value
from .binder import bind


class CompiledOperation(object):
	"""
	An operation template parsed into its URL, query, header and body bindings.

	Created once per template; it carries no per-call state and is never modified after construction,
	so a single instance serves any number of concurrent calls.
	"""

	def __init__(self, template: OperationTemplate, *, functions: dict[str, list[str]] = None, builder=None, name: str = None):
		self.Template = template
		self.Name = name
		self.Builder = builder

		self.Method = template.method.upper()
		self.URL = compile_url(template.url)
		self.Query = compile_value(template.query, 'query')
		self.Headers = compile_value(template.headers, 'header')
		self.Body = compile_value(template.body, 'body') if template.body is not None else None

		if template.response is not None:
			if not template.response.startswith('$'):
				raise ConfigurationError("Response expression of '{}' must start with '$'".format(self))
			try:
				self.ResponseExpr = jsonata.Jsonata(template.response[1:])
			except Exception as e:
				raise ConfigurationError("Invalid response expression of '{}': {}".format(self, e)) from e
		else:
			self.ResponseExpr = None

		parts = [self.URL, self.Query, self.Headers]
		if self.Body is not None:
			parts.append(self.Body)
		self.Bindings: tuple[Binding, ...] = tuple(itertools.chain.from_iterable(p.bindings() for p in parts))

		self.Functions = types.MappingProxyType({
			fname: tuple(params) for fname, params in (functions or {}).items()
		})


	def __repr__(self):
		if self.Name is not None:
			return self.Name
		return "{} {}".format(self.Template.method, self.Template.url)


	@property
	def declares_options_header(self) -> bool:
		return any(k.lower() == 'options' for k in self.Template.headers)


	def operation(self, name: str) -> 'OperationFunction':
		"""Return the invocable for the named function of this operation."""
		params = self.Functions.get(name)
		if params is None:
			raise ConfigurationError("Operation '{}' has no function '{}'".format(self, name))
		return OperationFunction(self, params, name=name)


	def function(self, params: typing.Sequence[str], name: str = None) -> 'OperationFunction':
		return OperationFunction(self, tuple(params), name=name)


	def extract(self, body):
		if self.ResponseExpr is None:
			return body
		return self.ResponseExpr.evaluate(body)


class OperationFunction(object):
	'''
	A named function of a compiled operation.
	Positional arguments are mapped onto `params` in order, keyword arguments by name.

		err, result, response = await fn("42", options={"user": "admin"})
	'''

	def __init__(self, operation: CompiledOperation, params: tuple[str, ...], name: str = None):
		self.Operation = operation
		self.Params = params
		self.Name = name


	def descriptor(self, *args, options=None, **kwargs) -> RequestDescriptor:
		"""Build the request descriptor of a call without dispatching it."""
		return bind(self.Operation, self.Params, args, kwargs, options)


	async def __call__(self, *args, options=None, callback=None, **kwargs) -> ResponseEnvelope:
		if self.Operation.Builder is None:
			raise ConfigurationError("Operation '{}' is not bound to a request builder".format(self.Operation))
		descriptor = self.descriptor(*args, options=options, **kwargs)
		return await self.Operation.Builder.request(descriptor, callback, extract=self.Operation.extract)


def compile_template(template: OperationTemplate | dict | None, *, functions: dict[str, list[str]] = None, builder=None, name: str = None) -> CompiledOperation:
	'''
	Compile an operation template.
	Any problem with the template is reported as ConfigurationError, i.e. at load time, never at the first call.
	'''
	if template is None:
		raise ConfigurationError("The operation template is missing: {}".format(name or functions))

	if not isinstance(template, OperationTemplate):
		try:
			template = OperationTemplate.model_validate(template)
		except pydantic.ValidationError as e:
			raise ConfigurationError("Invalid operation template {}: {}".format(name or functions, e)) from e

	return CompiledOperation(template, functions=functions, builder=builder, name=name)
