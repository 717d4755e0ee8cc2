import json
import typing
import logging

import asab

from .datamodel import RequestDescriptor, ResponseEnvelope
from .normalizer import normalize, wrap
from .transport.transport_abc import TransportABC
from .template.compiler import CompiledOperation, compile_template
from .template.datamodel import OperationTemplate

#

L = logging.getLogger(__name__)

#


class RequestBuilder(object):
	'''
	Compiles operation templates and dispatches their requests through the transport.

	The transport is the only resource shared by the operations of a builder;
	it is never replaced after construction.
	'''

	def __init__(self, transport: TransportABC, *, debug: bool = False):
		self.Transport = transport
		self.Debug = debug


	def set_debug(self, debug: bool) -> None:
		self.Debug = bool(debug)


	def compile(self, template: OperationTemplate | dict | None, functions: dict[str, list[str]] = None, name: str = None) -> CompiledOperation:
		return compile_template(template, functions=functions, builder=self, name=name)


	async def request(self, descriptor: RequestDescriptor, callback: typing.Callable = None, *, extract: typing.Callable = None) -> ResponseEnvelope:
		'''
		Send the request and deliver the outcome as (error, result, response).

		Whatever the transport raises is delivered as the error, status codes >= 400 as HTTPStatusError.
		`extract` is applied to the body of a successful response.
		The envelope is returned and, if given, passed to `callback` exactly once.
		'''
		if self.Debug:
			L.log(
				asab.LOG_NOTICE,
				"Request: {}".format(json.dumps(descriptor.to_dict(), default=str)),
				struct_data={"method": descriptor.method, "uri": descriptor.uri},
			)

		transport_error = None
		response = None
		body = None
		try:
			response, body = await self.Transport.send(descriptor)
		except Exception as e:
			transport_error = e

		if transport_error is None and extract is not None and response is not None and response.status_code < 400:
			try:
				body = extract(body)
			except Exception as e:
				transport_error = e

		transport_callback = wrap(callback)
		if transport_callback is None:
			return normalize(transport_error, response, body)
		return await transport_callback(transport_error, response, body)
