import json
import typing
import urllib.parse

from .builder import RequestBuilder
from .datamodel import RequestDescriptor, ResponseEnvelope


class RestResource(object):
	'''
	A REST resource client for CRUD operations on `{base_url}/{plural_model_name}`.

	Every method is a coroutine returning (error, result, response);
	the optional keyword-only `callback` receives the same triple.
	`options` is an opaque caller context sent JSON-encoded in the `options` header.
	'''

	def __init__(self, plural_model_name: str, base_url: str, builder: RequestBuilder):
		if base_url.endswith('/'):
			self.URL = base_url + plural_model_name
		else:
			self.URL = base_url + '/' + plural_model_name
		self.Builder = builder


	def _item_url(self, id) -> str:
		return self.URL + '/' + urllib.parse.quote(str(id), safe='')


	def _descriptor(self, method: str, uri: str, options, *, body=None, qs=None) -> RequestDescriptor:
		return RequestDescriptor(
			method=method,
			uri=uri,
			json=True,
			qs=qs,
			body=body,
			headers={"options": json.dumps(options)} if options is not None else None,
		)


	async def create(self, body, options=None, *, callback: typing.Callable = None) -> ResponseEnvelope:
		"""POST /{model}"""
		return await self.Builder.request(
			self._descriptor('POST', self.URL, options, body=body),
			callback,
		)


	async def update(self, id, body, options=None, *, callback: typing.Callable = None) -> ResponseEnvelope:
		"""PUT /{model}/{id}"""
		return await self.Builder.request(
			self._descriptor('PUT', self._item_url(id), options, body=body),
			callback,
		)


	async def delete(self, id, options=None, *, callback: typing.Callable = None) -> ResponseEnvelope:
		"""DELETE /{model}/{id}"""
		return await self.Builder.request(
			self._descriptor('DELETE', self._item_url(id), options),
			callback,
		)


	async def delete_all(self, options=None, *, callback: typing.Callable = None) -> ResponseEnvelope:
		"""DELETE /{model}"""
		return await self.Builder.request(
			self._descriptor('DELETE', self.URL, options),
			callback,
		)


	async def find(self, id, filter=None, options=None, *, callback: typing.Callable = None) -> ResponseEnvelope:
		'''
		GET /{model}/{id}, or GET /{model} when `id` is falsy.
		The `filter` is passed as a query parameter in both cases.
		'''
		uri = self._item_url(id) if id else self.URL
		return await self.Builder.request(
			self._descriptor('GET', uri, options, qs={"filter": filter} if filter is not None else None),
			callback,
		)


	async def query(self, q=None, options=None, *, callback: typing.Callable = None) -> ResponseEnvelope:
		"""GET /{model} with `q` as the `filter` query parameter."""
		return await self.Builder.request(
			self._descriptor('GET', self.URL, options, qs={"filter": q or {}}),
			callback,
		)

	all = query
