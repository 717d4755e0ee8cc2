import json
import typing

import aiohttp
import multidict

from ..datamodel import RequestDescriptor, TransportResponse
from .transport_abc import TransportABC


class AiohttpTransport(TransportABC):
	'''
	HTTP transport based on aiohttp.
	A client session is opened for every request.
	'''

	def __init__(self, *, headers: dict[str, str] = None, timeout: float = None):
		self.Headers = headers
		self.Timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None


	async def send(self, descriptor: RequestDescriptor) -> tuple[TransportResponse, typing.Any]:
		kwargs = {}
		if descriptor.qs:
			kwargs['params'] = encode_query(descriptor.qs)
		if descriptor.headers:
			kwargs['headers'] = descriptor.headers
		if descriptor.body is not None:
			if descriptor.json_mode:
				kwargs['json'] = descriptor.body
			else:
				kwargs['data'] = descriptor.body

		session_kwargs = {"headers": self.Headers}
		if self.Timeout is not None:
			session_kwargs["timeout"] = self.Timeout

		async with aiohttp.ClientSession(**session_kwargs) as session:
			async with session.request(descriptor.method, descriptor.uri, **kwargs) as response:
				text = await response.text(errors="replace")
				resp = TransportResponse(
					status_code=response.status,
					headers=multidict.CIMultiDict(response.headers),
				)

		return resp, decode_body(text, descriptor.json_mode)


def encode_query(qs: dict) -> dict[str, str]:
	'''
	Encode query parameters for aiohttp, which accepts only strings and numbers.
	Objects and lists (e.g. a `filter`) are sent as JSON, booleans as 'true'/'false', None is dropped.
	'''
	params = {}
	for k, v in qs.items():
		if v is None:
			continue
		if isinstance(v, bool):
			params[k] = str(v).lower()
		elif isinstance(v, (dict, list)):
			params[k] = json.dumps(v)
		else:
			params[k] = str(v)
	return params


def decode_body(text: str, json_mode: bool) -> typing.Any:
	if len(text) == 0:
		return None
	if not json_mode:
		return text
	try:
		return json.loads(text)
	except ValueError:
		return text
