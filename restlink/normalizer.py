import typing
import inspect

from .errors import HTTPStatusError
from .datamodel import ResponseEnvelope, TransportResponse


def normalize(transport_error: BaseException | None, response: TransportResponse | None, body: typing.Any) -> ResponseEnvelope:
	'''
	Turn what a transport reported into a ResponseEnvelope.

	A response with status code >= 400 and no transport error becomes a HTTPStatusError,
	anything else passes through as (transport_error, body, response).
	'''
	if transport_error is None and response is not None and response.status_code >= 400:
		error = HTTPStatusError(
			response.status_code,
			body=body if body else None,
			headers=response.headers,
		)
		return ResponseEnvelope(error, None, response)

	if transport_error is not None:
		return ResponseEnvelope(transport_error, None, response)

	return ResponseEnvelope(None, body, response)


def wrap(callback: typing.Callable | None) -> typing.Callable | None:
	'''
	Wrap the caller's callback so that it takes (error, result, response).

	The returned coroutine function is called by the request builder with (transport_error, response, body),
	invokes the callback exactly once and returns the envelope.
	Without a callback there is nothing to wrap and None is returned.
	'''
	if callback is None:
		return None

	async def transport_callback(transport_error, response, body) -> ResponseEnvelope:
		envelope = normalize(transport_error, response, body)
		ret = callback(*envelope)
		if inspect.isawaitable(ret):
			await ret
		return envelope

	return transport_callback
