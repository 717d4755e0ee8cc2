import typing


class RestLinkError(Exception):
	"""Base class for errors raised by restlink."""
	pass


class ConfigurationError(RestLinkError):
	"""
	An operation template or an operation document is malformed or incomplete.

	Raised synchronously at compile/load time, never at call time.
	"""
	pass


class BindingError(RestLinkError):
	"""A call cannot be bound to its operation, e.g. a required path parameter has no argument."""

	def __init__(self, message: str, *, name: str = None, destination: str = None):
		super().__init__(message)
		self.name = name
		self.destination = destination


class HTTPStatusError(RestLinkError):
	"""
	The transport reported a response with a status code >= 400.

	This error is delivered as the `error` member of a ResponseEnvelope,
	the library itself never raises it.
	"""

	def __init__(self, status_code: int, *, body: typing.Any = None, headers: typing.Mapping[str, str] = None):
		self.message = "HTTP code: {}".format(status_code)
		super().__init__(self.message)
		self.status_code = status_code
		self.body = body
		self.headers = headers


	def to_dict(self) -> dict:
		d = {
			"message": self.message,
			"statusCode": self.status_code,
		}
		if self.body is not None:
			d["body"] = self.body
		if self.headers is not None:
			d["headers"] = dict(self.headers)
		return d
