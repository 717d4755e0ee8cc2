import typing

import pydantic
import multidict


class RequestDescriptor(pydantic.BaseModel):
	"""A request built for a single invocation, handed over to the transport."""
	model_config = pydantic.ConfigDict(populate_by_name=True)

	method: str
	uri: str
	json_mode: bool = pydantic.Field(default=True, alias="json")
	qs: dict[str, typing.Any] | None = None
	body: typing.Any = None
	headers: dict[str, str] | None = None

	def to_dict(self) -> dict:
		d = {
			"method": self.method,
			"uri": self.uri,
			"json": self.json_mode,
		}
		if self.qs:
			d["qs"] = self.qs
		if self.body is not None:
			d["body"] = self.body
		if self.headers:
			d["headers"] = self.headers
		return d


class TransportResponse(pydantic.BaseModel):
	"""
	The response as reported by a transport.

	Headers are kept case-insensitive and repeated headers (e.g. Set-Cookie) keep all their values.
	"""
	model_config = pydantic.ConfigDict(arbitrary_types_allowed=True)

	status_code: int
	headers: multidict.CIMultiDict | None = None

	@pydantic.field_validator("headers", mode="before")
	@classmethod
	def _case_insensitive_headers(cls, v):
		if v is None or isinstance(v, multidict.CIMultiDict):
			return v
		return multidict.CIMultiDict(v)


class ResponseEnvelope(typing.NamedTuple):
	"""
	The outcome of a call, delivered exactly once per invocation.

	`error` is either a transport error or a HTTPStatusError; `result` is None whenever `error` is set.
	`response` is the TransportResponse when the transport produced one.
	"""
	error: BaseException | None
	result: typing.Any
	response: TransportResponse | None
