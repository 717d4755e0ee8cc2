import logging

import pytest
import aiohttp

from restlink.errors import BindingError, ConfigurationError, HTTPStatusError
from restlink.builder import RequestBuilder
from restlink.datamodel import RequestDescriptor
from restlink.template.compiler import compile_template

from .conftest import FakeTransport


FIND = {
	"method": "GET",
	"url": "http://api.example.com/widgets/{!id}",
	"query": {"filter": "{filter}"},
	"response": "$data",
}


@pytest.mark.asyncio
async def test_request_success(builder, transport):
	transport.Body = {"id": 1}
	descriptor = RequestDescriptor(method="GET", uri="http://api.example.com/widgets/1")

	error, result, response = await builder.request(descriptor)

	assert error is None
	assert result == {"id": 1}
	assert response.status_code == 200
	assert transport.Requests == [descriptor]


@pytest.mark.asyncio
async def test_request_error_status(builder, transport, recorder):
	transport.StatusCode = 404
	transport.Body = {"error": "not found"}

	envelope = await builder.request(RequestDescriptor(method="GET", uri="http://api.example.com/widgets/1"), recorder)

	assert len(recorder.Calls) == 1
	assert recorder.Calls[0] == tuple(envelope)
	assert isinstance(envelope.error, HTTPStatusError)
	assert envelope.error.status_code == 404
	assert envelope.error.body == {"error": "not found"}
	assert envelope.result is None


@pytest.mark.asyncio
async def test_request_transport_error(recorder):
	e = aiohttp.ClientConnectionError("refused")
	builder = RequestBuilder(FakeTransport(error=e))

	envelope = await builder.request(RequestDescriptor(method="GET", uri="http://api.example.com/widgets"), recorder)

	assert recorder.Calls == [(e, None, None)]
	assert envelope == (e, None, None)


@pytest.mark.asyncio
async def test_request_without_callback_does_not_raise():
	builder = RequestBuilder(FakeTransport(status_code=500))

	error, result, _ = await builder.request(RequestDescriptor(method="DELETE", uri="http://api.example.com/widgets"))

	assert error.status_code == 500
	assert result is None


@pytest.mark.asyncio
async def test_callback_exception_propagates(builder):
	def callback(error, result, response):
		raise RuntimeError("boom")

	with pytest.raises(RuntimeError):
		await builder.request(RequestDescriptor(method="GET", uri="http://api.example.com/widgets"), callback)


@pytest.mark.asyncio
async def test_operation_call(builder, transport, recorder):
	transport.Body = {"data": [{"id": 1}, {"id": 2}]}
	fn = builder.compile(FIND, {"find": ["id", "filter"]}).operation("find")

	error, result, _ = await fn(None, {"where": {"a": 1}}, options={"user": "admin"}, callback=recorder)

	assert error is None
	assert result == [{"id": 1}, {"id": 2}]
	assert recorder.Calls[0][1] == [{"id": 1}, {"id": 2}]

	descriptor = transport.Requests[0]
	assert descriptor.to_dict() == {
		"method": "GET",
		"uri": "http://api.example.com/widgets",
		"json": True,
		"qs": {"filter": {"where": {"a": 1}}},
		"headers": {"options": '{"user": "admin"}'},
	}


@pytest.mark.asyncio
async def test_response_expression_skipped_on_error(builder, transport):
	transport.StatusCode = 400
	transport.Body = {"message": "bad filter"}
	fn = builder.compile(FIND, {"find": ["id", "filter"]}).operation("find")

	error, result, _ = await fn("1")

	assert error.body == {"message": "bad filter"}
	assert result is None


@pytest.mark.asyncio
async def test_binding_error_is_raised_before_dispatch(builder, transport):
	fn = builder.compile({"method": "PUT", "url": "http://api.example.com/widgets/{id}"}).function(["id"])

	with pytest.raises(BindingError):
		await fn()

	assert transport.Requests == []


@pytest.mark.asyncio
async def test_unbound_operation():
	fn = compile_template({"method": "GET", "url": "http://api.example.com/widgets"}).function([])
	with pytest.raises(ConfigurationError):
		await fn()


@pytest.mark.asyncio
async def test_debug_traces_descriptor(builder, caplog):
	descriptor = RequestDescriptor(method="GET", uri="http://api.example.com/widgets")

	with caplog.at_level(logging.DEBUG, logger="restlink.builder"):
		await builder.request(descriptor)
		assert "Request:" not in caplog.text

		builder.set_debug(True)
		await builder.request(descriptor)

	assert 'Request: {"method": "GET", "uri": "http://api.example.com/widgets", "json": true}' in caplog.text
