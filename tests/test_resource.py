import json

import pytest

from restlink.errors import HTTPStatusError
from restlink.resource import RestResource


BASE_URL = "http://api.example.com"
OPTIONS = {"accessToken": {"userId": 42}}


@pytest.fixture
def widgets(builder):
	return RestResource("widgets", BASE_URL, builder)


def test_url_join(builder):
	assert RestResource("widgets", "http://api.example.com/", builder).URL == "http://api.example.com/widgets"
	assert RestResource("widgets", "http://api.example.com", builder).URL == "http://api.example.com/widgets"


@pytest.mark.asyncio
async def test_create(widgets, transport):
	await widgets.create({"name": "gear"}, OPTIONS)

	descriptor = transport.Requests[0]
	assert descriptor.method == "POST"
	assert descriptor.uri == "http://api.example.com/widgets"
	assert descriptor.json_mode is True
	assert descriptor.body == {"name": "gear"}
	assert descriptor.headers == {"options": json.dumps(OPTIONS)}


@pytest.mark.asyncio
async def test_update(widgets, transport):
	body = {"name": "cog"}
	await widgets.update(42, body, OPTIONS)

	descriptor = transport.Requests[0]
	assert descriptor.method == "PUT"
	assert descriptor.uri.endswith("/42")
	assert descriptor.body == body


@pytest.mark.asyncio
async def test_delete(widgets, transport):
	await widgets.delete("7")

	assert transport.Requests[0].to_dict() == {
		"method": "DELETE",
		"uri": "http://api.example.com/widgets/7",
		"json": True,
	}


@pytest.mark.asyncio
async def test_delete_all_not_found(widgets, transport, recorder):
	transport.StatusCode = 404

	await widgets.delete_all(OPTIONS, callback=recorder)
	await widgets.delete_all()

	assert transport.Requests[1].to_dict() == {
		"method": "DELETE",
		"uri": "http://api.example.com/widgets",
		"json": True,
	}

	error, result, response = recorder.Calls[0]
	assert isinstance(error, HTTPStatusError)
	assert error.to_dict() == {"message": "HTTP code: 404", "statusCode": 404}
	assert result is None
	assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("id", [None, 0, ""])
async def test_find_without_id(widgets, transport, id):
	flt = {"where": {"name": "gear"}}
	await widgets.find(id, flt)

	descriptor = transport.Requests[0]
	assert descriptor.method == "GET"
	assert descriptor.uri == "http://api.example.com/widgets"
	assert descriptor.qs["filter"] == flt


@pytest.mark.asyncio
async def test_find_by_id(widgets, transport):
	transport.Body = {"id": 5, "name": "gear"}

	error, result, _ = await widgets.find(5, {"fields": ["name"]}, OPTIONS)

	assert error is None
	assert result == {"id": 5, "name": "gear"}
	descriptor = transport.Requests[0]
	assert descriptor.uri == "http://api.example.com/widgets/5"
	assert descriptor.qs == {"filter": {"fields": ["name"]}}
	assert descriptor.headers == {"options": json.dumps(OPTIONS)}


@pytest.mark.asyncio
async def test_query(widgets, transport):
	transport.Body = [{"id": 1}]

	error, result, _ = await widgets.query({"where": {"name": "x"}}, OPTIONS)

	assert result == [{"id": 1}]
	assert transport.Requests[0].qs == {"filter": {"where": {"name": "x"}}}


@pytest.mark.asyncio
async def test_query_without_options(widgets, transport, recorder):
	await widgets.query({"name": "x"}, callback=recorder)
	await widgets.query({"name": "x"}, None, callback=recorder)

	assert transport.Requests[0] == transport.Requests[1]
	assert transport.Requests[0].headers is None
	assert len(recorder.Calls) == 2


@pytest.mark.asyncio
async def test_all_defaults_to_empty_filter(widgets, transport):
	await widgets.all()
	assert transport.Requests[0].qs == {"filter": {}}
