import json
import typing

import yaml
import pydantic

from ..errors import ConfigurationError


class OperationTemplate(pydantic.BaseModel):
	"""
	The request template of an operation.

	Example YAML:
		method: GET
		url: http://api.example.com/widgets/{!id}
		query:
		  filter: "{filter}"
		headers:
		  X-Tenant: "{^tenant}"
		response: $data
	"""
	model_config = pydantic.ConfigDict(frozen=True, extra='forbid')

	method: str = pydantic.Field(min_length=1)
	url: str = pydantic.Field(min_length=1)
	query: dict[str, typing.Any] = pydantic.Field(default_factory=dict)
	headers: dict[str, typing.Any] = pydantic.Field(default_factory=dict)
	body: typing.Any = None
	response: str | None = None  # JSONata expression applied to a successful body, prefixed with '$'


class OperationSpec(pydantic.BaseModel):
	"""One entry of an operation document: a template and the named functions bound to it."""
	template: OperationTemplate | None = None
	functions: dict[str, list[str]] = pydantic.Field(default_factory=dict)


class OperationDocument(pydantic.BaseModel):
	"""
	A document of operations.

	Example YAML:
		debug: false
		operations:
		- template:
		    method: GET
		    url: http://api.example.com/widgets/{id}
		  functions:
		    findById: [id]
	"""
	debug: bool = False
	operations: list[OperationSpec] = pydantic.Field(default_factory=list)


	@classmethod
	def from_dict(cls, data: dict) -> 'OperationDocument':
		try:
			return cls.model_validate(data)
		except pydantic.ValidationError as e:
			raise ConfigurationError("Invalid operation document: {}".format(e)) from e


	@classmethod
	def from_yaml(cls, yaml_content: str | bytes) -> 'OperationDocument':
		"""Load an OperationDocument from YAML string or bytes."""
		try:
			data = yaml.safe_load(yaml_content)
		except yaml.YAMLError as e:
			raise ConfigurationError("Error parsing operation document YAML: {}".format(e)) from e
		return cls.from_dict(data)


	@classmethod
	def from_json(cls, json_content: str | bytes) -> 'OperationDocument':
		try:
			data = json.loads(json_content)
		except ValueError as e:
			raise ConfigurationError("Error parsing operation document JSON: {}".format(e)) from e
		return cls.from_dict(data)


	@classmethod
	def load(cls, path: str) -> 'OperationDocument':
		'''
		Load an operation document from a file.
		Files with the '.json' extension are parsed as JSON, everything else as YAML.
		'''
		with open(path, "rb") as f:
			content = f.read()

		if path.endswith('.json'):
			return cls.from_json(content)
		return cls.from_yaml(content)
