import re
import json
import typing
import urllib.parse

import jsonata
import pydantic

from ..errors import BindingError, ConfigurationError

#

# {name}, {^required}, {!optional}, {name:type}, {name=default}, {0}
PLACEHOLDER_RE = re.compile(r"\{([\^!]?)([\w\-\.]+)(?::(\w+))?(?:=([^}]*))?\}")

TYPES = frozenset(['string', 'number', 'integer', 'boolean', 'object'])

Destination = typing.Literal['path', 'query', 'header', 'body']

#


class Binding(pydantic.BaseModel):
	"""A parameter declared by a template, tagged with its destination in the request."""
	model_config = pydantic.ConfigDict(frozen=True)

	name: str
	destination: Destination
	required: bool
	type: str | None = None
	default: str | None = None

	@property
	def position(self) -> int | None:
		'''
		Placeholders named by a decimal number are bound to the positional argument at that index.
		'''
		if self.name.isdigit():
			return int(self.name)
		return None


	@classmethod
	def from_match(cls, match: re.Match, destination: Destination) -> 'Binding':
		marker, name, type_name, default = match.groups()
		if type_name is not None and type_name not in TYPES:
			raise ConfigurationError("Unknown placeholder type '{}' in '{}'".format(type_name, match.group(0)))

		if marker == '^':
			required = True
		elif marker == '!':
			required = False
		else:
			required = destination == 'path'

		return cls(
			name=name,
			destination=destination,
			required=required,
			type=type_name,
			default=default,
		)


class Scope(object):
	"""Call-time arguments as seen by a template."""

	def __init__(self, arguments: dict, positional: tuple, options: typing.Any = None):
		self.Arguments = arguments
		self.Positional = positional
		self.Options = options


	def lookup(self, binding: Binding) -> typing.Any:
		position = binding.position
		if position is not None:
			value = self.Positional[position] if position < len(self.Positional) else None
		else:
			value = self.Arguments.get(binding.name)

		if value is None:
			value = binding.default
		if value is None:
			return None
		return coerce(value, binding)


	def jsonata_params(self) -> dict:
		return {
			"arguments": self.Arguments,
			"parameters": self.Arguments,
			"options": self.Options,
		}


def coerce(value, binding: Binding):
	try:
		match binding.type:
			case None:
				return value
			case 'string':
				return value if isinstance(value, str) else stringify(value)
			case 'number':
				if isinstance(value, (int, float)) and not isinstance(value, bool):
					return value
				try:
					return int(value)
				except ValueError:
					return float(value)
			case 'integer':
				return int(value)
			case 'boolean':
				if isinstance(value, str):
					v = value.strip().lower()
					if v in ('true', '1', 'yes', 'on'):
						return True
					if v in ('false', '0', 'no', 'off', ''):
						return False
					raise ValueError("not a boolean: {!r}".format(value))
				return bool(value)
			case 'object':
				return json.loads(value) if isinstance(value, str) else value
	except (TypeError, ValueError) as e:
		raise BindingError(
			"Cannot convert parameter '{}' to {}: {}".format(binding.name, binding.type, e),
			name=binding.name, destination=binding.destination,
		) from e


def stringify(value) -> str:
	if isinstance(value, bool):
		return str(value).lower()
	if isinstance(value, (dict, list)):
		return json.dumps(value)
	return str(value)


class CompiledValue(object):

	def bindings(self) -> typing.Iterator[Binding]:
		return iter(())

	def evaluate(self, scope: Scope) -> typing.Any:
		raise NotImplementedError()


class Literal(CompiledValue):

	def __init__(self, value):
		self.Value = value

	def evaluate(self, scope):
		return self.Value


class Placeholder(CompiledValue):
	"""A string that is exactly one placeholder binds the raw argument, objects stay objects."""

	def __init__(self, binding: Binding):
		self.Binding = binding

	def bindings(self):
		yield self.Binding

	def evaluate(self, scope):
		return scope.lookup(self.Binding)


class Interpolation(CompiledValue):
	"""A string mixing text and placeholders; evaluates to None if any placeholder is absent."""

	def __init__(self, parts: list[str | Binding]):
		self.Parts = parts

	def bindings(self):
		for part in self.Parts:
			if isinstance(part, Binding):
				yield part

	def evaluate(self, scope):
		out = []
		for part in self.Parts:
			if isinstance(part, str):
				out.append(part)
				continue
			value = scope.lookup(part)
			if value is None:
				return None
			out.append(stringify(value))
		return ''.join(out)


class UrlTemplate(Interpolation):
	'''
	The URL pattern of an operation.
	Values are percent-encoded. An absent optional placeholder that forms a whole path segment
	is dropped together with its leading slash, i.e. `/widgets/{!id}` yields `/widgets`.
	'''

	def __init__(self, parts: list[str | Binding]):
		super().__init__(parts)
		self.Segments = set()
		for i, part in enumerate(parts):
			if not isinstance(part, Binding):
				continue
			before = parts[i - 1] if i > 0 else ''
			after = parts[i + 1] if i + 1 < len(parts) else ''
			if isinstance(before, str) and before.endswith('/') and isinstance(after, str) and (after == '' or after[0] in '/?#'):
				self.Segments.add(i)

	def evaluate(self, scope):
		out = ''
		for i, part in enumerate(self.Parts):
			if isinstance(part, str):
				out += part
				continue
			value = scope.lookup(part)
			if value is None:
				if i in self.Segments:
					out = out[:-1]
				continue
			out += urllib.parse.quote(stringify(value), safe='')
		return out


class Expression(CompiledValue):
	"""A JSONata expression, written in a template with a leading '$'."""

	def __init__(self, expr: str, destination: Destination):
		try:
			self.Expr = jsonata.Jsonata(expr)
		except Exception as e:
			raise ConfigurationError("Invalid JSONata expression '{}': {}".format(expr, e)) from e
		self.Destination = destination

	def evaluate(self, scope):
		try:
			v = self.Expr.evaluate(scope.jsonata_params())
		except Exception as e:
			raise BindingError("JSONata expression failed: {}".format(e), destination=self.Destination) from e
		if isinstance(v, bool) and self.Destination in ('query', 'header'):
			return str(v).lower()
		return v


class MappingTemplate(CompiledValue):
	"""A mapping of compiled values; members evaluating to None are omitted."""

	def __init__(self, mapping: dict[str, CompiledValue]):
		self.Mapping = mapping

	def bindings(self):
		for v in self.Mapping.values():
			yield from v.bindings()

	def evaluate(self, scope):
		return {
			k: v for k, v in (
				(k, v.evaluate(scope)) for k, v in self.Mapping.items()
			) if v is not None
		}


class SequenceTemplate(CompiledValue):

	def __init__(self, items: list[CompiledValue]):
		self.Items = items

	def bindings(self):
		for item in self.Items:
			yield from item.bindings()

	def evaluate(self, scope):
		return [
			v for v in (item.evaluate(scope) for item in self.Items) if v is not None
		]


def split(text: str, destination: Destination) -> list[str | Binding]:
	parts = []
	pos = 0
	for match in PLACEHOLDER_RE.finditer(text):
		if match.start() > pos:
			parts.append(text[pos:match.start()])
		parts.append(Binding.from_match(match, destination))
		pos = match.end()
	if pos < len(text):
		parts.append(text[pos:])
	return parts


def compile_value(value, destination: Destination) -> CompiledValue:
	if isinstance(value, str):
		if value.startswith('$'):
			return Expression(value[1:], destination)

		match = PLACEHOLDER_RE.fullmatch(value)
		if match is not None:
			return Placeholder(Binding.from_match(match, destination))

		parts = split(value, destination)
		if any(isinstance(part, Binding) for part in parts):
			return Interpolation(parts)
		return Literal(value)

	if isinstance(value, dict):
		return MappingTemplate({
			k: compile_value(v, destination) for k, v in value.items()
		})

	if isinstance(value, list):
		return SequenceTemplate([compile_value(v, destination) for v in value])

	return Literal(value)


def compile_url(url: str) -> CompiledValue:
	if url.startswith('$'):
		return Expression(url[1:], 'path')
	return UrlTemplate(split(url, 'path'))
