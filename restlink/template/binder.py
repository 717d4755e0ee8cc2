import json
import typing

from ..errors import BindingError
from ..datamodel import RequestDescriptor
from .placeholder import Scope


def bind(operation, params: typing.Sequence[str], args: tuple, kwargs: dict, options=None) -> RequestDescriptor:
	'''
	Map call-time arguments onto a compiled operation and build a fresh RequestDescriptor.

	The operation is only read, never modified.
	'''
	max_positional = max(
		[len(params)] + [b.position + 1 for b in operation.Bindings if b.position is not None]
	)
	if len(args) > max_positional:
		raise BindingError("Operation '{}' takes {} positional arguments but {} were given".format(
			operation, max_positional, len(args)
		))

	arguments = dict(zip(params, args))
	for name, value in kwargs.items():
		if name in arguments:
			raise BindingError("Operation '{}' got multiple values for argument '{}'".format(operation, name), name=name)
		arguments[name] = value

	if options is not None:
		if 'options' in arguments:
			raise BindingError("Operation '{}' got multiple values for argument 'options'".format(operation), name='options')
		arguments['options'] = options

	# An `options` parameter bound positionally is the options context too
	options = arguments.get('options')

	scope = Scope(arguments, args, options)

	for binding in operation.Bindings:
		if binding.required and scope.lookup(binding) is None:
			raise BindingError(
				"Operation '{}' is missing the required {} parameter '{}'".format(operation, binding.destination, binding.name),
				name=binding.name, destination=binding.destination,
			)

	uri = operation.URL.evaluate(scope)
	if not isinstance(uri, str) or len(uri) == 0:
		raise BindingError("Operation '{}' resolved to an invalid URL: {!r}".format(operation, uri), destination='path')

	qs = operation.Query.evaluate(scope)

	headers = {
		k: v if isinstance(v, str) else json.dumps(v)
		for k, v in operation.Headers.evaluate(scope).items()
	}
	if options is not None and not operation.declares_options_header:
		headers['options'] = json.dumps(options)

	body = operation.Body.evaluate(scope) if operation.Body is not None else None

	return RequestDescriptor(
		method=operation.Method,
		uri=uri,
		json=True,
		qs=qs or None,
		body=body,
		headers=headers or None,
	)
