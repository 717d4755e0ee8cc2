import abc
import typing

from ..datamodel import RequestDescriptor, TransportResponse


class TransportABC(abc.ABC):
	'''
	The network transport used by the request builder.

	`send()` is called once per request and returns the response with its body,
	or raises if the request could not be completed (network failure, DNS, timeout, ...).
	Status codes are not interpreted by the transport.
	'''

	@abc.abstractmethod
	async def send(self, descriptor: RequestDescriptor) -> tuple[TransportResponse, typing.Any]:
		pass
