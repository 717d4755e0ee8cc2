from .datamodel import OperationTemplate, OperationSpec, OperationDocument
from .placeholder import Binding
from .compiler import CompiledOperation, OperationFunction, compile_template

__all__ = [
	"OperationTemplate",
	"OperationSpec",
	"OperationDocument",
	"Binding",
	"CompiledOperation",
	"OperationFunction",
	"compile_template",
]
