"""
The data over which type relations operate.

There are exactly three kinds of type here: tensors, tuples, and the
incomplete placeholder. Code that cares which one it holds should not
go poking with isinstance. It should supply a TypeVisitor, which names
a method for every variant. Forget one, and you hear about it.

Tensors and tuples are value objects: they compare equal when their
contents do, which lets a relation notice that it derived nothing new.
Incomplete types are the exception. Each one is its own mystery,
so two of them are never equal to one another.
"""
import re
from typing import Iterable, Sequence
from .dimension import DimExpr, as_dim

_DTYPE_PATTERN = re.compile(r"([a-z]+?)(\d*)$")
_DTYPE_CODES = ("int", "uint", "float", "bool")

class DataType:
	""" An element kind: a code and a bit-width. """
	def __init__(self, code:str, bits:int):
		assert code in _DTYPE_CODES, code
		self.code, self.bits = code, bits
	def __eq__(self, other): return type(other) is DataType and (self.code, self.bits) == (other.code, other.bits)
	def __hash__(self): return hash((self.code, self.bits))
	def __repr__(self):
		if self.code == "bool": return "bool"
		return "%s%d" % (self.code, self.bits)

	@staticmethod
	def parse(text:str) -> "DataType":
		if text == "bool": return BOOL
		match = _DTYPE_PATTERN.match(text)
		if not match or match.group(1) not in _DTYPE_CODES or match.group(1) == "bool" or not match.group(2):
			raise ValueError("Not a data type: %r" % text)
		return DataType(match.group(1), int(match.group(2)))

BOOL = DataType("bool", 1)
INT8, INT16, INT32, INT64 = (DataType("int", n) for n in (8, 16, 32, 64))
UINT8 = DataType("uint", 8)
FLOAT16, FLOAT32, FLOAT64 = (DataType("float", n) for n in (16, 32, 64))


class Type:
	def visit(self, visitor:"TypeVisitor"): raise NotImplementedError(type(self))
	def __repr__(self) -> str:
		it = self.visit(Render())
		assert isinstance(it, str), (it, type(self))
		return it

class _ValueType(Type):
	def __init__(self, *key):
		self._key = key
		self._hash = hash(key)
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key

class TensorType(_ValueType):
	shape: tuple[DimExpr, ...]
	def __init__(self, shape:Iterable, dtype:DataType):
		assert isinstance(dtype, DataType), dtype
		self.shape = tuple(as_dim(d) for d in shape)
		self.dtype = dtype
		super().__init__(self.shape, dtype)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_tensor(self)
	@property
	def rank(self) -> int: return len(self.shape)

class TupleType(_ValueType):
	def __init__(self, fields:Sequence[Type]):
		assert all(isinstance(f, Type) for f in fields), fields
		self.fields = tuple(fields)
		super().__init__(self.fields)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_tuple(self)

class IncompleteType(Type):
	""" Has identity; default object equality does the job. """
	def visit(self, visitor:"TypeVisitor"): return visitor.on_incomplete(self)

###################
#

class TypeVisitor:
	def on_tensor(self, t:TensorType): raise NotImplementedError(type(self))
	def on_tuple(self, t:TupleType): raise NotImplementedError(type(self))
	def on_incomplete(self, t:IncompleteType): raise NotImplementedError(type(self))

class Render(TypeVisitor):
	""" Return a string representation of the term, in the notation the parser reads. """
	def on_tensor(self, t:TensorType):
		return "%s[%s]" % (t.dtype, ",".join(map(repr, t.shape)))
	def on_tuple(self, t:TupleType):
		return "(%s)" % (", ".join(f.visit(self) for f in t.fields))
	def on_incomplete(self, t:IncompleteType):
		return "?"

class _Variant(TypeVisitor):
	def on_tensor(self, t): return TensorType
	def on_tuple(self, t): return TupleType
	def on_incomplete(self, t): return IncompleteType

_VARIANT = _Variant()

def variant(t:Type) -> type:
	""" Which of the three kinds of type is this? """
	return t.visit(_VARIANT)

def is_tensor(t:Type) -> bool: return variant(t) is TensorType
def is_tuple(t:Type) -> bool: return variant(t) is TupleType
def is_incomplete(t:Type) -> bool: return variant(t) is IncompleteType

def is_complete(t:Type) -> bool:
	""" A tuple counts only once every field is known. """
	kind = variant(t)
	if kind is TupleType: return all(is_complete(f) for f in t.fields)
	return kind is TensorType
