"""
A little text notation for types, for the command line and for tests.

	?                       an incomplete type
	int32[8,1,6,1]          a tensor; the dimensions may be integers or names
	float32[]               a rank-zero tensor
	(int32[2,5], int32[3,5])  a tuple

Named dimensions parse as symbolic variables. They are representable,
but no relation will evaluate them.
"""
import re
from .calculus import Type, TensorType, TupleType, IncompleteType, DataType
from .dimension import Literal, Var

class NotationError(ValueError):
	pass

_TOKEN = re.compile(r"\s*(?:(\d+)|([A-Za-z_][A-Za-z_0-9]*)|(.))")

def _tokenize(text:str):
	for match in _TOKEN.finditer(text.rstrip()):
		number, word, punct = match.groups()
		if number is not None: yield "int", int(number), match.start()
		elif word is not None: yield "name", word, match.start()
		else: yield punct, punct, match.start()
	yield "$", None, len(text)

class _Parser:
	def __init__(self, text:str):
		self.text = text
		self.tokens = list(_tokenize(text))
		self.pos = 0

	def peek(self): return self.tokens[self.pos][0]

	def take(self, kind:str):
		tag, value, where = self.tokens[self.pos]
		if tag != kind:
			raise NotationError("Expected %r at column %d of %r" % (kind, where+1, self.text))
		self.pos += 1
		return value

	def parse_type(self) -> Type:
		kind = self.peek()
		if kind == "?":
			self.take("?")
			return IncompleteType()
		if kind == "(":
			self.take("(")
			fields = [self.parse_type()]
			while self.peek() == ",":
				self.take(",")
				fields.append(self.parse_type())
			self.take(")")
			return TupleType(fields)
		word = self.take("name")
		try: dtype = DataType.parse(word)
		except ValueError as ex: raise NotationError(str(ex)) from None
		self.take("[")
		shape = []
		if self.peek() != "]":
			shape.append(self.parse_dim())
			while self.peek() == ",":
				self.take(",")
				shape.append(self.parse_dim())
		self.take("]")
		return TensorType(shape, dtype)

	def parse_dim(self):
		if self.peek() == "name": return Var(self.take("name"))
		return Literal(self.take("int"))

def parse_type(text:str) -> Type:
	parser = _Parser(text)
	typ = parser.parse_type()
	parser.take("$")
	return typ

def render(typ:Type) -> str:
	return repr(typ)
