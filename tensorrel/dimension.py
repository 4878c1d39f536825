"""
Shape-dimension expressions, and the one thing the rest of the system does with them.

A dimension might in principle be any little arithmetic expression over
symbolic sizes. Here, only literal integer constants actually evaluate.
The other node kinds exist so a symbolic dimension can be represented
faithfully and then refused, rather than quietly turned into some number.
"""
from boozetools.support.foundation import Visitor
from .diagnostics import MalformedDimension

class DimExpr:
	""" Value objects: structural equality and hashing. """
	def __init__(self, *key):
		self._key = key
		self._hash = hash((type(self), key))
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key

class Literal(DimExpr):
	def __init__(self, value:int):
		if type(value) is not int:
			raise TypeError("A literal dimension must be an int, not %r" % (value,))
		self.value = value
		super().__init__(value)
	def __repr__(self): return str(self.value)

class Var(DimExpr):
	def __init__(self, name:str):
		self.name = name
		super().__init__(name)
	def __repr__(self): return self.name

class Add(DimExpr):
	def __init__(self, lhs:DimExpr, rhs:DimExpr):
		self.lhs, self.rhs = lhs, rhs
		super().__init__(lhs, rhs)
	def __repr__(self): return "(%r+%r)" % (self.lhs, self.rhs)

class Mul(DimExpr):
	def __init__(self, lhs:DimExpr, rhs:DimExpr):
		self.lhs, self.rhs = lhs, rhs
		super().__init__(lhs, rhs)
	def __repr__(self): return "(%r*%r)" % (self.lhs, self.rhs)

def const(n:int) -> Literal:
	return Literal(n)

def as_dim(d) -> DimExpr:
	""" Let callers write plain ints where they mean literal dimensions. """
	if isinstance(d, DimExpr): return d
	if type(d) is int: return Literal(d)
	raise TypeError("Not a shape dimension: %r" % (d,))

class _Evaluator(Visitor):
	def visit_Literal(self, e:Literal): return e.value
	def visit_Var(self, e:Var): raise MalformedDimension(e)
	def visit_Add(self, e:Add): raise MalformedDimension(e)
	def visit_Mul(self, e:Mul): raise MalformedDimension(e)

_EVALUATOR = _Evaluator()

def evaluate(expr) -> int:
	if type(expr) not in (Literal, Var, Add, Mul):
		raise MalformedDimension(expr)
	return _EVALUATOR.visit(expr)
