"""
Shape arithmetic for concrete tensors: broadcasting and axis-0 concatenation.

Both functions here compute forward only. Given known operands, they say
what the result must look like, or they complain. They do not attempt
to work backward from a known result to the operands.
"""
from typing import Sequence
from .dimension import DimExpr, const, evaluate
from .calculus import DataType, TensorType, TupleType, Type, TypeVisitor
from .diagnostics import DimensionMismatch, InvalidArgument

def broadcast_shapes(sh1:Sequence[DimExpr], sh2:Sequence[DimExpr], dtype:DataType) -> TensorType:
	"""
	NumPy-style broadcasting: align at the trailing end, let size-1 stretch.
	The output dimension at each position is the larger of the two,
	after padding the shorter shape on the left with ones.
	"""
	if not sh1 and not sh2:
		return TensorType((), dtype)
	suffix_len = min(len(sh1), len(sh2))
	full_len = max(len(sh1), len(sh2))
	for i in range(1, suffix_len+1):
		d1, d2 = evaluate(sh1[-i]), evaluate(sh2[-i])
		if d1 != d2 and d1 != 1 and d2 != 1:
			raise DimensionMismatch(d1, d2)

	padding = [const(1)] * (full_len - suffix_len)
	if len(sh1) < len(sh2):
		smaller, larger = padding + list(sh1), sh2
	else:
		smaller, larger = padding + list(sh2), sh1
	assert len(smaller) == len(larger)

	out_shape = [const(max(evaluate(left), evaluate(right))) for left, right in zip(smaller, larger)]
	return TensorType(out_shape, dtype)


class _ConcatField(TypeVisitor):
	""" Each field of the tuple had better be a tensor we can join along axis 0. """
	def __init__(self, position:int):
		self.position = position
	def on_tensor(self, t:TensorType):
		if not t.shape:
			raise InvalidArgument("concat field %d is a scalar; there is no axis 0 to join on" % self.position)
		return t
	def on_tuple(self, t:TupleType):
		raise InvalidArgument("concat field %d is a tuple, not a tensor" % self.position)
	def on_incomplete(self, t):
		raise InvalidArgument("concat field %d is not yet known" % self.position)

class _ConcatArgument(TypeVisitor):
	def on_tensor(self, t): raise InvalidArgument("concat can only be used with a tuple as its argument")
	def on_incomplete(self, t): raise InvalidArgument("concat can only be used with a tuple as its argument")
	def on_tuple(self, t:TupleType):
		if len(t.fields) < 2:
			raise InvalidArgument("concat requires at least two tensors")
		return [field.visit(_ConcatField(i)) for i, field in enumerate(t.fields)]

def concat_shape(input_type:Type) -> TensorType:
	""" Join a tuple of tensors along the leading axis. Every other axis must agree exactly. """
	fields = input_type.visit(_ConcatArgument())
	first = fields[0]
	suffix = [evaluate(d) for d in first.shape[1:]]
	axis_total = 0
	for field in fields:
		if field.rank != first.rank:
			raise DimensionMismatch(first.rank, field.rank)
		for expected, dim in zip(suffix, field.shape[1:]):
			found = evaluate(dim)
			if expected != found:
				raise DimensionMismatch(expected, found)
		axis_total += evaluate(field.shape[0])
	return TensorType([axis_total, *suffix], first.dtype)
