"""
Type relations: the rules by which operators constrain the types of their operands and results.

Each relation takes the current best-known types of an operator's arguments
(inputs first, then outputs) along with the count of inputs, and gives back
a tuple of the same length. Giving back the same types means "I can't tell
you anything more yet." Replacing an incomplete slot with a concrete type
is progress. Raising a TypeRelationError means the types cannot be made to agree.

A relation never swaps one concrete type for a different one. It also never
guesses: if the inputs are not known well enough, it defers, and the solver
may come back later with better information.
"""
from typing import Sequence
from .calculus import Type, TensorType, BOOL, is_tensor, is_tuple, is_incomplete, is_complete
from .shapes import broadcast_shapes, concat_shape
from .diagnostics import InvalidArgument, DTypeMismatch, Unsupported, Conflict

def _check_arity(name:str, types:Sequence[Type], num_inputs:int, arity:int, inputs:int):
	if len(types) != arity:
		raise InvalidArgument("%s relates %d types, not %d" % (name, arity, len(types)))
	if num_inputs != inputs:
		raise InvalidArgument("%s takes %d input(s), not %d" % (name, inputs, num_inputs))

def _settle(declared:Type, derived:TensorType) -> TensorType:
	""" An output slot may be unknown, or else it had better agree with what we derived. """
	if is_incomplete(declared) or declared == derived:
		return derived
	raise Conflict(declared, derived)

def identity_rel(types:Sequence[Type], num_inputs:int) -> tuple[Type, ...]:
	_check_arity("identity", types, num_inputs, 2, 1)
	t1, out = types
	if is_tensor(t1) and is_incomplete(out):
		return t1, t1
	return tuple(types)

def broadcast_rel(types:Sequence[Type], num_inputs:int) -> tuple[Type, ...]:
	_check_arity("broadcast", types, num_inputs, 3, 2)
	t1, t2, out = types
	if is_tensor(t1) and is_tensor(t2):
		if t1.dtype != t2.dtype:
			raise DTypeMismatch(t1.dtype, t2.dtype)
		return t1, t2, _settle(out, broadcast_shapes(t1.shape, t2.shape, t1.dtype))
	return tuple(types)

def broadcast_to_bool_rel(types:Sequence[Type], num_inputs:int) -> tuple[Type, ...]:
	"""
	For comparisons. Unlike broadcast_rel, this does not insist the operands
	share a data type. Whether comparing mixed kinds is meant to be allowed
	is an open question; for now it is.
	"""
	_check_arity("broadcast_to_bool", types, num_inputs, 3, 2)
	t1, t2, out = types
	if is_tensor(t1) and is_tensor(t2):
		return t1, t2, _settle(out, broadcast_shapes(t1.shape, t2.shape, BOOL))
	return tuple(types)

def concat_rel(types:Sequence[Type], num_inputs:int) -> tuple[Type, ...]:
	""" Axis 0 only, and only forward: from a known tuple to its joined tensor. """
	_check_arity("concat", types, num_inputs, 2, 1)
	arg, out = types
	if is_incomplete(arg) and is_incomplete(out):
		return tuple(types)
	elif is_incomplete(out):
		if is_tuple(arg) and not is_complete(arg):
			return tuple(types)
		return arg, concat_shape(arg)
	elif is_incomplete(arg):
		raise Unsupported("cannot infer the tuple shape from a known concatenation result")
	else:
		# Both known already. Agreement makes this a no-op.
		if is_tuple(arg) and not is_complete(arg):
			raise Unsupported("cannot infer the tuple shape from a known concatenation result")
		_settle(out, concat_shape(arg))
		return tuple(types)
