"""
The relations, taken one call at a time: defer, derive, or refuse.
"""
import unittest

from tensorrel.calculus import TensorType, TupleType, IncompleteType, INT32, INT64, FLOAT32, BOOL
from tensorrel.dimension import Var
from tensorrel.diagnostics import (
	DimensionMismatch, DTypeMismatch, InvalidArgument, Unsupported, Conflict, MalformedDimension,
)
from tensorrel.relations import identity_rel, broadcast_rel, broadcast_to_bool_rel, concat_rel

def _t(*dims, dtype=INT32):
	return TensorType(dims, dtype)

class IdentityTests(unittest.TestCase):

	def test_propagates_to_unknown(self):
		t = _t(4)
		self.assertEqual((t, t), identity_rel([t, IncompleteType()], 1))

	def test_defers_when_nothing_known(self):
		args = (IncompleteType(), IncompleteType())
		result = identity_rel(args, 1)
		self.assertIs(args[0], result[0])
		self.assertIs(args[1], result[1])

	def test_leaves_known_output_alone(self):
		args = (IncompleteType(), _t(4))
		self.assertEqual(args, identity_rel(args, 1))

	def test_wrong_arity(self):
		self.assertRaises(InvalidArgument, identity_rel, [_t(4)], 1)
		self.assertRaises(InvalidArgument, identity_rel, [_t(4), _t(4)], 2)


class BroadcastTests(unittest.TestCase):

	def test_derives_output(self):
		t1, t2 = _t(8, 1, 6, 1), _t(7, 1, 5)
		self.assertEqual((t1, t2, _t(8, 7, 6, 5)), broadcast_rel([t1, t2, IncompleteType()], 2))

	def test_same_shape_same_kind(self):
		for dtype in (INT32, FLOAT32, INT64):
			with self.subTest(dtype):
				t = _t(2, 3, dtype=dtype)
				self.assertEqual(t, broadcast_rel([t, t, IncompleteType()], 2)[2])

	def test_defers_on_unknown_operand(self):
		t = _t(3, 4)
		for args in [
			(IncompleteType(), t, IncompleteType()),
			(t, IncompleteType(), IncompleteType()),
			(IncompleteType(), IncompleteType(), t),
			(TupleType([t, t]), t, IncompleteType()),
		]:
			with self.subTest(args):
				self.assertEqual(args, broadcast_rel(args, 2))

	def test_no_promotion(self):
		with self.assertRaises(DTypeMismatch) as cm:
			broadcast_rel([_t(2, dtype=INT32), _t(2, dtype=FLOAT32), IncompleteType()], 2)
		self.assertEqual((INT32, FLOAT32), cm.exception.kinds)

	def test_mismatch(self):
		with self.assertRaises(DimensionMismatch) as cm:
			broadcast_rel([_t(3, 4), _t(2, 4), IncompleteType()], 2)
		self.assertEqual((3, 2), cm.exception.dims)

	def test_symbolic_refused(self):
		self.assertRaises(MalformedDimension, broadcast_rel, [_t(Var("n")), _t(3), IncompleteType()], 2)

	def test_agreeing_output_is_kept(self):
		args = (_t(3, 4), _t(4), _t(3, 4))
		self.assertEqual(args, broadcast_rel(args, 2))

	def test_disagreeing_output_is_a_conflict(self):
		with self.assertRaises(Conflict) as cm:
			broadcast_rel([_t(3, 4), _t(4), _t(4, 4)], 2)
		self.assertEqual(_t(4, 4), cm.exception.declared)
		self.assertEqual(_t(3, 4), cm.exception.derived)

	def test_wrong_arity(self):
		self.assertRaises(InvalidArgument, broadcast_rel, [_t(1), _t(1)], 2)
		self.assertRaises(InvalidArgument, broadcast_rel, [_t(1), _t(1), IncompleteType()], 1)


class BroadcastToBoolTests(unittest.TestCase):

	def test_output_is_boolean(self):
		t1, t2 = _t(3, 4, dtype=FLOAT32), _t(4, dtype=FLOAT32)
		self.assertEqual((t1, t2, _t(3, 4, dtype=BOOL)), broadcast_to_bool_rel([t1, t2, IncompleteType()], 2))

	def test_mixed_kinds_currently_accepted(self):
		# Unlike broadcast_rel, no agreement on operand kinds is demanded here.
		t1, t2 = _t(2, dtype=INT32), _t(2, dtype=FLOAT32)
		self.assertEqual(_t(2, dtype=BOOL), broadcast_to_bool_rel([t1, t2, IncompleteType()], 2)[2])

	def test_defers(self):
		args = (IncompleteType(), _t(2), IncompleteType())
		self.assertEqual(args, broadcast_to_bool_rel(args, 2))

	def test_mismatch(self):
		self.assertRaises(DimensionMismatch, broadcast_to_bool_rel, [_t(3), _t(2), IncompleteType()], 2)

	def test_declared_non_boolean_output_conflicts(self):
		self.assertRaises(Conflict, broadcast_to_bool_rel, [_t(2), _t(2), _t(2)], 2)


class ConcatTests(unittest.TestCase):

	def test_defers_when_nothing_known(self):
		args = (IncompleteType(), IncompleteType())
		result = concat_rel(args, 1)
		self.assertIs(args[0], result[0])
		self.assertIs(args[1], result[1])

	def test_forward(self):
		arg = TupleType([_t(2, 5), _t(3, 5)])
		self.assertEqual((arg, _t(5, 5)), concat_rel([arg, IncompleteType()], 1))

	def test_forward_mismatch(self):
		arg = TupleType([_t(2, 5), _t(3, 6)])
		self.assertRaises(DimensionMismatch, concat_rel, [arg, IncompleteType()], 1)

	def test_no_reverse_inference(self):
		self.assertRaises(Unsupported, concat_rel, [IncompleteType(), _t(5, 5)], 1)

	def test_defers_on_partly_known_tuple(self):
		args = (TupleType([_t(2, 5), IncompleteType()]), IncompleteType())
		self.assertEqual(args, concat_rel(args, 1))

	def test_not_a_tuple(self):
		self.assertRaises(InvalidArgument, concat_rel, [_t(2, 5), IncompleteType()], 1)
		self.assertRaises(InvalidArgument, concat_rel, [TupleType([_t(2, 5)]), IncompleteType()], 1)

	def test_both_known_and_agreeing(self):
		args = (TupleType([_t(2, 5), _t(3, 5)]), _t(5, 5))
		self.assertEqual(args, concat_rel(args, 1))

	def test_both_known_and_disagreeing(self):
		args = (TupleType([_t(2, 5), _t(3, 5)]), _t(6, 5))
		self.assertRaises(Conflict, concat_rel, args, 1)

	def test_partly_known_tuple_against_known_output(self):
		args = (TupleType([_t(2, 5), IncompleteType()]), _t(5, 5))
		self.assertRaises(Unsupported, concat_rel, args, 1)

	def test_symbolic_suffix_refused(self):
		arg = TupleType([_t(2, Var("n")), _t(3, Var("n"))])
		self.assertRaises(MalformedDimension, concat_rel, [arg, IncompleteType()], 1)


class IdempotenceTests(unittest.TestCase):
	""" Feeding a relation its own output changes nothing further. """

	def test_fixpoint(self):
		cases = [
			(identity_rel, 1, [_t(4), IncompleteType()]),
			(identity_rel, 1, [IncompleteType(), IncompleteType()]),
			(broadcast_rel, 2, [_t(8, 1, 6, 1), _t(7, 1, 5), IncompleteType()]),
			(broadcast_rel, 2, [_t(), _t(), IncompleteType()]),
			(broadcast_to_bool_rel, 2, [_t(3, 4), _t(4), IncompleteType()]),
			(concat_rel, 1, [TupleType([_t(2, 5), _t(3, 5)]), IncompleteType()]),
			(concat_rel, 1, [IncompleteType(), IncompleteType()]),
		]
		for relation, num_inputs, args in cases:
			with self.subTest(relation=relation.__name__, args=args):
				once = relation(args, num_inputs)
				self.assertEqual(len(args), len(once))
				self.assertEqual(once, relation(once, num_inputs))


if __name__ == '__main__':
	unittest.main()
