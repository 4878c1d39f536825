"""
Which operator uses which relation, and how many inputs and outputs it has.
"""
from typing import Callable, NamedTuple, Sequence
from .calculus import Type
from .diagnostics import UnknownOperator
from . import relations

RELATION = Callable[[Sequence[Type], int], tuple[Type, ...]]

class OpDef(NamedTuple):
	name: str
	relation: RELATION
	num_inputs: int
	num_outputs: int

	@property
	def arity(self) -> int: return self.num_inputs + self.num_outputs

	def apply(self, types:Sequence[Type]) -> tuple[Type, ...]:
		refined = self.relation(types, self.num_inputs)
		assert len(refined) == len(types), (self.name, refined)
		return tuple(refined)

class Registry:
	def __init__(self):
		self._ops : dict[str, OpDef] = {}

	def register(self, name:str, relation:RELATION, num_inputs:int, num_outputs:int=1) -> OpDef:
		if name in self._ops:
			raise ValueError("Operator %r is already registered." % name)
		self._ops[name] = op = OpDef(name, relation, num_inputs, num_outputs)
		return op

	def lookup(self, name:str) -> OpDef:
		try: return self._ops[name]
		except KeyError: raise UnknownOperator(name) from None

	def __contains__(self, name): return name in self._ops
	def names(self) -> list[str]: return sorted(self._ops)

def _default_registry() -> Registry:
	registry = Registry()
	registry.register("identity", relations.identity_rel, 1)
	registry.register("negative", relations.identity_rel, 1)
	for name in ("add", "subtract", "multiply", "divide"):
		registry.register(name, relations.broadcast_rel, 2)
	for name in ("equal", "less", "greater"):
		registry.register(name, relations.broadcast_to_bool_rel, 2)
	registry.register("concat", relations.concat_rel, 1)
	return registry

DEFAULT_REGISTRY = _default_registry()
