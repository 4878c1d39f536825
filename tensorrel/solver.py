"""
A plain fixpoint driver for type relations.

Variables are named slots in an environment. Each call site ties some
variables to the inputs and outputs of one operator. A round visits every
live call site once, runs its relation, and writes back whatever came out
newly concrete. Rounds repeat until one makes no progress.

Since a slot only ever moves from incomplete to concrete, and there are
finitely many slots, this terminates. The round limit is a backstop.

Relation failures stop here: they become issues in the Report, naming
the operator, and that call site is retired so the rest can carry on.
"""
from typing import NamedTuple, Optional, Sequence
from .calculus import Type, IncompleteType, is_incomplete, is_complete
from .diagnostics import Report, TypeRelationError
from .registry import OpDef, Registry, DEFAULT_REGISTRY

class CallSite(NamedTuple):
	op: OpDef
	slots: tuple[str, ...]

class TypeSolver:
	def __init__(self, report:Report, registry:Optional[Registry]=None, max_rounds:int=100):
		self._report = report
		self._registry = registry or DEFAULT_REGISTRY
		self._max_rounds = max_rounds
		self.env : dict[str, Type] = {}
		self._calls : list[CallSite] = []

	def declare(self, name:str, typ:Optional[Type]=None):
		self.env[name] = IncompleteType() if typ is None else typ

	def call(self, op_name:str, inputs:Sequence[str], outputs:Sequence[str]) -> CallSite:
		op = self._registry.lookup(op_name)
		if (len(inputs), len(outputs)) != (op.num_inputs, op.num_outputs):
			pattern = "%s takes %d input(s) and %d output(s)"
			raise ValueError(pattern % (op_name, op.num_inputs, op.num_outputs))
		for name in (*inputs, *outputs):
			if name not in self.env:
				self.declare(name)
		site = CallSite(op, (*inputs, *outputs))
		self._calls.append(site)
		return site

	def solve(self) -> dict[str, Type]:
		live = list(self._calls)
		for nr in range(1, self._max_rounds+1):
			self._report.info("Round", nr)
			progress = False
			for site in list(live):
				outcome = self._step(site)
				if outcome is None:
					live.remove(site)
				else:
					progress = outcome or progress
			if not progress:
				break
		else:
			self._report.did_not_converge(self._max_rounds)
		unknown = [name for name, typ in self.env.items() if not is_complete(typ)]
		if unknown and self._report.ok():
			self._report.still_incomplete(unknown)
		return dict(self.env)

	def _step(self, site:CallSite) -> Optional[bool]:
		"""
		Run one relation once. Answers whether any slot got refined,
		or None if the call site has failed for good.
		"""
		progress = False
		before = tuple(self.env[s] for s in site.slots)
		self._report.info("  %s%r" % (site.op.name, before))
		try:
			after = site.op.apply(before)
		except TypeRelationError as ex:
			self._report.relation_failed(site.op.name, list(zip(site.slots, before)), ex)
			return None
		for slot, old, new in zip(site.slots, before, after):
			if new is old or new == old:
				continue
			current = self.env[slot]
			if is_incomplete(current):
				if is_incomplete(new):
					continue
				self.env[slot] = new
				progress = True
				self._report.info("    %s := %s" % (slot, new))
			elif current != new:
				self._report.slot_conflict(site.op.name, slot, current, new)
				return None
		return progress
