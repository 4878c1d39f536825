"""
Failure modes and the means to complain about them.

The relation functions raise; they never print and never recover.
Whoever drives them (normally the solver) catches a TypeRelationError,
decides which operator to blame, and files the issue with a Report.
The Report then decides whether and how the user gets to hear about it.
"""
import sys, random
from typing import Any, Sequence

class TypeRelationError(Exception):
	""" Base of everything a relation may raise. """

class MalformedDimension(TypeRelationError):
	def __init__(self, expr):
		super().__init__("Shape dimension %r is not an integer constant." % (expr,))
		self.expr = expr

class DimensionMismatch(TypeRelationError):
	def __init__(self, d1:int, d2:int):
		super().__init__("Dimension mismatch: %d versus %d." % (d1, d2))
		self.dims = (d1, d2)

class DTypeMismatch(TypeRelationError):
	def __init__(self, k1, k2):
		super().__init__("Operands disagree on data type: %s versus %s." % (k1, k2))
		self.kinds = (k1, k2)

class InvalidArgument(TypeRelationError):
	pass

class Unsupported(TypeRelationError):
	pass

class Conflict(TypeRelationError):
	def __init__(self, declared, derived):
		super().__init__("Declared type %s disagrees with derived type %s." % (declared, derived))
		self.declared, self.derived = declared, derived

class UnknownOperator(KeyError):
	pass

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens', 'Nuts', 'Rats',
	]
	resignations = [
		'These shapes do not fit.',
		'I cannot make the types agree.',
		'I have no idea what the right answer is.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Pic:
	""" One issue: an introduction, some annotated particulars, and maybe a footer. """
	def __init__(self, intro:str, anns:list[str], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro]
		lines.extend("    "+ann for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	_issues : list[Pic]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	@property
	def issues(self) -> Sequence[Pic]: return tuple(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the solver calls:

	def relation_failed(self, op_name:str, slots:Sequence[str], ex:TypeRelationError):
		intro = "Operator '%s' cannot be typed: %s" % (op_name, ex)
		self.issue(Pic(intro, ["%s : %s" % pair for pair in slots]))

	def slot_conflict(self, op_name:str, slot:str, before, after):
		intro = "Operator '%s' disagrees about the type of '%s'." % (op_name, slot)
		self.issue(Pic(intro, ["previously: %s" % before, "now: %s" % after]))

	def still_incomplete(self, names:Sequence[str]):
		intro = "Not enough information to determine these types:"
		self.issue(Pic(intro, list(names)))

	def did_not_converge(self, rounds:int):
		self.issue(Pic("Gave up after %d rounds without reaching a fixpoint." % rounds, []))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
