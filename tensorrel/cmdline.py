"""
Apply one operator's type relation from the command line.

{0}

For example:

    tensorrel add "int32[8,1,6,1]" "int32[7,1,5]"

will print the type of the result, or else try to explain why there isn't one.

    tensorrel concat "(float32[2,5], float32[3,5])"

joins along axis zero, and

    tensorrel -h

will explain all the arguments.
"""
import sys, argparse

parser = argparse.ArgumentParser(
	prog="tensorrel",
	description="Run a tensor operator's type relation on the given types.",
)
parser.add_argument("operator", help="the name of a registered operator, such as add or concat.")
parser.add_argument("inputs", nargs="*", help="input types, e.g. int32[3,4] or (int32[2],int32[3]) or ?")
parser.add_argument('-o', "--output", action="append", help="declare an output type rather than leave it unknown.")
parser.add_argument('-v', "--verbose", action="count", help="Say what the solver is doing.")

def run(args):
	from .diagnostics import Report, TooManyIssues, UnknownOperator
	from .notation import parse_type, render, NotationError
	from .registry import DEFAULT_REGISTRY
	from .solver import TypeSolver
	report = Report(verbose=args.verbose)
	declared = args.output or []
	try:
		op = DEFAULT_REGISTRY.lookup(args.operator)
	except UnknownOperator:
		print("There's no such operator: %s" % args.operator, file=sys.stderr)
		print("(Try one of: %s)" % ", ".join(DEFAULT_REGISTRY.names()), file=sys.stderr)
		return 2
	if len(args.inputs) != op.num_inputs or len(declared) > op.num_outputs:
		print("%s takes %d input(s) and %d output(s)." % (op.name, op.num_inputs, op.num_outputs), file=sys.stderr)
		return 2
	solver = TypeSolver(report)
	try:
		inputs = ["in%d" % i for i in range(op.num_inputs)]
		outputs = ["out%d" % i for i in range(op.num_outputs)]
		for name, text in zip(inputs, args.inputs):
			solver.declare(name, parse_type(text))
		for name, text in zip(outputs, declared):
			solver.declare(name, parse_type(text))
		solver.call(op.name, inputs, outputs)
		env = solver.solve()
	except NotationError as ex:
		print(ex, file=sys.stderr)
		return 2
	except TooManyIssues:
		report.complain_to_console()
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	for name in outputs:
		print(render(env[name]))
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
