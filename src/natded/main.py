import argparse
import logging
import sys

from natded.config import SearchConfig, load_config_from_env
from natded.errors import InvalidConfiguration, ParseError
from natded.fitch import arrange
from natded.parse import parse_statement
from natded.prove import ProofResult, attempt_proof


def render(result: ProofResult, *, full=False):
  ledger = result.ledger if full else result.compacted()
  fitch = arrange(ledger)
  return fitch.pretty

def prove(string, config=None, *, full=False):
  """
  Prove a statement such as 'A -> B, A / B', returning the
  Fitch-style transcript, or None if no proof was found
  """
  assumptions, conclusion = parse_statement(string)
  result = attempt_proof(assumptions, conclusion, config)
  if not result.found:
    return None
  return render(result, full=full)

def build_parser():
  parser = argparse.ArgumentParser(
    prog='natded',
    description='Find natural-deduction proofs in propositional logic.',
    epilog="Statements look like '(A -> B), (B -> C), A / C'. "
      "Operators: ~ (not), & (and), v (or), -> (implies).",
  )
  parser.add_argument('statement', nargs='?',
    help='assumptions separated by commas, then / and the conclusion (prompted for if omitted)')
  parser.add_argument('--config', metavar='FILE',
    help='YAML search configuration (default: $NATDED_CONFIG, if set)')
  parser.add_argument('--max-steps', type=int, metavar='N',
    help='maximum number of lines to write before giving up')
  parser.add_argument('--max-depth', type=int, metavar='N',
    help='maximum sub-proof nesting')
  parser.add_argument('--rules', metavar='LIST',
    help='comma-separated rule names, most preferred first; omitted rules are disabled')
  parser.add_argument('--full', action='store_true',
    help='also show abandoned sub-proofs')
  parser.add_argument('-v', '--verbose', action='store_true',
    help='log the search as it goes')
  return parser

def main(argv=None) -> int:
  args = build_parser().parse_args(argv)

  logging.basicConfig(
    level=logging.DEBUG if args.verbose else logging.WARNING,
    format='%(levelname)s %(name)s: %(message)s',
  )

  try:
    if args.config:
      config = SearchConfig.from_file(args.config)
    else:
      config = load_config_from_env() or SearchConfig()
    config = config.with_overrides(
      max_steps=args.max_steps,
      max_depth=args.max_depth,
      rule_priority=args.rules,
    )
  except (InvalidConfiguration, OSError) as exc:
    print(f'error: {exc}', file=sys.stderr)
    return 2

  statement = args.statement
  if statement is None:
    print('Enter the propositional logic statement: ')
    statement = sys.stdin.readline().strip()

  try:
    assumptions, conclusion = parse_statement(statement)
  except ParseError as exc:
    print(statement, file=sys.stderr)
    print(' ' * exc.position + '^', file=sys.stderr)
    print(f'error: {exc.reason}', file=sys.stderr)
    return 2

  result = attempt_proof(assumptions, conclusion, config)

  print(f"Assumptions: [{', '.join(map(str, assumptions))}]")
  print(f'Conclusion: {conclusion}')
  if not result.found:
    print(str(result).capitalize())
    return 1

  pretty = render(result, full=args.full)
  print(f'Proof steps:\n{pretty}')
  return 0


if __name__ == '__main__':
  sys.exit(main())
