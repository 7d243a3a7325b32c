from typing import *

from natded.errors import ProofCheckError
from natded.ledger import ProofLine, union
from natded.rules import CATALOGUE, RuleName

"""

Independent re-checking of a finished ledger.

The engine is trusted to write only lines its rules produced, but the
checker trusts nothing: for every line it re-establishes that

  - each cited line comes earlier and is visible from where the line
    sits (lines inside a closed sub-proof are not, except to the rule
    discharging that sub-proof);
  - the rule really yields the line's claim from the cited claims;
  - the dependency set is exactly the union of the cited lines'
    dependencies, less any hypothesis discharged on this line.

Scopes are reconstructed from depths alone. A line is placed in a scope
by its `chain`, the tuple of hypothesis line numbers enclosing it. Line
M is visible from a line with chain C iff M's chain is a prefix of C.

"""

# For each scope-opening rule: citation index of each discharged
# hypothesis -> citation indexes that must lie within its sub-proof
SUBPROOFS = {
  RuleName.CONDITIONAL_PROOF : {0: (1,)},
  RuleName.OR_ELIM           : {1: (2,), 3: (4,)},
  RuleName.REDUCTIO          : {0: (1, 2)},
}

def is_prefix(short, long):
  return long[:len(short)] == short

def check_proof(ledger: Iterable[ProofLine]) -> None:
  """
  Raise ProofCheckError at the first line that does not hold up
  """

  lines: Dict[int, ProofLine] = {}
  chains: Dict[int, Tuple[int, ...]] = {}
  stack: List[int] = []

  for line in ledger:
    no = line.lineno

    if no != len(lines) + 1:
      raise ProofCheckError(no, f'expected line number {len(lines) + 1}')

    if line.is_hypothesis:
      if line.depth > len(stack) + 1:
        raise ProofCheckError(no, 'opens a sub-proof more than one level deeper')
      del stack[line.depth - 1:]
      stack.append(no)
    else:
      if line.depth > len(stack):
        raise ProofCheckError(no, 'sits deeper than any open sub-proof')
      del stack[line.depth:]

    chain = tuple(stack)
    chains[no] = chain
    check_line(line, chain, lines, chains)
    lines[no] = line

def check_line(line, chain, lines, chains):
  no = line.lineno
  rule = CATALOGUE.get(line.rule)
  if rule is None:
    raise ProofCheckError(no, f'unknown rule {line.rule!r}')

  for cited in line.cites:
    if cited not in lines:
      raise ProofCheckError(no, f'cites line {cited}, which does not come before it')

  if line.rule == RuleName.ASSUMPTION:
    if line.cites:
      raise ProofCheckError(no, 'an assumption cites nothing')
    if line.deps != (no,):
      raise ProofCheckError(no, f'an assumption depends on itself only, not {set(line.deps)}')
    return

  subproofs = SUBPROOFS.get(line.rule, {})
  inside = {end: hyp for hyp, ends in subproofs.items() for end in ends}
  discharged = []

  for index, cited in enumerate(line.cites):
    if index in subproofs:
      hypothesis = lines[cited]
      if not hypothesis.is_hypothesis or chains[cited] != chain + (cited,):
        raise ProofCheckError(no, f'line {cited} is not a hypothesis of a sub-proof closed here')
      discharged.append(cited)
    elif index in inside:
      opened_by = line.cites[inside[index]]
      if not is_prefix(chains[cited], chains[opened_by]):
        raise ProofCheckError(no, f'line {cited} is not visible inside the sub-proof opened on line {opened_by}')
    elif not is_prefix(chains[cited], chain):
      raise ProofCheckError(no, f'line {cited} is not visible here')

  premises = [lines[cited].claim for cited in line.cites]
  if not rule.verifies(line.claim, premises):
    raise ProofCheckError(no, f'{line.rule} does not give {line.claim} from lines {line.cites}')

  expected = union(*(lines[cited].deps for cited in line.cites))
  expected = tuple(dep for dep in expected if dep not in discharged)
  if line.deps != expected:
    raise ProofCheckError(no, f'dependencies should be {set(expected) or "{}"}, not {set(line.deps) or "{}"}')
