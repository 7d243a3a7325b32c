from dataclasses import dataclass, field
from typing import *

from natded.prop import Prop

"""

The ledger is the append-only record of a proof attempt.

Each entry is a ProofLine, which states a proposition, says which rule
produced it from which earlier lines, and which assumptions it
ultimately rests on. For the statement (A -> B), A / B the finished
ledger is

  line  claim     rule          cites   deps   depth
  1     A -> B    assumption            {1}    0
  2     A         assumption            {2}    0
  3     B         modus-ponens  1,2     {1,2}  0

Lines opened inside a hypothetical sub-proof carry a depth greater
than zero. The ledger only records lines; which lines are currently
usable is tracked by the Scope records the engine keeps on a stack.

"""


def union(*dep_sets: Iterable[int]) -> Tuple[int, ...]:
  """
  Merge dependency sets into one sorted, duplicate-free tuple
  """
  merged = set()
  for deps in dep_sets:
    merged.update(deps)
  return tuple(sorted(merged))


@dataclass(frozen=True)
class Justification:
  """
  The rule a line was derived with, and the lines it cites
  """
  rule: 'RuleName'
  cites: Tuple[int, ...] = ()

  @property
  def pretty(self):
    if not self.cites:
      return self.rule.pretty
    return f"{self.rule.pretty}:{','.join(map(str, self.cites))}"


@dataclass(frozen=True)
class ProofLine:
  lineno: int
  claim: Prop
  deps: Tuple[int, ...]
  justification: Justification
  depth: int = 0

  @property
  def rule(self):
    return self.justification.rule

  @property
  def cites(self):
    return self.justification.cites

  @property
  def is_assumption(self):
    return not self.cites and self.rule.value == 'assumption'

  @property
  def is_hypothesis(self):
    """ True for assumptions made inside a sub-proof """
    return self.depth > 0 and self.is_assumption

  @property
  def pretty(self):
    deps = ','.join(map(str, self.deps))
    return f'{self.lineno}. {self.claim}  [{self.justification.pretty}]  {{{deps}}}'

  def __str__(self):
    return self.pretty


@dataclass
class Scope:
  """
  A sub-proof that is currently open (or, for depth 0, the proof itself).

  `hypothesis` is the line number of the assumption that opened it,
  `lines` holds every line written while it was the innermost scope,
  and `purpose` identifies the opening that created it, so the engine
  can refuse to nest the same attempt inside itself.
  """
  depth: int
  hypothesis: Optional[int] = None
  purpose: Optional[Hashable] = None
  lines: List[int] = field(default_factory=list)
  claims: Dict[Prop, int] = field(default_factory=dict)
  tried: Dict[Hashable, int] = field(default_factory=dict)


class Ledger:
  """
  Ordered, append-only sequence of ProofLines, indexed from 1.
  """

  def __init__(self, lines: Iterable[ProofLine] = ()):
    self._lines: List[ProofLine] = []
    for line in lines:
      self.append(line)

  def append(self, line: ProofLine) -> ProofLine:
    expected = len(self._lines) + 1
    if line.lineno != expected:
      raise ValueError(f'expected line {expected}, got line {line.lineno}')
    self._lines.append(line)
    return line

  def __getitem__(self, lineno: int) -> ProofLine:
    if not 1 <= lineno <= len(self._lines):
      raise IndexError(f'no line {lineno}')
    return self._lines[lineno - 1]

  def __iter__(self) -> Iterator[ProofLine]:
    return iter(self._lines)

  def __len__(self):
    return len(self._lines)

  def __eq__(self, other):
    return type(self) == type(other) and self._lines == other._lines

  def __repr__(self):
    return f'<Ledger of {len(self)} lines>'

  @property
  def last(self) -> Optional[ProofLine]:
    return self._lines[-1] if self._lines else None

  @property
  def claims(self) -> Set[Prop]:
    return {line.claim for line in self._lines}

  @property
  def pretty(self):
    return '\n'.join(line.pretty for line in self._lines)

  def support(self, lineno: int) -> List[ProofLine]:
    """
    The lines that `lineno` rests on: itself, everything it cites
    (transitively), and every top-level assumption.
    Returned in ledger order.
    """
    keep = {line.lineno for line in self._lines if line.depth == 0 and line.is_assumption}
    todo = [lineno]
    while todo:
      no = todo.pop()
      if no in keep and no != lineno:
        continue
      keep.add(no)
      todo.extend(cited for cited in self[no].cites if cited not in keep)
    return [line for line in self._lines if line.lineno in keep]

  def compacted(self, lineno: Optional[int] = None) -> 'Ledger':
    """
    A copy of the ledger holding only the support of `lineno`
    (by default, the last line), renumbered from 1.

    Abandoned sub-proofs never support anything, so they disappear.
    """
    if lineno is None:
      lineno = len(self)
    kept = self.support(lineno)
    renumber = {line.lineno: new for new, line in enumerate(kept, start=1)}

    def remap(numbers):
      return tuple(renumber[no] for no in numbers)

    return Ledger(
      ProofLine(
        lineno = renumber[line.lineno],
        claim = line.claim,
        deps = tuple(sorted(remap(line.deps))),
        justification = Justification(line.rule, remap(line.cites)),
        depth = line.depth,
      )
      for line in kept
    )
