from contextlib import contextmanager
from dataclasses import dataclass
from typing import *
import enum
import logging

from natded.prop import Prop, PropKind
from natded.parse import parse_statement
from natded.ledger import Ledger, ProofLine, Justification, Scope
from natded.rules import CATALOGUE, CONTRADICTION, Goal, Opening, Production, RuleName, kinded
from natded.config import SearchConfig
from natded.util import find

logger = logging.getLogger(__name__)


"""

This module is the most difficult module of the entire project.
It searches for a natural-deduction proof of a conclusion from a list
of assumptions, writing the proof into a Ledger as it goes.

Take the statement

  P v Q, P -> W, Q -> W / W

The proof we are after reads

  1. P v Q      [A]         {1}
  2. P -> W     [A]         {2}
  3. Q -> W     [A]         {3}
  | 4. P        [A]         {4}
  | 5. W        [MPP:2,4]   {2,4}
  | 6. Q        [A]         {6}
  | 7. W        [MPP:3,6]   {3,6}
  8. W          [vE:1,4,5,6,7]  {1,2,3}

where the braces hold each line's dependencies: the assumptions it
ultimately rests on. Lines 4-5 and 6-7 are sub-proofs; their
hypotheses (4 and 6) are discharged by the or-elim on line 8, which is
why line 8 depends on neither.

The search works forwards, one line at a time. Within a scope (the
whole proof, or a sub-proof) it first saturates with the scope-flat
rules: on every step, each flat rule in priority order is asked for
its matches against the visible lines, and the first match whose claim
is not visible yet is written. Visible lines are those of the current
scope and of every scope enclosing it; lines of closed sub-proofs are
never visible again.

When no flat rule can add anything, the search turns to the
scope-opening rules. It works out a handful of targets worth reaching
(the goal itself, the parts of a conjunctive or disjunctive target,
antecedents of visible implications, and, when hunting for a
contradiction, the positive half of every visible negation), and asks
each scope rule how it would reach each target. An opening pushes a new
Scope, writes the hypothesis, and recursively runs the same search
inside it for the opening's goal. If every branch reaches its goal the
rule discharges them into one line in the outer scope, and flat
saturation resumes. If a branch fails, its lines stay in the ledger
(it is append-only) but the closed scope is never cited.

Termination has three guards:

  - a line is never written twice within the visible scopes, and the
    introduction rules can only build subformulas of what the proof
    started from, so flat saturation always runs dry;
  - an opening is never attempted inside an open scope with the same
    purpose, sub-proofs nest at most config.max_depth deep, and a failed
    opening is only retried once its scope has gained new lines;
  - every written line costs one step, and config.max_steps steps is
    all a proof attempt ever gets.

Running out of steps is not an error. It unwinds the search (closing
every open scope on the way out) and is reported as Exhausted.

"""


class Status(enum.Enum):
  SEARCHING      = 'searching'
  SUBPROOF_OPEN  = 'subproof-open'
  FOUND          = 'found'
  EXHAUSTED      = 'exhausted'


class ExhaustReason(enum.Enum):
  BUDGET   = 'budget'     # ran out of steps
  DEAD_END = 'dead-end'   # nothing left to try

  def __str__(self):
    return self.value


@dataclass(frozen=True)
class Found:
  ledger: Ledger
  line: ProofLine
  steps: int

  found = True

  def compacted(self) -> Ledger:
    """ The proof without abandoned sub-proofs """
    return self.ledger.compacted(self.line.lineno)


@dataclass(frozen=True)
class Exhausted:
  """
  No proof found within the search budget. This says nothing about
  whether a proof exists.
  """
  reason: ExhaustReason
  steps: int

  found = False

  def __str__(self):
    if self.reason == ExhaustReason.BUDGET:
      return f'no proof found within {self.steps} steps'
    return f'no proof found (search ran out of moves after {self.steps} steps)'


ProofResult = Union[Found, Exhausted]


class BudgetSpent(Exception):
  """ Raised inside the search when config.max_steps is reached """


class SearchState:

  """

  Everything one proof attempt owns: the ledger, the scope stack,
  the universe of propositions introduction rules may build, and the
  step counter. Use it once, through run().

  """

  def __init__(
    self: 'SearchState',
    assumptions: Sequence[Prop],
    conclusion: Prop,
    config: SearchConfig,
  ) -> 'SearchState':

    self.conclusion = conclusion
    self.config = config
    self.ledger = Ledger()
    self.scopes: List[Scope] = [Scope(depth=0)]
    self.steps = 0
    self.status = Status.SEARCHING

    self.flat_rules = [CATALOGUE[name] for name in config.flat_rules]
    self.scope_rules = [CATALOGUE[name] for name in config.scope_rules]

    # a dict rather than a set, so iteration order is reproducible
    self.universe: Dict[Prop, None] = {}
    for prop in [*assumptions, conclusion]:
      self.widen(prop)

    for assumption in assumptions:
      lineno = len(self.ledger) + 1
      self.place(Production(
        claim = assumption,
        deps = (lineno,),
        justification = Justification(RuleName.ASSUMPTION),
      ))

  @property
  def scope(self) -> Scope:
    return self.scopes[-1]

  @property
  def depth(self) -> int:
    return self.scope.depth

  def widen(self, prop: Prop):
    for sub in prop.subformulas():
      self.universe.setdefault(sub)

  def visible(self) -> List[ProofLine]:
    return [self.ledger[no] for scope in self.scopes for no in scope.lines]

  def lookup(self, claim: Prop) -> Optional[ProofLine]:
    """
    The visible line stating `claim`, preferring outer scopes
    """
    for scope in self.scopes:
      if claim in scope.claims:
        return self.ledger[scope.claims[claim]]
    return None

  def is_open(self, purpose) -> bool:
    return any(scope.purpose == purpose for scope in self.scopes)

  # == Writing == #

  def place(self, production: Production) -> ProofLine:
    line = ProofLine(
      lineno = len(self.ledger) + 1,
      claim = production.claim,
      deps = production.deps,
      justification = production.justification,
      depth = self.depth,
    )
    self.ledger.append(line)
    self.scope.lines.append(line.lineno)
    self.scope.claims.setdefault(line.claim, line.lineno)
    return line

  def write(self, production: Production) -> ProofLine:
    """
    Append a line to the current scope, charging one step for it
    """
    if self.steps >= self.config.max_steps:
      raise BudgetSpent()
    self.steps += 1
    line = self.place(production)
    logger.debug('%s%s', '  ' * line.depth, line.pretty)
    return line

  def assume(self, claim: Prop) -> ProofLine:
    lineno = len(self.ledger) + 1
    return self.write(Production(
      claim = claim,
      deps = (lineno,),
      justification = Justification(RuleName.ASSUMPTION),
    ))

  @contextmanager
  def opened(self, opening: Opening, hypothesis: Prop):
    """
    Run the body inside a new scope assuming `hypothesis`. The scope is
    closed on the way out, however the body exits.
    """
    self.widen(hypothesis)
    logger.debug('%s%s towards %s: assuming %s', '  ' * self.depth, opening.rule, opening.target, hypothesis)
    scope = Scope(depth=self.depth + 1, purpose=opening.key)
    self.scopes.append(scope)
    self.status = Status.SUBPROOF_OPEN
    try:
      line = self.assume(hypothesis)
      scope.hypothesis = line.lineno
      yield line
    finally:
      self.scopes.pop()
      if self.depth == 0:
        self.status = Status.SEARCHING

  # == Searching == #

  def reached(self, goal: Goal) -> Optional[Tuple[ProofLine, ...]]:
    """
    The visible lines that achieve `goal`, if there are any:
    the line stating it, or for a contradiction, some <R> and <~R>
    """
    if goal is CONTRADICTION:
      positive = find(
        lambda line: self.lookup(Prop(PropKind.NOT, line.claim)) is not None,
        self.visible(),
      )
      if positive is None:
        return None
      return (positive, self.lookup(Prop(PropKind.NOT, positive.claim)))

    line = self.lookup(goal)
    if line is None:
      return None
    return (line,)

  def reach(self, goal: Goal) -> Optional[Tuple[ProofLine, ...]]:
    """
    Search the current scope until `goal` is reached or nothing
    more can be done
    """
    while True:
      ends = self.reached(goal)
      if ends is not None:
        return ends
      if self.step_flat():
        continue
      if self.step_scoped(goal):
        continue
      return None

  def step_flat(self) -> bool:
    """
    Write the first new claim any flat rule can produce.
    Returns whether anything was written.
    """
    visible = self.visible()
    for rule in self.flat_rules:
      for claim, premises in rule.matches(visible, self.universe):
        if self.lookup(claim) is None:
          self.write(rule.produce(claim, premises))
          return True
    return False

  def targets(self, goal: Goal, visible: Sequence[ProofLine]) -> List[Prop]:
    """
    Claims worth opening a sub-proof for, most relevant first
    """
    if goal is CONTRADICTION:
      wanted = [line.claim.contained for line in kinded(visible, PropKind.NOT)]
    else:
      wanted = [goal]
    wanted += [line.claim.left for line in kinded(visible, PropKind.IMPLIES)]

    targets = []
    for prop in wanted:
      candidates = [prop]
      if prop.kind in (PropKind.AND, PropKind.OR):
        candidates += prop.args
      for candidate in candidates:
        if candidate not in targets and self.lookup(candidate) is None:
          targets.append(candidate)
    return targets

  def step_scoped(self, goal: Goal) -> bool:
    """
    Try the scope-opening rules until one of them writes a line.
    Returns whether anything was written.
    """
    if self.depth >= self.config.max_depth:
      return False

    visible = self.visible()
    for rule in self.scope_rules:
      for target in self.targets(goal, visible):
        for opening in rule.openings(target, visible):
          if self.is_open(opening.key):
            continue
          if self.scope.tried.get(opening.key, -1) >= len(visible):
            continue
          self.scope.tried[opening.key] = len(visible)
          if self.attempt(opening):
            return True
    return False

  def attempt(self, opening: Opening) -> bool:
    """
    Run one sub-proof per hypothesis of the opening and, if they all
    reach their goal, write the discharging line
    """
    rule = CATALOGUE[opening.rule]
    branches = []

    for hypothesis in opening.hypotheses:
      with self.opened(opening, hypothesis) as assumed:
        ends = self.reach(opening.goal)
      if ends is None:
        logger.debug(
          '%s towards %s failed: assuming %s (line %d) never reached %s',
          opening.rule, opening.target, hypothesis, assumed.lineno, opening.goal,
        )
        return False
      branches.append((assumed, ends))

    self.write(rule.discharge(opening, branches))
    return True

  def run(self) -> ProofResult:
    logger.debug('Searching for %s from %d assumption(s)', self.conclusion, len(self.ledger))

    try:
      ends = self.reach(self.conclusion)
    except BudgetSpent:
      ends = None
      reason = ExhaustReason.BUDGET
    else:
      reason = ExhaustReason.DEAD_END

    if ends is None:
      self.status = Status.EXHAUSTED
      logger.info('No proof of %s: %s after %d steps', self.conclusion, reason, self.steps)
      return Exhausted(reason=reason, steps=self.steps)

    self.status = Status.FOUND
    (line,) = ends
    logger.info('Proved %s on line %d after %d steps', self.conclusion, line.lineno, self.steps)
    return Found(ledger=self.ledger, line=line, steps=self.steps)


# == # == # == #


def attempt_proof(
  assumptions: Sequence[Prop],
  conclusion: Prop,
  config: Optional[SearchConfig] = None,
) -> ProofResult:
  """
  Search for a proof of `conclusion` from `assumptions`.

  Returns Found (holding the ledger) or Exhausted. Raises
  InvalidConfiguration for an unusable config, before searching.
  """
  if config is None:
    config = SearchConfig()
  config.validate()

  for prop in [*assumptions, conclusion]:
    if not isinstance(prop, Prop):
      raise TypeError(f'expected a Prop, got {prop!r}')

  return SearchState(assumptions, conclusion, config).run()

def prove_statement(string: str, config: Optional[SearchConfig] = None) -> ProofResult:
  """
  Parse a statement like 'A -> B, A / B' and search for its proof.
  Parse errors propagate as ParseError.
  """
  assumptions, conclusion = parse_statement(string)
  return attempt_proof(assumptions, conclusion, config)
