from dataclasses import dataclass
from typing import *
import enum

from natded.prop import Prop, PropKind, Not, And, Or, Implies
from natded.ledger import ProofLine, Justification, union
from natded.pretty import *


"""

The rule catalogue.

Every inference rule the engine knows lives in CATALOGUE, keyed by its
RuleName. Rules come in two flavours.

Scope-flat rules (modus ponens, and-intro, ...) only look at lines that
are already written. Each one is a generator which, given the visible
lines in ascending order, yields (claim, premises) pairs: the claim the
rule could write, and the lines it would cite to do so. For instance,
with the visible lines

  1. A -> B
  2. A

MODUS_PONENS yields (B, (line 1, line 2)).

Scope-opening rules (or-elim, conditional proof, reductio) can't be
applied by looking at written lines alone, since they need a sub-proof.
Given a target claim, such a rule yields Openings: which hypotheses to
assume (one sub-proof per hypothesis) and what each sub-proof must reach.
Once the engine has run the sub-proofs, the rule's discharge function
turns them into the line that closes the whole thing. For instance, to
get <A -> B> by conditional proof we open a sub-proof assuming <A>, and
if it reaches <B> on line 7 with the hypothesis on line 4, the discharge
writes <A -> B> citing 4 and 7, with line 4 dropped from its dependencies.

Every rule also carries a verifier, which answers "does this claim
really follow from these premises by this rule?". The engine never uses
verifiers; the proof checker (check.py) does.

"""


class RuleName(enum.Enum):
  ASSUMPTION            = 'assumption'

  MODUS_PONENS          = 'modus-ponens'
  MODUS_TOLLENS         = 'modus-tollens'
  DOUBLE_NEGATION_ELIM  = 'double-negation-elim'
  DOUBLE_NEGATION_INTRO = 'double-negation-intro'
  AND_ELIM              = 'and-elim'
  AND_INTRO             = 'and-intro'
  OR_INTRO              = 'or-intro'
  OR_ELIM               = 'or-elim'
  CONDITIONAL_PROOF     = 'conditional-proof'
  REDUCTIO              = 'reductio'

  def __str__(self):
    return self.value

  @property
  def pretty(self):
    return {
      RuleName.ASSUMPTION            : 'A',
      RuleName.MODUS_PONENS          : 'MPP',
      RuleName.MODUS_TOLLENS         : 'MTT',
      RuleName.DOUBLE_NEGATION_ELIM  : 'DN',
      RuleName.DOUBLE_NEGATION_INTRO : 'DN',
      RuleName.AND_ELIM              : pretty_AND + 'E',
      RuleName.AND_INTRO             : pretty_AND + 'I',
      RuleName.OR_INTRO              : pretty_OR + 'I',
      RuleName.OR_ELIM               : pretty_OR + 'E',
      RuleName.CONDITIONAL_PROOF     : 'CP',
      RuleName.REDUCTIO              : 'RAA',
    }[self]

  @property
  def opens_scope(self):
    return self in (RuleName.OR_ELIM, RuleName.CONDITIONAL_PROOF, RuleName.REDUCTIO)

  @staticmethod
  def lookup(text: str) -> 'RuleName':
    """
    Find a rule by its value ('modus-ponens') or its name ('MODUS_PONENS'),
    ignoring case
    """
    wanted = text.strip().lower()
    for name in RuleName:
      if wanted in (name.value, name.name.lower()):
        return name
    raise KeyError(text)


# Elimination rules first, so that the search prefers taking apart what
# it has over building things up.
DEFAULT_PRIORITY = (
  RuleName.MODUS_PONENS,
  RuleName.MODUS_TOLLENS,
  RuleName.AND_ELIM,
  RuleName.DOUBLE_NEGATION_ELIM,
  RuleName.AND_INTRO,
  RuleName.OR_INTRO,
  RuleName.DOUBLE_NEGATION_INTRO,
  RuleName.OR_ELIM,
  RuleName.CONDITIONAL_PROOF,
  RuleName.REDUCTIO,
)


class Contradiction:
  """
  Goal of a reductio sub-proof: any <R> together with <~R>.
  There is only one instance, CONTRADICTION.
  """

  def __repr__(self):
    return '<contradiction>'

  def __str__(self):
    return pretty_BOTTOM

CONTRADICTION = Contradiction()

Goal = Union[Prop, Contradiction]


@dataclass(frozen=True)
class Production:
  """
  A line a rule wants to write, minus its line number and depth
  """
  claim: Prop
  deps: Tuple[int, ...]
  justification: Justification


@dataclass(frozen=True)
class Opening:
  """
  A way to reach `target` with a scope-opening rule: one sub-proof per
  hypothesis, each of which has to reach `goal`. `premises` are the
  written lines the rule additionally relies on (the disjunction, for
  or-elim).
  """
  rule: RuleName
  target: Prop
  hypotheses: Tuple[Prop, ...]
  goal: Goal
  premises: Tuple[ProofLine, ...] = ()

  @property
  def key(self):
    return (self.rule, self.target, self.hypotheses)


def production(rule, claim, cited, discharged=()):
  """
  Build the Production citing the given lines. Its dependencies are
  those of the cited lines, less any discharged hypotheses.
  """
  deps = union(*(line.deps for line in cited))
  deps = tuple(dep for dep in deps if dep not in discharged)
  cites = tuple(line.lineno for line in cited)
  return Production(claim, deps, Justification(rule, cites))


class Rule:
  """
  One entry in the catalogue. Flat rules have a `matcher`; scope rules
  have an `opener` and a `discharger` instead.
  """

  def __init__(self, name: RuleName):
    self.name = name
    self.matcher = None
    self.opener = None
    self.discharger = None
    self.verifier = None

  def __repr__(self):
    return f'<Rule {self.name}>'

  @property
  def opens_scope(self):
    return self.name.opens_scope

  def matches(self, lines: Sequence[ProofLine], universe: Container[Prop]) -> Iterator[Tuple[Prop, Tuple[ProofLine, ...]]]:
    return self.matcher(lines, universe)

  def produce(self, claim: Prop, premises: Sequence[ProofLine]) -> Production:
    return production(self.name, claim, premises)

  def openings(self, target: Prop, lines: Sequence[ProofLine]) -> Iterator[Opening]:
    return self.opener(target, lines)

  def discharge(self, opening: Opening, branches) -> Production:
    """
    `branches` holds, per hypothesis of the opening, a pair
    (hypothesis line, lines that reached the goal)
    """
    return self.discharger(opening, branches)

  def verifies(self, claim: Prop, premises: Sequence[Prop]) -> bool:
    return bool(self.verifier(claim, *premises))


CATALOGUE: Dict[RuleName, Rule] = {name: Rule(name) for name in RuleName}

def flat_rule(name: RuleName):
  def decorator(function):
    CATALOGUE[name].matcher = function
    return function
  return decorator

def scope_rule(name: RuleName, discharger):
  def decorator(function):
    CATALOGUE[name].opener = function
    CATALOGUE[name].discharger = discharger
    return function
  return decorator

def verifier(name: RuleName):
  def decorator(function):

    arity = function.__code__.co_argcount - 1

    def wrapper(claim, *premises):
      if len(premises) != arity:
        return False
      return function(claim, *premises)

    CATALOGUE[name].verifier = wrapper
    return function
  return decorator

def kinded(lines, kind):
  return [
    line for line in lines
    if line.claim.kind == kind
  ]


"""

Scope-flat rules

"""

@flat_rule(RuleName.MODUS_PONENS)
def MODUS_PONENS(lines, universe):
  """
  From <P -> Q> and <P>, derive <Q>
  """
  for implication in kinded(lines, PropKind.IMPLIES):
    for line in lines:
      if line.claim == implication.claim.left:
        yield implication.claim.right, (implication, line)

@flat_rule(RuleName.MODUS_TOLLENS)
def MODUS_TOLLENS(lines, universe):
  """
  From <P -> Q> and <~Q>, derive <~P>
  """
  for implication in kinded(lines, PropKind.IMPLIES):
    negated = Not(implication.claim.right)
    for line in lines:
      if line.claim == negated:
        yield Not(implication.claim.left), (implication, line)

@flat_rule(RuleName.AND_ELIM)
def AND_ELIM(lines, universe):
  """
  From <P & Q>, derive <P>, and derive <Q>
  """
  for conjunction in kinded(lines, PropKind.AND):
    yield conjunction.claim.left, (conjunction,)
    yield conjunction.claim.right, (conjunction,)

@flat_rule(RuleName.DOUBLE_NEGATION_ELIM)
def DOUBLE_NEGATION_ELIM(lines, universe):
  """
  From <~~P>, derive <P>
  """
  for negation in kinded(lines, PropKind.NOT):
    if negation.claim.contained.kind == PropKind.NOT:
      yield negation.claim.contained.contained, (negation,)

"""

Introduction rules are only allowed to build propositions found in the
universe, i.e. subformulas of what the proof started from (plus any
hypotheses). Without that restriction and-intro alone would happily
write A & A, (A & A) & A, ... forever.

"""

@flat_rule(RuleName.AND_INTRO)
def AND_INTRO(lines, universe):
  """
  From <P> and <Q>, derive <P & Q>
  """
  for left in lines:
    for right in lines:
      conjunction = And(left.claim, right.claim)
      if conjunction in universe:
        yield conjunction, (left, right)

@flat_rule(RuleName.OR_INTRO)
def OR_INTRO(lines, universe):
  """
  From <P>, derive <P v X> or <X v P>
  """
  disjunctions = [prop for prop in universe if prop.kind == PropKind.OR]
  for line in lines:
    for disjunction in disjunctions:
      if line.claim in disjunction.args:
        yield disjunction, (line,)

@flat_rule(RuleName.DOUBLE_NEGATION_INTRO)
def DOUBLE_NEGATION_INTRO(lines, universe):
  """
  From <P>, derive <~~P>
  """
  for line in lines:
    doubled = Not(Not(line.claim))
    if doubled in universe:
      yield doubled, (line,)


"""

Scope-opening rules

"""

def discharge_or_elim(opening, branches):
  (disjunction,) = opening.premises
  (left_hyp, (left_end,)), (right_hyp, (right_end,)) = branches
  return production(
    RuleName.OR_ELIM,
    opening.target,
    (disjunction, left_hyp, left_end, right_hyp, right_end),
    discharged = (left_hyp.lineno, right_hyp.lineno),
  )

@scope_rule(RuleName.OR_ELIM, discharge_or_elim)
def OR_ELIM(target, lines):
  """
  To get <R>, having <P v Q>:

    assume <P>, reach <R>
    assume <Q>, reach <R>

  """
  for disjunction in kinded(lines, PropKind.OR):
    yield Opening(
      rule = RuleName.OR_ELIM,
      target = target,
      hypotheses = disjunction.claim.args,
      goal = target,
      premises = (disjunction,),
    )

def discharge_conditional(opening, branches):
  ((hypothesis, (end,)),) = branches
  return production(
    RuleName.CONDITIONAL_PROOF,
    Implies(hypothesis.claim, end.claim),
    (hypothesis, end),
    discharged = (hypothesis.lineno,),
  )

@scope_rule(RuleName.CONDITIONAL_PROOF, discharge_conditional)
def CONDITIONAL_PROOF(target, lines):
  """
  To get <P -> Q>: assume <P>, reach <Q>
  """
  if target.kind == PropKind.IMPLIES:
    yield Opening(
      rule = RuleName.CONDITIONAL_PROOF,
      target = target,
      hypotheses = (target.left,),
      goal = target.right,
    )

def discharge_reductio(opening, branches):
  ((hypothesis, (positive, negative)),) = branches
  return production(
    RuleName.REDUCTIO,
    opening.target,
    (hypothesis, positive, negative),
    discharged = (hypothesis.lineno,),
  )

@scope_rule(RuleName.REDUCTIO, discharge_reductio)
def REDUCTIO(target, lines):
  """
  To get <P>: assume <~P>, reach a contradiction.
  To get <~P>, assume <P> instead.
  """
  if target.kind == PropKind.NOT:
    hypothesis = target.contained
  else:
    hypothesis = Not(target)

  # assuming something we already have can't lead anywhere new
  if any(line.claim == hypothesis for line in lines):
    return

  yield Opening(
    rule = RuleName.REDUCTIO,
    target = target,
    hypotheses = (hypothesis,),
    goal = CONTRADICTION,
  )


"""

Verifiers. Each takes the claim followed by the claims of the cited
lines, in citation order.

"""

@verifier(RuleName.ASSUMPTION)
def verify_assumption(claim):
  return True

@verifier(RuleName.MODUS_PONENS)
def verify_modus_ponens(claim, implication, antecedent):
  return implication == Implies(antecedent, claim)

@verifier(RuleName.MODUS_TOLLENS)
def verify_modus_tollens(claim, implication, negated):
  return (implication.kind == PropKind.IMPLIES
    and negated == Not(implication.right)
    and claim == Not(implication.left))

@verifier(RuleName.AND_ELIM)
def verify_and_elim(claim, conjunction):
  return conjunction.kind == PropKind.AND and claim in conjunction.args

@verifier(RuleName.DOUBLE_NEGATION_ELIM)
def verify_double_negation_elim(claim, doubled):
  return doubled == Not(Not(claim))

@verifier(RuleName.AND_INTRO)
def verify_and_intro(claim, left, right):
  return claim == And(left, right)

@verifier(RuleName.OR_INTRO)
def verify_or_intro(claim, disjunct):
  return claim.kind == PropKind.OR and disjunct in claim.args

@verifier(RuleName.DOUBLE_NEGATION_INTRO)
def verify_double_negation_intro(claim, prop):
  return claim == Not(Not(prop))

@verifier(RuleName.OR_ELIM)
def verify_or_elim(claim, disjunction, left_hyp, left_end, right_hyp, right_end):
  return (disjunction == Or(left_hyp, right_hyp)
    and left_end == claim
    and right_end == claim)

@verifier(RuleName.CONDITIONAL_PROOF)
def verify_conditional_proof(claim, hypothesis, end):
  return claim == Implies(hypothesis, end)

@verifier(RuleName.REDUCTIO)
def verify_reductio(claim, hypothesis, positive, negative):
  return (negative == Not(positive)
    and (hypothesis == Not(claim) or claim == Not(hypothesis)))
