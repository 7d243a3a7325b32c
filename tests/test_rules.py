"""
Tests for the rule catalogue in natded/rules.py.
"""

import pytest

from natded.ledger import Justification, ProofLine
from natded.prop import And, Implies, Name, Not, Or
from natded.rules import (
  CATALOGUE,
  CONTRADICTION,
  DEFAULT_PRIORITY,
  Opening,
  RuleName,
)


A, B, C = Name('A'), Name('B'), Name('C')


def assumed(*claims, depth=0):
  return [
    ProofLine(
      lineno = no,
      claim = claim,
      deps = (no,),
      justification = Justification(RuleName.ASSUMPTION),
      depth = depth,
    )
    for no, claim in enumerate(claims, start=1)
  ]

def matches(name, lines, universe=()):
  universe = dict.fromkeys(universe)
  return [
    (claim, tuple(line.lineno for line in premises))
    for claim, premises in CATALOGUE[name].matches(lines, universe)
  ]


class TestRuleName:

  def test_lookup(self):
    assert RuleName.lookup('modus-ponens') == RuleName.MODUS_PONENS
    assert RuleName.lookup('Modus_Ponens') == RuleName.MODUS_PONENS
    assert RuleName.lookup(' or-elim ') == RuleName.OR_ELIM
    with pytest.raises(KeyError):
      RuleName.lookup('modus-pwnens')

  def test_pretty(self):
    assert RuleName.ASSUMPTION.pretty == 'A'
    assert RuleName.MODUS_PONENS.pretty == 'MPP'
    assert RuleName.OR_ELIM.pretty == 'vE'
    assert RuleName.AND_INTRO.pretty == '&I'

  def test_scope_rules(self):
    opening = {name for name in RuleName if name.opens_scope}
    assert opening == {RuleName.OR_ELIM, RuleName.CONDITIONAL_PROOF, RuleName.REDUCTIO}

  def test_default_priority_puts_eliminations_first(self):
    assert DEFAULT_PRIORITY.index(RuleName.MODUS_PONENS) < DEFAULT_PRIORITY.index(RuleName.AND_INTRO)
    assert DEFAULT_PRIORITY.index(RuleName.AND_ELIM) < DEFAULT_PRIORITY.index(RuleName.OR_INTRO)
    assert RuleName.ASSUMPTION not in DEFAULT_PRIORITY

  def test_every_rule_is_complete(self):
    for name, rule in CATALOGUE.items():
      assert rule.verifier is not None, name
      if name == RuleName.ASSUMPTION:
        continue
      if rule.opens_scope:
        assert rule.opener is not None and rule.discharger is not None, name
      else:
        assert rule.matcher is not None, name


class TestFlatRules:

  def test_modus_ponens(self):
    lines = assumed(Implies(A, B), A)
    assert matches(RuleName.MODUS_PONENS, lines) == [(B, (1, 2))]

  def test_modus_ponens_scans_in_line_order(self):
    lines = assumed(Implies(A, B), Implies(A, C), A)
    assert matches(RuleName.MODUS_PONENS, lines) == [(B, (1, 3)), (C, (2, 3))]

  def test_modus_tollens(self):
    lines = assumed(Implies(A, B), Not(B))
    assert matches(RuleName.MODUS_TOLLENS, lines) == [(Not(A), (1, 2))]

  def test_and_elim_gives_both_sides(self):
    lines = assumed(And(A, B))
    assert matches(RuleName.AND_ELIM, lines) == [(A, (1,)), (B, (1,))]

  def test_double_negation_elim(self):
    lines = assumed(Not(Not(A)), Not(A))
    assert matches(RuleName.DOUBLE_NEGATION_ELIM, lines) == [(A, (1,))]

  def test_and_intro_is_limited_to_the_universe(self):
    lines = assumed(A, B)
    assert matches(RuleName.AND_INTRO, lines) == []
    assert matches(RuleName.AND_INTRO, lines, [And(B, A)]) == [(And(B, A), (2, 1))]

  def test_or_intro_puts_the_disjunct_on_either_side(self):
    lines = assumed(A)
    universe = [Or(B, A), Or(A, C), Or(B, C)]
    assert matches(RuleName.OR_INTRO, lines, universe) == [(Or(B, A), (1,)), (Or(A, C), (1,))]

  def test_double_negation_intro(self):
    lines = assumed(A)
    assert matches(RuleName.DOUBLE_NEGATION_INTRO, lines) == []
    assert matches(RuleName.DOUBLE_NEGATION_INTRO, lines, [Not(Not(A))]) == [(Not(Not(A)), (1,))]

  def test_produce_merges_dependencies(self):
    lines = assumed(Implies(A, B), C, A)
    production = CATALOGUE[RuleName.MODUS_PONENS].produce(B, (lines[0], lines[2]))
    assert production.claim == B
    assert production.deps == (1, 3)
    assert production.justification == Justification(RuleName.MODUS_PONENS, (1, 3))


class TestScopeRules:

  def test_conditional_proof_opening(self):
    (opening,) = CATALOGUE[RuleName.CONDITIONAL_PROOF].openings(Implies(A, B), [])
    assert opening.hypotheses == (A,)
    assert opening.goal == B
    assert list(CATALOGUE[RuleName.CONDITIONAL_PROOF].openings(A, [])) == []

  def test_or_elim_opens_one_per_disjunction(self):
    lines = assumed(Or(A, B), C, Or(B, C))
    openings = list(CATALOGUE[RuleName.OR_ELIM].openings(C, lines))
    assert [opening.hypotheses for opening in openings] == [(A, B), (B, C)]
    assert all(opening.goal == C for opening in openings)
    assert openings[0].premises == (lines[0],)

  def test_reductio_hypotheses(self):
    rule = CATALOGUE[RuleName.REDUCTIO]
    (opening,) = rule.openings(A, [])
    assert opening.hypotheses == (Not(A),)
    assert opening.goal is CONTRADICTION
    (opening,) = rule.openings(Not(A), [])
    assert opening.hypotheses == (A,)

  def test_reductio_skips_a_hypothesis_already_held(self):
    lines = assumed(Not(A))
    assert list(CATALOGUE[RuleName.REDUCTIO].openings(A, lines)) == []

  def test_conditional_proof_discharge(self):
    (premise,) = assumed(Implies(A, B))
    hypothesis = ProofLine(2, A, (2,), Justification(RuleName.ASSUMPTION), depth=1)
    end = ProofLine(3, B, (1, 2), Justification(RuleName.MODUS_PONENS, (1, 2)), depth=1)
    rule = CATALOGUE[RuleName.CONDITIONAL_PROOF]
    (opening,) = rule.openings(Implies(A, B), [premise])
    production = rule.discharge(opening, [(hypothesis, (end,))])
    assert production.claim == Implies(A, B)
    assert production.deps == (1,)
    assert production.justification.cites == (2, 3)

  def test_or_elim_discharge_drops_both_hypotheses(self):
    disjunction = ProofLine(1, Or(A, B), (1,), Justification(RuleName.ASSUMPTION))
    left = ProofLine(2, A, (2,), Justification(RuleName.ASSUMPTION), depth=1)
    left_end = ProofLine(3, C, (2, 5), Justification(RuleName.MODUS_PONENS, (2,)), depth=1)
    right = ProofLine(4, B, (4,), Justification(RuleName.ASSUMPTION), depth=1)
    opening = Opening(RuleName.OR_ELIM, C, (A, B), C, (disjunction,))
    production = CATALOGUE[RuleName.OR_ELIM].discharge(opening, [(left, (left_end,)), (right, (right,))])
    assert production.deps == (1, 5)
    assert production.justification.cites == (1, 2, 3, 4, 4)


class TestVerifiers:

  def verifies(self, name, claim, *premises):
    return CATALOGUE[name].verifies(claim, premises)

  def test_modus_ponens(self):
    assert self.verifies(RuleName.MODUS_PONENS, B, Implies(A, B), A)
    assert not self.verifies(RuleName.MODUS_PONENS, A, Implies(A, B), B)

  def test_wrong_number_of_premises(self):
    assert not self.verifies(RuleName.MODUS_PONENS, B, Implies(A, B))
    assert not self.verifies(RuleName.AND_ELIM, A)

  def test_wrong_shape(self):
    assert not self.verifies(RuleName.MODUS_TOLLENS, Not(A), A, Not(B))
    assert not self.verifies(RuleName.AND_ELIM, A, Or(A, B))

  def test_or_elim(self):
    assert self.verifies(RuleName.OR_ELIM, C, Or(A, B), A, C, B, C)
    assert not self.verifies(RuleName.OR_ELIM, C, Or(A, B), B, C, A, C)

  def test_reductio_either_polarity(self):
    assert self.verifies(RuleName.REDUCTIO, A, Not(A), B, Not(B))
    assert self.verifies(RuleName.REDUCTIO, Not(A), A, B, Not(B))
    assert not self.verifies(RuleName.REDUCTIO, A, Not(A), B, B)
