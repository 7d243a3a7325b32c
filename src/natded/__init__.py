"""
Natural-deduction proof search for propositional logic.
"""

from natded.config import SearchConfig
from natded.errors import InvalidConfiguration, ParseError, ProofCheckError
from natded.parse import parse, parse_statement
from natded.prop import Prop, PropKind
from natded.prove import ExhaustReason, Exhausted, Found, attempt_proof, prove_statement
from natded.rules import RuleName

__all__ = [
  'Exhausted',
  'ExhaustReason',
  'Found',
  'InvalidConfiguration',
  'ParseError',
  'ProofCheckError',
  'Prop',
  'PropKind',
  'RuleName',
  'SearchConfig',
  'attempt_proof',
  'parse',
  'parse_statement',
  'prove_statement',
]
