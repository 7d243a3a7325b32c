from natded.pretty import *
from typing import *
import enum

class PropKind(enum.Enum):
  IMPLIES = 'implies'
  OR      = 'or'
  AND     = 'and'
  NOT     = 'not'

  NAME    = 'name'


class Prop:

  """

  Represents a propositional/0th-order mathematical proposition.
  This class contains no search functionality; it is a value class.

  Instances are created with a kind, as well as 1 or 2
  children, which are expected to also be instances of Prop
  (or, for NAME, a single string).

  An example to represent the proposition 'A implies B' is:
  >>> A = Prop(PropKind.NAME, 'A')
  >>> B = Prop(PropKind.NAME, 'B')
  >>> implication = Prop(PropKind.IMPLIES, A, B)

  If the proposition is a binary op, its children may be accessed
  with the use of .left and .right:
  >>> assert implication.left == A
  >>> assert implication.right == B

  If it's a unary op, its child may be accessed via .contained:
  >>> not_A = Prop(PropKind.NOT, A)
  >>> assert not_A.contained == A

  Props are immutable and compare (and hash) by shape, so two
  separately built copies of 'A & B' are interchangeable.
  Note that no normalization happens: 'A & B' != 'B & A'.

  """

  __slots__ = ('kind', 'args', '_hash')

  def __init__(self, kind: PropKind, *args):
    if kind == PropKind.NAME:
      arity = 1
    elif kind == PropKind.NOT:
      arity = 1
    else:
      arity = 2
    if len(args) != arity:
      raise TypeError(f'{kind.value} takes {arity} argument(s), got {len(args)}')

    object.__setattr__(self, 'kind', kind)
    object.__setattr__(self, 'args', args)
    object.__setattr__(self, '_hash', hash((kind, args)))

  def __setattr__(self, name, value):
    raise AttributeError('Prop is immutable')

  def __delattr__(self, name):
    raise AttributeError('Prop is immutable')

  # convenience .left and .right for binary ops
  @property
  def left(self) -> 'Prop': return self.args[0]
  @property
  def right(self) -> 'Prop': return self.args[1]

  # convenience .contained for unary ops
  @property
  def contained(self) -> 'Prop': return self.args[0]

  # and .name for variables
  @property
  def name(self) -> str: return self.args[0]

  def __eq__(self, other):
    return (type(self) == type(other)
      and self._hash == other._hash
      and self.kind == other.kind
      and self.args == other.args)

  def __hash__(self):
    return self._hash

  def subformulas(self) -> Iterator['Prop']:
    """
    Yield every subformula, this one first, without repeats
    """
    seen = set()
    stack = [self]
    while stack:
      prop = stack.pop()
      if prop in seen:
        continue
      seen.add(prop)
      yield prop
      if prop.kind != PropKind.NAME:
        stack.extend(reversed(prop.args))

  def names(self) -> List[str]:
    return [prop.name for prop in self.subformulas() if prop.kind == PropKind.NAME]

  @property
  def sigil(self):
    return {
      PropKind.IMPLIES: pretty_IMPLIES,
      PropKind.OR     : pretty_OR,
      PropKind.AND    : pretty_AND,
      PropKind.NOT    : pretty_NOT,
    }[self.kind]

  def prettify(self, *, is_root):
    if self.kind == PropKind.NAME:
      return self.name
    elif self.kind == PropKind.NOT:
      pretty_contained = self.contained.prettify(is_root=False)
      return f'{self.sigil}{pretty_contained}'
    else:
      pretty_left = self.left.prettify(is_root=False)
      pretty_right = self.right.prettify(is_root=False)
      text = f'{pretty_left} {self.sigil} {pretty_right}'
      if not is_root:
        text = f'{pretty_OPEN}{text}{pretty_CLOSE}'
      return text

  def __str__(self):
    return self.prettify(is_root=True)

  def __repr__(self):
    return f'|{self}|'

  def __reduce__(self):
    return (Prop, (self.kind, *self.args))


# Shorthand constructors, mostly for building props in code and tests

def Name(name: str) -> Prop:
  return Prop(PropKind.NAME, name)

def Not(prop: Prop) -> Prop:
  return Prop(PropKind.NOT, prop)

def And(left: Prop, right: Prop) -> Prop:
  return Prop(PropKind.AND, left, right)

def Or(left: Prop, right: Prop) -> Prop:
  return Prop(PropKind.OR, left, right)

def Implies(antecedent: Prop, consequent: Prop) -> Prop:
  return Prop(PropKind.IMPLIES, antecedent, consequent)
