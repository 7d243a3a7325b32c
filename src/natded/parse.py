from typing import *
import enum

from natded.prop import Prop, PropKind
from natded.errors import ParseError
from natded.pretty import *

"""

Parsing of statements such as

  (A -> B), (B -> C), A / C

into assumption and conclusion Props.

The text is first split into tokens, and the tokens are then consumed
by a recursive-descent parser, one function per precedence level,
tightest first:

  negation    ~A
  conjunction A & B         (left-associative)
  disjunction A v B         (left-associative)
  implication A -> B        (right-associative)

Each parsing function takes the token list and an index, and returns
a tuple (prop, index) where `prop` is what it parsed and `index`
points at the first token it did not consume.

"""

NOT_chars     = [pretty_NOT, '-']
AND_chars     = [pretty_AND]
OR_chars      = [pretty_OR, '|']
IMPLIES_chars = [pretty_IMPLIES, '>']
OPEN_chars    = [pretty_OPEN]
CLOSE_chars   = [pretty_CLOSE]

class TokenKind(enum.Enum):
  NAME    = 'name'
  NOT     = 'not'
  AND     = 'and'
  OR      = 'or'
  IMPLIES = 'implies'
  OPEN    = 'open'
  CLOSE   = 'close'
  COMMA   = 'comma'
  SLASH   = 'slash'
  END     = 'end'

class Token(NamedTuple):
  kind: TokenKind
  text: str
  position: int

def describe(token: Token) -> str:
  if token.kind == TokenKind.END:
    return 'end of input'
  return f"'{token.text}'"

def tokenize(text: str) -> List[Token]:
  """
  Split text into tokens, always ending with a single END token.

  Identifiers are runs of letters. A lowercase 'v' is the disjunction
  operator and therefore never part of an identifier: 'AvB' is 'A v B'.
  """

  tokens = []
  i = 0

  while i < len(text):
    char = text[i]

    if char.isspace():
      i += 1
      continue

    # '->' must be checked before '-' on its own
    matched = False
    for symbol in IMPLIES_chars:
      if text.startswith(symbol, i):
        tokens.append(Token(TokenKind.IMPLIES, symbol, i))
        i += len(symbol)
        matched = True
        break
    if matched:
      continue

    if char in NOT_chars:
      tokens.append(Token(TokenKind.NOT, char, i))
    elif char in AND_chars:
      tokens.append(Token(TokenKind.AND, char, i))
    elif char in OR_chars:
      tokens.append(Token(TokenKind.OR, char, i))
    elif char in OPEN_chars:
      tokens.append(Token(TokenKind.OPEN, char, i))
    elif char in CLOSE_chars:
      tokens.append(Token(TokenKind.CLOSE, char, i))
    elif char == pretty_COMMA:
      tokens.append(Token(TokenKind.COMMA, char, i))
    elif char == pretty_SLASH:
      tokens.append(Token(TokenKind.SLASH, char, i))
    elif is_letter(char):
      start = i
      while i < len(text) and is_letter(text[i]) and text[i] not in OR_chars:
        i += 1
      tokens.append(Token(TokenKind.NAME, text[start:i], start))
      continue
    else:
      raise ParseError(i, f"unexpected character '{char}'", text)

    i += 1

  # End-of-input errors point just past the last meaningful character
  tokens.append(Token(TokenKind.END, '', len(text.rstrip())))
  return tokens

def is_letter(char):
  return char.isascii() and char.isalpha()

def parse(string: str) -> Prop:
  """
  Parse a single proposition, returning a Prop object.
  Raises ParseError (a SyntaxError) if the text is not a
  well-formed proposition.
  """
  tokens = tokenize(string)
  node, i = parse_implication(tokens, 0, string)
  expect(tokens, i, TokenKind.END, string)
  return node

def parse_statement(string: str) -> Tuple[List[Prop], Prop]:
  """
  Parse a statement of the form 'A1, A2, ..., An / C' into
  a list of assumptions and a conclusion.

  A statement starting with '/' has no assumptions, which is
  how theorems (such as '/ A -> A') are written.
  """

  tokens = tokenize(string)
  assumptions = []
  i = 0

  if tokens[0].kind != TokenKind.SLASH:
    node, i = parse_implication(tokens, i, string)
    assumptions.append(node)
    while tokens[i].kind == TokenKind.COMMA:
      node, i = parse_implication(tokens, i + 1, string)
      assumptions.append(node)

  if tokens[i].kind != TokenKind.SLASH:
    raise ParseError(
      tokens[i].position,
      f"expected ',' or '/' but found {describe(tokens[i])}",
      string,
    )

  conclusion, i = parse_implication(tokens, i + 1, string)
  expect(tokens, i, TokenKind.END, string)
  return assumptions, conclusion

def expect(tokens, i, kind, string):
  if tokens[i].kind != kind:
    if kind == TokenKind.END:
      reason = f'unexpected {describe(tokens[i])}'
    else:
      reason = f'expected {kind.value} but found {describe(tokens[i])}'
    raise ParseError(tokens[i].position, reason, string)
  return i + 1

def parse_implication(tokens, i, string):
  """
  implication := disjunction ('->' implication)?
  """
  left, i = parse_disjunction(tokens, i, string)
  if tokens[i].kind != TokenKind.IMPLIES:
    return left, i
  right, i = parse_implication(tokens, i + 1, string)
  return Prop(PropKind.IMPLIES, left, right), i

def parse_disjunction(tokens, i, string):
  """
  disjunction := conjunction ('v' conjunction)*
  """
  left, i = parse_conjunction(tokens, i, string)
  while tokens[i].kind == TokenKind.OR:
    right, i = parse_conjunction(tokens, i + 1, string)
    left = Prop(PropKind.OR, left, right)
  return left, i

def parse_conjunction(tokens, i, string):
  """
  conjunction := negation ('&' negation)*
  """
  left, i = parse_negation(tokens, i, string)
  while tokens[i].kind == TokenKind.AND:
    right, i = parse_negation(tokens, i + 1, string)
    left = Prop(PropKind.AND, left, right)
  return left, i

def parse_negation(tokens, i, string):
  """
  negation := '~' negation | atom
  """
  if tokens[i].kind == TokenKind.NOT:
    child, i = parse_negation(tokens, i + 1, string)
    return Prop(PropKind.NOT, child), i
  return parse_atom(tokens, i, string)

def parse_atom(tokens, i, string):
  """
  atom := identifier | '(' implication ')'
  """
  token = tokens[i]

  if token.kind == TokenKind.NAME:
    return Prop(PropKind.NAME, token.text), i + 1

  if token.kind == TokenKind.OPEN:
    node, i = parse_implication(tokens, i + 1, string)
    if tokens[i].kind != TokenKind.CLOSE:
      raise ParseError(
        tokens[i].position,
        f"unclosed '{pretty_OPEN}' opened at position {token.position}",
        string,
      )
    return node, i + 1

  raise ParseError(
    token.position,
    f'expected a proposition but found {describe(token)}',
    string,
  )
