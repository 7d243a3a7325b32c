from typing import *
from natded.ledger import Ledger, ProofLine
from natded.util import indent

"""

This module handles arranging a ledger into a Fitch-style layout,
and then pretty-printing it.

The ledger is flat: sub-proofs are only visible through each line's
depth. Arranging it nests every sub-proof into a Block headed by its
hypothesis, so that

  1. P v Q     [A]  {1}
  2. P -> W    [A]  {2}
  3. Q -> W    [A]  {3}
  4. P         [A]  {4}        (depth 1)
  5. W         [MPP:2,4]  {2,4} (depth 1)
  6. Q         [A]  {6}        (depth 1)
  ...

comes out as

  1. P v Q  [A]  {1}
  2. P -> W  [A]  {2}
  3. Q -> W  [A]  {3}
  │ 4. P  [A]  {4}
  ├───
  │ 5. W  [MPP:2,4]  {2,4}
  │ 6. Q  [A]  {6}
  ├───
  ...

"""

Line = Union['Stmt', 'Bunch', 'Block']

class Stmt:
  """
  Represents a single statement in a Fitch-style proof.
  """

  def __init__(
    self: 'Stmt',
    line: ProofLine,
  ) -> 'Stmt':

    self.line = line

  def __str__(self):
    return f'Stmt({self.line.claim}, {self.line.rule})'

  @property
  def stmt_count(self):
    return 1

  @property
  def pretty(self):
    return self.line.pretty

class Bunch:
  """
  Represents many lines grouped together in a Fitch-style proof.
  Crucially, a Bunch does NOT have an associated hypothesis.
  The primary role of a Bunch is to serve as the top-level container
  of a proof.
  """

  def __init__(
    self: 'Bunch',
    body: List[Line],
  ) -> 'Bunch':

    self.body = body

  def __str__(self):
    return '\n'.join(str(line) for line in self.body)

  @property
  def stmt_count(self):
    return sum(line.stmt_count for line in self.body)

  @property
  def pretty(self):
    return '\n'.join(line.pretty for line in self.body)

class Block:
  """
  Represents an indented block in a Fitch-style proof, which
  consists of a hypothesis and the lines which make up its body.
  """

  def __init__(
    self: 'Block',
    hypothesis: Stmt,
    body: List[Line],
  ) -> 'Block':

    self.hypothesis = hypothesis
    self.body = body

  def __str__(self):
    text = '\n'.join([
      'assuming ' + str(self.hypothesis),
      *map(str, self.body),
    ])
    return indent(text, '| ')

  @property
  def stmt_count(self):
    count = 1  # for hypothesis
    count += sum(line.stmt_count for line in self.body)
    return count

  @property
  def pretty(self):

    pretty_body = '\n'.join(
      ' ' + line.pretty if isinstance(line, Stmt) else line.pretty
      for line in self.body
    )

    bar = '│'

    text = '\n'.join([
      indent(f' {self.hypothesis.pretty}', bar),
      '├───',
    ])
    if pretty_body:
      text += '\n' + indent(pretty_body, bar)
    return text

def arrange(ledger: Iterable[ProofLine]) -> Bunch:
  """
  Nest the lines of a ledger into Blocks, one per sub-proof.

  A hypothesis always opens a new Block, even right after another
  Block at the same depth closes (as happens between the two cases
  of an or-elim); any other line goes into the innermost Block
  matching its depth.
  """

  top = Bunch([])
  stack: List[Union[Bunch, Block]] = [top]

  for line in ledger:
    stmt = Stmt(line)

    if line.is_hypothesis:
      del stack[line.depth:]
      block = Block(hypothesis=stmt, body=[])
      stack[-1].body.append(block)
      stack.append(block)
    else:
      del stack[line.depth + 1:]
      stack[-1].body.append(stmt)

  return top

def pretty_print(ledger: Ledger) -> str:
  fitch = arrange(ledger)
  return fitch.pretty
