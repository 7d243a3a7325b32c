"""
Errors raised by the parser, the search configuration and the proof checker.

Running out of search budget is deliberately absent from this module:
an exhausted search is an ordinary outcome, reported as a value
(see prove.Exhausted).
"""


class ParseError(SyntaxError):
  """
  Malformed statement text.

  `position` is a 0-based offset into the text that was being parsed,
  `reason` says what was wrong there.
  """

  def __init__(self, position: int, reason: str, text: str = None):
    super().__init__(f'{reason} (at position {position})')
    self.position = position
    self.reason = reason
    self.text = text
    self.offset = position + 1


class InvalidConfiguration(ValueError):
  """ Rejected search configuration; raised before any search begins """


class ProofCheckError(ValueError):

  def __init__(self, lineno: int, reason: str):
    super().__init__(f'line {lineno}: {reason}')
    self.lineno = lineno
    self.reason = reason
