"""
Symbols used when rendering propositions and proofs.

These are also the primary spellings accepted by the parser; see
parse.py for the ASCII aliases it additionally understands.
"""

pretty_OPEN    = '('
pretty_CLOSE   = ')'
pretty_IMPLIES = '->'
pretty_OR      = 'v'
pretty_AND     = '&'
pretty_NOT     = '~'
pretty_BOTTOM  = '#'

pretty_COMMA   = ','
pretty_SLASH   = '/'
