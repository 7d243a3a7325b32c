"""
Search configuration: how long to search, how deep sub-proofs may nest,
and in which order rules are tried.

The configuration can be built in code, from a mapping, or from a YAML
file such as

  max_steps: 5000
  max_depth: 3
  rule_priority:
  - modus-ponens
  - and-elim
  - conditional-proof
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from natded.errors import InvalidConfiguration
from natded.rules import DEFAULT_PRIORITY, RuleName

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'NATDED_CONFIG'


@dataclass(frozen=True)
class SearchConfig:
  """
  Attributes:
    max_steps: Ceiling on the number of lines one proof attempt may write
      (hypotheses included).
    max_depth: Ceiling on sub-proof nesting; 0 disables scope-opening rules.
    rule_priority: Rules to use, most preferred first. Rules left out are
      disabled.
  """
  max_steps: int = 2000
  max_depth: int = 3
  rule_priority: Tuple[RuleName, ...] = field(default=DEFAULT_PRIORITY)

  def validate(self) -> 'SearchConfig':
    """Raise InvalidConfiguration if the configuration is unusable."""
    if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int):
      raise InvalidConfiguration(f'max_steps must be an integer, got {self.max_steps!r}')
    if self.max_steps <= 0:
      raise InvalidConfiguration(f'max_steps must be positive, got {self.max_steps}')
    if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
      raise InvalidConfiguration(f'max_depth must be an integer, got {self.max_depth!r}')
    if self.max_depth < 0:
      raise InvalidConfiguration(f'max_depth must not be negative, got {self.max_depth}')
    if not self.rule_priority:
      raise InvalidConfiguration('rule_priority must name at least one rule')
    for name in self.rule_priority:
      if not isinstance(name, RuleName):
        raise InvalidConfiguration(f'unknown rule {name!r}')
      if name == RuleName.ASSUMPTION:
        raise InvalidConfiguration('assumption is not an inference rule')
    if len(set(self.rule_priority)) != len(self.rule_priority):
      raise InvalidConfiguration('rule_priority lists a rule more than once')
    return self

  @property
  def flat_rules(self) -> Tuple[RuleName, ...]:
    return tuple(name for name in self.rule_priority if not name.opens_scope)

  @property
  def scope_rules(self) -> Tuple[RuleName, ...]:
    return tuple(name for name in self.rule_priority if name.opens_scope)

  def with_overrides(self, **changes: Any) -> 'SearchConfig':
    """Copy with the given non-None fields replaced, validated."""
    changes = {key: value for key, value in changes.items() if value is not None}
    if 'rule_priority' in changes:
      changes['rule_priority'] = parse_rule_priority(changes['rule_priority'])
    return replace(self, **changes).validate()

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'SearchConfig':
    if not isinstance(data, Mapping):
      raise InvalidConfiguration(f'configuration must be a mapping, got {type(data).__name__}')
    unknown = set(data) - {'max_steps', 'max_depth', 'rule_priority'}
    if unknown:
      raise InvalidConfiguration('unknown configuration keys: ' + ', '.join(sorted(map(str, unknown))))
    defaults = cls()
    rule_priority = data.get('rule_priority')
    return cls(
      max_steps=data.get('max_steps', defaults.max_steps),
      max_depth=data.get('max_depth', defaults.max_depth),
      rule_priority=(
        parse_rule_priority(rule_priority)
        if rule_priority is not None
        else defaults.rule_priority
      ),
    ).validate()

  @classmethod
  def from_file(cls, path: Union[Path, str]) -> 'SearchConfig':
    try:
      data = yaml.safe_load(Path(path).read_text())
    except yaml.YAMLError as exc:
      raise InvalidConfiguration(f'{path}: not valid YAML ({exc})') from exc
    logger.debug('Loaded search configuration from %s', path)
    return cls.from_dict(data or {})


def parse_rule_priority(names: Union[str, Any]) -> Tuple[RuleName, ...]:
  """
  Accept RuleNames, rule names as strings, or one comma-separated string.
  """
  if isinstance(names, str):
    names = [name for name in names.split(',') if name.strip()]
  elif not isinstance(names, (list, tuple)):
    raise InvalidConfiguration(f'rule_priority must be a list, got {names!r}')
  parsed = []
  for name in names:
    if isinstance(name, RuleName):
      parsed.append(name)
      continue
    try:
      parsed.append(RuleName.lookup(str(name)))
    except KeyError:
      raise InvalidConfiguration(f'unknown rule {name!r}') from None
  return tuple(parsed)


def load_config_from_env() -> Optional[SearchConfig]:
  """Load the configuration named by NATDED_CONFIG, if it is set."""
  config_path = os.getenv(CONFIG_ENV_VAR)
  if not config_path:
    return None
  return SearchConfig.from_file(config_path)
