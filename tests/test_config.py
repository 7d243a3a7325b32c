"""
Tests for the search configuration in natded/config.py.
"""

import pytest

from natded.config import CONFIG_ENV_VAR, SearchConfig, load_config_from_env, parse_rule_priority
from natded.errors import InvalidConfiguration
from natded.rules import DEFAULT_PRIORITY, RuleName


class TestSearchConfig:

  def test_defaults(self):
    config = SearchConfig().validate()
    assert config.max_steps == 2000
    assert config.max_depth == 3
    assert config.rule_priority == DEFAULT_PRIORITY

  def test_rules_split_by_kind(self):
    config = SearchConfig(rule_priority=(RuleName.REDUCTIO, RuleName.AND_ELIM, RuleName.OR_ELIM))
    assert config.flat_rules == (RuleName.AND_ELIM,)
    assert config.scope_rules == (RuleName.REDUCTIO, RuleName.OR_ELIM)

  @pytest.mark.parametrize('changes', [
    {'max_steps': 0},
    {'max_steps': -5},
    {'max_steps': True},
    {'max_steps': 2.5},
    {'max_depth': -1},
    {'rule_priority': ()},
    {'rule_priority': (RuleName.ASSUMPTION,)},
    {'rule_priority': (RuleName.AND_ELIM, RuleName.AND_ELIM)},
    {'rule_priority': ('and-elim',)},
  ])
  def test_invalid(self, changes):
    with pytest.raises(InvalidConfiguration):
      SearchConfig(**changes).validate()

  def test_with_overrides(self):
    config = SearchConfig().with_overrides(max_steps=10, max_depth=None, rule_priority='modus-ponens, and-elim')
    assert config.max_steps == 10
    assert config.max_depth == 3
    assert config.rule_priority == (RuleName.MODUS_PONENS, RuleName.AND_ELIM)

  def test_with_overrides_validates(self):
    with pytest.raises(InvalidConfiguration):
      SearchConfig().with_overrides(max_depth=-1)


class TestFromDict:

  def test_partial(self):
    config = SearchConfig.from_dict({'max_steps': 50})
    assert config.max_steps == 50
    assert config.max_depth == 3

  def test_rule_names(self):
    config = SearchConfig.from_dict({'rule_priority': ['conditional-proof', 'MODUS_PONENS']})
    assert config.rule_priority == (RuleName.CONDITIONAL_PROOF, RuleName.MODUS_PONENS)

  def test_unknown_rule(self):
    with pytest.raises(InvalidConfiguration, match='unknown rule'):
      SearchConfig.from_dict({'rule_priority': ['modus-pwnens']})

  def test_unknown_key(self):
    with pytest.raises(InvalidConfiguration, match='max_stepz'):
      SearchConfig.from_dict({'max_stepz': 50})

  def test_not_a_mapping(self):
    with pytest.raises(InvalidConfiguration):
      SearchConfig.from_dict(['max_steps', 50])

  def test_rule_priority_must_be_a_list(self):
    with pytest.raises(InvalidConfiguration):
      parse_rule_priority(7)


class TestFromFile:

  def test_yaml(self, tmp_path):
    path = tmp_path / 'search.yaml'
    path.write_text(
      'max_steps: 100\n'
      'max_depth: 1\n'
      'rule_priority:\n'
      '- modus-ponens\n'
      '- reductio\n'
    )
    config = SearchConfig.from_file(path)
    assert config == SearchConfig(100, 1, (RuleName.MODUS_PONENS, RuleName.REDUCTIO))

  def test_empty_file_gives_defaults(self, tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('')
    assert SearchConfig.from_file(path) == SearchConfig()

  def test_malformed_yaml(self, tmp_path):
    path = tmp_path / 'broken.yaml'
    path.write_text('max_steps: [1\n')
    with pytest.raises(InvalidConfiguration, match='not valid YAML'):
      SearchConfig.from_file(path)

  def test_missing_file(self, tmp_path):
    with pytest.raises(OSError):
      SearchConfig.from_file(tmp_path / 'missing.yaml')


class TestFromEnv:

  def test_unset(self, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert load_config_from_env() is None

  def test_set(self, monkeypatch, tmp_path):
    path = tmp_path / 'search.yaml'
    path.write_text('max_depth: 0\n')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config_from_env() == SearchConfig(max_depth=0)
