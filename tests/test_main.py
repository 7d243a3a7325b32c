"""
Tests for the command line in natded/main.py.
"""

import io

from natded.config import CONFIG_ENV_VAR
from natded.main import main, prove


def run(capsys, *argv):
  code = main(list(argv))
  out, err = capsys.readouterr()
  return code, out, err


class TestMain:

  def test_found(self, capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    code, out, err = run(capsys, 'A -> B, A / B')
    assert code == 0
    assert 'Assumptions: [A -> B, A]' in out
    assert 'Conclusion: B' in out
    assert '3. B  [MPP:1,2]  {1,2}' in out

  def test_exhausted(self, capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    code, out, err = run(capsys, 'A / B')
    assert code == 1
    assert 'No proof found' in out

  def test_parse_error_points_at_the_problem(self, capsys):
    code, out, err = run(capsys, 'A&')
    assert code == 2
    assert err.splitlines()[:2] == ['A&', '  ^']
    assert 'error: expected a proposition' in err

  def test_invalid_override(self, capsys):
    code, out, err = run(capsys, '--max-steps', '0', 'A / A')
    assert code == 2
    assert 'max_steps must be positive' in err

  def test_missing_config_file(self, capsys, tmp_path):
    code, out, err = run(capsys, '--config', str(tmp_path / 'missing.yaml'), 'A / A')
    assert code == 2

  def test_rules_flag(self, capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    code, out, err = run(capsys, '--rules', 'and-elim', 'A -> B, A / B')
    assert code == 1

  def test_config_from_environment(self, capsys, monkeypatch, tmp_path):
    path = tmp_path / 'search.yaml'
    path.write_text('max_steps: 1\n')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    code, out, err = run(capsys, '(A -> B), (B -> C), A / C')
    assert code == 1
    assert 'within 1 steps' in out

  def test_prompts_without_a_statement(self, capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr('sys.stdin', io.StringIO('A & B / B\n'))
    code, out, err = run(capsys)
    assert code == 0
    assert out.startswith('Enter the propositional logic statement: ')
    assert '2. B  [&E:1]  {1}' in out

  def test_full(self, capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    code, out, err = run(capsys, '--full', '/ A -> A')
    assert code == 0
    assert '2. A -> A  [CP:1,1]  {}' in out


def test_prove():
  assert prove('A & B / A') == '1. A & B  [A]  {1}\n2. A  [&E:1]  {1}'
  assert prove('A / B') is None
