import textwrap

import pytest

from interface.backend.config import CONFIG_ENV_VAR, ConfigError, load_config


def _write(tmp_path, body):
    path = tmp_path / 'app.yaml'
    path.write_text(textwrap.dedent(body))
    return path


@pytest.fixture
def use_config(tmp_path, monkeypatch):
    def _use(body):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(_write(tmp_path, body)))
        return load_config(force_reload=True)
    yield _use
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    load_config(force_reload=True)


def test_bundled_config_uses_demo_dataset(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    cfg = load_config(force_reload=True)
    assert cfg.dataset.source == 'demo'
    assert cfg.dataset.group_levels == ['positive', 'negative']
    assert cfg.analysis.equal_var is False
    assert cfg.ui.default_symbol == 'ESR1'


def test_load_config_is_cached(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert load_config(force_reload=True) is load_config()


def test_empty_sections_fall_back_to_defaults(use_config):
    cfg = use_config('{}')
    assert cfg.dataset.source == 'demo'
    assert cfg.dataset.demo_samples == 120
    assert cfg.analysis.conf_level == 0.95
    assert cfg.ui.show_points is True
    assert cfg.log_level == 'INFO'


def test_files_source_resolves_relative_paths(use_config, tmp_path):
    cfg = use_config("""
        dataset:
          source: files
          files:
            measurements: data/expr.tsv
            annotations: data/ann.tsv
            samples: /abs/samples.csv
          columns:
            identifier: probe
            group: er
          group_levels: [pos, neg]
        analysis:
          equal_var: true
        logging:
          level: debug
    """)
    assert cfg.dataset.measurements_path == tmp_path.resolve() / 'data' / 'expr.tsv'
    assert str(cfg.dataset.samples_path) == '/abs/samples.csv'
    assert cfg.dataset.identifier_column == 'probe'
    assert cfg.dataset.symbol_column == 'symbol'
    assert cfg.dataset.group_levels == ['pos', 'neg']
    assert cfg.analysis.equal_var is True
    assert cfg.log_level == 'DEBUG'


@pytest.mark.parametrize('body, message', [
    ('dataset: {source: remote}', "'dataset.source' must be one of"),
    ('dataset: {source: files}', "'dataset.files' is missing"),
    ('dataset: {group_levels: [a]}', 'exactly two values'),
    ('analysis: {alpha: 5}', "'analysis.alpha' must be between 0 and 1"),
    ('logging: {level: loud}', "Unknown logging level"),
    ('analysis: {equal_var: "false"}', "'analysis.equal_var' must be true or false"),
    ('ui: {show_points: 1}', "'ui.show_points' must be true or false"),
    ('- just\n- a list\n', 'must be a YAML mapping'),
])
def test_invalid_config_raises(use_config, body, message):
    with pytest.raises(ConfigError, match=message):
        use_config(body)


def test_missing_config_file(monkeypatch, tmp_path):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / 'nope.yaml'))
    with pytest.raises(ConfigError, match='not found'):
        load_config(force_reload=True)
    monkeypatch.delenv(CONFIG_ENV_VAR)
    load_config(force_reload=True)
