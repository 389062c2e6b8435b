"""
Tests for YAML configuration and the run_primes.py command line.
"""

from pathlib import Path

import pytest

from prime_data.config import DEFAULTS, load_config
from run_primes import main

DEFAULT_CONFIG = Path(__file__).parent.parent / "config" / "default.yaml"


class TestLoadConfig:
    def test_no_path_gives_defaults(self):
        config = load_config()
        assert config == DEFAULTS
        assert config is not DEFAULTS

    def test_shipped_default_matches_defaults(self):
        assert load_config(DEFAULT_CONFIG) == DEFAULTS

    def test_partial_override(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("segment_size: 4096\nallow_fallback: false\n")
        config = load_config(path)
        assert config['segment_size'] == 4096
        assert config['allow_fallback'] is False
        assert config['max_range_size'] == DEFAULTS['max_range_size']

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == DEFAULTS

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("segmnet_size: 10\n")
        with pytest.raises(ValueError, match="unknown config keys"):
            load_config(path)

    @pytest.mark.parametrize("text", ["segment_size: 0\n", "num_workers: -2\n",
                                      "max_range_size: big\n", "verbose: 1\n",
                                      "num_workers: true\n"])
    def test_bad_values(self, tmp_path, text):
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(ValueError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="expected a mapping"):
            load_config(path)


class TestCommandLine:
    def test_list(self, capsys):
        assert main(['list', '100', '200']) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "21 primes in [100, 200]:"
        assert out[1].split()[:3] == ['101', '103', '107']
        assert out[1].split()[-1] == '199'

    def test_list_verbose(self, capsys):
        assert main(['--verbose', 'list', '0', '30']) == 0
        out = capsys.readouterr().out
        assert "seed primes" in out
        assert "10 primes in [0, 30]:" in out

    def test_list_invalid_range(self, capsys):
        assert main(['list', '200', '100']) == 2
        assert "invalid range" in capsys.readouterr().err

    def test_list_respects_config_limit(self, tmp_path, capsys):
        path = tmp_path / "small.yaml"
        path.write_text("max_range_size: 50\n")
        assert main(['--config', str(path), 'list', '0', '100']) == 2
        assert "exceed the limit of 50" in capsys.readouterr().err

    def test_count(self, capsys):
        assert main(['count', '1000']) == 0
        assert capsys.readouterr().out.strip() == "168"

    def test_is_prime(self, capsys):
        assert main(['is-prime', '65537']) == 0
        assert capsys.readouterr().out.strip() == "65537 is prime"
        assert main(['is-prime', '1']) == 0
        assert capsys.readouterr().out.strip() == "1 is not prime"

    def test_factor(self, capsys):
        assert main(['factor', '120', '--divisors']) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "120 = 2^3 * 3 * 5"
        assert out[1] == "Divisors (16): 1 2 3 4 5 6 8 10 12 15 20 24 30 40 60 120"

    def test_factor_with_data(self, capsys):
        assert main(['factor', '221', '--data', '12']) == 0
        assert capsys.readouterr().out.strip() == "221 = 13 * 17"

    def test_factor_with_data_and_fallback_disabled(self, tmp_path, capsys):
        path = tmp_path / "strict.yaml"
        path.write_text("allow_fallback: false\n")
        assert main(['--config', str(path), 'factor', '120', '--data', '12']) == 0
        assert capsys.readouterr().out.strip() == "120 = 2^3 * 3 * 5"
        assert main(['--config', str(path), 'factor', '221', '--data', '12']) == 2
        assert "cannot access any data in the range [13, 14]" in capsys.readouterr().err

    def test_factor_with_data_uses_config(self, tmp_path, capsys):
        path = tmp_path / "verbose.yaml"
        path.write_text("segment_size: 7\nverbose: true\n")
        assert main(['--config', str(path), 'factor', '221', '--data', '30']) == 0
        out = capsys.readouterr().out
        assert "Processing 5 segments with 1 workers" in out
        assert out.strip().splitlines()[-1] == "221 = 13 * 17"

    def test_factor_zero(self, capsys):
        assert main(['factor', '0']) == 2
        assert "no prime factorization" in capsys.readouterr().err

    def test_estimate(self, capsys):
        assert main(['estimate', '10000']) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "pi(10000) <= 1229"
        assert out[1].startswith("prime #10000 lies in [")

    def test_missing_config(self, capsys):
        assert main(['--config', '/nonexistent/config.yaml', 'count', '10']) == 2
        assert "error:" in capsys.readouterr().err


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
