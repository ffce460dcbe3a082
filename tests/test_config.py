# Copyright 2025 Ant Group Co., Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import pytest

from vecpf.config import ENV_BYTEORDER, ENV_LOG_LEVEL, VecpfConfig, load_config
from vecpf.errors import ConfigError


class TestVecpfConfig:
    def test_defaults(self):
        config = VecpfConfig()
        assert config.byteorder == "native"
        assert config.log_level is None
        assert config.numpy_byteorder == "="

    @pytest.mark.parametrize(
        "byteorder,code", [("native", "="), ("little", "<"), ("big", ">")]
    )
    def test_numpy_byteorder(self, byteorder, code):
        assert VecpfConfig(byteorder=byteorder).numpy_byteorder == code

    def test_invalid_byteorder(self):
        with pytest.raises(ConfigError, match="byteorder must be one of"):
            VecpfConfig(byteorder="middle")

    def test_log_level_normalized(self):
        assert VecpfConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ConfigError, match="log_level"):
            VecpfConfig(log_level="verbose")

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(ConfigError, match="Unknown config keys: width"):
            VecpfConfig.from_mapping({"byteorder": "big", "width": 16})

    def test_from_env(self):
        env = {ENV_BYTEORDER: " Big ", ENV_LOG_LEVEL: "info"}
        config = VecpfConfig.from_env(environ=env)
        assert config == VecpfConfig(byteorder="big", log_level="INFO")

    def test_from_env_keeps_base_when_unset(self):
        base = VecpfConfig(byteorder="little")
        assert VecpfConfig.from_env(base, environ={}) is base
        assert VecpfConfig.from_env(base, environ={ENV_BYTEORDER: ""}) is base


class TestLoadConfig:
    """Precedence: defaults < YAML file < environment < overrides."""

    def test_no_sources(self):
        assert load_config(environ={}) == VecpfConfig()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "vecpf.yaml"
        path.write_text("byteorder: big\nlog_level: warning\n")
        config = load_config(path, environ={})
        assert config == VecpfConfig(byteorder="big", log_level="WARNING")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path, environ={}) == VecpfConfig()

    def test_env_overrides_file(self, tmp_path):
        path = tmp_path / "vecpf.yaml"
        path.write_text("byteorder: big\n")
        config = load_config(path, environ={ENV_BYTEORDER: "little"})
        assert config.byteorder == "little"

    def test_keyword_overrides_env(self, tmp_path):
        path = tmp_path / "vecpf.yaml"
        path.write_text("byteorder: big\n")
        config = load_config(
            path,
            environ={ENV_BYTEORDER: "little"},
            byteorder="native",
            log_level=None,
        )
        assert config.byteorder == "native"
        assert config.log_level is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_LOG_LEVEL, "error")
        assert load_config().log_level == "ERROR"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(tmp_path / "missing.yaml", environ={})

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("byteorder: [big\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path, environ={})

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- big\n- little\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(path, environ={})

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "vecpf.yaml"
        path.write_text("byteorder: middle\n")
        with pytest.raises(ConfigError, match="byteorder"):
            load_config(path, environ={})

    def test_unknown_override(self):
        with pytest.raises(ConfigError, match="Unknown config keys: lanes"):
            load_config(environ={}, lanes=4)
