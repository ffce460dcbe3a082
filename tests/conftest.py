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

from vecpf.config import ENV_BYTEORDER, ENV_LOG_LEVEL, VecpfConfig
from vecpf.core.install import install
from vecpf.printf.runtime import PrintfRuntime


@pytest.fixture(autouse=True)
def clean_vecpf_env(monkeypatch):
    """Keep VECPF_* settings from the calling shell out of the tests."""
    monkeypatch.delenv(ENV_BYTEORDER, raising=False)
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)


@pytest.fixture
def runtime():
    return PrintfRuntime(name="test")


@pytest.fixture
def handle(runtime):
    """A fresh runtime with the vector conversions installed, native byte order."""
    return install(runtime, VecpfConfig())


@pytest.fixture
def vsprintf(handle):
    return handle.sprintf
