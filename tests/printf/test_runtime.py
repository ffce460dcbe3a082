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

import io

import pytest

from vecpf.errors import (
    ArgumentError,
    FormatSyntaxError,
    PrintfError,
    RegistrationError,
)
from vecpf.printf.info import PrintfInfo
from vecpf.printf.result import DECLINED, Failed, Written
from vecpf.printf.runtime import FIRST_USER_KIND, MAX_MODIFIERS, ArgumentSpec


class TestRegistration:
    """The modifier / argument kind / specifier registration protocol."""

    def test_modifier_bits_are_distinct_powers_of_two(self, runtime):
        bits = [runtime.register_modifier(t) for t in ("w", "ww", "k")]
        assert bits == [0x1, 0x2, 0x4]
        assert runtime.modifiers == {"w": 0x1, "ww": 0x2, "k": 0x4}

    def test_duplicate_modifier(self, runtime):
        runtime.register_modifier("w")
        with pytest.raises(RegistrationError, match="already registered"):
            runtime.register_modifier("w")

    def test_modifier_bit_space_exhausted(self, runtime):
        tokens = ["m" * (i + 1) for i in range(MAX_MODIFIERS)]
        for token in tokens:
            runtime.register_modifier(token)
        with pytest.raises(RegistrationError, match="modifier bits in use"):
            runtime.register_modifier("w")

    def test_unregister_modifier_frees_bit(self, runtime):
        for token in ("w", "ww", "k"):
            runtime.register_modifier(token)
        runtime.unregister_modifier("ww")
        assert runtime.modifiers == {"w": 0x1, "k": 0x4}
        assert runtime.register_modifier("q") == 0x2
        with pytest.raises(RegistrationError, match="not registered"):
            runtime.unregister_modifier("ww")

    def test_unregistered_token_is_not_parsed(self, runtime):
        runtime.register_modifier("w")
        runtime.unregister_modifier("w")
        with pytest.raises(FormatSyntaxError, match="unknown conversion"):
            runtime.sprintf("%wd", 1)

    @pytest.mark.parametrize("token", ["", "1", "v*", "%"])
    def test_invalid_modifier_token(self, runtime, token):
        with pytest.raises(RegistrationError, match="alphabetic"):
            runtime.register_modifier(token)

    def test_argument_kinds(self, runtime):
        first = runtime.register_argument_kind(bytes, 16)
        second = runtime.register_argument_kind(bytes, 4)
        assert first == FIRST_USER_KIND
        assert second == FIRST_USER_KIND + 1
        assert runtime.argument_kind(first).size == 16
        with pytest.raises(ArgumentError, match="unknown argument kind"):
            runtime.argument_kind(99)
        with pytest.raises(RegistrationError, match="positive"):
            runtime.register_argument_kind(bytes, 0)

    def test_unregister_argument_kind(self, runtime):
        kind = runtime.register_argument_kind(bytes, 16)
        runtime.unregister_argument_kind(kind)
        with pytest.raises(ArgumentError, match="unknown argument kind"):
            runtime.argument_kind(kind)
        with pytest.raises(RegistrationError, match="not registered"):
            runtime.unregister_argument_kind(kind)
        assert runtime.register_argument_kind(bytes, 16) == kind + 1

    @pytest.mark.parametrize("spec", ["%", "5", "-", "dd", ""])
    def test_invalid_specifier(self, runtime, spec):
        with pytest.raises(RegistrationError, match="invalid conversion"):
            runtime.register_specifier(spec, lambda s, i, r: DECLINED, lambda i: None)

    def test_specifier_replacement(self, runtime):
        def first(stream, info, raw):
            return DECLINED

        def second(stream, info, raw):
            return DECLINED

        runtime.register_specifier("k", first, lambda i: None)
        runtime.register_specifier("k", second, lambda i: None)
        assert runtime.specifier("k").formatter is second
        assert runtime.specifier("q") is None


class TestFormatting:
    def test_sprintf_literals_and_percent(self, runtime):
        assert runtime.sprintf("100%% of %s", "it") == "100% of it"

    def test_fprintf_returns_count(self, runtime):
        buf = io.StringIO()
        assert runtime.fprintf(buf, "[%5d]", 42) == 7
        assert buf.getvalue() == "[   42]"

    def test_printf_writes_stdout(self, runtime, capsys):
        assert runtime.printf("%s=%d\n", "x", 3) == 4
        assert capsys.readouterr().out == "x=3\n"

    def test_star_width_and_precision(self, runtime):
        assert runtime.sprintf("%*d|", 5, 3) == "    3|"
        assert runtime.sprintf("%*d|", -5, 3) == "3    |"
        assert runtime.sprintf("%.*f", 2, 1.5) == "1.50"
        # A negative precision is treated as absent
        assert runtime.sprintf("%.*f", -1, 1.5) == "1.500000"
        assert runtime.sprintf("%*.*d", 6, 3, 7) == "   007"

    def test_star_rejects_non_int(self, runtime):
        with pytest.raises(ArgumentError, match="needs an int"):
            runtime.sprintf("%*d", "5", 1)
        with pytest.raises(ArgumentError, match="bool"):
            runtime.sprintf("%*d", True, 1)

    def test_missing_argument(self, runtime):
        with pytest.raises(ArgumentError, match="missing argument for '%d'"):
            runtime.sprintf("%d %d", 1)

    def test_unused_arguments(self, runtime):
        with pytest.raises(ArgumentError, match="1 unused argument"):
            runtime.sprintf("%d", 1, 2)

    def test_unknown_conversion(self, runtime):
        with pytest.raises(FormatSyntaxError, match="unknown conversion '%k'"):
            runtime.sprintf("x%k", 1)


class _HexHandler:
    """Renders ``%wd`` arguments as hex bytes; leaves plain ``%d`` alone."""

    def __init__(self, runtime, result=None):
        self.bit = runtime.register_modifier("w")
        self.kind = runtime.register_argument_kind(bytes, 2)
        self.result = result
        self.calls = []

    def probe(self, info):
        if info.user & self.bit:
            return ArgumentSpec(kind=self.kind, size=2)
        return None

    def format(self, stream, info, raw):
        self.calls.append((info, raw))
        if self.result is not None:
            return self.result
        text = raw.hex()
        stream.write(text)
        return Written(len(text))


class TestExtensionDispatch:
    """How the runtime drives registered handlers."""

    def test_handler_claims_modified_requests(self, runtime):
        handler = _HexHandler(runtime)
        runtime.register_specifier("d", handler.format, handler.probe)

        assert runtime.sprintf("<%wd>", b"\x01\xff") == "<01ff>"
        info, raw = handler.calls[0]
        assert isinstance(info, PrintfInfo)
        assert info.user == handler.bit
        assert raw == b"\x01\xff"

    def test_probe_none_uses_default(self, runtime):
        handler = _HexHandler(runtime)
        runtime.register_specifier("d", handler.format, handler.probe)

        assert runtime.sprintf("%d", 5) == "5"
        assert handler.calls == []

    def test_declined_falls_back_to_default(self, runtime):
        handler = _HexHandler(runtime, result=DECLINED)
        runtime.register_specifier("s", handler.format, handler.probe)

        assert runtime.sprintf("%ws", b"ab") == "ab"
        assert len(handler.calls) == 1

    def test_failed_reraises_cause(self, runtime):
        handler = _HexHandler(runtime, result=Failed(ValueError("boom")))
        runtime.register_specifier("d", handler.format, handler.probe)

        with pytest.raises(ValueError, match="boom"):
            runtime.sprintf("%wd", b"\x00\x00")

    def test_bad_result_type(self, runtime):
        handler = _HexHandler(runtime, result=-2)
        runtime.register_specifier("d", handler.format, handler.probe)

        with pytest.raises(TypeError, match="returned -2"):
            runtime.sprintf("%wd", b"\x00\x00")

    def test_argument_size_mismatch(self, runtime):
        handler = _HexHandler(runtime)
        runtime.register_specifier("d", handler.format, handler.probe)

        with pytest.raises(ArgumentError, match="expects 2 bytes, got 3"):
            runtime.sprintf("%wd", b"abc")

    def test_new_conversion_character(self, runtime):
        handler = _HexHandler(runtime)
        runtime.register_specifier("k", handler.format, handler.probe)

        assert runtime.sprintf("%wk", b"\xab\xcd") == "abcd"
        # Not claimed and no default handling for 'k'
        with pytest.raises(PrintfError, match="no default handling"):
            runtime.sprintf("%k", 1)
