"""Tests for engine configuration and error reporting"""
import pytest

from xorbreak.config import BreakerConfig
from xorbreak.error_handling import (
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    InputError,
    InsufficientDataError,
    LengthMismatchError,
    XorBreakError,
    create_error,
)


class TestBreakerConfig:
    def test_defaults(self):
        config = BreakerConfig()
        assert (config.min_keysize, config.max_keysize) == (2, 40)
        assert config.sample_blocks == 4
        assert config.keysize_candidates == 5
        assert config.min_data_length == 8

    @pytest.mark.parametrize("overrides", [
        {"min_keysize": 0},
        {"min_keysize": 1},
        {"max_keysize": 41},
        {"min_keysize": 41, "max_keysize": 41},
        {"min_keysize": 5, "max_keysize": 4},
        {"sample_blocks": 1},
        {"keysize_candidates": 0},
        {"max_workers": 0},
        {"executor": "gpu"},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigurationError):
            BreakerConfig(**overrides)

    def test_from_mapping_coerces_and_skips_none(self):
        config = BreakerConfig.from_mapping(
            {"max_keysize": "12", "max_workers": None, "executor": "serial"}
        )
        assert config.max_keysize == 12
        assert config.max_workers is None
        assert config.executor == "serial"

    def test_full_keysize_range_is_accepted(self):
        config = BreakerConfig(min_keysize=2, max_keysize=40)
        assert (config.min_keysize, config.max_keysize) == (2, 40)

    def test_from_mapping_empty(self):
        assert BreakerConfig.from_mapping(None) == BreakerConfig()

    def test_from_mapping_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration option"):
            BreakerConfig.from_mapping({"keylength": 3})

    def test_from_mapping_bad_integer(self):
        with pytest.raises(ConfigurationError) as exc_info:
            BreakerConfig.from_mapping({"max_keysize": "many"})
        assert isinstance(exc_info.value.original_exception, ValueError)

    def test_to_dict_round_trip(self):
        config = BreakerConfig(max_keysize=10, executor="process")
        assert BreakerConfig.from_mapping(config.to_dict()) == config

    def test_create_pool(self):
        pool = BreakerConfig(max_workers=3, executor="serial").create_pool()
        assert pool.max_workers == 3
        assert pool.is_serial


class TestErrors:
    def test_length_mismatch(self):
        error = LengthMismatchError(4, 2)
        assert isinstance(error, InputError)
        assert error.category == ErrorCategory.INPUT_ERROR
        assert str(error) == "Operand lengths differ: 4 != 2 bytes"
        assert error.suggestion

    def test_insufficient_data_context(self):
        error = InsufficientDataError(5, 8)
        assert error.context.data_length == 5
        assert "at least 8 bytes" in str(error)

    def test_create_error(self):
        error = create_error("invalid_keysize", keysize=0)
        assert isinstance(error, InputError)
        assert str(error) == "Keysize must be at least 1, got 0"

    def test_create_error_unknown_key(self):
        error = create_error("no_such_error")
        assert type(error) is XorBreakError
        assert error.category == ErrorCategory.INTERNAL_ERROR

    def test_format_report(self):
        error = InputError(
            "Ciphertext rejected",
            context=ErrorContext(function="solve_keysize", data_length=3, keysize=5,
                                 additional_info={"encoding": "hex"}),
            suggestion="Try again",
        )
        report = error.format_report()
        assert "ERROR: Input Error" in report
        assert "Function: solve_keysize" in report
        assert "Data length: 3 bytes" in report
        assert "Keysize: 5" in report
        assert "encoding: hex" in report
        assert "Suggestion: Try again" in report


class TestErrorHandler:
    def test_handle_error_logs_report(self, caplog):
        handler = ErrorHandler()
        with caplog.at_level("ERROR", logger="xorbreak"):
            handler.handle_error(LengthMismatchError(1, 2))
        assert "Operand lengths differ" in caplog.text

    def test_wraps_foreign_exceptions(self, caplog):
        handler = ErrorHandler()
        with caplog.at_level("ERROR", logger="xorbreak"):
            handler.handle_error(KeyError("missing"))
        assert "Original Exception: KeyError" in caplog.text

    def test_reraise(self):
        handler = ErrorHandler()
        with pytest.raises(InputError):
            handler.handle_error(InputError("bad input"), reraise=True)
